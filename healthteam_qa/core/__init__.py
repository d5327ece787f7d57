"""
Core automation components.
"""

from healthteam_qa.core.locator import (
    LocatorDescriptor,
    LocatorStrategy,
    InvalidDescriptorError,
    UnsupportedStrategyError,
    resolve,
)
from healthteam_qa.core.app_library import (
    AppLibrary,
    DialogSubscription,
    ElementNotVisibleError,
    InteractionOptions,
    WaitTimeoutError,
)
from healthteam_qa.core.artifacts import ArtifactOptions, ArtifactRecorder
from healthteam_qa.core.browser import BrowserOptions, BrowserSession, BrowserType

__all__ = [
    "LocatorDescriptor",
    "LocatorStrategy",
    "InvalidDescriptorError",
    "UnsupportedStrategyError",
    "resolve",
    "AppLibrary",
    "DialogSubscription",
    "ElementNotVisibleError",
    "InteractionOptions",
    "WaitTimeoutError",
    "BrowserOptions",
    "BrowserSession",
    "BrowserType",
    "ArtifactOptions",
    "ArtifactRecorder",
]
