"""
Locator Descriptors - String-Encoded Element Locators

Page objects describe elements with a compact descriptor string:

    "name:-:email"
    "text:-:Dashboard"
    "xpath:-://div[@role='option']//div[contains(., 'Uploaded')]"

The part before the first ``:-:`` names the strategy, everything after it is
the value. The separator was chosen so it does not collide with CSS
pseudo-selectors or XPath axes, so values may contain colons freely.

Descriptors are parsed once into an immutable LocatorDescriptor and resolved
lazily against a Playwright page.
"""

from dataclasses import dataclass
from enum import Enum

import structlog
from playwright.async_api import Locator, Page

logger = structlog.get_logger()

SEPARATOR = ":-:"


class LocatorStrategy(str, Enum):
    """Supported locator strategies."""

    ID = "id"
    NAME = "name"
    CLASS = "class"
    TEXT = "text"
    LABEL = "label"
    PLACEHOLDER = "placeholder"
    ALT_TEXT = "alttext"
    TITLE = "title"
    TEST_ID = "testid"
    CSS = "css"
    XPATH = "xpath"


class LocatorError(Exception):
    """Base class for descriptor errors."""


class InvalidDescriptorError(LocatorError):
    """Raised when a descriptor string is malformed."""

    def __init__(self, message: str, descriptor: str):
        super().__init__(message)
        self.descriptor = descriptor


class UnsupportedStrategyError(LocatorError):
    """Raised when a descriptor names a strategy outside LocatorStrategy."""

    def __init__(self, strategy: str, descriptor: str):
        supported = ", ".join(s.value for s in LocatorStrategy)
        super().__init__(
            f"Invalid locator strategy: '{strategy}' "
            f"(in '{descriptor}'; supported: {supported})"
        )
        self.strategy = strategy
        self.descriptor = descriptor


@dataclass(frozen=True)
class LocatorDescriptor:
    """
    A parsed (strategy, value) pair identifying a UI element.

    Usage:
        EMAIL_INPUT = LocatorDescriptor.parse("name:-:email")
        locator = EMAIL_INPUT.resolve(page)
    """

    strategy: LocatorStrategy
    value: str

    def __post_init__(self):
        if not self.value:
            raise InvalidDescriptorError(
                f"Locator value is empty for strategy '{self.strategy.value}'",
                descriptor=f"{self.strategy.value}{SEPARATOR}",
            )

    def __str__(self) -> str:
        return f"{self.strategy.value}{SEPARATOR}{self.value}"

    @classmethod
    def parse(cls, descriptor: str) -> "LocatorDescriptor":
        """
        Parse a descriptor string.

        Only the first separator splits strategy from value; any further
        occurrences stay in the value verbatim.

        Raises:
            InvalidDescriptorError: No separator, or an empty value
            UnsupportedStrategyError: Unknown strategy token
        """
        token, separator, value = descriptor.partition(SEPARATOR)
        if not separator:
            raise InvalidDescriptorError(
                f"Locator '{descriptor}' is missing the '{SEPARATOR}' separator",
                descriptor=descriptor,
            )

        token = token.strip().lower()
        try:
            strategy = LocatorStrategy(token)
        except ValueError:
            raise UnsupportedStrategyError(token, descriptor) from None

        if not value:
            raise InvalidDescriptorError(
                f"Locator '{descriptor}' has an empty value",
                descriptor=descriptor,
            )

        return cls(strategy=strategy, value=value)

    def resolve(self, page: Page) -> Locator:
        """
        Build a Playwright locator for this descriptor.

        No browser round-trip happens here; the locator is evaluated when an
        action is performed on it.
        """
        value = self.value

        match self.strategy:
            case LocatorStrategy.ID:
                return page.locator(_attribute_selector("id", value))
            case LocatorStrategy.NAME:
                return page.locator(_attribute_selector("name", value))
            case LocatorStrategy.CLASS:
                return page.locator(f".{value}")
            case LocatorStrategy.TEXT:
                return page.get_by_text(value)
            case LocatorStrategy.LABEL:
                return page.get_by_label(value)
            case LocatorStrategy.PLACEHOLDER:
                return page.get_by_placeholder(value)
            case LocatorStrategy.ALT_TEXT:
                return page.get_by_alt_text(value)
            case LocatorStrategy.TITLE:
                return page.get_by_title(value)
            case LocatorStrategy.TEST_ID:
                return page.get_by_test_id(value)
            case LocatorStrategy.CSS:
                return page.locator(value)
            case LocatorStrategy.XPATH:
                return page.locator(f"xpath={value}")

        # Unreachable while the match above covers every LocatorStrategy member
        raise UnsupportedStrategyError(self.strategy.value, str(self))


DescriptorLike = str | LocatorDescriptor


def _attribute_selector(attribute: str, value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'[{attribute}="{escaped}"]'


def as_descriptor(descriptor: DescriptorLike) -> LocatorDescriptor:
    """Accept either a raw descriptor string or an already parsed one."""
    if isinstance(descriptor, LocatorDescriptor):
        return descriptor
    return LocatorDescriptor.parse(descriptor)


def resolve(page: Page, descriptor: DescriptorLike) -> Locator:
    """Resolve a descriptor against a page."""
    parsed = as_descriptor(descriptor)
    logger.debug(
        "resolving_locator",
        strategy=parsed.strategy.value,
        value=parsed.value,
    )
    return parsed.resolve(page)
