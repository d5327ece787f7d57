"""
pytest fixtures for UI and API tests.

Import into a conftest.py:

    from healthteam_qa.fixtures import *  # noqa: F401,F403

Settings are loaded once per session and passed explicitly to everything
that needs them; each test gets its own browser context and page. Failure
screenshots, traces and videos are kept under Settings.artifacts_dir
according to the screenshot, trace and video modes.
"""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
import structlog
from playwright.async_api import async_playwright

from healthteam_qa.clients.ehr_bridge import EhrBridgeClient, open_ehr_client
from healthteam_qa.config import Settings, get_settings
from healthteam_qa.core.app_library import AppLibrary
from healthteam_qa.core.artifacts import ArtifactOptions, ArtifactRecorder
from healthteam_qa.core.browser import BrowserOptions, BrowserSession
from healthteam_qa.logging_setup import configure_logging
from healthteam_qa.pages import DashboardPage, HeaderPage, LoginPage, PatientDetailsPage

__all__ = [
    "settings",
    "browser_options",
    "artifact_options",
    "pytest_runtest_makereport",
    "browser_session",
    "app",
    "login_page",
    "dashboard_page",
    "header_page",
    "patient_details_page",
    "ehr_client",
]

logger = structlog.get_logger()


@pytest.fixture(scope="session")
def settings() -> Settings:
    current = get_settings()
    configure_logging(current)
    return current


@pytest.fixture(scope="session")
def browser_options(settings: Settings) -> BrowserOptions:
    return BrowserOptions.from_settings(settings)


@pytest.fixture(scope="session")
def artifact_options(settings: Settings) -> ArtifactOptions:
    return ArtifactOptions.from_settings(settings)


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Expose each phase report on the item as rep_setup, rep_call and rep_teardown."""
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)


def run_failed(item) -> bool:
    """True when the setup or call phase of item failed."""
    for when in ("setup", "call"):
        report = getattr(item, f"rep_{when}", None)
        if report is not None and report.failed:
            return True
    return False


@pytest_asyncio.fixture
async def browser_session(
    request: pytest.FixtureRequest,
    browser_options: BrowserOptions,
    artifact_options: ArtifactOptions,
) -> AsyncGenerator[BrowserSession, None]:
    """Browser session whose screenshot, trace and video follow the retention modes."""
    async with BrowserSession(browser_options) as session:
        recorder = ArtifactRecorder(session.context, artifact_options, request.node.nodeid)
        await recorder.start()

        yield session

        failed = run_failed(request.node)
        await recorder.capture(session.page, failed)
        video = session.page.video

    await recorder.finish_video(video, failed)


@pytest_asyncio.fixture
async def app(
    browser_session: BrowserSession,
    settings: Settings,
) -> AsyncGenerator[AppLibrary, None]:
    """AppLibrary on a fresh page, already navigated to the application."""
    library = AppLibrary.from_settings(browser_session.page, settings)
    await library.navigate(settings.app_base_url, wait_until="networkidle")
    yield library
    library.close()


@pytest.fixture
def login_page(app: AppLibrary) -> LoginPage:
    return LoginPage(app)


@pytest.fixture
def dashboard_page(app: AppLibrary) -> DashboardPage:
    return DashboardPage(app)


@pytest.fixture
def header_page(app: AppLibrary) -> HeaderPage:
    return HeaderPage(app)


@pytest.fixture
def patient_details_page(app: AppLibrary) -> PatientDetailsPage:
    return PatientDetailsPage(app)


@pytest_asyncio.fixture
async def ehr_client(settings: Settings) -> AsyncGenerator[EhrBridgeClient, None]:
    async with async_playwright() as playwright:
        async with open_ehr_client(playwright, settings) as client:
            logger.debug("ehr_client_ready", base_url=settings.ehr_base_url)
            yield client
