"""
Shared pytest configuration.

Unit tests use Playwright doubles built from MagicMock/AsyncMock. Tests
marked ``e2e`` talk to the live application and only run with --run-e2e.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from healthteam_qa.fixtures import *  # noqa: F401,F403
from tests.doubles import make_locator


def pytest_addoption(parser):
    parser.addoption(
        "--run-e2e",
        action="store_true",
        default=False,
        help="run end-to-end tests against the configured application",
    )


def pytest_collection_modifyitems(config, items):
    if config.getoption("--run-e2e"):
        return
    skip_e2e = pytest.mark.skip(reason="needs --run-e2e and a reachable application")
    for item in items:
        if "e2e" in item.keywords:
            item.add_marker(skip_e2e)


@pytest.fixture
def mock_locator() -> MagicMock:
    return make_locator()


@pytest.fixture
def mock_page(mock_locator: MagicMock) -> MagicMock:
    """A Playwright Page double whose queries all return mock_locator."""
    page = MagicMock(name="page")
    for query in (
        "locator",
        "get_by_text",
        "get_by_label",
        "get_by_placeholder",
        "get_by_alt_text",
        "get_by_title",
        "get_by_test_id",
    ):
        getattr(page, query).return_value = mock_locator

    page.goto = AsyncMock()
    page.wait_for_load_state = AsyncMock()
    page.wait_for_timeout = AsyncMock()
    page.screenshot = AsyncMock(return_value=b"png")
    page.pause = AsyncMock()
    page.url = "http://localhost:3000/dashboard"
    return page
