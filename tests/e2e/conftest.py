import pytest_asyncio

from healthteam_qa.config import Settings
from healthteam_qa.pages import DashboardPage, LoginPage


@pytest_asyncio.fixture
async def logged_in(login_page: LoginPage, dashboard_page: DashboardPage, settings: Settings):
    """Log in with the configured account and land on the dashboard."""
    await login_page.login(settings.app_email, settings.app_password)
    await dashboard_page.assert_on_dashboard()
    return dashboard_page
