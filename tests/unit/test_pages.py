"""
Tests for page-object workflows against a mocked AppLibrary.
"""

from unittest.mock import AsyncMock, MagicMock, call

import pytest

from healthteam_qa.core.app_library import AppLibrary
from healthteam_qa.core.locator import LocatorDescriptor, LocatorStrategy
from healthteam_qa.pages import (
    DashboardPage,
    HeaderPage,
    LoginPage,
    PatientDetailsPage,
    PatientStatus,
)
from tests.doubles import make_locator


@pytest.fixture
def app() -> MagicMock:
    return MagicMock(spec=AppLibrary)


@pytest.mark.parametrize(
    "page_class",
    [LoginPage, DashboardPage, HeaderPage, PatientDetailsPage],
)
def test_descriptors_are_parsed_constants(page_class):
    descriptors = [
        value for name, value in vars(page_class).items() if name.isupper()
        and isinstance(value, LocatorDescriptor)
    ]
    assert descriptors


class TestLoginPage:
    @pytest.mark.asyncio
    async def test_login(self, app):
        await LoginPage(app).login("nurse@example.com", "s3cret")

        assert app.method_calls == [
            call.enter_text(LoginPage.EMAIL_INPUT, "nurse@example.com"),
            call.enter_text(LoginPage.PASSWORD_INPUT, "s3cret"),
            call.click(LoginPage.CONTINUE_BUTTON),
        ]


class TestDashboardPage:
    @pytest.mark.asyncio
    async def test_assert_on_dashboard(self, app):
        await DashboardPage(app).assert_on_dashboard()

        assert app.method_calls == [
            call.smart_wait(DashboardPage.DASHBOARD_TITLE),
            call.assert_element_visible(DashboardPage.DASHBOARD_TITLE),
        ]

    @pytest.mark.asyncio
    async def test_search_user(self, app):
        await DashboardPage(app).search_user("Sujit")
        app.enter_text.assert_awaited_once_with(DashboardPage.SEARCH_INPUT, "Sujit")

    @pytest.mark.asyncio
    async def test_table_rows_count(self, app):
        app.count_elements.return_value = 3

        assert await DashboardPage(app).get_table_rows_count() == 3
        app.count_elements.assert_awaited_once_with(DashboardPage.TABLE_ROW)

    @pytest.mark.asyncio
    async def test_table_cell_text(self, app):
        app.get_text.return_value = "sujit@example.com"

        text = await DashboardPage(app).get_table_cell_text(2, 1)

        assert text == "sujit@example.com"
        app.get_text.assert_awaited_once_with(
            LocatorDescriptor(
                LocatorStrategy.CSS, "table tbody tr >> nth=2 >> td >> nth=1"
            )
        )

    @pytest.mark.asyncio
    async def test_filtered_row_count_skips_placeholder(self, app):
        rows = [
            make_locator(text="Adam\tadam@example.com"),
            make_locator(text="No results."),
            make_locator(text="Eve\teve@example.com"),
        ]
        table = make_locator()
        table.all = AsyncMock(return_value=rows)
        app.resolve.return_value = table

        assert await DashboardPage(app).get_filtered_table_row_count() == 2
        app.resolve.assert_called_once_with(DashboardPage.TABLE_ROW)

    @pytest.mark.asyncio
    async def test_filtered_row_count_only_placeholder(self, app):
        table = make_locator()
        table.all = AsyncMock(return_value=[make_locator(text="No results.")])
        app.resolve.return_value = table

        assert await DashboardPage(app).get_filtered_table_row_count() == 0

    @pytest.mark.asyncio
    async def test_select_report_status_requested(self, app):
        await DashboardPage(app).select_report_status_requested()

        assert app.method_calls == [
            call.click(DashboardPage.REPORT_STATUS_DROPDOWN_BUTTON, wait_for_load=False),
            call.click(DashboardPage.REPORT_STATUS_OPTION_REQUESTED, wait_for_load=False),
            call.wait(2000),
        ]

    @pytest.mark.asyncio
    async def test_select_report_status_no_requested(self, app):
        await DashboardPage(app).select_report_status_no_requested()

        assert app.method_calls == [
            call.click(DashboardPage.REQUESTED_DROPDOWN_BUTTON, wait_for_load=False),
            call.click(DashboardPage.REPORT_STATUS_OPTION_NO_REQUESTED, wait_for_load=False),
            call.wait(2000),
        ]

    @pytest.mark.asyncio
    async def test_select_report_status_uploaded(self, app):
        await DashboardPage(app).select_report_status_uploaded()

        assert app.method_calls == [
            call.click(DashboardPage.REPORT_STATUS_DROPDOWN_BUTTON, wait_for_load=False),
            call.click(DashboardPage.REPORT_STATUS_OPTION_UPLOADED, wait_for_load=False),
        ]

    @pytest.mark.asyncio
    async def test_click_first_row_patient_waits_for_navigation(self, app):
        await DashboardPage(app).click_first_row_patient()
        app.click.assert_awaited_once_with(DashboardPage.FIRST_ROW_PATIENT_NAME_LINK)


class TestHeaderPage:
    @pytest.mark.asyncio
    async def test_assert_header_visible(self, app):
        await HeaderPage(app).assert_header_visible()

        assert app.assert_element_visible.await_args_list == [
            call(HeaderPage.LOGO),
            call(HeaderPage.TITLE),
            call(HeaderPage.USER_PROFILE_BUTTON),
        ]

    @pytest.mark.asyncio
    async def test_get_user_name(self, app):
        app.get_text.return_value = "Dr. Rivera"
        assert await HeaderPage(app).get_user_name() == "Dr. Rivera"


class TestPatientDetailsPage:
    @pytest.mark.asyncio
    async def test_assert_details_visible(self, app):
        await PatientDetailsPage(app).assert_patient_details_visible()

        assert app.method_calls == [
            call.wait(4000),
            call.assert_element_visible(PatientDetailsPage.PATIENT_NAME),
            call.assert_element_visible(PatientDetailsPage.PATIENT_EMAIL),
            call.assert_element_visible(PatientDetailsPage.UPDATE_STATUS_SECTION),
        ]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", list(PatientStatus))
    async def test_click_status_button(self, app, status):
        await PatientDetailsPage(app).click_status_button(status)

        app.click.assert_awaited_once_with(
            LocatorDescriptor(LocatorStrategy.TEXT, status.value)
        )

    @pytest.mark.asyncio
    async def test_click_status_button_by_label(self, app):
        await PatientDetailsPage(app).click_status_button("Report ready")
        app.click.assert_awaited_once_with(LocatorDescriptor.parse("text:-:Report ready"))

    @pytest.mark.asyncio
    async def test_click_unknown_status(self, app):
        with pytest.raises(ValueError):
            await PatientDetailsPage(app).click_status_button("Archived")
        app.click.assert_not_called()

    @pytest.mark.asyncio
    async def test_upload_report(self, app):
        await PatientDetailsPage(app).upload_report("report.pdf")
        app.upload_files.assert_awaited_once_with(
            PatientDetailsPage.REPORT_FILE_INPUT, "report.pdf"
        )

    @pytest.mark.asyncio
    async def test_assert_plan_section_visible(self, app):
        await PatientDetailsPage(app).assert_plan_section_visible()

        assert app.assert_element_visible.await_args_list == [
            call(PatientDetailsPage.PLAN_SECTION),
            call(PatientDetailsPage.PLAN_STATUS),
        ]

    @pytest.mark.asyncio
    async def test_getters(self, app):
        app.get_text.side_effect = ["Adam Smith", "adam@example.com", "REF-1234"]
        page = PatientDetailsPage(app)

        assert await page.get_patient_name() == "Adam Smith"
        assert await page.get_patient_email() == "adam@example.com"
        assert await page.get_reference_code() == "REF-1234"

    @pytest.mark.asyncio
    async def test_click_dashboard_breadcrumb(self, app):
        await PatientDetailsPage(app).click_dashboard_breadcrumb()
        app.click.assert_awaited_once_with(PatientDetailsPage.DASHBOARD_BREADCRUMB)
