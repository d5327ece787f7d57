"""
Patient dashboard: search, status filters and the patient table.
"""

from healthteam_qa.core.app_library import AppLibrary
from healthteam_qa.core.locator import LocatorDescriptor, LocatorStrategy

NO_RESULTS_TEXT = "No results."
FILTER_SETTLE_MS = 2000


class DashboardPage:
    DASHBOARD_TITLE = LocatorDescriptor.parse("text:-:Dashboard")
    SEARCH_INPUT = LocatorDescriptor.parse("placeholder:-:Search name, email")
    UPDATE_MISSING_FIELDS_BUTTON = LocatorDescriptor.parse("text:-:Update Missing Fields")
    PLAN_STATUS_DROPDOWN = LocatorDescriptor.parse("text:-:Plan Status")
    TABLE_ROW = LocatorDescriptor.parse("css:-:table tbody tr")
    FIRST_ROW_PATIENT_NAME_LINK = LocatorDescriptor.parse(
        "css:-:table tbody tr:first-child td:first-child a"
    )

    # Report Status dropdown and options
    REPORT_STATUS_DROPDOWN_BUTTON = LocatorDescriptor.parse(
        'css:-:button[role="combobox"]:has(span:text-is("Report Status"))'
    )
    REQUESTED_DROPDOWN_BUTTON = LocatorDescriptor.parse(
        'xpath:-://button[@role="combobox"]//div[contains(text(),"Requested")]'
    )
    REPORT_STATUS_OPTION_REQUESTED = LocatorDescriptor.parse(
        'xpath:-://div[@role="option"]//div[normalize-space(text())="Requested"]'
    )
    REPORT_STATUS_OPTION_NO_REQUESTED = LocatorDescriptor.parse(
        'xpath:-://div[@role="option"]//div[contains(.,"No Requested")]'
    )
    REPORT_STATUS_OPTION_UPLOADED = LocatorDescriptor.parse(
        'xpath:-://div[@role="option"]//div[contains(.,"Uploaded")]'
    )

    def __init__(self, app: AppLibrary):
        self.app = app

    async def assert_on_dashboard(self) -> None:
        await self.app.smart_wait(self.DASHBOARD_TITLE)
        await self.app.assert_element_visible(self.DASHBOARD_TITLE)

    async def search_user(self, query: str) -> None:
        await self.app.enter_text(self.SEARCH_INPUT, query)

    async def click_update_missing_fields(self) -> None:
        await self.app.click(self.UPDATE_MISSING_FIELDS_BUTTON)

    async def open_report_status_dropdown(self) -> None:
        await self.app.click(self.REPORT_STATUS_DROPDOWN_BUTTON, wait_for_load=False)

    async def open_plan_status_dropdown(self) -> None:
        await self.app.click(self.PLAN_STATUS_DROPDOWN, wait_for_load=False)

    async def get_table_rows_count(self) -> int:
        return await self.app.count_elements(self.TABLE_ROW)

    async def get_table_cell_text(self, row_index: int, cell_index: int) -> str:
        """Text of a table cell; both indexes are 0-based."""
        cell = LocatorDescriptor(
            LocatorStrategy.CSS,
            f"{self.TABLE_ROW.value} >> nth={row_index} >> td >> nth={cell_index}",
        )
        return await self.app.get_text(cell)

    async def click_first_row_patient(self) -> None:
        """Open the patient in the first table row."""
        await self.app.click(self.FIRST_ROW_PATIENT_NAME_LINK)

    async def select_report_status_requested(self) -> None:
        await self.open_report_status_dropdown()
        await self.app.click(self.REPORT_STATUS_OPTION_REQUESTED, wait_for_load=False)
        await self.app.wait(FILTER_SETTLE_MS)

    async def select_report_status_no_requested(self) -> None:
        """Switch the filter from 'Requested' to 'No Requested'."""
        await self.app.click(self.REQUESTED_DROPDOWN_BUTTON, wait_for_load=False)
        await self.app.click(self.REPORT_STATUS_OPTION_NO_REQUESTED, wait_for_load=False)
        await self.app.wait(FILTER_SETTLE_MS)

    async def select_report_status_uploaded(self) -> None:
        await self.open_report_status_dropdown()
        await self.app.click(self.REPORT_STATUS_OPTION_UPLOADED, wait_for_load=False)

    async def get_filtered_table_row_count(self) -> int:
        """Rows in the patient table, not counting the 'No results.' placeholder."""
        rows = await self.app.resolve(self.TABLE_ROW).all()
        count = 0
        for row in rows:
            text = await row.inner_text()
            if NO_RESULTS_TEXT not in text:
                count += 1
        return count
