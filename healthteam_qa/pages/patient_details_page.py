"""
Patient details screen.
"""

from enum import Enum
from pathlib import Path

from healthteam_qa.core.app_library import AppLibrary
from healthteam_qa.core.locator import LocatorDescriptor

DETAILS_RENDER_MS = 4000


class PatientStatus(str, Enum):
    """Status buttons in the 'Update status' section."""

    PROFILE_COMPLETE = "Profile complete"
    TEST_ORDERED = "Test ordered"
    REPORT_READY = "Report ready"
    PLAN_SUBMITTED = "Plan submitted"


class PatientDetailsPage:
    PATIENT_NAME = LocatorDescriptor.parse("css:-:div.text-lg.font-bold")
    PATIENT_EMAIL = LocatorDescriptor.parse(
        'xpath:-://div[@class="text-muted-foreground text-sm"]'
    )
    UPDATE_STATUS_SECTION = LocatorDescriptor.parse("text:-:Update status")
    REFERENCE_CODE = LocatorDescriptor.parse("text:-:Reference code")
    REFERENCE_VALUE = LocatorDescriptor.parse("css:-:span.text-2xl.font-mono.font-semibold")
    EDIT_REFERENCE_BUTTON = LocatorDescriptor.parse("text:-:Edit")
    UPLOAD_REPORT_SECTION = LocatorDescriptor.parse("text:-:Upload report")
    REPORT_FILE_INPUT = LocatorDescriptor.parse('css:-:input[type="file"]')
    REVIEW_AND_SUBMIT_BUTTON = LocatorDescriptor.parse("text:-:Review and Submit")
    PLAN_SECTION = LocatorDescriptor.parse('xpath:-://div[text()="Plan"]')
    PLAN_STATUS = LocatorDescriptor.parse(
        'xpath:-://div[contains(@class, "inline-flex") and contains(@class, "rounded-full")]'
    )
    CREATE_PLAN_BUTTON = LocatorDescriptor.parse("text:-:Create plan")
    EDIT_PROFILE_BUTTON = LocatorDescriptor.parse("text:-:Edit Profile")
    DASHBOARD_BREADCRUMB = LocatorDescriptor.parse(
        'css:-:nav[aria-label="breadcrumb"] a[href="/dashboard"]'
    )

    STATUS_BUTTONS = {
        status: LocatorDescriptor.parse(f"text:-:{status.value}")
        for status in PatientStatus
    }

    def __init__(self, app: AppLibrary):
        self.app = app

    async def assert_patient_details_visible(self) -> None:
        await self.app.wait(DETAILS_RENDER_MS)
        await self.app.assert_element_visible(self.PATIENT_NAME)
        await self.app.assert_element_visible(self.PATIENT_EMAIL)
        await self.app.assert_element_visible(self.UPDATE_STATUS_SECTION)

    async def get_patient_name(self) -> str:
        return await self.app.get_text(self.PATIENT_NAME)

    async def get_patient_email(self) -> str:
        return await self.app.get_text(self.PATIENT_EMAIL)

    async def click_status_button(self, status: PatientStatus | str) -> None:
        await self.app.click(self.STATUS_BUTTONS[PatientStatus(status)])

    async def get_reference_code(self) -> str:
        return await self.app.get_text(self.REFERENCE_VALUE)

    async def click_edit_reference(self) -> None:
        await self.app.click(self.EDIT_REFERENCE_BUTTON, wait_for_load=False)

    async def upload_report(self, file_path: str | Path) -> None:
        await self.app.upload_files(self.REPORT_FILE_INPUT, file_path)

    async def click_review_and_submit(self) -> None:
        await self.app.click(self.REVIEW_AND_SUBMIT_BUTTON)

    async def assert_plan_section_visible(self) -> None:
        await self.app.assert_element_visible(self.PLAN_SECTION)
        await self.app.assert_element_visible(self.PLAN_STATUS)

    async def click_edit_profile(self) -> None:
        await self.app.click(self.EDIT_PROFILE_BUTTON)

    async def click_dashboard_breadcrumb(self) -> None:
        await self.app.click(self.DASHBOARD_BREADCRUMB)
