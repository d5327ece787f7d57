"""
Application header shown on every authenticated screen.
"""

from healthteam_qa.core.app_library import AppLibrary
from healthteam_qa.core.locator import LocatorDescriptor


class HeaderPage:
    LOGO = LocatorDescriptor.parse('css:-:img[alt="navimage"]')
    TITLE = LocatorDescriptor.parse("text:-:Health Team")
    USER_PROFILE_BUTTON = LocatorDescriptor.parse('css:-:button[aria-haspopup="menu"]')
    USER_AVATAR = LocatorDescriptor.parse("css:-:img.rounded-full")
    USER_NAME = LocatorDescriptor.parse(
        'css:-:button[aria-haspopup="menu"] div:last-child'
    )

    def __init__(self, app: AppLibrary):
        self.app = app

    async def assert_header_visible(self) -> None:
        await self.app.assert_element_visible(self.LOGO)
        await self.app.assert_element_visible(self.TITLE)
        await self.app.assert_element_visible(self.USER_PROFILE_BUTTON)

    async def get_user_name(self) -> str:
        return await self.app.get_text(self.USER_NAME)

    async def click_user_profile(self) -> None:
        await self.app.click(self.USER_PROFILE_BUTTON, wait_for_load=False)
