"""
Login screen.
"""

from healthteam_qa.core.app_library import AppLibrary
from healthteam_qa.core.locator import LocatorDescriptor


class LoginPage:
    EMAIL_INPUT = LocatorDescriptor.parse("name:-:email")
    PASSWORD_INPUT = LocatorDescriptor.parse("name:-:password")
    CONTINUE_BUTTON = LocatorDescriptor.parse("text:-:Continue")
    CONTACT_SUPPORT_BUTTON = LocatorDescriptor.parse("text:-:Contact support")

    def __init__(self, app: AppLibrary):
        self.app = app

    async def login(self, email: str, password: str) -> None:
        await self.app.enter_text(self.EMAIL_INPUT, email)
        await self.app.enter_text(self.PASSWORD_INPUT, password)
        await self.app.click(self.CONTINUE_BUTTON)
