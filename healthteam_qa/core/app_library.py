"""
App Library - Descriptor-Driven Browser Interactions

High-level interaction layer used by every page object:
- Resolves descriptors through the locator module
- Click with a joint page-load wait
- Text entry, waits, presence checks and visibility assertions
- Diagnostic screenshot on visibility failures
- One-shot dialog subscriptions

Errors are never retried here; the test runner owns retry policy.
"""

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

import structlog
from playwright.async_api import (
    Dialog,
    Locator,
    Page,
    TimeoutError as PlaywrightTimeout,
)

from healthteam_qa.config import Settings
from healthteam_qa.core.locator import DescriptorLike, as_descriptor, resolve

logger = structlog.get_logger()

WaitState = Literal["attached", "detached", "visible", "hidden"]


class InteractionError(Exception):
    """Base class for interaction failures."""


class WaitTimeoutError(InteractionError, TimeoutError):
    """Raised when an awaited condition does not occur within its bound."""

    def __init__(self, message: str, descriptor: str | None, timeout: float):
        super().__init__(message)
        self.descriptor = descriptor
        self.timeout = timeout


class ElementNotVisibleError(InteractionError):
    """Raised by assert_element_visible; carries the diagnostic screenshot path."""

    def __init__(self, descriptor: str, screenshot_path: Path | None = None):
        super().__init__(f"Element {descriptor} is NOT visible")
        self.descriptor = descriptor
        self.screenshot_path = screenshot_path


@dataclass
class InteractionOptions:
    """Timeouts and artifact paths for AppLibrary."""

    action_timeout: float = 30000  # milliseconds
    load_timeout: float = 10000  # milliseconds
    wait_timeout: float = 5000  # milliseconds
    failure_screenshot_path: str = "failure.png"
    screenshot_dir: str = "screenshots"

    @classmethod
    def from_settings(cls, settings: Settings) -> "InteractionOptions":
        return cls(
            action_timeout=settings.playwright_timeout,
            load_timeout=settings.click_load_timeout,
            wait_timeout=settings.smart_wait_timeout,
            failure_screenshot_path=settings.failure_screenshot_path,
            screenshot_dir=settings.screenshot_dir,
        )


class DialogSubscription:
    """
    One-shot handler for the next native dialog on a page.

    The listener is registered on creation and removed after the first
    dialog, on cancel(), or when used as a context manager, on exit.

    Usage:
        with app.handle_alert(accept=False) as alert:
            await app.click("text:-:Delete", wait_for_load=False)
        assert alert.handled
    """

    def __init__(self, page: Page, accept: bool, on_close=None):
        self.accept = accept
        self.handled = False
        self.message: str | None = None
        self._page = page
        self._on_close = on_close
        self._handler = self._on_dialog
        self._active = True
        page.on("dialog", self._handler)

    @property
    def active(self) -> bool:
        return self._active

    async def _on_dialog(self, dialog: Dialog) -> None:
        if not self._active:
            return
        self.cancel()

        self.message = dialog.message
        logger.info(
            "dialog_detected",
            dialog_type=dialog.type,
            message=dialog.message,
            accept=self.accept,
        )

        if self.accept:
            await dialog.accept()
        else:
            await dialog.dismiss()
        self.handled = True

    def cancel(self) -> None:
        """Unregister the listener; safe to call more than once."""
        if not self._active:
            return
        self._active = False
        self._page.remove_listener("dialog", self._handler)
        if self._on_close:
            self._on_close(self)

    def __enter__(self) -> "DialogSubscription":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.cancel()


class AppLibrary:
    """
    Descriptor-driven interaction library bound to one page.

    Usage:
        app = AppLibrary(page)
        await app.enter_text("name:-:email", "user@example.com")
        await app.click("text:-:Continue")
        await app.assert_element_visible("text:-:Dashboard")
    """

    def __init__(self, page: Page, options: InteractionOptions | None = None):
        self.page = page
        self.options = options or InteractionOptions()
        self._subscriptions: list[DialogSubscription] = []

    @classmethod
    def from_settings(cls, page: Page, settings: Settings) -> "AppLibrary":
        return cls(page, InteractionOptions.from_settings(settings))

    def resolve(self, descriptor: DescriptorLike) -> Locator:
        """Resolve a descriptor against the current page."""
        return resolve(self.page, descriptor)

    async def navigate(self, url: str, wait_until: str = "networkidle") -> None:
        """Navigate to a URL and wait for the given load state."""
        logger.info("navigating", url=url, wait_until=wait_until)
        await self.page.goto(url, wait_until=wait_until)

    async def click(
        self,
        descriptor: DescriptorLike,
        *,
        wait_for_load: bool = True,
        timeout: float | None = None,
    ) -> None:
        """
        Click an element and wait for the page "load" state.

        The click and the load-state wait run concurrently and both must
        complete. A click that does not navigate returns as soon as the
        click finishes, since the load state is already reached.

        Args:
            descriptor: Element descriptor
            wait_for_load: Set False for same-page clicks to skip the load wait
            timeout: Load wait timeout in ms (defaults to options.load_timeout)

        Raises:
            WaitTimeoutError: The click (bounded by options.action_timeout) or
                the load wait timed out; the error names which one
        """
        parsed = as_descriptor(descriptor)
        locator = self.resolve(parsed)
        load_timeout = timeout if timeout is not None else self.options.load_timeout

        log = logger.bind(locator=str(parsed))
        log.info("clicking_element", wait_for_load=wait_for_load)

        click_task = asyncio.ensure_future(
            locator.click(timeout=self.options.action_timeout)
        )
        load_task = None
        if wait_for_load:
            load_task = asyncio.ensure_future(
                self.page.wait_for_load_state("load", timeout=load_timeout)
            )
        tasks = [task for task in (click_task, load_task) if task is not None]

        try:
            await asyncio.gather(*tasks)
        except PlaywrightTimeout as e:
            if load_task is not None and _raised(load_task, e):
                log.error("page_load_timeout", error=str(e))
                raise WaitTimeoutError(
                    f"Timed out after {load_timeout}ms waiting for page load "
                    f"after clicking {parsed}",
                    descriptor=str(parsed),
                    timeout=load_timeout,
                ) from e
            log.error("click_timeout", error=str(e))
            raise WaitTimeoutError(
                f"Timed out after {self.options.action_timeout}ms clicking {parsed}",
                descriptor=str(parsed),
                timeout=self.options.action_timeout,
            ) from e
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()
                elif not task.cancelled():
                    # Mark a second failure as retrieved
                    task.exception()

        log.info("click_complete")

    async def enter_text(self, descriptor: DescriptorLike, text: str) -> None:
        """Replace the field content with text."""
        locator = self.resolve(descriptor)
        logger.info("entering_text", locator=str(descriptor), length=len(text))
        await locator.fill("")
        await locator.fill(text)

    async def smart_wait(
        self,
        descriptor: DescriptorLike,
        timeout: float | None = None,
        state: WaitState = "visible",
    ) -> None:
        """Wait until the element reaches state, or raise WaitTimeoutError."""
        parsed = as_descriptor(descriptor)
        effective_timeout = timeout if timeout is not None else self.options.wait_timeout

        logger.info(
            "waiting_for_element",
            locator=str(parsed),
            state=state,
            timeout=effective_timeout,
        )

        try:
            await self.resolve(parsed).wait_for(state=state, timeout=effective_timeout)
        except PlaywrightTimeout as e:
            raise WaitTimeoutError(
                f"Timed out after {effective_timeout}ms waiting for {parsed} "
                f"to be {state}",
                descriptor=str(parsed),
                timeout=effective_timeout,
            ) from e

    async def count_elements(self, descriptor: DescriptorLike) -> int:
        """Number of matching elements in the current document."""
        return await self.resolve(descriptor).count()

    async def is_element_present(self, descriptor: DescriptorLike) -> bool:
        """True if at least one element matches; zero matches is not an error."""
        return await self.count_elements(descriptor) > 0

    async def get_text(self, descriptor: DescriptorLike) -> str:
        return await self.resolve(descriptor).inner_text()

    async def assert_element_visible(self, descriptor: DescriptorLike) -> None:
        """
        Assert the element is visible.

        On failure a screenshot is written to options.failure_screenshot_path
        before ElementNotVisibleError is raised. A failed capture is logged
        and never replaces the visibility error.
        """
        parsed = as_descriptor(descriptor)
        log = logger.bind(locator=str(parsed))

        if await self.resolve(parsed).is_visible():
            log.info("element_visible")
            return

        screenshot_path = await self._capture_failure_screenshot()
        log.error(
            "element_not_visible",
            screenshot=str(screenshot_path) if screenshot_path else None,
        )
        raise ElementNotVisibleError(str(parsed), screenshot_path)

    async def take_screenshot(self, name: str, full_page: bool = False) -> Path:
        """Capture the page to <screenshot_dir>/<name>.png."""
        path = Path(self.options.screenshot_dir) / f"{name}.png"
        logger.info("capturing_screenshot", path=str(path))
        await self.page.screenshot(path=str(path), full_page=full_page)
        return path

    async def scroll_to_element(self, descriptor: DescriptorLike) -> None:
        logger.info("scrolling_to_element", locator=str(descriptor))
        await self.resolve(descriptor).scroll_into_view_if_needed()

    async def upload_files(
        self,
        descriptor: DescriptorLike,
        files: str | Path | list[str | Path],
    ) -> None:
        """Set files on a file input."""
        logger.info("uploading_files", locator=str(descriptor))
        await self.resolve(descriptor).set_input_files(files)

    async def wait(self, ms: float) -> None:
        """Fixed pause, for client-side updates with nothing to wait on."""
        await self.page.wait_for_timeout(ms)

    def handle_alert(self, accept: bool = True) -> DialogSubscription:
        """
        Accept or dismiss the next native dialog.

        Register before the action that opens the dialog. The returned
        subscription removes itself after one dialog.
        """
        subscription = DialogSubscription(
            self.page,
            accept=accept,
            on_close=self._forget_subscription,
        )
        self._subscriptions.append(subscription)
        logger.debug("dialog_handler_registered", accept=accept)
        return subscription

    async def debug_pause(self) -> None:
        logger.info("pausing_for_debugging")
        await self.page.pause()

    def close(self) -> None:
        """Remove any dialog listeners that never fired."""
        for subscription in list(self._subscriptions):
            subscription.cancel()

    def _forget_subscription(self, subscription: DialogSubscription) -> None:
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)

    async def _capture_failure_screenshot(self) -> Path | None:
        path = Path(self.options.failure_screenshot_path)
        try:
            await self.page.screenshot(path=str(path))
        except Exception as e:
            logger.warning("failure_screenshot_error", error=str(e))
            return None
        return path


def _raised(task: asyncio.Future, error: BaseException) -> bool:
    return task.done() and not task.cancelled() and task.exception() is error
