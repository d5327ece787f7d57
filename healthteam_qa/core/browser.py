"""
Playwright Browser Session

Owns the browser lifecycle for one test:
- Starts Playwright and launches (or connects to) a browser
- Creates an isolated context and page
- Exposes the page that AppLibrary instances bind to
"""

from dataclasses import dataclass
from enum import Enum

import structlog
from playwright.async_api import (
    async_playwright,
    Browser,
    BrowserContext,
    Page,
    Playwright,
)

from healthteam_qa.config import Settings

logger = structlog.get_logger()


class BrowserType(str, Enum):
    """Supported browser types."""

    CHROMIUM = "chromium"
    FIREFOX = "firefox"
    WEBKIT = "webkit"


@dataclass
class BrowserOptions:
    """Browser configuration options."""

    browser_type: BrowserType = BrowserType.CHROMIUM
    headless: bool = True
    slow_mo: int = 0
    timeout: int = 30000
    viewport_width: int | None = 1440
    viewport_height: int | None = 900
    ws_endpoint: str | None = None
    record_video: bool = False
    video_dir: str = "./videos"

    @classmethod
    def from_settings(cls, settings: Settings) -> "BrowserOptions":
        return cls(
            browser_type=BrowserType(settings.browser),
            headless=settings.playwright_headless,
            slow_mo=settings.playwright_slow_mo,
            timeout=settings.playwright_timeout,
            ws_endpoint=settings.playwright_ws_endpoint or None,
            record_video=settings.video != "off",
            video_dir=settings.video_dir,
        )


class BrowserSession:
    """
    Async context manager around a Playwright browser, context and page.

    Usage:
        async with BrowserSession(options) as session:
            app = AppLibrary(session.page)
            await app.navigate("https://example.com")
    """

    def __init__(self, options: BrowserOptions | None = None):
        self.options = options or BrowserOptions()
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._context: BrowserContext | None = None
        self._page: Page | None = None

    @property
    def page(self) -> Page:
        """Get current page, raise if not initialized."""
        if self._page is None:
            raise RuntimeError("Browser not initialized. Use 'async with' context.")
        return self._page

    @property
    def context(self) -> BrowserContext:
        if self._context is None:
            raise RuntimeError("Browser not initialized. Use 'async with' context.")
        return self._context

    async def __aenter__(self) -> "BrowserSession":
        await self._initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self._cleanup()

    async def _initialize(self) -> None:
        """Initialize Playwright browser and context."""
        log = logger.bind(browser=self.options.browser_type.value)
        log.info("initializing_browser", remote=bool(self.options.ws_endpoint))

        self._playwright = await async_playwright().start()

        browser_launcher = getattr(self._playwright, self.options.browser_type.value)
        if self.options.ws_endpoint:
            self._browser = await browser_launcher.connect(
                self.options.ws_endpoint,
                slow_mo=self.options.slow_mo,
            )
        else:
            self._browser = await browser_launcher.launch(
                headless=self.options.headless,
                slow_mo=self.options.slow_mo,
            )

        context_options: dict = {}
        if self.options.viewport_width and self.options.viewport_height:
            context_options["viewport"] = {
                "width": self.options.viewport_width,
                "height": self.options.viewport_height,
            }
        else:
            context_options["no_viewport"] = True

        if self.options.record_video:
            context_options["record_video_dir"] = self.options.video_dir

        self._context = await self._browser.new_context(**context_options)
        self._context.set_default_timeout(self.options.timeout)

        self._page = await self._context.new_page()

        log.info("browser_initialized")

    async def _cleanup(self) -> None:
        """Clean up browser resources."""
        logger.info("cleaning_up_browser")

        if self._context:
            await self._context.close()
        if self._browser:
            await self._browser.close()
        if self._playwright:
            await self._playwright.stop()

        self._page = None
        self._context = None
        self._browser = None
        self._playwright = None
