"""
Failure Artifacts

Per-test screenshot, trace and video retention. Each artifact has a mode:

- "off": never captured
- "on": always kept
- "retain-on-failure": captured for every test, kept only when it failed

Kept files land in <output_dir>/<test id>/.
"""

import re
from dataclasses import dataclass
from pathlib import Path

import structlog
from playwright.async_api import BrowserContext, Page, Video

from healthteam_qa.config import ArtifactMode, Settings

logger = structlog.get_logger()


@dataclass
class ArtifactOptions:
    """Retention modes and output directory for failure artifacts."""

    output_dir: str = "test-results"
    screenshot: ArtifactMode = "retain-on-failure"
    trace: ArtifactMode = "retain-on-failure"
    video: ArtifactMode = "retain-on-failure"

    @classmethod
    def from_settings(cls, settings: Settings) -> "ArtifactOptions":
        return cls(
            output_dir=settings.artifacts_dir,
            screenshot=settings.screenshot,
            trace=settings.trace,
            video=settings.video,
        )


def _keep(mode: ArtifactMode, failed: bool) -> bool:
    return mode == "on" or (mode == "retain-on-failure" and failed)


def artifact_dirname(test_id: str) -> str:
    """Filesystem-safe directory name for a pytest node id."""
    return re.sub(r"[^\w.-]+", "-", test_id).strip("-")


class ArtifactRecorder:
    """
    Collects artifacts for one test on one browser context.

    Usage:
        recorder = ArtifactRecorder(context, options, request.node.nodeid)
        await recorder.start()
        ...  # run the test
        await recorder.capture(page, failed)
        await context.close()
        await recorder.finish_video(video, failed)
    """

    def __init__(self, context: BrowserContext, options: ArtifactOptions, test_id: str):
        self.context = context
        self.options = options
        self.output_dir = Path(options.output_dir) / artifact_dirname(test_id)
        self.kept: list[Path] = []
        self._tracing = False

    async def start(self) -> None:
        if self.options.trace == "off":
            return
        await self.context.tracing.start(screenshots=True, snapshots=True, sources=True)
        self._tracing = True

    async def capture(self, page: Page, failed: bool) -> list[Path]:
        """Screenshot the page and stop tracing; call before the context closes."""
        log = logger.bind(output_dir=str(self.output_dir), failed=failed)

        if _keep(self.options.screenshot, failed):
            path = self._path("screenshot.png")
            try:
                await page.screenshot(path=str(path), full_page=True)
            except Exception as e:
                log.warning("artifact_screenshot_error", error=str(e))
            else:
                self.kept.append(path)

        if self._tracing:
            self._tracing = False
            if _keep(self.options.trace, failed):
                path = self._path("trace.zip")
                await self.context.tracing.stop(path=str(path))
                self.kept.append(path)
            else:
                await self.context.tracing.stop()

        if self.kept:
            log.info("artifacts_kept", paths=[str(p) for p in self.kept])
        return self.kept

    async def finish_video(self, video: Video | None, failed: bool) -> Path | None:
        """Keep or delete the recording; call after the context has closed."""
        if video is None or self.options.video == "off":
            return None

        if not _keep(self.options.video, failed):
            await video.delete()
            return None

        path = self._path("video.webm")
        await video.save_as(str(path))
        await video.delete()
        self.kept.append(path)
        logger.info("video_kept", path=str(path))
        return path

    def _path(self, name: str) -> Path:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        return self.output_dir / name
