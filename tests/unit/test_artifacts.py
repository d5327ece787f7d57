"""
Tests for failure artifact retention and the phase report hook.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from healthteam_qa.config import Settings
from healthteam_qa.core.artifacts import (
    ArtifactOptions,
    ArtifactRecorder,
    artifact_dirname,
)
from healthteam_qa.core.browser import BrowserOptions
from healthteam_qa.fixtures import pytest_runtest_makereport, run_failed

TEST_ID = "tests/e2e/test_login.py::test_login_lands_on_dashboard"


@pytest.fixture
def context() -> MagicMock:
    context = MagicMock(name="context")
    context.tracing.start = AsyncMock()
    context.tracing.stop = AsyncMock()
    return context


@pytest.fixture
def video() -> MagicMock:
    video = MagicMock(name="video")
    video.save_as = AsyncMock()
    video.delete = AsyncMock()
    return video


def make_recorder(context, tmp_path, **modes) -> ArtifactRecorder:
    options = ArtifactOptions(output_dir=str(tmp_path), **modes)
    return ArtifactRecorder(context, options, TEST_ID)


def make_report(when: str, failed: bool) -> MagicMock:
    report = MagicMock(name=f"report_{when}")
    report.when = when
    report.failed = failed
    return report


class TestArtifactOptions:
    def test_defaults_keep_failures_only(self):
        options = ArtifactOptions.from_settings(Settings(_env_file=None))

        assert options.output_dir == "test-results"
        assert options.screenshot == "retain-on-failure"
        assert options.trace == "retain-on-failure"
        assert options.video == "retain-on-failure"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("QA_TRACE", "off")
        monkeypatch.setenv("QA_VIDEO", "on")
        monkeypatch.setenv("QA_ARTIFACTS_DIR", "artifacts")

        options = ArtifactOptions.from_settings(Settings(_env_file=None))

        assert options.trace == "off"
        assert options.video == "on"
        assert options.output_dir == "artifacts"

    def test_video_mode_drives_recording(self):
        assert BrowserOptions.from_settings(Settings(_env_file=None)).record_video
        assert not BrowserOptions.from_settings(
            Settings(_env_file=None, video="off")
        ).record_video

    def test_dirname_is_filesystem_safe(self):
        assert artifact_dirname("tests/a.py::test_x[chromium]") == "tests-a.py-test_x-chromium"


class TestArtifactRecorder:
    @pytest.mark.asyncio
    async def test_failed_test_keeps_screenshot_and_trace(self, context, mock_page, tmp_path):
        recorder = make_recorder(context, tmp_path)
        await recorder.start()

        kept = await recorder.capture(mock_page, failed=True)

        test_dir = tmp_path / artifact_dirname(TEST_ID)
        assert kept == [test_dir / "screenshot.png", test_dir / "trace.zip"]
        context.tracing.start.assert_awaited_once_with(
            screenshots=True, snapshots=True, sources=True
        )
        mock_page.screenshot.assert_awaited_once_with(
            path=str(test_dir / "screenshot.png"), full_page=True
        )
        context.tracing.stop.assert_awaited_once_with(path=str(test_dir / "trace.zip"))

    @pytest.mark.asyncio
    async def test_passing_test_discards_trace(self, context, mock_page, tmp_path):
        recorder = make_recorder(context, tmp_path)
        await recorder.start()

        kept = await recorder.capture(mock_page, failed=False)

        assert kept == []
        mock_page.screenshot.assert_not_called()
        context.tracing.stop.assert_awaited_once_with()

    @pytest.mark.asyncio
    async def test_trace_off_never_starts_tracing(self, context, mock_page, tmp_path):
        recorder = make_recorder(context, tmp_path, trace="off")
        await recorder.start()
        await recorder.capture(mock_page, failed=True)

        context.tracing.start.assert_not_called()
        context.tracing.stop.assert_not_called()

    @pytest.mark.asyncio
    async def test_screenshot_on_keeps_passing_tests(self, context, mock_page, tmp_path):
        recorder = make_recorder(context, tmp_path, screenshot="on", trace="off")

        kept = await recorder.capture(mock_page, failed=False)

        assert [path.name for path in kept] == ["screenshot.png"]

    @pytest.mark.asyncio
    async def test_screenshot_error_does_not_stop_trace(self, context, mock_page, tmp_path):
        mock_page.screenshot.side_effect = Exception("Target page closed")
        recorder = make_recorder(context, tmp_path)
        await recorder.start()

        kept = await recorder.capture(mock_page, failed=True)

        assert [path.name for path in kept] == ["trace.zip"]

    @pytest.mark.asyncio
    async def test_failed_video_is_saved(self, context, video, tmp_path):
        recorder = make_recorder(context, tmp_path)

        path = await recorder.finish_video(video, failed=True)

        assert path == tmp_path / artifact_dirname(TEST_ID) / "video.webm"
        video.save_as.assert_awaited_once_with(str(path))
        video.delete.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_passing_video_is_deleted(self, context, video, tmp_path):
        recorder = make_recorder(context, tmp_path)

        assert await recorder.finish_video(video, failed=False) is None
        video.save_as.assert_not_called()
        video.delete.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_no_video(self, context, tmp_path):
        recorder = make_recorder(context, tmp_path)
        assert await recorder.finish_video(None, failed=True) is None


class TestPhaseReports:
    def test_hook_stores_report_on_item(self):
        item = MagicMock(name="item", spec=[])
        report = make_report("call", failed=True)
        outcome = MagicMock(name="outcome")
        outcome.get_result.return_value = report

        hook = pytest_runtest_makereport(item, MagicMock(name="call"))
        next(hook)
        with pytest.raises(StopIteration):
            hook.send(outcome)

        assert item.rep_call is report

    def test_failed_call(self):
        item = MagicMock(name="item", spec=[])
        item.rep_setup = make_report("setup", failed=False)
        item.rep_call = make_report("call", failed=True)

        assert run_failed(item)

    def test_failed_setup(self):
        item = MagicMock(name="item", spec=[])
        item.rep_setup = make_report("setup", failed=True)

        assert run_failed(item)

    def test_passed(self):
        item = MagicMock(name="item", spec=[])
        item.rep_setup = make_report("setup", failed=False)
        item.rep_call = make_report("call", failed=False)

        assert not run_failed(item)

    def test_no_reports(self):
        assert not run_failed(MagicMock(name="item", spec=[]))
