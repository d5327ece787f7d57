"""
Test harness configuration management using Pydantic Settings.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ArtifactMode = Literal["off", "on", "retain-on-failure"]


class Settings(BaseSettings):
    """Harness settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="QA_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Execution environment
    app_env: Literal["local", "ci", "sauce_labs"] = "local"

    # Application under test
    app_base_url: str = "http://localhost:3000"
    app_email: str = Field(default="")
    app_password: str = Field(default="")

    # Playwright
    browser: Literal["chromium", "firefox", "webkit"] = "chromium"
    playwright_headless: bool = True
    playwright_timeout: int = 30000  # milliseconds
    playwright_slow_mo: int = 0
    playwright_ws_endpoint: str = ""  # remote browser grid, empty for local
    video_dir: str = "./videos"

    # Interaction timeouts
    click_load_timeout: int = 10000  # milliseconds
    smart_wait_timeout: int = 5000  # milliseconds

    # Artifacts
    failure_screenshot_path: str = "failure.png"
    screenshot_dir: str = "screenshots"
    artifacts_dir: str = "test-results"
    screenshot: ArtifactMode = "retain-on-failure"
    trace: ArtifactMode = "retain-on-failure"
    video: ArtifactMode = "retain-on-failure"

    # EHR Bridge API
    ehr_base_url: str = "http://localhost:8080"
    ehr_business_location_id: str = "6"

    # Logging
    log_level: str = "INFO"
    log_format: Literal["json", "console"] = "console"

    @property
    def is_local(self) -> bool:
        return self.app_env == "local"

    @property
    def is_remote_grid(self) -> bool:
        return bool(self.playwright_ws_endpoint)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
