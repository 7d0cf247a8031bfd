"""Classroom extraction schemas."""

from pydantic import BaseModel, Field, model_validator

from app.core.configs import app_config


class ScrapeRequest(BaseModel):
    """What to scrape and how to authenticate.

    Email and password take precedence over a cookies file when both are given.
    """

    url: str = Field(..., min_length=1, description='Classroom URL to scrape')
    email: str | None = Field(None, description='Login email')
    password: str | None = Field(None, description='Login password')
    cookies_file: str | None = Field(None, description='JSON or Netscape cookies file')
    wait_seconds: int = Field(
        default_factory=lambda: app_config.DEFAULT_PAGE_WAIT_SECONDS,
        ge=0,
        description='Settle time after navigating to the classroom',
    )
    headless: bool = Field(default_factory=lambda: app_config.BROWSER_HEADLESS)
    browser_path: str | None = Field(None, description='Browser path or command; auto-detected when empty')

    @property
    def uses_login(self) -> bool:
        return bool(self.email and self.password)

    @model_validator(mode='after')
    def _require_credentials(self) -> 'ScrapeRequest':
        if not self.uses_login and not self.cookies_file:
            raise ValueError('either a cookies file or email and password are required for authentication')
        return self


class DownloadResult(BaseModel):
    """Outcome of downloading one video URL."""

    url: str
    success: bool
    output_dir: str
    command: list[str] = Field(default_factory=list, description='Downloader command that was run')
    error: str | None = None


class DownloadReport(BaseModel):
    """Outcome of a full extract-and-download run."""

    urls: list[str] = Field(default_factory=list)
    results: list[DownloadResult] = Field(default_factory=list)

    @property
    def succeeded(self) -> list[DownloadResult]:
        return [result for result in self.results if result.success]

    @property
    def failed(self) -> list[DownloadResult]:
        return [result for result in self.results if not result.success]
