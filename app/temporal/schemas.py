"""Shared schemas for Temporal workflows and activities.

These are the data contracts between:
- Client -> Workflow (inputs)
- Workflow -> Activities (inputs)
- Activities -> Workflow (outputs)
- Workflow -> Client (outputs)
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from app.core.configs import app_config
from app.core.services.classroom.schemas import ScrapeRequest

# =============================================================================
# Workflow Status
# =============================================================================


class WorkflowStatus(str, Enum):
    """Status of a workflow execution."""

    PENDING = 'pending'
    RUNNING = 'running'
    COMPLETED = 'completed'
    FAILED = 'failed'


# =============================================================================
# Classroom Scrape Activity
# =============================================================================


class ScrapeClassroomInput(ScrapeRequest):
    """Input for the scrape activity."""


class ScrapeClassroomOutput(BaseModel):
    """Output from the scrape activity."""

    urls: list[str] = Field(default_factory=list, description='Canonical video URLs in page order')


# =============================================================================
# Video Download Activity
# =============================================================================


class DownloadVideoInput(BaseModel):
    """Input for downloading one video."""

    url: str = Field(..., description='Canonical video URL')
    output_dir: str = Field(..., description='Directory the video is written to')
    cookies_file: str | None = Field(None, description='JSON or Netscape cookies file for the downloader')


class DownloadVideoOutput(BaseModel):
    """Output from downloading one video."""

    url: str
    output_dir: str


# =============================================================================
# Classroom Download Workflow
# =============================================================================


class ClassroomDownloadInput(BaseModel):
    """Input for the classroom download workflow.

    Workflow inputs are persisted in the Temporal history, so the workflow
    authenticates with a cookies file only and rejects login credentials.
    """

    model_config = ConfigDict(extra='forbid')

    url: str = Field(..., min_length=1, description='Classroom URL to scrape')
    cookies_file: str = Field(..., min_length=1, description='JSON or Netscape cookies file')
    wait_seconds: int = Field(
        default_factory=lambda: app_config.DEFAULT_PAGE_WAIT_SECONDS,
        ge=0,
        description='Settle time after navigating to the classroom',
    )
    headless: bool = Field(default_factory=lambda: app_config.BROWSER_HEADLESS)
    browser_path: str | None = Field(None, description='Browser path or command; auto-detected when empty')
    output_dir: str = Field('downloads', description='Directory videos are written to')

    def to_scrape_input(self) -> ScrapeClassroomInput:
        return ScrapeClassroomInput(**self.model_dump(exclude={'output_dir'}))


class FailedDownload(BaseModel):
    url: str
    error: str


class ClassroomDownloadOutput(BaseModel):
    """Output from the classroom download workflow."""

    urls: list[str] = Field(default_factory=list)
    downloaded: list[str] = Field(default_factory=list)
    failed: list[FailedDownload] = Field(default_factory=list)
