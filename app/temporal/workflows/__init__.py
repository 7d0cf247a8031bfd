"""Temporal workflows - orchestration logic for classroom downloads.

Workflows define the sequence of activities and their dependencies.
"""

from app.temporal.workflows.classroom_download import (
    DOWNLOAD_RETRY,
    SCRAPE_RETRY,
    ClassroomDownloadWorkflow,
)

WORKFLOWS = [ClassroomDownloadWorkflow]

__all__ = [
    'DOWNLOAD_RETRY',
    'SCRAPE_RETRY',
    'WORKFLOWS',
    'ClassroomDownloadWorkflow',
]
