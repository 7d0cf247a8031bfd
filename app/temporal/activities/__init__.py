"""Temporal activities - individual tasks that interact with the browser and the downloader.

Each activity:
- Performs a single, focused task
- Can be retried independently
- Has configurable timeouts
"""

from app.temporal.activities.classroom import download_classroom_video, scrape_classroom

ACTIVITIES = [scrape_classroom, download_classroom_video]

__all__ = [
    'ACTIVITIES',
    'download_classroom_video',
    'scrape_classroom',
]
