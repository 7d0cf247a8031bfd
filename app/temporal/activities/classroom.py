"""Classroom activities.

Scraping is one activity (it owns a single browser session); each video is
downloaded by its own activity so a failed download can be retried, or given
up on, without touching the others.
"""

from temporalio import activity

from app.core.services.classroom.downloader import get_video_downloader
from app.core.services.classroom.service import get_classroom_service
from app.temporal.schemas import (
    DownloadVideoInput,
    DownloadVideoOutput,
    ScrapeClassroomInput,
    ScrapeClassroomOutput,
)


@activity.defn
async def scrape_classroom(input_data: ScrapeClassroomInput) -> ScrapeClassroomOutput:
    """Render the classroom behind authentication and extract its video URLs.

    Args:
        input_data: ScrapeClassroomInput with URL and credentials

    Returns:
        ScrapeClassroomOutput with canonical video URLs

    Raises:
        ClassroomError: If any pipeline stage fails
    """
    activity.logger.info(f'Scraping classroom: {input_data.url}')

    service = get_classroom_service()
    urls = await service.scrape(input_data)

    activity.logger.info(f'Found {len(urls)} video(s)')
    return ScrapeClassroomOutput(urls=urls)


@activity.defn
async def download_classroom_video(input_data: DownloadVideoInput) -> DownloadVideoOutput:
    """Download one video with yt-dlp.

    Raises:
        DownloadError: If the downloader fails
    """
    activity.logger.info(f'Downloading video: {input_data.url}')

    downloader = get_video_downloader()
    result = await downloader.download(
        input_data.url,
        input_data.output_dir,
        cookies_file=input_data.cookies_file,
    )

    return DownloadVideoOutput(url=result.url, output_dir=result.output_dir)
