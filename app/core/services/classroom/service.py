"""Classroom extraction service - main service interface."""

from collections.abc import Callable
from pathlib import Path

import structlog

from app.core.errors import DownloadError
from app.core.services.browser.base_service import BrowserSessionInterface
from app.core.services.browser.schemas import BrowserTarget
from app.core.services.browser.service import get_browser_session, resolve_target
from app.core.services.classroom.downloader import VideoDownloader
from app.core.services.classroom.extractor import extract_video_urls
from app.core.services.classroom.renderer import login, navigate_and_capture, prepare_cookie_session
from app.core.services.classroom.schemas import DownloadReport, DownloadResult, ScrapeRequest
from app.core.services.cookies.service import parse_cookies_file

logger = structlog.get_logger(__name__)

SessionFactory = Callable[[BrowserTarget], BrowserSessionInterface]


class ClassroomExtractionService:
    """Service for extracting and downloading videos from classroom pages.

    Uses browser automation to render the classroom behind authentication,
    then hands each video URL to the downloader.
    """

    def __init__(
        self,
        downloader: VideoDownloader | None = None,
        session_factory: SessionFactory | None = None,
    ) -> None:
        """Initialize extraction service.

        Args:
            downloader: Downloader used by extract_and_download
            session_factory: Builds a browser session for a resolved target
        """
        self.downloader = downloader or VideoDownloader()
        self.session_factory = session_factory or get_browser_session

    async def scrape(self, request: ScrapeRequest) -> list[str]:
        """Render the classroom page behind authentication and extract its video URLs.

        Complete flow:
        1. Resolve the browser and start a session
        2. Log in, or inject cookies from the cookies file
        3. Navigate to the classroom and capture the rendered markup
        4. Extract canonical video URLs

        Any failure aborts the run; the session is always torn down.

        Raises:
            ClassroomError: Subclass describing the failed stage
        """
        logger.info('Scraping videos', url=request.url)

        # Fail on a bad cookies file before a browser is started
        cookies = None if request.uses_login else parse_cookies_file(request.cookies_file)

        target = resolve_target(request.browser_path, request.headless)
        logger.info('Using browser', path=target.executable_path, family=target.family.value)

        async with self.session_factory(target) as session:
            if request.uses_login:
                await login(session, request.email, request.password)
            else:
                await prepare_cookie_session(session, cookies)

            html = await navigate_and_capture(session, request.url, request.wait_seconds)

        urls = extract_video_urls(html)
        if not urls:
            logger.warning('No videos found on the page')
        return urls

    async def download_all(
        self,
        urls: list[str],
        output_dir: str | Path,
        cookies_file: str | None = None,
    ) -> list[DownloadResult]:
        """Download every URL; one failed download does not stop the others."""
        results: list[DownloadResult] = []

        for index, url in enumerate(urls, start=1):
            logger.info('Downloading video', index=index, total=len(urls), url=url)
            try:
                result = await self.downloader.download(url, output_dir, cookies_file=cookies_file)
            except DownloadError as e:
                logger.error('Download failed', url=url, error=str(e))
                result = DownloadResult(url=url, success=False, output_dir=str(output_dir), error=str(e))
            results.append(result)

        return results

    async def extract_and_download(self, request: ScrapeRequest, output_dir: str | Path) -> DownloadReport:
        """Scrape the classroom, then download each video found.

        Raises:
            ClassroomError: If scraping fails. Download failures are reported per URL instead.
        """
        urls = await self.scrape(request)
        if not urls:
            return DownloadReport(urls=[])

        logger.info('Found videos', count=len(urls))
        results = await self.download_all(urls, output_dir, cookies_file=request.cookies_file)

        report = DownloadReport(urls=urls, results=results)
        logger.info(
            'Download process completed',
            succeeded=len(report.succeeded),
            failed=len(report.failed),
        )
        return report


def get_classroom_service() -> ClassroomExtractionService:
    """Get a classroom extraction service instance."""
    return ClassroomExtractionService()
