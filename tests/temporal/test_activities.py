"""Tests for Temporal activities.

These tests run the actual activity code but with mocked services.
No Temporal server needed - activities are just regular async functions!

Run tests:
    pytest tests/temporal/test_activities.py -v
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from app.core.errors import AccessDeniedError, DownloadError
from app.core.services.classroom import DownloadResult
from app.temporal.schemas import DownloadVideoInput, ScrapeClassroomInput

CLASSROOM_URL = 'https://www.skool.com/group/classroom/abc'


class TestScrapeClassroomActivity:
    """Tests for the scrape activity."""

    async def test_returns_urls(self):
        service = MagicMock()
        service.scrape = AsyncMock(return_value=['https://www.loom.com/share/abc123'])

        with patch('app.temporal.activities.classroom.get_classroom_service', return_value=service):
            from app.temporal.activities.classroom import scrape_classroom

            with patch('temporalio.activity.logger'):
                result = await scrape_classroom(ScrapeClassroomInput(url=CLASSROOM_URL, cookies_file='cookies.json'))

        assert result.urls == ['https://www.loom.com/share/abc123']
        [request] = service.scrape.await_args.args
        assert request.cookies_file == 'cookies.json'

    async def test_propagates_pipeline_errors(self):
        service = MagicMock()
        service.scrape = AsyncMock(side_effect=AccessDeniedError('redirected to public page'))

        with patch('app.temporal.activities.classroom.get_classroom_service', return_value=service):
            from app.temporal.activities.classroom import scrape_classroom

            with patch('temporalio.activity.logger'):
                with pytest.raises(AccessDeniedError):
                    await scrape_classroom(ScrapeClassroomInput(url=CLASSROOM_URL, cookies_file='cookies.json'))


class TestDownloadVideoActivity:
    """Tests for the per-video download activity."""

    async def test_downloads_one_video(self, tmp_path):
        downloader = MagicMock()
        downloader.download = AsyncMock(
            return_value=DownloadResult(url='https://www.loom.com/share/abc123', success=True, output_dir=str(tmp_path))
        )

        with patch('app.temporal.activities.classroom.get_video_downloader', return_value=downloader):
            from app.temporal.activities.classroom import download_classroom_video

            with patch('temporalio.activity.logger'):
                result = await download_classroom_video(
                    DownloadVideoInput(
                        url='https://www.loom.com/share/abc123',
                        output_dir=str(tmp_path),
                        cookies_file='cookies.txt',
                    )
                )

        assert result.url == 'https://www.loom.com/share/abc123'
        downloader.download.assert_awaited_once_with(
            'https://www.loom.com/share/abc123',
            str(tmp_path),
            cookies_file='cookies.txt',
        )

    async def test_download_error_propagates(self, tmp_path):
        downloader = MagicMock()
        downloader.download = AsyncMock(side_effect=DownloadError('yt-dlp failed with code 1'))

        with patch('app.temporal.activities.classroom.get_video_downloader', return_value=downloader):
            from app.temporal.activities.classroom import download_classroom_video

            with patch('temporalio.activity.logger'):
                with pytest.raises(DownloadError):
                    await download_classroom_video(
                        DownloadVideoInput(url='https://www.loom.com/share/abc123', output_dir=str(tmp_path))
                    )
