"""Tests for the classroom extraction service."""

from unittest.mock import AsyncMock, patch

import pytest
from pydantic import ValidationError

from app.core.errors import AuthenticationError, CookieFileError, DownloadError
from app.core.services.browser import BrowserTarget
from app.core.services.classroom import (
    ClassroomExtractionService,
    DownloadResult,
    ScrapeRequest,
    get_classroom_service,
)

CLASSROOM_URL = 'https://www.skool.com/group/classroom/abc'
TARGET = BrowserTarget.from_executable('/usr/bin/chromium')


@pytest.fixture(autouse=True)
def resolved_browser():
    with patch('app.core.services.classroom.service.resolve_target', return_value=TARGET) as mock:
        yield mock


class FakeDownloader:
    def __init__(self, failing: set[str] | None = None) -> None:
        self.failing = failing or set()
        self.calls: list[tuple] = []

    async def download(self, url, output_dir, cookies_file=None):
        self.calls.append((url, str(output_dir), cookies_file))
        if url in self.failing:
            raise DownloadError(f'yt-dlp failed with code 1 for {url}')
        return DownloadResult(url=url, success=True, output_dir=str(output_dir))


class TestScrapeRequest:
    """Tests for request validation."""

    def test_requires_credentials(self):
        with pytest.raises(ValidationError, match='cookies file or email and password'):
            ScrapeRequest(url=CLASSROOM_URL)

    def test_email_without_password(self):
        with pytest.raises(ValidationError):
            ScrapeRequest(url=CLASSROOM_URL, email='user@example.com')

    def test_defaults(self):
        request = ScrapeRequest(url=CLASSROOM_URL, cookies_file='cookies.json')

        assert request.wait_seconds == 2
        assert request.headless is True
        assert request.uses_login is False

    def test_negative_wait_rejected(self):
        with pytest.raises(ValidationError):
            ScrapeRequest(url=CLASSROOM_URL, cookies_file='cookies.json', wait_seconds=-1)


class TestScrape:
    """Tests for the scrape pipeline."""

    async def test_cookie_session(self, fake_session_cls, json_cookies_file, classroom_html):
        session = fake_session_cls(html=classroom_html)
        targets = []

        def factory(target):
            targets.append(target)
            return session

        service = ClassroomExtractionService(session_factory=factory)
        request = ScrapeRequest(url=CLASSROOM_URL, cookies_file=str(json_cookies_file), wait_seconds=5)

        urls = await service.scrape(request)

        assert urls == [
            'https://www.loom.com/share/abc123',
            'https://www.youtube.com/watch?v=dQw4w9WgXcQ',
        ]
        assert targets == [TARGET]
        assert [cookie.name for cookie in session.cookies] == ['test_cookie', 'another_cookie']
        assert ('navigate', CLASSROOM_URL) in session.calls
        assert ('sleep', 5) in session.calls
        assert session.closed

    async def test_login_takes_precedence_over_cookies(self, fake_session_cls, classroom_html):
        """Credentials win even when the cookies file does not exist."""
        session = fake_session_cls(html=classroom_html)
        service = ClassroomExtractionService(session_factory=lambda target: session)
        request = ScrapeRequest(
            url=CLASSROOM_URL,
            email='user@example.com',
            password='secret',
            cookies_file='/nonexistent/cookies.json',
        )

        urls = await service.scrape(request)

        assert len(urls) == 2
        assert session.cookies == []
        assert any(call[0] == 'fill' for call in session.calls)

    async def test_bad_cookies_file_fails_before_browser_starts(self, resolved_browser):
        factory_calls = []
        service = ClassroomExtractionService(session_factory=factory_calls.append)
        request = ScrapeRequest(url=CLASSROOM_URL, cookies_file='/nonexistent/cookies.json')

        with pytest.raises(CookieFileError):
            await service.scrape(request)

        assert factory_calls == []
        resolved_browser.assert_not_called()

    async def test_session_closed_on_failure(self, fake_session_cls):
        session = fake_session_cls(logged_in=False)
        service = ClassroomExtractionService(session_factory=lambda target: session)
        request = ScrapeRequest(url=CLASSROOM_URL, email='user@example.com', password='wrong')

        with pytest.raises(AuthenticationError):
            await service.scrape(request)

        assert session.closed

    async def test_no_videos(self, fake_session_cls, netscape_cookies_file):
        session = fake_session_cls(html='<html><body>Nothing here</body></html>')
        service = ClassroomExtractionService(session_factory=lambda target: session)
        request = ScrapeRequest(url=CLASSROOM_URL, cookies_file=str(netscape_cookies_file))

        assert await service.scrape(request) == []


class TestDownloads:
    """Tests for downloading the extracted URLs."""

    async def test_one_failure_does_not_stop_the_rest(self, tmp_path):
        urls = [
            'https://www.loom.com/share/one',
            'https://www.loom.com/share/two',
            'https://www.youtube.com/watch?v=aaaaaaaaaaa',
        ]
        downloader = FakeDownloader(failing={urls[1]})
        service = ClassroomExtractionService(downloader=downloader)

        results = await service.download_all(urls, tmp_path, cookies_file='cookies.json')

        assert [result.success for result in results] == [True, False, True]
        assert 'code 1' in results[1].error
        assert [call[0] for call in downloader.calls] == urls
        assert all(call[2] == 'cookies.json' for call in downloader.calls)

    async def test_extract_and_download(self, fake_session_cls, json_cookies_file, classroom_html, tmp_path):
        downloader = FakeDownloader(failing={'https://www.youtube.com/watch?v=dQw4w9WgXcQ'})
        service = ClassroomExtractionService(
            downloader=downloader,
            session_factory=lambda target: fake_session_cls(html=classroom_html),
        )
        request = ScrapeRequest(url=CLASSROOM_URL, cookies_file=str(json_cookies_file))

        report = await service.extract_and_download(request, tmp_path)

        assert report.urls == ['https://www.loom.com/share/abc123', 'https://www.youtube.com/watch?v=dQw4w9WgXcQ']
        assert [result.url for result in report.succeeded] == ['https://www.loom.com/share/abc123']
        assert [result.url for result in report.failed] == ['https://www.youtube.com/watch?v=dQw4w9WgXcQ']
        assert downloader.calls[0][2] == str(json_cookies_file)

    async def test_nothing_to_download(self, tmp_path):
        downloader = FakeDownloader()
        service = ClassroomExtractionService(downloader=downloader)
        request = ScrapeRequest(url=CLASSROOM_URL, cookies_file='cookies.txt')

        with patch.object(service, 'scrape', AsyncMock(return_value=[])):
            report = await service.extract_and_download(request, tmp_path)

        assert report.urls == []
        assert downloader.calls == []

    def test_factory(self):
        assert isinstance(get_classroom_service(), ClassroomExtractionService)
