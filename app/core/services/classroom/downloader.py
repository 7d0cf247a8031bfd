"""Video downloader backed by the external ``yt-dlp`` binary."""

import asyncio
import os
from pathlib import Path

import structlog

from app.core.configs import app_config
from app.core.errors import CookieFileError, CookieParseError, DownloadError
from app.core.services.classroom.schemas import DownloadResult
from app.core.services.cookies.service import convert_json_file_to_netscape

logger = structlog.get_logger(__name__)

OUTPUT_TEMPLATE = '%(title)s.%(ext)s'


class VideoDownloader:
    """Runs one downloader process per video URL."""

    def __init__(self, binary: str | None = None) -> None:
        self.binary = binary or app_config.DOWNLOADER_BINARY

    def build_command(self, url: str, output_dir: str | Path, cookies_path: str | Path | None = None) -> list[str]:
        """Build downloader arguments (without the binary itself).

        Args:
            url: Canonical video URL
            output_dir: Directory the video is written to
            cookies_path: Netscape cookies file, if any

        Returns:
            Downloader arguments
        """
        args = [
            '-o',
            os.path.join(str(output_dir), OUTPUT_TEMPLATE),
            '--no-warnings',
            url,
        ]
        if cookies_path:
            args = ['--cookies', str(cookies_path), *args]
        return args

    async def _run(self, args: list[str]) -> tuple[int, str]:
        """Run the downloader; progress goes straight to the terminal.

        Returns:
            Tuple of (returncode, stderr)
        """
        logger.debug(f'Running downloader: {self.binary} {" ".join(args)}')

        process = await asyncio.create_subprocess_exec(
            self.binary,
            *args,
            stderr=asyncio.subprocess.PIPE,
        )
        _, stderr = await process.communicate()
        return process.returncode or 0, stderr.decode(errors='replace') if stderr else ''

    async def download(
        self,
        url: str,
        output_dir: str | Path,
        cookies_file: str | Path | None = None,
    ) -> DownloadResult:
        """Download a single video.

        JSON cookie files are converted to a temporary Netscape file first,
        since that is the only format the downloader reads. The temporary file
        is removed once the download finishes or fails.

        Raises:
            DownloadError: If the cookies cannot be converted, the binary is
                missing or the downloader exits with a non-zero code
        """
        temp_cookies: Path | None = None
        cookies_path: Path | None = None

        try:
            if cookies_file:
                if Path(cookies_file).suffix.lower() == '.json':
                    try:
                        temp_cookies = convert_json_file_to_netscape(cookies_file)
                    except (CookieFileError, CookieParseError) as e:
                        raise DownloadError(f'error converting JSON cookies: {e}') from e
                    cookies_path = temp_cookies
                else:
                    cookies_path = Path(cookies_file)

            args = self.build_command(url, output_dir, cookies_path)
            logger.info('Starting video download', url=url, output_dir=str(output_dir))

            try:
                returncode, stderr = await self._run(args)
            except FileNotFoundError as e:
                raise DownloadError(f'{self.binary} not found, install it and make sure it is on PATH') from e

            if returncode != 0:
                raise DownloadError(f'{self.binary} failed with code {returncode} for {url}: {stderr.strip()}')

            logger.info('Download complete', url=url)
            return DownloadResult(
                url=url,
                success=True,
                output_dir=str(output_dir),
                command=[self.binary, *args],
            )
        finally:
            if temp_cookies is not None:
                temp_cookies.unlink(missing_ok=True)


def get_video_downloader() -> VideoDownloader:
    """Get a video downloader instance."""
    return VideoDownloader()
