"""Firefox session.

Firefox cannot be launched by Playwright's Chromium launcher, so the process
is spawned here with a throwaway profile and a remote-debugging port. Once
``/json/version`` reports a debugger URL the session attaches to it over the
remote-debugging protocol.
"""

import asyncio
import shutil
from pathlib import Path

import aiohttp
import structlog
from playwright.async_api import Browser, BrowserContext, Playwright

from app.core.configs import app_config
from app.core.errors import BrowserStartupError, ProtocolTimeoutError
from app.core.services.browser.base_service import BrowserSessionInterface
from app.core.services.browser.providers.firefox.profile import build_command, create_profile, find_free_port

logger = structlog.get_logger(__name__)

# localhost may resolve to ::1 while Firefox listens on 127.0.0.1, or the other way round
DEBUGGER_HOSTS = ('127.0.0.1', 'localhost')


async def fetch_debugger_url(session: aiohttp.ClientSession, url: str) -> str | None:
    """Return the ``webSocketDebuggerUrl`` reported at ``url``, if any."""
    try:
        async with session.get(url) as response:
            info = await response.json(content_type=None)
    except (aiohttp.ClientError, asyncio.TimeoutError, ValueError):
        return None

    if not isinstance(info, dict):
        return None
    ws_url = info.get('webSocketDebuggerUrl')
    if isinstance(ws_url, str) and ws_url:
        return ws_url
    return None


async def wait_for_debugger_url(
    port: int,
    timeout: float | None = None,
    poll_interval: float | None = None,
    request_timeout: float | None = None,
) -> str:
    """Poll the remote-debugging status endpoint until it reports a debugger URL.

    Args:
        port: Remote-debugging port Firefox was started with
        timeout: Overall deadline in seconds
        poll_interval: Delay between polling rounds in seconds
        request_timeout: Per-request timeout in seconds

    Returns:
        The WebSocket debugger URL

    Raises:
        ProtocolTimeoutError: If no debugger URL appeared before the deadline
    """
    timeout = timeout if timeout is not None else app_config.FIREFOX_STARTUP_TIMEOUT_SECONDS
    poll_interval = poll_interval if poll_interval is not None else app_config.FIREFOX_POLL_INTERVAL_SECONDS
    request_timeout = request_timeout if request_timeout is not None else app_config.FIREFOX_REQUEST_TIMEOUT_SECONDS

    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout

    async with aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=request_timeout)) as session:
        while loop.time() < deadline:
            for host in DEBUGGER_HOSTS:
                ws_url = await fetch_debugger_url(session, f'http://{host}:{port}/json/version')
                if ws_url:
                    logger.debug('Firefox remote debugging ready', host=host, port=port)
                    return ws_url
            await asyncio.sleep(poll_interval)

    raise ProtocolTimeoutError(f'timed out waiting for Firefox remote debugging on port {port}')


class FirefoxBrowserSession(BrowserSessionInterface):
    """Browser session for Firefox, spawned manually and attached over the debugging port."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.port: int | None = None
        self.profile_dir: Path | None = None
        self._process: asyncio.subprocess.Process | None = None

    async def _spawn(self) -> None:
        self.port = find_free_port()
        try:
            self.profile_dir = create_profile()
        except OSError as e:
            raise BrowserStartupError(f'could not create Firefox profile: {e}') from e

        command = build_command(self.target.executable_path, self.port, self.profile_dir, self.target.headless)
        logger.debug('Starting Firefox', command=command)

        try:
            self._process = await asyncio.create_subprocess_exec(
                *command,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.DEVNULL,
            )
        except OSError as e:
            raise BrowserStartupError(f'could not start Firefox: {e}') from e

    async def _connect(self, playwright: Playwright) -> Browser:
        await self._spawn()
        assert self.port is not None

        try:
            ws_url = await wait_for_debugger_url(self.port)
        except ProtocolTimeoutError as e:
            raise ProtocolTimeoutError(f'Firefox remote debugging not ready: {e}') from e

        return await playwright.chromium.connect_over_cdp(ws_url, timeout=self.lifetime_seconds * 1000)

    async def _new_context(self, browser: Browser) -> BrowserContext:
        # Attached browsers already expose a default context
        if browser.contexts:
            self._owns_context = False
            return browser.contexts[0]
        return await super()._new_context(browser)

    async def _release_resources(self) -> None:
        process, self._process = self._process, None
        if process is not None and process.returncode is None:
            try:
                process.kill()
            except ProcessLookupError:
                pass
            await process.wait()

        profile_dir, self.profile_dir = self.profile_dir, None
        if profile_dir is not None:
            shutil.rmtree(profile_dir, ignore_errors=True)
