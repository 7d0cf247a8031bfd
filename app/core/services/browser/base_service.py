"""Browser session interface.

A session owns one Playwright driver, one browser connection, one context and
one page. Subclasses only decide how the browser connection is obtained
(``_connect``) and what extra resources have to be released afterwards
(``_release_resources``).

Every protocol call made through the session is bounded by the session
lifetime: once it has elapsed, calls raise ``ProtocolTimeoutError`` instead of
hanging.
"""

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Awaitable
from typing import Any, TypeVar

import structlog
from playwright.async_api import Browser, BrowserContext, Page, Playwright, async_playwright
from playwright.async_api import Error as PlaywrightError

from app.core.configs import app_config
from app.core.errors import (
    BrowserActionError,
    BrowserStartupError,
    ClassroomError,
    CookieInjectionError,
    ProtocolTimeoutError,
)
from app.core.services.browser.schemas import BrowserTarget, SessionState
from app.core.services.cookies.schemas import Cookie

logger = structlog.get_logger(__name__)

T = TypeVar('T')


class BrowserSessionInterface(ABC):
    """Interface shared by the Chromium and Firefox session strategies.

    Usage:
        async with get_browser_session(target) as session:
            await session.navigate('https://www.skool.com/')
            html = await session.content()
    """

    def __init__(self, target: BrowserTarget, lifetime_seconds: float | None = None) -> None:
        self.target = target
        self.state = SessionState.UNINITIALIZED
        self.lifetime_seconds = lifetime_seconds or app_config.BROWSER_TIMEOUT_SECONDS
        self._deadline: float | None = None

        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._context: BrowserContext | None = None
        self._page: Page | None = None
        self._owns_context = True

    async def __aenter__(self) -> 'BrowserSessionInterface':
        await self.setup()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    # ==========================================================================
    # Lifecycle
    # ==========================================================================

    @abstractmethod
    async def _connect(self, playwright: Playwright) -> Browser:
        """Launch or attach to the browser and return the connection."""
        raise NotImplementedError

    async def _new_context(self, browser: Browser) -> BrowserContext:
        return await browser.new_context(
            user_agent=app_config.BROWSER_USER_AGENT,
            viewport={
                'width': app_config.BROWSER_WINDOW_WIDTH,
                'height': app_config.BROWSER_WINDOW_HEIGHT,
            },
        )

    async def _release_resources(self) -> None:
        """Release anything acquired outside Playwright (processes, directories)."""

    async def setup(self) -> None:
        """Start the browser and open a page.

        Partially acquired resources are released before the error propagates.

        Raises:
            BrowserStartupError: If the browser cannot be launched or connected to
            ProtocolTimeoutError: If the remote-debugging endpoint never became ready
        """
        if self.state != SessionState.UNINITIALIZED:
            raise RuntimeError(f'Browser session cannot be set up from state {self.state.value}')

        self.state = SessionState.CONFIGURING
        logger.info('Starting browser', family=self.target.family.value, path=self.target.executable_path)

        try:
            self._playwright = await async_playwright().start()
            self._browser = await self._connect(self._playwright)
            self._context = await self._new_context(self._browser)
            self._page = await self._context.new_page()
        except ClassroomError:
            await self.close()
            raise
        except Exception as e:
            await self.close()
            raise BrowserStartupError(f'could not start {self.target.family.value} browser: {e}') from e
        except BaseException:
            # Cancelled mid-setup; __aexit__ will not run, so release here
            await asyncio.shield(self.close())
            raise

        self._deadline = asyncio.get_running_loop().time() + self.lifetime_seconds
        self.state = SessionState.CONNECTED
        logger.debug('Browser session connected', lifetime_seconds=self.lifetime_seconds)

    async def close(self) -> None:
        """Release all resources in reverse order of acquisition. Safe to call repeatedly."""
        if self.state == SessionState.CLOSED:
            return

        self.state = SessionState.CLOSED
        self._deadline = None

        if self._context is not None and self._owns_context:
            await self._release('context', self._context.close)
        if self._browser is not None:
            await self._release('browser connection', self._browser.close)
        if self._playwright is not None:
            await self._release('playwright driver', self._playwright.stop)
        await self._release('browser resources', self._release_resources)

        self._page = None
        self._context = None
        self._browser = None
        self._playwright = None
        logger.debug('Browser session closed')

    @staticmethod
    async def _release(what: str, release: Any) -> None:
        try:
            await release()
        except Exception as e:
            logger.warning('Failed to release browser resource', resource=what, error=str(e))

    # ==========================================================================
    # Bounded protocol calls
    # ==========================================================================

    def _require_page(self) -> Page:
        if self.state != SessionState.CONNECTED or self._page is None:
            raise BrowserActionError(f'browser session is not connected (state: {self.state.value})')
        return self._page

    def remaining_seconds(self) -> float:
        """Seconds left before the session lifetime is exhausted."""
        if self._deadline is None:
            return 0.0
        return max(self._deadline - asyncio.get_running_loop().time(), 0.0)

    async def _bounded(self, awaitable: Awaitable[T], action: str) -> T:
        remaining = self.remaining_seconds()
        if remaining <= 0:
            if asyncio.iscoroutine(awaitable):
                awaitable.close()
            raise ProtocolTimeoutError(f'browser session exceeded its {self.lifetime_seconds:g}s lifetime')

        try:
            return await asyncio.wait_for(awaitable, timeout=remaining)
        except asyncio.TimeoutError as e:
            raise ProtocolTimeoutError(
                f'{action} did not finish within the {self.lifetime_seconds:g}s session lifetime'
            ) from e
        except PlaywrightError as e:
            raise BrowserActionError(f'{action} failed: {e.message}') from e

    # ==========================================================================
    # Operations
    # ==========================================================================

    async def set_cookies(self, cookies: list[Cookie]) -> None:
        """Inject all cookies in one batch.

        Raises:
            CookieInjectionError: If the browser rejects the batch
        """
        self._require_page()
        assert self._context is not None
        try:
            await self._bounded(
                self._context.add_cookies([cookie.to_playwright() for cookie in cookies]),  # type: ignore[list-item]
                'setting cookies',
            )
        except BrowserActionError as e:
            raise CookieInjectionError(f'error setting cookies: {e}') from e
        logger.debug('Cookies injected', count=len(cookies))

    async def set_extra_headers(self, headers: dict[str, str]) -> None:
        self._require_page()
        assert self._context is not None
        await self._bounded(self._context.set_extra_http_headers(headers), 'setting headers')

    async def navigate(self, url: str) -> None:
        page = self._require_page()
        await self._bounded(page.goto(url), f'navigating to {url}')

    def current_url(self) -> str:
        return self._require_page().url

    async def content(self) -> str:
        """Return the fully rendered page markup."""
        page = self._require_page()
        return await self._bounded(page.content(), 'capturing page markup')

    async def evaluate(self, expression: str) -> Any:
        page = self._require_page()
        return await self._bounded(page.evaluate(expression), 'evaluating script')

    async def click(self, selector: str, timeout: float) -> None:
        """Wait for the first element matching ``selector`` to be visible and click it."""
        page = self._require_page()
        locator = page.locator(selector).first
        await self._bounded(locator.wait_for(state='visible', timeout=timeout * 1000), f'waiting for {selector}')
        await self._bounded(locator.click(timeout=timeout * 1000), f'clicking {selector}')

    async def fill(self, selector: str, value: str, timeout: float) -> None:
        """Wait for the first element matching ``selector`` to be visible and type ``value`` into it."""
        page = self._require_page()
        locator = page.locator(selector).first
        await self._bounded(locator.wait_for(state='visible', timeout=timeout * 1000), f'waiting for {selector}')
        await self._bounded(locator.fill(value, timeout=timeout * 1000), f'filling {selector}')

    async def sleep(self, seconds: float) -> None:
        """Fixed settle wait, still bounded by the session lifetime."""
        self._require_page()
        await self._bounded(asyncio.sleep(seconds), f'waiting {seconds:g}s')
