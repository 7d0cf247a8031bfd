"""Chromium-family session (Chrome, Chromium, Edge, Brave, Arc).

Playwright launches the executable itself and owns the process lifecycle.
"""

import structlog
from playwright.async_api import Browser, Playwright

from app.core.configs import app_config
from app.core.services.browser.base_service import BrowserSessionInterface

logger = structlog.get_logger(__name__)


class ChromiumBrowserSession(BrowserSessionInterface):
    """Browser session for Chromium-based browsers."""

    def launch_args(self) -> list[str]:
        """Fixed command-line flags passed to the browser."""
        return [
            '--disable-gpu',
            '--no-sandbox',
            f'--window-size={app_config.BROWSER_WINDOW_WIDTH},{app_config.BROWSER_WINDOW_HEIGHT}',
        ]

    async def _connect(self, playwright: Playwright) -> Browser:
        logger.debug('Launching Chromium', path=self.target.executable_path, headless=self.target.headless)
        return await playwright.chromium.launch(
            executable_path=self.target.executable_path,
            headless=self.target.headless,
            args=self.launch_args(),
            timeout=self.lifetime_seconds * 1000,
        )
