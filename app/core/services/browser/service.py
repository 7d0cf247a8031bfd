"""Browser session factory.

Selects the session strategy once, from the resolved executable's family.
"""

from app.core.services.browser.base_service import BrowserSessionInterface
from app.core.services.browser.discovery import find_browser
from app.core.services.browser.schemas import BrowserFamily, BrowserTarget


def resolve_target(browser_path: str | None = None, headless: bool = True) -> BrowserTarget:
    """Find the browser executable and describe how to drive it.

    Raises:
        BrowserNotFoundError: If no usable browser exists
    """
    return BrowserTarget.from_executable(find_browser(browser_path), headless=headless)


def get_browser_session(target: BrowserTarget, lifetime_seconds: float | None = None) -> BrowserSessionInterface:
    """Get a browser session for the target's family.

    Args:
        target: Resolved browser executable
        lifetime_seconds: Upper bound for the whole session (defaults to BROWSER_TIMEOUT_SECONDS)

    Returns:
        BrowserSessionInterface implementation, not yet set up
    """
    if target.family == BrowserFamily.FIREFOX:
        from app.core.services.browser.providers.firefox.service import FirefoxBrowserSession

        return FirefoxBrowserSession(target, lifetime_seconds=lifetime_seconds)
    if target.family == BrowserFamily.CHROMIUM:
        from app.core.services.browser.providers.chromium.service import ChromiumBrowserSession

        return ChromiumBrowserSession(target, lifetime_seconds=lifetime_seconds)
    raise ValueError(f'Unsupported browser family: {target.family}')
