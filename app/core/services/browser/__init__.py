"""Browser session service.

Drives a real browser over a remote-debugging protocol: Chromium-family
browsers are launched by Playwright, Firefox is spawned with a temporary
profile and attached to once its debugging endpoint is ready.
"""

from app.core.services.browser.base_service import BrowserSessionInterface
from app.core.services.browser.discovery import find_browser, get_browser_candidates
from app.core.services.browser.schemas import BrowserFamily, BrowserTarget, SessionState, detect_family
from app.core.services.browser.service import get_browser_session, resolve_target

__all__ = [
    'BrowserFamily',
    'BrowserSessionInterface',
    'BrowserTarget',
    'SessionState',
    'detect_family',
    'find_browser',
    'get_browser_candidates',
    'get_browser_session',
    'resolve_target',
]
