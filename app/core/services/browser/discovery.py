"""Browser executable discovery.

Resolves an explicit path or command name, or walks a per-platform list of
well-known Chromium-family and Firefox installs.
"""

import os
import shutil
import sys
from pathlib import Path

import structlog

from app.core.errors import BrowserNotFoundError

logger = structlog.get_logger(__name__)

LINUX_CANDIDATES = [
    'chromium-browser',
    'chromium',
    'google-chrome',
    'google-chrome-stable',
    'google-chrome-beta',
    'microsoft-edge',
    'microsoft-edge-stable',
    'brave-browser',
    'firefox',
    'firefox-esr',
]

MACOS_CANDIDATES = [
    '/Applications/Google Chrome.app/Contents/MacOS/Google Chrome',
    '/Applications/Chromium.app/Contents/MacOS/Chromium',
    '/Applications/Microsoft Edge.app/Contents/MacOS/Microsoft Edge',
    '/Applications/Brave Browser.app/Contents/MacOS/Brave Browser',
    '/Applications/Arc.app/Contents/MacOS/Arc',
    '/Applications/Firefox.app/Contents/MacOS/firefox',
]


def _windows_candidates() -> list[str]:
    program_files = os.environ.get('PROGRAMFILES') or r'C:\Program Files'
    program_files_x86 = os.environ.get('PROGRAMFILES(X86)') or r'C:\Program Files (x86)'
    local_app_data = os.environ.get('LOCALAPPDATA') or os.path.join(
        os.environ.get('USERPROFILE', ''), 'AppData', 'Local'
    )

    return [
        os.path.join(program_files, 'Microsoft', 'Edge', 'Application', 'msedge.exe'),
        os.path.join(program_files_x86, 'Microsoft', 'Edge', 'Application', 'msedge.exe'),
        os.path.join(program_files, 'Google', 'Chrome', 'Application', 'chrome.exe'),
        os.path.join(program_files_x86, 'Google', 'Chrome', 'Application', 'chrome.exe'),
        os.path.join(local_app_data, 'Google', 'Chrome', 'Application', 'chrome.exe'),
        os.path.join(program_files, 'Chromium', 'Application', 'chrome.exe'),
        os.path.join(program_files_x86, 'Chromium', 'Application', 'chrome.exe'),
        os.path.join(program_files, 'BraveSoftware', 'Brave-Browser', 'Application', 'brave.exe'),
        os.path.join(program_files_x86, 'BraveSoftware', 'Brave-Browser', 'Application', 'brave.exe'),
        os.path.join(local_app_data, 'BraveSoftware', 'Brave-Browser', 'Application', 'brave.exe'),
        os.path.join(program_files, 'Mozilla Firefox', 'firefox.exe'),
        os.path.join(program_files_x86, 'Mozilla Firefox', 'firefox.exe'),
    ]


def get_browser_candidates(platform: str | None = None) -> list[str]:
    """Return candidate browser locations in preference order for a platform."""
    platform = platform or sys.platform
    if platform.startswith('win'):
        return _windows_candidates()
    if platform == 'darwin':
        return list(MACOS_CANDIDATES)
    return list(LINUX_CANDIDATES)


def _resolve(candidate: str) -> str | None:
    if os.path.isabs(candidate):
        return candidate if Path(candidate).exists() else None
    return shutil.which(candidate)


def find_browser(custom_path: str | None = None, platform: str | None = None) -> str:
    """Find a usable browser executable.

    Args:
        custom_path: Absolute path or command name given by the user
        platform: Override for ``sys.platform`` (used by tests)

    Returns:
        Path of the browser executable

    Raises:
        BrowserNotFoundError: If the custom browser or no candidate is found
    """
    if custom_path:
        resolved = _resolve(custom_path)
        if resolved is None:
            raise BrowserNotFoundError(f'specified browser not found: {custom_path}')
        return resolved

    for candidate in get_browser_candidates(platform):
        resolved = _resolve(candidate)
        if resolved is not None:
            logger.debug('Found browser candidate', path=resolved)
            return resolved

    raise BrowserNotFoundError(
        'no supported browser found. '
        'Supported browsers: Microsoft Edge, Google Chrome, Chromium, Brave, Arc, Firefox. '
        'Install one of them, or pass an explicit path with --browser=/path/to/browser'
    )
