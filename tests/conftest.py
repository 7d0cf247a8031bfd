"""Pytest configuration and fixtures.

Test Markers:
    - Default: Unit tests run automatically
    - @pytest.mark.manual: Integration tests against a real browser or Temporal server

Run commands:
    pytest                          # Run unit tests only (default)
    pytest -m manual                # Run manual/integration tests
    pytest -m ""                    # Run ALL tests (no filter)
"""

import json
from pathlib import Path

import pytest
from faker import Faker

from app.core.errors import BrowserActionError


@pytest.fixture(scope='session')
def faker() -> Faker:
    return Faker()


# =============================================================================
# Cookie Fixtures
# =============================================================================


@pytest.fixture
def json_cookie_records() -> list[dict]:
    """Two records in the JSON export layout."""
    return [
        {
            'host': '.skool.com',
            'name': 'test_cookie',
            'value': 'test_value',
            'path': '/',
            'expiry': 1700000000,
            'isSecure': 1,
            'isHttpOnly': 1,
            'sameSite': 0,
        },
        {
            'host': 'www.skool.com',
            'name': 'another_cookie',
            'value': 'another_value',
            'path': '/path',
            'expiry': 1800000000,
            'isSecure': 0,
            'isHttpOnly': 0,
            'sameSite': 1,
        },
    ]


@pytest.fixture
def json_cookies_file(tmp_path: Path, json_cookie_records: list[dict]) -> Path:
    path = tmp_path / 'cookies.json'
    path.write_text(json.dumps(json_cookie_records), encoding='utf-8')
    return path


@pytest.fixture
def netscape_cookies_file(tmp_path: Path) -> Path:
    path = tmp_path / 'cookies.txt'
    path.write_text(
        '# Netscape HTTP Cookie File\n.skool.com\tTRUE\t/\tTRUE\t1700000000\tauth_token\tabc\n',
        encoding='utf-8',
    )
    return path


# =============================================================================
# Browser Session Fixtures
# =============================================================================


class FakeBrowserSession:
    """In-memory stand-in for a connected browser session.

    Navigation follows ``redirects``; selectors listed in ``missing`` behave
    like elements that never appear.
    """

    def __init__(
        self,
        html: str = '',
        logged_in: bool = True,
        missing: set[str] | None = None,
        redirects: dict[str, str] | None = None,
    ) -> None:
        self.html = html
        self.logged_in = logged_in
        self.missing = missing or set()
        self.redirects = redirects or {}
        self.url = 'about:blank'
        self.calls: list[tuple] = []
        self.cookies: list = []
        self.headers: dict[str, str] = {}
        self.entered = False
        self.closed = False

    async def __aenter__(self) -> 'FakeBrowserSession':
        self.entered = True
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        self.closed = True

    async def set_cookies(self, cookies) -> None:
        self.calls.append(('set_cookies', len(cookies)))
        self.cookies = list(cookies)

    async def set_extra_headers(self, headers: dict[str, str]) -> None:
        self.calls.append(('set_extra_headers',))
        self.headers = dict(headers)

    async def navigate(self, url: str) -> None:
        self.calls.append(('navigate', url))
        self.url = self.redirects.get(url, url)

    def current_url(self) -> str:
        return self.url

    async def content(self) -> str:
        self.calls.append(('content',))
        return self.html

    async def evaluate(self, expression: str):
        self.calls.append(('evaluate',))
        return self.logged_in

    async def click(self, selector: str, timeout: float) -> None:
        self.calls.append(('click', selector))
        if selector in self.missing:
            raise BrowserActionError(f'waiting for {selector} failed: Timeout {timeout * 1000:g}ms exceeded')

    async def fill(self, selector: str, value: str, timeout: float) -> None:
        self.calls.append(('fill', selector, value))
        if selector in self.missing:
            raise BrowserActionError(f'waiting for {selector} failed: Timeout {timeout * 1000:g}ms exceeded')

    async def sleep(self, seconds: float) -> None:
        self.calls.append(('sleep', seconds))


@pytest.fixture
def fake_session_cls() -> type[FakeBrowserSession]:
    return FakeBrowserSession


@pytest.fixture
def classroom_html() -> str:
    """Rendered classroom page with a nested course tree."""
    state = {
        'props': {
            'pageProps': {
                'course': {
                    'course': {'metadata': {'title': 'Course'}},
                    'children': [
                        {
                            'course': {'metadata': {'videoLink': 'https://www.loom.com/share/abc123?sid=1'}},
                            'children': [
                                {
                                    'course': {'metadata': {'videoLink': 'https://youtu.be/dQw4w9WgXcQ'}},
                                    'children': [],
                                },
                            ],
                        },
                        {'course': {'metadata': {'videoLink': 'https://www.loom.com/embed/abc123'}}},
                    ],
                }
            }
        }
    }
    return (
        '<html><head>'
        f'<script id="__NEXT_DATA__" type="application/json">{json.dumps(state)}</script>'
        '</head><body></body></html>'
    )
