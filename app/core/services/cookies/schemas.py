"""Cookie schemas.

``Cookie`` is the in-memory model shared by the browser session (which
injects it over the remote-debugging protocol) and the downloader cookie
file writer. ``JSONCookie`` mirrors one record of a JSON cookie export.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SameSite(str, Enum):
    """SameSite attribute of a cookie."""

    NONE = 'None'
    LAX = 'Lax'
    STRICT = 'Strict'
    UNSPECIFIED = 'Unspecified'


# JSON exports encode sameSite as a small integer
SAME_SITE_CODES = {
    1: SameSite.LAX,
    2: SameSite.STRICT,
    3: SameSite.NONE,
}


class CookieFormat(str, Enum):
    """Supported cookie file formats."""

    JSON = 'json'
    NETSCAPE = 'netscape'


class Cookie(BaseModel):
    """A session cookie. Immutable once constructed."""

    model_config = ConfigDict(frozen=True)

    domain: str = Field(..., description='Cookie domain without a leading dot')
    name: str
    value: str
    path: str = '/'
    secure: bool = False
    http_only: bool = False
    same_site: SameSite = SameSite.UNSPECIFIED
    expires: int | None = Field(None, description='Absolute expiry in epoch seconds; None for a session cookie')

    @field_validator('domain')
    @classmethod
    def _strip_leading_dot(cls, value: str) -> str:
        return value.removeprefix('.')

    @property
    def is_session(self) -> bool:
        return self.expires is None

    def to_playwright(self) -> dict[str, Any]:
        """Convert to the cookie dict accepted by ``BrowserContext.add_cookies``."""
        cookie: dict[str, Any] = {
            'name': self.name,
            'value': self.value,
            'domain': self.domain,
            'path': self.path or '/',
            'secure': self.secure,
            'httpOnly': self.http_only,
        }
        if self.same_site != SameSite.UNSPECIFIED:
            cookie['sameSite'] = self.same_site.value
        if self.expires is not None:
            cookie['expires'] = self.expires
        return cookie


class JSONCookie(BaseModel):
    """One record of a JSON cookie export (Firefox ``cookies.sqlite`` layout)."""

    model_config = ConfigDict(extra='ignore')

    host: str = ''
    name: str = ''
    value: str = ''
    path: str = ''
    expiry: int = 0
    isSecure: int = 0  # noqa: N815
    isHttpOnly: int = 0  # noqa: N815
    sameSite: int = 0  # noqa: N815

    def to_cookie(self) -> Cookie:
        """Convert to the in-memory model."""
        return Cookie(
            domain=self.host,
            name=self.name,
            value=self.value,
            path=self.path,
            secure=self.isSecure == 1,
            http_only=self.isHttpOnly == 1,
            same_site=SAME_SITE_CODES.get(self.sameSite, SameSite.UNSPECIFIED),
            expires=self.expiry if self.expiry > 0 else None,
        )
