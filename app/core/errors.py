"""Errors raised by the classroom extraction pipeline.

Every stage raises a subclass of ``ClassroomError`` so callers can surface a
single descriptive message for the whole run. Only ``DownloadError`` is
treated as recoverable (per URL) by the orchestrator.
"""


class ClassroomError(Exception):
    """Base class for all pipeline errors."""


class CookieFileError(ClassroomError):
    """A cookie file could not be read or written."""


class CookieParseError(ClassroomError):
    """A cookie file could not be decoded."""


class CookieInjectionError(ClassroomError):
    """The browser rejected the cookie batch."""


class PageStateError(ClassroomError):
    """The embedded page-state blob is missing or malformed."""


class BrowserNotFoundError(ClassroomError):
    """No usable browser executable was found."""


class BrowserStartupError(ClassroomError):
    """The browser could not be launched or connected to."""


class ProtocolTimeoutError(ClassroomError):
    """The remote-debugging endpoint did not answer in time, or the session lifetime ran out."""


class BrowserActionError(ClassroomError):
    """A navigation, element or evaluation step failed in a live session."""


class AuthenticationError(ClassroomError):
    """Login did not succeed."""


class AccessDeniedError(ClassroomError):
    """The target page redirected to a public page."""


class DownloadError(ClassroomError):
    """The external downloader failed for a single URL."""
