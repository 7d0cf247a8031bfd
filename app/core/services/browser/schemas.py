"""Browser service schemas."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class BrowserFamily(str, Enum):
    """Remote-control strategy required by a browser executable."""

    CHROMIUM = 'chromium'
    FIREFOX = 'firefox'


class SessionState(str, Enum):
    """Lifecycle of a browser session."""

    UNINITIALIZED = 'uninitialized'
    CONFIGURING = 'configuring'
    CONNECTED = 'connected'
    CLOSED = 'closed'


def detect_family(executable_path: str) -> BrowserFamily:
    """Infer the browser family from the executable name."""
    if 'firefox' in Path(executable_path).name.lower():
        return BrowserFamily.FIREFOX
    return BrowserFamily.CHROMIUM


class BrowserTarget(BaseModel):
    """A resolved browser executable and how to drive it."""

    model_config = ConfigDict(frozen=True)

    family: BrowserFamily
    executable_path: str = Field(..., description='Absolute path of the browser executable')
    headless: bool = True

    @classmethod
    def from_executable(cls, executable_path: str, headless: bool = True) -> 'BrowserTarget':
        return cls(
            family=detect_family(executable_path),
            executable_path=executable_path,
            headless=headless,
        )
