"""Temporary Firefox profile for remote debugging.

A fresh profile would otherwise stop on the first-run wizard and on the
"allow remote debugging?" prompt, and the debugging endpoint would never
come up.
"""

import socket
import tempfile
from pathlib import Path

PROFILE_PREFIX = 'classroom-firefox-'

REMOTE_DEBUGGING_PREFS = {
    'devtools.debugger.remote-enabled': True,
    'devtools.debugger.prompt-connection': False,
    'devtools.chrome.enabled': True,
    'browser.aboutwelcome.enabled': False,
    'datareporting.policy.dataSubmissionEnabled': False,
    'toolkit.telemetry.reportingpolicy.firstRun': False,
}


def find_free_port() -> int:
    """Ask the OS for an unused local TCP port."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(('127.0.0.1', 0))
        return sock.getsockname()[1]


def render_prefs(prefs: dict[str, bool | int | str]) -> str:
    """Render preferences in ``prefs.js`` syntax."""
    lines = []
    for name, value in prefs.items():
        if isinstance(value, bool):
            rendered = 'true' if value else 'false'
        elif isinstance(value, int):
            rendered = str(value)
        else:
            rendered = f'"{value}"'
        lines.append(f'user_pref("{name}", {rendered});')
    return '\n'.join(lines) + '\n'


def create_profile() -> Path:
    """Create a temporary profile directory with remote debugging enabled.

    The caller owns the directory and must remove it.
    """
    profile_dir = Path(tempfile.mkdtemp(prefix=PROFILE_PREFIX))
    (profile_dir / 'prefs.js').write_text(render_prefs(REMOTE_DEBUGGING_PREFS), encoding='utf-8')
    return profile_dir


def build_command(executable_path: str, port: int, profile_dir: Path, headless: bool) -> list[str]:
    """Command line that starts Firefox with the remote-debugging endpoint."""
    command = [
        executable_path,
        f'--remote-debugging-port={port}',
        '--no-remote',
        '--profile',
        str(profile_dir),
    ]
    if headless:
        command.append('--headless')
    return command
