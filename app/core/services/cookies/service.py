"""Cookie file parsing and conversion.

Two on-disk formats are supported:

- JSON: an array of ``{host, name, value, path, expiry, isSecure,
  isHttpOnly, sameSite}`` records.
- Netscape: the tab-separated ``cookies.txt`` format
  (``DOMAIN FLAG PATH SECURE EXPIRY NAME VALUE``) used by curl and yt-dlp.

The browser session consumes ``Cookie`` models; the downloader only accepts
Netscape files, so JSON exports are converted to a temporary file.
"""

import json
import tempfile
from pathlib import Path

import structlog
from pydantic import TypeAdapter, ValidationError

from app.core.errors import CookieFileError, CookieParseError
from app.core.services.cookies.schemas import Cookie, CookieFormat, JSONCookie

logger = structlog.get_logger(__name__)

NETSCAPE_HEADER = (
    '# Netscape HTTP Cookie File\n'
    '# This file was generated by classroom-downloader\n'
)
NETSCAPE_FIELD_COUNT = 7

_json_cookie_list = TypeAdapter(list[JSONCookie])


def _to_text(content: bytes | str) -> str:
    if isinstance(content, bytes):
        return content.decode('utf-8', errors='replace')
    return content


def load_json_cookie_records(content: bytes | str) -> list[JSONCookie]:
    """Decode a JSON cookie export into raw records.

    Raises:
        CookieParseError: If the content is not a JSON array of cookie objects
    """
    try:
        data = json.loads(_to_text(content))
    except json.JSONDecodeError as e:
        raise CookieParseError(f'error parsing JSON cookies: {e}') from e

    if not isinstance(data, list):
        raise CookieParseError('error parsing JSON cookies: expected a JSON array')

    try:
        return _json_cookie_list.validate_python(data)
    except ValidationError as e:
        raise CookieParseError(f'error parsing JSON cookies: {e}') from e


def parse_json_cookies(content: bytes | str) -> list[Cookie]:
    """Parse a JSON cookie export.

    ``isSecure``/``isHttpOnly`` equal to 1 set the flags, ``sameSite`` 1/2/3
    map to Lax/Strict/None (anything else is left unspecified) and a
    non-positive ``expiry`` means a session cookie.
    """
    return [record.to_cookie() for record in load_json_cookie_records(content)]


def _parse_expiry(raw: str) -> int | None:
    if raw in ('', '0'):
        return None
    try:
        expiry = int(raw)
    except ValueError:
        return None
    return expiry if expiry > 0 else None


def parse_netscape_cookies(content: bytes | str) -> list[Cookie]:
    """Parse a Netscape ``cookies.txt`` file.

    Comment and blank lines are skipped, as are lines with fewer than seven
    tab-separated fields. The format has no http-only or same-site columns.
    An unparseable expiry is treated as a session cookie.
    """
    cookies: list[Cookie] = []

    for line in _to_text(content).splitlines():
        line = line.strip()
        if not line or line.startswith('#'):
            continue

        fields = line.split('\t')
        if len(fields) < NETSCAPE_FIELD_COUNT:
            continue

        cookies.append(
            Cookie(
                domain=fields[0],
                path=fields[2],
                secure=fields[3] == 'TRUE',
                expires=_parse_expiry(fields[4]),
                name=fields[5],
                value=fields[6],
                http_only=False,
            )
        )

    return cookies


def detect_cookie_format(path: Path, content: str) -> CookieFormat:
    """Pick the cookie format from the file extension, sniffing the content otherwise."""
    suffix = path.suffix.lower()
    if suffix == '.json':
        return CookieFormat.JSON
    if suffix == '.txt':
        return CookieFormat.NETSCAPE

    trimmed = content.strip()
    if trimmed.startswith('[') and trimmed.endswith(']'):
        return CookieFormat.JSON
    return CookieFormat.NETSCAPE


def parse_cookies_file(path: str | Path) -> list[Cookie]:
    """Read and parse a cookie file in either supported format.

    Raises:
        CookieFileError: If the file cannot be read
        CookieParseError: If a JSON file is malformed
    """
    path = Path(path)
    try:
        content = path.read_text(encoding='utf-8', errors='replace')
    except OSError as e:
        raise CookieFileError(f'could not read cookies file {path}: {e}') from e

    cookie_format = detect_cookie_format(path, content)
    logger.debug('Parsing cookies file', path=str(path), format=cookie_format.value)

    if cookie_format == CookieFormat.JSON:
        return parse_json_cookies(content)
    return parse_netscape_cookies(content)


def netscape_domain(host: str) -> str:
    """Re-add the leading dot for hosts with more than two labels.

    ``www.skool.com`` becomes ``.www.skool.com``; ``skool.com`` and already
    dotted hosts are unchanged. Two-label public suffixes such as
    ``example.co.uk`` get a dot as well.
    """
    if not host.startswith('.') and host.count('.') > 1:
        return f'.{host}'
    return host


def format_netscape_line(record: JSONCookie) -> str:
    """Format one JSON record as a Netscape line; the subdomain flag is always TRUE."""
    secure = 'TRUE' if record.isSecure == 1 else 'FALSE'
    return '\t'.join(
        [
            netscape_domain(record.host),
            'TRUE',
            record.path,
            secure,
            str(record.expiry),
            record.name,
            record.value,
        ]
    )


def convert_to_netscape_file(records: list[JSONCookie]) -> Path:
    """Write JSON cookie records to a new temporary Netscape file.

    The caller owns the returned file and must remove it.

    Raises:
        CookieFileError: If the temporary file cannot be written
    """
    output_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            'w',
            prefix='cookies-',
            suffix='.txt',
            delete=False,
            encoding='utf-8',
        ) as f:
            output_path = Path(f.name)
            f.write(NETSCAPE_HEADER)
            for record in records:
                f.write(format_netscape_line(record) + '\n')
    except OSError as e:
        if output_path is not None:
            output_path.unlink(missing_ok=True)
        raise CookieFileError(f'could not write Netscape cookies file: {e}') from e

    logger.debug('Wrote Netscape cookies file', path=str(output_path), count=len(records))
    return output_path


def convert_json_file_to_netscape(path: str | Path) -> Path:
    """Convert a JSON cookie file on disk to a temporary Netscape file."""
    path = Path(path)
    try:
        content = path.read_text(encoding='utf-8')
    except OSError as e:
        raise CookieFileError(f'could not read cookies file {path}: {e}') from e

    return convert_to_netscape_file(load_json_cookie_records(content))
