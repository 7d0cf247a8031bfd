"""Cookie model and JSON/Netscape cookie file conversion."""

from app.core.services.cookies.schemas import Cookie, CookieFormat, JSONCookie, SameSite
from app.core.services.cookies.service import (
    NETSCAPE_HEADER,
    convert_json_file_to_netscape,
    convert_to_netscape_file,
    detect_cookie_format,
    format_netscape_line,
    load_json_cookie_records,
    netscape_domain,
    parse_cookies_file,
    parse_json_cookies,
    parse_netscape_cookies,
)

__all__ = [
    'NETSCAPE_HEADER',
    'Cookie',
    'CookieFormat',
    'JSONCookie',
    'SameSite',
    'convert_json_file_to_netscape',
    'convert_to_netscape_file',
    'detect_cookie_format',
    'format_netscape_line',
    'load_json_cookie_records',
    'netscape_domain',
    'parse_cookies_file',
    'parse_json_cookies',
    'parse_netscape_cookies',
]
