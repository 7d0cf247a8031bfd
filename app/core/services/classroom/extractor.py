"""Video link extraction from rendered classroom markup.

The classroom page embeds its whole course tree in the Next.js
``__NEXT_DATA__`` blob, which is the preferred source. When the blob is
missing, malformed or yields nothing, the raw markup is scanned with
patterns instead. Either way every link is normalized to its canonical form
(``https://www.loom.com/share/<id>`` or
``https://www.youtube.com/watch?v=<id>``) and deduplicated in first-seen
order.
"""

import json
import re
from collections.abc import Iterable
from typing import Any

import structlog
from bs4 import BeautifulSoup

from app.core.errors import PageStateError

logger = structlog.get_logger(__name__)

LOOM_SHARE_URL = 'https://www.loom.com/share/{}'
YOUTUBE_WATCH_URL = 'https://www.youtube.com/watch?v={}'

LOOM_ID_PATTERN = re.compile(r'loom\.com/(share|embed)/([a-zA-Z0-9_-]+)')
YOUTUBE_ID_PATTERN = re.compile(
    r'(?:youtube\.com/watch\?v=|youtu\.be/|youtube\.com/embed/|youtube\.com/v/)([a-zA-Z0-9_-]{11})'
)

# Fallback scans over raw markup
LOOM_SHARE_SCAN = re.compile(r'https?://(?:www\.)?loom\.com/share/([a-zA-Z0-9]+)')
LOOM_EMBED_SCAN = re.compile(r'https?://(?:www\.)?loom\.com/embed/([a-zA-Z0-9]+)')
YOUTUBE_SCAN = re.compile(
    r'https?://(?:www\.)?(?:youtube\.com/watch\?v=|youtu\.be/|youtube\.com/embed/|youtube\.com/v/)'
    r'([a-zA-Z0-9_-]{11})'
)


class _UniqueURLs:
    """Insertion-ordered set of URLs."""

    def __init__(self) -> None:
        self._seen: dict[str, None] = {}

    def add(self, url: str | None) -> None:
        if url:
            self._seen.setdefault(url, None)

    def extend(self, urls: Iterable[str]) -> None:
        for url in urls:
            self.add(url)

    def to_list(self) -> list[str]:
        return list(self._seen)


def dig(data: Any, *path: str) -> Any:
    """Follow ``path`` through nested dicts; ``None`` as soon as a segment is missing or not a dict."""
    current = data
    for key in path:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


def normalize_loom_url(link: str) -> str | None:
    match = LOOM_ID_PATTERN.search(link)
    if match is None:
        return None
    return LOOM_SHARE_URL.format(match.group(2))


def normalize_youtube_url(link: str) -> str | None:
    match = YOUTUBE_ID_PATTERN.search(link)
    if match is None:
        return None
    return YOUTUBE_WATCH_URL.format(match.group(1))


def normalize_video_link(link: str) -> str | None:
    """Canonical URL for a Loom or YouTube link, ``None`` for anything else."""
    if 'loom.com' in link:
        return normalize_loom_url(link)
    if 'youtube.com' in link or 'youtu.be' in link:
        return normalize_youtube_url(link)
    return None


def extract_page_state(html: str) -> dict[str, Any]:
    """Parse the ``__NEXT_DATA__`` JSON blob embedded in the page.

    Raises:
        PageStateError: If the script tag is missing, does not hold a JSON object,
            or is nested deeper than the decoder can follow
    """
    soup = BeautifulSoup(html, 'html.parser')
    script = soup.find('script', attrs={'id': '__NEXT_DATA__', 'type': 'application/json'})
    if script is None:
        raise PageStateError('__NEXT_DATA__ script tag not found in HTML')

    try:
        data = json.loads(script.string or '')
    except json.JSONDecodeError as e:
        raise PageStateError(f'failed to parse __NEXT_DATA__ JSON: {e}') from e
    except RecursionError as e:
        raise PageStateError('__NEXT_DATA__ JSON is nested too deeply to decode') from e

    if not isinstance(data, dict):
        raise PageStateError('__NEXT_DATA__ is not a JSON object')
    return data


def _walk_course_tree(root: dict[str, Any], urls: _UniqueURLs) -> None:
    # Explicit stack; children pushed in reverse so they pop in document order
    stack = [root]
    while stack:
        node = stack.pop()
        video_link = dig(node, 'course', 'metadata', 'videoLink')
        if isinstance(video_link, str):
            urls.add(normalize_video_link(video_link))

        children = node.get('children')
        if isinstance(children, list):
            stack.extend(child for child in reversed(children) if isinstance(child, dict))


def extract_from_page_state(data: dict[str, Any]) -> list[str]:
    """Walk ``props.pageProps.course`` depth-first and collect every video link."""
    course = dig(data, 'props', 'pageProps', 'course')
    if not isinstance(course, dict):
        return []

    urls = _UniqueURLs()
    _walk_course_tree(course, urls)
    return urls.to_list()


def extract_with_patterns(html: str) -> list[str]:
    """Scan raw markup for Loom share, Loom embed and YouTube links, in that order."""
    urls = _UniqueURLs()
    urls.extend(LOOM_SHARE_URL.format(video_id) for video_id in LOOM_SHARE_SCAN.findall(html))
    urls.extend(LOOM_SHARE_URL.format(video_id) for video_id in LOOM_EMBED_SCAN.findall(html))
    urls.extend(YOUTUBE_WATCH_URL.format(video_id) for video_id in YOUTUBE_SCAN.findall(html))
    return urls.to_list()


def extract_video_urls(html: str) -> list[str]:
    """Extract canonical video URLs from rendered classroom markup.

    Args:
        html: Full rendered page markup

    Returns:
        Deduplicated URLs in first-seen order; empty when the page has no videos
    """
    try:
        urls = extract_from_page_state(extract_page_state(html))
    except PageStateError as e:
        logger.warning('Page state extraction failed, falling back to pattern extraction', error=str(e))
    else:
        if urls:
            logger.info('Extracted videos from page state', count=len(urls))
            return urls
        logger.warning('No videos found in page state, falling back to pattern extraction')

    urls = extract_with_patterns(html)
    if urls:
        logger.info('Extracted videos from patterns', count=len(urls))
    return urls
