"""
Media Metadata Client

Resolves a show's media column into MediaMetadata records:
- Splits the raw column into individual Bandcamp URLs
- Serves previously seen URLs from the PageCache without touching the network
- Fetches release pages (following an artist page to its latest release)
- Runs every extractor over the final page

Failures are per URL: a page that cannot be fetched or parsed is logged and
left out, and never stops the remaining URLs or the build.
"""

import logging
import re
from typing import List, Optional, Tuple
from urllib.parse import urlparse

import requests

from showsheet.exceptions import MediaFetchError, ShowsheetError
from showsheet.extractors import (
    build_embed_markup,
    extract_artist,
    extract_embed_id,
    extract_tags,
    extract_thumbnail,
    extract_title,
    find_latest_release,
    is_artist_page,
    split_genres_and_location,
)
from showsheet.models import MediaMetadata
from showsheet.page_cache import PageCache

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "showsheet/1.0 (+show listings builder)"
SUPPORTED_HOST = "bandcamp.com"

URL_SEPARATOR_RE = re.compile(r'[,\n]')


def split_media_urls(raw: str) -> List[str]:
    """
    Split a media column into supported URLs, preserving order.

    Entries are separated by commas or newlines. Blank entries and URLs that
    are not on the supported media host are dropped.
    """
    if not raw:
        return []
    urls = []
    for entry in URL_SEPARATOR_RE.split(raw):
        entry = entry.strip()
        if entry and is_supported_url(entry):
            urls.append(entry)
        elif entry:
            logger.debug(f"Ignoring unsupported media URL: {entry}")
    return urls


def is_supported_url(url: str) -> bool:
    parsed = urlparse(url)
    if parsed.scheme not in ('http', 'https'):
        return False
    host = (parsed.hostname or '').lower()
    return host == SUPPORTED_HOST or host.endswith('.' + SUPPORTED_HOST)


def extract_metadata(page: str) -> MediaMetadata:
    """Run every extractor over one page and assemble the record."""
    genres, location = split_genres_and_location(extract_tags(page))
    return MediaMetadata(
        embed_markup=build_embed_markup(extract_embed_id(page)),
        release_title=extract_title(page),
        artist=extract_artist(page),
        thumbnail_url=extract_thumbnail(page),
        genres=genres,
        location=location,
    )


class MediaClient:
    """
    Cache-first fetcher for Bandcamp release metadata.

    URLs are processed strictly one at a time, in input order.
    """

    def __init__(
        self,
        cache: PageCache,
        session: Optional[requests.Session] = None,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: Optional[float] = 30
    ):
        """
        Initialize the media client.

        Args:
            cache: PageCache consulted before and updated after every fetch
            session: requests session to use (a new one is created if omitted)
            user_agent: User-Agent header sent with every page request
            timeout: Request timeout in seconds (None waits indefinitely)
        """
        self.cache = cache
        self.session = session or requests.Session()
        self.session.headers.update({'User-Agent': user_agent})
        self.timeout = timeout

        self.pages_fetched = 0
        self.cache_hits = 0
        self.failures = 0

    def fetch_page(self, url: str) -> Tuple[str, str]:
        """
        GET a page, following redirects.

        Returns:
            (final URL after redirects, page text)

        Raises:
            MediaFetchError: on a non-2xx response
            requests.exceptions.RequestException: on connection failures
        """
        r = self.session.get(url, timeout=self.timeout, allow_redirects=True)
        self.pages_fetched += 1
        if not 200 <= r.status_code < 300:
            raise MediaFetchError(f"HTTP {r.status_code} fetching {url}")
        return r.url or url, r.text

    def fetch_metadata(self, url: str) -> MediaMetadata:
        """
        Return metadata for one media URL, from cache when possible.

        Cached entries are trusted forever; there is no freshness check.
        New results are cached under the URL as requested, not the URL the
        page was eventually resolved to.
        """
        cached = self.cache.get(url)
        if cached is not None:
            self.cache_hits += 1
            logger.debug(f"Media cache hit: {url}")
            return cached

        logger.info(f"Fetching media page: {url}")
        final_url, page = self.fetch_page(url)

        if is_artist_page(final_url):
            release_url = find_latest_release(page, final_url)
            if release_url:
                logger.info(f"Artist page {final_url} -> latest release {release_url}")
                final_url, page = self.fetch_page(release_url)
            else:
                logger.debug(f"No release links on artist page {final_url}, using it as-is")

        metadata = extract_metadata(page)
        if metadata.embed_markup is None:
            logger.warning(f"No embeddable player found at {final_url}")

        self.cache.put(url, metadata)
        return metadata

    def resolve_media(self, raw: str) -> List[MediaMetadata]:
        """
        Resolve a show's raw media column into an ordered list of records.

        URLs that fail produce no record rather than a placeholder.
        """
        records = []
        for url in split_media_urls(raw):
            try:
                records.append(self.fetch_metadata(url))
            except (requests.exceptions.RequestException, ShowsheetError) as e:
                self.failures += 1
                logger.warning(f"Skipping media URL {url}: {e}")
            except Exception as e:
                self.failures += 1
                logger.exception("Unexpected error extracting media from %s: %s", url, e)
        return records

    def __repr__(self) -> str:
        return f"MediaClient(cache={self.cache!r}, timeout={self.timeout})"
