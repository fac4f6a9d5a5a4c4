"""
Metadata Extractors for Bandcamp Release Pages

Each function here pulls one piece of metadata out of a page's raw markup
using plain pattern matching. They are pure and independent:

- They take raw HTML text (and sometimes a URL) and return an optional value
- A missing pattern yields None or an empty list, never an exception
- No function depends on another's result, except the tag split which
  consumes the merged tag list

Third-party markup drifts over time. When Bandcamp changes a page layout,
only the function matching that field should need to change.
"""

import html
import json
import logging
import re
from typing import List, Optional, Tuple
from urllib.parse import urlparse

from showsheet.models import EmbedId

logger = logging.getLogger(__name__)

MAX_GENRES = 4

EMBED_BASE_URL = "https://bandcamp.com/EmbeddedPlayer"
EMBED_PARAMS = (
    ("size", "large"),
    ("bgcol", "ffffff"),
    ("linkcol", "0687f5"),
    ("tracklist", "false"),
    ("artwork", "small"),
    ("transparent", "true"),
)
EMBED_STYLE = "border: 0; width: 100%; height: 120px;"

# Embed identifiers: the HTML comment Bandcamp leaves in every release page,
# or the item properties in the bc-page-properties meta tag (entity-encoded).
ALBUM_ID_RE = re.compile(
    r'<!--\s*album id (\d+)\s*-->'
    r'|&quot;item_type&quot;:&quot;a&quot;,&quot;item_id&quot;:(\d+)'
)
TRACK_ID_RE = re.compile(
    r'<!--\s*track id (\d+)\s*-->'
    r'|&quot;item_type&quot;:&quot;t&quot;,&quot;item_id&quot;:(\d+)'
)

TAG_BLOCK_RE = re.compile(
    r'<div[^>]*class="[^"]*\btralbum-tags\b[^"]*"[^>]*>(.*?)</div>',
    re.DOTALL | re.IGNORECASE,
)
ANCHOR_TEXT_RE = re.compile(r'<a\b[^>]*>(.*?)</a>', re.DOTALL | re.IGNORECASE)
TAG_ANCHOR_RE = re.compile(
    r'<a\b[^>]*class="[^"]*\btag\b[^"]*"[^>]*>(.*?)</a>',
    re.DOTALL | re.IGNORECASE,
)
LD_JSON_RE = re.compile(
    r'<script[^>]*type="application/ld\+json"[^>]*>(.*?)</script>',
    re.DOTALL | re.IGNORECASE,
)

BYLINE_RE = re.compile(
    r'<span[^>]*itemprop="byArtist"[^>]*>(.*?)</span>',
    re.DOTALL | re.IGNORECASE,
)
TITLE_ELEMENT_RE = re.compile(
    r'<h2[^>]*class="[^"]*\btrackTitle\b[^"]*"[^>]*>(.*?)</h2>',
    re.DOTALL | re.IGNORECASE,
)

ALBUM_LINK_RE = re.compile(r'href="(/album/[^"?#]+)')
TRACK_LINK_RE = re.compile(r'href="(/track/[^"?#]+)')

TAG_STRIP_RE = re.compile(r'<[^>]+>')
WHITESPACE_RE = re.compile(r'\s+')


def _meta_content(page: str, attr: str, value: str) -> Optional[str]:
    """Return the content of <meta {attr}="{value}" content="...">, either attribute order."""
    patterns = (
        rf'<meta[^>]*{attr}="{re.escape(value)}"[^>]*content="([^"]*)"',
        rf'<meta[^>]*content="([^"]*)"[^>]*{attr}="{re.escape(value)}"',
    )
    for pattern in patterns:
        match = re.search(pattern, page, re.IGNORECASE)
        if match:
            return clean_text(match.group(1))
    return None


def clean_text(fragment: str) -> Optional[str]:
    """
    Strip nested tags, decode HTML entities and collapse whitespace.

    Returns None for fragments that are empty after cleaning.
    """
    if fragment is None:
        return None
    text = TAG_STRIP_RE.sub('', fragment)
    text = html.unescape(text)
    text = WHITESPACE_RE.sub(' ', text).strip()
    return text or None


def _first_group(match) -> Optional[str]:
    if not match:
        return None
    for group in match.groups():
        if group:
            return group
    return None


def extract_embed_id(page: str) -> Optional[EmbedId]:
    """
    Find the player identifier for a release page.

    Album identifiers win over track identifiers: a track page that belongs
    to an album still embeds as a track only when no album id is present.

    Args:
        page: Raw page markup

    Returns:
        EmbedId(kind, id) or None when neither pattern matches
    """
    album_id = _first_group(ALBUM_ID_RE.search(page))
    if album_id:
        return EmbedId(kind="album", id=album_id)

    track_id = _first_group(TRACK_ID_RE.search(page))
    if track_id:
        return EmbedId(kind="track", id=track_id)

    return None


def build_embed_markup(embed_id: Optional[EmbedId]) -> Optional[str]:
    """
    Build the inline player iframe for an embed identifier.

    The parameter order is fixed so the same identifier always produces
    byte-identical markup.
    """
    if embed_id is None:
        return None
    params = [f"{embed_id.kind}={embed_id.id}"]
    params.extend(f"{key}={value}" for key, value in EMBED_PARAMS)
    src = f"{EMBED_BASE_URL}/{'/'.join(params)}/"
    return f'<iframe style="{EMBED_STYLE}" src="{src}" seamless></iframe>'


def _tags_from_block(page: str) -> List[str]:
    tags = []
    for block in TAG_BLOCK_RE.findall(page):
        for anchor in ANCHOR_TEXT_RE.findall(block):
            text = clean_text(anchor)
            if text:
                tags.append(text)
    return tags


def _tags_from_structured_data(page: str) -> List[str]:
    tags = []
    for blob in LD_JSON_RE.findall(page):
        try:
            data = json.loads(html.unescape(blob))
        except ValueError:
            logger.debug("Skipping unparsable ld+json block")
            continue
        if not isinstance(data, dict):
            continue

        keywords = data.get('keywords') or []
        if isinstance(keywords, str):
            keywords = keywords.split(',')
        for keyword in keywords if isinstance(keywords, list) else []:
            text = clean_text(str(keyword))
            if text:
                tags.append(text)

        tag_list = data.get('tags')
        for tag in tag_list if isinstance(tag_list, list) else []:
            name = tag.get('name') if isinstance(tag, dict) else tag
            text = clean_text(str(name)) if name else None
            if text:
                tags.append(text)
    return tags


def _tags_from_anchors(page: str) -> List[str]:
    tags = []
    for anchor in TAG_ANCHOR_RE.findall(page):
        text = clean_text(anchor)
        if text:
            tags.append(text)
    return tags


def extract_tags(page: str) -> List[str]:
    """
    Collect tag names from every known tag source on the page.

    Sources, in priority order:
    1. Anchors inside the tralbum-tags container
    2. keywords/tags in application/ld+json structured data
    3. Standalone anchors styled with the "tag" class

    Results are deduplicated by exact text, keeping first-seen order.
    """
    seen = set()
    merged = []
    for source in (_tags_from_block, _tags_from_structured_data, _tags_from_anchors):
        for tag in source(page):
            if tag not in seen:
                seen.add(tag)
                merged.append(tag)
    return merged


def split_genres_and_location(tags: List[str]) -> Tuple[List[str], Optional[str]]:
    """
    Split a merged tag list into genres and location.

    Bandcamp lists the artist's location as the last tag, so the final
    element becomes the location and up to MAX_GENRES preceding elements
    become genres.
    """
    if not tags:
        return [], None
    return list(tags[:-1][:MAX_GENRES]), tags[-1]


def extract_artist(page: str) -> Optional[str]:
    """Artist from the byline element, falling back to og:site_name."""
    match = BYLINE_RE.search(page)
    if match:
        artist = clean_text(match.group(1))
        if artist:
            return artist
    return _meta_content(page, 'property', 'og:site_name')


def extract_thumbnail(page: str) -> Optional[str]:
    """Artwork URL from the og:image meta tag."""
    return _meta_content(page, 'property', 'og:image')


def extract_title(page: str) -> Optional[str]:
    """Release title from the trackTitle heading, falling back to og:title."""
    match = TITLE_ELEMENT_RE.search(page)
    if match:
        title = clean_text(match.group(1))
        if title:
            return title
    return _meta_content(page, 'property', 'og:title')


def is_artist_page(url: str) -> bool:
    """True for artist landing pages (paths without /album/ or /track/)."""
    path = urlparse(url).path
    return '/album/' not in path and '/track/' not in path


def find_latest_release(page: str, artist_url: str) -> Optional[str]:
    """
    Find the most recent release linked from an artist landing page.

    The first album link wins, then the first track link. Relative paths are
    resolved against the artist URL's origin.

    Args:
        page: Raw markup of the artist page
        artist_url: URL the artist page was fetched from

    Returns:
        Absolute release URL, or None if the page links no releases
    """
    match = ALBUM_LINK_RE.search(page) or TRACK_LINK_RE.search(page)
    if not match:
        return None

    parsed = urlparse(artist_url)
    origin = f"{parsed.scheme}://{parsed.netloc}".rstrip('/')
    return f"{origin}{match.group(1)}"
