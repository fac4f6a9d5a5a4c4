"""
Show Aggregation

Turns parsed spreadsheet rows into the published document:
- Venues tab rows become a name -> Venue lookup
- Shows tab rows missing a date, venue or title are dropped
- Each show is joined to its venue by exact name, with a stub for unknown venues
- Shows are sorted by calendar date, keeping input order for ties
"""

import logging
from datetime import date, datetime, timezone
from typing import Callable, Dict, Iterable, List, Optional

from showsheet.csv_parser import Row, get_field
from showsheet.models import MediaMetadata, Show, Venue

logger = logging.getLogger(__name__)

# Venues columns: Name, Address, Website, Neighborhood, Capacity
VENUE_NAME, VENUE_ADDRESS, VENUE_WEBSITE, VENUE_NEIGHBORHOOD, VENUE_CAPACITY = range(5)

# Shows columns: Date, Venue, Show Title, Start Time, Cost, Age, Link URL,
# Image URL, Details, Multiples #, Notes, Venue ID, Media URL(s)
(
    SHOW_DATE, SHOW_VENUE, SHOW_TITLE, SHOW_TIME, SHOW_COST, SHOW_AGE,
    SHOW_LINK_URL, SHOW_IMAGE_URL, SHOW_DETAILS, SHOW_MULTIPLES, SHOW_NOTES,
    SHOW_VENUE_ID, SHOW_MEDIA,
) = range(13)

DATE_FORMATS = (
    "%Y-%m-%d",
    "%m/%d/%Y",
    "%m/%d/%y",
    "%B %d, %Y",
    "%b %d, %Y",
)

MediaResolver = Callable[[str], List[MediaMetadata]]


def build_venues(rows: Iterable[Row]) -> Dict[str, Venue]:
    """
    Build the venue lookup from venues tab rows.

    Rows without a name are skipped. A later row with the same name replaces
    an earlier one.
    """
    venues: Dict[str, Venue] = {}
    for row in rows:
        name = get_field(row, VENUE_NAME)
        if not name:
            continue
        if name in venues:
            logger.debug(f"Duplicate venue '{name}' replaces earlier row")
        venues[name] = Venue(
            name=name,
            address=get_field(row, VENUE_ADDRESS),
            website=get_field(row, VENUE_WEBSITE),
            neighborhood=get_field(row, VENUE_NEIGHBORHOOD),
            capacity=get_field(row, VENUE_CAPACITY),
        )
    return venues


def resolve_venue(name: str, venues: Dict[str, Venue]) -> Venue:
    """Exact-name venue lookup; unknown names get a stub venue."""
    venue = venues.get(name)
    if venue is None:
        logger.warning(f"Venue '{name}' not found in venues tab, using stub")
        venue = Venue(name=name, stub=True)
    return venue


def has_required_fields(row: Row) -> bool:
    return bool(get_field(row, SHOW_DATE) and get_field(row, SHOW_VENUE) and get_field(row, SHOW_TITLE))


def build_show(row: Row, venues: Dict[str, Venue], media: Optional[List[MediaMetadata]] = None) -> Show:
    return Show(
        date=get_field(row, SHOW_DATE),
        venue=resolve_venue(get_field(row, SHOW_VENUE), venues),
        title=get_field(row, SHOW_TITLE),
        time=get_field(row, SHOW_TIME),
        cost=get_field(row, SHOW_COST),
        age=get_field(row, SHOW_AGE),
        link_url=get_field(row, SHOW_LINK_URL),
        image_url=get_field(row, SHOW_IMAGE_URL),
        details=get_field(row, SHOW_DETAILS),
        multiples=get_field(row, SHOW_MULTIPLES),
        media=tuple(media or ()),
    )


def build_shows(
    rows: Iterable[Row],
    venues: Dict[str, Venue],
    resolve_media: Optional[MediaResolver] = None
) -> List[Show]:
    """
    Build sorted shows from shows tab rows.

    Args:
        rows: Data rows of the shows tab (header already removed)
        venues: Lookup from build_venues
        resolve_media: Called with each kept row's media column; None skips enrichment

    Returns:
        Shows ordered by date
    """
    shows = []
    dropped = 0
    for row in rows:
        if not has_required_fields(row):
            dropped += 1
            logger.debug(f"Dropping show row missing date/venue/title: {row[:3]}")
            continue
        media = None
        raw_media = get_field(row, SHOW_MEDIA)
        if resolve_media is not None and raw_media.strip():
            media = resolve_media(raw_media)
        shows.append(build_show(row, venues, media))

    if dropped:
        logger.info(f"Dropped {dropped} show rows missing date, venue or title")
    return sort_shows(shows)


def parse_show_date(text: str) -> Optional[date]:
    """Parse a spreadsheet date cell, or None if no known format matches."""
    value = text.strip()
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue
    return None


def sort_shows(shows: List[Show]) -> List[Show]:
    """
    Stable sort by calendar date.

    Shows with unparseable dates go after every dated show, in input order.
    """
    def key(show: Show):
        parsed = parse_show_date(show.date)
        if parsed is None:
            return (1, date.max)
        return (0, parsed)

    undated = [s.date for s in shows if parse_show_date(s.date) is None]
    if undated:
        logger.warning(f"Could not parse {len(undated)} show dates, sorting them last: {undated[:5]}")
    return sorted(shows, key=key)


def build_document(
    venues: Dict[str, Venue],
    shows: List[Show],
    now: Optional[datetime] = None
) -> Dict[str, object]:
    """Assemble the output document consumed by the front end."""
    now = now or datetime.now(timezone.utc)
    return {
        "venues": {name: venue.to_dict() for name, venue in venues.items()},
        "shows": [show.to_dict() for show in shows],
        "lastUpdated": now.isoformat().replace('+00:00', 'Z'),
    }
