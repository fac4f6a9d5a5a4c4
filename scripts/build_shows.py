#!/usr/bin/env python3
"""
build_shows.py - Build shows.json from the Google Sheet

WORKFLOW:
1. Fetch the Venues tab and build a name -> venue lookup
2. Fetch the Shows tab, dropping rows without a date, venue or title
3. For each show with Bandcamp links, resolve player/tag metadata
   (served from the media cache when the URL was seen before)
4. Sort shows by date and write {venues, shows, lastUpdated} to the output file
5. Save the media cache

FAILURE MODES:
- Spreadsheet unreachable, empty, or misconfigured: the build stops with exit status 1
- A Bandcamp page fails: that link is skipped and the build continues
- Cache file missing or corrupt: the build starts with an empty cache

Configure config.py (copy from config.template.py) or the matching
environment variables before running.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Dict, Any, List

from tqdm import tqdm

# Allow running as `python scripts/build_shows.py` without an install
repo_root = Path(__file__).resolve().parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from showsheet.aggregator import build_document, build_shows, build_venues
from showsheet.config_manager import Config
from showsheet.exceptions import CacheError, ShowsheetError
from showsheet.io_utils import write_json
from showsheet.media_client import MediaClient
from showsheet.page_cache import PageCache
from showsheet.sheets_client import SheetsClient

logger = logging.getLogger(__name__)


def build(
    config: Config,
    sheets: Optional[SheetsClient] = None,
    media: Optional[MediaClient] = None,
    dry_run: bool = False,
    backup: bool = False,
    show_progress: bool = True
) -> Dict[str, Any]:
    """
    Run the full build and return the output document.

    Args:
        config: Validated configuration
        sheets: Spreadsheet client (built from config if omitted)
        media: Media client (built from config if omitted and media is enabled)
        dry_run: Skip writing the output file and the cache
        backup: Back up an existing output file before overwriting it
        show_progress: Show a tqdm progress bar while resolving media

    Raises:
        ShowsheetError: on fatal failures (spreadsheet fetch/parse)
    """
    sheets = sheets or SheetsClient(config.sheet_id, timeout=config.request_timeout)

    if media is None and config.fetch_media:
        cache = PageCache(Path(config.cache_path))
        cache.load_all()
        media = MediaClient(cache, user_agent=config.user_agent, timeout=config.request_timeout)

    logger.info("Fetching venues...")
    venues = build_venues(sheets.fetch_rows(config.venues_gid))

    logger.info("Fetching shows...")
    show_rows: List[List[str]] = sheets.fetch_rows(config.shows_gid)
    if media is not None and show_progress:
        show_rows = tqdm(show_rows, desc="Resolving media", unit="show")

    shows = build_shows(show_rows, venues, media.resolve_media if media else None)
    document = build_document(venues, shows)

    media_count = sum(len(show.media) for show in shows)
    if media is not None:
        logger.info(
            f"Media: {media.pages_fetched} pages fetched, "
            f"{media.cache_hits} cache hits, {media.failures} failures"
        )

    if dry_run:
        logger.info(f"Dry run: would write {len(shows)} shows and {len(venues)} venues to {config.output_path}")
        return document

    write_json(Path(config.output_path), document, make_backup=backup)
    logger.info(
        f"✓ Built {config.output_path} with {len(shows)} shows, "
        f"{len(venues)} venues and {media_count} media records"
    )

    if media is not None:
        try:
            media.cache.persist_all()
        except CacheError as e:
            logger.warning(f"{e}; metadata will be refetched next run")

    return document


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Build shows.json from the Google Sheet")
    parser.add_argument('--output', '-o', help='Output JSON path (default from config: shows.json)')
    parser.add_argument('--cache', help='Media cache JSON path (default from config: media-cache.json)')
    parser.add_argument('--no-media', action='store_true', help='Skip Bandcamp metadata lookups')
    parser.add_argument('--dry-run', action='store_true', help='Build everything but write no files')
    parser.add_argument('--backup', action='store_true', help='Back up the existing output file first')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')
    args = parser.parse_args(argv)

    try:
        config = Config()
    except ShowsheetError as e:
        logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s: %(message)s")
        logger.error(f"Build failed: {e}")
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, str(config.log_level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s: %(message)s"
    )

    if args.output:
        config.output_path = args.output
    if args.cache:
        config.cache_path = args.cache
    if args.no_media:
        config.fetch_media = False

    try:
        config._validate()
        logger.info(f"Configuration loaded: {config}")
        build(config, dry_run=args.dry_run, backup=args.backup)
    except (ShowsheetError, OSError) as e:
        logger.error(f"Build failed: {e}")
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
