#!/usr/bin/env python3
"""
Remove entries from the media cache.

Cached Bandcamp metadata never expires, so a release that changed its tags
or artwork keeps its old metadata until the entry is removed here. The next
build refetches anything that is no longer cached.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

repo_root = Path(__file__).resolve().parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from showsheet.exceptions import CacheError
from showsheet.page_cache import PageCache


def select_keys(cache: PageCache, match: Optional[str] = None, empty: bool = False, all_entries: bool = False) -> List[str]:
    """Return the cache keys selected for removal."""
    if all_entries:
        return list(cache)
    selected = []
    for key, metadata in cache.items():
        if match and match.lower() in key:
            selected.append(key)
        elif empty and metadata.embed_markup is None:
            selected.append(key)
    return selected


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Remove entries from the media cache")
    parser.add_argument('cache', nargs='?', default='media-cache.json', help='Path to cache file (default: media-cache.json)')
    group = parser.add_argument_group('selection')
    group.add_argument('--all', dest='all_entries', action='store_true', help='Remove every entry')
    group.add_argument('--match', help='Remove entries whose URL contains this text')
    group.add_argument('--empty', action='store_true', help='Remove entries with no embeddable player')
    parser.add_argument('--dry-run', action='store_true', help='List matching entries without removing them')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s: %(message)s"
    )

    if not (args.all_entries or args.match or args.empty):
        parser.error("choose at least one of --all, --match or --empty")

    cache_path = Path(args.cache)
    if not cache_path.exists():
        logging.error(f"Cache file not found: {cache_path}")
        return 1

    cache = PageCache(cache_path)
    total = cache.load_all()
    keys = select_keys(cache, match=args.match, empty=args.empty, all_entries=args.all_entries)

    for key in keys:
        logging.info(f"{'Would remove' if args.dry_run else 'Removing'}: {key}")
        if not args.dry_run:
            cache.remove(key)

    if not args.dry_run and keys:
        try:
            cache.persist_all()
        except CacheError as e:
            logging.error(str(e))
            return 1

    print(f"\nPrune complete: {len(keys)} of {total} entries {'selected' if args.dry_run else 'removed'}.")
    return 0


if __name__ == '__main__':
    sys.exit(main())
