"""
Show Listings Builder Library

Core modules for turning a spreadsheet export and Bandcamp pages into the
shows.json document.
"""

__version__ = "1.0.0"
__author__ = "Show Listings Contributors"

from .config_manager import Config
from .csv_parser import parse_csv, data_rows
from .page_cache import PageCache
from .media_client import MediaClient

__all__ = ['Config', 'parse_csv', 'data_rows', 'PageCache', 'MediaClient']
