"""
Pytest fixtures for showsheet tests

Provides sample spreadsheet exports and Bandcamp page markup for use across
all test modules.
"""
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def album_page():
    """Bandcamp album page with every extractable field present."""
    return (FIXTURES_DIR / "album_page.html").read_text(encoding="utf-8")


@pytest.fixture
def artist_page():
    """Bandcamp artist landing page linking to releases."""
    return (FIXTURES_DIR / "artist_page.html").read_text(encoding="utf-8")


@pytest.fixture
def venues_csv():
    """Venues tab export."""
    return (
        "Name,Address,Website,Neighborhood,Capacity\r\n"
        "7th St Entry,701 N 1st Ave,https://first-avenue.com,North Loop,250\r\n"
        "\"Cedar Cultural Center\",\"416 Cedar Ave S, Minneapolis\",,West Bank,550\r\n"
        ",orphan address,,,\r\n"
    )


@pytest.fixture
def shows_csv():
    """Shows tab export, including a row with no title and a Bandcamp link."""
    return (
        "Date,Venue,Show Title,Start Time,Cost,Age,Link URL,Image URL,Details,Multiples #,Notes,Venue ID,Media\n"
        "2025-11-01,7th St Entry,The Static,8pm,$15,18+,https://tix.example/1,,\"Loud, fast\",,,v1,https://thestatic.bandcamp.com/album/basement-tapes\n"
        "2025-10-15,Cedar Cultural Center,Quiet Night,7pm,$20,All Ages,,,,2,,v2,\n"
        "2025-10-20,Cedar Cultural Center,,7pm,,,,,,,,v2,\n"
        "2025-11-01,Mystery Basement,Second Set,10pm,,,,,,,,,\n"
    )


def pytest_terminal_summary(terminalreporter, exitstatus, config):
    """Print a concise, one-line summary at the end of the test run."""
    stats = getattr(terminalreporter, "stats", {})

    def _count(key):
        return len(stats.get(key, [])) if stats.get(key) is not None else 0

    passed = _count('passed')
    failed = _count('failed')
    skipped = _count('skipped')
    errors = _count('error')

    total = passed + failed + skipped + errors

    terminalreporter.write_sep("=", "pytest summary")
    terminalreporter.write_line(
        f"Total: {total}  Passed: {passed}  Failed: {failed}  Skipped: {skipped}  Errors: {errors}"
    )
