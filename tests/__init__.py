"""Configure importable things that aren't pytest fixtures."""

from __future__ import annotations

# Standard Library Imports
from datetime import datetime, timezone
from pathlib import Path

# Common file paths
FIXTURE_DATA_DIR = Path(__file__).parent / "datafiles"
PINNED_LEAP_SECONDS = FIXTURE_DATA_DIR / "dat" / "leap_seconds.dat"

# Common timestamps
TEST_DATETIME = datetime(2018, 12, 1, 12, tzinfo=timezone.utc)
TEST_DATETIME_TAI_SECONDS: int = 1480593637
"""int: `TEST_DATETIME` in TAI seconds, with TAI-UTC = 37 s."""

TEST_DATETIME_V1_ELAPSED: int = 281361603000000
TEST_DATETIME_V2_ELAPSED: int = 470750405000000

LEAP_SECOND_2017_UTC_SECONDS: int = 1420156800
"""int: 2017-01-01T00:00:00 UTC, in UTC seconds since 1972-01-01 (TAI-UTC steps 36 -> 37)."""
