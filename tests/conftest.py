from __future__ import annotations

# Standard Library Imports
import logging
import sys

# Third Party Imports
import pytest

# v2xtime Imports
from v2xtime.common.behavioral_config import BehavioralConfig
from v2xtime.timescale import LeapSecondTable, getLeapSecondTable
from v2xtime.timescale.converter import LeapSecondTableConverter

# Local Imports
from . import PINNED_LEAP_SECONDS


@pytest.fixture(autouse=True)
def _resetStrictValidity() -> None:
    """Make sure every test starts, and ends, with the lenient validity horizon."""
    config = BehavioralConfig.getConfig()
    config.leap_seconds.StrictValidity = False
    yield
    config.leap_seconds.StrictValidity = False


@pytest.fixture(scope="session", name="test_logger")
def getTestLoggerObject() -> logging.Logger:
    """Create a custom :class:`logging.Logger` object."""
    logger = logging.getLogger("Unit Test Logger")
    logger.setLevel(logging.DEBUG)
    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
    logger.addHandler(handler)
    return logger


@pytest.fixture(name="leap_second_table")
def getPinnedTable() -> LeapSecondTable:
    """Leap-second table pinned to the snapshot under ``tests/datafiles``."""
    return getLeapSecondTable(
        loader_name="LocalDotDatLeapSecondLoader",
        loader_location=str(PINNED_LEAP_SECONDS),
    )


@pytest.fixture(name="converter")
def getPinnedConverter(leap_second_table: LeapSecondTable) -> LeapSecondTableConverter:
    """Converter over the pinned leap-second table."""
    return LeapSecondTableConverter(leap_second_table)


@pytest.fixture(name="strict_converter")
def getStrictConverter(leap_second_table: LeapSecondTable) -> LeapSecondTableConverter:
    """Converter over the pinned leap-second table that raises outside the validity horizon."""
    return LeapSecondTableConverter(leap_second_table, strict=True)
