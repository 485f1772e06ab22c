"""Leap-second bookkeeping and conversions between UTC calendar time and atomic time (TAI).

Atomic time is expressed as whole seconds since 1972-01-01T00:00:00 TAI plus a sub-second
fraction. A UTC instant maps onto that scale by counting SI seconds since 1972-01-01T00:00:00 UTC
(ignoring leap seconds) and adding TAI-UTC at that instant, so all downstream arithmetic is plain,
monotonic addition & subtraction.
"""

from __future__ import annotations

# Standard Library Imports
import datetime
from dataclasses import dataclass
from typing import TYPE_CHECKING

# Third Party Imports
import numpy as np

# Local Imports
from ..common.exceptions import MissingLeapSecondData

# Type Checking Imports
if TYPE_CHECKING:
    # Standard Library Imports
    from collections.abc import Iterable, Iterator


@dataclass(frozen=True)
class LeapSecond:
    """Data class defining a single TAI-UTC step of the leap-second table."""

    date: datetime.date
    """datetime.date: UTC date at which `delta_atomic_time` takes effect (at 00:00:00 UTC)."""

    delta_atomic_time: int
    """int: Difference in atomic time w.r.t UTC, via leap seconds (seconds)."""


class LeapSecondTable:
    """Ordered, read-only collection of :class:`.LeapSecond` steps with a validity horizon.

    The table is valid from its earliest entry up to, but excluding, its `expiration` date. Dates
    outside of that horizon still resolve to the nearest entry, which is a best-effort
    approximation rather than an error.
    """

    def __init__(self, leap_seconds: Iterable[LeapSecond], expiration: datetime.date | None = None):
        """Build the table.

        Args:
            leap_seconds (Iterable[LeapSecond]): TAI-UTC steps, in any order.
            expiration (datetime.date, optional): date after which the table is no longer
                guaranteed to be complete. ``None`` means the table never expires.

        Raises:
            MissingLeapSecondData: If `leap_seconds` is empty.
        """
        self._entries: tuple[LeapSecond, ...] = tuple(sorted(leap_seconds, key=lambda ls: ls.date))
        if not self._entries:
            raise MissingLeapSecondData("Leap-second table requires at least one entry")
        self._expiration = expiration
        self._dates = np.array([entry.date for entry in self._entries], dtype="datetime64[D]")

    @property
    def entries(self) -> tuple[LeapSecond, ...]:
        """``tuple``: the TAI-UTC steps, sorted by date."""
        return self._entries

    @property
    def expiration(self) -> datetime.date | None:
        """``datetime.date``: end of the validity horizon, ``None`` if unbounded."""
        return self._expiration

    def earliestDate(self) -> datetime.date:
        """Returns the date of the first TAI-UTC step."""
        return self._entries[0].date

    def latestDate(self) -> datetime.date:
        """Returns the date of the most recent TAI-UTC step."""
        return self._entries[-1].date

    def validOn(self, utc_date: datetime.date) -> bool:
        """Checks if `utc_date` lies inside the table's validity horizon.

        Args:
            utc_date (datetime.date): UTC calendar date to test.

        Returns:
            bool: True, if the table covers `utc_date`. False otherwise.
        """
        if utc_date < self.earliestDate():
            return False
        return self._expiration is None or utc_date < self._expiration

    def deltaAtomicTime(self, utc_date: datetime.date) -> int:
        """Return TAI-UTC, in seconds, in effect on `utc_date`.

        Dates before the first entry resolve to the first entry's value.
        """
        index = int(np.searchsorted(self._dates, np.datetime64(utc_date, "D"), side="right")) - 1
        return self._entries[max(index, 0)].delta_atomic_time

    def __len__(self) -> int:
        """Number of TAI-UTC steps."""
        return len(self._entries)

    def __iter__(self) -> Iterator[LeapSecond]:
        """Iterate over the TAI-UTC steps in chronological order."""
        return iter(self._entries)

    def __repr__(self) -> str:
        """Return a string representation of this :class:`.LeapSecondTable`."""
        return (
            f"LeapSecondTable({len(self)} entries, {self.earliestDate()} -> {self.latestDate()}, "
            f"expires={self._expiration})"
        )


# Local Imports
# forward-facing API import
from .converter import LeapSecondTableConverter, TimeScaleConverter  # noqa: E402, F401
from .getter import getDefaultConverter, getLeapSecondTable, setLeapSecond  # noqa: E402, F401
