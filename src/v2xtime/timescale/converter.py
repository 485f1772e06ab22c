"""Defines the :class:`.TimeScaleConverter` interface and its leap-second table implementation."""

from __future__ import annotations

# Standard Library Imports
import datetime
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import TYPE_CHECKING, Union

# Third Party Imports
import numpy as np

# Local Imports
from ..common.behavioral_config import BehavioralConfig
from ..common.exceptions import ConversionAmbiguity, OutOfRangeError
from ..common.logger import v2xtimeLogDebug, v2xtimeLogWarning

# Type Checking Imports
if TYPE_CHECKING:
    # Third Party Imports
    from typing_extensions import TypeAlias

    # Local Imports
    from . import LeapSecondTable


CalendarTimestamp: TypeAlias = Union[datetime.datetime, np.datetime64]
"""Calendar timestamps accepted by :meth:`.TimeScaleConverter.toAtomicTime()`."""

UTC_ZERO = datetime.datetime(1972, 1, 1, tzinfo=datetime.timezone.utc)
"""datetime.datetime: UTC instant at which the atomic-time count is TAI-UTC seconds."""

SECONDS_PER_DAY: int = 86400
MICROSECONDS_PER_SECOND: int = 1_000_000
NANOSECONDS_PER_SECOND: int = 1_000_000_000

_UTC_ZERO_NS: int = 63072000 * NANOSECONDS_PER_SECOND
"""int: 1972-01-01T00:00:00 UTC, in nanoseconds since the ``numpy.datetime64`` zero point (1970)."""

_UNIT_NANOSECONDS: dict[str, tuple[int, int]] = {
    "W": (7 * SECONDS_PER_DAY * NANOSECONDS_PER_SECOND, 1),
    "D": (SECONDS_PER_DAY * NANOSECONDS_PER_SECOND, 1),
    "h": (3600 * NANOSECONDS_PER_SECOND, 1),
    "m": (60 * NANOSECONDS_PER_SECOND, 1),
    "s": (NANOSECONDS_PER_SECOND, 1),
    "ms": (1_000_000, 1),
    "us": (1000, 1),
    "ns": (1, 1),
    "ps": (1, 1000),
    "fs": (1, 1_000_000),
    "as": (1, 1_000_000_000),
}
"""dict[str, tuple[int, int]]: Nanoseconds per ``numpy.datetime64`` unit, as (numerator, denominator)."""


class TimeScaleConverter(ABC):
    """Abstract mapping between calendar timestamps and continuous atomic time.

    Atomic time is whole seconds since 1972-01-01T00:00:00 TAI plus a sub-second fraction.
    """

    @abstractmethod
    def toAtomicTime(self, timestamp: CalendarTimestamp) -> tuple[int, Decimal]:
        """Convert a calendar timestamp to atomic time.

        Args:
            timestamp (``datetime.datetime`` | ``numpy.datetime64``): UTC calendar timestamp.
                Naive ``datetime`` objects are interpreted as UTC.

        Returns:
            tuple[int, Decimal]: whole TAI seconds, and the sub-second fraction in [0, 1).
        """
        raise NotImplementedError

    @abstractmethod
    def fromAtomicTime(self, seconds: int, microseconds: int = 0) -> datetime.datetime:
        """Convert an atomic-time instant to a calendar timestamp.

        Args:
            seconds (int): whole TAI seconds.
            microseconds (int, optional): sub-second part, in microseconds (0-999999).

        Returns:
            datetime.datetime: timezone-aware UTC calendar timestamp.
        """
        raise NotImplementedError


def splitTimestamp(timestamp: CalendarTimestamp) -> tuple[int, int]:
    """Split a UTC calendar timestamp into whole seconds & nanoseconds since 1972-01-01 UTC.

    Leap seconds are not counted, every UTC day is exactly :data:`.SECONDS_PER_DAY` long.

    Raises:
        TypeError: If `timestamp` isn't a ``datetime.datetime`` or ``numpy.datetime64``.
        ValueError: If `timestamp` is ``NaT``.
    """
    if isinstance(timestamp, datetime.datetime):
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=datetime.timezone.utc)
        delta = timestamp.astimezone(datetime.timezone.utc) - UTC_ZERO
        seconds = delta.days * SECONDS_PER_DAY + delta.seconds
        return seconds, delta.microseconds * 1000

    if isinstance(timestamp, np.datetime64):
        if np.isnat(timestamp):
            raise ValueError("Cannot convert NaT to atomic time")
        unit, count = np.datetime_data(timestamp.dtype)
        if unit in ("Y", "M"):
            # Years & months vary in length
            timestamp = timestamp.astype("datetime64[D]")
            unit, count = "D", 1
        numerator, denominator = _UNIT_NANOSECONDS[unit]
        ticks = int(timestamp.astype(np.int64)) * count
        elapsed_ns = ticks * numerator // denominator - _UTC_ZERO_NS
        seconds, nanoseconds = divmod(elapsed_ns, NANOSECONDS_PER_SECOND)
        return seconds, nanoseconds

    err = f"Unsupported calendar timestamp type: {type(timestamp)}"
    raise TypeError(err)


class LeapSecondTableConverter(TimeScaleConverter):
    """:class:`.TimeScaleConverter` backed by a :class:`.LeapSecondTable`.

    Timestamps outside of the table's validity horizon are converted with the nearest TAI-UTC
    value. This is reported as a logged warning, or as a :class:`.ConversionAmbiguity` when
    `strict` is enabled.

    An instant inside an inserted leap second (23:59:60 UTC) can't be represented as a
    ``datetime``, it saturates to 23:59:59.999999 of the same day.
    """

    def __init__(self, table: LeapSecondTable, strict: bool | None = None):
        """Build the converter.

        Args:
            table (LeapSecondTable): TAI-UTC steps to convert with.
            strict (bool, optional): whether to raise on timestamps outside of the table's
                validity horizon. Defaults to ``None``, which uses ``[leap_seconds] StrictValidity``.
        """
        self._table = table
        self._strict = strict
        zero_date = UTC_ZERO.date()
        # UTC & TAI second counts at which each TAI-UTC step starts
        self._utc_starts = np.array(
            [(entry.date - zero_date).days * SECONDS_PER_DAY for entry in table],
            dtype=np.int64,
        )
        self._offsets = np.array([entry.delta_atomic_time for entry in table], dtype=np.int64)
        self._tai_starts = self._utc_starts + self._offsets

    @property
    def table(self) -> LeapSecondTable:
        """LeapSecondTable: TAI-UTC steps used by this converter."""
        return self._table

    @property
    def strict(self) -> bool:
        """bool: whether timestamps outside of the validity horizon raise."""
        if self._strict is None:
            return BehavioralConfig.getConfig().leap_seconds.StrictValidity
        return self._strict

    def toAtomicTime(self, timestamp: CalendarTimestamp) -> tuple[int, Decimal]:
        """Convert a calendar timestamp to (whole TAI seconds, fraction in [0, 1))."""
        utc_seconds, nanoseconds = splitTimestamp(timestamp)
        self._checkHorizon(utc_seconds)

        index = int(np.searchsorted(self._utc_starts, utc_seconds, side="right")) - 1
        offset = int(self._offsets[max(index, 0)])

        return utc_seconds + offset, Decimal(nanoseconds) / NANOSECONDS_PER_SECOND

    def fromAtomicTime(self, seconds: int, microseconds: int = 0) -> datetime.datetime:
        """Convert (whole TAI seconds, microseconds) to an aware UTC ``datetime``.

        Raises:
            ValueError: If `microseconds` isn't in [0, 999999].
            OutOfRangeError: If the instant can't be represented as a ``datetime``.
        """
        if not 0 <= microseconds < MICROSECONDS_PER_SECOND:
            err = f"Sub-second part must be in [0, {MICROSECONDS_PER_SECOND}) microseconds: {microseconds}"
            raise ValueError(err)

        index = max(int(np.searchsorted(self._tai_starts, seconds, side="right")) - 1, 0)
        utc_seconds = seconds - int(self._offsets[index])

        if index + 1 < len(self._utc_starts) and utc_seconds >= self._utc_starts[index + 1]:
            # Inside the inserted leap second
            v2xtimeLogDebug(f"TAI second {seconds} falls inside a leap second, saturating")
            utc_seconds = int(self._utc_starts[index + 1]) - 1
            microseconds = MICROSECONDS_PER_SECOND - 1

        self._checkHorizon(utc_seconds)
        try:
            return UTC_ZERO + datetime.timedelta(seconds=utc_seconds, microseconds=microseconds)
        except OverflowError as err:
            msg = f"TAI second {seconds} is outside of the representable calendar range"
            raise OutOfRangeError(msg) from err

    def _checkHorizon(self, utc_seconds: int):
        """Report timestamps outside of the table's validity horizon.

        Raises:
            ConversionAmbiguity: If :attr:`.strict` and `utc_seconds` is outside of the horizon.
        """
        days = utc_seconds // SECONDS_PER_DAY
        try:
            utc_date = UTC_ZERO.date() + datetime.timedelta(days=days)
        except OverflowError:
            utc_date = datetime.date.min if days < 0 else datetime.date.max

        if self._table.validOn(utc_date):
            return

        msg = (
            f"UTC date {utc_date} is outside of the leap-second table's validity horizon "
            f"({self._table.earliestDate()} to {self._table.expiration}), TAI-UTC is approximated"
        )
        if self.strict:
            raise ConversionAmbiguity(msg)
        v2xtimeLogWarning(msg)
