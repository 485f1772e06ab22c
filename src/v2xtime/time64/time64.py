"""Defines the :class:`.Time64` elapsed-time value."""

from __future__ import annotations

# Standard Library Imports
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, BinaryIO

# Local Imports
from ..common.exceptions import OutOfRangeError
from ..common.utilities import getTypeString
from ..timescale import getDefaultConverter
from ..timescale.converter import MICROSECONDS_PER_SECOND
from .codec import checkElapsedTime, decodeTime64, encodeTime64, packElapsedTime, unpackElapsedTime
from .epochs import epochBaseSeconds

# Type Checking Imports
if TYPE_CHECKING:
    # Standard Library Imports
    import datetime

    # Local Imports
    from ..timescale.converter import CalendarTimestamp, TimeScaleConverter
    from .epochs import CertificateVersion


@dataclass(frozen=True, order=True, repr=False)
class Time64:
    """Number of International Atomic Time (TAI) microseconds since a certificate epoch.

    For version 2 certificates the epoch is 2004-01-01T00:00:00 UTC, for version 1 certificates
    it's 2010-01-01T00:00:00 UTC. The epoch is not stored: the same value can be viewed as a
    calendar timestamp under either version, so callers re-supply the version when they need one.

    Equality, hashing & ordering only depend on the elapsed microsecond count.

    Important:
        Converting from a calendar timestamp is lossy: sub-microsecond precision is truncated, and
        a timestamp during a leap second can't be recovered exactly.
    """

    elapsed_time: int
    """int: elapsed TAI microseconds, in [0, 2**64 - 1]."""

    def __post_init__(self):
        """Validate the elapsed time.

        Raises:
            TypeError: If `elapsed_time` isn't an integer.
            OutOfRangeError: If `elapsed_time` doesn't fit an unsigned 64-bit field.
        """
        object.__setattr__(self, "elapsed_time", checkElapsedTime(self.elapsed_time))

    @classmethod
    def fromDatetime(
        cls,
        version: CertificateVersion | int,
        timestamp: CalendarTimestamp,
        converter: TimeScaleConverter | None = None,
    ) -> Time64:
        """Convert a UTC calendar timestamp to the elapsed time since `version`'s epoch.

        Args:
            version (CertificateVersion | int): certificate version selecting the epoch.
            timestamp (``datetime.datetime`` | ``numpy.datetime64``): UTC calendar timestamp;
                naive ``datetime`` objects are interpreted as UTC.
            converter (TimeScaleConverter, optional): converter from calendar time to TAI.
                Defaults to ``None``, which uses :func:`.getDefaultConverter()`.

        Raises:
            OutOfRangeError: If `timestamp` is before the epoch, or too far after it.
        """
        if converter is None:
            converter = getDefaultConverter()

        seconds, fraction = converter.toAtomicTime(timestamp)
        elapsed = (Decimal(seconds - epochBaseSeconds(version)) + fraction) * MICROSECONDS_PER_SECOND
        if elapsed < 0:
            err = f"{timestamp} is before the epoch of certificate version {int(version)}"
            raise OutOfRangeError(err)

        # int() truncates toward zero
        return cls(int(elapsed))

    @classmethod
    def decode(cls, source: BinaryIO) -> Time64:
        """Read a new :class:`.Time64` from the binary stream `source`.

        Raises:
            FormatError: If `source` holds fewer than 8 bytes.
        """
        return decodeTime64(source)

    @classmethod
    def fromBytes(cls, data: bytes) -> Time64:
        """Create a :class:`.Time64` from its 8-byte wire encoding."""
        return cls(unpackElapsedTime(data))

    def asElapsedTime(self) -> int:
        """Return the number of TAI microseconds since the epoch."""
        return self.elapsed_time

    def asDatetime(
        self,
        version: CertificateVersion | int,
        converter: TimeScaleConverter | None = None,
    ) -> datetime.datetime:
        """Return the UTC calendar timestamp, reading the value against `version`'s epoch.

        Args:
            version (CertificateVersion | int): certificate version selecting the epoch.
            converter (TimeScaleConverter, optional): converter from TAI to calendar time.
                Defaults to ``None``, which uses :func:`.getDefaultConverter()`.

        Returns:
            datetime.datetime: timezone-aware UTC timestamp, microsecond precision.
        """
        if converter is None:
            converter = getDefaultConverter()

        seconds, microseconds = divmod(self.elapsed_time, MICROSECONDS_PER_SECOND)
        return converter.fromAtomicTime(seconds + epochBaseSeconds(version), microseconds)

    def encode(self, out: BinaryIO):
        """Write the 8-byte wire encoding to the binary sink `out`."""
        encodeTime64(self, out)

    def toBytes(self) -> bytes:
        """Return the 8-byte wire encoding."""
        return packElapsedTime(self.elapsed_time)

    def verboseString(
        self,
        version: CertificateVersion | int,
        converter: TimeScaleConverter | None = None,
    ) -> str:
        """Return a string representation including the calendar timestamp under `version`."""
        date_time = self.asDatetime(version, converter=converter)
        return f"{getTypeString(self)} [{date_time.isoformat(timespec='microseconds')} ({self.elapsed_time})]"

    def __repr__(self) -> str:
        """Return a string representation of this :class:`.Time64`."""
        return f"{getTypeString(self)} [{self.elapsed_time}]"

    def __str__(self) -> str:
        """Return a string representation of this :class:`.Time64`."""
        return self.__repr__()

    def __bytes__(self) -> bytes:
        """Return the 8-byte wire encoding."""
        return self.toBytes()


def toHex(value: Time64) -> str:
    """Return the wire encoding of `value` as 16 hexadecimal digits."""
    return value.toBytes().hex()
