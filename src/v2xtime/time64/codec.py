"""Fixed-width wire codec for :class:`.Time64` fields.

A ``Time64`` field is exactly :data:`.TIME64_LENGTH` octets: an unsigned 64-bit, big-endian count
of elapsed TAI microseconds. The certificate version (and so the epoch) is not carried in the
bytes.
"""

from __future__ import annotations

# Standard Library Imports
import operator
from typing import TYPE_CHECKING, BinaryIO

# Third Party Imports
import numpy as np

# Local Imports
from ..common.exceptions import FormatError, OutOfRangeError

# Type Checking Imports
if TYPE_CHECKING:
    # Standard Library Imports
    from collections.abc import Iterable

    # Local Imports
    from .time64 import Time64


TIME64_LENGTH: int = 8
"""int: Size of an encoded ``Time64`` field, in bytes."""

MAX_ELAPSED_TIME: int = 2**64 - 1
"""int: Largest elapsed time representable on the wire, in microseconds."""

TIME64_DTYPE = np.dtype(">u8")
"""numpy.dtype: Big-endian, unsigned 64-bit integer."""


def checkElapsedTime(elapsed_time) -> int:
    """Validate `elapsed_time` as an unsigned 64-bit microsecond count.

    Args:
        elapsed_time (int): elapsed microseconds; any object supporting ``__index__``.

    Returns:
        int: `elapsed_time` as a plain ``int``.

    Raises:
        TypeError: If `elapsed_time` isn't an integer, or is a ``bool``.
        OutOfRangeError: If `elapsed_time` is negative or larger than :data:`.MAX_ELAPSED_TIME`.
    """
    if isinstance(elapsed_time, bool):
        err = f"Elapsed time must be an integer, not {elapsed_time!r}"
        raise TypeError(err)
    value = operator.index(elapsed_time)
    if value < 0:
        err = f"Elapsed time can't be negative: {value}"
        raise OutOfRangeError(err)
    if value > MAX_ELAPSED_TIME:
        err = f"Elapsed time exceeds the unsigned 64-bit range: {value}"
        raise OutOfRangeError(err)
    return value


def packElapsedTime(elapsed_time: int) -> bytes:
    """Return the :data:`.TIME64_LENGTH`-byte, big-endian, zero-padded encoding of `elapsed_time`.

    Raises:
        OutOfRangeError: If `elapsed_time` doesn't fit an unsigned 64-bit field.
    """
    return checkElapsedTime(elapsed_time).to_bytes(TIME64_LENGTH, "big", signed=False)


def unpackElapsedTime(data: bytes) -> int:
    """Interpret the first :data:`.TIME64_LENGTH` bytes of `data` as an unsigned elapsed time.

    Raises:
        FormatError: If fewer than :data:`.TIME64_LENGTH` bytes are available.
    """
    if len(data) < TIME64_LENGTH:
        err = f"Time64 field requires {TIME64_LENGTH} bytes, got {len(data)}"
        raise FormatError(err)
    return int.from_bytes(data[:TIME64_LENGTH], "big", signed=False)


def readExactly(source: BinaryIO, size: int) -> bytes:
    """Read exactly `size` bytes from `source`, retrying partial reads.

    Raises:
        FormatError: If `source` is exhausted before `size` bytes were read.
    """
    buffer = bytearray()
    while len(buffer) < size:
        chunk = source.read(size - len(buffer))
        if not chunk:
            err = f"Unexpected end of stream: needed {size} bytes, got {len(buffer)}"
            raise FormatError(err)
        buffer.extend(chunk)
    return bytes(buffer)


def encodeTime64(value: Time64, out: BinaryIO):
    """Write the wire encoding of `value` to the binary sink `out`."""
    out.write(packElapsedTime(value.asElapsedTime()))


def decodeTime64(source: BinaryIO) -> Time64:
    """Read a single wire-encoded field from the binary stream `source`.

    Raises:
        FormatError: If `source` ends before a whole field was read.
    """
    # Local Imports
    from .time64 import Time64

    return Time64(unpackElapsedTime(readExactly(source, TIME64_LENGTH)))


def encodeTime64Array(values: Iterable[Time64 | int]) -> bytes:
    """Pack a contiguous run of ``Time64`` fields.

    Args:
        values (Iterable[Time64 | int]): values, or raw elapsed microsecond counts.

    Raises:
        OutOfRangeError: If a raw count doesn't fit an unsigned 64-bit field.
    """
    elapsed = [
        value.asElapsedTime() if hasattr(value, "asElapsedTime") else checkElapsedTime(value)
        for value in values
    ]
    return np.array(elapsed, dtype=TIME64_DTYPE).tobytes()


def decodeTime64Array(data: bytes) -> list[Time64]:
    """Unpack a contiguous run of ``Time64`` fields.

    Raises:
        FormatError: If the length of `data` isn't a multiple of :data:`.TIME64_LENGTH`.
    """
    # Local Imports
    from .time64 import Time64

    if len(data) % TIME64_LENGTH:
        err = f"Time64 array length must be a multiple of {TIME64_LENGTH} bytes, got {len(data)}"
        raise FormatError(err)
    return [Time64(int(elapsed)) for elapsed in np.frombuffer(data, dtype=TIME64_DTYPE)]
