from __future__ import annotations

# Standard Library Imports
import io
import random

# Third Party Imports
import numpy as np
import pytest

# v2xtime Imports
from v2xtime.common.exceptions import FormatError, OutOfRangeError
from v2xtime.time64 import MAX_ELAPSED_TIME, TIME64_LENGTH, Time64
from v2xtime.time64.codec import (
    checkElapsedTime,
    decodeTime64,
    decodeTime64Array,
    encodeTime64,
    encodeTime64Array,
    packElapsedTime,
    readExactly,
    unpackElapsedTime,
)


class TrickleStream(io.RawIOBase):
    """Binary source that only ever returns a few bytes per read."""

    def __init__(self, data: bytes, chunk: int = 3):
        self._data = data
        self._chunk = chunk

    def readable(self) -> bool:
        return True

    def read(self, size: int = -1) -> bytes:
        size = self._chunk if size < 0 else min(size, self._chunk)
        chunk, self._data = self._data[:size], self._data[size:]
        return chunk


def testZeroVector():
    """Zero encodes to eight zero bytes, and back."""
    assert packElapsedTime(0) == b"\x00" * TIME64_LENGTH
    assert Time64.fromBytes(b"\x00" * TIME64_LENGTH).asElapsedTime() == 0


def testUnitVector():
    """One encodes to seven zero bytes followed by 0x01."""
    assert packElapsedTime(1) == b"\x00" * 7 + b"\x01"


def testKnownVector():
    """Big-endian layout of a realistic elapsed time."""
    assert packElapsedTime(470750405000000) == bytes.fromhex("0001ac251eaafb40")
    assert unpackElapsedTime(bytes.fromhex("0001ac251eaafb40")) == 470750405000000


def testUnsignedInterpretation():
    """A leading 0xFF byte is never read as a negative value."""
    assert unpackElapsedTime(b"\xff" * TIME64_LENGTH) == MAX_ELAPSED_TIME
    assert unpackElapsedTime(b"\x80" + b"\x00" * 7) == 2**63


def testRawRoundTrip():
    """Encode & decode preserves the raw elapsed count, with a fixed width."""
    values = [0, 1, 255, 256, 2**32, 2**63 - 1, 2**63, MAX_ELAPSED_TIME]
    values.extend(random.randint(0, MAX_ELAPSED_TIME) for _ in range(256))
    for value in values:
        encoded = packElapsedTime(value)
        assert len(encoded) == TIME64_LENGTH
        assert Time64.fromBytes(encoded).asElapsedTime() == value


def testOverflowRejected():
    """Values that don't fit 64 unsigned bits are rejected, never truncated."""
    with pytest.raises(OutOfRangeError):
        packElapsedTime(2**64)
    with pytest.raises(OutOfRangeError):
        packElapsedTime(-1)
    with pytest.raises(OutOfRangeError):
        checkElapsedTime(2**72 + 5)


def testNonInteger():
    """Floats aren't silently truncated into an elapsed time."""
    with pytest.raises(TypeError):
        checkElapsedTime(1.5)
    with pytest.raises(TypeError):
        checkElapsedTime(False)
    with pytest.raises(TypeError):
        encodeTime64Array([1, True])
    assert checkElapsedTime(np.uint64(42)) == 42


def testShortRead():
    """Fewer than eight bytes raise a :class:`.FormatError`."""
    with pytest.raises(FormatError):
        unpackElapsedTime(b"\x00" * 7)
    with pytest.raises(FormatError):
        decodeTime64(io.BytesIO(b"\x01\x02\x03"))
    with pytest.raises(FormatError):
        decodeTime64(io.BytesIO(b""))


def testStreamRoundTrip():
    """Consecutive fields are written to, and read from, a binary stream."""
    values = [Time64(0), Time64(1), Time64(MAX_ELAPSED_TIME)]
    buffer = io.BytesIO()
    for value in values:
        encodeTime64(value, buffer)
    assert len(buffer.getvalue()) == len(values) * TIME64_LENGTH

    buffer.seek(0)
    assert [decodeTime64(buffer) for _ in values] == values
    # Stream is exhausted
    with pytest.raises(FormatError):
        decodeTime64(buffer)


def testPartialReads():
    """Partial reads are retried until a whole field is available."""
    stream = TrickleStream(packElapsedTime(123456789) + b"\xaa")
    assert decodeTime64(stream) == Time64(123456789)
    assert readExactly(stream, 1) == b"\xaa"


def testReadFailurePropagates():
    """Errors of the underlying stream aren't swallowed."""

    class BrokenStream(io.RawIOBase):
        def read(self, size: int = -1) -> bytes:
            raise OSError("device unplugged")

    with pytest.raises(OSError, match="device unplugged"):
        decodeTime64(BrokenStream())


def testFreshInstances():
    """Each decode produces a new, equal value."""
    data = packElapsedTime(99)
    first = decodeTime64(io.BytesIO(data))
    second = decodeTime64(io.BytesIO(data))
    assert first == second
    assert first is not second


def testArrayCodec():
    """A run of fields packs into contiguous big-endian words."""
    values = [Time64(0), Time64(1), Time64(470750405000000), Time64(MAX_ELAPSED_TIME)]
    data = encodeTime64Array(values)

    assert len(data) == len(values) * TIME64_LENGTH
    assert data == b"".join(value.toBytes() for value in values)
    assert decodeTime64Array(data) == values
    # Raw counts are accepted too
    assert encodeTime64Array([0, 1, MAX_ELAPSED_TIME]) == data[:8] + data[8:16] + data[24:]
    assert encodeTime64Array([]) == b""
    assert decodeTime64Array(b"") == []


def testArrayCodecErrors():
    """Ragged buffers and out-of-range counts are rejected."""
    with pytest.raises(FormatError):
        decodeTime64Array(b"\x00" * 12)
    with pytest.raises(OutOfRangeError):
        encodeTime64Array([1, 2**64])
