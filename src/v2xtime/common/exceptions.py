"""Contains all the custom-defined exceptions used in v2xtime."""

from __future__ import annotations


class FormatError(Exception):
    """Exception indicating a truncated or malformed ``Time64`` wire field."""


class OutOfRangeError(ValueError):
    """Exception indicating an elapsed time outside the unsigned 64-bit microsecond range."""


class ConversionAmbiguity(Exception):  # noqa: N818
    """Exception indicating a timestamp outside the leap-second table's validity horizon.

    Only raised when ``[leap_seconds] StrictValidity`` is enabled, otherwise the conversion is
    logged as a best-effort approximation.
    """


class MissingLeapSecondData(Exception):  # noqa: N818
    """Exception indicating a leap-second source didn't provide any usable entries."""
