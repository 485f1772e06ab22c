"""Certificate versions and the atomic-time epoch each one counts elapsed time from."""

from __future__ import annotations

# Standard Library Imports
from enum import IntEnum


class CertificateVersion(IntEnum):
    """Certificate generations, valued with the certificate's version field."""

    V1 = 1
    V2 = 2


SECONDS_BETWEEN_TAI_ZERO_AND_2010: int = 1199232034
"""int: 2010-01-01T00:00:00 UTC, in TAI seconds since 1972-01-01T00:00:00 TAI."""

SECONDS_BETWEEN_TAI_ZERO_AND_2004: int = 1009843232
"""int: 2004-01-01T00:00:00 UTC, in TAI seconds since 1972-01-01T00:00:00 TAI."""

EPOCH_BASE_SECONDS: dict[CertificateVersion, int] = {
    CertificateVersion.V1: SECONDS_BETWEEN_TAI_ZERO_AND_2010,
    CertificateVersion.V2: SECONDS_BETWEEN_TAI_ZERO_AND_2004,
}
"""dict[CertificateVersion, int]: TAI-seconds epoch base per certificate version."""


def epochBaseSeconds(version: CertificateVersion | int) -> int:
    """Return the TAI-seconds epoch that `version` counts elapsed time from.

    Args:
        version (CertificateVersion | int): certificate version, or its raw version number.

    Raises:
        ValueError: If `version` isn't a known certificate version.
    """
    return EPOCH_BASE_SECONDS[CertificateVersion(version)]
