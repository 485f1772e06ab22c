"""Contains the ``Time64`` elapsed-time field of V2X security certificates.

A ``Time64`` counts International Atomic Time (TAI) microseconds since an epoch that depends on the
certificate version: 2010-01-01T00:00:00 UTC for version 1, 2004-01-01T00:00:00 UTC for version 2.
"""

from __future__ import annotations

# Local Imports
# forward-facing API import
from .codec import MAX_ELAPSED_TIME, TIME64_LENGTH, decodeTime64Array, encodeTime64Array  # noqa: F401
from .epochs import CertificateVersion, epochBaseSeconds  # noqa: F401
from .time64 import Time64  # noqa: F401
