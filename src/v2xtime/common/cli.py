"""Define the command line interface for converting single ``Time64`` fields."""

from __future__ import annotations

# Standard Library Imports
import argparse
from datetime import datetime

# Local Imports
from ..time64 import TIME64_LENGTH, CertificateVersion, Time64
from .exceptions import FormatError
from .logger import v2xtimeLogError


def timestampChecker(timestamp):
    """Checks for valid ISO-8601 timestamps passed to the CLI parser.

    Args:
        timestamp (``str``): timestamp given to CLI parser. Timestamps without an offset are UTC.

    Raises:
        argparse.ArgumentTypeError: if the timestamp can't be parsed

    Returns:
        ``datetime``: parsed timestamp
    """
    try:
        return datetime.fromisoformat(timestamp)
    except ValueError as err:
        v2xtimeLogError("Bad timestamp given to CLI")
        raise argparse.ArgumentTypeError(f"invalid ISO-8601 timestamp: {timestamp!r}") from err


def fieldChecker(hex_field):
    """Checks for valid hexadecimal ``Time64`` fields passed to the CLI parser.

    Args:
        hex_field (``str``): wire field given to CLI parser, as hexadecimal digits.

    Raises:
        argparse.ArgumentTypeError: if the field isn't exactly 8 bytes of hexadecimal

    Returns:
        :class:`.Time64`: decoded field
    """
    try:
        data = bytes.fromhex(hex_field)
        if len(data) != TIME64_LENGTH:
            raise FormatError(f"expected {TIME64_LENGTH} bytes, got {len(data)}")
        return Time64.fromBytes(data)
    except (ValueError, FormatError) as err:
        v2xtimeLogError("Bad Time64 field given to CLI")
        raise argparse.ArgumentTypeError(f"invalid Time64 field {hex_field!r}: {err}") from err


def getCommandLineParser():
    """Create parser for command line arguments.

    Returns:
        ``argparse.ArgumentParser``: valid parser object
    """
    parser = argparse.ArgumentParser(description="V2X certificate Time64 converter")
    parser.add_argument(
        "-c",
        "--cert-version",
        dest="cert_version",
        metavar="VERSION",
        default=CertificateVersion.V2,
        type=int,
        choices=[int(version) for version in CertificateVersion],
        help="Certificate version selecting the epoch. DEFAULT: 2",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    encode_cmd = commands.add_parser("encode", help="Encode an ISO-8601 UTC timestamp")
    encode_cmd.add_argument(
        "timestamp",
        metavar="TIMESTAMP",
        type=timestampChecker,
        help="ISO-8601 timestamp, UTC unless an offset is given",
    )

    decode_cmd = commands.add_parser("decode", help="Decode a hexadecimal Time64 field")
    decode_cmd.add_argument(
        "value",
        metavar="HEX",
        type=fieldChecker,
        help="16 hexadecimal digits",
    )

    return parser
