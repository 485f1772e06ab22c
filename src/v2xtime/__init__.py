"""Main Module Documentation.

Conversion between calendar time and the ``Time64`` fields of V2X security certificates. The
top-level module also serves as the command line entry point for converting single fields.
"""

from __future__ import annotations

__version__ = "1.0.0"


def main(argv: list[str] | None = None) -> None:
    """v2xtime main entry point.

    This is the function that the :command:`v2xtime` command points to. See :mod:`.cli` for
    details on what command line options are available.
    """
    # Local Imports
    from .common.cli import getCommandLineParser
    from .common.exceptions import ConversionAmbiguity, OutOfRangeError
    from .common.logger import LOGGER_NAME, Logger
    from .time64 import Time64
    from .time64.time64 import toHex

    # Route library messages to the configured `[logging]` output
    Logger(LOGGER_NAME)

    parser = getCommandLineParser()
    cli_args = parser.parse_args(argv)

    try:
        if cli_args.command == "encode":
            print(toHex(Time64.fromDatetime(cli_args.cert_version, cli_args.timestamp)))
        else:
            print(cli_args.value.verboseString(cli_args.cert_version))
    except (OutOfRangeError, ConversionAmbiguity) as err:
        parser.error(str(err))
