from __future__ import annotations

# Standard Library Imports
import logging

# Third Party Imports
import pytest

# v2xtime Imports
from v2xtime import main
from v2xtime.common import cli

# Local Imports
from .. import TEST_DATETIME_V1_ELAPSED, TEST_DATETIME_V2_ELAPSED


@pytest.fixture(autouse=True)
def _resetLibraryLogger() -> None:
    """Drop the handlers :func:`.main()` attaches, they hold on to captured streams."""
    yield
    library_logger = logging.getLogger("v2xtime")
    library_logger.handlers.clear()
    library_logger.setLevel(logging.NOTSET)


def validateArgs(args):
    """Wrap `parser.parseargs()` to catch `SystemExit` for easier unit testing."""
    try:
        parser = cli.getCommandLineParser()
        parser.parse_args(args)
        return True
    except SystemExit:
        return False


def testEncodeArgs():
    """Test valid and invalid timestamps."""
    assert validateArgs(["encode", "2018-12-01T12:00:00"]) is True
    assert validateArgs(["encode", "2018-12-01T12:00:00+02:00"]) is True
    assert validateArgs(["-c", "1", "encode", "2018-12-01"]) is True
    assert validateArgs(["encode", "yesterday"]) is False
    assert validateArgs(["encode"]) is False


def testDecodeArgs():
    """Test valid and invalid wire fields."""
    assert validateArgs(["decode", "0001ac251eaafb40"]) is True
    assert validateArgs(["--cert-version", "2", "decode", "0001AC251EAAFB40"]) is True
    # Short, long, and non-hexadecimal fields
    assert validateArgs(["decode", "0001ac251eaafb"]) is False
    assert validateArgs(["decode", "0001ac251eaafb4000"]) is False
    assert validateArgs(["decode", "zz01ac251eaafb40"]) is False


def testCertVersionArgs():
    """Only known certificate versions are accepted."""
    assert validateArgs(["-c", "3", "decode", "0001ac251eaafb40"]) is False
    assert validateArgs(["-c", "two", "decode", "0001ac251eaafb40"]) is False
    assert validateArgs(["decode"]) is False
    assert validateArgs([]) is False


def testMainEncode(capsys: pytest.CaptureFixture):
    """Encoding prints the 16 hexadecimal digits of the field."""
    main(["encode", "2018-12-01T12:00:00+00:00"])
    assert capsys.readouterr().out.strip() == f"{TEST_DATETIME_V2_ELAPSED:016x}"

    main(["-c", "1", "encode", "2018-12-01T14:00:00+02:00"])
    assert capsys.readouterr().out.strip() == f"{TEST_DATETIME_V1_ELAPSED:016x}"


def testMainDecode(capsys: pytest.CaptureFixture):
    """Decoding prints the verbose representation."""
    main(["decode", f"{TEST_DATETIME_V2_ELAPSED:016x}"])
    assert capsys.readouterr().out.strip() == "Time64 [2018-12-01T12:00:00.000000+00:00 (470750405000000)]"


def testMainBeforeEpoch():
    """Timestamps before the epoch exit with an error."""
    with pytest.raises(SystemExit):
        main(["-c", "1", "encode", "2009-12-31T23:59:59"])


def testMainLogRouting(capsys: pytest.CaptureFixture):
    """Library warnings go to the configured log output, never into the printed field."""
    main(["encode", "2035-01-01T00:00:00+00:00"])

    assert logging.getLogger("v2xtime").handlers
    captured = capsys.readouterr()
    assert len(captured.out.strip()) == 16
    assert int(captured.out.strip(), 16) > 0
    assert "WARNING" in captured.err
    assert "validity horizon" in captured.err
