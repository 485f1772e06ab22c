"""Module defining the infrastructure used to retrieve leap-second tables from various sources."""

from __future__ import annotations

# Standard Library Imports
import datetime
import re
from abc import ABC, abstractmethod
from importlib import resources
from pathlib import Path
from urllib.parse import urlparse
from urllib.request import urlopen

# Local Imports
from ..common.exceptions import MissingLeapSecondData
from ..common.logger import v2xtimeLogDebug, v2xtimeLogError
from ..common.utilities import loadDatComments, loadDatFile
from . import LeapSecond, LeapSecondTable


class LeapSecondLoader(ABC):
    """Abstract class defining how leap-second tables should be loaded."""

    def __init__(self, location: str):
        """Initializes the loader.

        Args:
            location (str): Specifies where the leap-second content to load is located.
        """
        self._location: str = location
        self._leap_seconds: dict[datetime.date, LeapSecond] = {}
        self._expiration: datetime.date | None = None
        self._is_loaded: bool = False
        self._table: LeapSecondTable | None = None

    def getLeapSecondTable(self) -> LeapSecondTable:
        """Return the :class:`.LeapSecondTable` built from this loader's content.

        Raises:
            MissingLeapSecondData: If the loaded content didn't provide any TAI-UTC steps.
        """
        if not self._is_loaded:
            self.load()

        if not self._leap_seconds:
            err = f"No leap-second data found at: {self._location}"
            raise MissingLeapSecondData(err)

        if self._table is None:
            self._table = LeapSecondTable(self._leap_seconds.values(), expiration=self._expiration)
        return self._table

    @abstractmethod
    def load(self):
        """Load the leap-second content into local memory.

        A concrete implementation of this method should set the :attr:`._is_loaded` to ``True``.
        """
        raise NotImplementedError

    def setLeapSecond(self, effective_date: datetime.date, delta_atomic_time: int):
        """Set the TAI-UTC value taking effect on `effective_date`.

        Args:
            effective_date (datetime.date): UTC date the new offset is in effect from.
            delta_atomic_time (int): TAI-UTC, in seconds, from `effective_date` on.

        Raises:
            TypeError: If `effective_date` is not a valid type.
        """
        if isinstance(effective_date, datetime.datetime):
            effective_date = effective_date.date()
        elif not isinstance(effective_date, datetime.date):
            err = f"Unexpected 'effective_date' type: {type(effective_date)}"
            raise TypeError(err)

        if not self._is_loaded:
            self.load()
        self._leap_seconds[effective_date] = LeapSecond(effective_date, int(delta_atomic_time))
        self._table = None

    def setExpiration(self, expiration: datetime.date | None):
        """Override the end of the validity horizon of the loaded table."""
        if not self._is_loaded:
            self.load()
        self._expiration = expiration
        self._table = None


class DotDatLeapSecondLoader(LeapSecondLoader, ABC):
    """Abstract interface defining how to properly load an IERS ``Leap_Second.dat`` file.

    Rows are ``MJD day month year TAI-UTC``, and the validity horizon is read from the
    ``File expires on DD Month YYYY`` comment line.
    """

    EXPIRATION_PATTERN = re.compile(r"File expires on\s+(\d{1,2})\s+([A-Za-z]+)\s+(\d{4})")
    """re.Pattern: Matches the expiration header of the '.dat' format."""

    COLUMN_COUNT: int = 5
    """int: Number of columns in each data row."""

    def _parseDatData(self, raw_data: list[list[float]]):
        """Loads the specified `raw_data` into local memory.

        Args:
            raw_data (list[list[float]]): leap-second data file contents parsed using
                :meth:`.loadDatFile()`.
        """
        for row in raw_data:
            if len(row) != self.COLUMN_COUNT:
                err = f"Malformed leap-second row in {self._location}: {row}"
                v2xtimeLogError(err)
                raise ValueError(err)

            effective_date = datetime.date(int(row[3]), int(row[2]), int(row[1]))
            self._leap_seconds[effective_date] = LeapSecond(
                date=effective_date,
                delta_atomic_time=int(row[4]),
            )
        self._table = None
        self._is_loaded = True

    def _parseDatComments(self, comments: list[str]):
        """Set the validity horizon from the '.dat' comment lines, if one is present."""
        for comment in comments:
            if match := self.EXPIRATION_PATTERN.search(comment):
                self._expiration = datetime.datetime.strptime(" ".join(match.groups()), "%d %B %Y").date()
                v2xtimeLogDebug(f"Leap-second table {self._location} expires on {self._expiration}")
                return

    def _loadPath(self, path: str | Path):
        """Parse the '.dat' file at `path`."""
        raw_data = loadDatFile(path)
        self._parseDatComments(loadDatComments(path))
        self._parseDatData(raw_data)


class ModuleDotDatLeapSecondLoader(DotDatLeapSecondLoader):
    """Concrete class defining how leap seconds should be loaded as a Python module resource."""

    DATA_MODULE: str = "v2xtime.timescale.data"
    """``str``: defines leap-second data module location."""

    def load(self) -> None:
        """Loads the leap-second resources."""
        res = resources.files(self.DATA_MODULE).joinpath(self._location)
        with resources.as_file(res) as file_resource:
            self._loadPath(file_resource)


class LocalDotDatLeapSecondLoader(DotDatLeapSecondLoader):
    """Concrete class defining how leap seconds should be loaded as a local '.dat' file."""

    def __init__(self, location: str) -> None:
        """Initializes the loader.

        Args:
            location (str): Path to the local leap-second '.dat' file.
        """
        super().__init__(location)
        self._path = Path(self._location)

    def load(self) -> None:
        """Load the leap-second content into local memory."""
        self._loadPath(self._path)


class RemoteDotDatLeapSecondLoader(DotDatLeapSecondLoader):
    """Concrete class defining how leap seconds should be loaded from a remote '.dat' file."""

    CACHE_LOCATION = Path("~/.v2xtime/leap-second-cache/").expanduser()
    """Path: Path to directory that remote files are cached in."""

    def __init__(self, location: str, clear_cache: bool = False) -> None:
        """Initializes the Loader.

        Args:
            location (str): URL to remote leap-second data file.
            clear_cache (bool,optional): Flag indicating whether to clear the cached data file
                to force pulling data from the URL.
        """
        super().__init__(location)
        self._parsed_url = urlparse(self._location)
        if not self._parsed_url.netloc:
            err = f"Unable to parse URL: {self._location}"
            raise ValueError(err)

        fs_safe_netloc = self._parsed_url.netloc.replace(".", "_")
        fs_safe_url_path = self._parsed_url.path
        if fs_safe_url_path.startswith("/"):
            fs_safe_url_path = fs_safe_url_path[1:]
        self._cache_path = self.CACHE_LOCATION / fs_safe_netloc / fs_safe_url_path
        if clear_cache:
            self._cache_path.unlink(missing_ok=True)

    @property
    def cache_path(self) -> Path:
        """Path: location the remote file is cached at."""
        return self._cache_path

    def load(self) -> None:
        """Download the remote file into the cache if needed, then load it."""
        if not self._cache_path.exists():
            v2xtimeLogDebug(f"Downloading leap-second data from {self._location}")
            self._cache_path.parent.mkdir(parents=True, exist_ok=True)
            with (
                urlopen(self._location) as remote_data,  # noqa: S310
                open(self._cache_path, "wb") as cache_file,
            ):
                for line in remote_data:
                    if line.lstrip().startswith(b"#"):
                        cache_file.write(line)
                        continue
                    try:
                        parsed = [float(x) for x in line.split()]
                    except ValueError:
                        continue
                    if parsed:
                        cache_file.write(line)

        self._loadPath(self._cache_path)
