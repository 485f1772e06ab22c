"""Module defining how to retrieve leap-second tables and converters from various sources."""

from __future__ import annotations

# Standard Library Imports
from collections import namedtuple
from typing import TYPE_CHECKING

# Local Imports
from ..common.behavioral_config import BehavioralConfig
from .converter import LeapSecondTableConverter
from .loaders import (
    LocalDotDatLeapSecondLoader,
    ModuleDotDatLeapSecondLoader,
    RemoteDotDatLeapSecondLoader,
)

if TYPE_CHECKING:
    # Standard Library Imports
    import datetime

    # Local Imports
    from . import LeapSecondTable
    from .loaders import LeapSecondLoader


LoaderTag = namedtuple("LoaderTag", ("loader_name", "loader_location"))
"""NamedTuple: Tag used to identify different :class:`.LeapSecondLoader`'s."""

_LOADER_MAP: dict[str, type[LeapSecondLoader]] = {
    "ModuleDotDatLeapSecondLoader": ModuleDotDatLeapSecondLoader,
    "LocalDotDatLeapSecondLoader": LocalDotDatLeapSecondLoader,
    "RemoteDotDatLeapSecondLoader": RemoteDotDatLeapSecondLoader,
}
"""dict[str, type[LeapSecondLoader]]: Maps loader class names to loader class references."""

_LEAP_SECOND_LOADERS: dict[LoaderTag, LeapSecondLoader] = {}
"""dict[LoaderTag, LeapSecondLoader]: Stores configured loaders based on tag."""

_DEFAULT_CONVERTERS: dict[LoaderTag, LeapSecondTableConverter] = {}
"""dict[LoaderTag, LeapSecondTableConverter]: Stores converters handed out by :func:`.getDefaultConverter()`."""


def _loaderTag(loader_name: str | None = None, loader_location: str | None = None) -> LoaderTag:
    """Return the :class:`.LoaderTag` of `loader_name` & `loader_location`, filling in configured defaults."""
    behave_config = BehavioralConfig.getConfig()
    if loader_name is None:
        loader_name = behave_config.leap_seconds.LoaderName

    if loader_location is None:
        loader_location = behave_config.leap_seconds.LoaderLocation

    return LoaderTag(loader_name, str(loader_location))


def _loadLoader(loader_name: str | None = None, loader_location: str | None = None) -> LeapSecondLoader:
    """Return leap-second loader specified by `loader_name` and `loader_location`.

    Args:
        loader_name (str, optional): Name of the concrete :class:`.LeapSecondLoader` implementation
            to use. Defaults to the configured ``[leap_seconds] LoaderName``.
        loader_location (str, optional): Location that the specified :class:`.LeapSecondLoader`
            will load data from. Defaults to the configured ``[leap_seconds] LoaderLocation``.

    Returns:
        LeapSecondLoader: loader object specified by `loader_name` and `loader_location`.
    """
    tag = _loaderTag(loader_name, loader_location)
    loader = _LEAP_SECOND_LOADERS.get(tag)
    if not loader:
        try:
            loader = _LOADER_MAP[tag.loader_name](tag.loader_location)
        except KeyError:
            err = f"Specified loader '{tag.loader_name}' is undefined"
            raise ValueError(err)  # noqa: B904
        _LEAP_SECOND_LOADERS[tag] = loader
    return loader


def getLeapSecondTable(
    loader_name: str | None = None,
    loader_location: str | None = None,
) -> LeapSecondTable:
    """Return the :class:`.LeapSecondTable` from the specified (or configured) source.

    Args:
        loader_name (str, optional): Name of the concrete :class:`.LeapSecondLoader` implementation
            to use.
        loader_location (str, optional): Location that the specified :class:`.LeapSecondLoader`
            will load data from.

    See Also:
        Default values obtained from the IERS Earth Orientation Centre, Bulletin C.

    Raises:
        MissingLeapSecondData: If the source doesn't provide any TAI-UTC steps.
    """
    return _loadLoader(loader_name, loader_location).getLeapSecondTable()


def setLeapSecond(
    effective_date: datetime.date,
    delta_atomic_time: int,
    loader_name: str | None = None,
    loader_location: str | None = None,
):
    """Add a TAI-UTC step to the specified (or configured) source.

    Converters handed out by :func:`.getDefaultConverter()` afterwards pick up the new step.

    Args:
        effective_date (datetime.date): UTC date the new offset is in effect from.
        delta_atomic_time (int): TAI-UTC, in seconds, from `effective_date` on.
        loader_name (str, optional): Name of the concrete :class:`.LeapSecondLoader` implementation
            to use.
        loader_location (str, optional): Location that the specified :class:`.LeapSecondLoader`
            will load data from.
    """
    loader = _loadLoader(loader_name, loader_location)
    loader.setLeapSecond(effective_date, delta_atomic_time)
    _DEFAULT_CONVERTERS.pop(_loaderTag(loader_name, loader_location), None)


def getDefaultConverter(
    loader_name: str | None = None,
    loader_location: str | None = None,
) -> LeapSecondTableConverter:
    """Return a :class:`.LeapSecondTableConverter` over the specified (or configured) table.

    Converters are cached by :class:`.LoaderTag`, and rebuilt once the loader's table changes.
    """
    tag = _loaderTag(loader_name, loader_location)
    table = getLeapSecondTable(*tag)
    converter = _DEFAULT_CONVERTERS.get(tag)
    if converter is None or converter.table is not table:
        converter = LeapSecondTableConverter(table)
        _DEFAULT_CONVERTERS[tag] = converter
    return converter
