"""Various helper functions that are used across multiple modules."""

from __future__ import annotations

# Local Imports
from .logger import v2xtimeLogError


def getTypeString(class_instance):
    """Return the class type as a string without any base class information.

    Args:
        class_instance (generic class instance): instance of a general class

    Returns:
        ``str``: name of the class without base classes
    """
    return class_instance.__class__.__name__


def loadDatFile(file_name, delim=None, comment="#"):
    """Load the corresponding dat file.

    Note:
        Assumes all data is representable by ``float``. Blank lines and lines starting with
        `comment` are skipped.

    Args:
        file_name (``str``): name of dat file to load
        delim (``str``, optional): delimiter character to separate data on same line. Defaults to
            ``None``, which removes all whitespace between values.
        comment (``str``, optional): prefix marking a comment line. Defaults to ``"#"``.

    Raises:
        ``FileNotFoundError``: helps with debugging bad filenames
        ``ValueError``: error parsing dat file, likely because values aren't convertible to ``float``
        ``IOError``: valid dat file is empty

    Returns:
        ``list``: nested list of float values of each row
    """
    try:
        with open(file_name, encoding="utf-8") as data_file:
            data = [
                [float(x) for x in line.split(sep=delim)]
                for line in data_file
                if line.strip() and not line.lstrip().startswith(comment)
            ]
    except FileNotFoundError as err:
        msg = f"Could not find DAT file: {file_name}"
        v2xtimeLogError(msg)
        raise err
    except ValueError as err:
        msg = f"Parsing error reading DAT file: {file_name}"
        v2xtimeLogError(msg)
        raise ValueError(msg) from err

    if not data:
        msg = f"Empty DAT file: {file_name}"
        v2xtimeLogError(msg)
        raise OSError(msg)

    return data


def loadDatComments(file_name, comment="#"):
    """Return the comment lines of a dat file, without the comment prefix.

    Args:
        file_name (``str``): name of dat file to load
        comment (``str``, optional): prefix marking a comment line. Defaults to ``"#"``.

    Returns:
        ``list``: stripped text of each comment line
    """
    with open(file_name, encoding="utf-8") as data_file:
        return [
            line.lstrip()[len(comment) :].strip()
            for line in data_file
            if line.lstrip().startswith(comment)
        ]
