"""Library for finding the TZif files that make up a set of zones.

Zones are read either from a zoneinfo directory on disk (e.g. the system
TZPATH) or from the tzdata python package. Each zone is identified by its
IANA key such as "America/New_York", which is used as the zone name in the
encoded output and as the name of the archive entry.
"""

from __future__ import annotations

import logging
import os
import pathlib
import re
import zoneinfo
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from importlib import resources
from typing import BinaryIO

from .exceptions import ZoneNameError

__all__ = [
    "ZoneSource",
    "default_zoneinfo_dir",
    "find_zoneinfo_version",
    "iter_directory_zones",
    "iter_tzdata_zones",
    "read_zoneinfo_version",
    "zone_name_from_path",
]

_LOGGER = logging.getLogger(__name__)

_ZONEINFO = "zoneinfo"
_TZDATA_ZI = "tzdata.zi"
_VERSION_LINE = re.compile(r"#\s*version\s+(\S+)")


@dataclass(frozen=True)
class ZoneSource:
    """A zone name and a way to open its TZif content."""

    name: str
    """The IANA key of the zone e.g. 'America/New_York'."""

    open: Callable[[], BinaryIO]
    """Open a new binary stream for the TZif content, owned by the caller."""


def zone_name_from_path(
    path: str | os.PathLike[str], root: str | os.PathLike[str] | None = None
) -> str:
    """Derive the zone name for a TZif file path.

    When a root directory is given the name is the path relative to the root.
    Otherwise the name is everything after the last 'zoneinfo' directory in
    the path, e.g. '/usr/share/zoneinfo/America/New_York' is 'America/New_York'.
    """
    file_path = pathlib.PurePath(path)
    if root is not None:
        try:
            parts = file_path.relative_to(root).parts
        except ValueError as err:
            raise ZoneNameError(f"Path {path} is not within {root}") from err
    else:
        if _ZONEINFO not in file_path.parts[:-1]:
            raise ZoneNameError(f"Unable to derive zone name from path: {path}")
        found = len(file_path.parts) - 1 - file_path.parts[::-1].index(_ZONEINFO)
        parts = file_path.parts[found + 1 :]
    if not (name := "/".join(parts)):
        raise ZoneNameError(f"Unable to derive zone name from path: {path}")
    return name


def default_zoneinfo_dir() -> pathlib.Path | None:
    """Return the first zoneinfo directory on the system TZPATH."""
    for search_path in zoneinfo.TZPATH:
        if os.path.isdir(search_path):
            return pathlib.Path(search_path)
    return None


def _file_opener(path: pathlib.Path) -> Callable[[], BinaryIO]:
    def _open() -> BinaryIO:
        return open(path, "rb")

    return _open


def iter_directory_zones(root: str | os.PathLike[str]) -> Iterator[ZoneSource]:
    """Yield a ZoneSource for each regular file under the root, sorted by name."""
    root_path = pathlib.Path(root)
    if not root_path.is_dir():
        raise NotADirectoryError(f"Zoneinfo directory does not exist: {root}")
    zones: dict[str, pathlib.Path] = {}
    for dirpath, _, filenames in os.walk(root_path):
        for filename in filenames:
            path = pathlib.Path(dirpath, filename)
            if not path.is_file():
                continue
            zones[zone_name_from_path(path, root_path)] = path
    _LOGGER.debug("Found %d files in %s", len(zones), root_path)
    for name in sorted(zones):
        yield ZoneSource(name, _file_opener(zones[name]))


def _read_tzdata_timezones() -> set[str]:
    """Returns the set of valid timezones from the tzdata package."""
    with resources.files("tzdata").joinpath("zones").open(
        "r", encoding="utf-8"
    ) as zones_file:
        return {line.strip() for line in zones_file.readlines() if line.strip()}


def _iana_key_to_resource(key: str) -> tuple[str, str]:
    """Returns the package and resource file for the specified timezone."""
    if "/" not in key:
        return "tzdata.zoneinfo", key
    package_loc, resource = key.rsplit("/", 1)
    package = "tzdata.zoneinfo." + package_loc.replace("/", ".")
    return package, resource


def _resource_opener(key: str) -> Callable[[], BinaryIO]:
    (package, resource) = _iana_key_to_resource(key)

    def _open() -> BinaryIO:
        return resources.files(package).joinpath(resource).open("rb")

    return _open


def iter_tzdata_zones() -> Iterator[ZoneSource]:
    """Yield a ZoneSource for each zone in the tzdata package, sorted by name."""
    zones = sorted(_read_tzdata_timezones())
    _LOGGER.debug("Found %d zones in tzdata package", len(zones))
    for key in zones:
        yield ZoneSource(key, _resource_opener(key))


def read_zoneinfo_version(root: str | os.PathLike[str]) -> str | None:
    """Return the data version recorded in the tzdata.zi file of a zoneinfo directory.

    The first line of tzdata.zi is a comment such as '# version 2024a'.
    """
    path = pathlib.Path(root, _TZDATA_ZI)
    if not path.is_file():
        return None
    with open(path, encoding="utf-8") as tzdata_zi:
        first_line = tzdata_zi.readline()
    if match := _VERSION_LINE.match(first_line):
        return match.group(1)
    _LOGGER.debug("No version comment found in %s", path)
    return None


def find_zoneinfo_version(path: str | os.PathLike[str]) -> str | None:
    """Return the data version of the closest zoneinfo directory containing a path."""
    for parent in pathlib.Path(path).resolve().parents:
        if (version := read_zoneinfo_version(parent)) is not None:
            return version
    return None
