"""Library for packaging encoded zones into a zip archive.

The archive contains one entry per zone, named with a configurable prefix
followed by the zone name e.g. 'zonedata/America/New_York'. Files that are
not valid TZif files are skipped so that a zoneinfo directory containing
other data files (zone.tab, tzdata.zi, leapseconds) can be packed directly.
"""

from __future__ import annotations

import logging
import pathlib
import zipfile
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

import tzdata
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from .encoders import encode_zone
from .exceptions import MagicMismatchError, TzifError
from .tzif.tzif import read_tzif_stream
from .zonedata import (
    ZoneSource,
    iter_directory_zones,
    iter_tzdata_zones,
    read_zoneinfo_version,
)

__all__ = [
    "ArchiveConfig",
    "ArchiveResult",
    "convert_zone",
    "write_archive",
]

_LOGGER = logging.getLogger(__name__)

DEFAULT_OUTPUT = pathlib.Path("zonedata.zip")
DEFAULT_PREFIX = "zonedata/"

# Fixed entry timestamp so the archive only depends on the zone data
_ZIP_DATE_TIME = (1980, 1, 1, 0, 0, 0)


class ArchiveConfig(BaseModel):
    """Settings used to build a zone archive."""

    version: str
    """The data version written in the header of each encoded zone.

    When not set, this is the version of the tzdata package or the version
    recorded in the tzdata.zi file of the zoneinfo directory.
    """

    output: pathlib.Path = DEFAULT_OUTPUT
    """The path of the zip archive to write."""

    prefix: str = DEFAULT_PREFIX
    """Prepended to the zone name to make the archive entry name."""

    source: pathlib.Path | None = None
    """A zoneinfo directory to read, or None to read the tzdata package."""

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _default_version(cls, values: Any) -> Any:
        """Fill in the data version from the configured source."""
        if not isinstance(values, dict) or values.get("version") is not None:
            return values
        values = dict(values)
        if (source := values.get("source")) is None:
            values["version"] = tzdata.IANA_VERSION
        elif (version := read_zoneinfo_version(source)) is not None:
            values["version"] = version
        else:
            raise ValueError(
                f"version is required, no tzdata.zi version found in {source}"
            )
        return values

    @field_validator("version")
    @classmethod
    def _validate_version(cls, value: str) -> str:
        """Validate the version is a non-empty string."""
        if not value:
            raise ValueError("version must not be empty")
        return value

    @field_validator("prefix")
    @classmethod
    def _validate_prefix(cls, value: str) -> str:
        """Validate the prefix is a relative archive path."""
        if value.startswith("/"):
            raise ValueError(f"prefix must be a relative path: {value}")
        return value

    def zones(self) -> Iterable[ZoneSource]:
        """Return the zones from the configured source."""
        if self.source is None:
            return iter_tzdata_zones()
        return iter_directory_zones(self.source)


@dataclass
class ArchiveResult:
    """Summary of the zones written to an archive."""

    written: list[str] = field(default_factory=list)
    """Names of the zones written to the archive."""

    skipped: dict[str, Exception] = field(default_factory=dict)
    """Zones that could not be read or decoded, with the error for each."""


def convert_zone(zone: ZoneSource, version: str) -> bytes:
    """Decode the TZif content of a zone and encode it as a Lua table."""
    with zone.open() as tzfile:
        tzif_file = read_tzif_stream(tzfile)
    return encode_zone(tzif_file, zone.name, version)


def write_archive(config: ArchiveConfig) -> ArchiveResult:
    """Write each zone from the configured source as an entry in a zip archive."""
    _LOGGER.info("Writing zone archive %s (version %s)", config.output, config.version)
    result = ArchiveResult()
    with zipfile.ZipFile(config.output, "w") as archive:
        for zone in config.zones():
            try:
                content = convert_zone(zone, config.version)
            except MagicMismatchError as err:
                _LOGGER.debug("Skipping non-TZif file %s: %s", zone.name, err)
                result.skipped[zone.name] = err
                continue
            except TzifError as err:
                _LOGGER.warning("Skipping malformed zone %s: %s", zone.name, err)
                result.skipped[zone.name] = err
                continue
            except OSError as err:
                _LOGGER.warning("Skipping unreadable zone %s: %s", zone.name, err)
                result.skipped[zone.name] = err
                continue
            info = zipfile.ZipInfo(
                config.prefix + zone.name, date_time=_ZIP_DATE_TIME
            )
            info.compress_type = zipfile.ZIP_DEFLATED
            archive.writestr(info, content)
            result.written.append(zone.name)
    _LOGGER.info(
        "Wrote %d zones to %s, skipped %d",
        len(result.written),
        config.output,
        len(result.skipped),
    )
    return result
