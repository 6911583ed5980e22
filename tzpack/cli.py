"""Command line interface for building zone archives."""

from __future__ import annotations

import logging
import pathlib

import click
from pydantic import ValidationError

from .archive import DEFAULT_OUTPUT, DEFAULT_PREFIX, ArchiveConfig, write_archive
from .encoders import encode_zone
from .exceptions import TzpackError
from .tzif.tzif import read_tzif_file
from .zonedata import (
    default_zoneinfo_dir,
    find_zoneinfo_version,
    zone_name_from_path,
)

_LOGGER = logging.getLogger(__name__)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def app(verbose: bool) -> None:
    """Convert TZif zone files into Lua tables."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO)


# tzpack build [--zoneinfo-dir <directory> | --tzdata]
@app.command(short_help="Build a zip archive of encoded zones")
@click.option(
    "-d",
    "--zoneinfo-dir",
    type=click.Path(path_type=pathlib.Path, exists=True, file_okay=False),
    help="Zoneinfo directory to read, defaults to the system TZPATH",
)
@click.option("--tzdata", "use_tzdata", is_flag=True, help="Read the tzdata package")
@click.option(
    "--tz-version",
    help="Data version written in each zone header, defaults to the source version",
)
@click.option(
    "-o",
    "--output",
    type=click.Path(path_type=pathlib.Path, dir_okay=False),
    default=DEFAULT_OUTPUT,
    show_default=True,
)
@click.option("--prefix", default=DEFAULT_PREFIX, show_default=True)
def build(
    zoneinfo_dir: pathlib.Path | None,
    use_tzdata: bool,
    tz_version: str | None,
    output: pathlib.Path,
    prefix: str,
) -> None:
    """Build a zip archive with one encoded entry per zone."""
    if zoneinfo_dir is not None and use_tzdata:
        raise click.UsageError("--zoneinfo-dir and --tzdata are mutually exclusive")
    if zoneinfo_dir is None and not use_tzdata:
        zoneinfo_dir = default_zoneinfo_dir()
        if zoneinfo_dir is None:
            _LOGGER.info("No zoneinfo directory found on TZPATH, using tzdata")
    try:
        config = ArchiveConfig(
            version=tz_version, output=output, prefix=prefix, source=zoneinfo_dir
        )
    except ValidationError as err:
        raise click.UsageError(str(err)) from err

    result = write_archive(config)
    click.echo(
        f"Wrote {len(result.written)} zones to {config.output} "
        f"(skipped {len(result.skipped)})"
    )


# tzpack dump <file>
@app.command(short_help="Print the encoded form of one TZif file")
@click.argument(
    "filename", type=click.Path(path_type=pathlib.Path, exists=True, dir_okay=False)
)
@click.option("-z", "--zone", help="Zone name, derived from the path by default")
@click.option(
    "--tz-version",
    help="Data version written in the zone header, read from tzdata.zi by default",
)
def dump(filename: pathlib.Path, zone: str | None, tz_version: str | None) -> None:
    """Decode a TZif file and write the encoded zone to stdout."""
    if tz_version is None:
        tz_version = find_zoneinfo_version(filename)
        if tz_version is None:
            raise click.UsageError(
                f"--tz-version is required, no tzdata.zi version found for {filename}"
            )
    try:
        if zone is None:
            zone = zone_name_from_path(filename.resolve())
        content = encode_zone(read_tzif_file(filename), zone, tz_version)
    except TzpackError as err:
        raise click.ClickException(f"{filename}: {err}") from err
    click.echo(content, nl=False)
