"""Library for reading the version 1 data block of TZif files."""

from .model import Header, LeapSecond, LocalTimeType, Transition, TzifFile
from .tzif import read_tzif, read_tzif_file, read_tzif_stream

__all__ = [
    "Header",
    "LeapSecond",
    "LocalTimeType",
    "Transition",
    "TzifFile",
    "read_tzif",
    "read_tzif_file",
    "read_tzif_stream",
]
