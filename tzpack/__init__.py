"""Library for converting TZif zone files into Lua tables.

The tzif package reads the version 1 data block of a TZif file, encoders
renders a decoded zone as a Lua table, and archive packs a set of zones
read by zonedata into a zip file.
"""

__all__ = [
    "archive",
    "cli",
    "encoders",
    "exceptions",
    "tzif",
    "zonedata",
]
