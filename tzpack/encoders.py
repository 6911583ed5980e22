"""Library for encoding a decoded TZif file as a Lua table.

Each zone is rendered as a table with a header line carrying the data
version and the zone name, followed by one row per transition:

    { version = "2024a", zone = "America/New_York",
      {ts=-1633280400, dst=true, name="EDT", ut_offset=-14400},
      ...
    }

Rows follow the order of the transitions in the file and are never sorted.
"""

import io
import logging

from .exceptions import ZoneNameError
from .tzif.model import TzifFile

__all__ = [
    "encode_zone",
]

_LOGGER = logging.getLogger(__name__)


_ESCAPES = {
    **{byte: b"\\%03d" % byte for byte in [*range(0x20), 0x7F]},
    ord("\\"): b"\\\\",
    ord('"'): b'\\"',
}


def _quote(value: bytes) -> bytes:
    """Escape a value for use inside a double quoted string literal.

    Control characters use the three digit decimal escape so a following
    digit is never read as part of the escape.
    """
    return b"".join(_ESCAPES.get(byte, bytes([byte])) for byte in value)


def encode_zone(tzif_file: TzifFile, zone_name: str, version: str) -> bytes:
    """Encode the transitions of a zone as a Lua table."""
    if not zone_name:
        raise ZoneNameError("Zone name must not be empty")
    _LOGGER.debug(
        "Encoding zone %s with %d transitions",
        zone_name,
        len(tzif_file.transition_times),
    )
    buf = io.BytesIO()
    buf.write(b'{ version = "')
    buf.write(_quote(version.encode("utf-8")))
    buf.write(b'", zone = "')
    buf.write(_quote(zone_name.encode("utf-8")))
    buf.write(b'",\n')
    for transition in tzif_file.transitions():
        buf.write(
            b'  {ts=%d, dst=%s, name="%s", ut_offset=%d},\n'
            % (
                transition.transition_time,
                b"true" if transition.dst else b"false",
                _quote(transition.designation),
                transition.utoff,
            )
        )
    buf.write(b"}\n")
    return buf.getvalue()
