"""Library for reading TZif files.

A TZif file starts with a fixed size header followed by a data block whose
sections are sized by the counts in the header. Version 2 and later files
append a second header and a data block with 64-bit times, followed by a TZ
string footer. Only the version 1 header and data block are read here; any
content that follows is left unread.

Every section is read with an exact size. A stream that ends early, an index
that points outside of its table, or a designation without a NUL terminator
is an error, and reading stops at the first one. See rfc8536 for the TZif
file format.
"""

import io
import logging
import os
import struct
from typing import BinaryIO

from ..exceptions import (
    IndexOutOfRangeError,
    MagicMismatchError,
    MissingTerminatorError,
    TruncatedStreamError,
)
from .model import Header, LeapSecond, LocalTimeType, TzifFile

__all__ = [
    "read_tzif",
    "read_tzif_file",
    "read_tzif_stream",
]

_LOGGER = logging.getLogger(__name__)

MAGIC = b"TZif"

_HEADER_STRUCT_FORMAT = "".join(
    [
        ">",  # Use standard size of packed value bytes
        "4s",  # magic (4 bytes)
        "c",  # version (1 byte)
        "15x",  # unused
        "6L",  # isutcnt, isstdcnt, leapcnt, timecnt, typecnt, charcnt
    ]
)
_HEADER_SIZE = struct.calcsize(_HEADER_STRUCT_FORMAT)

# Records specifying the local time type
_LOCAL_TIME_TYPE_STRUCT_FORMAT = "".join(
    [
        ">",  # Use standard size of packed value bytes
        "l",  # utoff (4 bytes): Number of seconds to add to UTC to determine local time
        "?",  # dst (1 byte): Indicates the time is DST (1) or standard (0)
        "B",  # idx (1 byte): Offset index into the time zone designation octets
    ]
)
_LOCAL_TIME_RECORD_SIZE = struct.calcsize(_LOCAL_TIME_TYPE_STRUCT_FORMAT)

# Records specifying a leap second: occurrence (4 bytes), correction (4 bytes)
_LEAP_SECOND_STRUCT_FORMAT = ">LL"
_LEAP_SECOND_RECORD_SIZE = struct.calcsize(_LEAP_SECOND_STRUCT_FORMAT)

_TIME_SIZE = 4  # 32-bit transition times in the v1 data block

# Upper bound on a single read; section sizes come from untrusted header counts
_READ_CHUNK_SIZE = 65536


def _read_exact(buf: BinaryIO, size: int, section: str) -> bytes:
    """Read exactly size bytes from the stream or raise TruncatedStreamError."""
    chunks = []
    remaining = size
    while remaining > 0:
        chunk_size = min(remaining, _READ_CHUNK_SIZE)
        chunk = buf.read(chunk_size)
        chunks.append(chunk)
        remaining -= len(chunk)
        if len(chunk) != chunk_size:
            break
    data = b"".join(chunks)
    if len(data) != size:
        raise TruncatedStreamError(section, size, len(data))
    return data


def _read_header(buf: BinaryIO) -> Header:
    """Read and validate the fixed size header."""
    header_bytes = buf.read(_HEADER_SIZE)
    if header_bytes[: len(MAGIC)] != MAGIC:
        raise MagicMismatchError("zoneinfo file did not contain magic header")
    if len(header_bytes) != _HEADER_SIZE:
        raise TruncatedStreamError("header", _HEADER_SIZE, len(header_bytes))
    (
        _,
        version,
        isutcnt,
        isstdcnt,
        leapcnt,
        timecnt,
        typecnt,
        charcnt,
    ) = struct.unpack(_HEADER_STRUCT_FORMAT, header_bytes)
    return Header(version, isutcnt, isstdcnt, leapcnt, timecnt, typecnt, charcnt)


def _read_indicators(buf: BinaryIO, count: int, section: str) -> list[bool]:
    """Read a series of one byte boolean indicators."""
    if not count:
        return []
    return list(struct.unpack(f">{count}?", _read_exact(buf, count, section)))


def _read_datablock(header: Header, buf: BinaryIO) -> TzifFile:
    """Read the version 1 data block records from the buffer."""
    # A series of transition times, as stored in the file
    transition_times = list(
        struct.unpack(
            f">{header.timecnt}l",
            _read_exact(buf, header.timecnt * _TIME_SIZE, "transition times"),
        )
    )

    # A series of zero-based indices into the array of local time type
    # records, one for each transition time.
    transition_types = list(
        _read_exact(buf, header.timecnt, "transition types")
    )

    local_time_types = [
        LocalTimeType._make(
            struct.unpack(
                _LOCAL_TIME_TYPE_STRUCT_FORMAT,
                _read_exact(buf, _LOCAL_TIME_RECORD_SIZE, "local time types"),
            )
        )
        for _ in range(header.typecnt)
    ]

    # An array of NUL-terminated time zone designation strings
    designations = _read_exact(buf, header.charcnt, "time zone designations")

    leap_seconds = [
        LeapSecond._make(
            struct.unpack(
                _LEAP_SECOND_STRUCT_FORMAT,
                _read_exact(buf, _LEAP_SECOND_RECORD_SIZE, "leap seconds"),
            )
        )
        for _ in range(header.leapcnt)
    ]

    # Standard/wall indicators determine if the transition times are standard
    # time (1) or wall clock time (0).
    standard_indicators = _read_indicators(
        buf, header.isstdcnt, "standard/wall indicators"
    )

    # UT/local indicators determine if the transition times are UT (1) or
    # local time (0).
    ut_indicators = _read_indicators(buf, header.isutcnt, "UT/local indicators")

    return TzifFile(
        header=header,
        transition_times=transition_times,
        transition_types=transition_types,
        local_time_types=local_time_types,
        designations=designations,
        leap_seconds=leap_seconds,
        standard_indicators=standard_indicators,
        ut_indicators=ut_indicators,
    )


def _validate(tzif_file: TzifFile) -> None:
    """Check that all indexes in the data block refer to valid records."""
    typecnt = len(tzif_file.local_time_types)
    for time_type in tzif_file.transition_types:
        if time_type >= typecnt:
            raise IndexOutOfRangeError(
                f"transition_type out of bounds {time_type} >= {typecnt}",
                index=time_type,
                limit=typecnt,
            )
    charcnt = len(tzif_file.designations)
    for local_time_type in tzif_file.local_time_types:
        if local_time_type.idx >= charcnt:
            raise IndexOutOfRangeError(
                f"designation index out of bounds {local_time_type.idx} >= {charcnt}",
                index=local_time_type.idx,
                limit=charcnt,
            )
        if tzif_file.designations.find(b"\x00", local_time_type.idx) < 0:
            raise MissingTerminatorError(
                f"designation at index {local_time_type.idx} is not NUL-terminated"
            )


def read_tzif_stream(buf: BinaryIO) -> TzifFile:
    """Read the TZif version 1 data block from a binary stream."""
    header = _read_header(buf)
    _LOGGER.debug("Read TZif header: %s", header)
    tzif_file = _read_datablock(header, buf)
    _validate(tzif_file)
    return tzif_file


def read_tzif(content: bytes) -> TzifFile:
    """Read the TZif file contents and return the timezone records."""
    return read_tzif_stream(io.BytesIO(content))


def read_tzif_file(path: str | os.PathLike[str]) -> TzifFile:
    """Read the TZif file at the specified path."""
    _LOGGER.debug("Reading TZif file: %s", path)
    with open(path, "rb") as tzfile:
        return read_tzif_stream(tzfile)
