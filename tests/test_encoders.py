"""Tests for encoding decoded zones as Lua tables."""

from collections.abc import Callable
import textwrap

import pytest

from tzpack.encoders import encode_zone
from tzpack.exceptions import ZoneNameError
from tzpack.tzif.tzif import read_tzif

TzifFactory = Callable[..., bytes]


def test_encode_single_transition(est_tzif: bytes) -> None:
    """Test encoding a zone with a single transition."""
    content = encode_zone(read_tzif(est_tzif), "EST", "2018g")
    assert content == (
        b'{ version = "2018g", zone = "EST",\n'
        b'  {ts=1000, dst=false, name="EST", ut_offset=-18000},\n'
        b"}\n"
    )


def test_encode_alternating_types(new_york_tzif: bytes) -> None:
    """Test encoding a zone that switches between local time types."""
    content = encode_zone(read_tzif(new_york_tzif), "America/New_York", "2024a")
    assert content.decode("utf-8") == textwrap.dedent(
        """\
        { version = "2024a", zone = "America/New_York",
          {ts=-1633280400, dst=true, name="EDT", ut_offset=-14400},
          {ts=-1615140000, dst=false, name="EST", ut_offset=-18000},
          {ts=-1601830800, dst=true, name="EDT", ut_offset=-14400},
          {ts=-1583690400, dst=false, name="EST", ut_offset=-18000},
        }
        """
    )


def test_rows_match_local_time_types(new_york_tzif: bytes) -> None:
    """Test each row has the offset and dst flag of its local time type."""
    tzif_file = read_tzif(new_york_tzif)
    lines = encode_zone(tzif_file, "America/New_York", "2024a").splitlines()
    rows = lines[1:-1]
    assert len(rows) == tzif_file.header.timecnt
    for row, time_type in zip(rows, tzif_file.transition_types):
        (utoff, dst, _) = tzif_file.local_time_types[time_type]
        assert row.endswith(b", ut_offset=%d}," % utoff)
        assert (b"dst=true" if dst else b"dst=false") in row


def test_encode_is_deterministic(new_york_tzif: bytes) -> None:
    """Test decoding and encoding the same bytes twice gives the same output."""
    first = encode_zone(read_tzif(new_york_tzif), "America/New_York", "2024a")
    second = encode_zone(read_tzif(new_york_tzif), "America/New_York", "2024a")
    assert first == second


def test_encode_no_transitions(tzif_factory: TzifFactory) -> None:
    """Test a zone without transitions has only the header and closing lines."""
    content = tzif_factory(local_time_types=[(0, False, 0)], designations=b"UTC\x00")
    assert encode_zone(read_tzif(content), "Etc/UTC", "2024a") == (
        b'{ version = "2024a", zone = "Etc/UTC",\n}\n'
    )


def test_encode_stored_order(tzif_factory: TzifFactory) -> None:
    """Test rows are written in the order stored in the file."""
    content = tzif_factory(
        transition_times=[300, 100, 200],
        transition_types=[0, 0, 0],
        local_time_types=[(0, False, 0)],
        designations=b"UTC\x00",
    )
    rows = encode_zone(read_tzif(content), "Etc/UTC", "2024a").splitlines()[1:-1]
    assert [row.split(b",")[0] for row in rows] == [
        b"  {ts=300",
        b"  {ts=100",
        b"  {ts=200",
    ]


def test_encode_escapes_quotes(tzif_factory: TzifFactory) -> None:
    """Test quotes and backslashes are escaped in string values."""
    content = tzif_factory(
        transition_times=[0],
        transition_types=[0],
        local_time_types=[(0, False, 0)],
        designations=b'A"B\\\x00',
    )
    encoded = encode_zone(read_tzif(content), 'Odd"Zone', "2024a")
    assert encoded.splitlines() == [
        b'{ version = "2024a", zone = "Odd\\"Zone",',
        b'  {ts=0, dst=false, name="A\\"B\\\\", ut_offset=0},',
        b"}",
    ]


def test_empty_zone_name(est_tzif: bytes) -> None:
    """Test an empty zone name is rejected."""
    with pytest.raises(ZoneNameError, match="must not be empty"):
        encode_zone(read_tzif(est_tzif), "", "2024a")


def test_encode_escapes_control_characters(tzif_factory: TzifFactory) -> None:
    """Test control characters are written as decimal escapes."""
    content = tzif_factory(
        transition_times=[0],
        transition_types=[0],
        local_time_types=[(0, False, 0)],
        designations=b"A\n1\x7f\x00",
    )
    encoded = encode_zone(read_tzif(content), "Odd\tZone\r", "2024a")
    assert encoded.splitlines() == [
        b'{ version = "2024a", zone = "Odd\\009Zone\\013",',
        b'  {ts=0, dst=false, name="A\\0101\\127", ut_offset=0},',
        b"}",
    ]
