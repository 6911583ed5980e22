"""Test fixtures."""

from collections.abc import Callable, Sequence
import struct

import pytest

TzifFactory = Callable[..., bytes]


def make_tzif(
    transition_times: Sequence[int] = (),
    transition_types: Sequence[int] = (),
    local_time_types: Sequence[tuple[int, bool, int]] = (),
    designations: bytes = b"",
    leap_seconds: Sequence[tuple[int, int]] = (),
    standard_indicators: Sequence[bool] = (),
    ut_indicators: Sequence[bool] = (),
    version: bytes = b"\x00",
    trailer: bytes = b"",
) -> bytes:
    """Build the bytes of a version 1 TZif file."""
    header = struct.pack(
        ">4sc15x6L",
        b"TZif",
        version,
        len(ut_indicators),
        len(standard_indicators),
        len(leap_seconds),
        len(transition_times),
        len(local_time_types),
        len(designations),
    )
    return b"".join(
        [
            header,
            b"".join(struct.pack(">l", value) for value in transition_times),
            bytes(transition_types),
            b"".join(struct.pack(">l?B", *record) for record in local_time_types),
            designations,
            b"".join(struct.pack(">LL", *record) for record in leap_seconds),
            bytes(standard_indicators),
            bytes(ut_indicators),
            trailer,
        ]
    )


@pytest.fixture
def tzif_factory() -> TzifFactory:
    """Fixture that builds TZif file contents."""
    return make_tzif


@pytest.fixture
def est_tzif() -> bytes:
    """Fixture for a zone with a single EST transition."""
    return make_tzif(
        transition_times=[1000],
        transition_types=[0],
        local_time_types=[(-18000, False, 0)],
        designations=b"EST\x00",
    )


@pytest.fixture
def new_york_tzif() -> bytes:
    """Fixture for a zone that alternates between EST and EDT."""
    return make_tzif(
        transition_times=[-1633280400, -1615140000, -1601830800, -1583690400],
        transition_types=[1, 0, 1, 0],
        local_time_types=[(-18000, False, 4), (-14400, True, 0)],
        designations=b"EDT\x00EST\x00",
        standard_indicators=[False, False],
        ut_indicators=[False, False],
    )
