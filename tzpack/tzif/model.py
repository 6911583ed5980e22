"""Data model for the tzif library."""

from collections import namedtuple
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Header:
    """TZif header information."""

    version: bytes
    """The version of the files format."""

    isutcnt: int
    """The number of UT/local indicators in the data block."""

    isstdcnt: int
    """The number of standard/wall indicators in the data block."""

    leapcnt: int
    """The number of leap second records in the data block."""

    timecnt: int
    """The number of time transitions in the data block."""

    typecnt: int
    """The number of local time type records in the data block."""

    charcnt: int
    """The number of characters for time zone designations in the data block."""


LocalTimeType = namedtuple("LocalTimeType", ["utoff", "dst", "idx"])
"""A local time type record.

The utoff is the number of seconds added to UTC to determine local time, dst
indicates the time is DST (else standard time) and idx is the byte offset of
the designation string in the time zone designation octets.
"""


LeapSecond = namedtuple("LeapSecond", ["occurrence", "correction"])
"""A correction that needs to be applied to UTC in order to determine TAI.

The occurrence is the time at which the leap-second correction occurs.
The correction is the value of LEAPCORR on or after the occurrence.
"""


@dataclass
class Transition:
    """A transition resolved against its local time type."""

    transition_time: int
    """A transition time at which the rules for computing local time may change."""

    dst: bool
    """Determines if local time is Daylight Savings Time (else Standard time)."""

    designation: bytes
    """The time zone abbreviation, without the NUL terminator."""

    utoff: int
    """Number of seconds added to UTC to determine local time."""


@dataclass
class TzifFile:
    """The results of parsing the version 1 data block of a TZif file."""

    header: Header

    transition_times: list[int] = field(default_factory=list)
    """Transition times in the order stored in the file."""

    transition_types: list[int] = field(default_factory=list)
    """Index into local_time_types for each transition time."""

    local_time_types: list[LocalTimeType] = field(default_factory=list)

    designations: bytes = b""
    """NUL-terminated time zone designation strings."""

    leap_seconds: list[LeapSecond] = field(default_factory=list)

    standard_indicators: list[bool] = field(default_factory=list)
    """Standard (True) or wall clock (False) indicators."""

    ut_indicators: list[bool] = field(default_factory=list)
    """UT (True) or local time (False) indicators."""

    def designation(self, idx: int) -> bytes:
        """Return the NUL-terminated string starting at the specified index."""
        end = self.designations.find(b"\x00", idx)
        return self.designations[idx:end]

    def transitions(self) -> list[Transition]:
        """Return each transition resolved against its local time type."""
        result = []
        for transition_time, time_type in zip(
            self.transition_times, self.transition_types
        ):
            (utoff, dst, idx) = self.local_time_types[time_type]
            result.append(
                Transition(transition_time, dst, self.designation(idx), utoff)
            )
        return result
