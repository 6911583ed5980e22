"""Exceptions for tzpack library."""


class TzpackError(Exception):
    """Base exception for all tzpack errors."""


class TzifError(TzpackError, ValueError):
    """Exception raised when a TZif file is structurally malformed.

    A TzifError is terminal for the file being decoded: the decoder stops
    at the first failure and never returns a partially populated model.
    Callers processing many files catch this error to skip the file and
    continue with the rest.
    """


class MagicMismatchError(TzifError):
    """Exception raised when the input does not begin with the TZif magic."""


class TruncatedStreamError(TzifError):
    """Exception raised when the stream ends before a section is complete.

    The 'section' attribute names the part of the file being read, and the
    'expected' and 'actual' attributes hold the number of bytes requested
    and the number of bytes that were available.
    """

    def __init__(self, section: str, expected: int, actual: int) -> None:
        """Initialize the TruncatedStreamError."""
        super().__init__(
            f"TZif stream truncated reading {section}: expected {expected} bytes, got {actual}"
        )
        self.section = section
        self.expected = expected
        self.actual = actual


class IndexOutOfRangeError(TzifError):
    """Exception raised when an index refers past the end of its table."""

    def __init__(self, message: str, *, index: int, limit: int) -> None:
        """Initialize the IndexOutOfRangeError."""
        super().__init__(message)
        self.index = index
        self.limit = limit


class MissingTerminatorError(TzifError):
    """Exception raised when a designation string has no NUL terminator."""


class ZoneNameError(TzpackError, ValueError):
    """Exception raised when no usable zone name is available for a file."""
