from __future__ import annotations


class HibpDBError(Exception):
    """Base class for every error raised by hibpdb."""


class MalformedInputError(HibpDBError, ValueError):
    """A corpus line failed the length or hex checks; the build is aborted."""

    def __init__(self, line_no: int, line: bytes, reason: str) -> None:
        self.line_no = line_no
        self.line = line
        self.reason = reason
        super().__init__(f"line {line_no}: {reason}: {line[:64]!r}")


class DatabaseFormatError(HibpDBError, ValueError):
    """The database file does not have the expected layout."""


class CorruptDatabaseError(HibpDBError, OSError):
    """The file changed or was damaged after load: a short read or a bad table entry."""


class ClientInputError(HibpDBError, ValueError):
    """A request carried a malformed prefix."""
