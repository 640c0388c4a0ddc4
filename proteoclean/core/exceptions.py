"""
Exception types raised by the proteoclean package.
"""

from typing import Iterable


class ProteoCleanError(Exception):
    """Base class for all proteoclean errors."""


class FileFormatError(ProteoCleanError):
    """An input file is absent, unreadable or in an unsupported format."""


class SchemaError(ProteoCleanError, ValueError):
    """An expected column is absent or holds values that cannot be interpreted."""

    def __init__(self, message: str, missing: Iterable[str] = ()):
        super().__init__(message)
        self.missing = list(missing)


class JoinMismatchError(ProteoCleanError):
    """Join keys present in one table are absent from the other."""

    def __init__(self, message: str, unmatched_left=(), unmatched_right=()):
        super().__init__(message)
        self.unmatched_left = list(unmatched_left)
        self.unmatched_right = list(unmatched_right)


class ExternalServiceUnavailable(ProteoCleanError):
    """A remote service (download mirror, enrichment API) could not be reached."""


class DuplicateIdentifierError(ProteoCleanError, ValueError):
    """A sequence identifier occurs more than once where uniqueness is required."""

    def __init__(self, message: str, identifiers: Iterable[str] = ()):
        super().__init__(message)
        self.identifiers = list(identifiers)
