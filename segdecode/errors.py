"""
Decoder error taxonomy.

Every failure aborts the whole run. Errors carry the offending pattern or
segment and, once they leave the entry being solved, its line number.
"""

from typing import Optional


class DecodeError(ValueError):
    """Base class for every input or decoding failure."""

    def __init__(
        self,
        message: str,
        pattern: Optional[str] = None,
        line_number: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.pattern = pattern
        self.line_number = line_number

    def with_line(self, line_number: int) -> "DecodeError":
        self.line_number = line_number
        return self

    def __str__(self) -> str:
        if self.line_number is None:
            return self.message
        return f"line {self.line_number}: {self.message}"


class MalformedEntryError(DecodeError):
    """Raised when a line lacks the separator or a pattern has invalid characters."""

    pass


class InvalidLengthError(DecodeError):
    """Raised when no canonical pattern has the length of a sample."""

    pass


class UnresolvableMappingError(DecodeError):
    """Raised when the samples do not narrow down to a one-to-one wiring."""

    pass


class UndecodablePatternError(DecodeError):
    """Raised when a decoded pattern is not the canonical pattern of any digit."""

    pass


# Mapping of decoder errors to process exit codes
ERROR_EXIT_CODES = {
    MalformedEntryError: 2,
    InvalidLengthError: 3,
    UnresolvableMappingError: 4,
    UndecodablePatternError: 5,
}


def exit_code_for(error: Exception) -> int:
    """Exit code for an error, 1 when it is not a known decoder error."""
    for error_type, code in ERROR_EXIT_CODES.items():
        if isinstance(error, error_type):
            return code
    return 1
