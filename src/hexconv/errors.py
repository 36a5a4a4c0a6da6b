"""
hexconv Error Hierarchy
=======================

This module defines the exception hierarchy for the whole package.
All exceptions inherit from IntelHexError, allowing callers to catch all
conversion-related errors with a single except clause if desired.

Exception Hierarchy
-------------------
IntelHexError (base)
├── RecordDecodeError (reading a record from a text line)
│   ├── EmptyLineError - line holds no record at all
│   ├── TooShortError - line shorter than its fields require
│   ├── MissingStartCodeError - line does not begin with ':'
│   ├── InvalidHexDigitError - non-hexadecimal character in a field
│   └── ChecksumMismatchError - stored checksum disagrees with contents
├── RecordEncodeError (building or writing a record)
│   ├── DataTooLongError - payload larger than 255 bytes
│   └── AddressRangeError - data outside the 16-bit addressing window
├── NotAnIntelHexFileError - source does not start with ':'
└── ConversionIOError - underlying stream read/write failure

Design Philosophy
-----------------
Every operation reports failure by raising one of these exceptions. There
is no status field to query after a call. Decode errors carry the line
number of the offending record when it is known, so messages read:
    firmware.hex:12: error: checksum mismatch: stored 0x00, calculated 0x4D
"""

from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class IntelHexError(Exception):
    """
    Base exception for all hexconv errors.

    Callers can catch every conversion failure with a single clause:

        try:
            image = hex_to_bin(text)
        except IntelHexError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Record Decode Exceptions
# =============================================================================

class RecordDecodeError(IntelHexError):
    """
    Base exception for errors while parsing a single HEX line.

    Attributes:
        message: The error description
        line: The offending text, without its line terminator (optional)
        line_number: 1-based line number in the source (optional)
        source_name: Name of the file being read (optional)
    """

    def __init__(
        self,
        message: str,
        line: Optional[str] = None,
        line_number: Optional[int] = None,
        source_name: Optional[str] = None,
    ):
        self.message = message
        self.line = line
        self.line_number = line_number
        self.source_name = source_name
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with its location when known.

        Example output:
            firmware.hex:3: error: line too short: need 11 characters, got 9
                :00000001
        """
        if self.line_number is not None:
            prefix = f"{self.source_name or '<input>'}:{self.line_number}: "
        else:
            prefix = ""

        parts = [f"{prefix}error: {self.message}"]
        if self.line:
            parts.append(f"    {self.line}")
        return "\n".join(parts)

    def at_line(
        self, line_number: int, source_name: Optional[str] = None
    ) -> "RecordDecodeError":
        """
        Attach location information after the fact.

        The record parser works on one line at a time and has no idea where
        the line came from; the readers call this before re-raising.
        """
        self.line_number = line_number
        if source_name is not None:
            self.source_name = source_name
        self.args = (self._format_message(),)
        return self


class EmptyLineError(RecordDecodeError):
    """
    The line holds no record.

    At a position where the end of the file is expected this simply means
    there are no more records; anywhere else it marks a malformed file.
    """

    def __init__(self, **kwargs):
        super().__init__("empty line, no record", **kwargs)


class TooShortError(RecordDecodeError):
    """
    The line is shorter than its fields require.

    Raised twice during parsing: once against the fixed 9-character
    header, and again once the declared data length is known.
    """

    def __init__(self, required: int, actual: int, **kwargs):
        self.required = required
        self.actual = actual
        super().__init__(
            f"line too short: need {required} characters, got {actual}",
            **kwargs,
        )


class MissingStartCodeError(RecordDecodeError):
    """The first character of the line is not the ':' start code."""

    def __init__(self, found: str, **kwargs):
        self.found = found
        super().__init__(f"missing start code ':' (found {found!r})", **kwargs)


class InvalidHexDigitError(RecordDecodeError):
    """A record field contains characters that are not hexadecimal digits."""
    pass


class ChecksumMismatchError(RecordDecodeError):
    """
    Record checksum verification failed.

    Raised when the checksum stored at the end of a line does not match
    the checksum calculated from the decoded fields. This signals data
    corruption; the record is unusable and the whole read is aborted.
    """

    def __init__(self, expected: int, actual: int, **kwargs):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"checksum mismatch: stored 0x{actual:02X}, calculated 0x{expected:02X}",
            **kwargs,
        )


# =============================================================================
# Record Encode Exceptions
# =============================================================================

class RecordEncodeError(IntelHexError):
    """Base exception for errors while building or serializing a record."""
    pass


class DataTooLongError(RecordEncodeError):
    """
    Record payload exceeds the 255-byte limit.

    The length field of an Intel HEX record is a single byte, so a record
    can never carry more than 255 data bytes.
    """

    def __init__(self, length: int, limit: int = 255):
        self.length = length
        self.limit = limit
        super().__init__(f"record data too long: {length} bytes (maximum {limit})")


class AddressRangeError(RecordEncodeError):
    """
    Data falls outside the addressable range.

    Only the 16-bit addressing window is supported. Images larger than
    64 KiB would need extended address records, which are not produced.
    """
    pass


# =============================================================================
# File Level Exceptions
# =============================================================================

class NotAnIntelHexFileError(IntelHexError):
    """
    The source does not look like an Intel HEX file.

    Checked once, on the first character of the source, before any line
    is parsed.
    """

    def __init__(self, source_name: Optional[str] = None, found: str = ""):
        self.source_name = source_name
        self.found = found
        name = source_name or "<input>"
        super().__init__(f"{name} is not an Intel HEX file (starts with {found!r})")


class ConversionIOError(IntelHexError):
    """
    Reading the source or writing the destination failed.

    Always raised from the underlying OSError, which stays available as
    __cause__. Failures are not retried.
    """

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"cannot access '{path}': {reason}")
