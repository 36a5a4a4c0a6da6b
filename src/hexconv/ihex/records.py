"""
Intel HEX Record Definitions
============================

This module defines the data structures for Intel HEX records, the
fundamental building blocks of a HEX file.

Record Format
-------------
Each record is one line of ASCII text:

    :LLAAAATTDD...DDCC

    :       Start code
    LL      Data length (2 hex digits, 0x00-0xFF)
    AAAA    Address within the current addressing window (4 hex digits)
    TT      Record type (2 hex digits)
    DD...   LL data bytes, 2 hex digits each
    CC      Checksum (2 hex digits)

Record Types
------------
- $00: Data
- $01: End Of File (no data, address 0000)
- $02: Extended Segment Address
- $03: Start Segment Address
- $04: Extended Linear Address
- $05: Start Linear Address

Only Data and End Of File are interpreted. The address record types are
recognized by name but their payloads are not applied. Any other type
code is preserved as a plain integer.

Reference
---------
- Intel Hexadecimal Object File Format Specification, Rev. A (1988)
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Union

from hexconv.errors import AddressRangeError, DataTooLongError
from hexconv.ihex.checksum import calculate_checksum


# =============================================================================
# Format Constants
# =============================================================================

START_CODE = ":"

# Field widths, in characters
COUNT_LEN = 2
ADDRESS_LEN = 4
TYPE_LEN = 2
CHECKSUM_LEN = 2
HEX_BYTE_LEN = 2

# Field offsets, in characters
COUNT_OFFSET = 1
ADDRESS_OFFSET = COUNT_OFFSET + COUNT_LEN
TYPE_OFFSET = ADDRESS_OFFSET + ADDRESS_LEN
DATA_OFFSET = TYPE_OFFSET + TYPE_LEN

# Start code + length + address + type
HEADER_LEN = DATA_OFFSET

MAX_DATA_LEN = 0xFF
MAX_ADDRESS = 0xFFFF

# One past the last byte a 16-bit window can hold
ADDRESS_WINDOW = MAX_ADDRESS + 1


def record_line_length(data_length: int) -> int:
    """Number of characters in a record line carrying data_length bytes."""
    return HEADER_LEN + data_length * HEX_BYTE_LEN + CHECKSUM_LEN


# =============================================================================
# Record Type
# =============================================================================

class RecordType(IntEnum):
    """
    Intel HEX record type codes.

    Type codes outside this enumeration are kept as plain integers, see
    from_code().
    """
    DATA = 0x00
    END_OF_FILE = 0x01
    EXTENDED_SEGMENT_ADDRESS = 0x02
    START_SEGMENT_ADDRESS = 0x03
    EXTENDED_LINEAR_ADDRESS = 0x04
    START_LINEAR_ADDRESS = 0x05

    @classmethod
    def from_code(cls, code: int) -> Union["RecordType", int]:
        """
        Convert a type byte to a RecordType, preserving unknown codes.

        Args:
            code: The record type byte (0-255)

        Returns:
            The matching RecordType, or the code itself if unknown

        Raises:
            ValueError: If code is not a byte value
        """
        if not 0 <= code <= 0xFF:
            raise ValueError(f"Record type must be a byte value, got {code}")
        try:
            return cls(code)
        except ValueError:
            return code

    @classmethod
    def is_known(cls, code: int) -> bool:
        """Check if a type byte is one of the six standard record types."""
        return any(code == member for member in cls)

    @classmethod
    def get_name(cls, code: int) -> str:
        """Get a human-readable name for a record type code."""
        names = {
            0x00: "Data",
            0x01: "End Of File",
            0x02: "Extended Segment Address",
            0x03: "Start Segment Address",
            0x04: "Extended Linear Address",
            0x05: "Start Linear Address",
        }
        return names.get(code, f"Unknown (0x{code:02X})")


RecordTypeCode = Union[RecordType, int]


# =============================================================================
# Record
# =============================================================================

@dataclass(frozen=True)
class Record:
    """
    One Intel HEX record.

    Records are immutable. The checksum is not stored: it is always
    recalculated from the other fields, so a record can never carry a
    stale checksum.

    Attributes:
        record_type: RecordType member, or raw int for unknown codes
        address: 16-bit offset within the addressing window
        data: Payload bytes (0-255)
    """
    record_type: RecordTypeCode
    address: int
    data: bytes = b""

    @property
    def checksum(self) -> int:
        """The 8-bit checksum of this record."""
        return calculate_checksum(int(self.record_type), self.address, self.data)

    @property
    def is_data(self) -> bool:
        """True for Data records."""
        return self.record_type == RecordType.DATA

    @property
    def end_address(self) -> int:
        """Address one past the last data byte."""
        return self.address + len(self.data)

    @property
    def type_name(self) -> str:
        """Human-readable record type name."""
        return RecordType.get_name(int(self.record_type))


def build_record(
    record_type: RecordTypeCode,
    address: int,
    data: Union[bytes, bytearray, list[int]] = b"",
) -> Record:
    """
    Build a new record from its fields.

    The data is copied, so later changes to a caller's buffer do not
    affect the record.

    Args:
        record_type: Record type (RecordType member or type byte)
        address: 16-bit address
        data: Payload, at most 255 bytes

    Returns:
        The new Record

    Raises:
        DataTooLongError: If data is longer than 255 bytes
        AddressRangeError: If address is outside 0x0000-0xFFFF
        ValueError: If record_type is not a byte value, or data holds
            values outside 0-255

    Example:
        >>> record = build_record(RecordType.END_OF_FILE, 0)
        >>> f"{record.checksum:02X}"
        'FF'
    """
    payload = bytes(data)
    if len(payload) > MAX_DATA_LEN:
        raise DataTooLongError(len(payload), MAX_DATA_LEN)
    if not 0 <= address <= MAX_ADDRESS:
        raise AddressRangeError(f"record address 0x{address:X} outside 0x0000-0xFFFF")

    return Record(
        record_type=RecordType.from_code(int(record_type)),
        address=address,
        data=payload,
    )


def data_record(address: int, data: Union[bytes, bytearray]) -> Record:
    """
    Build a Data record that must fit inside the 16-bit window.

    Raises:
        AddressRangeError: If the data would run past address 0xFFFF
    """
    if address + len(data) > ADDRESS_WINDOW:
        raise AddressRangeError(
            f"data at 0x{address:X} ({len(data)} bytes) runs past 0xFFFF; "
            f"extended address records are not supported"
        )
    return build_record(RecordType.DATA, address, data)


def end_of_file_record() -> Record:
    """Build the End Of File record that terminates every HEX file."""
    return build_record(RecordType.END_OF_FILE, 0)

