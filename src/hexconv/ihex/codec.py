"""
Intel HEX Record Codec
======================

This module converts between single text lines and Record objects.

parse_record
------------
Decodes one line. The checks run in a fixed order so the first problem
found is the one reported:

1. Empty line                       -> EmptyLineError
2. Shorter than the 9-char header   -> TooShortError
3. First character is not ':'       -> MissingStartCodeError
4. Length/address/type decoded
5. Shorter than header + data + CC  -> TooShortError
6. Data bytes and checksum decoded  (non-hex digits -> InvalidHexDigitError)
7. Checksum recalculated            -> ChecksumMismatchError

Hex digits are accepted in either case. Line terminators (CR and/or LF)
are ignored, as is anything after the checksum field.

serialize_record
----------------
Encodes a record as uppercase hex with fixed field widths, followed by a
line terminator. The checksum is always recalculated.

Usage Examples
--------------
    >>> record = parse_record(":03000000FFAABB99")
    >>> record.data.hex()
    'ffaabb'
    >>> serialize_record(record)
    ':03000000FFAABB99\\n'
"""

from typing import Iterable, Iterator, Optional, Union
import logging
import re

from hexconv.errors import (
    AddressRangeError,
    ChecksumMismatchError,
    DataTooLongError,
    EmptyLineError,
    InvalidHexDigitError,
    MissingStartCodeError,
    RecordDecodeError,
    RecordEncodeError,
    TooShortError,
)
from hexconv.ihex.checksum import calculate_checksum
from hexconv.ihex.records import (
    CHECKSUM_LEN,
    COUNT_OFFSET,
    DATA_OFFSET,
    HEADER_LEN,
    MAX_ADDRESS,
    MAX_DATA_LEN,
    START_CODE,
    Record,
    RecordType,
    record_line_length,
)

# Logger for this module
logger = logging.getLogger(__name__)

HEX_DIGITS = re.compile(r"[0-9A-Fa-f]*")

LINE_TERMINATORS = "\r\n"

# Reading only. A leading UTF-8 byte order mark is dropped. Any other
# non-ASCII text fails as an invalid hex digit.
HEX_TEXT_ENCODING = "utf-8-sig"


# =============================================================================
# Decoding
# =============================================================================

def _decode_hex(text: str, field_name: str, line: str) -> bytes:
    """Decode a run of hex digit pairs, rejecting anything else."""
    if not HEX_DIGITS.fullmatch(text):
        raise InvalidHexDigitError(f"invalid hex digits in {field_name}: {text!r}", line=line)
    return bytes.fromhex(text)


def parse_record(line: Optional[str]) -> Record:
    """
    Parse one line of Intel HEX text into a Record.

    Args:
        line: The text line (a trailing line terminator is allowed)

    Returns:
        The decoded, checksum-verified Record

    Raises:
        EmptyLineError: If the line is None or empty
        TooShortError: If the line is shorter than its fields require
        MissingStartCodeError: If the line does not begin with ':'
        InvalidHexDigitError: If a field holds non-hex characters
        ChecksumMismatchError: If the stored checksum is wrong

    Example:
        >>> parse_record(":00000001FF").record_type
        <RecordType.END_OF_FILE: 1>
    """
    if line is None:
        raise EmptyLineError()

    line = line.rstrip(LINE_TERMINATORS)
    if not line:
        raise EmptyLineError()

    if len(line) < HEADER_LEN:
        raise TooShortError(HEADER_LEN, len(line), line=line)

    if line[0] != START_CODE:
        raise MissingStartCodeError(line[0], line=line)

    header = _decode_hex(line[COUNT_OFFSET:DATA_OFFSET], "record header", line)
    count, address_high, address_low, type_code = header
    address = (address_high << 8) | address_low

    required = record_line_length(count)
    if len(line) < required:
        raise TooShortError(required, len(line), line=line)

    data_end = DATA_OFFSET + count * 2
    data = _decode_hex(line[DATA_OFFSET:data_end], "data", line)
    stored = _decode_hex(line[data_end:data_end + CHECKSUM_LEN], "checksum", line)[0]

    expected = calculate_checksum(type_code, address, data)
    if stored != expected:
        raise ChecksumMismatchError(expected, stored, line=line)

    return Record(
        record_type=RecordType.from_code(type_code),
        address=address,
        data=data,
    )


def iter_records(
    lines: Iterable[str],
    source_name: Optional[str] = None,
) -> Iterator[Record]:
    """
    Parse every record of a HEX text, stopping after End Of File.

    Every line up to and including the End Of File record must hold a
    well-formed record. Lines after it are not read.

    Args:
        lines: Text lines (e.g. an open text file)
        source_name: Name used in error messages

    Yields:
        Each decoded Record, in file order

    Raises:
        RecordDecodeError: On the first bad line, with its line number
    """
    for line_number, line in enumerate(lines, start=1):
        try:
            record = parse_record(line)
        except RecordDecodeError as e:
            e.at_line(line_number, source_name)
            raise

        yield record

        if record.record_type == RecordType.END_OF_FILE:
            logger.debug(f"End Of File record at line {line_number}")
            return


# =============================================================================
# Encoding
# =============================================================================

def format_record(record: Record) -> str:
    """
    Format a record as a line of text, without a terminator.

    Every field is range-checked first. A Record made directly, without
    build_record, can hold values that do not fit their fixed widths.

    Raises:
        DataTooLongError: If the record holds more than 255 data bytes
        AddressRangeError: If the address is outside 0x0000-0xFFFF
        RecordEncodeError: If the type code is not a byte value
    """
    if len(record.data) > MAX_DATA_LEN:
        raise DataTooLongError(len(record.data), MAX_DATA_LEN)
    if not 0 <= record.address <= MAX_ADDRESS:
        raise AddressRangeError(f"record address 0x{record.address:X} outside 0x0000-0xFFFF")
    if not 0 <= int(record.record_type) <= 0xFF:
        raise RecordEncodeError(f"record type {int(record.record_type)} is not a byte value")

    return (
        f"{START_CODE}{len(record.data):02X}{record.address:04X}"
        f"{int(record.record_type):02X}{record.data.hex().upper()}"
        f"{record.checksum:02X}"
    )


def serialize_record(record: Record, line_ending: str = "\n") -> str:
    """
    Serialize a record to a line of Intel HEX text.

    Args:
        record: The record to serialize
        line_ending: Terminator appended to the line

    Returns:
        The record line, uppercase, terminated by line_ending

    Raises:
        DataTooLongError: If the record holds more than 255 data bytes

    Example:
        >>> from hexconv.ihex.records import end_of_file_record
        >>> serialize_record(end_of_file_record())
        ':00000001FF\\n'
    """
    return format_record(record) + line_ending


def describe_record(record: Record, verbose: bool = False) -> str:
    """
    Describe a record for display.

    The compact form is the record line itself. The verbose form lists
    each field on its own line:

        Record Type:    Data (0x00)
        Address:        0x0010
        Data:           [0x01, 0x02, 0x03]
        Checksum:       0xE7

    Args:
        record: The record to describe
        verbose: If True, list each field

    Returns:
        Description text, without a trailing newline
    """
    if not verbose:
        return format_record(record)

    data_str = ", ".join(f"0x{b:02X}" for b in record.data)
    return "\n".join([
        f"Record Type:    {record.type_name} (0x{int(record.record_type):02X})",
        f"Address:        0x{record.address:04X}",
        f"Data:           [{data_str}]",
        f"Checksum:       0x{record.checksum:02X}",
    ])


def records_to_text(records: Iterable[Record], line_ending: str = "\n") -> str:
    """Serialize a sequence of records into one block of HEX text."""
    return "".join(serialize_record(record, line_ending) for record in records)


def text_to_records(text: Union[str, bytes]) -> list[Record]:
    """Parse a block of HEX text into its records, up to End Of File."""
    if isinstance(text, bytes):
        text = text.decode(HEX_TEXT_ENCODING, errors="replace")
    return list(iter_records(text.splitlines()))
