"""
Intel HEX Record Handling
=========================

This module provides support for converting firmware images between raw
binary and the Intel HEX text format used by microcontroller programmers.

This module provides:
- **Record types**: Record, RecordType, and record construction helpers
- **Codec**: Parse and serialize single record lines
- **Checksum utilities**: Calculate record checksums
- **BinaryToHexConverter**: Binary image -> HEX records, with zero-run
  compaction
- **HexToBinaryConverter**: HEX records -> binary image, with gap filling

Quick Start
-----------
Converting files:

    >>> from hexconv.ihex import BinaryToHexConverter, HexToBinaryConverter
    >>> BinaryToHexConverter().convert_file("firmware.bin", "firmware.hex")
    >>> HexToBinaryConverter().convert_file("firmware.hex", "firmware.bin")

Working with single records:

    >>> from hexconv.ihex import parse_record, serialize_record
    >>> record = parse_record(":0300300002337A1E")
    >>> hex(record.address)
    '0x30'
    >>> serialize_record(record)
    ':0300300002337A1E\\n'

Reference
---------
- Intel Hexadecimal Object File Format Specification, Rev. A (1988)
"""

from hexconv.ihex.records import (
    START_CODE,
    HEADER_LEN,
    MAX_DATA_LEN,
    MAX_ADDRESS,
    RecordType,
    Record,
    build_record,
    data_record,
    end_of_file_record,
    record_line_length,
)
from hexconv.ihex.checksum import (
    calculate_checksum,
    sum_bytes,
    twos_complement,
)
from hexconv.ihex.codec import (
    HEX_TEXT_ENCODING,
    parse_record,
    serialize_record,
    format_record,
    describe_record,
    iter_records,
    records_to_text,
    text_to_records,
)
from hexconv.ihex.streams import ConversionStats
from hexconv.ihex.encoder import BinaryToHexConverter, bin_to_hex
from hexconv.ihex.decoder import HexToBinaryConverter, hex_to_bin, check_start_code

__all__ = [
    # Records
    "START_CODE",
    "HEADER_LEN",
    "MAX_DATA_LEN",
    "MAX_ADDRESS",
    "RecordType",
    "Record",
    "build_record",
    "data_record",
    "end_of_file_record",
    "record_line_length",
    # Checksum
    "calculate_checksum",
    "sum_bytes",
    "twos_complement",
    # Codec
    "HEX_TEXT_ENCODING",
    "parse_record",
    "serialize_record",
    "format_record",
    "describe_record",
    "iter_records",
    "records_to_text",
    "text_to_records",
    # Converters
    "ConversionStats",
    "BinaryToHexConverter",
    "HexToBinaryConverter",
    "bin_to_hex",
    "hex_to_bin",
    "check_start_code",
]
