"""
hexconv - Intel HEX / Binary Image Converter
============================================

This package converts firmware images between raw binary and Intel HEX,
the text format read and written by microcontroller programmers.

Main Components
---------------
- **ihex**: Intel HEX record codec and the two image converters
    Parses, validates and serializes records; turns a binary image into
    records (leaving out long zero runs) and records back into an image

- **config**: Converter settings (record size, zero threshold, fill byte)

- **cli**: The hexconv command-line tool

Quick Start
-----------
Convert in memory:
    >>> from hexconv import bin_to_hex, hex_to_bin
    >>> text = bin_to_hex(b"\\x01\\x02\\x03")
    >>> hex_to_bin(text)
    b'\\x01\\x02\\x03'

Or use the command-line tool:
    $ hexconv bin2hex firmware.bin -o firmware.hex
    $ hexconv hex2bin firmware.hex -o firmware.bin
    $ hexconv dump firmware.hex

Version History
---------------
1.0.0 - Initial release with record codec, converters and CLI
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from hexconv.config import ConverterConfig
from hexconv.errors import (
    IntelHexError,
    RecordDecodeError,
    EmptyLineError,
    TooShortError,
    MissingStartCodeError,
    InvalidHexDigitError,
    ChecksumMismatchError,
    RecordEncodeError,
    DataTooLongError,
    AddressRangeError,
    NotAnIntelHexFileError,
    ConversionIOError,
)
from hexconv.ihex import (
    RecordType,
    Record,
    build_record,
    parse_record,
    serialize_record,
    calculate_checksum,
    BinaryToHexConverter,
    HexToBinaryConverter,
    ConversionStats,
    bin_to_hex,
    hex_to_bin,
)

__all__ = [
    "__version__",
    # Configuration
    "ConverterConfig",
    # Records and codec
    "RecordType",
    "Record",
    "build_record",
    "parse_record",
    "serialize_record",
    "calculate_checksum",
    # Converters
    "BinaryToHexConverter",
    "HexToBinaryConverter",
    "ConversionStats",
    "bin_to_hex",
    "hex_to_bin",
    # Exception hierarchy
    "IntelHexError",
    "RecordDecodeError",
    "EmptyLineError",
    "TooShortError",
    "MissingStartCodeError",
    "InvalidHexDigitError",
    "ChecksumMismatchError",
    "RecordEncodeError",
    "DataTooLongError",
    "AddressRangeError",
    "NotAnIntelHexFileError",
    "ConversionIOError",
]
