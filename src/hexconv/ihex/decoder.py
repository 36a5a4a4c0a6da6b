"""
Intel HEX to Binary Conversion
==============================

This module provides the HexToBinaryConverter class, which assembles a
contiguous binary image from the lines of an Intel HEX file.

Processing
----------
1. The first character of the source must be the ':' start code,
   otherwise NotAnIntelHexFileError is raised before any line is parsed.
2. Lines are parsed one by one. Any bad line aborts the whole conversion
   with the record error, tagged with its line number.
3. The first record that is not a Data record (normally End Of File)
   ends the data phase. Nothing after it is read.
4. Each Data record's bytes are placed at its address. Gaps between
   records are filled with fill_byte (zero by default), which restores
   the zero runs left out by BinaryToHexConverter.

The image runs from address 0 to the end of the highest record, unless a
fixed image_size is configured, in which case it is padded to that size.

Usage
-----
    >>> from hexconv.ihex import HexToBinaryConverter
    >>> converter = HexToBinaryConverter()
    >>> stats = converter.convert_file("firmware.hex", "firmware.bin")
    >>> print(f"{stats.image_bytes} bytes from {stats.records} records")
"""

from itertools import chain
from typing import BinaryIO, Iterable, Iterator, Optional, Union
import logging

from hexconv.config import ConverterConfig
from hexconv.errors import AddressRangeError, NotAnIntelHexFileError, RecordDecodeError
from hexconv.ihex.codec import parse_record
from hexconv.ihex.records import START_CODE, Record, RecordType
from hexconv.ihex.streams import ConversionStats, PathLike, open_conversion

# Logger for this module
logger = logging.getLogger(__name__)


def check_start_code(first_line: str, source_name: Optional[str] = None) -> None:
    """
    Check that a source starts like an Intel HEX file.

    Raises:
        NotAnIntelHexFileError: If the first character is not ':'
    """
    if not first_line.startswith(START_CODE):
        raise NotAnIntelHexFileError(source_name, first_line[:1])


class HexToBinaryConverter:
    """
    Converter from Intel HEX text to a binary image.

    Like BinaryToHexConverter, an instance holds only configuration and
    can be reused for any number of independent conversions.

    Attributes:
        config: Gap fill and image size settings
    """

    def __init__(self, config: Optional[ConverterConfig] = None):
        self.config = (config or ConverterConfig()).validate()

    def iter_records(
        self,
        lines: Iterable[str],
        source_name: Optional[str] = None,
    ) -> Iterator[Record]:
        """
        Yield the Data records of a HEX text, in file order.

        Stops at the first record that is not a Data record.

        Args:
            lines: Text lines (e.g. an open text file)
            source_name: Name used in error messages

        Raises:
            NotAnIntelHexFileError: If the text does not start with ':'
            RecordDecodeError: On the first bad line
        """
        iterator = iter(lines)
        first_line = next(iterator, "")
        check_start_code(first_line, source_name)

        for line_number, line in enumerate(chain([first_line], iterator), start=1):
            try:
                record = parse_record(line)
            except RecordDecodeError as e:
                e.at_line(line_number, source_name)
                raise

            if record.record_type != RecordType.DATA:
                logger.debug(f"{record.type_name} record at line {line_number} ends data")
                return

            logger.debug(f"Data record at 0x{record.address:04X}: {len(record.data)} bytes")
            yield record

    def assemble(self, records: Iterable[Record]) -> bytearray:
        """
        Place Data records into a binary image.

        Args:
            records: Data records, normally in address order

        Returns:
            The assembled image

        Raises:
            AddressRangeError: If data lies beyond a configured image_size
        """
        fill = self.config.fill_byte
        image = bytearray()

        for record in records:
            if record.address > len(image):
                image.extend(bytes([fill]) * (record.address - len(image)))
            elif record.address < len(image):
                logger.warning(
                    f"Record at 0x{record.address:04X} overlaps data up to "
                    f"0x{len(image):04X}; later data wins"
                )
            image[record.address:record.end_address] = record.data

        size = self.config.image_size
        if size is not None:
            if len(image) > size:
                raise AddressRangeError(
                    f"image data ends at 0x{len(image):X}, beyond the "
                    f"configured size of 0x{size:X} bytes"
                )
            image.extend(bytes([fill]) * (size - len(image)))

        return image

    def convert(
        self,
        source: Iterable[str],
        sink: BinaryIO,
        source_name: Optional[str] = None,
    ) -> ConversionStats:
        """
        Convert HEX text lines, writing the binary image to sink.

        The image is assembled completely before anything is written, so
        a bad record leaves the sink untouched.

        Returns:
            ConversionStats for the records read
        """
        records = list(self.iter_records(source, source_name))
        image = self.assemble(records)
        sink.write(image)

        data_bytes = sum(len(record.data) for record in records)
        logger.info(f"Assembled {len(image)} byte image from {len(records)} data records")
        return ConversionStats(records=len(records), data_bytes=data_bytes, image_bytes=len(image))

    def convert_file(self, source_path: PathLike, dest_path: PathLike) -> ConversionStats:
        """
        Convert an Intel HEX file to a binary file.

        Args:
            source_path: HEX file to read
            dest_path: Binary file to create (overwritten if present)

        Returns:
            ConversionStats for the records read

        Raises:
            ConversionIOError: If either file cannot be accessed
            NotAnIntelHexFileError: If the source is not a HEX file
            RecordDecodeError: If any record is malformed
        """
        logger.debug(f"Converting {source_path} -> {dest_path}")
        with open_conversion(source_path, dest_path, "r", "wb") as (source, sink):
            return self.convert(source, sink, source_name=str(source_path))

    def to_bytes(self, text: Union[str, Iterable[str]]) -> bytes:
        """Convert HEX text (a string or its lines) to an in-memory image."""
        lines = text.splitlines() if isinstance(text, str) else text
        return bytes(self.assemble(self.iter_records(lines)))


def hex_to_bin(text: Union[str, Iterable[str]], config: Optional[ConverterConfig] = None) -> bytes:
    """
    Convert Intel HEX text to binary data.

    Args:
        text: HEX text, or an iterable of its lines
        config: Conversion settings (defaults if omitted)

    Returns:
        The assembled binary image

    Example:
        >>> hex_to_bin(":03000000FFAABB99\\n:00000001FF\\n")
        b'\\xff\\xaa\\xbb'
    """
    return HexToBinaryConverter(config).to_bytes(text)
