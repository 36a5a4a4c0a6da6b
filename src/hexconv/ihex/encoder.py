"""
Binary to Intel HEX Conversion
==============================

This module provides the BinaryToHexConverter class, which turns a raw
binary image into a sequence of Data records followed by an End Of File
record.

Zero-Run Compaction
-------------------
Erased or unprogrammed regions of a firmware image are usually long runs
of zero bytes. Writing them out as data would bloat the HEX file, so the
converter leaves them out and lets the next record's address imply the
gap:

    Source:  01 02 00 00 00 00 00 03 04      (zero_threshold = 2)
    Records: :020000000102FB                 address 0000, data 01 02
             :020007000304F0                 address 0007, data 03 04
             :00000001FF

The rules, applied one byte at a time:

- Bytes go into a buffer of at most max_data_size bytes, while a counter
  tracks the length of the zero run at the end of the buffer.
- When the zero run grows longer than zero_threshold, the buffer minus
  its trailing zero run is written as one record (nothing is written if
  that leaves it empty). Every following zero byte in the source is then
  skipped, only advancing the address.
- When the buffer is full, it is written out as one record.
- At the end of the source, whatever is left in the buffer is written as
  a final record. A zero run of zero_threshold bytes or fewer is data
  like any other and is written verbatim.

A zero run reaching the end of the source is dropped entirely; the
image length can be restored on the way back with a fixed image size.

Usage
-----
    >>> from hexconv.ihex import BinaryToHexConverter
    >>> converter = BinaryToHexConverter()
    >>> stats = converter.convert_file("firmware.bin", "firmware.hex")
    >>> print(f"{stats.records} records, {stats.elided_bytes} bytes elided")
"""

from typing import BinaryIO, Iterator, Optional, TextIO, Union
import io
import logging

from hexconv.config import ConverterConfig
from hexconv.ihex.codec import serialize_record
from hexconv.ihex.records import Record, data_record, end_of_file_record
from hexconv.ihex.streams import (
    ConversionStats,
    PathLike,
    iter_stream_bytes,
    open_conversion,
)

# Logger for this module
logger = logging.getLogger(__name__)


class BinaryToHexConverter:
    """
    Converter from a binary image to Intel HEX records.

    Each call is independent: the converter holds only its configuration,
    so one instance can be reused for any number of conversions.

    Attributes:
        config: Record size and zero-run settings

    Example:
        >>> converter = BinaryToHexConverter(ConverterConfig(max_data_size=32))
        >>> text = converter.to_text(bytes([1, 2, 3]))
    """

    def __init__(self, config: Optional[ConverterConfig] = None):
        self.config = (config or ConverterConfig()).validate()

    @property
    def max_data_size(self) -> int:
        return self.config.max_data_size

    @property
    def zero_threshold(self) -> int:
        return self.config.zero_threshold

    # =========================================================================
    # Record Generation
    # =========================================================================

    def iter_records(self, source: BinaryIO) -> Iterator[Record]:
        """
        Generate the records describing a binary stream.

        Args:
            source: Binary stream, read sequentially to its end

        Yields:
            Data records in address order, then one End Of File record

        Raises:
            AddressRangeError: If data lies beyond the 16-bit window
        """
        buffer = bytearray()
        zero_run = 0
        address = 0
        skipping = False

        for value in iter_stream_bytes(source):
            if skipping:
                if value == 0:
                    address += 1
                    continue
                skipping = False

            buffer.append(value)
            zero_run = zero_run + 1 if value == 0 else 0

            if zero_run > self.zero_threshold:
                kept = len(buffer) - zero_run
                if kept:
                    yield self._flush(address, buffer[:kept])
                logger.debug(f"Zero run at 0x{address + kept:04X}, skipping")
                address += len(buffer)
                buffer.clear()
                zero_run = 0
                skipping = True
            elif len(buffer) == self.max_data_size:
                yield self._flush(address, buffer)
                address += len(buffer)
                buffer.clear()
                zero_run = 0

        if buffer:
            yield self._flush(address, buffer)

        yield end_of_file_record()

    def _flush(self, address: int, data: bytearray) -> Record:
        """Build one Data record from the buffered bytes."""
        record = data_record(address, data)
        logger.debug(f"Data record at 0x{address:04X}: {len(data)} bytes")
        return record

    # =========================================================================
    # Stream Conversion
    # =========================================================================

    def convert(self, source: BinaryIO, sink: TextIO) -> ConversionStats:
        """
        Convert a binary stream, writing HEX text to sink.

        Each record is serialized, and so validated, before any of its
        text is written.

        Args:
            source: Binary stream to read
            sink: Text stream receiving the record lines

        Returns:
            ConversionStats for the records written
        """
        records = 0
        data_bytes = 0
        image_bytes = 0

        for record in self.iter_records(source):
            sink.write(serialize_record(record, self.config.line_ending))
            if record.is_data:
                records += 1
                data_bytes += len(record.data)
                image_bytes = record.end_address

        logger.info(f"Wrote {records} data records ({data_bytes} of {image_bytes} image bytes)")
        return ConversionStats(records=records, data_bytes=data_bytes, image_bytes=image_bytes)

    def convert_file(self, source_path: PathLike, dest_path: PathLike) -> ConversionStats:
        """
        Convert a binary file to an Intel HEX file.

        Args:
            source_path: Binary file to read
            dest_path: HEX file to create (overwritten if present)

        Returns:
            ConversionStats for the records written

        Raises:
            ConversionIOError: If either file cannot be accessed
            AddressRangeError: If the image does not fit in 64 KiB
        """
        logger.debug(f"Converting {source_path} -> {dest_path}")
        with open_conversion(source_path, dest_path, "rb", "w") as (source, sink):
            return self.convert(source, sink)

    def to_text(self, data: Union[bytes, bytearray]) -> str:
        """Convert an in-memory image to HEX text."""
        sink = io.StringIO()
        self.convert(io.BytesIO(bytes(data)), sink)
        return sink.getvalue()


def bin_to_hex(data: Union[bytes, bytearray], config: Optional[ConverterConfig] = None) -> str:
    """
    Convert binary data to Intel HEX text.

    Args:
        data: The binary image
        config: Conversion settings (defaults if omitted)

    Returns:
        HEX text, one record per line, ending with the End Of File record

    Example:
        >>> bin_to_hex(bytes([0xFF, 0xAA, 0xBB]))
        ':03000000FFAABB99\\n:00000001FF\\n'
    """
    return BinaryToHexConverter(config).to_text(data)
