"""
Stream Handling for the Converters
==================================

Both converters work on already-open streams. The helpers here open a
source/destination pair from paths so that:

- both files are closed on every exit path, including failures
- OSError is reported as ConversionIOError (never retried)
- a destination left half-written by a failed conversion is removed
"""

from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Iterator, Union
import logging

from hexconv.errors import ConversionIOError
from hexconv.ihex.codec import HEX_TEXT_ENCODING

# Logger for this module
logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

READ_CHUNK_SIZE = 4096


@dataclass(frozen=True)
class ConversionStats:
    """
    Summary of one conversion call.

    Attributes:
        records: Number of Data records written or accepted
        data_bytes: Bytes carried by those records
        image_bytes: Size of the binary image the records describe
    """
    records: int = 0
    data_bytes: int = 0
    image_bytes: int = 0

    @property
    def elided_bytes(self) -> int:
        """Image bytes not carried by any record (gaps)."""
        return self.image_bytes - self.data_bytes


def iter_stream_bytes(source: BinaryIO, chunk_size: int = READ_CHUNK_SIZE) -> Iterator[int]:
    """
    Yield the bytes of a binary stream one at a time.

    Reads in chunks; the stream is left positioned at its end.
    """
    while True:
        chunk = source.read(chunk_size)
        if not chunk:
            return
        yield from chunk


@contextmanager
def open_conversion(
    source_path: PathLike,
    dest_path: PathLike,
    source_mode: str,
    dest_mode: str,
):
    """
    Open a source and destination file for one conversion.

    HEX text is read as UTF-8 with an optional byte order mark and written
    as ASCII. Undecodable input bytes are replaced rather than raising, so
    they surface as ordinary record errors.

    Once the destination has been opened, any failure inside the block
    (a record error, an OSError, an interrupt) closes and deletes it
    before the error propagates.

    Args:
        source_path: File to read
        dest_path: File to create or overwrite
        source_mode: "rb" or "r"
        dest_mode: "wb" or "w"

    Yields:
        (source, dest) open file objects

    Raises:
        ConversionIOError: If either file cannot be opened, read or written
    """
    source_path = Path(source_path)
    dest_path = Path(dest_path)
    source_options = {} if "b" in source_mode else {"encoding": HEX_TEXT_ENCODING, "errors": "replace"}
    dest_options = {} if "b" in dest_mode else {"encoding": "ascii", "newline": ""}
    dest_opened = False

    try:
        with open(source_path, source_mode, **source_options) as source:
            with open(dest_path, dest_mode, **dest_options) as dest:
                dest_opened = True
                yield source, dest
    except BaseException as e:
        # Only a destination opened by this call is removed
        if dest_opened and dest_path.exists():
            logger.debug(f"Removing incomplete output {dest_path}")
            dest_path.unlink()
        if isinstance(e, OSError):
            raise ConversionIOError(e.filename or source_path, e.strerror or str(e)) from e
        raise
