"""
hexconv - Converter Configuration
=================================

Settings shared by the two converters. Configuration can come from:
- Default values (defined here)
- Environment variables
- Command-line options (applied on top by the CLI)

Defaults match the programmer this tool was written for: 16 data bytes
per record, and zero runs of up to 2 bytes written out verbatim.
"""

from dataclasses import dataclass, replace
from typing import Optional
import os

DEFAULT_MAX_DATA_SIZE = 16
DEFAULT_ZERO_THRESHOLD = 2


@dataclass
class ConverterConfig:
    """
    Configuration for binary/HEX conversion.

    Attributes:
        max_data_size: Data bytes per record when writing HEX (1-255)
        zero_threshold: Longest zero run still written verbatim; longer
            runs are left out and implied by the next record's address
        line_ending: Terminator written after each HEX record
        fill_byte: Value used for gaps when assembling a binary image
        image_size: Fixed size of the assembled binary image, or None for
            "up to the last data byte"
    """

    # HEX writing
    max_data_size: int = DEFAULT_MAX_DATA_SIZE
    zero_threshold: int = DEFAULT_ZERO_THRESHOLD
    line_ending: str = "\n"

    # Binary writing
    fill_byte: int = 0x00
    image_size: Optional[int] = None

    def validate(self) -> "ConverterConfig":
        """
        Check that every setting is in range.

        Returns:
            self, so calls can be chained

        Raises:
            ValueError: If a setting is out of range
        """
        if not 1 <= self.max_data_size <= 0xFF:
            raise ValueError(f"max_data_size must be 1-255, got {self.max_data_size}")
        if self.zero_threshold < 0:
            raise ValueError(f"zero_threshold cannot be negative: {self.zero_threshold}")
        if not 0 <= self.fill_byte <= 0xFF:
            raise ValueError(f"fill_byte must be 0x00-0xFF, got {self.fill_byte}")
        if self.image_size is not None and self.image_size < 0:
            raise ValueError(f"image_size cannot be negative: {self.image_size}")
        if self.line_ending not in ("\n", "\r\n"):
            raise ValueError(f"unsupported line ending: {self.line_ending!r}")
        return self

    def with_overrides(self, **overrides) -> "ConverterConfig":
        """Return a copy with every non-None override applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes)

    @classmethod
    def from_env(cls) -> "ConverterConfig":
        """
        Create ConverterConfig from environment variables.

        Environment variables (all optional):
            HEXCONV_MAX_DATA_SIZE: Data bytes per record (integer)
            HEXCONV_ZERO_THRESHOLD: Zero run threshold (integer)
            HEXCONV_FILL_BYTE: Gap fill value (e.g. "0xFF")

        Returns:
            ConverterConfig with values from environment variables
        """
        config = cls()

        if max_data_size := os.environ.get("HEXCONV_MAX_DATA_SIZE"):
            try:
                config.max_data_size = int(max_data_size, 0)
            except ValueError:
                pass  # Ignore invalid values

        if zero_threshold := os.environ.get("HEXCONV_ZERO_THRESHOLD"):
            try:
                config.zero_threshold = int(zero_threshold, 0)
            except ValueError:
                pass

        if fill_byte := os.environ.get("HEXCONV_FILL_BYTE"):
            try:
                config.fill_byte = int(fill_byte, 0)
            except ValueError:
                pass

        return config
