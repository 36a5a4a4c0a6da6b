"""
Intel HEX Record Checksums
==========================

This module provides the checksum calculation used by every Intel HEX
record.

Record Checksum
---------------
The checksum byte at the end of each record is calculated as:
- Algorithm: Sum of the length byte, the type byte, both address bytes
  and every data byte, truncated to 8 bits, then negated (two's
  complement) modulo 256
- Purpose: Record integrity verification
- Property: Summing every byte of a well-formed record, checksum
  included, gives 0x00 (mod 256)

All arithmetic is masked to 8 bits after each addition so the result
never depends on integer width.

Example:
    :03000000FFAABB99
    03 + 00 + 00 + 00 + FF + AA + BB = 0x267 -> 0x67
    two's complement of 0x67 = 0x99

Reference
---------
- Intel Hexadecimal Object File Format Specification, Rev. A (1988)
"""

from typing import Iterable


def sum_bytes(values: Iterable[int]) -> int:
    """
    Add byte values together modulo 256.

    Args:
        values: Byte values (0-255)

    Returns:
        8-bit sum
    """
    total = 0
    for value in values:
        total = (total + value) & 0xFF
    return total


def twos_complement(value: int) -> int:
    """Return the 8-bit two's complement of a byte value."""
    return (-value) & 0xFF


def calculate_checksum(record_type: int, address: int, data: bytes) -> int:
    """
    Calculate the checksum byte for a record's fields.

    Args:
        record_type: Record type code (0-255)
        address: 16-bit record address
        data: Record payload (0-255 bytes)

    Returns:
        8-bit checksum value (0x00 - 0xFF)

    Example:
        >>> calculate_checksum(0x00, 0x0000, bytes([0xFF, 0xAA, 0xBB]))
        153
        >>> calculate_checksum(0x01, 0x0000, b"")
        255
    """
    total = len(data) & 0xFF
    total = (total + (record_type & 0xFF)) & 0xFF
    total = (total + ((address >> 8) & 0xFF)) & 0xFF
    total = (total + (address & 0xFF)) & 0xFF
    total = (total + sum_bytes(data)) & 0xFF
    return twos_complement(total)

