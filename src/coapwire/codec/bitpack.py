"""Bit-level packing and unpacking utilities.

The message header mixes sub-byte fields (2-bit version, 2-bit type, 4-bit
token length, 3-bit code class, 5-bit code detail) with whole bytes, and
option headers are two 4-bit nibbles. These classes let the codecs read and
write those fields in wire order. All operations are big-endian (MSB first).
"""

from __future__ import annotations


class BitPacker:
    """Packs unsigned fields MSB-first into a byte buffer.

    Example:
        >>> packer = BitPacker()
        >>> packer.write_uint(1, 2)
        >>> packer.write_uint(1, 2)
        >>> packer.write_uint(0, 4)
        >>> packer.to_bytes()
        b'P'
    """

    def __init__(self) -> None:
        self._buffer = bytearray()
        self._pending = 0  # bits not yet flushed to _buffer
        self._pending_bits = 0

    def write_uint(self, value: int, num_bits: int) -> None:
        """Write an unsigned integer using the specified number of bits.

        Args:
            value: Unsigned integer value to write (must be >= 0)
            num_bits: Number of bits to use for encoding (1-32)

        Raises:
            ValueError: If value is negative or doesn't fit in num_bits
        """
        if value < 0:
            raise ValueError(f"write_uint requires non-negative value, got {value}")
        if num_bits < 1 or num_bits > 32:
            raise ValueError(f"num_bits must be 1-32, got {num_bits}")

        max_value = (1 << num_bits) - 1
        if value > max_value:
            raise ValueError(f"Value {value} requires more than {num_bits} bits (max: {max_value})")

        self._pending = (self._pending << num_bits) | value
        self._pending_bits += num_bits

        while self._pending_bits >= 8:
            self._pending_bits -= 8
            self._buffer.append((self._pending >> self._pending_bits) & 0xFF)
        self._pending &= (1 << self._pending_bits) - 1

    def write_bytes(self, data: bytes) -> None:
        """Write raw bytes.

        Args:
            data: Bytes to write
        """
        if self._pending_bits == 0:
            self._buffer.extend(data)
            return
        for byte in data:
            self.write_uint(byte, 8)

    def bit_length(self) -> int:
        """Return the number of bits written so far."""
        return len(self._buffer) * 8 + self._pending_bits

    def to_bytes(self) -> bytes:
        """Return the packed bytes.

        A trailing partial byte is padded with zeros on the LSB side.
        """
        if self._pending_bits == 0:
            return bytes(self._buffer)
        tail = (self._pending << (8 - self._pending_bits)) & 0xFF
        return bytes(self._buffer) + bytes([tail])


class BitUnpacker:
    """Unpacks unsigned fields MSB-first from a byte buffer.

    Reads may start at any byte offset, which lets the option decoder pick
    up right after the header and token.

    Example:
        >>> unpacker = BitUnpacker(b"\\x51\\x45")
        >>> unpacker.read_uint(2), unpacker.read_uint(2), unpacker.read_uint(4)
        (1, 1, 1)
    """

    def __init__(self, data: bytes, offset: int = 0) -> None:
        """Initialize an unpacker over data, starting at byte offset."""
        if offset < 0 or offset > len(data):
            raise ValueError(f"offset {offset} outside buffer of {len(data)} bytes")
        self._data = data
        self._position = offset * 8

    def read_uint(self, num_bits: int) -> int:
        """Read an unsigned integer of the specified bit width.

        Args:
            num_bits: Number of bits to read (1-32)

        Returns:
            Unsigned integer value

        Raises:
            ValueError: If num_bits is out of range
            IndexError: If not enough bits are available
        """
        if num_bits < 1 or num_bits > 32:
            raise ValueError(f"num_bits must be 1-32, got {num_bits}")

        if num_bits > self.bits_remaining():
            raise IndexError(
                f"Not enough bits: need {num_bits}, have {self.bits_remaining()}"
            )

        value = 0
        remaining = num_bits
        while remaining:
            byte_index, bit_offset = divmod(self._position, 8)
            available = 8 - bit_offset
            take = min(available, remaining)
            byte = self._data[byte_index]
            chunk = (byte >> (available - take)) & ((1 << take) - 1)
            value = (value << take) | chunk
            self._position += take
            remaining -= take

        return value

    def read_bytes(self, num_bytes: int) -> bytes:
        """Read raw bytes.

        Raises:
            IndexError: If not enough bytes are available
        """
        if num_bytes * 8 > self.bits_remaining():
            raise IndexError(
                f"Not enough bytes: need {num_bytes}, have {self.bits_remaining() // 8}"
            )
        if self._position % 8 == 0:
            start = self._position // 8
            self._position += num_bytes * 8
            return bytes(self._data[start : start + num_bytes])
        return bytes(self.read_uint(8) for _ in range(num_bytes))

    def peek_byte(self) -> int | None:
        """Return the next whole byte without consuming it, or None at end of buffer."""
        if self.bits_remaining() < 8:
            return None
        byte_index, bit_offset = divmod(self._position, 8)
        if bit_offset:
            raise ValueError("peek_byte requires a byte-aligned position")
        return self._data[byte_index]

    def bits_remaining(self) -> int:
        """Return the number of unread bits."""
        return len(self._data) * 8 - self._position

    def position(self) -> int:
        """Return the current bit position."""
        return self._position

    def byte_position(self) -> int:
        """Return the current position in whole bytes, rounded up."""
        return (self._position + 7) // 8
