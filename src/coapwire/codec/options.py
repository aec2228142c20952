"""Option TLV encoding and decoding.

Each option is one header byte holding a 4-bit delta nibble and a 4-bit
length nibble, then the extended delta bytes, the extended length bytes and
the value:

    +-------+-------+
    | delta | length|   nibble 0-12: literal value
    +-------+-------+   nibble 13:   1 extension byte,  value = ext + 13
    | ext delta 0-2 |   nibble 14:   2 extension bytes, value = ext + 269
    | ext len   0-2 |   nibble 15:   reserved
    | value ...     |
    +---------------+

The delta is the option number minus the previous option's number (0 for
the first option), so options must be written in ascending number order.
Decoding stops at the 0xFF payload marker or at the end of the buffer.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from ..exceptions import EncodeError, MalformedOption, TruncatedMessage
from .bitpack import BitPacker, BitUnpacker

PAYLOAD_MARKER = 0xFF

_MAX_LITERAL = 12
_ONE_BYTE_NIBBLE = 13
_TWO_BYTE_NIBBLE = 14
_RESERVED_NIBBLE = 15
_ONE_BYTE_OFFSET = 13
_TWO_BYTE_OFFSET = 269
MAX_EXTENDED_VALUE = 0xFFFF + _TWO_BYTE_OFFSET  # 65804


@dataclass(frozen=True)
class RawOption:
    """An option as it travels on the wire: a number and an opaque value."""

    number: int
    value: bytes


def _split(value: int, what: str) -> tuple[int, int, int]:
    """Return (nibble, extension value, extension byte count) for a delta or length."""
    if value < 0:
        raise EncodeError(f"Option {what} must be non-negative, got {value}")
    if value <= _MAX_LITERAL:
        return value, 0, 0
    if value < _TWO_BYTE_OFFSET:
        return _ONE_BYTE_NIBBLE, value - _ONE_BYTE_OFFSET, 1
    if value <= MAX_EXTENDED_VALUE:
        return _TWO_BYTE_NIBBLE, value - _TWO_BYTE_OFFSET, 2
    raise EncodeError(f"Option {what} {value} exceeds maximum {MAX_EXTENDED_VALUE}")


def encoded_option_size(delta: int, length: int) -> int:
    """Return the size in bytes of one encoded option TLV."""
    _, _, delta_ext = _split(delta, "delta")
    _, _, length_ext = _split(length, "length")
    return 1 + delta_ext + length_ext + length


def encode_option(delta: int, value: bytes) -> bytes:
    """Encode a single option TLV.

    Args:
        delta: Option number minus the previous option's number
        value: Option value

    Returns:
        Header byte, extension bytes and value

    Raises:
        EncodeError: If delta or value length is negative or above 65804
    """
    delta_nibble, delta_ext, delta_ext_bytes = _split(delta, "delta")
    length_nibble, length_ext, length_ext_bytes = _split(len(value), "length")

    packer = BitPacker()
    packer.write_uint(delta_nibble, 4)
    packer.write_uint(length_nibble, 4)
    if delta_ext_bytes:
        packer.write_uint(delta_ext, delta_ext_bytes * 8)
    if length_ext_bytes:
        packer.write_uint(length_ext, length_ext_bytes * 8)
    packer.write_bytes(value)
    return packer.to_bytes()


def sort_options(options: Iterable[RawOption]) -> list[RawOption]:
    """Sort options by number; options sharing a number keep their relative order."""
    return sorted(options, key=lambda option: option.number)


def encode_options(options: Iterable[RawOption]) -> bytes:
    """Encode a sequence of options with delta numbering.

    Options are sorted first (stable), so repeated options such as
    several Uri-Path segments stay in the order given.
    """
    result = bytearray()
    previous = 0
    for option in sort_options(options):
        result.extend(encode_option(option.number - previous, option.value))
        previous = option.number
    return bytes(result)


def _read_extended(unpacker: BitUnpacker, nibble: int, what: str) -> int:
    if nibble <= _MAX_LITERAL:
        return nibble
    if nibble == _ONE_BYTE_NIBBLE:
        return unpacker.read_uint(8) + _ONE_BYTE_OFFSET
    if nibble == _TWO_BYTE_NIBBLE:
        return unpacker.read_uint(16) + _TWO_BYTE_OFFSET
    raise MalformedOption(f"Wrong option {what}: reserved nibble {_RESERVED_NIBBLE}")


def decode_options(data: bytes, offset: int = 0) -> tuple[list[RawOption], int]:
    """Decode options starting at offset.

    Decoding stops before a payload marker byte or at the end of the buffer;
    the marker itself is not consumed.

    Args:
        data: Message buffer
        offset: Byte offset of the first option

    Returns:
        Tuple of (decoded options, number of bytes consumed)

    Raises:
        MalformedOption: If a delta or length nibble is 15
        TruncatedMessage: If extension or value bytes run past the buffer end
    """
    unpacker = BitUnpacker(data, offset)
    options: list[RawOption] = []
    number = 0

    while True:
        byte = unpacker.peek_byte()
        if byte is None or byte == PAYLOAD_MARKER:
            break

        try:
            delta_nibble = unpacker.read_uint(4)
            length_nibble = unpacker.read_uint(4)
            delta = _read_extended(unpacker, delta_nibble, "delta")
            length = _read_extended(unpacker, length_nibble, "length")
            number += delta
            value = unpacker.read_bytes(length)
        except IndexError as err:
            raise TruncatedMessage(
                f"Truncated data while decoding option {len(options) + 1}: {err}"
            ) from err

        options.append(RawOption(number, value))

    return options, unpacker.byte_position() - offset
