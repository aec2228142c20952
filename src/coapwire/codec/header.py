"""Fixed 4-byte message header and token.

Header layout (big-endian):

    byte 0:    version (2 bits, always 1) | type (2 bits) | token length (4 bits)
    byte 1:    code class (3 bits) | code detail (5 bits)
    bytes 2-3: message id (uint16)

The token (0-8 bytes) follows the header directly.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from ..exceptions import (
    EncodeError,
    InvalidTokenLength,
    TokenTooLong,
    TruncatedMessage,
    UnsupportedVersion,
)
from .bitpack import BitPacker, BitUnpacker
from .codes import from_wire_code

VERSION = 1
HEADER_SIZE = 4
MAX_TOKEN_LENGTH = 8
MAX_MESSAGE_ID = 0xFFFF


class MessageType(enum.IntEnum):
    """Value of the 2-bit type field."""

    CON = 0  # confirmable
    NON = 1  # non-confirmable
    ACK = 2  # acknowledgement
    RST = 3  # reset


@dataclass(frozen=True)
class Header:
    """Decoded header fields.

    Attributes:
        version: Protocol version (always 1 once decoded)
        type: Message type
        token_length: Length of the token that follows the header
        code: Canonical "class.detail" code
        message_id: 16-bit message id
    """

    version: int
    type: MessageType
    token_length: int
    code: str
    message_id: int


def encode_header(
    type: MessageType | int, token_length: int, code: int, message_id: int
) -> bytes:
    """Pack the 4 header bytes.

    Args:
        type: Message type (0-3)
        token_length: Token length (0-8)
        code: Code byte as returned by to_wire_code()
        message_id: Message id (0-65535)

    Raises:
        TokenTooLong: If token_length is above 8
        EncodeError: If any other field is out of range
    """
    if not 0 <= token_length <= MAX_TOKEN_LENGTH:
        raise TokenTooLong(f"Token too long: {token_length} bytes (max {MAX_TOKEN_LENGTH})")
    if not 0 <= message_id <= MAX_MESSAGE_ID:
        raise EncodeError(f"Message id must be 0-{MAX_MESSAGE_ID}, got {message_id}")

    packer = BitPacker()
    try:
        packer.write_uint(VERSION, 2)
        packer.write_uint(int(type), 2)
        packer.write_uint(token_length, 4)
        packer.write_uint(code, 8)
        packer.write_uint(message_id, 16)
    except ValueError as err:
        raise EncodeError(f"Invalid header field: {err}") from err
    return packer.to_bytes()


def decode_header(data: bytes) -> Header:
    """Unpack the 4 header bytes.

    Raises:
        TruncatedMessage: If data is shorter than 4 bytes
        UnsupportedVersion: If the version field is not 1
        InvalidTokenLength: If the token length field is above 8
    """
    if len(data) < HEADER_SIZE:
        raise TruncatedMessage(
            f"Message too short for header: {len(data)} bytes (need {HEADER_SIZE})"
        )

    unpacker = BitUnpacker(data)
    version = unpacker.read_uint(2)
    if version != VERSION:
        raise UnsupportedVersion(version)

    message_type = MessageType(unpacker.read_uint(2))
    token_length = unpacker.read_uint(4)
    if token_length > MAX_TOKEN_LENGTH:
        raise InvalidTokenLength(
            f"Token length not allowed: {token_length} (max {MAX_TOKEN_LENGTH})"
        )

    code = from_wire_code(unpacker.read_uint(8))
    message_id = unpacker.read_uint(16)

    return Header(
        version=version,
        type=message_type,
        token_length=token_length,
        code=code,
        message_id=message_id,
    )


def decode_token(data: bytes, token_length: int) -> bytes:
    """Return the token that follows the header.

    Raises:
        TruncatedMessage: If the buffer ends inside the token
    """
    end = HEADER_SIZE + token_length
    if len(data) < end:
        raise TruncatedMessage(
            f"Truncated token: need {token_length} bytes, have {max(0, len(data) - HEADER_SIZE)}"
        )
    return bytes(data[HEADER_SIZE:end])
