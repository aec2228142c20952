"""Exception hierarchy for coapwire.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from CoapError for easy catching of any coapwire-specific error.
Encoding failures derive from EncodeError, decoding failures from DecodeError.
"""

from __future__ import annotations


class CoapError(Exception):
    """Base exception for all coapwire errors."""

    pass


class EncodeError(CoapError):
    """Raised when building a message buffer fails.

    Examples:
        - Token longer than 8 bytes
        - Encoded message larger than the packet ceiling
        - Unresolvable code or option name
        - Header field out of range
    """

    pass


class DecodeError(CoapError):
    """Raised when parsing a message buffer fails.

    Examples:
        - Unsupported protocol version
        - Truncated data (insufficient bytes)
        - Reserved option nibble
        - Empty message carrying extra bytes
    """

    pass


class TokenTooLong(EncodeError):
    """Raised when a supplied token is longer than 8 bytes."""

    pass


class PacketTooLarge(EncodeError):
    """Raised when the encoded message would exceed the packet ceiling."""

    def __init__(self, size: int, limit: int) -> None:
        super().__init__(f"Max packet size is {limit}: current is {size}")
        self.size = size
        self.limit = limit


class InvalidCode(EncodeError, ValueError):
    """Raised when a code is not a mnemonic, a dotted code or an HTTP-style number."""

    pass


class InvalidOptionName(EncodeError, ValueError):
    """Raised when an option name is neither registered nor a decimal number."""

    pass


class UnsupportedVersion(DecodeError):
    """Raised when the header version field is not 1."""

    def __init__(self, version: int) -> None:
        super().__init__(f"Unsupported version: {version}")
        self.version = version


class InvalidTokenLength(DecodeError):
    """Raised when the header token length field is greater than 8."""

    pass


class MalformedOption(DecodeError):
    """Raised when an option delta or length nibble holds the reserved value 15."""

    pass


class MalformedEmptyMessage(DecodeError):
    """Raised when an empty message (code 0.00) is not exactly 4 bytes."""

    pass


class TruncatedMessage(DecodeError):
    """Raised when the buffer ends before a header, token or option is complete."""

    pass
