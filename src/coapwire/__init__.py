"""coapwire: CoAP Message Codec

A Python library for encoding and decoding CoAP-style (RFC 7252) messages:
the 4-byte header, the token, delta-encoded options and the payload.
Transport, retransmission, observe and block-wise transfer are left to the
caller.

Key Features:
- Pydantic-based message modeling
- Human-readable codes ("GET", "2.05", 404) and option names ("Uri-Path")
- Extended option delta/length encoding with strict bounds checking
- Thread-safe message id allocation

Quick Start:
    >>> from coapwire import Message, generate, parse
    >>>
    >>> data = generate(
    ...     Message(code="GET", confirmable=True, options=[("Uri-Path", b"temp")])
    ... )
    >>> msg = parse(data)
    >>> msg.code, msg.confirmable
    ('0.01', True)
"""

from __future__ import annotations

from .codec import (
    MessageIdCounter,
    MessageType,
    fill_defaults,
    from_wire_code,
    generate,
    name_for,
    normalize_code,
    number_for,
    parse,
    to_wire_code,
)
from .config import DEFAULT_CONFIG, CodecConfig
from .exceptions import (
    CoapError,
    DecodeError,
    EncodeError,
    InvalidCode,
    InvalidOptionName,
    InvalidTokenLength,
    MalformedEmptyMessage,
    MalformedOption,
    PacketTooLarge,
    TokenTooLong,
    TruncatedMessage,
    UnsupportedVersion,
)
from .models import Message, Option
from .utils import encoded_size

__version__ = "0.1.0"

__all__ = [
    # Core API
    "Message",
    "Option",
    "MessageType",
    "generate",
    "parse",
    "fill_defaults",
    # Codes and option names
    "to_wire_code",
    "from_wire_code",
    "normalize_code",
    "name_for",
    "number_for",
    # Message ids
    "MessageIdCounter",
    # Configuration
    "CodecConfig",
    "DEFAULT_CONFIG",
    # Sizing
    "encoded_size",
    # Exceptions
    "CoapError",
    "EncodeError",
    "DecodeError",
    "TokenTooLong",
    "PacketTooLarge",
    "InvalidCode",
    "InvalidOptionName",
    "UnsupportedVersion",
    "InvalidTokenLength",
    "MalformedOption",
    "MalformedEmptyMessage",
    "TruncatedMessage",
    # Version
    "__version__",
]
