"""Wire codec for coapwire.

This module provides the message-level generate()/parse() pair and the
header, option, code and option-name codecs they are built from.
"""

from __future__ import annotations

from .codes import from_wire_code, normalize_code, to_wire_code
from .decoder import parse
from .encoder import fill_defaults, generate
from .header import Header, MessageType, decode_header, encode_header
from .message_id import MessageIdCounter, default_counter
from .options import RawOption, decode_options, encode_options
from .registry import name_for, number_for

__all__ = [
    "generate",
    "parse",
    "fill_defaults",
    "Header",
    "MessageType",
    "encode_header",
    "decode_header",
    "RawOption",
    "encode_options",
    "decode_options",
    "to_wire_code",
    "from_wire_code",
    "normalize_code",
    "name_for",
    "number_for",
    "MessageIdCounter",
    "default_counter",
]
