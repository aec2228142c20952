"""Message size calculation utilities.

This module provides functions to calculate the encoded size of messages
without actually encoding them. The encoder uses the same calculation to
enforce the packet size ceiling before writing anything.
"""

from __future__ import annotations

from collections.abc import Iterable

from ..codec.codes import EMPTY_CODE, normalize_code
from ..codec.header import HEADER_SIZE
from ..codec.options import RawOption, encoded_option_size, sort_options
from ..codec.registry import number_for
from ..config import DEFAULT_CONFIG, CodecConfig
from ..models.message import MessageInput, coerce_message


def message_length(
    token_length: int,
    options: Iterable[RawOption],
    payload_length: int,
    empty: bool = False,
) -> int:
    """Calculate the encoded length from the parts of a message.

    Args:
        token_length: Token length in bytes
        options: Wire options, in any order
        payload_length: Payload length in bytes
        empty: True for the empty-message code, which carries no options or payload

    Returns:
        Total length: header + token + option TLVs + marker and payload
    """
    length = HEADER_SIZE + token_length
    if empty:
        return length

    previous = 0
    for option in sort_options(options):
        length += encoded_option_size(option.number - previous, len(option.value))
        previous = option.number

    if payload_length:
        length += 1 + payload_length  # payload marker
    return length


def encoded_size(message: MessageInput = None, config: CodecConfig | None = None) -> int:
    """Calculate the encoded size of a message in bytes.

    The message id does not affect the size, so none is allocated.

    Args:
        message: Message, mapping of message fields, or None for a default message
        config: Codec configuration supplying the default code

    Returns:
        Encoded size in bytes

    Raises:
        EncodeError: If a mapping fails model validation
        TokenTooLong: If the token is longer than 8 bytes
        InvalidCode: If the code cannot be resolved
        InvalidOptionName: If an option name cannot be resolved

    Example:
        >>> encoded_size({"code": "GET", "options": [("Uri-Path", b"temp")]})
        9
    """
    message = coerce_message(message)
    config = config or DEFAULT_CONFIG

    code = message.code if message.code is not None else config.default_code
    if normalize_code(code) == EMPTY_CODE:
        return HEADER_SIZE

    options = [RawOption(number_for(option.name), option.value) for option in message.options]
    return message_length(len(message.token), options, len(message.payload))
