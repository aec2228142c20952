"""Message decoder.

This module provides the parse() function that converts a wire buffer back
to a Message with every field populated.
"""

from __future__ import annotations

import logging

from ..exceptions import MalformedEmptyMessage
from ..models.message import Message, Option
from .codes import EMPTY_CODE
from .header import HEADER_SIZE, decode_header, decode_token
from .options import PAYLOAD_MARKER, decode_options
from .registry import name_for

log = logging.getLogger(__name__)


def parse(data: bytes | bytearray | memoryview) -> Message:
    """Decode a wire buffer to a Message.

    The returned message carries the canonical "class.detail" code, the
    message type, and options named through the option registry (decimal
    strings for unregistered numbers). A payload marker at the very end of
    the buffer yields an empty payload.

    Args:
        data: Encoded message

    Returns:
        Decoded message

    Raises:
        TruncatedMessage: If the buffer ends inside the header, token or an option
        UnsupportedVersion: If the version field is not 1
        InvalidTokenLength: If the token length field is above 8
        MalformedEmptyMessage: If a 0.00 message is not exactly 4 bytes
        MalformedOption: If an option nibble holds the reserved value 15

    Examples:
        ```python
        from coapwire import parse

        msg = parse(received)
        if msg.confirmable:
            ...
        for segment in msg.option_values("Uri-Path"):
            ...
        ```
    """
    data = bytes(data)
    header = decode_header(data)

    if header.code == EMPTY_CODE:
        if len(data) != HEADER_SIZE:
            raise MalformedEmptyMessage(
                f"Empty messages must be empty: got {len(data)} bytes, expected {HEADER_SIZE}"
            )
        if header.token_length:
            raise MalformedEmptyMessage(
                f"Empty messages must be empty: token length {header.token_length}"
            )
        log.debug("Decoded empty %s mid=%d", header.type.name, header.message_id)
        return Message(
            token=b"",
            code=header.code,
            message_id=header.message_id,
            payload=b"",
            options=[],
            type=header.type,
        )

    token = decode_token(data, header.token_length)
    offset = HEADER_SIZE + header.token_length

    raw_options, consumed = decode_options(data, offset)
    position = offset + consumed
    if position < len(data) and data[position] == PAYLOAD_MARKER:
        position += 1
    payload = data[position:]

    options = [Option(name=name_for(option.number), value=option.value) for option in raw_options]

    log.debug(
        "Decoded %s %s mid=%d: %d options, %d byte payload",
        header.type.name,
        header.code,
        header.message_id,
        len(options),
        len(payload),
    )
    return Message(
        token=token,
        code=header.code,
        message_id=header.message_id,
        payload=payload,
        options=options,
        type=header.type,
    )
