"""Message encoder.

This module provides the generate() function that fills in message defaults,
checks the token and size limits, and writes the wire form:

    header (4) | token (0-8) | options | 0xFF | payload
"""

from __future__ import annotations

import logging

from ..config import DEFAULT_CONFIG, CodecConfig
from ..exceptions import PacketTooLarge
from ..models.message import Message, MessageInput, Option, coerce_message
from ..utils.sizing import message_length
from .codes import EMPTY_CODE, normalize_code, to_wire_code
from .header import encode_header
from .message_id import MessageIdCounter, default_counter
from .options import PAYLOAD_MARKER, RawOption, encode_options, sort_options
from .registry import name_for, number_for

log = logging.getLogger(__name__)


def fill_defaults(
    message: MessageInput = None,
    *,
    counter: MessageIdCounter | None = None,
    config: CodecConfig | None = None,
) -> Message:
    """Return the message exactly as generate() will encode it.

    Unset fields get their defaults (code "0.01", non-confirmable, a fresh
    message id from counter), the code is canonicalized, option names are
    resolved through the registry and options are sorted by number. An
    empty message (code 0.00) loses its token, options and payload.

    Args:
        message: Message, mapping of message fields, or None
        counter: Message id source; the process-wide counter when None
        config: Codec configuration; DEFAULT_CONFIG when None

    Raises:
        TokenTooLong: If the token is longer than 8 bytes
        InvalidCode: If the code cannot be resolved
        InvalidOptionName: If an option name cannot be resolved
    """
    message = coerce_message(message)
    config = config or DEFAULT_CONFIG

    code = normalize_code(message.code if message.code is not None else config.default_code)
    message_type = message.type if "type" in message.model_fields_set else config.default_type

    if code == EMPTY_CODE:
        if message.token or message.options or message.payload:
            log.debug("Dropping token, options and payload from empty message")
        token = b""
        options: list[Option] = []
        payload = b""
    else:
        token = message.token
        raw = [RawOption(number_for(option.name), option.value) for option in message.options]
        options = [
            Option(name=name_for(option.number), value=option.value)
            for option in sort_options(raw)
        ]
        payload = message.payload

    message_id = message.message_id
    if message_id is None:
        message_id = (counter or default_counter).next()

    return Message(
        token=token,
        code=code,
        message_id=message_id,
        payload=payload,
        options=options,
        type=message_type,
    )


def generate(
    message: MessageInput = None,
    *,
    counter: MessageIdCounter | None = None,
    config: CodecConfig | None = None,
) -> bytes:
    """Encode a message to its wire form.

    Args:
        message: Message, mapping of message fields, or None for a default GET
        counter: Message id source used when the message has no id
        config: Codec configuration (packet ceiling and defaults)

    Returns:
        Encoded message bytes

    Raises:
        TokenTooLong: If the token is longer than 8 bytes
        PacketTooLarge: If the encoded message exceeds config.max_packet_size
        InvalidCode: If the code cannot be resolved
        InvalidOptionName: If an option name cannot be resolved
        EncodeError: If any other field is invalid

    Examples:
        ```python
        from coapwire import Message, generate

        data = generate(
            Message(
                code="GET",
                confirmable=True,
                token=b"\\x7a\\x10",
                options=[("Uri-Path", b"sensors"), ("Uri-Path", b"temp")],
            )
        )
        ```
    """
    config = config or DEFAULT_CONFIG
    filled = fill_defaults(message, counter=counter, config=config)

    code = str(filled.code)
    message_id = int(filled.message_id or 0)
    empty = code == EMPTY_CODE
    options = [RawOption(number_for(option.name), option.value) for option in filled.options]

    length = message_length(len(filled.token), options, len(filled.payload), empty=empty)
    if length > config.max_packet_size:
        raise PacketTooLarge(length, config.max_packet_size)

    buffer = bytearray(
        encode_header(filled.type, len(filled.token), to_wire_code(code), message_id)
    )
    buffer.extend(filled.token)
    buffer.extend(encode_options(options))

    if not empty and filled.payload:
        buffer.append(PAYLOAD_MARKER)
        buffer.extend(filled.payload)

    log.debug(
        "Encoded %s %s mid=%d: %d options, %d byte payload, %d bytes total",
        filled.type.name,
        code,
        message_id,
        len(options),
        len(filled.payload),
        len(buffer),
    )
    return bytes(buffer)
