"""Pydantic models for messages and options.

Message is both the input to generate() and the output of parse(). On input
most fields may be left unset and are filled by the encoder; on output every
field is populated and the code is in canonical "class.detail" form.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from ..codec.codes import EMPTY_CODE, normalize_code
from ..codec.header import MAX_TOKEN_LENGTH, MessageType
from ..exceptions import EncodeError, InvalidCode, TokenTooLong

# Legacy boolean flags, in the order they take precedence.
_TYPE_FLAGS = (
    ("confirmable", MessageType.CON),
    ("ack", MessageType.ACK),
    ("reset", MessageType.RST),
)


class Option(BaseModel):
    """A named option.

    The name is a registered option name such as "Uri-Path", or the decimal
    string of an unregistered option number. Integer names are stored as
    their decimal string.

    Example:
        >>> Option(name="Uri-Path", value=b"sensors")
        >>> Option(name=2048, value=b"\\x01")
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    value: bytes = b""

    @field_validator("name", mode="before")
    @classmethod
    def _name_from_number(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class Message(BaseModel):
    """A protocol message.

    Attributes:
        token: Request/response matching token, 0-8 bytes
        code: Method or response code; "GET", "2.05" or 404 style on input
        message_id: 16-bit id; None lets the encoder assign one
        payload: Message body
        options: Options in any order; the encoder sorts them by number
        type: Confirmable, non-confirmable, acknowledgement or reset

    The booleans ``confirmable``, ``ack`` and ``reset`` are accepted as an
    alternative to ``type``. When several are set, confirmable wins over
    ack, and ack over reset. An explicit ``type`` wins over all of them.

    Example:
        >>> msg = Message(code="GET", confirmable=True, options=[("Uri-Path", b"temp")])
        >>> msg.type
        <MessageType.CON: 0>
    """

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    token: bytes = b""
    code: str | int | None = None
    message_id: int | None = Field(default=None, ge=0, le=65535)
    payload: bytes = b""
    options: list[Option] = Field(default_factory=list)
    type: MessageType = MessageType.NON

    @model_validator(mode="before")
    @classmethod
    def _type_from_flags(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        if not any(flag in data for flag, _ in _TYPE_FLAGS):
            return data

        data = dict(data)
        flags = {flag: bool(data.pop(flag, False)) for flag, _ in _TYPE_FLAGS}
        if data.get("type") is None:
            data["type"] = next(
                (message_type for flag, message_type in _TYPE_FLAGS if flags[flag]),
                MessageType.NON,
            )
        return data

    @field_validator("code", mode="before")
    @classmethod
    def _code_not_bool(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError(f"Invalid code: {value!r}")
        return value

    @field_validator("options", mode="before")
    @classmethod
    def _options_from_pairs(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, (list, tuple)):
            return [
                {"name": item[0], "value": item[1]} if isinstance(item, (list, tuple)) else item
                for item in value
            ]
        return value

    @property
    def confirmable(self) -> bool:
        return self.type == MessageType.CON

    @property
    def non_confirmable(self) -> bool:
        return self.type == MessageType.NON

    @property
    def ack(self) -> bool:
        return self.type == MessageType.ACK

    @property
    def reset(self) -> bool:
        return self.type == MessageType.RST

    @property
    def is_empty(self) -> bool:
        """True when the code is the empty-message code 0.00."""
        if self.code is None:
            return False
        try:
            return normalize_code(self.code) == EMPTY_CODE
        except InvalidCode:
            return False

    def option_values(self, name: str) -> list[bytes]:
        """Return the values of every option called name, in message order."""
        return [option.value for option in self.options if option.name == name]


MessageInput = Union[Message, Mapping[str, Any], None]


def coerce_message(message: MessageInput) -> Message:
    """Turn encoder input into a Message and check the token length.

    Raises:
        EncodeError: If a mapping fails model validation
        TokenTooLong: If the token is longer than 8 bytes
    """
    if message is None:
        return Message()
    if not isinstance(message, Message):
        try:
            message = Message.model_validate(dict(message))
        except ValidationError as err:
            raise EncodeError(f"Invalid message fields: {err}") from err

    if len(message.token) > MAX_TOKEN_LENGTH:
        raise TokenTooLong(f"Token too long: {len(message.token)} bytes (max {MAX_TOKEN_LENGTH})")
    return message
