"""Unit tests for generate/parse."""

from __future__ import annotations

import pytest

from coapwire import (
    CodecConfig,
    EncodeError,
    InvalidCode,
    InvalidOptionName,
    MalformedEmptyMessage,
    MalformedOption,
    Message,
    MessageIdCounter,
    MessageType,
    PacketTooLarge,
    TokenTooLong,
    TruncatedMessage,
    UnsupportedVersion,
    fill_defaults,
    generate,
    parse,
)


class TestGenerateDefaults:
    """Test generate() with no parameters."""

    def test_length(self) -> None:
        """Test a default message is a bare header."""
        assert len(generate()) == 4

    def test_version_and_type(self) -> None:
        """Test version 1, non-confirmable, no token."""
        data = generate()

        assert data[0] >> 6 == 1
        assert (data[0] >> 4) & 0x03 == MessageType.NON
        assert data[0] & 0x0F == 0

    def test_get(self) -> None:
        """Test the default code is GET."""
        assert generate()[1] == 0x01

    def test_no_payload_marker(self) -> None:
        """Test no marker without a payload."""
        assert 0xFF not in generate({"message_id": 1})


class TestGenerate:
    """Test generate() with parameters."""

    @pytest.mark.parametrize(
        "fields,first_byte",
        [
            ({}, 0x50),
            ({"confirmable": True}, 0x40),
            ({"ack": True}, 0x60),
            ({"reset": True}, 0x70),
            ({"confirmable": True, "ack": True}, 0x40),
            ({"ack": True, "reset": True}, 0x60),
            ({"type": MessageType.RST}, 0x70),
        ],
    )
    def test_type(self, fields: dict, first_byte: int) -> None:
        """Test type flags in the first byte."""
        assert generate({**fields, "message_id": 1})[0] == first_byte

    def test_message_id(self) -> None:
        """Test a given message id is used."""
        assert generate({"message_id": 42})[2:4] == b"\x00\x2a"

    def test_token(self, sample_token: bytes) -> None:
        """Test the token and its length."""
        data = generate({"token": sample_token, "message_id": 1})

        assert data[0] & 0x0F == 4
        assert data[4:8] == sample_token

    def test_token_too_long(self) -> None:
        """Test the 8-byte token limit."""
        generate({"token": b"\x00" * 8})
        with pytest.raises(TokenTooLong):
            generate({"token": b"\x00" * 9})

    def test_payload(self, sample_payload: bytes) -> None:
        """Test the marker and payload follow the header."""
        data = generate({"payload": sample_payload, "message_id": 1})

        assert data[4] == 0xFF
        assert data[5:] == sample_payload

    @pytest.mark.parametrize(
        "code,byte",
        [("GET", 1), ("post", 2), ("iPATCH", 7), ("2.05", 0x45), ("404", 0x84), (500, 0xA0)],
    )
    def test_code(self, code: object, byte: int) -> None:
        """Test every code form."""
        assert generate({"code": code, "message_id": 1})[1] == byte

    def test_option(self) -> None:
        """Test a single Uri-Path option."""
        data = generate({"message_id": 1, "options": [("Uri-Path", b"hello")]})

        assert data == b"\x50\x01\x00\x01" + b"\xb5hello"

    def test_options_sorted(self) -> None:
        """Test options are written in ascending number order."""
        data = generate(
            {
                "message_id": 1,
                "options": [("Uri-Path", b"aaa"), ("Uri-Path", b"bbb"), ("Observe", b"\x2a")],
            }
        )

        assert data[4:] == b"\x61\x2a" + b"\x53aaa" + b"\x03bbb"

    def test_option_and_payload(self) -> None:
        """Test options come before the marker."""
        data = generate(
            {"message_id": 1, "options": [("Content-Format", b"\x32")], "payload": b"{}"}
        )

        assert data[4:] == b"\xc1\x32" + b"\xff{}"

    def test_invalid_option_name(self) -> None:
        """Test an unknown option name."""
        with pytest.raises(InvalidOptionName):
            generate({"options": [("Bogus", b"")]})

    def test_invalid_code(self) -> None:
        """Test an unknown code."""
        with pytest.raises(InvalidCode):
            generate({"code": "BREW"})

    def test_invalid_fields(self) -> None:
        """Test mappings that fail model validation."""
        with pytest.raises(EncodeError, match="Invalid message fields"):
            generate({"message_id": 70000})
        with pytest.raises(EncodeError, match="Invalid message fields"):
            generate({"colour": "blue"})
        with pytest.raises(EncodeError, match="Invalid message fields"):
            generate({"code": True, "message_id": 1})


class TestPacketSize:
    """Test the packet size ceiling."""

    def test_exactly_1280(self) -> None:
        """Test a 1280-byte message encodes."""
        data = generate({"message_id": 1, "payload": b"x" * 1275})

        assert len(data) == 1280

    def test_1281(self) -> None:
        """Test a 1281-byte message fails."""
        with pytest.raises(PacketTooLarge, match="Max packet size is 1280") as info:
            generate({"message_id": 1, "payload": b"x" * 1276})

        assert info.value.size == 1281
        assert info.value.limit == 1280

    def test_options_count(self) -> None:
        """Test option bytes count toward the limit."""
        value = b"v" * 1273
        # header 4 + option header 1 + 2 length extension bytes + 1273 = 1280
        generate({"message_id": 1, "options": [("Uri-Path", value)]})
        with pytest.raises(PacketTooLarge):
            generate({"message_id": 1, "options": [("Uri-Path", value)], "payload": b"!"})

    def test_configured_limit(self) -> None:
        """Test a smaller configured ceiling."""
        config = CodecConfig(max_packet_size=16)

        assert len(generate({"payload": b"x" * 11}, config=config)) == 16
        with pytest.raises(PacketTooLarge) as info:
            generate({"payload": b"x" * 12}, config=config)
        assert info.value.size == 17


class TestEmptyMessage:
    """Test the 0.00 empty message."""

    def test_generate(self) -> None:
        """Test an empty message is 4 bytes."""
        data = generate({"code": "0.00", "message_id": 9})

        assert data == b"\x50\x00\x00\x09"

    def test_drops_options_and_payload(self) -> None:
        """Test options, token and payload are not written."""
        data = generate(
            {
                "code": "0.00",
                "ack": True,
                "token": b"\x01",
                "options": [("Uri-Path", b"x")],
                "payload": b"ignored",
            }
        )

        assert len(data) == 4
        assert data[0] == 0x60

    def test_parse(self) -> None:
        """Test parsing an empty message."""
        msg = parse(b"\x50\x00\x00\x2a")

        assert msg.code == "0.00"
        assert msg.payload == b""
        assert msg.options == []
        assert msg.message_id == 42

    def test_roundtrip(self) -> None:
        """Test an empty ack survives the round trip."""
        msg = parse(generate({"code": "0.00", "ack": True}))

        assert msg.ack is True
        assert msg.payload == b""

    def test_five_bytes(self) -> None:
        """Test an empty message with an extra byte."""
        with pytest.raises(MalformedEmptyMessage, match="Empty messages must be empty"):
            parse(b"\x50\x00\x00\x2a\x00")

    def test_with_token(self) -> None:
        """Test an empty message that claims a token."""
        with pytest.raises(MalformedEmptyMessage):
            parse(b"\x51\x00\x00\x2a\x01")


class TestParse:
    """Test parse() on hand-built buffers."""

    def test_no_options(self) -> None:
        """Test a bare POST."""
        msg = parse(b"\x50\x02\x00\x2a")

        assert msg.code == "0.02"
        assert msg.message_id == 42
        assert msg.token == b""
        assert msg.options == []
        assert msg.payload == b""
        assert msg.non_confirmable

    @pytest.mark.parametrize(
        "first_byte,expected",
        [(0x40, MessageType.CON), (0x50, MessageType.NON), (0x60, MessageType.ACK), (0x70, MessageType.RST)],
    )
    def test_type(self, first_byte: int, expected: MessageType) -> None:
        """Test each type decodes, with the matching flag set."""
        msg = parse(bytes([first_byte, 0x01, 0x00, 0x01]))

        assert msg.type == expected
        assert [msg.confirmable, msg.non_confirmable, msg.ack, msg.reset].count(True) == 1

    @pytest.mark.parametrize("byte,code", [(0x01, "0.01"), (0x41, "2.01"), (0x84, "4.04"), (0xA0, "5.00")])
    def test_code(self, byte: int, code: str) -> None:
        """Test codes decode to the dotted form."""
        assert parse(bytes([0x50, byte, 0x00, 0x01])).code == code

    def test_payload(self) -> None:
        """Test the payload after the marker."""
        msg = parse(b"\x50\x45\x00\x01\xff" + b"hello")

        assert msg.payload == b"hello"

    def test_options_and_payload(self) -> None:
        """Test an option followed by a payload."""
        msg = parse(b"\x40\x01\x00\x2a" + b"\x13abc" + b"\xff" + b"\x00" * 5)

        assert [(o.name, o.value) for o in msg.options] == [("If-Match", b"abc")]
        assert msg.payload == b"\x00" * 5

    def test_unregistered_option(self) -> None:
        """Test unregistered numbers decode to decimal names."""
        msg = parse(b"\x40\x01\x00\x2a" + b"\x91z")

        assert msg.options[0].name == "9"

    def test_token(self) -> None:
        """Test token then option."""
        msg = parse(b"\x42\x01\x00\x2a" + b"\xbe\xef" + b"\xb2hi")

        assert msg.token == b"\xbe\xef"
        assert msg.option_values("Uri-Path") == [b"hi"]

    def test_marker_at_end(self) -> None:
        """Test a marker with nothing after it is an empty payload."""
        msg = parse(b"\x40\x01\x00\x2a" + b"\x13abc" + b"\xff")

        assert msg.payload == b""
        assert len(msg.options) == 1

    def test_accepts_bytearray(self) -> None:
        """Test non-bytes buffers."""
        msg = parse(bytearray(b"\x50\x45\x00\x01\xffok"))

        assert msg.payload == b"ok"

    def test_unsupported_version(self) -> None:
        """Test version 2."""
        with pytest.raises(UnsupportedVersion):
            parse(b"\x80\x01\x00\x01")

    def test_reserved_nibble(self) -> None:
        """Test option nibble 15."""
        with pytest.raises(MalformedOption):
            parse(b"\x50\x01\x00\x01" + b"\xf0")

    def test_truncated_header(self) -> None:
        """Test buffers shorter than the header."""
        with pytest.raises(TruncatedMessage):
            parse(b"\x50\x01")

    def test_truncated_token(self) -> None:
        """Test a token running past the buffer."""
        with pytest.raises(TruncatedMessage):
            parse(b"\x54\x01\x00\x01\xaa")

    def test_truncated_option_value(self) -> None:
        """Test an option header with its value cut off."""
        with pytest.raises(TruncatedMessage):
            parse(b"\x40\x01\x00\x2a\x13")


class TestFillDefaults:
    """Test default filling and normalization."""

    def test_defaults(self, counter: MessageIdCounter) -> None:
        """Test every unset field is filled."""
        filled = fill_defaults(counter=counter)

        assert filled == Message(
            token=b"", code="0.01", message_id=1000, payload=b"", options=[], type=MessageType.NON
        )

    def test_normalizes(self, counter: MessageIdCounter) -> None:
        """Test code, option names and order are normalized."""
        filled = fill_defaults(
            {"code": "get", "options": [("11", b"b"), ("If-Match", b"")]}, counter=counter
        )

        assert filled.code == "0.01"
        assert [o.name for o in filled.options] == ["If-Match", "Uri-Path"]

    def test_config_defaults(self, counter: MessageIdCounter) -> None:
        """Test configured default code and type."""
        config = CodecConfig(default_code="POST", default_type=MessageType.CON)

        filled = fill_defaults(counter=counter, config=config)
        assert filled.code == "0.02"
        assert filled.type == MessageType.CON

        explicit = fill_defaults(Message(type=MessageType.NON), counter=counter, config=config)
        assert explicit.type == MessageType.NON

    def test_does_not_mutate(self, counter: MessageIdCounter) -> None:
        """Test the input message is left unchanged."""
        msg = Message(options=[("Uri-Path", b"b"), ("If-Match", b"")])
        fill_defaults(msg, counter=counter)

        assert msg.message_id is None
        assert msg.options[0].name == "Uri-Path"


class TestCodecConfig:
    """Test configuration validation."""

    def test_too_small(self) -> None:
        """Test a ceiling below the header size."""
        with pytest.raises(ValueError, match="max_packet_size"):
            CodecConfig(max_packet_size=3)

    def test_bad_default_code(self) -> None:
        """Test an unresolvable default code."""
        with pytest.raises(InvalidCode):
            CodecConfig(default_code="BREW")

    def test_type_from_int(self) -> None:
        """Test an int default type is converted."""
        assert CodecConfig(default_type=2).default_type is MessageType.ACK  # type: ignore[arg-type]
