"""Codec configuration.

This module provides the configuration dataclass for the message encoder.
The defaults match the protocol's usual deployment over IPv6 links, where a
message must fit the 1280-byte minimum MTU.
"""

from __future__ import annotations

from dataclasses import dataclass

from .codec.codes import to_wire_code
from .codec.header import HEADER_SIZE, MessageType


@dataclass(frozen=True)
class CodecConfig:
    """Configuration for generate().

    Attributes:
        max_packet_size: Largest encoded message in bytes (default 1280).
            Encoding a larger message raises PacketTooLarge.
        default_code: Code used when a message has none (default "0.01", GET).
        default_type: Type used when a message is built without one
            (default non-confirmable).

    Examples:
        ```python
        from coapwire import CodecConfig, generate

        # Constrained link with small frames
        config = CodecConfig(max_packet_size=128)
        data = generate({"code": "POST", "payload": b"21.5"}, config=config)
        ```
    """

    max_packet_size: int = 1280
    default_code: str = "0.01"
    default_type: MessageType = MessageType.NON

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.max_packet_size < HEADER_SIZE:
            raise ValueError(
                f"max_packet_size must be >= {HEADER_SIZE}, got {self.max_packet_size}"
            )

        # Raises InvalidCode for an unusable default
        to_wire_code(self.default_code)

        if not isinstance(self.default_type, MessageType):
            object.__setattr__(self, "default_type", MessageType(self.default_type))


DEFAULT_CONFIG = CodecConfig()
