#!/usr/bin/env python3
"""Basic usage example for coapwire.

This example demonstrates:
1. Building a confirmable GET request
2. Encoding it to the wire format
3. Decoding it back to a Message
4. Answering with a piggybacked 2.05 Content response
"""

from __future__ import annotations

import logging

from coapwire import Message, MessageType, encoded_size, generate, parse


def main() -> None:
    """Run the basic usage example."""
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    print("=" * 60)
    print("coapwire Basic Usage Example")
    print("=" * 60)
    print()

    # Build a request
    print("1. Creating a GET request for /sensors/temp...")
    request = Message(
        code="GET",
        confirmable=True,
        token=b"\x7a\x10",
        options=[("Uri-Path", b"sensors"), ("Uri-Path", b"temp")],
    )
    print(f"   Predicted size: {encoded_size(request)} bytes")
    print()

    # Encode
    print("2. Encoding...")
    data = generate(request)
    print(f"   {len(data)} bytes: {data.hex(' ')}")
    print()

    # Decode
    print("3. Decoding...")
    received = parse(data)
    path = "/".join(segment.decode() for segment in received.option_values("Uri-Path"))
    print(f"   Code: {received.code}  Type: {received.type.name}  Message id: {received.message_id}")
    print(f"   Path: /{path}")
    print()

    # Respond
    print("4. Sending a piggybacked response...")
    response = Message(
        code="2.05",
        type=MessageType.ACK,
        message_id=received.message_id,
        token=received.token,
        options=[("Content-Format", b"\x00")],
        payload=b"21.5",
    )
    reply = parse(generate(response))
    print(f"   Code: {reply.code}  Payload: {reply.payload.decode()}")
    print()


if __name__ == "__main__":
    main()
