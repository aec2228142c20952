"""Pydantic message modeling for coapwire.

This module provides the Message and Option models used on both sides of
the codec.
"""

from __future__ import annotations

from ..codec.header import MessageType
from .message import Message, Option

__all__ = [
    "Message",
    "MessageType",
    "Option",
]
