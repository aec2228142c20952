"""Utility functions for coapwire.

This module provides size calculation without encoding.
"""

from __future__ import annotations

from .sizing import encoded_size, message_length

__all__ = [
    "encoded_size",
    "message_length",
]
