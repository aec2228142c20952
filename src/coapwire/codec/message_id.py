"""Message id allocation.

Ids cycle through [0, 65535): once the counter reaches 65535 it wraps to 0.
The counter is seeded pseudo-randomly and lives only as long as the process,
so ids are not unique across processes.
"""

from __future__ import annotations

import random
import threading

ID_SPACE = 65535


class MessageIdCounter:
    """Thread-safe cycling message id counter.

    Example:
        >>> counter = MessageIdCounter(seed=65534)
        >>> counter.next(), counter.next()
        (65534, 0)
    """

    def __init__(self, seed: int | None = None) -> None:
        self._lock = threading.Lock()
        self._value = 0
        self.init(seed)

    def init(self, seed: int | None = None) -> None:
        """Reset the counter to seed, or to a random value in [0, 65535) when None."""
        if seed is None:
            seed = random.randrange(ID_SPACE)
        if not 0 <= seed <= ID_SPACE:
            raise ValueError(f"seed must be 0-{ID_SPACE}, got {seed}")
        with self._lock:
            self._value = seed % ID_SPACE

    def next(self) -> int:
        """Return the next message id and advance the counter."""
        with self._lock:
            value = self._value
            self._value = (value + 1) % ID_SPACE
        return value

    def peek(self) -> int:
        """Return the id the next call to next() will hand out."""
        with self._lock:
            return self._value


default_counter = MessageIdCounter()
