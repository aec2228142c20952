"""Registered option names.

A static two-way table between the registered option numbers and their
names. Numbers without a registered name travel as their decimal string.
"""

from __future__ import annotations

from types import MappingProxyType

from ..exceptions import InvalidOptionName

OPTION_NAMES = MappingProxyType(
    {
        1: "If-Match",
        3: "Uri-Host",
        4: "ETag",
        5: "If-None-Match",
        6: "Observe",
        7: "Uri-Port",
        8: "Location-Path",
        11: "Uri-Path",
        12: "Content-Format",
        14: "Max-Age",
        15: "Uri-Query",
        17: "Accept",
        20: "Location-Query",
        23: "Block2",
        27: "Block1",
        35: "Proxy-Uri",
        39: "Proxy-Scheme",
        60: "Size1",
    }
)

OPTION_NUMBERS = MappingProxyType({name: number for number, name in OPTION_NAMES.items()})


def name_for(number: int) -> str:
    """Return the registered name for an option number, or its decimal string.

    Examples:
        >>> name_for(11)
        'Uri-Path'
        >>> name_for(9)
        '9'
    """
    return OPTION_NAMES.get(number, str(number))


def number_for(name: str | int) -> int:
    """Return the option number for a registered name or a decimal string.

    Raises:
        InvalidOptionName: If name is not registered and is not a non-negative integer
    """
    if isinstance(name, bool):
        raise InvalidOptionName(f"Invalid option name: {name!r}")
    if isinstance(name, int):
        number = name
    else:
        registered = OPTION_NUMBERS.get(name)
        if registered is not None:
            return registered
        text = str(name).strip()
        if not (text.isascii() and text.isdigit()):
            raise InvalidOptionName(f"Unknown option name: {name!r}")
        number = int(text)

    if number < 0:
        raise InvalidOptionName(f"Option number must be non-negative, got {number}")
    return number
