"""Translation between method/response codes and their wire byte.

The code byte packs a 3-bit class and a 5-bit detail. Callers may name a
code three ways:

- a request method mnemonic, case-insensitive: ``"GET"``, ``"ipatch"``
- the dotted ``"class.detail"`` form: ``"2.05"``
- an HTTP-style number, as int or string: ``404`` or ``"404"`` (class 4, detail 4)

Decoding always produces the dotted form with a two-digit detail.
"""

from __future__ import annotations

from ..exceptions import InvalidCode

EMPTY_CODE = "0.00"

METHODS: dict[str, int] = {
    "GET": 1,
    "POST": 2,
    "PUT": 3,
    "DELETE": 4,
    "FETCH": 5,
    "PATCH": 6,
    "iPATCH": 7,
}

_METHODS_BY_KEY = {name.lower(): value for name, value in METHODS.items()}
_METHODS_BY_CODE = {value: name for name, value in METHODS.items()}

_CLASS_BITS = 3
_DETAIL_BITS = 5
_DETAIL_MASK = (1 << _DETAIL_BITS) - 1  # 0b11111


def _pack(code_class: int, detail: int, source: object) -> int:
    if not 0 <= code_class < (1 << _CLASS_BITS):
        raise InvalidCode(f"Code class {code_class} out of range 0-7 in {source!r}")
    if not 0 <= detail <= _DETAIL_MASK:
        raise InvalidCode(f"Code detail {detail} out of range 0-31 in {source!r}")
    return (code_class << _DETAIL_BITS) | detail


def to_wire_code(code: str | int) -> int:
    """Resolve a code in any accepted form to its wire byte.

    Args:
        code: Mnemonic, dotted string, or HTTP-style number

    Returns:
        The packed code byte (class << 5 | detail)

    Raises:
        InvalidCode: If no resolution strategy applies

    Examples:
        >>> to_wire_code("get")
        1
        >>> hex(to_wire_code("2.05"))
        '0x45'
        >>> hex(to_wire_code("404"))
        '0x84'
    """
    if isinstance(code, bool):
        raise InvalidCode(f"Invalid code: {code!r}")

    if isinstance(code, int):
        return _pack(code // 100, code % 100, code)

    if not isinstance(code, str):
        raise InvalidCode(f"Invalid code: {code!r}")

    text = code.strip()
    method = _METHODS_BY_KEY.get(text.lower())
    if method is not None:
        return method

    if "." in text:
        parts = text.split(".")
        if len(parts) != 2 or not all(part.isascii() and part.isdigit() for part in parts):
            raise InvalidCode(f"Invalid dotted code: {code!r}")
        return _pack(int(parts[0]), int(parts[1]), code)

    if text.isascii() and text.isdigit():
        number = int(text)
        return _pack(number // 100, number % 100, code)

    raise InvalidCode(f"Invalid code: {code!r}")


def from_wire_code(byte: int) -> str:
    """Render a code byte in the canonical ``"class.detail"`` form.

    Examples:
        >>> from_wire_code(0x45)
        '2.05'
        >>> from_wire_code(0xA0)
        '5.00'
    """
    if not 0 <= byte <= 0xFF:
        raise ValueError(f"Code byte must be 0-255, got {byte}")
    return f"{byte >> _DETAIL_BITS}.{byte & _DETAIL_MASK:02d}"


def normalize_code(code: str | int) -> str:
    """Canonicalize any accepted code form to ``"class.detail"``."""
    return from_wire_code(to_wire_code(code))


def method_name(code: str | int) -> str | None:
    """Return the method mnemonic for a request code, or None for other codes."""
    return _METHODS_BY_CODE.get(to_wire_code(code))
