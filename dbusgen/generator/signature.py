"""Recursive-descent parser for D-Bus type signatures.

Each production is a pure function of the unconsumed input: it returns the
parsed type expression together with whatever remains after it. Only the
subset of the D-Bus grammar needed to resolve types is understood; any
other code is a hard failure.
"""

from __future__ import annotations

from string import ascii_uppercase

from .types import (
    PRIMITIVE_CODES,
    ArrayType,
    GeneratorError,
    MapType,
    PrimitiveType,
    StructField,
    StructType,
    TypeExpression,
)


class GrammarError(GeneratorError):
    """Raised when a signature cannot be parsed.

    ``char`` is the offending character (None at end of input), ``remaining``
    the unconsumed input at the point of failure and ``signature`` the full
    signature being parsed, once known.
    """

    def __init__(
        self,
        message: str,
        *,
        char: str | None = None,
        remaining: str = "",
        signature: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.char = char
        self.remaining = remaining
        self.signature = signature

    @property
    def position(self) -> int | None:
        if self.signature is None:
            return None
        return len(self.signature) - len(self.remaining)

    def __str__(self) -> str:
        if self.signature is None:
            return self.message
        return (
            f"{self.message} (remaining string: {self.remaining!r}, "
            f"starting string: {self.signature!r})"
        )


def field_name(index: int) -> str:
    """Return the placeholder name of the struct field at ``index``.

    A..Z, then AA, AB, ... so names stay unique past the 26th field.
    """
    name = ""
    index += 1
    while index > 0:
        index, rem = divmod(index - 1, 26)
        name = ascii_uppercase[rem] + name
    return name


def _expect_more(remaining: str, what: str) -> None:
    if not remaining:
        raise GrammarError(f"unexpected end of signature, expected {what}", remaining=remaining)


def parse_next(remaining: str) -> tuple[TypeExpression, str]:
    """Parse one complete type from the front of ``remaining``."""
    _expect_more(remaining, "a type")

    code = remaining[0]
    if code in PRIMITIVE_CODES:
        return PrimitiveType(code, PRIMITIVE_CODES[code]), remaining[1:]

    if code == "a":
        if remaining[1:2] == "{":
            return _parse_map(remaining[2:])
        return _parse_array(remaining[1:])

    if code == "(":
        return _parse_struct(remaining[1:])

    raise GrammarError(f"unknown char: {code!r}", char=code, remaining=remaining)


def _parse_map(remaining: str) -> tuple[MapType, str]:
    key, remaining = parse_next(remaining)
    value, remaining = parse_next(remaining)

    _expect_more(remaining, "'}'")
    if remaining[0] != "}":
        raise GrammarError(
            "map can only have 2 elements", char=remaining[0], remaining=remaining
        )
    return MapType(key, value), remaining[1:]


def _parse_array(remaining: str) -> tuple[ArrayType, str]:
    element, remaining = parse_next(remaining)
    return ArrayType(element), remaining


def _parse_struct(remaining: str) -> tuple[StructType, str]:
    fields: list[StructField] = []

    while True:
        _expect_more(remaining, "')'")
        if remaining[0] == ")":
            break
        t, remaining = parse_next(remaining)
        fields.append(StructField(field_name(len(fields)), t))

    return StructType(tuple(fields)), remaining[1:]


def parse_signature(signature: str) -> TypeExpression:
    """Parse a signature holding exactly one complete type.

    Trailing characters after the first complete type are rejected.
    """
    try:
        t, remaining = parse_next(signature)
        if remaining:
            raise GrammarError(
                "trailing characters after complete type", char=remaining[0], remaining=remaining
            )
    except GrammarError as e:
        e.signature = signature
        raise
    return t
