"""Struct-tag literal lookup.

A tag literal is a space separated list of ``name:"value"`` entries, as
written in Go struct field tags::

    json:"name,omitempty" db:"name" tag:"key1,key2=value"

:func:`lookup_tag` finds one entry by name and returns its unquoted
value.  Scanning stops at the first syntax error, so a malformed literal
behaves exactly like one that lacks the entry.
"""

from __future__ import annotations

_SIMPLE_ESCAPES = {
    "a": 0x07,
    "b": 0x08,
    "f": 0x0C,
    "n": 0x0A,
    "r": 0x0D,
    "t": 0x09,
    "v": 0x0B,
    "\\": 0x5C,
    '"': 0x22,
}

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_OCT_DIGITS = frozenset("01234567")
_MAX_CODE_POINT = 0x10FFFF


def lookup_tag(raw: str, key: str) -> tuple[str, bool]:
    """Return the value stored under *key* in the tag literal *raw*.

    Returns ``(value, True)`` when the entry is present (the value may be
    empty) and ``("", False)`` otherwise.

    >>> lookup_tag('json:"a" foo:"b=c"', "foo")
    ('b=c', True)
    """
    pos = 0
    n = len(raw)

    while pos < n:
        # skip leading spaces
        while pos < n and raw[pos] == " ":
            pos += 1
        if pos == n:
            break

        # Scan to the colon.  A space, a quote or a control character
        # is a syntax error.
        i = pos
        while i < n and raw[i] > " " and raw[i] not in ':"\x7f':
            i += 1
        if i == pos or i + 1 >= n or raw[i] != ":" or raw[i + 1] != '"':
            break
        name = raw[pos:i]

        # scan the quoted value, honouring backslash escapes
        start = i + 1
        i = start + 1
        while i < n and raw[i] != '"':
            if raw[i] == "\\":
                i += 1
            i += 1
        if i >= n:
            break
        pos = i + 1

        if name == key:
            try:
                return unquote(raw[start:pos]), True
            except ValueError:
                break

    return "", False


def unquote(quoted: str) -> str:
    """Decode a double-quoted literal using Go string escape rules.

    Supports the single-character escapes ``\\a \\b \\f \\n \\r \\t \\v
    \\\\ \\"``, ``\\xHH``, three-digit octal ``\\ooo``, ``\\uHHHH`` and
    ``\\UHHHHHHHH``.  Byte escapes are combined as UTF-8; bytes that do
    not form valid UTF-8 are kept as surrogate escapes.

    Raises :class:`ValueError` if *quoted* is not a valid literal.
    """
    if len(quoted) < 2 or quoted[0] != '"' or quoted[-1] != '"':
        raise ValueError(f"not a double-quoted literal: {quoted!r}")
    body = quoted[1:-1]
    if "\n" in body:
        raise ValueError("newline in quoted literal")
    if "\\" not in body and '"' not in body:
        return body

    out = bytearray()
    i = 0
    n = len(body)
    while i < n:
        c = body[i]
        if c == '"':
            raise ValueError(f"unescaped quote at offset {i}")
        if c != "\\":
            out += c.encode("utf-8", "surrogateescape")
            i += 1
            continue

        if i + 1 >= n:
            raise ValueError("trailing backslash")
        e = body[i + 1]
        i += 2

        if e in _SIMPLE_ESCAPES:
            out.append(_SIMPLE_ESCAPES[e])
        elif e == "x":
            out.append(int(_take(body, i, 2, _HEX_DIGITS), 16))
            i += 2
        elif e in _OCT_DIGITS:
            value = int(e + _take(body, i, 2, _OCT_DIGITS), 8)
            if value > 0xFF:
                raise ValueError(f"octal escape out of range: \\{e}{body[i:i + 2]}")
            out.append(value)
            i += 2
        elif e in "uU":
            width = 4 if e == "u" else 8
            value = int(_take(body, i, width, _HEX_DIGITS), 16)
            if value > _MAX_CODE_POINT or 0xD800 <= value <= 0xDFFF:
                raise ValueError(f"invalid code point in escape: {value:#x}")
            out += chr(value).encode("utf-8")
            i += width
        else:
            raise ValueError(f"unknown escape sequence: \\{e}")

    return out.decode("utf-8", "surrogateescape")


def _take(body: str, start: int, count: int, digits: frozenset[str]) -> str:
    chunk = body[start : start + count]
    if len(chunk) != count or not all(d in digits for d in chunk):
        raise ValueError(f"malformed escape digits: {chunk!r}")
    return chunk
