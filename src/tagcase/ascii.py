"""ASCII character-class predicates.

Every function operates on a single character and only recognises the
ASCII letters and digits.  Anything outside that range (including all
non-ASCII characters) is treated as a non-alphanumeric separator by the
case converters.
"""

from __future__ import annotations

NUMS = "0123456789"
ALPHA_UPPER = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
ALPHA_LOWER = "abcdefghijklmnopqrstuvwxyz"
ALPHA = ALPHA_UPPER + ALPHA_LOWER
ALPHA_NUMS = NUMS + ALPHA

# Distance between an uppercase letter and its lowercase counterpart.
_CASE_OFFSET = ord("a") - ord("A")


def is_upper(c: str) -> bool:
    """Return ``True`` if *c* is an ASCII uppercase letter."""
    return "A" <= c <= "Z"


def is_lower(c: str) -> bool:
    """Return ``True`` if *c* is an ASCII lowercase letter."""
    return "a" <= c <= "z"


def is_letter(c: str) -> bool:
    return is_lower(c) or is_upper(c)


def is_digit(c: str) -> bool:
    """Return ``True`` if *c* is an ASCII decimal digit."""
    return "0" <= c <= "9"


def is_alphanumeric(c: str) -> bool:
    return is_lower(c) or is_upper(c) or is_digit(c)


def to_lower(c: str) -> str:
    """Lowercase *c* if it is an ASCII uppercase letter, else return it as is."""
    if is_upper(c):
        return chr(ord(c) + _CASE_OFFSET)
    return c


def to_upper(c: str) -> str:
    """Uppercase *c* if it is an ASCII lowercase letter, else return it as is."""
    if is_lower(c):
        return chr(ord(c) - _CASE_OFFSET)
    return c


# ---------------------------------------------------------------------------
# Whole-string checks
# ---------------------------------------------------------------------------


def _only(s: str, alphabet: str) -> bool:
    return bool(s) and all(c in alphabet for c in s)


def is_nums_only(s: str) -> bool:
    """Return ``True`` if *s* is non-empty and consists of digits only."""
    return _only(s, NUMS)


def is_alpha_lower_only(s: str) -> bool:
    return _only(s, ALPHA_LOWER)


def is_alpha_upper_only(s: str) -> bool:
    return _only(s, ALPHA_UPPER)


def is_alpha_only(s: str) -> bool:
    return _only(s, ALPHA)


def is_alpha_nums_only(s: str) -> bool:
    return _only(s, ALPHA_NUMS)
