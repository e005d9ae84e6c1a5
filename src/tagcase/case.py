"""Case conversion: camelCase, PascalCase, snake_case and kebab-case.

All converters are pure and never raise.  Only ASCII letters and digits
are significant; every other character (including any non-ASCII
character) separates words and is dropped from the output.

Words are segmented the same way for every target case:

- a run of digits stays attached to the letters around it,
- an all-caps run such as ``HTTP`` forms one word,
- a capital followed by lowercase letters starts a new word.

>>> snake_case("FOO:BAR$BAZ")
'foo_bar_baz'
>>> camel_case("sample text")
'sampleText'
"""

from __future__ import annotations

from enum import StrEnum

from tagcase.ascii import (
    is_alphanumeric,
    is_digit,
    is_lower,
    is_upper,
    to_lower,
    to_upper,
)
from tagcase.errors import ActionableError

UNDERSCORE = "_"
DASH = "-"


def camel_case(s: str) -> str:
    """Convert *s* to camelCase.  The first character is always lowercase."""
    b = _capitalize_words(s)
    if b:
        b[0] = to_lower(b[0])
    return "".join(b)


def pascal_case(s: str) -> str:
    """Convert *s* to PascalCase.  The first character is always uppercase."""
    b = _capitalize_words(s)
    if b:
        b[0] = to_upper(b[0])
    return "".join(b)


def snake_case(s: str) -> str:
    """Convert *s* to snake_case.

    Input that is already snake_case is returned as the same object.
    """
    return separator_case(s, UNDERSCORE)


def kebab_case(s: str) -> str:
    """Convert *s* to kebab-case.

    Input that is already kebab-case is returned as the same object.
    """
    return separator_case(s, DASH)


def _capitalize_words(s: str) -> list[str]:
    """Return *s* as a list of characters with every word capitalized."""
    b: list[str] = []
    n = len(s)
    i = 0

    while i < n:
        # skip everything that isn't a letter or digit
        while i < n and not is_alphanumeric(s[i]):
            i += 1
        if i == n:
            break

        c = s[i]

        # digits are copied as is
        if is_digit(c):
            while i < n and is_digit(s[i]):
                b.append(s[i])
                i += 1
            continue

        if is_upper(c):
            # an uppercase run becomes one capitalized word
            b.append(c)
            i += 1
            while i < n and is_upper(s[i]):
                b.append(to_lower(s[i]))
                i += 1
        else:
            b.append(to_upper(c))
            i += 1

        while i < n and is_lower(s[i]):
            b.append(s[i])
            i += 1

    return b


def separator_case(s: str, separator: str) -> str:
    """Lowercase *s* and join its words with *separator*.

    *separator* must be a single character.  The longest prefix of *s*
    that is already in canonical form is kept verbatim; when that prefix
    is the whole string, *s* itself is returned without copying.
    """
    n = len(s)
    idx = 0
    has_lower = False
    has_separator = False
    lowercase_since_separator = False

    # Accept lowercase letters, digits and single separators that sit
    # between two words.
    while idx < n:
        c = s[idx]
        if is_lower(c):
            has_lower = True
            if has_separator:
                lowercase_since_separator = True
            idx += 1
            continue
        if is_digit(c):
            idx += 1
            continue
        if c == separator and 0 < idx < n - 1 and (is_lower(s[idx + 1]) or is_digit(s[idx + 1])):
            has_separator = True
            lowercase_since_separator = False
            idx += 1
            continue
        break

    if idx == n:
        return s

    b = list(s[:idx])

    # A leading acronym (or one right after a separator) joins the
    # current word instead of starting a new one.
    if is_upper(s[idx]) and (not has_lower or (has_separator and not lowercase_since_separator)):
        idx = _append_word(s, idx, b)

    while idx < n:
        if not is_alphanumeric(s[idx]):
            idx += 1
            continue
        if b:
            b.append(separator)
        idx = _append_word(s, idx, b)

    return "".join(b)


def _append_word(s: str, idx: int, b: list[str]) -> int:
    """Append the word starting at *idx* to *b*, lowercased.

    A word is a run of uppercase letters and digits followed by a run of
    lowercase letters and digits.  Returns the index just past the word.
    """
    n = len(s)
    while idx < n and (is_upper(s[idx]) or is_digit(s[idx])):
        b.append(to_lower(s[idx]))
        idx += 1
    while idx < n and (is_lower(s[idx]) or is_digit(s[idx])):
        b.append(s[idx])
        idx += 1
    return idx


# ---------------------------------------------------------------------------
# Named mappings
# ---------------------------------------------------------------------------


class CaseMapping(StrEnum):
    """A named case conversion, selectable from config or the CLI."""

    NO_MAPPING = "none"
    PASCAL = "pascal"
    SNAKE = "snake"
    CAMEL = "camel"
    KEBAB = "kebab"

    @property
    def display_name(self) -> str:
        """Long form name, e.g. ``SnakeMapping``."""
        return _DISPLAY_NAMES[self]

    def map(self, s: str) -> str:
        """Apply this mapping to *s*.  ``NO_MAPPING`` returns *s* unchanged."""
        converter = _CONVERTERS.get(self)
        if converter is None:
            return s
        return converter(s)

    @classmethod
    def parse(cls, name: str) -> CaseMapping:
        """Resolve a short (``snake``) or long (``SnakeMapping``) mapping name.

        Raises :class:`~tagcase.errors.ActionableError` (VALIDATION) for
        unknown names.
        """
        for mapping in cls:
            if name in (mapping.value, mapping.display_name):
                return mapping
        raise ActionableError.validation(
            field_name="case mapping",
            reason=f"unknown mapping: {name!r}",
            suggestion=f"Use one of: {', '.join(m.value for m in cls)}",
        )


_DISPLAY_NAMES: dict[CaseMapping, str] = {
    CaseMapping.NO_MAPPING: "NoMapping",
    CaseMapping.PASCAL: "PascalMapping",
    CaseMapping.SNAKE: "SnakeMapping",
    CaseMapping.CAMEL: "CamelMapping",
    CaseMapping.KEBAB: "KebabMapping",
}

_CONVERTERS = {
    CaseMapping.PASCAL: pascal_case,
    CaseMapping.SNAKE: snake_case,
    CaseMapping.CAMEL: camel_case,
    CaseMapping.KEBAB: kebab_case,
}
