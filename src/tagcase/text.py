"""Shared text-processing utilities.

Pure functions with no domain dependencies — safe to import from any
layer (case conversion, tag parsing, CLI).

Every ``*_fold`` variant compares case-insensitively using ASCII folding
only; non-ASCII characters must match exactly.
"""

from __future__ import annotations

from tagcase.ascii import ALPHA_LOWER, ALPHA_UPPER

_ASCII_FOLD = str.maketrans(ALPHA_UPPER, ALPHA_LOWER)


def fold(s: str) -> str:
    """Lowercase the ASCII letters of *s*, preserving its length."""
    return s.translate(_ASCII_FOLD)


def compare(a: str, b: str) -> int:
    """Return ``-1``, ``0`` or ``1`` as *a* sorts before, equal to or after *b*."""
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


def compare_fold(a: str, b: str) -> int:
    return compare(fold(a), fold(b))


# ---------------------------------------------------------------------------
# Searching
# ---------------------------------------------------------------------------


def fetch_left(s: str, sep: str) -> str:
    """Return the part of *s* before the first *sep*, or ``""`` if absent."""
    i = s.find(sep)
    if i < 0:
        return ""
    return s[:i]


def fetch_left_fold(s: str, sep: str) -> str:
    i = index_fold(s, sep)
    if i < 0:
        return ""
    return s[:i]


def fetch_right(s: str, sep: str) -> str:
    """Return the part of *s* after the last *sep*, or ``""`` if absent."""
    i = s.rfind(sep)
    if i < 0:
        return ""
    return s[i + len(sep) :]


def fetch_right_fold(s: str, sep: str) -> str:
    i = fold(s).rfind(fold(sep))
    if i < 0:
        return ""
    return s[i + len(sep) :]


def has_prefix_fold(s: str, prefix: str) -> bool:
    return fold(s).startswith(fold(prefix))


def has_suffix_fold(s: str, suffix: str) -> bool:
    return fold(s).endswith(fold(suffix))


def index_fold(s: str, substr: str) -> int:
    """Case-insensitive :meth:`str.find`."""
    return fold(s).find(fold(substr))


def indexes(s: str, sep: str) -> list[int]:
    """Return the start index of every occurrence of *sep* in *s*.

    Overlapping occurrences are all reported.  An empty *sep* yields an
    empty list.

    >>> indexes("a.b.c", ".")
    [1, 3]
    """
    if not sep:
        return []
    result: list[int] = []
    i = s.find(sep)
    while i >= 0:
        result.append(i)
        i = s.find(sep, i + 1)
    return result


def indexes_fold(s: str, sep: str) -> list[int]:
    return indexes(fold(s), fold(sep))


# ---------------------------------------------------------------------------
# Wrapping and unwrapping
# ---------------------------------------------------------------------------


def unwrap(s: str, prefix: str, suffix: str) -> tuple[str, bool]:
    """Strip *prefix* and *suffix* from *s*.

    Returns the unwrapped string and ``True`` when both were present,
    otherwise *s* unchanged and ``False``.  Empty affixes always match.
    A string too short to hold both affixes is not unwrapped.
    """
    if len(s) < len(prefix) + len(suffix):
        return s, False
    if not s.startswith(prefix) or not s.endswith(suffix):
        return s, False
    return s[len(prefix) : len(s) - len(suffix)], True


def unwrap_fold(s: str, prefix: str, suffix: str) -> tuple[str, bool]:
    if len(s) < len(prefix) + len(suffix):
        return s, False
    if not has_prefix_fold(s, prefix) or not has_suffix_fold(s, suffix):
        return s, False
    return s[len(prefix) : len(s) - len(suffix)], True


def unquote_single(s: str) -> tuple[str, bool]:
    return unwrap(s, "'", "'")


def unquote_double(s: str) -> tuple[str, bool]:
    return unwrap(s, '"', '"')


def wrap(s: str, prefix: str, suffix: str) -> str:
    return prefix + s + suffix


def quote_single(s: str) -> str:
    return wrap(s, "'", "'")


def quote_double(s: str) -> str:
    return wrap(s, '"', '"')


# ---------------------------------------------------------------------------
# Segmenting
# ---------------------------------------------------------------------------


def segment(s: str, sep: str, start: int) -> tuple[str, int]:
    """Return the text from *start* up to the next *sep*, and the index after it.

    When *sep* does not occur again the remainder of *s* is returned with
    a next index of ``-1``.  ``("", -1)`` is returned when *s* or *sep* is
    empty or *start* is out of range, which ends a scan loop::

        part, i = segment(s, ",", 0)
        while i > -1 or part:
            ...
            part, i = segment(s, ",", i)
    """
    return _segment(s, sep, start, s)


def segment_fold(s: str, sep: str, start: int) -> tuple[str, int]:
    return _segment(s, sep, start, fold(s), fold(sep))


def _segment(
    s: str, sep: str, start: int, haystack: str, needle: str | None = None
) -> tuple[str, int]:
    if not s or not sep or start < 0 or start > len(s) - 1:
        return "", -1
    end = haystack.find(sep if needle is None else needle, start)
    if end == -1:
        return s[start:], -1
    return s[start:end], end + len(sep)


# ---------------------------------------------------------------------------
# Matching
# ---------------------------------------------------------------------------


def matches_wildcard(text: str, pattern: str) -> bool:
    """Match *text* against a case-insensitive wildcard *pattern*.

    ``*`` matches any run of characters (including none) and ``?``
    matches exactly one.  An empty *text* or *pattern* never matches.

    >>> matches_wildcard("Dickson", "?ic*n")
    True
    """
    if not text or not pattern:
        return False

    t, w = fold(text), fold(pattern)
    it = iw = 0
    star = -1
    mark = 0

    while it < len(t):
        if iw < len(w) and w[iw] != "*" and (w[iw] == "?" or w[iw] == t[it]):
            it += 1
            iw += 1
        elif iw < len(w) and w[iw] == "*":
            star = iw
            mark = it
            iw += 1
        elif star != -1:
            # backtrack: let the last star swallow one more character
            iw = star + 1
            mark += 1
            it = mark
        else:
            return False

    while iw < len(w) and w[iw] == "*":
        iw += 1
    return iw == len(w)


# ---------------------------------------------------------------------------
# Line wrapping
# ---------------------------------------------------------------------------


def wrap_text(text: str, cols: int, force: bool = False) -> list[str]:
    """Break *text* into lines of at most *cols* characters.

    Lines break at the last space before or at *cols*, and always at
    ``\\n``.  Spaces at a line break are dropped.  A word longer than
    *cols* is split at *cols* when *force* is true; otherwise it is kept
    whole on its own line.
    """
    out: list[str] = []
    idx = 0  # scan index
    start = 0  # start of the current line
    space = -1  # last space on the current line
    col = 0
    n = len(text)

    while idx < n:
        if text[idx] == "\n":
            out.append(text[start:idx])
            col = 0
            start = idx + 1
            space = -1
            idx += 1
            continue

        is_space = text[idx] == " "
        if is_space and col == 0:
            idx += 1
            start = idx
            continue

        if col == cols - 1:
            # last column is a space
            if is_space:
                out.append(text[start:idx])
                col = 0
                start = idx + 1
                space = -1
                idx += 1
                continue

            # wrap at the last space
            if space > -1:
                out.append(text[start:space])
                col = cols - (space - start) - 1
                start = space + 1
                space = -1
                idx += 1
                continue

            # wrap if forced or the word ends here
            if force or (idx < n - 1 and text[idx + 1] == " "):
                out.append(text[start : idx + 1])
                start = idx + 1
                idx += 1
                col = 0
                space = -1
                continue

        if is_space:
            if col > cols - 1:
                # word was longer than cols
                out.append(text[start:idx])
                col = 0
                start = idx + 1
                space = -1
                idx += 1
                continue
            space = idx

        col += 1
        idx += 1

    if start < n:
        out.append(text[start:])

    return out


def unique(*items: str) -> list[str]:
    """Return *items* without duplicates, in first-seen order."""
    return list(dict.fromkeys(items))
