"""Multi-valued key mapping produced by tag parsing."""

from __future__ import annotations

from typing import Any


class Values(dict[str, list[str]]):
    """Parsed ``key`` / ``key=value`` pairs from a tag value.

    Every key maps to the list of values given for it, in order.  A key
    that appeared without ``=value`` maps to an empty list, so
    :meth:`exists` can tell it apart from a key that never appeared.

    Given the tag value ``key1,key2=value1,key2=value2`` the parsed
    result is ``{"key1": [], "key2": ["value1", "value2"]}``.
    """

    def add(self, key: str, *values: str) -> None:
        """Append *values* under *key*, creating the entry if needed.

        Calling ``add(key)`` with no values registers *key* without
        changing any values already stored under it.
        """
        self.setdefault(key, []).extend(values)

    def exists(self, key: str) -> bool:
        return key in self

    def exists_non_empty(self, key: str) -> bool:
        """Return ``True`` if *key* exists and its first value is not empty."""
        return self.first(key) != ""

    def first(self, key: str) -> str:
        """Return the first value under *key*, or ``""``.

        Use :meth:`exists` to check whether the entry itself is present.
        """
        entries = self.get(key)
        if not entries:
            return ""
        return entries[0]

    def set(self, key: str, target: Any, attr: str) -> bool:
        """Assign the first value under *key* to ``target.attr``.

        The assignment only happens when :meth:`exists_non_empty` holds.
        Returns whether it did.
        """
        if not self.exists_non_empty(key):
            return False
        setattr(target, attr, self.first(key))
        return True
