"""Tag value parser.

Extracts one named entry from a struct-tag literal and parses its value
as a separated list of bare keys and ``key=value`` pairs::

    tag = Tag(tag_key="tag", known_pair_keys=["key1", "key2"])
    tag.parse('`json:"omitempty" tag:"key1,key2=a,key2=b"`')
    tag.values  # {"key1": [], "key2": ["a", "b"]}

A :class:`Tag` holds both the parser configuration and the last parse
result.  It is mutated in place by :meth:`Tag.parse` and must not be
shared between threads while parsing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from tagcase.errors import ActionableError
from tagcase.logging import logger
from tagcase.tags.lookup import lookup_tag
from tagcase.tags.values import Values
from tagcase.text import segment, unquote_double, unwrap

if TYPE_CHECKING:
    from collections.abc import Iterable

DEFAULT_SEPARATOR = ","

_RAW_STRING_QUOTE = "`"
_DOC_COMMENT_PREFIX = "//"


@dataclass
class Tag:
    """Tag parser configuration and result.

    ``values`` is created on the first parse and reused afterwards, so
    repeated parses on one instance accumulate.  Call
    ``tag.values.clear()`` between parses to start over.
    """

    tag_key: str
    separator: str = DEFAULT_SEPARATOR

    # Empty means every key is accepted.
    known_pair_keys: list[str] = field(default_factory=list)

    # With a non-empty allowlist: raise on an unknown key when True,
    # skip the pair when False.
    error_on_unknown_key: bool = True

    raw: str = ""
    values: Values | None = None

    def _init(self) -> Values:
        if not self.tag_key:
            raise ActionableError.config(
                field_name="tag_key",
                reason="tag name not specified",
            )
        if not self.separator:
            self.separator = DEFAULT_SEPARATOR
        if self.values is None:
            self.values = Values()
        return self.values

    def valid_key(self, key: str) -> bool:
        """Return ``True`` if *key* is allowed by ``known_pair_keys``."""
        return not self.known_pair_keys or key in self.known_pair_keys

    def parse(self, tag_literal: str) -> None:
        """Parse the ``tag_key`` entry of *tag_literal* into ``values``.

        *tag_literal* may be wrapped in backquotes.  ``raw`` is set to the
        text after the first ``=`` of the entry's value.

        Raises :class:`~tagcase.errors.ActionableError`:
          - CONFIG if ``tag_key`` is empty
          - TAG_NOT_FOUND if the entry is absent or the literal is malformed
          - UNKNOWN_KEY if a pair key is not allowed (pairs added before
            the bad key are kept)
        """
        values = self._init()

        literal, _ = unwrap(tag_literal, _RAW_STRING_QUOTE, _RAW_STRING_QUOTE)
        value, found = lookup_tag(literal, self.tag_key)
        if not found:
            raise ActionableError.tag_not_found(self.tag_key, tag_literal)

        _, _, self.raw = value.partition("=")

        part, i = segment(value, self.separator, 0)
        while i > -1 or part:
            # Empty segments come from doubled or trailing separators and
            # are never checked against known_pair_keys.
            if part:
                key, has_value, val = part.partition("=")
                if self._accept(key):
                    if has_value:
                        values.add(key, val)
                    else:
                        values.add(key)
            part, i = segment(value, self.separator, i)

        logger.debug("Parsed tag '%s' from %r: %s", self.tag_key, tag_literal, dict(values))

    def parse_docs(self, lines: Iterable[str]) -> None:
        """Parse doc-comment directives into ``values``.

        Only lines of the form ``//<tag_key>:"key1,key2=value"`` are read;
        everything else is ignored.  Keys and values are stripped of
        surrounding whitespace, empty items are skipped, and a bare key is
        stored with a single empty value.

        Raises the same CONFIG and UNKNOWN_KEY errors as :meth:`parse`.
        """
        values = self._init()
        prefix = self.tag_key + ":"

        for line in lines:
            line = line.removeprefix(_DOC_COMMENT_PREFIX).strip()
            if not line.startswith(prefix):
                continue
            payload, _ = unquote_double(line.removeprefix(prefix))
            for token in payload.split(self.separator):
                token = token.strip()
                if not token:
                    continue
                key, has_value, val = token.partition("=")
                key = key.strip()
                if not self._accept(key):
                    continue
                values.add(key, val.strip() if has_value else "")

        logger.debug("Parsed doc tag '%s': %s", self.tag_key, dict(values))

    def _accept(self, key: str) -> bool:
        if self.valid_key(key):
            return True
        if self.error_on_unknown_key:
            raise ActionableError.unknown_key(key, self.known_pair_keys)
        logger.debug("Skipping unknown key '%s' in tag '%s'", key, self.tag_key)
        return False


def parse_tag(tag_literal: str, tag_key: str, **options: object) -> Tag:
    """Build a :class:`Tag` for *tag_key*, parse *tag_literal* and return it.

    *options* are passed through to the :class:`Tag` constructor.
    """
    tag = Tag(tag_key=tag_key, **options)  # type: ignore[arg-type]
    tag.parse(tag_literal)
    return tag
