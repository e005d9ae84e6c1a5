"""Struct-tag literal lookup and tag value parsing."""

from tagcase.tags.lookup import lookup_tag, unquote
from tagcase.tags.parser import DEFAULT_SEPARATOR, Tag, parse_tag
from tagcase.tags.values import Values

__all__ = ["DEFAULT_SEPARATOR", "Tag", "Values", "lookup_tag", "parse_tag", "unquote"]
