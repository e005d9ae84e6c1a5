"""Global test configuration — shared fixtures and safety guards.

This conftest provides:

1. **Logger guard** — restores the ``tagcase`` logger level, stderr
   handler level and handler list after every test, so CLI tests that
   pass ``--verbose`` or ``--log-dir`` cannot leak configuration into
   later tests.

2. **Tag literal fixtures** — the canonical struct-tag literal used
   across the parser and CLI tests.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from tagcase.logging import handler, logger

if TYPE_CHECKING:
    from collections.abc import Iterator

# The literal every parser test starts from: a json entry to skip, the
# entry under test, and a trailing entry after it.
STRUCT_TAG = '`json:"omitempty" tag:"key1,key2=value1,key2=value2,key3" db:"name=foo"`'


@pytest.fixture(autouse=True)
def _restore_logger() -> Iterator[None]:
    level = logger.level
    handler_level = handler.level
    handlers = list(logger.handlers)
    yield
    for extra in logger.handlers[:]:
        if extra not in handlers:
            logger.removeHandler(extra)
            extra.close()
    logger.setLevel(level)
    handler.setLevel(handler_level)


@pytest.fixture
def struct_tag() -> str:
    """The canonical backquoted struct-tag literal."""
    return STRUCT_TAG
