"""The ``tagcase`` logger.

Case conversion is silent.  The tag parser reports what it parsed and
which keys it skipped at DEBUG, and the CLI logs failed commands at
DEBUG before printing the JSON error, so ``tagcase --verbose`` shows the
whole trail on stderr while the default INFO level keeps stdout and
stderr clean for scripts.

``--log-dir`` (or ``[logging].log_dir``) additionally writes every
record to a ``tagcase_<timestamp>.log`` file via
:func:`configure_file_logging`.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from pathlib import Path

_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

DEFAULT_LOG_DIR = "logs"

logger = logging.getLogger("tagcase")
logger.setLevel(logging.INFO)

# stderr only; stdout carries command output
handler = logging.StreamHandler(sys.stderr)
handler.setLevel(logging.INFO)
handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt=_LOG_DATEFMT))
logger.addHandler(handler)


def set_level(level: int) -> None:
    """Apply *level* to the logger and the stderr handler.

    Used by ``--verbose`` and ``[logging].level``.  File handlers keep
    the level they were created with.
    """
    logger.setLevel(level)
    handler.setLevel(level)


def configure_file_logging(
    log_dir: str = DEFAULT_LOG_DIR,
    *,
    level: int = logging.INFO,
) -> logging.FileHandler:
    """Also write ``tagcase`` records to a timestamped file in *log_dir*.

    The directory is created when missing.  An existing file at that
    path makes :meth:`pathlib.Path.mkdir` raise :class:`OSError`, which
    the CLI reports as a CONFIG error.

    Args:
        log_dir: Directory for ``tagcase_YYYY-MM-DDTHH-MM-SS.log`` files.
        level: Level of the new file handler (default: INFO).

    Returns:
        The added :class:`logging.FileHandler`, so tests can detach it.
    """
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    stamp = datetime.now().strftime("%Y-%m-%dT%H-%M-%S")
    file_handler = logging.FileHandler(
        str(log_path / f"tagcase_{stamp}.log"), encoding="utf-8"
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt=_LOG_DATEFMT))

    # a DEBUG file handler is useless behind an INFO logger
    if level < logger.level:
        logger.setLevel(level)

    logger.addHandler(file_handler)
    return file_handler


__all__ = ["configure_file_logging", "logger", "set_level"]
