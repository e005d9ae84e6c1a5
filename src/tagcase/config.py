"""Configuration loading and validation.

Loads ``tagcase.toml`` and validates every field up front, so a typo in
the allowlist or an unknown case mapping is reported before any input
is processed.

The validated config is exposed as a :class:`Settings` dataclass with
typed fields for each section: ``tag``, ``case`` and ``logging``.
Every section is optional; missing values fall back to the defaults
below.
"""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from tagcase.case import CaseMapping
from tagcase.errors import ActionableError
from tagcase.tags.parser import DEFAULT_SEPARATOR, Tag

# ---------------------------------------------------------------------------
# Config dataclasses
# ---------------------------------------------------------------------------


@dataclass
class TagConfig:
    """Tag parser defaults from ``[tag]``."""

    tag_key: str = ""
    separator: str = DEFAULT_SEPARATOR
    known_pair_keys: list[str] = field(default_factory=list)
    error_on_unknown_key: bool = True

    def build_tag(self, tag_key: str | None = None) -> Tag:
        """Return a fresh :class:`Tag` configured from these settings.

        *tag_key* overrides the configured key when given.
        """
        return Tag(
            tag_key=tag_key or self.tag_key,
            separator=self.separator,
            known_pair_keys=list(self.known_pair_keys),
            error_on_unknown_key=self.error_on_unknown_key,
        )


@dataclass
class CaseConfig:
    """Case conversion defaults from ``[case]``."""

    default_mapping: CaseMapping = CaseMapping.SNAKE


@dataclass
class LoggingConfig:
    """Logging settings from ``[logging]``."""

    level: int = logging.INFO
    log_dir: str | None = None


@dataclass
class Settings:
    """Top-level validated configuration."""

    tag: TagConfig = field(default_factory=TagConfig)
    case: CaseConfig = field(default_factory=CaseConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


# ---------------------------------------------------------------------------
# Default settings path
# ---------------------------------------------------------------------------

DEFAULT_SETTINGS_PATH = Path("tagcase.toml")

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


# ---------------------------------------------------------------------------
# Loading and validation
# ---------------------------------------------------------------------------


def default_settings() -> Settings:
    """Settings used when no config file is given."""
    return Settings()


def load_settings(path: str | Path = DEFAULT_SETTINGS_PATH) -> Settings:
    """Load and validate settings from a TOML file.

    Raises :class:`~tagcase.errors.ActionableError`:
      - CONFIG if the file is missing or cannot be read
      - PARSE if the TOML is malformed
      - VALIDATION if a value has the wrong type or is not recognised

    Returns a fully validated :class:`Settings` instance.
    """
    filepath = Path(path)
    if not filepath.exists():
        raise ActionableError.config(
            field_name="settings_path",
            reason=f"Settings file not found: {filepath}",
            suggestion=f"Create {filepath} or omit --config to use defaults",
        )

    try:
        raw_text = filepath.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ActionableError.from_exception(
            exc,
            "settings_path",
            "load_settings",
            suggestion=f"Point --config at a readable UTF-8 TOML file, not {filepath}",
        ) from exc

    try:
        data = tomllib.loads(raw_text)
    except tomllib.TOMLDecodeError as exc:
        raise ActionableError.parse(
            source=str(filepath),
            reason=str(exc),
            suggestion=f"Fix TOML syntax in {filepath}",
        ) from None

    return _validate(data)


def _validate(data: dict[str, object]) -> Settings:
    """Validate raw TOML data and return a Settings instance."""

    # -- tag section ---------------------------------------------------------
    tag_data = _section(data, "tag")

    known_pair_keys = tag_data.get("known_pair_keys", [])
    if not isinstance(known_pair_keys, list) or not all(
        isinstance(k, str) for k in known_pair_keys
    ):
        raise ActionableError.validation(
            field_name="tag.known_pair_keys",
            reason="must be a list of strings",
            suggestion='Write it as known_pair_keys = ["key1", "key2"]',
        )

    tag = TagConfig(
        tag_key=_string(tag_data, "tag", "tag_key", ""),
        separator=_string(tag_data, "tag", "separator", DEFAULT_SEPARATOR) or DEFAULT_SEPARATOR,
        known_pair_keys=list(known_pair_keys),
        error_on_unknown_key=_boolean(tag_data, "tag", "error_on_unknown_key", True),
    )

    # -- case section --------------------------------------------------------
    case_data = _section(data, "case")
    mapping_name = _string(case_data, "case", "default_mapping", CaseMapping.SNAKE.value)
    case = CaseConfig(default_mapping=CaseMapping.parse(mapping_name))

    # -- logging section -----------------------------------------------------
    logging_data = _section(data, "logging")
    level_name = _string(logging_data, "logging", "level", "INFO").upper()
    if level_name not in _LEVELS:
        raise ActionableError.validation(
            field_name="logging.level",
            reason=f"'{level_name}' is not a log level",
            suggestion=f"Use one of: {', '.join(_LEVELS)}",
        )
    log_dir = _string(logging_data, "logging", "log_dir", "")

    return Settings(
        tag=tag,
        case=case,
        logging=LoggingConfig(level=_LEVELS[level_name], log_dir=log_dir or None),
    )


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _section(data: dict[str, object], name: str) -> dict[str, object]:
    """Return an optional top-level section, or raise VALIDATION if it is not a table."""
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ActionableError.validation(
            field_name=name,
            reason=f"[{name}] must be a table, not {type(section).__name__}",
            suggestion=f"Define [{name}] as a TOML table",
        )
    return section


def _string(section: dict[str, object], section_name: str, key: str, default: str) -> str:
    value = section.get(key, default)
    if not isinstance(value, str):
        raise ActionableError.validation(
            field_name=f"{section_name}.{key}",
            reason=f"must be a string, not {type(value).__name__}",
        )
    return value


def _boolean(section: dict[str, object], section_name: str, key: str, default: bool) -> bool:
    value = section.get(key, default)
    if not isinstance(value, bool):
        raise ActionableError.validation(
            field_name=f"{section_name}.{key}",
            reason=f"must be true or false, not {type(value).__name__}",
        )
    return value
