"""Errors raised by tagcase, classified by what the caller should do next.

A missing ``tag_key`` is a CONFIG error, a literal without the requested
tag is TAG_NOT_FOUND, and a key outside ``known_pair_keys`` is
UNKNOWN_KEY.  Settings files add PARSE (broken TOML) and VALIDATION (bad
values).  Anything else reaching the CLI is wrapped by
:meth:`ActionableError.from_exception`.

Every error serialises with :meth:`ActionableError.to_dict`; the CLI
prints that dict as JSON on stderr, carrying a ``suggestion`` for the
operator and ``ai_guidance`` for an agent driving the tool.  Case
conversion never raises.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import StrEnum
from typing import Any


# ---------------------------------------------------------------------------
# Error classification
# ---------------------------------------------------------------------------


class ErrorType(StrEnum):
    """What the caller should do about a failure, not which module raised it."""

    CONFIG = "config"
    TAG_NOT_FOUND = "tag_not_found"
    UNKNOWN_KEY = "unknown_key"
    PARSE = "parse"
    VALIDATION = "validation"
    UNEXPECTED = "unexpected"


# ---------------------------------------------------------------------------
# Guidance dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AIGuidance:
    """Machine-readable guidance for an AI agent consuming this error."""

    action_required: str
    command: str | None = None
    checks: list[str] | None = None
    steps: list[str] | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"action_required": self.action_required}
        if self.command is not None:
            result["command"] = self.command
        if self.checks is not None:
            result["checks"] = self.checks
        if self.steps is not None:
            result["steps"] = self.steps
        return result


@dataclass(frozen=True)
class Troubleshooting:
    """Sequential, human-readable recovery steps for the operator."""

    steps: list[str]

    def to_dict(self) -> dict[str, Any]:
        return {"steps": self.steps}


# ---------------------------------------------------------------------------
# Base actionable error
# ---------------------------------------------------------------------------


@dataclass
class ActionableError(Exception):
    """Structured error with embedded recovery guidance.

    Use the factory classmethods rather than constructing directly —
    they encode domain knowledge so callers don't have to.
    """

    error: str
    error_type: ErrorType
    service: str

    success: bool = field(default=False, init=False)
    suggestion: str | None = None
    ai_guidance: AIGuidance | None = None
    troubleshooting: Troubleshooting | None = None
    context: dict[str, Any] | None = None
    timestamp: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )

    # Make it work as a real exception
    def __post_init__(self) -> None:
        super().__init__(self.error)

    # -- serialisation -------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Compact JSON-ready dict — ``None`` values are excluded."""
        result: dict[str, Any] = {
            "success": self.success,
            "error": self.error,
            "error_type": self.error_type.value,
            "service": self.service,
            "timestamp": self.timestamp,
        }
        if self.suggestion is not None:
            result["suggestion"] = self.suggestion
        if self.ai_guidance is not None:
            result["ai_guidance"] = self.ai_guidance.to_dict()
        if self.troubleshooting is not None:
            result["troubleshooting"] = self.troubleshooting.to_dict()
        if self.context is not None:
            result["context"] = self.context
        return result

    # -- factory methods -----------------------------------------------------

    @classmethod
    def config(
        cls,
        field_name: str,
        reason: str,
        *,
        suggestion: str | None = None,
    ) -> ActionableError:
        """Missing or invalid parser configuration or settings file."""
        return cls(
            error=f"Configuration error — {field_name}: {reason}",
            error_type=ErrorType.CONFIG,
            service="config",
            suggestion=suggestion or f"Set '{field_name}' before parsing",
            ai_guidance=AIGuidance(
                action_required=f"Provide a valid '{field_name}'",
                checks=[f"Verify '{field_name}' is present and non-empty"],
            ),
            troubleshooting=Troubleshooting(
                steps=[
                    f"1. Locate where '{field_name}' is configured",
                    f"2. Fix the issue: {reason}",
                    "3. Re-run",
                ]
            ),
        )

    @classmethod
    def tag_not_found(
        cls,
        tag_key: str,
        literal: str,
        *,
        suggestion: str | None = None,
    ) -> ActionableError:
        """The named tag is absent from the literal, or the literal is malformed."""
        return cls(
            error=f"Tag '{tag_key}' not found in {literal!r}",
            error_type=ErrorType.TAG_NOT_FOUND,
            service="tags",
            suggestion=suggestion or f"Treat the field as having no '{tag_key}' tag",
            ai_guidance=AIGuidance(
                action_required=f"Check whether '{tag_key}' is expected on this literal",
                checks=[
                    f"Does the literal contain {tag_key}:\"...\"?",
                    'Is every entry written as name:"value" separated by single spaces?',
                ],
            ),
            context={"tag_key": tag_key, "literal": literal},
        )

    @classmethod
    def unknown_key(
        cls,
        key: str,
        known_keys: list[str],
        *,
        suggestion: str | None = None,
    ) -> ActionableError:
        """A pair key outside the configured allowlist."""
        return cls(
            error=f"Unknown key '{key}' (known keys: {', '.join(known_keys)})",
            error_type=ErrorType.UNKNOWN_KEY,
            service="tags",
            suggestion=suggestion or f"Remove '{key}' from the tag or add it to the known keys",
            ai_guidance=AIGuidance(
                action_required=f"Decide whether '{key}' is a typo or a missing allowlist entry",
                checks=[
                    f"Is '{key}' misspelled?",
                    "Should unknown keys be skipped instead (error_on_unknown_key = false)?",
                ],
            ),
            context={"key": key, "known_keys": list(known_keys)},
        )

    @classmethod
    def parse(
        cls,
        source: str,
        reason: str,
        *,
        suggestion: str | None = None,
    ) -> ActionableError:
        """Input that could not be parsed at all (e.g. malformed TOML)."""
        return cls(
            error=f"Parse failure in {source}: {reason}",
            error_type=ErrorType.PARSE,
            service=source,
            suggestion=suggestion or f"Fix the syntax of {source}",
            ai_guidance=AIGuidance(
                action_required=f"Inspect {source} and correct the syntax error",
            ),
            troubleshooting=Troubleshooting(
                steps=[
                    f"1. Open {source}",
                    f"2. Fix the issue: {reason}",
                    "3. Save and re-run",
                ]
            ),
        )

    @classmethod
    def validation(
        cls,
        field_name: str,
        reason: str,
        *,
        suggestion: str | None = None,
    ) -> ActionableError:
        """Input validation failure (TOML values, CLI args, etc.)."""
        return cls(
            error=f"Validation error — {field_name}: {reason}",
            error_type=ErrorType.VALIDATION,
            service="validation",
            suggestion=suggestion or f"Fix '{field_name}': {reason}",
            ai_guidance=AIGuidance(
                action_required=f"Correct the value for '{field_name}'",
            ),
            troubleshooting=Troubleshooting(
                steps=[
                    f"1. Check the value of '{field_name}'",
                    f"2. Issue: {reason}",
                    "3. Correct and retry",
                ]
            ),
        )

    @classmethod
    def unexpected(
        cls,
        service: str,
        operation: str,
        raw_error: str,
        *,
        suggestion: str | None = None,
    ) -> ActionableError:
        """Catch-all for truly unexpected failures."""
        return cls(
            error=f"Unexpected error in {service} during {operation}: {raw_error}",
            error_type=ErrorType.UNEXPECTED,
            service=service,
            suggestion=suggestion or "This is an unexpected error — check logs for details",
            ai_guidance=AIGuidance(
                action_required="Analyze the error and escalate if needed",
                checks=["Check the full traceback in logs"],
            ),
        )

    @classmethod
    def from_exception(
        cls,
        error: Exception,
        service: str,
        operation: str,
        *,
        suggestion: str | None = None,
    ) -> ActionableError:
        """Wrap an arbitrary exception, preserving an existing ActionableError.

        A caller-supplied ``suggestion`` is always preserved — it carries
        context the generic classifier cannot infer.
        """
        if isinstance(error, ActionableError):
            return error

        raw_error = str(error)
        if isinstance(error, (OSError, UnicodeDecodeError)):
            return cls.config(service, raw_error, suggestion=suggestion)
        if isinstance(error, ValueError):
            return cls.validation(service, raw_error, suggestion=suggestion)
        return cls.unexpected(service, operation, raw_error, suggestion=suggestion)
