"""
trivia_duel.errors - Custom exception classes
=============================================

Defines the exception hierarchy for the game model and its collaborators.
Most data problems (bad payloads, replayed answers, extra players) are
absorbed by the model; only the conditions below ever surface.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional
import json


class TriviaDuelError(Exception):
    """Base exception for all trivia_duel package errors."""
    pass


class PayloadDecodeError(TriviaDuelError):
    """Raised internally when a message payload cannot be parsed.

    The codec converts this into "no game" before it reaches callers.
    """

    def __init__(self, reason: str, payload: Optional[str] = None):
        self.reason = reason
        self.payload = payload
        super().__init__(f"Could not decode game payload: {reason}")


class QuestionSourceError(TriviaDuelError):
    """Raised when the question bank cannot supply a usable question list."""

    def __init__(
        self,
        category_id: str,
        question_count: int,
        reason: str,
        details: Optional[List[str]] = None,
    ):
        self.category_id = category_id
        self.question_count = question_count
        self.reason = reason
        self.details = details or []
        super().__init__(
            f"Question source failed for category '{category_id}' "
            f"({question_count} questions): {reason}"
        )

    def format_error_log(self) -> str:
        return _format_error_block(
            error_type="QUESTION_SOURCE_FAILURE",
            context={
                "category_id": self.category_id,
                "question_count": self.question_count,
                "reason": self.reason,
            },
            details=self.details,
        )


class GameEncodingError(TriviaDuelError):
    """Raised when a locally built game cannot be serialized.

    This is a programming defect rather than a data condition.
    """

    def __init__(self, game_id: str, reason: str):
        self.game_id = game_id
        self.reason = reason
        super().__init__(f"Game '{game_id}' could not be encoded: {reason}")

    def format_error_log(self) -> str:
        return _format_error_block(
            error_type="GAME_ENCODING_FAILURE",
            context={"game_id": self.game_id, "reason": self.reason},
            details=None,
        )


class ConfigError(TriviaDuelError):
    """Raised when required configuration is missing or invalid."""

    def __init__(self, missing: Optional[List[str]] = None, message: str = ""):
        self.missing = missing or []
        if not message:
            message = f"Missing required config keys: {self.missing}"
        super().__init__(message)


def _format_error_block(
    error_type: str,
    context: Dict[str, Any],
    details: Optional[List[str]],
) -> str:
    """Format a structured error block for terminal output."""
    from datetime import datetime, timezone

    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"

    lines = [
        "",
        "=" * 64,
        " TRIVIA DUEL ERROR",
        "=" * 64,
        f" Timestamp:    {timestamp}",
        f" Error Type:   {error_type}",
        "",
        " ── CONTEXT " + "─" * 52,
        _indent_json(context),
    ]

    if details:
        lines.append("")
        lines.append(" ── DETAILS " + "─" * 52)
        for detail in details:
            lines.append(f" • {detail}")

    lines.append("")
    lines.append("=" * 64)
    lines.append("")

    return "\n".join(lines)


def _indent_json(data: Dict[str, Any], indent: int = 2) -> str:
    """Format JSON with indentation for error logs."""
    try:
        formatted = json.dumps(data, indent=indent, default=str)
        return "\n".join(" " + line for line in formatted.split("\n"))
    except (TypeError, ValueError):
        return f" {repr(data)}"
