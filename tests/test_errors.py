# Area: Shared Tests
"""Tests for error classes and structured error output."""

import json
import logging

import pytest

from trivia_duel._shared.logging_config import JSONFormatter, log_and_terminate
from trivia_duel.errors import (
    ConfigError,
    GameEncodingError,
    PayloadDecodeError,
    QuestionSourceError,
    TriviaDuelError,
)


class TestErrorHierarchy:
    """All package errors share one base."""

    @pytest.mark.parametrize("error", [
        PayloadDecodeError("bad"),
        QuestionSourceError("9", 4, "timeout"),
        GameEncodingError("abc", "boom"),
        ConfigError(["participant_id"]),
    ])
    def test_base_class(self, error):
        """Every error derives from TriviaDuelError."""
        assert isinstance(error, TriviaDuelError)

    def test_config_error_message(self):
        """ConfigError names the missing keys or uses a custom message."""
        assert "participant_id" in str(ConfigError(["participant_id"]))
        assert str(ConfigError(message="custom")) == "custom"


class TestFormatErrorLog:
    """Tests for format_error_log() blocks."""

    def test_question_source_block(self):
        """The block shows context and each detail line."""
        error = QuestionSourceError("9", 4, "malformed results", ["result 0: missing field"])
        block = error.format_error_log()
        assert "QUESTION_SOURCE_FAILURE" in block
        assert '"question_count": 4' in block
        assert "• result 0: missing field" in block

    def test_encoding_block(self):
        """The encoding block names the game."""
        block = GameEncodingError("abc", "boom").format_error_log()
        assert "GAME_ENCODING_FAILURE" in block
        assert '"game_id": "abc"' in block


class TestLogging:
    """Tests for logging helpers."""

    def test_json_formatter_includes_game_id(self):
        """A game_id extra lands in the JSON line."""
        record = logging.LogRecord("trivia_duel.session", logging.INFO, __file__, 1, "Sent", None, None)
        record.game_id = "abc"
        data = json.loads(JSONFormatter().format(record))
        assert data["message"] == "Sent"
        assert data["game_id"] == "abc"

    def test_log_and_terminate_exits(self, capsys):
        """log_and_terminate() prints the block and exits with the code."""
        with pytest.raises(SystemExit) as exc:
            log_and_terminate(GameEncodingError("abc", "boom"), exit_code=3)
        assert exc.value.code == 3
        assert "GAME_ENCODING_FAILURE" in capsys.readouterr().err
