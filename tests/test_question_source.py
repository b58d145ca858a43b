# Area: Questions Tests
"""Tests for the question bank client."""

import base64
import random

import httpx
import pytest

from trivia_duel._model.game import TriviaGame
from trivia_duel._model.modes import GameMode
from trivia_duel.errors import QuestionSourceError
from trivia_duel.question_source import (
    OpenTDBQuestionSource,
    populate_questions,
    question_from_record,
)

from conftest import FakeQuestionSource


def _b64(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def _record(question: str, correct: str, incorrect, difficulty: str = "easy") -> dict:
    return {
        "category": _b64("General Knowledge"),
        "type": _b64("multiple" if len(incorrect) > 1 else "boolean"),
        "difficulty": _b64(difficulty),
        "question": _b64(question),
        "correct_answer": _b64(correct),
        "incorrect_answers": [_b64(t) for t in incorrect],
    }


def _source(handler) -> OpenTDBQuestionSource:
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return OpenTDBQuestionSource(client=client, rng=random.Random(0))


def _ok(records):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"response_code": 0, "results": records})
    return handler


class TestRequest:
    """Tests for request parameters."""

    def test_numeric_category_sent(self):
        """A numeric category is passed to the API."""
        seen = {}

        def handler(request):
            seen.update(dict(request.url.params))
            return httpx.Response(200, json={"response_code": 0, "results": [
                _record("Q?", "True", ["False"]),
            ]})

        _source(handler).fetch("21", 1)
        assert seen == {"encode": "base64", "amount": "1", "category": "21"}

    def test_non_numeric_category_omitted(self):
        """Any other category is left out."""
        params = OpenTDBQuestionSource().build_params("any", 4)
        assert "category" not in params
        assert params["amount"] == "4"


class TestFetch:
    """Tests for fetch() results."""

    def test_decodes_and_builds_questions(self):
        """Base64 fields are decoded into questions."""
        records = [_record("Café culture?", "True", ["False"], "medium")]
        questions = _source(_ok(records)).fetch("9", 1)

        question = questions[0]
        assert question.text == "Café culture?"
        assert question.difficulty_level == 1
        assert [o.text for o in question.options] == ["True", "False"]
        assert question.correct_answer.text == "True"

    def test_sorted_by_difficulty_then_text(self):
        """The batch comes back sorted."""
        records = [
            _record("Zebra?", "1", ["2", "3", "4"], "easy"),
            _record("Apple?", "1", ["2", "3", "4"], "hard"),
            _record("Mango?", "1", ["2", "3", "4"], "easy"),
        ]
        questions = _source(_ok(records)).fetch("9", 3)
        assert [q.text for q in questions] == ["Mango?", "Zebra?", "Apple?"]

    def test_non_zero_response_code(self):
        """A non-zero response code is an error."""
        def handler(request):
            return httpx.Response(200, json={"response_code": 1, "results": []})

        with pytest.raises(QuestionSourceError) as exc:
            _source(handler).fetch("9", 4)
        assert exc.value.reason == "response code 1"

    def test_http_error(self):
        """HTTP errors become QuestionSourceError."""
        def handler(request):
            return httpx.Response(503)

        with pytest.raises(QuestionSourceError) as exc:
            _source(handler).fetch("9", 4)
        assert "request failed" in exc.value.reason

    def test_invalid_json(self):
        """A non-JSON body becomes QuestionSourceError."""
        def handler(request):
            return httpx.Response(200, content=b"<html>")

        with pytest.raises(QuestionSourceError):
            _source(handler).fetch("9", 4)

    def test_short_batch(self):
        """Fewer questions than asked is an error."""
        records = [_record("Q?", "True", ["False"])]
        with pytest.raises(QuestionSourceError) as exc:
            _source(_ok(records)).fetch("9", 4)
        assert exc.value.question_count == 4

    def test_malformed_record(self):
        """One bad record fails the whole fetch."""
        records = [{"question": _b64("Q?")}]
        with pytest.raises(QuestionSourceError) as exc:
            _source(_ok(records)).fetch("9", 1)
        assert exc.value.details

    def test_error_log_block(self):
        """The error block lists each bad record."""
        def handler(request):
            return httpx.Response(200, json={"response_code": 2, "results": []})

        with pytest.raises(QuestionSourceError) as exc:
            _source(handler).fetch("9", 4)
        block = exc.value.format_error_log()
        assert "QUESTION_SOURCE_FAILURE" in block
        assert '"category_id": "9"' in block


class TestQuestionFromRecord:
    """Tests for question_from_record()."""

    def test_plain_text_record(self):
        """Records can be read without base64."""
        record = {
            "question": "2 + 2?",
            "correct_answer": "4",
            "incorrect_answers": ["3", "5", "22"],
            "difficulty": "easy",
        }
        question = question_from_record(record, base64_encoded=False)
        assert [o.text for o in question.options] == ["3", "4", "5", "22"]

    def test_missing_difficulty(self):
        """A record without difficulty has no level."""
        record = {"question": "Q?", "correct_answer": "True", "incorrect_answers": ["False"]}
        assert question_from_record(record, base64_encoded=False).difficulty_level is None

    def test_bad_base64(self):
        """Invalid base64 raises ValueError."""
        record = _record("Q?", "True", ["False"])
        record["question"] = "!!!"
        with pytest.raises(ValueError):
            question_from_record(record)


class TestPopulateQuestions:
    """Tests for populate_questions()."""

    def test_fills_game(self):
        """populate_questions() fills the question list."""
        game = TriviaGame(category_id="9", mode_index=GameMode.RAPID_FIRE.index)
        source = FakeQuestionSource()
        populate_questions(game, source)
        assert game.is_ready
        assert source.calls == [("9", 6)]

    def test_wrong_count_leaves_game_empty(self):
        """A wrong count raises and leaves no questions."""
        game = TriviaGame(category_id="9")
        with pytest.raises(QuestionSourceError):
            populate_questions(game, FakeQuestionSource(short_by=1))
        assert game.questions == []
