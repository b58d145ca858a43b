"""
trivia_duel.question_source - Question bank client
==================================================

Fetches a game's questions from an Open Trivia DB compatible HTTP API
and turns the raw records into ordered Question objects.

Usage:
    source = OpenTDBQuestionSource()
    populate_questions(game, source)
"""

from __future__ import annotations
import base64
import binascii
import logging
import random
from typing import Any, Dict, List, Optional, Protocol

import httpx

from ._model.game import TriviaGame
from ._model.question import Question, difficulty_from_name
from .errors import QuestionSourceError
from .types import RawQuestion

logger = logging.getLogger("trivia_duel.question_source")

DEFAULT_API_URL = "https://opentdb.com/api.php"
DEFAULT_TIMEOUT_SECONDS = 10.0


class QuestionSource(Protocol):
    """Interface for anything that can supply a game's questions."""

    def fetch(self, category_id: str, count: int) -> List[Question]:
        ...


def _decode_text(value: Any, base64_encoded: bool) -> str:
    if not isinstance(value, str):
        raise ValueError(f"expected text, got {type(value).__name__}")
    if not base64_encoded:
        return value
    try:
        return base64.b64decode(value, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as e:
        raise ValueError(f"invalid base64 text: {e}")


def question_from_record(
    record: RawQuestion,
    base64_encoded: bool = True,
    rng: Optional[random.Random] = None,
) -> Question:
    """
    Build a Question from one raw question bank record.

    Raises:
        ValueError: If the record is missing fields or cannot be decoded
    """
    try:
        incorrect = record["incorrect_answers"]
        if not isinstance(incorrect, list) or not incorrect:
            raise ValueError("incorrect_answers must be a non-empty list")
        difficulty = record.get("difficulty")
        return Question.build(
            text=_decode_text(record["question"], base64_encoded),
            correct_text=_decode_text(record["correct_answer"], base64_encoded),
            incorrect_texts=[_decode_text(t, base64_encoded) for t in incorrect],
            difficulty_level=difficulty_from_name(
                _decode_text(difficulty, base64_encoded) if difficulty is not None else None
            ),
            rng=rng,
        )
    except KeyError as e:
        raise ValueError(f"missing field {e}")


class OpenTDBQuestionSource:
    """
    HTTP question bank client.

    Questions are requested base64 encoded so that no HTML entities leak
    into the texts. The returned batch is sorted by difficulty, then text.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        client: Optional[httpx.Client] = None,
        rng: Optional[random.Random] = None,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self.client = client
        self.rng = rng

    def build_params(self, category_id: str, count: int) -> Dict[str, str]:
        """Query parameters for a request; non-numeric categories mean any."""
        params = {"encode": "base64", "amount": str(count)}
        if category_id.isdigit():
            params["category"] = category_id
        return params

    def fetch(self, category_id: str, count: int) -> List[Question]:
        """
        Fetch `count` questions for a category.

        Raises:
            QuestionSourceError: On transport errors, a non-zero response
                code, malformed records or a short batch
        """
        params = self.build_params(category_id, count)
        try:
            data = self._get(params)
        except httpx.HTTPError as e:
            raise QuestionSourceError(category_id, count, f"request failed: {e}")
        except ValueError as e:
            raise QuestionSourceError(category_id, count, f"invalid JSON: {e}")

        if not isinstance(data, dict):
            raise QuestionSourceError(category_id, count, "response is not an object")

        code = data.get("response_code")
        if code != 0:
            raise QuestionSourceError(category_id, count, f"response code {code}")

        results = data.get("results")
        if not isinstance(results, list):
            raise QuestionSourceError(category_id, count, "missing results")

        questions: List[Question] = []
        errors: List[str] = []
        for i, record in enumerate(results):
            try:
                questions.append(question_from_record(record, rng=self.rng))
            except (ValueError, TypeError, AttributeError) as e:
                errors.append(f"result {i}: {e}")

        if errors:
            raise QuestionSourceError(category_id, count, "malformed results", errors)
        if len(questions) != count:
            raise QuestionSourceError(
                category_id, count, f"expected {count} questions, got {len(questions)}"
            )

        logger.info(f"Fetched {count} questions for category {category_id}")
        return sorted(questions)

    def _get(self, params: Dict[str, str]) -> Any:
        if self.client is not None:
            response = self.client.get(self.base_url, params=params, timeout=self.timeout)
            response.raise_for_status()
            return response.json()

        with httpx.Client(timeout=self.timeout) as client:
            response = client.get(self.base_url, params=params)
            response.raise_for_status()
            return response.json()


def populate_questions(game: TriviaGame, source: QuestionSource) -> None:
    """
    Fill a new game's question list.

    Raises:
        QuestionSourceError: If the source fails or returns the wrong count;
            the game is left without questions in that case
    """
    questions = source.fetch(game.category_id, game.num_questions)
    if len(questions) != game.num_questions:
        raise QuestionSourceError(
            game.category_id,
            game.num_questions,
            f"expected {game.num_questions} questions, got {len(questions)}",
        )
    game.questions = list(questions)
