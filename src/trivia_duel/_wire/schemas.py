# Area: Wire
"""
trivia_duel._wire.schemas - Compact message payload schemas
===========================================================

Pydantic models for the minimized game that rides inside a message URL.
Attribute names are descriptive; the serialized keys are single letters
to keep the payload short. Only this app's own versions read the payload,
but the mapping below must stay stable across releases.

Field mapping (attribute -> wire key):

    CompactAnswer    correct -> c (0/1), option_index -> i, text -> x
    CompactQuestion  difficulty -> d, options -> o, text -> x
    CompactPlayer    id -> id, completion_time -> t, last_reveal -> l,
                     responses -> m
    CompactGame      id -> id, category_id -> c, current_index -> i,
                     mode_index -> m, nudge_index -> n, players -> p,
                     questions -> q, sent_time -> t (epoch seconds),
                     time_remaining -> r, sender_id -> s
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class _CompactModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class CompactAnswer(_CompactModel):
    correct: int = Field(alias="c", ge=0, le=1)
    option_index: Optional[int] = Field(default=None, alias="i")
    text: str = Field(alias="x")


class CompactQuestion(_CompactModel):
    difficulty: Optional[int] = Field(default=None, alias="d")
    options: List[CompactAnswer] = Field(default_factory=list, alias="o")
    text: str = Field(alias="x")


class CompactPlayer(_CompactModel):
    """A player reduced to option indices; None marks an unanswered slot."""

    id: str
    completion_time: Optional[float] = Field(default=None, alias="t")
    last_reveal: Optional[int] = Field(default=None, alias="l")
    responses: List[Optional[int]] = Field(default_factory=list, alias="m")


class CompactGame(_CompactModel):
    id: str
    category_id: str = Field(alias="c")
    current_index: int = Field(default=0, alias="i", ge=0)
    mode_index: int = Field(default=0, alias="m", ge=0)
    nudge_index: Optional[int] = Field(default=None, alias="n")
    players: List[CompactPlayer] = Field(default_factory=list, alias="p")
    questions: List[CompactQuestion] = Field(default_factory=list, alias="q")
    sent_time: float = Field(alias="t")
    time_remaining: Optional[float] = Field(default=None, alias="r")
    sender_id: Optional[str] = Field(default=None, alias="s")
