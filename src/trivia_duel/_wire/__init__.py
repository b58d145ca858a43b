# Area: Wire
"""
Wire format - the compact game carried inside a message payload.

The codec lives in ``trivia_duel._wire.codec``; this package only
re-exports the schema types so that the model can depend on them
without importing the codec.
"""

from .schemas import CompactAnswer, CompactQuestion, CompactPlayer, CompactGame

__all__ = [
    "CompactAnswer",
    "CompactQuestion",
    "CompactPlayer",
    "CompactGame",
]
