# Area: Model
"""
trivia_duel._model.captions - Message captions
==============================================

Caption texts shown on the message bubble for each game state.
"""

CHALLENGE = "I challenge you to a game of trivia!"
CHALLENGE_SENT = "Your challenge was sent - tap to start"
READY = "Your turn to answer."
NUDGED = "Don't forget about our game!"
WAITING = "Waiting on opponent..."
WIN = "You win!"
LOSE = "GAME OVER"
TIE = "It's a tie!"

RAPID_FIRE_SENT = "Challenge sent. Your score: {score}"
RAPID_FIRE_RECEIVED = "Can you beat my score of {score}?"
