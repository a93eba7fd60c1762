"""
Pocket Arcade - Six deterministic casual-game engines.

Tic-Tac-Toe, Connect-Four, Snake, Pong, Memory-Match and Word-Guess, each a
self-contained state machine with the same contract:
- initialize / reset a seeded state
- apply one command (rejected commands leave the state unchanged)
- advance on a clock (Snake, Pong) or after a delay (Memory-Match)
- report terminal state and outcome

Rendering is left to whatever host mounts the engines.
"""

__version__ = "0.1.0"
