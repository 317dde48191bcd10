"""
Session Module - Manages ephemeral puzzle sessions.

A session represents one play-through of the puzzle:
- Created when the player starts
- Holds the current puzzle state
- Destroyed when the player ends it

Sessions are EPHEMERAL: nothing is persisted.
"""

from .manager import SessionManager, Session, SessionState

__all__ = [
    "SessionManager",
    "Session",
    "SessionState",
]
