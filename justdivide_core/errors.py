"""
Just Divide error hierarchy.

Every rejection the engine can produce is a JustDivideError. They are all
validation failures raised before any state is touched, so callers can report
them and carry on with the same session.

Usage:
    from justdivide_core.errors import JustDivideError

    try:
        session.place_active(r, c)
    except JustDivideError as e:
        print(e.message)
"""
from __future__ import annotations

from typing import Any, Dict, Optional

__all__ = [
    "EmptyUndoLog",
    "GameIsOver",
    "IsolatedPlacement",
    "JustDivideError",
    "NoTrashRemaining",
    "OccupiedCell",
    "OutOfBounds",
    "PlacementError",
    "SessionBusy",
    "UnknownDifficulty",
]


class JustDivideError(Exception):
    """Base exception for all Just Divide errors.

    Attributes:
        code: Machine-readable error code
        message: Human-readable description, suitable for the player
        context: Extra values for logs and API payloads
    """
    code: str = "JUSTDIVIDE_ERROR"
    default_message: str = "Action rejected."

    def __init__(
        self,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = message or self.default_message
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"[{self.code}] {self.message} ({ctx})"
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "code": self.code,
            "message": self.message,
            "context": self.context,
        }


class PlacementError(JustDivideError):
    """Base class for rejected grid placements."""
    code = "PLACEMENT_ERROR"


class OutOfBounds(PlacementError):
    code = "OUT_OF_BOUNDS"
    default_message = "That cell is not on the grid."


class OccupiedCell(PlacementError):
    code = "OCCUPIED_CELL"
    default_message = "Choose an empty slot."


class IsolatedPlacement(PlacementError):
    code = "ISOLATED_PLACEMENT"
    default_message = "Place tile next to at least one existing tile."


class NoTrashRemaining(JustDivideError):
    code = "NO_TRASH_REMAINING"
    default_message = "No TRASH uses left!"


class EmptyUndoLog(JustDivideError):
    code = "EMPTY_UNDO_LOG"
    default_message = "Nothing to undo."


class GameIsOver(JustDivideError):
    """Raised by turn actions once the session has reached a terminal board."""
    code = "GAME_OVER"
    default_message = "Game over. Undo or start a new game."


class SessionBusy(JustDivideError):
    """Raised when an action is started while another one is still running."""
    code = "SESSION_BUSY"
    default_message = "Another action is still in progress."


class UnknownDifficulty(JustDivideError):
    code = "UNKNOWN_DIFFICULTY"
    default_message = "Unknown difficulty."
