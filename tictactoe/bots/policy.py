"""
Bot Policy - Interface for bot decision-making.

A BotPolicy takes a board snapshot and returns a decision.
It never sees or changes the GameSession.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..engine_core.state import Board


class Strategy(Enum):
    """Which rule produced a move, highest priority first."""
    WIN = "win"
    BLOCK = "block"
    CENTER = "center"
    CORNER = "corner"
    ANY = "any"


@dataclass
class BotDecision:
    """
    A decision made by a bot.

    Contains:
    - The cell to play
    - Which strategy chose it
    - Explanation (for UI/debugging)
    """
    index: int
    strategy: Strategy
    explanation: str = ""

    # Candidate cells the strategy picked from (for debugging)
    candidates: list[int] = field(default_factory=list)


class BotPolicy(ABC):
    """
    Abstract base class for bot policies.

    A policy defines how a bot selects a cell. Implementations can
    range from fixed rules to search.
    """

    @abstractmethod
    def select_move(self, board: Board) -> BotDecision:
        """
        Select a cell to play.

        Args:
            board: Read-only board snapshot with at least one empty cell

        Returns:
            BotDecision with the selected index
        """
        pass

    def get_name(self) -> str:
        """Get the bot's name/identifier."""
        return self.__class__.__name__
