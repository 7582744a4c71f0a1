"""
Bots module - AI opponent implementations.

Provides:
- BotPolicy: Interface for bot decision-making
- HeuristicBot: Fixed-priority win/block/center/corner/any player
- compute_ai_move: One-call access to the heuristic
"""

from .policy import BotPolicy, BotDecision, Strategy
from .heuristic_bot import HeuristicBot, compute_ai_move

__all__ = [
    "BotPolicy",
    "BotDecision",
    "Strategy",
    "HeuristicBot",
    "compute_ai_move",
]
