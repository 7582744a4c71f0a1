"""
Pytest fixtures for tic-tac-toe tests.
"""

import pytest

from ..engine_core.state import GameSession, GameMode, Player, board_from_string
from ..bots import HeuristicBot
from ..session import GameEngine


@pytest.fixture
def pvp_session() -> GameSession:
    """A fresh Player vs Player session."""
    return GameSession.new(GameMode.PVP)


@pytest.fixture
def pvai_session() -> GameSession:
    """A fresh Player vs AI session."""
    return GameSession.new(GameMode.PVAI)


@pytest.fixture
def bot() -> HeuristicBot:
    """Seeded AI playing O."""
    return HeuristicBot(player=Player.O, seed=7)


@pytest.fixture
def pvp_engine() -> GameEngine:
    engine = GameEngine(seed=7)
    engine.start_session(GameMode.PVP)
    return engine


@pytest.fixture
def pvai_engine() -> GameEngine:
    engine = GameEngine(seed=7)
    engine.start_session(GameMode.PVAI)
    return engine


@pytest.fixture
def board():
    """Shortcut for building boards from layouts like "XO.X..O.."."""
    return board_from_string
