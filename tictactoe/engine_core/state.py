"""
Game State - The board, the players and the session value.

Design principles:
- Immutable-friendly: the board is a tuple and all changes return new state
- Owned by the engine: only the reducer produces new sessions
- Render-ready: snapshot() gives the presentation layer everything it draws
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Player(Enum):
    """The two marks that can occupy a cell."""
    X = "X"
    O = "O"

    def opposite(self) -> Player:
        """Get the other player."""
        return Player.O if self == Player.X else Player.X


class GameMode(Enum):
    """Who plays the O side."""
    PVP = "pvp"
    PVAI = "pvai"

    @property
    def label(self) -> str:
        return "Player vs AI" if self == GameMode.PVAI else "Player vs Player"


class GamePhase(Enum):
    """States of the game state machine."""
    AWAITING_MODE = "awaiting_mode"
    IN_PROGRESS = "in_progress"
    AI_THINKING = "ai_thinking"
    WON = "won"
    DRAW = "draw"


class Outcome(Enum):
    """Result of the game so far."""
    IN_PROGRESS = "in_progress"
    WON = "won"
    DRAW = "draw"


# A cell is either empty (None) or holds a Player
Cell = Optional[Player]
Board = tuple[Cell, ...]

BOARD_SIZE = 9
CENTER = 4
CORNERS = (0, 2, 6, 8)

# The AI always plays O; the human always opens as X
HUMAN_PLAYER = Player.X
AI_PLAYER = Player.O

# All 8 winning lines, row-major indices
WINNING_LINES: tuple[tuple[int, int, int], ...] = (
    # Rows
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    # Columns
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    # Diagonals
    (0, 4, 8),
    (2, 4, 6),
)


def empty_board() -> Board:
    """A board with all 9 cells empty."""
    return (None,) * BOARD_SIZE


def board_from_string(layout: str) -> Board:
    """
    Build a board from a 9-character layout such as "XO.X..O..".

    Any character other than X or O is an empty cell. Handy for tests
    and for debugging in a REPL.
    """
    cells = [c for c in layout if not c.isspace()]
    if len(cells) != BOARD_SIZE:
        raise ValueError(f"Board layout must have {BOARD_SIZE} cells, got {len(cells)}")
    return tuple(
        Player(c.upper()) if c.upper() in ("X", "O") else None
        for c in cells
    )


def board_to_string(board: Board) -> str:
    """Inverse of board_from_string, with '.' for empty cells."""
    return "".join(cell.value if cell else "." for cell in board)


@dataclass(frozen=True)
class Move:
    """A placed mark, recorded in the session history."""
    player: Player
    index: int
    turn: int  # 1-based turn number this move produced
    by_ai: bool = False


@dataclass(frozen=True)
class StateSnapshot:
    """
    What the presentation layer renders after every state change.

    Contains no references to engine internals.
    """
    board: Board
    current_player: Player
    mode: GameMode | None
    phase: GamePhase
    outcome: Outcome
    winner: Player | None
    winning_line: tuple[int, int, int] | None
    turn_count: int
    is_ai_thinking: bool
    status_message: str
    mode_label: str

    @property
    def cells(self) -> list[str]:
        """Board as display strings ("X", "O" or "")."""
        return [cell.value if cell else "" for cell in self.board]


@dataclass(frozen=True)
class GameSession:
    """
    Complete game state at a point in time.

    Sessions are values: the reducer returns a new one for every
    accepted action and replaces it wholesale on restart or mode change.
    """
    board: Board = field(default_factory=empty_board)
    current_player: Player = HUMAN_PLAYER
    mode: GameMode | None = None
    phase: GamePhase = GamePhase.AWAITING_MODE
    winner: Player | None = None
    winning_line: tuple[int, int, int] | None = None
    turn_count: int = 0
    history: tuple[Move, ...] = ()

    @classmethod
    def new(cls, mode: GameMode | None) -> GameSession:
        """
        Fresh session: empty board, X to move, turn count 0.

        With no mode the session waits for mode selection.
        """
        phase = GamePhase.AWAITING_MODE if mode is None else GamePhase.IN_PROGRESS
        return cls(mode=mode, phase=phase)

    @property
    def outcome(self) -> Outcome:
        if self.phase == GamePhase.WON:
            return Outcome.WON
        if self.phase == GamePhase.DRAW:
            return Outcome.DRAW
        return Outcome.IN_PROGRESS

    @property
    def is_terminal(self) -> bool:
        return self.phase in (GamePhase.WON, GamePhase.DRAW)

    @property
    def is_ai_thinking(self) -> bool:
        return self.phase == GamePhase.AI_THINKING

    @property
    def empty_cells(self) -> list[int]:
        return [i for i, cell in enumerate(self.board) if cell is None]

    def with_mark(self, index: int, player: Player) -> Board:
        """Return the board with one more mark; the session is unchanged."""
        cells = list(self.board)
        cells[index] = player
        return tuple(cells)

    def _copy_with(self, **kwargs) -> GameSession:
        """Create a copy with some fields replaced."""
        return GameSession(
            board=kwargs.get("board", self.board),
            current_player=kwargs.get("current_player", self.current_player),
            mode=kwargs.get("mode", self.mode),
            phase=kwargs.get("phase", self.phase),
            winner=kwargs.get("winner", self.winner),
            winning_line=kwargs.get("winning_line", self.winning_line),
            turn_count=kwargs.get("turn_count", self.turn_count),
            history=kwargs.get("history", self.history),
        )

    def status_message(self) -> str:
        """Status line shown above the board."""
        if self.phase == GamePhase.AWAITING_MODE:
            return "Choose a game mode"
        if self.phase == GamePhase.WON:
            if self.mode == GameMode.PVAI and self.winner == AI_PLAYER:
                return "AI Wins!"
            return f"Player {self.winner.value} Wins!"
        if self.phase == GamePhase.DRAW:
            return "It's a Draw!"
        if self.phase == GamePhase.AI_THINKING:
            return "AI is thinking..."
        return f"Player {self.current_player.value}'s Turn"

    def snapshot(self) -> StateSnapshot:
        return StateSnapshot(
            board=self.board,
            current_player=self.current_player,
            mode=self.mode,
            phase=self.phase,
            outcome=self.outcome,
            winner=self.winner,
            winning_line=self.winning_line,
            turn_count=self.turn_count,
            is_ai_thinking=self.is_ai_thinking,
            status_message=self.status_message(),
            mode_label=self.mode.label if self.mode else "",
        )
