"""
Game Engine - The command-dispatch facade over one game.

Presentation layers call the engine with user intents and render the
snapshot it returns:

    engine = GameEngine()
    engine.start_session(GameMode.PVAI)
    outcome = engine.apply_move(0)      # human X
    if outcome.snapshot.is_ai_thinking:
        # optional cosmetic delay lives in the caller
        outcome = engine.play_ai_turn()

The engine is synchronous. While the AI turn is pending every human
move is rejected with AI_BUSY, which is how clicks and the AI's move
are kept from interleaving. There are no locks or timers here.
"""

from __future__ import annotations
from dataclasses import dataclass
import logging

from ..engine_core.state import GameSession, GameMode, StateSnapshot, Board
from ..engine_core.action import Action, ActionResult, RejectionReason
from ..engine_core.reducer import Reducer
from ..engine_core import rules
from ..bots import BotPolicy, HeuristicBot, Strategy

logger = logging.getLogger(__name__)


@dataclass
class MoveOutcome:
    """
    Result of one engine command, ready for rendering.

    `ai_move` is set when this command played the AI's move.
    """
    accepted: bool
    snapshot: StateSnapshot
    reason: RejectionReason | None = None
    ai_move: int | None = None
    ai_strategy: Strategy | None = None

    @property
    def rejected(self) -> bool:
        return not self.accepted


class GameEngine:
    """
    Owns the GameSession and is its only mutator.

    Args:
        bot: Policy for the AI side (default: HeuristicBot)
        seed: Seed for the default bot's random choices
        auto_play_ai: Play the AI reply inside apply_move instead of
            waiting for play_ai_turn()
    """

    check_winner = staticmethod(rules.check_winner)
    check_draw = staticmethod(rules.check_draw)

    def __init__(
        self,
        bot: BotPolicy | None = None,
        seed: int | None = None,
        auto_play_ai: bool = False,
    ):
        self.bot = bot or HeuristicBot(seed=seed)
        self.auto_play_ai = auto_play_ai
        self.reducer = Reducer()
        self._session = GameSession.new(None)

    @property
    def session(self) -> GameSession:
        return self._session

    def snapshot(self) -> StateSnapshot:
        return self._session.snapshot()

    def dispatch(self, action: Action) -> MoveOutcome:
        """Apply any action and keep the resulting session."""
        result = self.reducer.apply(self._session, action)
        return self._commit(result)

    def start_session(self, mode: GameMode) -> MoveOutcome:
        """Fresh session in the given mode: empty board, X to move."""
        outcome = self.dispatch(Action.select_mode(mode))
        logger.info("Session started in %s mode", mode.value)
        return outcome

    def apply_move(self, index: int, auto_play_ai: bool | None = None) -> MoveOutcome:
        """
        Handle a human click on a cell.

        Rejected (with no change) if the index is out of range, no mode
        is selected, the game is over, the AI is thinking, or the cell
        is taken.

        Args:
            index: Cell 0-8
            auto_play_ai: Overrides the engine's auto_play_ai for this move
        """
        if auto_play_ai is None:
            auto_play_ai = self.auto_play_ai
        outcome = self.dispatch(Action.place_mark(index))
        if outcome.accepted and auto_play_ai and self._session.is_ai_thinking:
            return self.play_ai_turn()
        return outcome

    def play_ai_turn(self) -> MoveOutcome:
        """
        Let the AI pick and play its move.

        Only valid while the session is in AI_THINKING.
        """
        if not self._session.is_ai_thinking:
            logger.info("AI move requested with no AI turn pending")
            return MoveOutcome(
                accepted=False,
                snapshot=self.snapshot(),
                reason=RejectionReason.NOT_AI_TURN,
            )

        decision = self.bot.select_move(self._session.board)
        outcome = self.dispatch(Action.ai_place_mark(decision.index))
        outcome.ai_move = decision.index
        outcome.ai_strategy = decision.strategy
        return outcome

    def compute_ai_move(self, board: Board) -> int:
        """The cell the AI would play on `board`; no state is touched."""
        return self.bot.select_move(board).index

    def reset_session(self) -> MoveOutcome:
        """Empty board, keeping the selected mode."""
        return self.dispatch(Action.restart())

    def change_mode(self) -> MoveOutcome:
        """Discard the game and wait for a new mode selection."""
        return self.dispatch(Action.change_mode())

    def _commit(self, result: ActionResult) -> MoveOutcome:
        if result.accepted:
            self._session = result.session
        return MoveOutcome(
            accepted=result.accepted,
            snapshot=self._session.snapshot(),
            reason=result.reason,
        )
