"""
Heuristic Bot - Fixed-priority tic-tac-toe AI.

Rules, tried in order; the first that applies picks the move:
1. Win now: a cell that completes our line
2. Block: a cell that would complete the opponent's line
3. Center: cell 4
4. Corner: a random empty corner
5. Any: a random empty cell

This is not minimax; it can be beaten by a fork.
"""

from __future__ import annotations
import logging
import random

from ..engine_core.state import Board, Player, AI_PLAYER, CENTER, CORNERS
from ..engine_core.rules import check_winner, available_moves
from .policy import BotPolicy, BotDecision, Strategy

logger = logging.getLogger(__name__)


class HeuristicBot(BotPolicy):
    """
    Bot that plays the fixed-priority rules.

    Win and block scan empty cells in ascending order and take the
    first hit. Each candidate is tried on its own copy of the board,
    so the snapshot passed in is never modified.
    """

    def __init__(self, player: Player = AI_PLAYER, seed: int | None = None,
                 rng: random.Random | None = None):
        self.player = player
        self.rng = rng or random.Random(seed)

    def select_move(self, board: Board) -> BotDecision:
        moves = available_moves(board)
        if not moves:
            raise ValueError("No empty cells available")

        opponent = self.player.opposite()

        # 1. Win now
        index = self._find_completing_cell(board, moves, self.player)
        if index is not None:
            return self._decide(index, Strategy.WIN, "Completes a line", [index])

        # 2. Block
        index = self._find_completing_cell(board, moves, opponent)
        if index is not None:
            return self._decide(
                index, Strategy.BLOCK, f"Blocks {opponent.value} from winning", [index]
            )

        # 3. Center
        if board[CENTER] is None:
            return self._decide(CENTER, Strategy.CENTER, "Takes the center", [CENTER])

        # 4. Corner
        corners = [i for i in CORNERS if board[i] is None]
        if corners:
            return self._decide(
                self.rng.choice(corners), Strategy.CORNER, "Takes a corner", corners
            )

        # 5. Any
        return self._decide(self.rng.choice(moves), Strategy.ANY, "Takes a free cell", moves)

    def _find_completing_cell(self, board: Board, moves: list[int], player: Player) -> int | None:
        """First empty cell where placing `player` wins, in ascending order."""
        for index in moves:
            trial = list(board)
            trial[index] = player
            if check_winner(tuple(trial)) == player:
                return index
        return None

    def _decide(self, index: int, strategy: Strategy, explanation: str,
                candidates: list[int]) -> BotDecision:
        logger.debug("%s plays %d (%s)", self.player.value, index, strategy.value)
        return BotDecision(
            index=index,
            strategy=strategy,
            explanation=explanation,
            candidates=candidates,
        )


def compute_ai_move(board: Board, player: Player = AI_PLAYER,
                    rng: random.Random | None = None) -> int:
    """
    Convenience function: the index the heuristic AI would play.

    Raises ValueError if the board has no empty cell.
    """
    return HeuristicBot(player=player, rng=rng).select_move(board).index
