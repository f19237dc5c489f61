"""
Unbeatable strategy for TicTacToe.
Uses a full-depth Minimax search to choose the best move.
"""

from typing import Optional, Tuple

from .config import GameConfig
from .game_state import GameState, Cell
from .piece import Piece


class MinimaxStrategy:
    """
    An AI strategy that plays TicTacToe using the Minimax algorithm.

    The whole game tree is searched (no pruning, no depth limit), so the AI
    will win if possible, block the opponent if needed, and never lose.

    Ties between equally scored moves go to the first one found while
    scanning open cells row by row: a later move only replaces the current
    best when its score is strictly better.
    """

    def __init__(self, is_attacking: bool, config: Optional[GameConfig] = None):
        """
        Initialize the strategy.

        Args:
            is_attacking: True if the AI places X, False if it places O.
            config: Game configuration. Uses defaults if not provided.
        """
        self.is_attacking = is_attacking
        self.config = config or GameConfig()

        # Keep track of how many positions we've evaluated (for debugging)
        self.moves_evaluated = 0

    @property
    def piece(self) -> Piece:
        return Piece.for_side(self.is_attacking)

    def select_move(self, game_state: GameState) -> Optional[Cell]:
        """
        Get the best move for the current position.

        Args:
            game_state: Current game state. Never modified.

        Returns:
            (row, col) of best move, or None if no moves available.
        """
        self.moves_evaluated = 0

        if not game_state.open_cells():
            return None

        best_score, best_move = self._search(game_state, is_maximizing=True, is_root=True)

        if self.config.DEBUG_MODE:
            print(f"AI evaluated {self.moves_evaluated} positions. "
                  f"Best move: {best_move} (score: {best_score})")

        return best_move

    def score_moves(self, game_state: GameState) -> dict:
        """
        Minimax value of every open cell, from the AI's point of view.

        Handy for explaining a choice; `select_move` picks the first cell
        holding the highest value.
        """
        scores = {}
        for row, col in game_state.open_cells():
            next_state = game_state.copy()
            next_state.set(row, col, self.piece)
            score, _ = self._search(next_state, is_maximizing=False)
            scores[(row, col)] = score
        return scores

    def _search(
        self,
        game_state: GameState,
        is_maximizing: bool,
        is_root: bool = False
    ) -> Tuple[int, Optional[Cell]]:
        """
        Minimax algorithm.

        Args:
            game_state: Current state to evaluate.
            is_maximizing: True if the AI is the side to move in this ply.
            is_root: The position the AI was asked about. It is always
                expanded, even if it is already decided.

        Returns:
            The score of the position and the move that achieves it.
        """
        self.moves_evaluated += 1

        open_cells = game_state.open_cells()

        if not is_root:
            # Check terminal states
            winner = game_state.winner()
            if winner is not None:
                if winner == self.piece:
                    return self.config.WIN_SCORE, None
                return self.config.LOSE_SCORE, None

            if not open_cells:
                return self.config.DRAW_SCORE, None

        # The AI places its own piece on maximizing plies, the opponent's otherwise
        piece = self.piece if is_maximizing else self.piece.opposite()

        best_score = None
        best_move = None
        for row, col in open_cells:
            next_state = game_state.copy()
            next_state.set(row, col, piece)

            score, _ = self._search(next_state, not is_maximizing)

            if best_score is None:
                improved = True
            elif is_maximizing:
                improved = score > best_score
            else:
                improved = score < best_score

            if improved:
                best_score = score
                best_move = (row, col)

        return best_score, best_move
