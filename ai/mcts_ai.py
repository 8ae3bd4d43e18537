"""Monte-Carlo tree search player."""

from __future__ import annotations

from dataclasses import dataclass

from ai.base_ai import RandomizedAI
from ai.search_tree import DEFAULT_EXPLORATION, RewardPerspective, run_mcts
from engine.board import Board, Move


@dataclass
class MCTSConfig:
    """Search budget and scoring settings."""

    iterations: int = 200
    exploration: float = DEFAULT_EXPLORATION
    reward: RewardPerspective = RewardPerspective.ROOT
    debug_top_k: int = 3


class MCTSAI(RandomizedAI):
    """
    Plays the most visited root move after a fixed number of MCTS iterations.

    Recognised arguments: ``N`` (iterations), ``c`` (exploration constant),
    ``reward`` (``root`` or ``mover``) and ``seed``.
    """

    def __init__(self, args: str = "") -> None:
        super().__init__("name=mcts " + args)
        iterations = self._int_arg("N", MCTSConfig.iterations)
        if iterations < 0:
            raise ValueError(f"invalid iteration count: {iterations}")
        reward = self.meta.get("reward", RewardPerspective.ROOT.value)
        try:
            perspective = RewardPerspective(reward)
        except ValueError as exc:
            raise ValueError(f"invalid reward policy: {reward}") from exc
        self.config = MCTSConfig(
            iterations=iterations,
            exploration=self._float_arg("c", DEFAULT_EXPLORATION),
            reward=perspective,
        )

    def choose_move(self, board: Board) -> Move:
        """Search a fresh tree from board and return its decision."""
        return run_mcts(
            board,
            self.config.iterations,
            self._rng,
            exploration=self.config.exploration,
            reward=self.config.reward,
            debug_top_k=self.config.debug_top_k,
        )
