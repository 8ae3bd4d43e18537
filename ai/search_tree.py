"""
Monte-Carlo tree search over NoGo positions.

One ``SearchTree`` is built per decision and dropped afterwards. Nodes live in
a flat list and refer to each other by index, so paths and parent links stay
valid while the tree grows.

Each iteration runs four phases:

1. ``select``: walk down fully expanded nodes by UCB score.
2. ``expand``: add one child for an untried legal cell, chosen from a shuffle.
3. ``simulate``: play a light rollout to the end and report the winner.
4. ``backpropagate``: add one visit (and maybe one win) along the path.

Rollouts shuffle the 81 cells once and then, every turn, play the first
still-legal cell in that fixed order.
"""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Set

from engine.board import NULL_MOVE, Board, Move
from engine.rules import BOARD_CELLS
from engine.stones import Color, PlaceResult

LOGGER = logging.getLogger(__name__)

DEFAULT_EXPLORATION = math.sqrt(2)
ROOT = 0


class RewardPerspective(str, Enum):
    """Whose win a rollout credits on each path node."""

    # Every node counts wins for the colour to move at the search root.
    ROOT = "root"
    # Every node counts wins for the colour that moved into it.
    MOVER = "mover"


@dataclass
class SearchNode:
    """One tree vertex. ``parent`` and ``children`` hold indices into the owning tree."""

    state: Board
    parent: Optional[int] = None
    last_move: Optional[int] = None
    legal_count: int = 0
    visit: int = 0
    win: int = 0
    children: List[int] = field(default_factory=list)
    claimed: Set[int] = field(default_factory=set)

    @property
    def is_terminal(self) -> bool:
        return self.legal_count == 0

    @property
    def is_fully_expanded(self) -> bool:
        return self.legal_count > 0 and len(self.children) == self.legal_count


def shuffled_cells(rng: random.Random) -> List[int]:
    """Return all cell indices in a random order drawn from rng."""
    cells = list(range(BOARD_CELLS))
    rng.shuffle(cells)
    return cells


class SearchTree:
    """Tree for a single decision rooted at a copy of the given board."""

    def __init__(
        self,
        state: Board,
        exploration: float = DEFAULT_EXPLORATION,
        reward: RewardPerspective = RewardPerspective.ROOT,
    ) -> None:
        self.exploration = exploration
        self.reward = RewardPerspective(reward)
        self.nodes: List[SearchNode] = []
        self._add_node(state.clone(), parent=None, last_move=None)
        self.root_color: Color = state.current_turn

    @property
    def root(self) -> SearchNode:
        return self.nodes[ROOT]

    def _add_node(self, state: Board, parent: Optional[int], last_move: Optional[int]) -> int:
        index = len(self.nodes)
        self.nodes.append(
            SearchNode(
                state=state,
                parent=parent,
                last_move=last_move,
                legal_count=state.legal_move_count(),
            )
        )
        if parent is not None:
            self.nodes[parent].children.append(index)
            self.nodes[parent].claimed.add(last_move)
        return index

    def ucb_score(self, index: int) -> float:
        """UCB1 score of a visited non-root node relative to its parent."""
        node = self.nodes[index]
        parent = self.nodes[node.parent]
        exploit = node.win / node.visit
        explore = math.sqrt(math.log(parent.visit) / node.visit)
        return exploit + self.exploration * explore

    def select(self) -> List[int]:
        """Descend from the root through fully expanded nodes, returning the path taken."""
        path = [ROOT]
        current = ROOT
        while self.nodes[current].is_fully_expanded:
            best_score = -math.inf
            best_child = current
            for child in self.nodes[current].children:
                score = self.ucb_score(child)
                if score > best_score:
                    best_score = score
                    best_child = child
            current = best_child
            path.append(current)
        return path

    def expand(self, index: int, rng: random.Random) -> int:
        """
        Add one child for a random untried legal cell.

        Returns the new child's index, or ``index`` itself when every legal
        cell already has a child (or there is none).
        """
        node = self.nodes[index]
        for cell in shuffled_cells(rng):
            if cell in node.claimed:
                continue
            after = node.state.clone()
            if after.place(cell) is PlaceResult.LEGAL:
                return self._add_node(after, parent=index, last_move=cell)
        return index

    def simulate(self, index: int, rng: random.Random) -> Color:
        """Play a rollout from a node and return the winning colour."""
        board = self.nodes[index].state.clone()
        order = shuffled_cells(rng)
        while True:
            for cell in order:
                if board.place(cell) is PlaceResult.LEGAL:
                    break
            else:
                return board.current_turn.opponent()

    def backpropagate(self, path: List[int], winner: Color) -> None:
        for index in path:
            node = self.nodes[index]
            node.visit += 1
            if winner is self._credited_color(node):
                node.win += 1

    def _credited_color(self, node: SearchNode) -> Color:
        if self.reward is RewardPerspective.ROOT:
            return self.root_color
        return node.state.current_turn.opponent()

    def iterate(self, rng: random.Random) -> None:
        """Run one select/expand/simulate/backpropagate cycle."""
        path = self.select()
        leaf = self.expand(path[-1], rng)
        if leaf != path[-1]:
            path.append(leaf)
        winner = self.simulate(leaf, rng)
        self.backpropagate(path, winner)

    def best_child(self) -> Optional[int]:
        """Most visited root child, first one on ties."""
        best: Optional[int] = None
        max_visit = -1
        for child in self.root.children:
            if self.nodes[child].visit > max_visit:
                max_visit = self.nodes[child].visit
                best = child
        return best

    def best_move(self) -> Move:
        best = self.best_child()
        if best is None:
            return NULL_MOVE
        return Move.place(self.nodes[best].last_move, self.root_color)

    def run(self, iterations: int, rng: random.Random) -> Move:
        """Run a fixed number of iterations and return the most visited move."""
        for _ in range(iterations):
            self.iterate(rng)
        return self.best_move()


def run_mcts(
    board: Board,
    iterations: int,
    rng: random.Random,
    exploration: float = DEFAULT_EXPLORATION,
    reward: RewardPerspective = RewardPerspective.ROOT,
    debug_top_k: int = 3,
) -> Move:
    """Search from board for a fixed number of iterations and return the chosen move."""
    tree = SearchTree(board, exploration=exploration, reward=reward)
    move = tree.run(iterations, rng)
    _log_diagnostics(tree, move, iterations, debug_top_k)
    return move


def _log_diagnostics(tree: SearchTree, chosen: Move, iterations: int, top_k: int) -> None:
    """Emit the top-k root children when DEBUG is enabled."""
    if not LOGGER.isEnabledFor(logging.DEBUG):
        return
    ranked = sorted((tree.nodes[child] for child in tree.root.children), key=lambda node: node.visit, reverse=True)
    for idx, node in enumerate(ranked[: max(1, top_k)], start=1):
        LOGGER.debug(
            "Candidate #%d cell=%d visits=%d wins=%d win_rate=%.3f chosen=%s",
            idx,
            node.last_move,
            node.visit,
            node.win,
            node.win / max(1, node.visit),
            node.last_move == chosen.cell,
        )
    LOGGER.debug(
        "MCTS selected %s after %d iterations (%d nodes, root visits=%d)",
        chosen,
        iterations,
        len(tree.nodes),
        tree.root.visit,
    )
