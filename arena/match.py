"""Agent-vs-agent NoGo matches."""

from __future__ import annotations

import json
import logging
import multiprocessing as mp
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence

import numpy as np

from ai.base_ai import BaseAI
from ai.mcts_ai import MCTSAI
from ai.random_ai import RandomAI
from engine.board import Board, Move
from engine.stones import Color

LOGGER = logging.getLogger(__name__)

# Safety cap; a NoGo game on 81 cells cannot run longer.
MAX_PLIES = Board.cells


@dataclass
class AgentSpec:
    """Serializable agent descriptor for workers."""

    kind: str  # mcts or random
    args: str = ""


@dataclass
class ArenaConfig:
    """Match series settings."""

    games: int = 10
    base_seed: Optional[int] = None
    parallel_workers: int = 1
    log_every: int = 1
    record_states: bool = False

    @classmethod
    def from_dict(cls, payload: Dict[str, object]) -> "ArenaConfig":
        base_seed = payload.get("base_seed")
        return cls(
            games=int(payload.get("games", 10)),
            base_seed=None if base_seed is None else int(base_seed),
            parallel_workers=int(payload.get("parallel_workers", 1)),
            log_every=int(payload.get("log_every", 1)),
            record_states=bool(payload.get("record_states", False)),
        )

    @classmethod
    def from_json(cls, path: str | Path) -> "ArenaConfig":
        with Path(path).open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
        return cls.from_dict(payload)


@dataclass
class GameRecord:
    """Outcome and move list of one game."""

    winner: Color
    plies: int
    moves: List[Move] = field(default_factory=list)
    states: Optional[np.ndarray] = None


def build_agent(spec: AgentSpec, role: Color, seed: Optional[int]) -> BaseAI:
    # The seat colour comes last so a spec cannot override it.
    args = f"{spec.args} role={role.value}"
    if seed is not None:
        args = f"seed={seed} {args}"
    if spec.kind == "mcts":
        return MCTSAI(args)
    if spec.kind == "random":
        return RandomAI(args)
    raise ValueError(f"Unsupported agent kind: {spec.kind}")


def parse_agent_spec(text: str) -> AgentSpec:
    """Parse ``"kind key=value ..."`` into an AgentSpec."""
    kind, _, args = text.strip().partition(" ")
    return AgentSpec(kind=kind, args=args.strip())


def play_game(black_ai: BaseAI, white_ai: BaseAI, record_states: bool = False) -> GameRecord:
    """Play one game from the empty board. The side that cannot move loses."""
    board = Board()
    moves: List[Move] = []
    states: List[np.ndarray] = []

    black_ai.open_episode("black")
    white_ai.open_episode("white")
    while board.ply_count < MAX_PLIES:
        actor = black_ai if board.current_turn is Color.BLACK else white_ai
        if record_states:
            states.append(board.encode_state())
        move = actor.choose_move(board)
        if move.is_null:
            break
        board.apply_move(move)
        moves.append(move)
    winner = board.current_turn.opponent()
    black_ai.close_episode(winner.value)
    white_ai.close_episode(winner.value)

    return GameRecord(
        winner=winner,
        plies=board.ply_count,
        moves=moves,
        states=np.stack(states) if states else None,
    )


def _play_from_specs(
    game_index: int,
    black_spec: AgentSpec,
    white_spec: AgentSpec,
    base_seed: Optional[int],
    record_states: bool,
) -> GameRecord:
    seed = None if base_seed is None else base_seed + game_index
    black_ai = build_agent(black_spec, Color.BLACK, seed=seed)
    white_ai = build_agent(white_spec, Color.WHITE, seed=None if seed is None else seed + 9973)
    return play_game(black_ai, white_ai, record_states=record_states)


class MatchRunner:
    """Runs AI-vs-AI matches and returns game records."""

    def __init__(self, config: ArenaConfig) -> None:
        self.config = config

    def run_games(self, black_ai: BaseAI, white_ai: BaseAI, n_games: int) -> List[GameRecord]:
        records: List[GameRecord] = []
        for game_index in range(n_games):
            record = play_game(black_ai, white_ai, record_states=self.config.record_states)
            records.append(record)
            self._log_record(game_index, n_games, record)
        return records

    def run_games_from_specs(self, black_spec: AgentSpec, white_spec: AgentSpec, n_games: int) -> List[GameRecord]:
        args = [
            (idx, black_spec, white_spec, self.config.base_seed, self.config.record_states)
            for idx in range(n_games)
        ]
        if self.config.parallel_workers <= 1:
            records = [_play_from_specs(*game_args) for game_args in args]
        else:
            with mp.Pool(processes=self.config.parallel_workers) as pool:
                records = pool.starmap(_play_from_specs, args)
        for idx, record in enumerate(records):
            self._log_record(idx, n_games, record)
        return records

    def _log_record(self, game_index: int, n_games: int, record: GameRecord) -> None:
        if (game_index + 1) % max(1, self.config.log_every) == 0:
            LOGGER.info(
                "Arena game %d/%d | winner=%s plies=%d",
                game_index + 1,
                n_games,
                record.winner.value,
                record.plies,
            )

    @staticmethod
    def summarize(records: Sequence[GameRecord]) -> Dict[str, float]:
        summary: Dict[str, float] = {"games": len(records), "black_wins": 0, "white_wins": 0, "avg_plies": 0.0}
        for record in records:
            if record.winner is Color.BLACK:
                summary["black_wins"] += 1
            else:
                summary["white_wins"] += 1
        if records:
            summary["avg_plies"] = sum(record.plies for record in records) / len(records)
        return summary
