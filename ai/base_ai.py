"""Base AI interface."""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from typing import Dict, Optional

from engine.board import Board, Move
from engine.stones import Color

INVALID_NAME_CHARS = "[]():; "


def parse_agent_args(text: str) -> Dict[str, str]:
    """
    Parse whitespace-separated ``key=value`` pairs.

    A token without ``=`` maps to itself; a repeated key keeps its last value.
    """
    meta: Dict[str, str] = {}
    for pair in text.split():
        key, sep, value = pair.partition("=")
        meta[key] = value if sep else key
    return meta


class BaseAI(ABC):
    """Abstract AI strategy contract."""

    def __init__(self, args: str = "") -> None:
        self.meta: Dict[str, str] = parse_agent_args("name=unknown role=unknown " + args)

    @abstractmethod
    def choose_move(self, board: Board) -> Move:
        """Choose a move for the given board state, or the null move when none exists."""
        raise NotImplementedError

    def open_episode(self, flag: str = "") -> None:
        pass

    def close_episode(self, flag: str = "") -> None:
        pass

    def property(self, key: str) -> str:
        return self.meta[key]

    def notify(self, message: str) -> None:
        key, _, value = message.partition("=")
        self.meta[key] = value

    def name(self) -> str:
        return self.property("name")

    def role(self) -> str:
        return self.property("role")

    def _int_arg(self, key: str, default: int) -> int:
        if key not in self.meta:
            return default
        try:
            return int(float(self.meta[key]))
        except ValueError as exc:
            raise ValueError(f"Invalid numeric value for {key}: {self.meta[key]}") from exc

    def _float_arg(self, key: str, default: float) -> float:
        if key not in self.meta:
            return default
        try:
            return float(self.meta[key])
        except ValueError as exc:
            raise ValueError(f"Invalid numeric value for {key}: {self.meta[key]}") from exc


class RandomizedAI(BaseAI):
    """Player bound to one colour with its own seeded generator."""

    def __init__(self, args: str = "") -> None:
        super().__init__(args)
        if any(ch in self.name() for ch in INVALID_NAME_CHARS):
            raise ValueError(f"invalid name: {self.name()}")
        role = self.role()
        if role not in (Color.BLACK.value, Color.WHITE.value):
            raise ValueError(f"invalid role: {role}")
        self.color = Color(role)
        seed: Optional[int] = self._int_arg("seed", 0) if "seed" in self.meta else None
        self._rng = random.Random(seed)
