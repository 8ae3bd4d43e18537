"""CLI entrypoint for playing NoGo against the MCTS player."""

from __future__ import annotations

import argparse
import logging
from typing import Optional

from ai.mcts_ai import MCTSAI
from engine.board import Board, Move
from engine.rules import in_bounds, pos_to_index
from engine.stones import Color


def parse_args(argv: Optional[list] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play 9x9 NoGo in terminal.")
    parser.add_argument("--iterations", type=int, default=200, help="MCTS iterations per move")
    parser.add_argument("--seed", type=int, default=None, help="Deterministic search seed")
    parser.add_argument(
        "--human-side",
        type=str,
        default="black",
        choices=["black", "white"],
        help="Which colour the human controls",
    )
    parser.add_argument(
        "--reward",
        type=str,
        default="root",
        choices=["root", "mover"],
        help="Whose wins the search credits on each node",
    )
    parser.add_argument("--log-level", type=str, default="INFO", help="Python logging level")
    return parser.parse_args(argv)


def parse_user_move(command: str, color: Color) -> Optional[Move]:
    parts = command.strip().split()
    if len(parts) == 3 and parts[0].lower() == "place":
        parts = parts[1:]
    if len(parts) != 2:
        return None
    row, col = int(parts[0]), int(parts[1])
    if not in_bounds((row, col)):
        return None
    return Move.place(pos_to_index((row, col)), color)


def build_ai(args: argparse.Namespace, color: Color) -> MCTSAI:
    ai_args = f"role={color.value} N={args.iterations} reward={args.reward}"
    if args.seed is not None:
        ai_args += f" seed={args.seed}"
    return MCTSAI(ai_args)


def run_cli(argv: Optional[list] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))
    logger = logging.getLogger("nogo.cli")

    board = Board()
    human_side = Color(args.human_side)
    ai = build_ai(args, human_side.opponent())

    logger.info("Starting NoGo game. Human=%s AI=%s", human_side.value, ai.color.value)
    print("Commands: place <row> <col> | <row> <col> | help | quit")

    while True:
        terminal, winner = board.game_over()
        print()
        print(board.render_ascii())
        print(f"Turn: {board.current_turn.value} | Ply: {board.ply_count}")

        if terminal:
            print(f"Winner: {winner.value if winner else 'none'}")
            break

        if board.current_turn is human_side:
            user_input = input("Your move> ").strip()
            if user_input.lower() in {"quit", "exit"}:
                print("Exiting game.")
                break
            if user_input.lower() == "help":
                print("Capturing and suicide are illegal. The side left without a legal placement loses.")
                continue

            try:
                move = parse_user_move(user_input, human_side)
            except ValueError:
                print("Invalid numeric input.")
                continue
            if move is None:
                print("Invalid command format.")
                continue
            result = board.check_place(move.cell, move.color)
            if not result.is_legal:
                print(f"Illegal move for current state: {result.value}")
                continue
            board.apply_move(move)
        else:
            ai_move = ai.choose_move(board)
            if ai_move.is_null:
                print("AI has no legal move.")
                break
            board.apply_move(ai_move)
            print(f"AI move: {ai_move}")


if __name__ == "__main__":
    run_cli()
