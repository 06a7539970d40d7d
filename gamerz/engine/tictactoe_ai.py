from __future__ import annotations

from collections.abc import Sequence
from functools import lru_cache

from gamerz.engine.board import (
    CENTER,
    CORNERS,
    AIDifficulty,
    Cell,
    Mark,
    empty_cells,
    is_full,
    is_winning,
    opposite,
)

WIN_SCORE = 10


def _wins_if_placed(board: list[Cell], pos: int, mark: Mark) -> bool:
    if board[pos] is not None:
        return False
    board[pos] = mark
    try:
        return is_winning(board, mark)
    finally:
        board[pos] = None


def heuristic_move(board: Sequence[Cell]) -> int | None:
    """Single-ply lookahead for O.

    Priority: win now, block X, center, first free corner of CORNERS, first free cell.
    """

    scratch = list(board)

    for pos in range(len(scratch)):
        if _wins_if_placed(scratch, pos, Mark.O):
            return pos
    for pos in range(len(scratch)):
        if _wins_if_placed(scratch, pos, Mark.X):
            return pos
    if scratch[CENTER] is None:
        return CENTER
    for pos in CORNERS:
        if scratch[pos] is None:
            return pos
    free = empty_cells(scratch)
    return free[0] if free else None


@lru_cache(maxsize=None)
def minimax(board: tuple[Cell, ...], player: Mark, depth: int = 0) -> tuple[int, int | None]:
    """Exhaustive search; O maximizes, X minimizes.

    Terminal scores are depth-aware (`depth` = plies from the search root), so a
    faster win and a slower loss are preferred. Ties go to the lowest cell index.
    Returns (score, move); move is None on a terminal board.
    """

    if is_winning(board, Mark.O):
        return WIN_SCORE - depth, None
    if is_winning(board, Mark.X):
        return depth - WIN_SCORE, None
    if is_full(board):
        return 0, None

    maximizing = player == Mark.O
    # Sentinels outside the reachable score range; a non-terminal board has a free cell.
    best_score = -WIN_SCORE - 1 if maximizing else WIN_SCORE + 1
    best_move: int | None = None
    for pos in empty_cells(board):
        child = board[:pos] + (player,) + board[pos + 1 :]
        score, _ = minimax(child, opposite(player), depth + 1)
        if (score > best_score) if maximizing else (score < best_score):
            best_score, best_move = score, pos

    return best_score, best_move


def minimax_move(board: Sequence[Cell]) -> int | None:
    _, move = minimax(tuple(board), Mark.O)
    return move


def choose_move(board: Sequence[Cell], difficulty: AIDifficulty) -> int | None:
    if difficulty == AIDifficulty.optimal:
        return minimax_move(board)
    return heuristic_move(board)
