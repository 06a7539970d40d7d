from __future__ import annotations

from collections.abc import Sequence
from enum import StrEnum


class Mark(StrEnum):
    X = "X"
    O = "O"


class Winner(StrEnum):
    X = "X"
    O = "O"
    draw = "draw"


class AIDifficulty(StrEnum):
    easy = "easy"
    optimal = "optimal"


class TicTacToeStatus(StrEnum):
    in_progress = "in_progress"
    won_x = "won_x"
    won_o = "won_o"
    draw = "draw"


Cell = Mark | None
Line = tuple[int, int, int]

BOARD_SIZE = 9
CENTER = 4
CORNERS: tuple[int, ...] = (0, 2, 6, 8)

# Enumeration order matters: the first matching line is the one reported.
WINNING_LINES: tuple[Line, ...] = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)


def empty_board() -> list[Cell]:
    return [None] * BOARD_SIZE


def opposite(mark: Mark) -> Mark:
    return Mark.O if mark == Mark.X else Mark.X


def empty_cells(board: Sequence[Cell]) -> list[int]:
    return [i for i, cell in enumerate(board) if cell is None]


def is_full(board: Sequence[Cell]) -> bool:
    return all(cell is not None for cell in board)


def is_winning(board: Sequence[Cell], mark: Mark) -> bool:
    return any(board[a] == mark and board[b] == mark and board[c] == mark for a, b, c in WINNING_LINES)


def check_winner(board: Sequence[Cell]) -> tuple[Winner | None, Line | None]:
    """Return (winner, winning_line) for a board.

    - a uniform non-empty line wins; the first one in WINNING_LINES order is reported
    - no winning line and no empty cell is a draw
    - otherwise (None, None): the game continues
    """

    for line in WINNING_LINES:
        a, b, c = (board[i] for i in line)
        if a is not None and a == b == c:
            return Winner(a), line
    if is_full(board):
        return Winner.draw, None
    return None, None
