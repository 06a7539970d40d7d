from __future__ import annotations

import logging

from pydantic import BaseModel, Field

from gamerz.engine.base import EngineModel
from gamerz.engine.board import (
    BOARD_SIZE,
    AIDifficulty,
    Cell,
    Line,
    Mark,
    TicTacToeStatus,
    Winner,
    check_winner,
    empty_board,
    opposite,
)
from gamerz.engine.tictactoe_ai import choose_move
from gamerz.fsm import TicTacToeFSM

logger = logging.getLogger(__name__)


class Move(BaseModel):
    pos: int
    player: Mark


def normalize_difficulty(difficulty: str | None) -> AIDifficulty:
    try:
        return AIDifficulty((difficulty or "").casefold())
    except ValueError:
        return AIDifficulty.easy


class TicTacToe(EngineModel):
    """Tic-Tac-Toe state. X always moves first; with `vs_ai` the human is X and O is the AI."""

    board: list[Cell] = Field(default_factory=empty_board, min_length=BOARD_SIZE, max_length=BOARD_SIZE)
    current_player: Mark = Mark.X
    winner: Winner | None = None
    winning_line: Line | None = None
    move_history: list[Move] = Field(default_factory=list)
    vs_ai: bool = False
    ai_difficulty: AIDifficulty = AIDifficulty.easy
    status: TicTacToeStatus = TicTacToeStatus.in_progress

    @classmethod
    def new(cls, *, vs_ai: bool = False, difficulty: str | None = None) -> TicTacToe:
        return cls(vs_ai=vs_ai, ai_difficulty=normalize_difficulty(difficulty))

    @property
    def is_over(self) -> bool:
        return self.winner is not None

    def make_move(self, pos: int) -> bool:
        """Place the current player's mark at `pos`.

        Returns False (and leaves the state untouched) for an out-of-range index,
        an occupied cell, or a finished game. In an AI game the AI answers inline.
        """

        if pos < 0 or pos >= BOARD_SIZE or self.board[pos] is not None or self.is_over:
            return False

        fsm = TicTacToeFSM(self)
        self._place(fsm, pos, self.current_player)

        if self.vs_ai and self.current_player == Mark.O and not self.is_over:
            self._ai_move(fsm)
        return True

    def _place(self, fsm: TicTacToeFSM, pos: int, mark: Mark) -> None:
        self.board[pos] = mark
        self.move_history.append(Move(pos=pos, player=mark))

        winner, line = check_winner(self.board)
        if winner is not None:
            self.winner = winner
            self.winning_line = line
            fsm.finish(winner)
        else:
            # Turns only flip while the game is still open.
            self.current_player = opposite(mark)

    def _ai_move(self, fsm: TicTacToeFSM) -> None:
        pos = choose_move(self.board, self.ai_difficulty)
        if pos is None:
            return
        logger.info("AI (%s) plays %d", self.ai_difficulty.value, pos)
        self._place(fsm, pos, Mark.O)

    def reset(self) -> None:
        fsm = TicTacToeFSM(self)
        self.board = empty_board()
        self.current_player = Mark.X
        self.winner = None
        self.winning_line = None
        self.move_history = []
        fsm.restart()
        fsm.sync_status_to_model()

    def undo(self) -> bool:
        """Take back the last move; in an AI game an AI move is undone together with the human move before it."""

        if not self.move_history:
            return False

        fsm = TicTacToeFSM(self)
        if fsm.is_over:
            fsm.reopen()
            fsm.sync_status_to_model()
        self.winner = None
        self.winning_line = None

        last = self.move_history.pop()
        self.board[last.pos] = None
        if self.vs_ai and last.player == Mark.O and self.move_history:
            prev = self.move_history.pop()
            self.board[prev.pos] = None

        self.current_player = opposite(self.move_history[-1].player) if self.move_history else Mark.X
        return True
