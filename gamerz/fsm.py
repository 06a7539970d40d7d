from __future__ import annotations

from typing import TYPE_CHECKING

from statemachine import State, StateMachine

from gamerz.engine.board import TicTacToeStatus, Winner

if TYPE_CHECKING:
    from gamerz.engine.tictactoe import TicTacToe


_FINISH_EVENT_BY_WINNER: dict[Winner, str] = {
    Winner.X: "x_won",
    Winner.O: "o_won",
    Winner.draw: "drawn",
}


class TicTacToeFSM(StateMachine):
    """FSM wrapper around a TicTacToe model.

    - in_progress -> won_x | won_o | draw when a move ends the game
    - any terminal state -> in_progress on undo (`reopen`)
    - any state -> in_progress on reset (`restart`)

    None of the terminal states are final: an undo always reopens the game.
    The engine mutates the board; the FSM only guards and records the lifecycle.
    """

    in_progress = State(
        TicTacToeStatus.in_progress.value,
        value=TicTacToeStatus.in_progress.value,
        initial=True,
    )
    won_x = State(TicTacToeStatus.won_x.value, value=TicTacToeStatus.won_x.value)
    won_o = State(TicTacToeStatus.won_o.value, value=TicTacToeStatus.won_o.value)
    draw = State(TicTacToeStatus.draw.value, value=TicTacToeStatus.draw.value)

    x_won = in_progress.to(won_x)
    o_won = in_progress.to(won_o)
    drawn = in_progress.to(draw)
    reopen = won_x.to(in_progress) | won_o.to(in_progress) | draw.to(in_progress)
    restart = (
        in_progress.to.itself()
        | won_x.to(in_progress)
        | won_o.to(in_progress)
        | draw.to(in_progress)
    )

    def __init__(self, game: TicTacToe):
        self.game = game
        super().__init__(start_value=game.status.value)

    @property
    def is_over(self) -> bool:
        return self.current_state != self.in_progress

    def finish(self, winner: Winner) -> None:
        self.send(_FINISH_EVENT_BY_WINNER[winner])
        self.sync_status_to_model()

    def sync_status_to_model(self) -> None:
        self.game.status = TicTacToeStatus(str(self.current_state.value))
