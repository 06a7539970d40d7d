from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from gamerz.api.models import GameKind


@dataclass(frozen=True, slots=True)
class ValidationContext:
    """Inputs available to validators.

    Keep this tight and serializable-ish so we can safely log it.
    """

    session_id: str
    kind: GameKind
    action: str


class PayloadValidator(ABC):
    """A small, composable validation unit for an incoming action payload."""

    @abstractmethod
    def validate(self, *, ctx: ValidationContext, payload: Mapping[str, Any]) -> None:
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class IntFieldValidator(PayloadValidator):
    field: str

    def validate(self, *, ctx: ValidationContext, payload: Mapping[str, Any]) -> None:
        value = payload.get(self.field)
        if value is None:
            raise ValueError(f"{self.field} is required")
        # bool is an int subclass; `true` is not a board index.
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"{self.field} must be an integer")


@dataclass(frozen=True, slots=True)
class StrFieldValidator(PayloadValidator):
    field: str
    max_length: int = 32

    def validate(self, *, ctx: ValidationContext, payload: Mapping[str, Any]) -> None:
        value = payload.get(self.field)
        if value is None:
            raise ValueError(f"{self.field} is required")
        if not isinstance(value, str):
            raise ValueError(f"{self.field} must be a string")
        if len(value) > self.max_length:
            raise ValueError(f"{self.field} must be at most {self.max_length} characters")


@dataclass(frozen=True, slots=True)
class ValidatorPipeline:
    validators: tuple[PayloadValidator, ...] = ()

    def validate(self, *, ctx: ValidationContext, payload: Mapping[str, Any]) -> None:
        for v in self.validators:
            v.validate(ctx=ctx, payload=payload)


_NO_PAYLOAD = ValidatorPipeline()

DEFAULT_ACTION_PIPELINES: dict[tuple[GameKind, str], ValidatorPipeline] = {
    (GameKind.tictactoe, "move"): ValidatorPipeline(validators=(IntFieldValidator("pos"),)),
    (GameKind.tictactoe, "undo"): _NO_PAYLOAD,
    (GameKind.tictactoe, "reset"): _NO_PAYLOAD,
    # Empty letters are accepted here; the engine treats them as a no-op guess.
    (GameKind.hangman, "guess"): ValidatorPipeline(validators=(StrFieldValidator("letter"),)),
    (GameKind.hangman, "reset"): _NO_PAYLOAD,
    (GameKind.numberguess, "guess"): ValidatorPipeline(validators=(IntFieldValidator("n"),)),
    (GameKind.numberguess, "reset"): _NO_PAYLOAD,
    (GameKind.rps, "play"): ValidatorPipeline(validators=(StrFieldValidator("move"),)),
    (GameKind.rps, "reset"): _NO_PAYLOAD,
}


def actions_for(kind: GameKind) -> list[str]:
    return [action for k, action in DEFAULT_ACTION_PIPELINES if k == kind]


def pipeline_for_action(kind: GameKind, action: str) -> ValidatorPipeline:
    pipe = DEFAULT_ACTION_PIPELINES.get((kind, action))
    if pipe is None:
        raise ValueError(f"Unknown action: {action}")
    return pipe
