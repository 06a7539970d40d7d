from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel


class EngineModel(BaseModel):
    """Base for per-session game state.

    The full model (hidden fields included) is what the session store persists.
    Callers outside the engine should only ever see `snapshot()`.
    """

    hidden_fields: ClassVar[frozenset[str]] = frozenset()

    def snapshot(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude=set(self.hidden_fields))
