from __future__ import annotations

import random
from typing import Any
from uuid import UUID

import redis
from fastapi import APIRouter, Body, Depends, HTTPException, Response, status

from gamerz.actions import ActionRejectedError, dispatch_action
from gamerz.api.deps import get_redis, get_rng
from gamerz.api.models import (
    GAME_DISPLAY_NAMES,
    GameKind,
    GameListEntry,
    GameListResponse,
    NewGameRequest,
    SessionResponse,
)
from gamerz.lock import SessionBusyError
from gamerz.session_store import SessionNotFoundError, create_session, delete_session, get_session
from gamerz.validators import actions_for

router = APIRouter()


@router.get("/healthcheck")
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/games/list", response_model=GameListResponse)
async def list_game_kinds_route() -> GameListResponse:
    return GameListResponse(
        games=[GameListEntry(id=k, name=name, actions=actions_for(k)) for k, name in GAME_DISPLAY_NAMES.items()]
    )


@router.post("/games/{kind}/new", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
def create_session_route(
    kind: GameKind,
    payload: NewGameRequest | None = None,
    r: redis.Redis = Depends(get_redis),
    rng: random.Random = Depends(get_rng),
) -> SessionResponse:
    # The body is optional: a bare POST starts a game with default options.
    session_id, game = create_session(r=r, kind=kind, options=payload or NewGameRequest(), rng=rng)
    return SessionResponse(session_id=session_id, kind=kind, state=game.snapshot())


@router.get("/games/{kind}/{session_id}", response_model=SessionResponse)
def get_session_route(kind: GameKind, session_id: UUID, r: redis.Redis = Depends(get_redis)) -> SessionResponse:
    game = get_session(r=r, kind=kind, session_id=session_id)
    if game is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session not found")
    return SessionResponse(session_id=session_id, kind=kind, state=game.snapshot())


@router.delete("/games/{kind}/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_session_route(kind: GameKind, session_id: UUID, r: redis.Redis = Depends(get_redis)) -> Response:
    if not delete_session(r=r, kind=kind, session_id=session_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/games/{kind}/{session_id}/{action}", response_model=SessionResponse)
def action_route(
    kind: GameKind,
    session_id: UUID,
    action: str,
    body: dict[str, Any] | None = Body(default=None),
    r: redis.Redis = Depends(get_redis),
    rng: random.Random = Depends(get_rng),
) -> SessionResponse:
    try:
        result = dispatch_action(r=r, kind=kind, session_id=session_id, action=action, payload=body or {}, rng=rng)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except SessionBusyError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    except ActionRejectedError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except ValueError as e:
        # Literal 422: the Starlette constant name changed across releases.
        raise HTTPException(status_code=422, detail=str(e)) from e

    return SessionResponse(session_id=session_id, kind=kind, applied=result.applied, state=result.game.snapshot())
