from fastapi import APIRouter, HTTPException

from ..dependencies import GameManagerDep
from ..errors import SessionNotFound
from ..models import GameSummary

router = APIRouter()


@router.get("/info")
async def root(manager: GameManagerDep):
    return {"name": "guessgame", "games": len(manager.registry)}


@router.get("/games/{code}", response_model=GameSummary)
async def get_game(code: str, manager: GameManagerDep):
    try:
        room = manager.registry.lookup(code)
    except SessionNotFound:
        raise HTTPException(status_code=404, detail="Game not found")
    return room.session.summary()
