from typing import Annotated

from fastapi import Depends
from fastapi.requests import HTTPConnection

from .game import GameManager


def get_game_manager(connection: HTTPConnection) -> GameManager:
    """The GameManager owned by the running application."""
    manager = getattr(connection.app.state, "game_manager", None)
    if manager is None:
        raise RuntimeError("Game manager not initialized")
    return manager


GameManagerDep = Annotated[GameManager, Depends(get_game_manager)]
