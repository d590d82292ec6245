import logging

from fastapi import APIRouter, WebSocket

from ..dependencies import GameManagerDep
from .websocket_handler import WebSocketHandler

log = logging.getLogger(__name__)
router = APIRouter()


@router.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket, manager: GameManagerDep) -> None:
    """One player connection: create or join a game, then play it."""
    await websocket.accept()
    handler = WebSocketHandler(websocket, manager)

    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
            # Text and binary frames both go through the same parser
            raw = message.get("text")
            if raw is None:
                raw = message.get("bytes")
            if raw is None:
                continue
            await handler.handle(raw)
    finally:
        await handler.close()
        log.debug(f"Connection closed for {handler.username or 'anonymous'}")
