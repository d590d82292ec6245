import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from .config import Settings
from .game import GameManager
from .middleware import add_cors_middleware, add_logging_middleware
from .routers import games_router, websocket_router

log = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.game_manager = GameManager(settings)
        log.info("Game manager started")
        yield
        await app.state.game_manager.shutdown()
        log.info("shutting down")

    app = FastAPI(title="guessgame", lifespan=lifespan)
    app.add_middleware(add_cors_middleware, allow_origins=settings.cors_origins)
    app.add_middleware(add_logging_middleware)

    app.include_router(games_router)
    app.include_router(websocket_router)

    # Browser client, served last so API routes take precedence
    if settings.static_dir:
        static_dir = Path(settings.static_dir)
        if static_dir.is_dir():
            app.mount("/", StaticFiles(directory=str(static_dir), html=True), name="static")
        else:
            log.warning(f"Static directory {static_dir} not found, not serving a client")

    return app
