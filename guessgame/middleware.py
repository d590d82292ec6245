import logging

from starlette.middleware.cors import CORSMiddleware

log = logging.getLogger(__name__)


def add_cors_middleware(app, allow_origins: list[str]):
    return CORSMiddleware(
        app=app,
        allow_origins=allow_origins,
        allow_credentials="*" not in allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def add_logging_middleware(app):
    async def middleware(scope, receive, send):
        if scope["type"] in ("http", "websocket"):
            log.debug(f"{scope['type'].capitalize()} request: {scope['path']}")
        await app(scope, receive, send)

    return middleware
