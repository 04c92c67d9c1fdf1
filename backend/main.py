import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from pong_arena.config import Config
from pong_arena.routes import register_routes
from pong_arena.services import GameManager, LobbyError, LobbyManager, SessionManager
from pong_arena.sockets import register_sockets

logger = logging.getLogger("lobby")


def create_app(config_class=Config) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await app.state.lobby_manager.shutdown()

    app = FastAPI(title=config_class.API_TITLE, version=config_class.API_VERSION, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config_class.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(LobbyError)
    async def lobby_error_handler(request: Request, exc: LobbyError) -> JSONResponse:
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    register_routes(app)
    register_sockets(app)

    app.state.lobby_manager = LobbyManager()
    app.state.game_manager = GameManager(app.state.lobby_manager, tick_rate=config_class.TICK_RATE)
    app.state.session_manager = SessionManager(app.state.lobby_manager, app.state.game_manager)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=Config.LOG_LEVEL.upper())
    uvicorn.run("main:app", host=Config.HOST, port=Config.PORT, log_level=Config.LOG_LEVEL, reload=True)
