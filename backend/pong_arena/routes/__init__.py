from fastapi import FastAPI

from .core import router as core_router
from .lobby import router as lobby_router


def register_routes(app: FastAPI) -> None:
    app.include_router(core_router)
    app.include_router(lobby_router, prefix="/api/lobby")
