from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/")
async def root():
    return {"message": "Welcome to Arena Pong API"}


@router.get("/health")
async def health_check(request: Request):
    lobbies = await request.app.state.lobby_manager.count()
    return {"status": "healthy", "lobbies": lobbies}
