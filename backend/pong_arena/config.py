import os


def _split(value: str):
    return [item.strip() for item in value.split(",") if item.strip()]


class Config:
    API_TITLE = os.environ.get("API_TITLE", "Arena Pong API")
    API_VERSION = "1.0.0"
    CORS_ORIGINS = _split(os.environ.get("CORS_ORIGINS", "http://localhost:3000,http://frontend:3000"))
    TICK_RATE = float(os.environ.get("TICK_RATE", "60"))
    HOST = os.environ.get("HOST", "0.0.0.0")
    PORT = int(os.environ.get("PORT", "8000"))
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "info")
