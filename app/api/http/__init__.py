from app.api.http.health import router as health_router
from app.api.http.counter import router as counter_router
from app.api.http.history import router as history_router

__all__ = [
    "health_router",
    "counter_router",
    "history_router"
]
