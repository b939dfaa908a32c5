import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.http.health import router as health_router
from app.api.http.counter import router as counter_router
from app.api.http.history import router as history_router
from app.core.config import settings
from app.core.exceptions import StorageFailure

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.app_title,
    description="Счетчик с историей значений и восстановлением удаленных записей",
    version=settings.app_version
)

# Настройка CORS для работы с frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StorageFailure)
async def storage_failure_handler(request: Request, exc: StorageFailure):
    """Ошибка хранилища - операция не выполнена"""
    logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Storage failure"}
    )


# Подключаем роутеры
app.include_router(health_router)
app.include_router(counter_router)
app.include_router(history_router)


@app.get("/")
async def root():
    """Корневой эндпоинт"""
    return {
        "message": settings.app_title,
        "version": settings.app_version,
        "docs": "/docs",
        "health": "/health"
    }


if __name__ == "__main__":
    import uvicorn

    logger.info(f"Server listening on port {settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
