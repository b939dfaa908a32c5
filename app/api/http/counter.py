from fastapi import APIRouter, Depends, Request, status

from app.core.db import get_store
from app.db.store import JsonDocumentStore
from app.domains.counter.schemas import (
    DEFAULT_AMOUNT, AmountRequest, CounterResponse, ResetAllResponse
)
from app.domains.counter.services import CounterService

router = APIRouter(prefix="/api", tags=["counter"])


async def get_amount(request: Request) -> int:
    """Шаг изменения счетчика из тела запроса.

    Тело читается без валидации: пустое, не-JSON или не-объект дает шаг по умолчанию.
    """
    try:
        payload = await request.json()
    except ValueError:
        return DEFAULT_AMOUNT
    if not isinstance(payload, dict):
        return DEFAULT_AMOUNT
    return AmountRequest.model_validate(payload).amount


@router.get("/counter", response_model=CounterResponse)
async def get_counter(store: JsonDocumentStore = Depends(get_store)):
    """Получение текущего значения счетчика"""
    counter_service = CounterService(store)
    value = await counter_service.get_counter()
    return CounterResponse(value=value)


@router.post("/counter/increment", response_model=CounterResponse)
async def increment_counter(
    amount: int = Depends(get_amount),
    store: JsonDocumentStore = Depends(get_store)
):
    """Увеличение счетчика (по умолчанию на 1)"""
    counter_service = CounterService(store)
    value = await counter_service.increment(amount)
    return CounterResponse(value=value)


@router.post("/counter/decrement", response_model=CounterResponse)
async def decrement_counter(
    amount: int = Depends(get_amount),
    store: JsonDocumentStore = Depends(get_store)
):
    """Уменьшение счетчика (по умолчанию на 1)"""
    counter_service = CounterService(store)
    value = await counter_service.decrement(amount)
    return CounterResponse(value=value)


@router.post("/counter/reset", response_model=CounterResponse)
async def reset_counter(store: JsonDocumentStore = Depends(get_store)):
    """Сброс счетчика в ноль"""
    counter_service = CounterService(store)
    value = await counter_service.reset_counter()
    return CounterResponse(value=value)


@router.post("/reset-all", response_model=ResetAllResponse, status_code=status.HTTP_200_OK)
async def reset_all(store: JsonDocumentStore = Depends(get_store)):
    """Полный сброс счетчика и всей истории (необратимо)"""
    counter_service = CounterService(store)
    await counter_service.reset_all()
    return ResetAllResponse(success=True)
