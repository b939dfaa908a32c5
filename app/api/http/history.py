from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from app.core.db import get_store
from app.core.exceptions import NotFound
from app.db.store import JsonDocumentStore
from app.domains.counter.schemas import HistoryEntryResponse
from app.domains.counter.services import HistoryService

router = APIRouter(prefix="/api/history", tags=["history"])


@router.post("", response_model=HistoryEntryResponse, status_code=status.HTTP_201_CREATED)
async def save_snapshot(store: JsonDocumentStore = Depends(get_store)):
    """Сохранение текущего значения счетчика в историю"""
    history_service = HistoryService(store)
    entry = await history_service.save_snapshot()
    return HistoryEntryResponse.model_validate(entry)


@router.get("", response_model=List[HistoryEntryResponse])
async def list_history(store: JsonDocumentStore = Depends(get_store)):
    """Получение всех записей истории"""
    history_service = HistoryService(store)
    entries = await history_service.list_history()
    return [HistoryEntryResponse.model_validate(entry) for entry in entries]


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def clear_history(store: JsonDocumentStore = Depends(get_store)):
    """Очистка истории (записи можно восстановить)"""
    history_service = HistoryService(store)
    await history_service.clear_history()


@router.get("/deleted", response_model=List[HistoryEntryResponse])
async def list_deleted(store: JsonDocumentStore = Depends(get_store)):
    """Получение стека удаленных записей"""
    history_service = HistoryService(store)
    entries = await history_service.list_deleted()
    return [HistoryEntryResponse.model_validate(entry) for entry in entries]


@router.post("/restore", response_model=HistoryEntryResponse)
async def restore_last(store: JsonDocumentStore = Depends(get_store)):
    """Восстановление последней удаленной записи"""
    history_service = HistoryService(store)

    try:
        entry = await history_service.restore_last()
    except NotFound as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )

    return HistoryEntryResponse.model_validate(entry)


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_entry(entry_id: str, store: JsonDocumentStore = Depends(get_store)):
    """Удаление записи истории по id"""
    history_service = HistoryService(store)
    await history_service.delete_entry(entry_id)
