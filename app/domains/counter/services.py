import logging
from typing import List

from app.db.repositories.document_repository import DocumentRepository
from app.db.store import JsonDocumentStore
from app.domains.counter.entities import HistoryEntry
from app.domains.counter.schemas import DEFAULT_AMOUNT

logger = logging.getLogger(__name__)


class CounterService:
    """Сервис для работы со счетчиком"""

    def __init__(self, store: JsonDocumentStore):
        self.store = store
        self.document_repository = DocumentRepository(store)

    async def get_counter(self) -> int:
        """Получение текущего значения счетчика"""
        document = await self.document_repository.load()
        return document.counter

    async def increment(self, amount: int = DEFAULT_AMOUNT) -> int:
        """Увеличение счетчика на amount"""
        async with self.document_repository.edit() as document:
            value = document.increment(amount)
        logger.info(f"Counter incremented by {amount} to {value}")
        return value

    async def decrement(self, amount: int = DEFAULT_AMOUNT) -> int:
        """Уменьшение счетчика на amount"""
        async with self.document_repository.edit() as document:
            value = document.decrement(amount)
        logger.info(f"Counter decremented by {amount} to {value}")
        return value

    async def reset_counter(self) -> int:
        """Сброс счетчика в ноль, история не затрагивается"""
        async with self.document_repository.edit() as document:
            value = document.reset_counter()
        logger.info("Counter reset")
        return value

    async def reset_all(self) -> None:
        """Сброс счетчика, истории и стека удаленных записей"""
        async with self.document_repository.edit() as document:
            document.reset_all()
        logger.warning("Counter, history and deleted history wiped")


class HistoryService:
    """Сервис для работы с историей значений"""

    def __init__(self, store: JsonDocumentStore):
        self.store = store
        self.document_repository = DocumentRepository(store)

    async def save_snapshot(self) -> HistoryEntry:
        """Сохранение текущего значения счетчика"""
        async with self.document_repository.edit() as document:
            entry = document.save_snapshot()
        logger.info(f"Saved history entry {entry.id} with value {entry.value}")
        return entry

    async def list_history(self) -> List[HistoryEntry]:
        document = await self.document_repository.load()
        return document.history

    async def list_deleted(self) -> List[HistoryEntry]:
        document = await self.document_repository.load()
        return document.deleted_history

    async def delete_entry(self, entry_id: str) -> None:
        """Мягкое удаление записи; неизвестный id игнорируется"""
        async with self.document_repository.edit() as document:
            entry = document.delete_entry(entry_id)
        if entry is None:
            logger.debug(f"History entry {entry_id} not found, nothing to delete")
        else:
            logger.info(f"History entry {entry_id} moved to deleted history")

    async def clear_history(self) -> None:
        """Перенос всей истории в стек удаленных"""
        async with self.document_repository.edit() as document:
            moved = document.clear_history()
        logger.info(f"Moved {len(moved)} history entries to deleted history")

    async def restore_last(self) -> HistoryEntry:
        """Восстановление последней удаленной записи.

        Raises:
            NothingToRestore: стек удаленных записей пуст
        """
        async with self.document_repository.edit() as document:
            entry = document.restore_last()
        logger.info(f"Restored history entry {entry.id}")
        return entry
