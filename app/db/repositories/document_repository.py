import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, TYPE_CHECKING

from pydantic import ValidationError

from app.core.exceptions import StorageFailure
from app.db.models.document import DocumentModel, HistoryEntryModel
from app.db.store import JsonDocumentStore

if TYPE_CHECKING:
    from app.domains.counter.entities import CounterDocument, HistoryEntry

logger = logging.getLogger(__name__)


class DocumentRepository:
    """Репозиторий для работы с документом счетчика"""

    def __init__(self, store: JsonDocumentStore):
        self.store = store

    async def load(self, locked: bool = False) -> "CounterDocument":
        """Загрузка актуального документа с диска"""
        raw = await self.store.load(locked=locked)
        try:
            record = DocumentModel.model_validate(raw)
        except ValidationError as e:
            logger.error(f"Document {self.store.path} has invalid shape: {e}")
            raise StorageFailure(str(self.store.path), "invalid document shape") from e
        return self._to_domain(record)

    async def save(self, document: "CounterDocument") -> "CounterDocument":
        """Сохранение документа целиком"""
        record = self._to_record(document)
        await self.store.save(record.model_dump(by_alias=True))
        return document

    @asynccontextmanager
    async def edit(self) -> AsyncIterator["CounterDocument"]:
        """Чтение, изменение и запись документа под блокировкой хранилища.

        Если тело блока завершилось исключением, документ не сохраняется.
        """
        async with self.store.lock:
            document = await self.load(locked=True)
            yield document
            await self.save(document)

    def _to_domain(self, record: DocumentModel) -> "CounterDocument":
        """Преобразование модели файла в доменную сущность"""
        from app.domains.counter.entities import CounterDocument

        return CounterDocument(
            counter=record.counter,
            history=[self._entry_to_domain(entry) for entry in record.history],
            deleted_history=[self._entry_to_domain(entry) for entry in record.deleted_history]
        )

    def _entry_to_domain(self, record: HistoryEntryModel) -> "HistoryEntry":
        from app.domains.counter.entities import HistoryEntry

        return HistoryEntry(id=record.id, value=record.value, saved_at=record.saved_at)

    def _to_record(self, document: "CounterDocument") -> DocumentModel:
        return DocumentModel(
            counter=document.counter,
            history=[self._entry_to_record(entry) for entry in document.history],
            deleted_history=[self._entry_to_record(entry) for entry in document.deleted_history]
        )

    def _entry_to_record(self, entry: "HistoryEntry") -> HistoryEntryModel:
        return HistoryEntryModel(id=entry.id, value=entry.value, saved_at=entry.saved_at)
