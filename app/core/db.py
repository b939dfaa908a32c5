from typing import Optional

from app.core.config import settings
from app.db.store import JsonDocumentStore

# Хранилище открывается при первом обращении
_store: Optional[JsonDocumentStore] = None


def get_store() -> JsonDocumentStore:
    """Функция для dependency injection в FastAPI"""
    global _store
    if _store is None:
        _store = JsonDocumentStore(settings.db_file)
    return _store
