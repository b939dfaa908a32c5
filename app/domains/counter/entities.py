import uuid
from datetime import datetime, timezone
from typing import Optional, List

from app.core.exceptions import NothingToRestore


def _now_iso() -> str:
    """Текущее время UTC в формате 2024-01-01T00:00:00.000Z"""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class HistoryEntry:
    """Снимок значения счетчика"""

    def __init__(self, id: str, value: int, saved_at: str):
        self.id = id
        self.value = value
        self.saved_at = saved_at

    @classmethod
    def create_entry(cls, value: int) -> "HistoryEntry":
        """Создание новой записи истории"""
        return cls(
            id=str(uuid.uuid4()),
            value=value,
            saved_at=_now_iso()
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, HistoryEntry):
            return False
        return (self.id, self.value, self.saved_at) == (other.id, other.value, other.saved_at)

    def __repr__(self) -> str:
        return f"HistoryEntry(id={self.id}, value={self.value}, saved_at={self.saved_at})"


class CounterDocument:
    """Сущность документа: счетчик, активная история и стек удаленных записей.

    Каждая запись находится ровно в одном из двух списков. Последний элемент
    deleted_history - последняя удаленная запись (вершина стека).
    """

    def __init__(
        self,
        counter: int = 0,
        history: Optional[List[HistoryEntry]] = None,
        deleted_history: Optional[List[HistoryEntry]] = None
    ):
        self.counter = counter
        self.history = history if history is not None else []
        self.deleted_history = deleted_history if deleted_history is not None else []

    def increment(self, amount: int = 1) -> int:
        self.counter += amount
        return self.counter

    def decrement(self, amount: int = 1) -> int:
        self.counter -= amount
        return self.counter

    def reset_counter(self) -> int:
        self.counter = 0
        return self.counter

    def save_snapshot(self) -> HistoryEntry:
        """Сохранение текущего значения счетчика в историю"""
        entry = HistoryEntry.create_entry(self.counter)
        self.history.append(entry)
        return entry

    def find_entry(self, entry_id: str) -> Optional[HistoryEntry]:
        for entry in self.history:
            if entry.id == entry_id:
                return entry
        return None

    def delete_entry(self, entry_id: str) -> Optional[HistoryEntry]:
        """Мягкое удаление: запись переносится на вершину стека удаленных"""
        entry = self.find_entry(entry_id)
        if entry is None:
            return None
        self.history.remove(entry)
        self.deleted_history.append(entry)
        return entry

    def clear_history(self) -> List[HistoryEntry]:
        """Перенос всей истории в стек удаленных одним блоком"""
        moved = self.history
        self.deleted_history.extend(moved)
        self.history = []
        return moved

    def restore_last(self) -> HistoryEntry:
        """Восстановление последней удаленной записи"""
        if not self.deleted_history:
            raise NothingToRestore()
        entry = self.deleted_history.pop()
        self.history.append(entry)
        return entry

    def reset_all(self) -> None:
        """Полный сброс без возможности восстановления"""
        self.counter = 0
        self.history = []
        self.deleted_history = []

    def __repr__(self) -> str:
        return (
            f"CounterDocument(counter={self.counter}, history={len(self.history)}, "
            f"deleted_history={len(self.deleted_history)})"
        )
