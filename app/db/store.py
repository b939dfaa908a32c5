import asyncio
import json
import logging
import os
import uuid
from typing import Any, Dict, Tuple, Union

import anyio

from app.core.exceptions import StorageFailure

logger = logging.getLogger(__name__)


def default_document() -> Dict[str, Any]:
    """Документ по умолчанию: нулевой счетчик и пустые списки"""
    return {"counter": 0, "history": [], "deletedHistory": []}


def migrate_document(raw: Dict[str, Any]) -> Tuple[Dict[str, Any], bool]:
    """Приведение сырого документа к текущей схеме.

    Возвращает документ и флаг того, что он был обновлен и его нужно сохранить.
    Старые файлы не содержат стека удаленных записей.
    """
    if "deletedHistory" in raw:
        return raw, False
    return {**raw, "deletedHistory": []}, True


class JsonDocumentStore:
    """Хранилище документа в одном JSON-файле.

    Файл всегда читается и перезаписывается целиком. Каждая запись идет в свой
    временный файл рядом с основным, который затем атомарно подменяет основной.
    """

    def __init__(self, path: Union[str, os.PathLike]):
        self.path = anyio.Path(path)
        # Удерживается на весь цикл чтение-изменение-запись
        self.lock = asyncio.Lock()

    def _new_tmp_path(self) -> anyio.Path:
        return self.path.with_name(f"{self.path.name}.{uuid.uuid4().hex}.tmp")

    async def load(self, locked: bool = False) -> Dict[str, Any]:
        """Чтение документа с диска.

        Если документа нет или его схема устарела, он записывается на диск.
        locked=True означает, что вызывающий код уже держит self.lock.
        """
        document, dirty = await self._read()
        if not dirty:
            return document
        if locked:
            await self.save(document)
            return document

        async with self.lock:
            # Файл мог быть создан или обновлен, пока ждали блокировку
            document, dirty = await self._read()
            if dirty:
                await self.save(document)
        return document

    async def _read(self) -> Tuple[Dict[str, Any], bool]:
        """Чтение и миграция без записи; второй элемент - нужно ли сохранить документ"""
        try:
            exists = await self.path.exists()
            if not exists:
                logger.info(f"Document {self.path} not found, creating default")
                return default_document(), True
            text = await self.path.read_text(encoding="utf-8")
        except OSError as e:
            logger.error(f"Failed to read {self.path}: {e}")
            raise StorageFailure(str(self.path), str(e)) from e

        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            logger.error(f"Document {self.path} is corrupt: {e}")
            raise StorageFailure(str(self.path), f"invalid JSON: {e}") from e

        if not isinstance(raw, dict):
            raise StorageFailure(str(self.path), "document root must be a JSON object")

        document, upgraded = migrate_document(raw)
        if upgraded:
            logger.info(f"Upgrading {self.path}: adding empty deletedHistory")
        return document, upgraded

    async def save(self, document: Dict[str, Any]) -> None:
        """Полная перезапись документа на диске"""
        tmp_path = self._new_tmp_path()
        try:
            await self.path.parent.mkdir(parents=True, exist_ok=True)
            await tmp_path.write_text(json.dumps(document, indent=2), encoding="utf-8")
            await tmp_path.replace(self.path)
        except OSError as e:
            logger.error(f"Failed to write {self.path}: {e}")
            await tmp_path.unlink(missing_ok=True)
            raise StorageFailure(str(self.path), str(e)) from e
        logger.debug(f"Saved {self.path}")
