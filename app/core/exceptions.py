class CounterServiceError(Exception):
    """Базовое исключение сервиса счетчика"""


class StorageFailure(CounterServiceError):
    """Файл хранилища недоступен для чтения/записи или поврежден"""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Storage failure for {path}: {reason}")


class NotFound(CounterServiceError):
    """Запрошенная сущность не найдена"""


class NothingToRestore(NotFound):
    """Стек удаленных записей пуст"""

    def __init__(self):
        super().__init__("No deleted history entries to restore")
