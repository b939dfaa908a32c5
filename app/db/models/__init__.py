from app.db.models.document import DocumentModel, HistoryEntryModel

__all__ = [
    "DocumentModel",
    "HistoryEntryModel"
]
