from app.domains.counter.entities import CounterDocument, HistoryEntry
from app.domains.counter.schemas import (
    AmountRequest, CounterResponse, HistoryEntryResponse, ResetAllResponse
)
from app.domains.counter.services import CounterService, HistoryService

__all__ = [
    "CounterDocument", "HistoryEntry",
    "AmountRequest", "CounterResponse", "HistoryEntryResponse", "ResetAllResponse",
    "CounterService", "HistoryService"
]
