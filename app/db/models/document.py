from typing import List

from pydantic import BaseModel, ConfigDict, Field


class HistoryEntryModel(BaseModel):
    """Запись истории в том виде, в котором она лежит в файле"""
    id: str
    value: int
    saved_at: str = Field(alias="savedAt")

    model_config = ConfigDict(populate_by_name=True)


class DocumentModel(BaseModel):
    """Содержимое файла хранилища"""
    counter: int = 0
    history: List[HistoryEntryModel] = Field(default_factory=list)
    deleted_history: List[HistoryEntryModel] = Field(default_factory=list, alias="deletedHistory")

    model_config = ConfigDict(populate_by_name=True)
