import math
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

DEFAULT_AMOUNT = 1


def coerce_amount(value: Any) -> int:
    """Приведение шага изменения счетчика к целому.

    Все, что не является целым числом (строки, bool, null, NaN, бесконечность,
    дробные значения), считается отсутствующим значением.
    """
    if isinstance(value, bool):
        return DEFAULT_AMOUNT
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return int(value)
    return DEFAULT_AMOUNT


class AmountRequest(BaseModel):
    """Схема тела запроса increment/decrement"""
    amount: int = DEFAULT_AMOUNT

    @field_validator('amount', mode='before')
    @classmethod
    def validate_amount(cls, v):
        return coerce_amount(v)


class CounterResponse(BaseModel):
    """Схема для ответа со значением счетчика"""
    value: int


class HistoryEntryResponse(BaseModel):
    """Схема для ответа с записью истории"""
    id: str
    value: int
    saved_at: str = Field(
        validation_alias=AliasChoices("savedAt", "saved_at"),
        serialization_alias="savedAt"
    )

    model_config = ConfigDict(from_attributes=True)


class ResetAllResponse(BaseModel):
    """Схема для ответа на полный сброс"""
    success: bool = True
