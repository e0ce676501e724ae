"""
Transaction schemas.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import List, Optional
from datetime import date, datetime
from decimal import Decimal

from txntracker.models.transaction import amount_fits


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class TransactionRequest(BaseModel):
    text: str


class TransactionUpdate(CamelModel):
    description: str = Field(..., min_length=1)
    amount: Decimal
    date: date
    category: str

    @field_validator("description", "category")
    @classmethod
    def strip_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("amount")
    @classmethod
    def storable_amount(cls, value: Decimal) -> Decimal:
        if not amount_fits(value):
            raise ValueError("amount must be a finite number below 10 billion")
        return value


class TransactionResponse(CamelModel):
    id: int
    date: date
    description: str
    amount: float
    category: str
    confidence: Optional[int]
    billing_cycle: str
    created_at: datetime


class TransactionListResponse(CamelModel):
    items: List[TransactionResponse]
    total: int


class TransactionCreateResponse(CamelModel):
    success: bool
    message: str
    count: int
    total: float = 0.0
    transactions: List[TransactionResponse] = []


class MessageResponse(CamelModel):
    success: bool
    message: str
