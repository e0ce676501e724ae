"""
Stats schemas.
"""

from pydantic import Field
from typing import List, Optional

from txntracker.schemas.transaction import CamelModel, TransactionResponse


class CategoryStats(CamelModel):
    category: str
    emoji: str
    total: float
    count: int
    transactions: List[TransactionResponse] = []


class TransactionSummary(CamelModel):
    description: str
    amount: float
    date: str


class StatsResponse(CamelModel):
    success: bool = True
    message: str
    cycle: str
    total: float
    count: int
    categories: List[CategoryStats] = Field(default_factory=list)
    last_transaction: Optional[TransactionSummary] = None
    all_transactions: List[TransactionResponse] = Field(default_factory=list)
