"""
Pydantic schemas package.
"""

from txntracker.schemas.import_file import ImportResult
from txntracker.schemas.stats import (
    CategoryStats,
    TransactionSummary,
    StatsResponse,
)
from txntracker.schemas.transaction import (
    CamelModel,
    TransactionRequest,
    TransactionUpdate,
    TransactionResponse,
    TransactionListResponse,
    TransactionCreateResponse,
    MessageResponse,
)

__all__ = [
    "ImportResult",
    "CategoryStats",
    "TransactionSummary",
    "StatsResponse",
    "CamelModel",
    "TransactionRequest",
    "TransactionUpdate",
    "TransactionResponse",
    "TransactionListResponse",
    "TransactionCreateResponse",
    "MessageResponse",
]
