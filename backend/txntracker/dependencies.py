"""
FastAPI dependencies.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from txntracker.database import get_db
from txntracker.services.ai_service import ExtractionService, get_extraction_service
from txntracker.services.transaction_store import TransactionStore


def get_store(db: Session = Depends(get_db)) -> TransactionStore:
    """
    Dependency for the request-scoped transaction store.
    """
    return TransactionStore(db)


def get_extractor() -> ExtractionService:
    return get_extraction_service()
