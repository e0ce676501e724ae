"""
Transaction API endpoints.
"""

import logging
from decimal import Decimal
from typing import List

from fastapi import APIRouter, Depends

from txntracker.dependencies import get_extractor, get_store
from txntracker.exceptions import DuplicateTransactionError, ValidationError
from txntracker.models.category import category_emoji
from txntracker.models.transaction import Transaction
from txntracker.schemas.transaction import (
    MessageResponse,
    TransactionCreateResponse,
    TransactionListResponse,
    TransactionRequest,
    TransactionResponse,
    TransactionUpdate,
)
from txntracker.services.ai_service import ExtractionService
from txntracker.services.stats_service import DIVIDER, pluralize
from txntracker.services.transaction_store import TransactionStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["transactions"])


def build_summary_message(saved: List[Transaction], total: Decimal) -> str:
    """Human-readable confirmation for newly logged transactions."""
    message = f"✅ Added {len(saved)} transaction{pluralize(len(saved))}!\n\n"
    for i, t in enumerate(saved, start=1):
        message += f"{i}. {t.description}\n"
        message += f"   💰 Amount: {t.amount:.2f} AED\n"
        message += f"   📁 Category: {category_emoji(t.category)} {t.category} ({t.confidence}% confidence)\n"
        message += f"   📅 Cycle: {t.billing_cycle}\n\n"
    message += f"{DIVIDER}\n💵 Total: {total:.2f} AED"
    return message


@router.post("/transaction", response_model=TransactionCreateResponse)
async def create_transactions(
    request: TransactionRequest,
    store: TransactionStore = Depends(get_store),
    extractor: ExtractionService = Depends(get_extractor),
):
    """Extract transactions from free text and save them"""
    text = request.text.strip()
    if not text:
        raise ValidationError("Text field is required", field="text")

    logger.info("Processing transaction text: %s", text)
    extracted = await extractor.extract(text)

    if not extracted:
        logger.info("No transactions found in text")
        return TransactionCreateResponse(
            success=False,
            message="No transactions found in the provided text",
            count=0,
        )

    saved: List[Transaction] = []
    total = Decimal("0")
    for i, candidate in enumerate(extracted, start=1):
        logger.info("Processing transaction %d/%d", i, len(extracted))
        try:
            transaction = store.save(
                description=candidate.description,
                amount=candidate.amount,
                txn_date=candidate.date,
                category=candidate.category.value,
                confidence=candidate.confidence,
            )
        except DuplicateTransactionError:
            logger.info("Skipping duplicate transaction: %s", candidate.description)
            continue
        saved.append(transaction)
        total += transaction.amount

    logger.info("Saved %d/%d transaction(s), total: %.2f AED", len(saved), len(extracted), total)

    return TransactionCreateResponse(
        success=True,
        message=build_summary_message(saved, total),
        count=len(saved),
        total=float(total),
        transactions=[TransactionResponse.model_validate(t) for t in saved],
    )


@router.get("/transactions", response_model=TransactionListResponse)
def list_transactions(store: TransactionStore = Depends(get_store)):
    """List every transaction, newest first"""
    transactions = store.list_all()
    return TransactionListResponse(
        items=[TransactionResponse.model_validate(t) for t in transactions],
        total=len(transactions),
    )


@router.put("/transaction/{transaction_id}", response_model=MessageResponse)
def update_transaction(
    transaction_id: int,
    update: TransactionUpdate,
    store: TransactionStore = Depends(get_store),
):
    """Update a transaction; its billing cycle follows the new date"""
    store.update(
        transaction_id,
        description=update.description,
        amount=update.amount,
        txn_date=update.date,
        category=update.category,
    )
    return MessageResponse(success=True, message="Transaction updated successfully")


@router.delete("/transaction/{transaction_id}", response_model=MessageResponse)
def delete_transaction(
    transaction_id: int,
    store: TransactionStore = Depends(get_store),
):
    """Delete a transaction"""
    store.delete(transaction_id)
    return MessageResponse(success=True, message="Transaction deleted successfully")
