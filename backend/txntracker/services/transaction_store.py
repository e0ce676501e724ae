"""
Transaction store: CRUD and cycle queries over the transactions table.
"""

import logging
import threading
from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from txntracker.exceptions import DuplicateTransactionError, NotFoundError, StorageError, ValidationError
from txntracker.models.category import parse_category
from txntracker.models.transaction import Transaction, amount_fits, utc_now
from txntracker.services.billing_cycle import cycle_for

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")

# SQLite only supports one writer at a time
_write_lock = threading.Lock()


def quantize_amount(amount) -> Decimal:
    """Round an amount to fils (2 decimal places)."""
    try:
        if not isinstance(amount, Decimal):
            amount = Decimal(str(amount))
        if amount_fits(amount):
            return amount.quantize(CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        pass
    raise ValidationError("Amount is not a storable AED value", amount=str(amount))


class TransactionStore:
    """Persistence boundary for transactions."""

    def __init__(self, db: Session):
        self.db = db

    def _ordered(self):
        return self.db.query(Transaction).order_by(
            Transaction.date.desc(),
            Transaction.created_at.desc(),
            Transaction.id.desc(),
        )

    def get(self, transaction_id: int) -> Transaction:
        transaction = self.db.query(Transaction).filter(Transaction.id == transaction_id).first()
        if transaction is None:
            raise NotFoundError("Transaction not found", transaction_id=transaction_id)
        return transaction

    def list_all(self) -> List[Transaction]:
        """Every transaction, newest first."""
        return self._ordered().all()

    def list_cycle(self, billing_cycle: str) -> List[Transaction]:
        return self._ordered().filter(Transaction.billing_cycle == billing_cycle).all()

    def count(self) -> int:
        return self.db.query(Transaction).count()

    def exists(self, description: str, amount: Decimal, txn_date: date) -> bool:
        """True when a transaction with the same identity triple is stored."""
        return self.db.query(Transaction.id).filter(
            Transaction.description == description,
            Transaction.amount == quantize_amount(amount),
            Transaction.date == txn_date,
        ).first() is not None

    def save(
        self,
        description: str,
        amount: Decimal,
        txn_date: date,
        category: str,
        confidence: Optional[int] = None,
        created_at: Optional[datetime] = None,
        billing_cycle: Optional[str] = None,
    ) -> Transaction:
        """Insert a transaction; the billing cycle is derived from the date unless given."""
        transaction = Transaction(
            description=description,
            amount=quantize_amount(amount),
            date=txn_date,
            category=parse_category(category).value,
            confidence=confidence,
            billing_cycle=billing_cycle or cycle_for(txn_date),
            created_at=created_at or utc_now(),
        )
        logger.info("Saving transaction: %s (%s AED)", description, transaction.amount)

        with _write_lock:
            self.db.add(transaction)
            self._commit("save", description=description, date=str(txn_date))

        self.db.refresh(transaction)
        logger.info("Transaction saved successfully with ID %d", transaction.id)
        return transaction

    def update(
        self,
        transaction_id: int,
        description: str,
        amount: Decimal,
        txn_date: date,
        category: str,
    ) -> Transaction:
        """Replace the editable fields and recompute the billing cycle."""
        logger.info("Updating transaction ID %d: %s (%s AED)", transaction_id, description, amount)
        amount = quantize_amount(amount)

        with _write_lock:
            transaction = self.get(transaction_id)
            transaction.description = description
            transaction.amount = amount
            transaction.date = txn_date
            transaction.category = parse_category(category).value
            transaction.billing_cycle = cycle_for(txn_date)
            self._commit("update", transaction_id=transaction_id)

        self.db.refresh(transaction)
        logger.info("Transaction %d updated successfully", transaction_id)
        return transaction

    def delete(self, transaction_id: int) -> None:
        logger.info("Deleting transaction ID %d", transaction_id)

        with _write_lock:
            transaction = self.get(transaction_id)
            self.db.delete(transaction)
            self._commit("delete", transaction_id=transaction_id)

        logger.info("Transaction %d deleted successfully", transaction_id)

    def _commit(self, operation: str, **context) -> None:
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            if not _is_identity_conflict(e):
                logger.error("Failed to %s transaction: %s", operation, e)
                raise StorageError(f"Failed to {operation} transaction", operation=operation, **context) from e
            logger.warning("Duplicate transaction on %s: %s", operation, context)
            raise DuplicateTransactionError(
                "A transaction with the same description, amount and date already exists",
                operation=operation,
                **context,
            ) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Failed to %s transaction: %s", operation, e)
            raise StorageError(f"Failed to {operation} transaction", operation=operation, **context) from e


def _is_identity_conflict(error: IntegrityError) -> bool:
    """True when the failure is the unique (description, amount, date) constraint."""
    message = str(error.orig)
    if "uq_transaction_identity" in message:
        return True
    # SQLite names the columns instead of the constraint
    return "UNIQUE" in message.upper() and "transaction_date" in message
