"""
Transaction database model.
"""

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import Column, Integer, String, DateTime, Date, Numeric, Text, Index, UniqueConstraint
from txntracker.database import Base

# Largest magnitude a Numeric(12, 2) column holds
MAX_AMOUNT = Decimal("9999999999.99")


def amount_fits(amount: Decimal) -> bool:
    """True when the amount is finite and fits the amount column."""
    return amount.is_finite() and abs(amount) <= MAX_AMOUNT


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Transaction(Base):
    """Transaction model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    description = Column(Text, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)  # AED, positive = expense
    date = Column("transaction_date", Date, nullable=False)
    category = Column(String(50), nullable=False)
    confidence = Column(Integer, nullable=True)
    billing_cycle = Column(String(20), nullable=False)  # Denormalized, e.g. "Jan 2026"
    created_at = Column(DateTime, default=utc_now, nullable=False)

    # Duplicate detection keys on the same triple
    __table_args__ = (
        UniqueConstraint("description", "amount", "transaction_date", name="uq_transaction_identity"),
        Index("idx_billing_cycle", "billing_cycle"),
        Index("idx_transaction_date", "transaction_date"),
        Index("idx_category", "category"),
    )

    def __repr__(self) -> str:
        return f"<Transaction {self.id} {self.date} {self.description!r} {self.amount}>"
