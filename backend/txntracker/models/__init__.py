"""
Database models package.
"""

from txntracker.models.category import Category, category_emoji, parse_category, lookup_category, is_spend
from txntracker.models.transaction import Transaction

__all__ = [
    "Category",
    "Transaction",
    "category_emoji",
    "parse_category",
    "lookup_category",
    "is_spend",
]
