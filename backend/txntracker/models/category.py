"""
Transaction category enumeration.
"""

import enum
from typing import Optional


FALLBACK_EMOJI = "📌"


class Category(str, enum.Enum):
    """Closed set of categories a transaction can belong to."""
    FOOD = "Food & Dining"
    TRANSPORT = "Transport"
    SHOPPING = "Shopping"
    BILLS = "Bills & Utilities"
    ENTERTAINMENT = "Entertainment"
    HEALTH = "Health & Fitness"
    TRAVEL = "Travel"
    CASH = "Cash Withdrawal"
    INCOME = "Income/Transfer"
    UNKNOWN = "Unknown"

    @property
    def emoji(self) -> str:
        return _EMOJIS[self]


_EMOJIS = {
    Category.FOOD: "🍔",
    Category.TRANSPORT: "🚗",
    Category.SHOPPING: "🛍️",
    Category.BILLS: "💳",
    Category.ENTERTAINMENT: "🎬",
    Category.HEALTH: "💪",
    Category.TRAVEL: "✈️",
    Category.CASH: "💵",
    Category.INCOME: "💰",
    Category.UNKNOWN: "❓",
}


def lookup_category(label: Optional[str]) -> Optional[Category]:
    """Return the category for an exact label, or None."""
    if label is None:
        return None
    try:
        return Category(label.strip())
    except ValueError:
        return None


def parse_category(label: Optional[str]) -> Category:
    """Map a label onto the enumeration, falling back to Unknown."""
    return lookup_category(label) or Category.UNKNOWN


def category_emoji(label: Optional[str]) -> str:
    """Emoji for a category label; unrecognized labels get the fallback glyph."""
    category = lookup_category(label)
    if category is None:
        return FALLBACK_EMOJI
    return category.emoji


def is_spend(label: Optional[str]) -> bool:
    """Income/Transfer is the only category left out of spend totals."""
    return label != Category.INCOME.value
