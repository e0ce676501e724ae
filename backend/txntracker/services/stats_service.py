"""Per-cycle spending statistics."""

from collections import OrderedDict
from datetime import date, datetime
from decimal import Decimal
from typing import Dict, List, Optional, Sequence

from txntracker.models.category import category_emoji, is_spend
from txntracker.models.transaction import Transaction
from txntracker.schemas.stats import CategoryStats, StatsResponse, TransactionSummary
from txntracker.schemas.transaction import TransactionResponse

DIVIDER = "━━━━━━━━━━━━━━━"


def pluralize(count: int) -> str:
    return "" if count == 1 else "s"


def _newest_first_key(transaction: Transaction):
    return (transaction.date, (transaction.created_at or datetime.min).replace(tzinfo=None))


def sort_newest_first(transactions: Sequence[Transaction]) -> List[Transaction]:
    """Order by date descending, ties broken by creation time descending."""
    return sorted(transactions, key=_newest_first_key, reverse=True)


def spend_total(transactions: Sequence[Transaction]) -> Decimal:
    """Sum of amounts, leaving out Income/Transfer."""
    return sum((Decimal(t.amount) for t in transactions if is_spend(t.category)), Decimal("0"))


def empty_stats(cycle: str) -> StatsResponse:
    message = (
        f"📊 Billing Cycle: {cycle}\n\n"
        "No transactions found for this cycle yet.\n\n"
        "Start logging your expenses!"
    )
    return StatsResponse(
        message=message,
        cycle=cycle,
        total=0.0,
        count=0,
        categories=[],
        last_transaction=None,
    )


def compute_stats(
    cycle: str,
    transactions: Sequence[Transaction],
    today: Optional[date] = None,
) -> StatsResponse:
    """
    Build the summary for one billing cycle.

    Totals and counts leave out Income/Transfer, while the category
    breakdown and the last transaction consider every transaction.
    A cycle without spend transactions gets the empty response.
    """
    spending = [t for t in transactions if is_spend(t.category)]
    if not spending:
        return empty_stats(cycle)

    total = spend_total(spending)
    ordered = sort_newest_first(transactions)

    groups: Dict[str, List[Transaction]] = OrderedDict()
    for t in ordered:
        groups.setdefault(t.category, []).append(t)

    categories = [
        CategoryStats(
            category=name,
            emoji=category_emoji(name),
            total=float(sum((Decimal(t.amount) for t in members), Decimal("0"))),
            count=len(members),
            transactions=[TransactionResponse.model_validate(t) for t in members],
        )
        for name, members in groups.items()
    ]
    categories.sort(key=lambda c: c.total, reverse=True)

    last = ordered[0]
    last_transaction = TransactionSummary(
        description=last.description,
        amount=float(last.amount),
        date=last.date.isoformat(),
    )

    return StatsResponse(
        message=_build_message(cycle, total, categories, last, today or date.today()),
        cycle=cycle,
        total=float(total),
        count=len(spending),
        categories=categories,
        last_transaction=last_transaction,
        all_transactions=[TransactionResponse.model_validate(t) for t in ordered],
    )


def _build_message(
    cycle: str,
    total: Decimal,
    categories: List[CategoryStats],
    last: Transaction,
    today: date,
) -> str:
    lines = [
        f"📊 Billing Cycle: {cycle} (23rd - 22nd)",
        DIVIDER,
        f"💰 Total Spent: {total:.2f} AED",
        "",
        "By Category:",
    ]
    for cat in categories:
        lines.append(
            f"{cat.emoji} {cat.category}: {cat.total:.2f} AED ({cat.count} transaction{pluralize(cat.count)})"
        )

    when = "today" if last.date == today else f"{last.date:%b} {last.date.day}"
    lines += [
        "",
        DIVIDER,
        "🕐 Last transaction:",
        f"   {last.description} - {Decimal(last.amount):.2f} AED ({when})",
    ]
    return "\n".join(lines)
