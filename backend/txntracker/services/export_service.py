"""
CSV export of all transactions grouped by billing cycle.
"""

import csv
import io
import logging
from decimal import Decimal
from typing import Dict, List, Sequence

from txntracker.models.transaction import Transaction
from txntracker.services.billing_cycle import cycle_for, cycle_sort_key
from txntracker.services.stats_service import sort_newest_first, spend_total

logger = logging.getLogger(__name__)

HEADER = ["Date", "Description", "Amount (AED)", "Category"]
SUBTOTAL_LABEL = "Subtotal"
GRAND_TOTAL_LABEL = "Grand Total"
EXPORT_FILENAME = "transactions.csv"


def format_amount(amount) -> str:
    return f"{Decimal(amount):.2f}"


def cycle_header(label: str) -> str:
    return f"--- {label} ---"


def group_by_cycle(transactions: Sequence[Transaction]) -> List[tuple]:
    """(cycle, transactions) pairs, most recent cycle first, rows newest first."""
    groups: Dict[str, List[Transaction]] = {}
    for t in transactions:
        groups.setdefault(t.billing_cycle or cycle_for(t.date), []).append(t)

    ordered = sorted(groups.items(), key=lambda item: cycle_sort_key(item[0]), reverse=True)
    return [(cycle, sort_newest_first(members)) for cycle, members in ordered]


def export_csv(transactions: Sequence[Transaction]) -> str:
    """
    Render transactions as CSV.

    Each cycle section is a ``--- <cycle> ---`` header row, the cycle's
    transactions, a Subtotal row and a blank separator row. A Grand Total
    row closes the file. Subtotals and the grand total leave out
    Income/Transfer.
    """
    output = io.StringIO()
    writer = csv.writer(output, lineterminator="\n")
    writer.writerow(HEADER)

    grand_total = Decimal("0")
    sections = group_by_cycle(transactions)
    for cycle, members in sections:
        writer.writerow([cycle_header(cycle), "", "", ""])
        for t in members:
            writer.writerow([t.date.isoformat(), t.description, format_amount(t.amount), t.category])

        subtotal = spend_total(members)
        grand_total += subtotal
        writer.writerow(["", SUBTOTAL_LABEL, format_amount(subtotal), ""])
        writer.writerow(["", "", "", ""])

    writer.writerow(["", GRAND_TOTAL_LABEL, format_amount(grand_total), ""])

    logger.info("Exported %d transaction(s) across %d cycle(s)", len(transactions), len(sections))
    return output.getvalue()
