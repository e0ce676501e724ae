"""
Stats API endpoints.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from txntracker.dependencies import get_store
from txntracker.schemas.stats import StatsResponse
from txntracker.services.billing_cycle import current_cycle
from txntracker.services.stats_service import compute_stats
from txntracker.services.transaction_store import TransactionStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["stats"])


@router.get("/stats", response_model=StatsResponse)
def get_stats(
    cycle: Optional[str] = Query(None, description='Billing cycle label, e.g. "Jan 2026"'),
    store: TransactionStore = Depends(get_store),
):
    """
    Spending statistics for a billing cycle (current cycle by default).
    Returns: cycle, total, count, categories, lastTransaction
    """
    cycle = cycle or current_cycle()
    logger.info("Fetching stats for billing cycle: %s", cycle)

    stats = compute_stats(cycle, store.list_cycle(cycle))

    logger.info("Returning stats: %d transactions, %.2f AED total", stats.count, stats.total)
    return stats
