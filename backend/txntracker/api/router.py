"""
Main API router.
"""

from fastapi import APIRouter
from txntracker.api import imports, stats, transactions

api_router = APIRouter()

api_router.include_router(transactions.router)
api_router.include_router(stats.router)
api_router.include_router(imports.router)
