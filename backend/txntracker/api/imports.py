"""
CSV import and export endpoints.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, UploadFile, File
from fastapi.responses import Response

from txntracker.dependencies import get_store
from txntracker.exceptions import ValidationError
from txntracker.schemas.import_file import ImportResult
from txntracker.services import import_service
from txntracker.services.export_service import EXPORT_FILENAME, export_csv
from txntracker.services.transaction_store import TransactionStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["imports"])


@router.get("/export")
def export_transactions(store: TransactionStore = Depends(get_store)):
    """Download every transaction as CSV, grouped by billing cycle"""
    content = export_csv(store.list_all())
    return Response(
        content=content.encode("utf-8"),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
    )


@router.post("/import", response_model=ImportResult)
async def import_transactions(
    file: Optional[UploadFile] = File(None),
    store: TransactionStore = Depends(get_store),
):
    """Import transactions from a CSV upload"""
    if file is None:
        raise ValidationError("No file uploaded", field="file")

    content = await file.read()
    logger.info("Importing %s (%d bytes)", file.filename, len(content))
    return import_service.import_csv(store, content)
