"""
Import service for CSV uploads.
"""

import logging

from txntracker.exceptions import DuplicateTransactionError, ValidationError
from txntracker.parsers.csv_parser import CSVParser
from txntracker.schemas.import_file import ImportResult
from txntracker.services.transaction_store import TransactionStore

logger = logging.getLogger(__name__)

# Imported rows count as manual, trusted entries
IMPORT_CONFIDENCE = 100


def import_csv(store: TransactionStore, content: bytes) -> ImportResult:
    """
    Parse CSV content and insert every new transaction.

    Rows are committed one at a time, so a storage failure part way through
    keeps the rows imported before it.
    """
    if not content or not content.strip():
        raise ValidationError("Uploaded file is empty")

    parser = CSVParser()
    rows, errors = parser.parse(content)

    result = ImportResult(errors=errors)
    for row in rows:
        if store.exists(row.description, row.amount, row.date):
            logger.info("Row %d is a duplicate: %s (%s AED, %s)", row.row_number, row.description, row.amount, row.date)
            result.duplicates += 1
            continue

        try:
            store.save(
                description=row.description,
                amount=row.amount,
                txn_date=row.date,
                category=row.category,
                confidence=IMPORT_CONFIDENCE,
            )
        except DuplicateTransactionError:
            result.duplicates += 1
            continue
        result.imported += 1

    logger.info(
        "Import finished: %d imported, %d duplicate(s), %d error(s)",
        result.imported, result.duplicates, len(result.errors),
    )
    return result
