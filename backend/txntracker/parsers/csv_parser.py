"""
CSV file parser.
"""

import csv
import io
import re
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import List, Optional, Tuple

from txntracker.exceptions import ValidationError
from txntracker.models.transaction import amount_fits

DATE_COL, DESCRIPTION_COL, AMOUNT_COL, CATEGORY_COL = range(4)

CYCLE_HEADER_RE = re.compile(r"^---\s*.+?\s*---$")
SUMMARY_LABELS = {"Subtotal", "Grand Total"}


@dataclass
class ParsedRow:
    row_number: int
    date: date
    description: str
    amount: Decimal
    category: str


class CSVParser:
    """
    Parser for transaction CSVs.

    Accepts a plain ``date, description, amount, category`` table as well as
    the exporter's own layout, whose cycle headers, subtotals, grand total
    and blank separators are skipped.
    """

    def parse(self, content: bytes) -> Tuple[List[ParsedRow], List[str]]:
        """Return (rows, errors). Row numbers count the header as row 1."""
        try:
            text = content.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise ValidationError("File is not valid UTF-8 text") from e

        reader = csv.reader(io.StringIO(text))
        rows: List[ParsedRow] = []
        errors: List[str] = []

        try:
            for row_number, raw in enumerate(reader, start=1):
                cells = self._normalize(raw)
                if row_number == 1 and self._is_header(cells):
                    continue
                if self._is_formatting_row(cells):
                    continue

                parsed, error = self._parse_row(row_number, cells)
                if error:
                    errors.append(error)
                elif parsed:
                    rows.append(parsed)
        except csv.Error as e:
            raise ValidationError(f"Malformed CSV: {e}") from e

        return rows, errors

    def _normalize(self, row: List[str]) -> List[str]:
        cells = [cell.strip() for cell in row]
        return cells + [""] * (4 - len(cells))

    def _is_header(self, cells: List[str]) -> bool:
        return cells[DATE_COL].lower() == "date" or cells[DESCRIPTION_COL].lower() == "description"

    def _is_formatting_row(self, cells: List[str]) -> bool:
        """Blank separators, cycle headers, subtotal and grand total rows."""
        if all(cell == "" for cell in cells):
            return True
        if CYCLE_HEADER_RE.match(cells[DATE_COL]):
            return True
        return cells[DESCRIPTION_COL] in SUMMARY_LABELS

    def _parse_row(self, row_number: int, cells: List[str]) -> Tuple[Optional[ParsedRow], Optional[str]]:
        description = cells[DESCRIPTION_COL]
        amount_str = cells[AMOUNT_COL]
        category = cells[CATEGORY_COL]

        # Rows missing any of these are not transactions
        if not (description and amount_str and category):
            return None, None

        amount = self._clean_amount(amount_str)
        if amount is None:
            return None, f"row {row_number}: invalid amount '{amount_str}'"

        txn_date = self._parse_date(cells[DATE_COL])
        if txn_date is None:
            return None, f"row {row_number}: invalid date '{cells[DATE_COL]}'"

        return ParsedRow(
            row_number=row_number,
            date=txn_date,
            description=description,
            amount=amount,
            category=category,
        ), None

    def _parse_date(self, date_str: str) -> Optional[date]:
        try:
            return datetime.strptime(date_str, "%Y-%m-%d").date()
        except ValueError:
            return None

    def _clean_amount(self, amount_str: str) -> Optional[Decimal]:
        """Clean and parse amount string"""
        if not amount_str or not amount_str.strip():
            return None

        amount_str = amount_str.strip()

        if amount_str.startswith('(') and amount_str.endswith(')'):
            amount_str = '-' + amount_str[1:-1]

        amount_str = re.sub(r'[$,]|^AED\s*', '', amount_str, flags=re.IGNORECASE)

        try:
            amount = Decimal(amount_str.strip())
        except InvalidOperation:
            return None
        if not amount_fits(amount):
            return None
        return amount
