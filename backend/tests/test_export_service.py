"""Tests for the CSV exporter."""

import csv
import io

from txntracker.services.export_service import export_csv


def parse(content):
    return list(csv.reader(io.StringIO(content)))


class TestExportLayout:
    """Test the cycle-grouped CSV layout."""

    def test_empty(self):
        """No transactions: header and a zero grand total only."""
        rows = parse(export_csv([]))
        assert rows == [
            ["Date", "Description", "Amount (AED)", "Category"],
            ["", "Grand Total", "0.00", ""],
        ]

    def test_full_layout(self, store, sample_transactions):
        rows = parse(export_csv(store.list_all()))
        assert rows == [
            ["Date", "Description", "Amount (AED)", "Category"],
            ["--- Feb 2026 ---", "", "", ""],
            ["2026-03-05", "Carrefour Grocery", "145.50", "Food & Dining"],
            ["2026-02-25", "Uber Ride", "35.00", "Transport"],
            ["", "Subtotal", "180.50", ""],
            ["", "", "", ""],
            ["--- Jan 2026 ---", "", "", ""],
            ["2026-02-01", "Salary", "10000.00", "Income/Transfer"],
            ["2026-01-30", "Netflix", "54.99", "Entertainment"],
            ["", "Subtotal", "54.99", ""],
            ["", "", "", ""],
            ["", "Grand Total", "235.49", ""],
        ]

    def test_cycles_ordered_chronologically(self, store, add_transaction):
        """Dec 2025 sorts before Nov 2025 even though 'Nov' > 'Dec' alphabetically."""
        add_transaction("Old", "10", "2025-11-25", "Shopping")
        add_transaction("Newer", "20", "2025-12-25", "Shopping")
        add_transaction("Newest", "30", "2026-01-25", "Shopping")
        headers = [row[0] for row in parse(export_csv(store.list_all())) if row[0].startswith("---")]
        assert headers == ["--- Jan 2026 ---", "--- Dec 2025 ---", "--- Nov 2025 ---"]

    def test_stored_cycle_labels_group_rows(self, store, add_transaction):
        """Rows are grouped by their stored cycle label."""
        add_transaction("Carrefour Grocery", "145.50", "2026-02-20", "Food & Dining", billing_cycle="Feb 2026")
        add_transaction("Uber Ride", "35.00", "2026-02-18", "Transport", billing_cycle="Feb 2026")
        add_transaction("Salary", "10000", "2026-02-01", "Income/Transfer", billing_cycle="Jan 2026")
        add_transaction("Netflix", "54.99", "2026-01-30", "Entertainment", billing_cycle="Jan 2026")

        rows = parse(export_csv(store.list_all()))
        assert rows[1][0] == "--- Feb 2026 ---"
        subtotals = [row[2] for row in rows if row[1] == "Subtotal"]
        assert subtotals == ["180.50", "54.99"]
        assert rows[-1] == ["", "Grand Total", "235.49", ""]

    def test_quotes_embedded_commas(self, store, add_transaction):
        add_transaction('Lulu, "Hypermarket"', "99.9", "2026-01-25", "Shopping")
        content = export_csv(store.list_all())
        assert '"Lulu, ""Hypermarket"""' in content
        assert parse(content)[2] == ["2026-01-25", 'Lulu, "Hypermarket"', "99.90", "Shopping"]

    def test_negative_amounts(self, store, add_transaction):
        """Refunds logged under spend categories reduce the subtotal."""
        add_transaction("Shoes", "200", "2026-01-25", "Shopping")
        add_transaction("Shoes refund", "-50", "2026-01-26", "Shopping")
        rows = parse(export_csv(store.list_all()))
        assert ["2026-01-26", "Shoes refund", "-50.00", "Shopping"] in rows
        assert ["", "Subtotal", "150.00", ""] in rows
