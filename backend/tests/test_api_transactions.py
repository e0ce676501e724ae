"""Tests for transactions API endpoints."""

import pytest
from datetime import date
from decimal import Decimal


class TestCreateTransaction:
    """Test logging transactions from free text."""

    def test_create(self, client, extractor, extracted):
        """Extracted transactions are saved and summarized."""
        extractor.results = [
            extracted("Starbucks Dubai Mall", "25.50", "2026-01-25", confidence=95),
            extracted("Careem Ride", "35.00", "2026-01-25", category="Transport", confidence=98),
        ]
        response = client.post("/transaction", json={"text": "two SMS messages"})
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["count"] == 2
        assert data["total"] == pytest.approx(60.5)
        assert data["transactions"][0]["billingCycle"] == "Jan 2026"
        assert data["transactions"][0]["confidence"] == 95
        assert "createdAt" in data["transactions"][0]
        assert "✅ Added 2 transactions!" in data["message"]
        assert "📁 Category: 🚗 Transport (98% confidence)" in data["message"]
        assert data["message"].endswith("💵 Total: 60.50 AED")
        assert extractor.calls == ["two SMS messages"]

        listed = client.get("/transactions").json()
        assert listed["total"] == 2

    def test_nothing_extracted(self, client, extractor):
        response = client.post("/transaction", json={"text": "hello there"})
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is False
        assert data["count"] == 0
        assert data["message"] == "No transactions found in the provided text"

    def test_duplicate_skipped(self, client, extractor, extracted, sample_transactions):
        extractor.results = [
            extracted("Netflix", "54.99", "2026-01-30", category="Entertainment"),
            extracted("Coffee", "12", "2026-01-31"),
        ]
        response = client.post("/transaction", json={"text": "two SMS messages"})
        data = response.json()
        assert data["count"] == 1
        assert data["transactions"][0]["description"] == "Coffee"

    def test_empty_text(self, client, extractor):
        response = client.post("/transaction", json={"text": "   "})
        assert response.status_code == 400
        assert response.json()["error"] == "validation"
        assert extractor.calls == []

    def test_invalid_body(self, client):
        response = client.post("/transaction", json={"message": "hi"})
        assert response.status_code == 400

    def test_upstream_failure(self, client, extractor, upstream_error, store):
        """Extraction failures surface as 500 with nothing saved."""
        extractor.error = upstream_error
        response = client.post("/transaction", json={"text": "sms"})
        assert response.status_code == 500
        assert response.json()["error"] == "upstream"
        assert store.count() == 0

    def test_method_not_allowed(self, client):
        response = client.get("/transaction")
        assert response.status_code == 405


class TestUpdateTransaction:
    """Test editing transactions."""

    def test_update(self, client, sample_transactions, store):
        netflix = sample_transactions[3]
        response = client.put(f"/transaction/{netflix.id}", json={
            "description": "Netflix Premium",
            "amount": 64.99,
            "date": "2026-02-24",
            "category": "Entertainment",
        })
        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Transaction updated successfully"}

        updated = store.get(netflix.id)
        assert updated.description == "Netflix Premium"
        assert updated.date == date(2026, 2, 24)
        assert updated.billing_cycle == "Feb 2026"

    def test_update_not_found(self, client):
        response = client.put("/transaction/999", json={
            "description": "Ghost",
            "amount": 1,
            "date": "2026-01-01",
            "category": "Unknown",
        })
        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    def test_update_amount_too_large(self, client, sample_transactions, store):
        netflix = sample_transactions[3]
        response = client.put(f"/transaction/{netflix.id}", json={
            "description": "Netflix",
            "amount": "1e30",
            "date": "2026-01-30",
            "category": "Entertainment",
        })
        assert response.status_code == 400
        assert response.json()["error"] == "validation"
        assert store.get(netflix.id).amount == Decimal("54.99")

    def test_update_invalid_body(self, client, sample_transactions):
        response = client.put(f"/transaction/{sample_transactions[0].id}", json={"description": "x"})
        assert response.status_code == 400


class TestDeleteTransaction:
    """Test deleting transactions."""

    def test_delete(self, client, sample_transactions, store):
        response = client.delete(f"/transaction/{sample_transactions[0].id}")
        assert response.status_code == 200
        assert response.json()["success"] is True
        assert store.count() == 3

    def test_delete_not_found(self, client):
        response = client.delete("/transaction/999")
        assert response.status_code == 404
        assert response.json()["message"] == "Transaction not found"

    def test_method_not_allowed(self, client, sample_transactions):
        response = client.get(f"/transaction/{sample_transactions[0].id}")
        assert response.status_code == 405
