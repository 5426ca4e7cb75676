"""Tests for API endpoints."""

from datetime import timedelta

import pytest

from tests.conftest import IMPORT_DATE, WALLET_ID, make_existing, unix
from txdedup.api.imports import get_repository
from txdedup.main import app
from txdedup.services.repository import RepositoryError


@pytest.fixture
def api_repository(repository):
    """Route API requests to the mock repository."""
    app.dependency_overrides[get_repository] = lambda: repository
    yield repository
    app.dependency_overrides.pop(get_repository, None)


def parsed(row_number=1, **overrides):
    data = {
        "amount": 100000,
        "currency": "VND",
        "date": unix(IMPORT_DATE),
        "description": "PAYMENT TO STARBUCKS #12345",
        "reference_number": "",
        "row_number": row_number,
    }
    data.update(overrides)
    return data


class TestDetectDuplicatesAPI:
    """Tests for the duplicate detection endpoint."""

    @pytest.mark.asyncio
    async def test_detect_duplicates(self, client, api_repository):
        api_repository.find_by_wallet_and_date_range.return_value = [
            make_existing(id=42, date=IMPORT_DATE - timedelta(days=1))
        ]

        response = await client.post(
            "/api/imports/duplicates",
            json={"wallet_id": WALLET_ID, "transactions": [parsed()]},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "Found 1 potential duplicate(s)"
        match = data["matches"][0]
        assert match["tier"] == 2
        assert 90 <= match["confidence"] <= 95
        assert match["existing_transaction"]["id"] == 42
        assert match["imported_transaction"]["row_number"] == 1
        assert "Strong match" in match["match_reason"]

    @pytest.mark.asyncio
    async def test_no_duplicates(self, client, api_repository):
        response = await client.post(
            "/api/imports/duplicates",
            json={"wallet_id": WALLET_ID, "transactions": [parsed(), parsed(2)]},
        )

        assert response.status_code == 200
        assert response.json()["matches"] == []
        api_repository.find_by_wallet_and_date_range.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_repository_failure(self, client, api_repository):
        api_repository.find_by_wallet_and_date_range.side_effect = RepositoryError(
            "failed to find transactions by date range"
        )

        response = await client.post(
            "/api/imports/duplicates",
            json={"wallet_id": WALLET_ID, "transactions": [parsed()]},
        )

        assert response.status_code == 503

    @pytest.mark.asyncio
    async def test_invalid_payload(self, client, api_repository):
        response = await client.post(
            "/api/imports/duplicates",
            json={"wallet_id": WALLET_ID, "transactions": [parsed(amount="lots")]},
        )

        assert response.status_code == 422


class TestPlanImportAPI:
    """Tests for the import planning endpoint."""

    @pytest.mark.asyncio
    async def test_review_each(self, client, api_repository):
        api_repository.find_by_wallet_and_date_range.return_value = [make_existing(id=42)]

        response = await client.post(
            "/api/imports/plan",
            json={
                "wallet_id": WALLET_ID,
                "strategy": "review_each",
                "transactions": [
                    parsed(1),
                    parsed(2, amount=5000, description="PARKING"),
                ],
                "duplicate_actions": [
                    {"imported_row_number": 1, "existing_transaction_id": 42, "action": "merge"}
                ],
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["to_merge"] == [{"row_number": 1, "existing_transaction_id": 42}]
        assert data["to_create"] == [2]
        assert data["duplicates_merged"] == 1

    @pytest.mark.asyncio
    async def test_keep_all(self, client, api_repository):
        response = await client.post(
            "/api/imports/plan",
            json={"wallet_id": WALLET_ID, "strategy": "keep_all", "transactions": [parsed()]},
        )

        assert response.status_code == 200
        assert response.json()["to_create"] == [1]
        api_repository.find_by_wallet_and_date_range.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_strategy(self, client, api_repository):
        response = await client.post(
            "/api/imports/plan",
            json={"wallet_id": WALLET_ID, "strategy": "merge_everything", "transactions": []},
        )

        assert response.status_code == 422


class TestHealthEndpoints:
    """Tests for health endpoints."""

    @pytest.mark.asyncio
    async def test_root(self, client):
        """Test root endpoint."""
        response = await client.get("/")

        assert response.status_code == 200
        assert "message" in response.json()

    @pytest.mark.asyncio
    async def test_health(self, client):
        """Test health endpoint."""
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"
