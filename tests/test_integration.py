"""
Integration Tests for Fundraiser Service
Exercises the HTTP API against a freshly seeded in-memory store
"""

import sys
from pathlib import Path
# Add parent folder (project root) to sys.path so local modules can be imported
PROJECT_ROOT = Path(__file__).resolve().parents[1]
proj_root_str = str(PROJECT_ROOT)
if proj_root_str not in sys.path:
    sys.path.insert(0, proj_root_str)

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from unittest.mock import MagicMock, patch

from fundraiser_service.main import app, lifespan
from fundraiser_service.services.store import CampaignStore, get_store


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def store():
    """Fresh seeded store per test"""
    return CampaignStore.seeded()


@pytest_asyncio.fixture(scope="function")
async def client(store):
    """Create test client with store override"""
    app.dependency_overrides[get_store] = lambda: store

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def broken_client():
    """Client whose store fails on every call"""
    broken = MagicMock(spec=CampaignStore)
    broken.get_statistics.side_effect = RuntimeError("boom")
    broken.list_categories.side_effect = RuntimeError("boom")
    broken.list_campaigns.side_effect = RuntimeError("boom")
    broken.submit_donation.side_effect = RuntimeError("boom")
    app.dependency_overrides[get_store] = lambda: broken

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


# ============================================================================
# HEALTH CHECK TESTS
# ============================================================================

class TestHealthCheck:
    """Test health and metrics endpoints"""

    @pytest.mark.asyncio
    async def test_health_check(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["timestamp"].endswith("Z")
        assert data["uptime"] >= 0

    @pytest.mark.asyncio
    async def test_metrics_count_donations(self, client):
        await client.post("/api/fundraisers/1/donations", json={"amount": 5, "donorName": "Jane Doe"})

        response = await client.get("/metrics")

        assert response.status_code == 200
        assert 'donations_total{outcome="accepted"}' in response.text
        assert "http_requests_total" in response.text

    @pytest.mark.asyncio
    async def test_metrics_group_unknown_paths(self, client):
        await client.get("/api/no-such-route-42")

        response = await client.get("/metrics")

        assert 'endpoint="unmatched"' in response.text
        assert "no-such-route-42" not in response.text


class TestLifespan:
    """Test application startup"""

    @pytest.mark.asyncio
    async def test_startup_builds_seeded_store(self):
        async with lifespan(app):
            assert isinstance(app.state.store, CampaignStore)
            assert app.state.store.get_statistics().total_campaigns == 6


# ============================================================================
# FUNDRAISER ENDPOINT TESTS
# ============================================================================

class TestListFundraisers:
    """Test GET /api/fundraisers"""

    @pytest.mark.asyncio
    async def test_list_fundraisers_default(self, client):
        response = await client.get("/api/fundraisers")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert len(body["data"]) == 6
        assert body["pagination"] == {"page": 1, "limit": 10, "total": 6, "totalPages": 1}

        first = body["data"][0]
        assert first["id"] == 6
        assert first["createdAt"] == "2024-02-15T10:00:00Z"
        assert first["status"] == "completed"
        assert set(first) == {
            "id", "title", "description", "goal", "raised", "imageUrl",
            "createdAt", "status", "category", "organizer",
        }

    @pytest.mark.asyncio
    async def test_filter_by_category(self, client):
        response = await client.get("/api/fundraisers", params={"category": "Environment"})

        body = response.json()
        assert [f["title"] for f in body["data"]] == ["Save the Ocean"]
        assert body["pagination"]["total"] == 1

    @pytest.mark.asyncio
    async def test_page_past_end(self, client):
        response = await client.get("/api/fundraisers", params={"page": 2, "limit": 10})

        body = response.json()
        assert body["data"] == []
        assert body["pagination"] == {"page": 2, "limit": 10, "total": 6, "totalPages": 1}

    @pytest.mark.asyncio
    async def test_invalid_page_params_fall_back_to_defaults(self, client):
        response = await client.get("/api/fundraisers", params={"page": "abc", "limit": "0"})

        assert response.status_code == 200
        assert response.json()["pagination"]["page"] == 1
        assert response.json()["pagination"]["limit"] == 10

    @pytest.mark.asyncio
    async def test_empty_filters_ignored(self, client):
        response = await client.get("/api/fundraisers", params={"status": "", "sortBy": ""})

        assert response.status_code == 200
        assert response.json()["pagination"]["total"] == 6

    @pytest.mark.asyncio
    async def test_sort_and_search(self, client):
        response = await client.get(
            "/api/fundraisers",
            params={"search": "help", "sortBy": "raised", "sortOrder": "asc"}
        )

        raised = [f["raised"] for f in response.json()["data"]]
        assert raised == sorted(raised)

    @pytest.mark.asyncio
    async def test_unknown_sort_field(self, client):
        response = await client.get("/api/fundraisers", params={"sortBy": "secret"})

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["errors"]


class TestGetFundraiser:
    """Test GET /api/fundraisers/{id}"""

    @pytest.mark.asyncio
    async def test_get_fundraiser(self, client):
        response = await client.get("/api/fundraisers/1")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["data"]["title"] == "Save the Ocean"
        assert body["data"]["goal"] == 50000
        assert body["data"]["imageUrl"].startswith("https://")

    @pytest.mark.asyncio
    async def test_get_fundraiser_not_found(self, client):
        response = await client.get("/api/fundraisers/999")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Fundraiser not found"}

    @pytest.mark.asyncio
    async def test_non_numeric_id_not_found(self, client):
        response = await client.get("/api/fundraisers/abc")

        assert response.status_code == 404
        assert response.json()["message"] == "Fundraiser not found"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw_id", ["1_0", "+1", "%201", "1.0"])
    async def test_id_must_be_plain_digits(self, client, raw_id):
        response = await client.get(f"/api/fundraisers/{raw_id}")

        assert response.status_code == 404
        assert response.json()["message"] == "Fundraiser not found"


# ============================================================================
# DONATION ENDPOINT TESTS
# ============================================================================

class TestListDonations:
    """Test GET /api/fundraisers/{id}/donations"""

    @pytest.mark.asyncio
    async def test_list_donations(self, client):
        response = await client.get("/api/fundraisers/1/donations")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert [d["id"] for d in body["data"]] == [9, 4, 2, 1]
        assert body["summary"] == {"totalAmount": 430, "totalCount": 4, "averageAmount": 107.5}
        assert body["pagination"] == {"page": 1, "limit": 20, "total": 4, "totalPages": 1}
        assert body["data"][0]["fundraiserId"] == 1
        assert body["data"][0]["donorName"] == "Lisa Anderson"

    @pytest.mark.asyncio
    async def test_list_donations_sorted_by_amount(self, client):
        response = await client.get(
            "/api/fundraisers/1/donations",
            params={"sortBy": "amount", "sortOrder": "desc", "limit": 1}
        )

        body = response.json()
        assert [d["amount"] for d in body["data"]] == [250]
        assert body["summary"]["totalCount"] == 4
        assert body["pagination"]["totalPages"] == 4

    @pytest.mark.asyncio
    async def test_list_donations_not_found(self, client):
        response = await client.get("/api/fundraisers/999/donations")

        assert response.status_code == 404
        assert response.json()["message"] == "Fundraiser not found"


class TestCreateDonation:
    """Test POST /api/fundraisers/{id}/donations"""

    @pytest.mark.asyncio
    async def test_create_donation_success(self, client, store):
        response = await client.post(
            "/api/fundraisers/1/donations",
            json={"amount": 50, "donorName": "Jane Doe", "message": " Good luck "}
        )

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Donation created successfully"
        assert body["data"]["id"] == 11
        assert body["data"]["fundraiserId"] == 1
        assert body["data"]["amount"] == 50
        assert body["data"]["donorName"] == "Jane Doe"
        assert body["data"]["message"] == "Good luck"
        assert body["data"]["anonymous"] is False
        assert body["data"]["createdAt"].endswith("Z")

        detail = await client.get("/api/fundraisers/1")
        assert detail.json()["data"]["raised"] == 32550

        donations = await client.get("/api/fundraisers/1/donations")
        assert donations.json()["summary"]["totalCount"] == 5

    @pytest.mark.asyncio
    async def test_anonymous_donation(self, client):
        response = await client.post(
            "/api/fundraisers/2/donations",
            json={"amount": 20, "donorName": "X", "anonymous": True}
        )

        assert response.status_code == 201
        assert response.json()["data"]["donorName"] == "Anonymous"
        assert response.json()["data"]["anonymous"] is True

    @pytest.mark.asyncio
    async def test_validation_errors_listed_together(self, client):
        response = await client.post(
            "/api/fundraisers/1/donations",
            json={"amount": -5, "donorName": "A"}
        )

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Validation failed"
        assert "Amount must be a positive number" in body["errors"]
        assert "Donor name must be at least 2 characters" in body["errors"]

    @pytest.mark.asyncio
    async def test_infinite_amount_rejected(self, client, store):
        response = await client.post(
            "/api/fundraisers/1/donations",
            json={"amount": "Infinity", "donorName": "Jane Doe"}
        )

        assert response.status_code == 400
        assert response.json()["errors"] == ["Amount must be a positive number"]
        assert store.get_campaign(1).raised == 32500

    @pytest.mark.asyncio
    async def test_missing_body(self, client):
        response = await client.post("/api/fundraisers/1/donations")

        assert response.status_code == 400
        assert response.json()["errors"] == [
            "Amount must be a positive number",
            "Donor name is required",
        ]

    @pytest.mark.asyncio
    async def test_malformed_json(self, client):
        response = await client.post(
            "/api/fundraisers/1/donations",
            content=b"{not json",
            headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Validation failed"
        assert response.json()["errors"]

    @pytest.mark.asyncio
    async def test_completed_fundraiser_rejected(self, client):
        response = await client.post(
            "/api/fundraisers/6/donations",
            json={"amount": 50, "donorName": "Jane Doe"}
        )

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "message": "Cannot donate to a fundraiser that is not active",
        }

    @pytest.mark.asyncio
    async def test_unknown_fundraiser(self, client):
        response = await client.post(
            "/api/fundraisers/999/donations",
            json={"amount": 50, "donorName": "Jane Doe"}
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_goal_reached_completes_fundraiser(self, client):
        response = await client.post(
            "/api/fundraisers/3/donations",
            json={"amount": "11500", "donorName": "Big Donor"}
        )
        assert response.status_code == 201

        detail = await client.get("/api/fundraisers/3")
        assert detail.json()["data"]["status"] == "completed"

        stats = await client.get("/api/stats")
        assert stats.json()["data"]["fundraisers"]["completed"] == 2


# ============================================================================
# STATS / CATEGORIES TESTS
# ============================================================================

class TestStatsAndCategories:
    """Test GET /api/stats and GET /api/categories"""

    @pytest.mark.asyncio
    async def test_stats(self, client):
        response = await client.get("/api/stats")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["fundraisers"] == {"total": 6, "active": 5, "completed": 1}
        assert data["fundraising"] == {"totalRaised": 213500, "totalGoal": 320000, "percentage": 66.72}
        assert data["donations"] == {"totalCount": 10, "totalAmount": 2330, "averageAmount": 233.0}

    @pytest.mark.asyncio
    async def test_categories(self, client):
        response = await client.get("/api/categories")

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "data": ["Environment", "Education", "Hunger Relief", "Animals", "Health", "Sports"],
        }


# ============================================================================
# ERROR HANDLING TESTS
# ============================================================================

class TestErrorHandling:
    """Test route-not-found and internal error envelopes"""

    @pytest.mark.asyncio
    async def test_unknown_route(self, client):
        response = await client.get("/api/unknown")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Route not found"}

    @pytest.mark.asyncio
    async def test_unsupported_method(self, client):
        response = await client.delete("/api/fundraisers/1")

        assert response.status_code == 404
        assert response.json()["message"] == "Route not found"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path,message", [
        ("/api/stats", "Error fetching statistics"),
        ("/api/categories", "Error fetching categories"),
        ("/api/fundraisers", "Error fetching fundraisers"),
    ])
    async def test_internal_error(self, broken_client, path, message):
        response = await broken_client.get(path)

        assert response.status_code == 500
        body = response.json()
        assert body["success"] is False
        assert body["message"] == message
        assert body["error"] == "boom"

    @pytest.mark.asyncio
    async def test_internal_error_on_donation(self, broken_client):
        response = await broken_client.post(
            "/api/fundraisers/1/donations",
            json={"amount": 50, "donorName": "Jane Doe"}
        )

        assert response.status_code == 500
        assert response.json()["message"] == "Error creating donation"

    @pytest.mark.asyncio
    async def test_internal_error_logged_once(self, broken_client):
        with patch("fundraiser_service.main.logger") as mock_logger:
            response = await broken_client.get("/api/stats")

        assert response.status_code == 500
        assert mock_logger.error.call_count == 1
        assert mock_logger.error.call_args.args[0] == "Error fetching statistics"
