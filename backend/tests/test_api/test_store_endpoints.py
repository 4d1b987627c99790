"""
API tests with FastAPI's TestClient

Authentication and data access are replaced through app.dependency_overrides;
no database or network is used.
"""
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from storefront_admin.api.deps import (
    get_analytics_service,
    get_domain_verifier,
    get_recommendation_service,
    get_store_repository,
)
from storefront_admin.core.auth import TokenUser, get_current_user, get_current_user_optional
from storefront_admin.core.config import settings
from storefront_admin.domain.custom_domain import DNSVerificationResult
from storefront_admin.domain.recommendations import RecommendationResult
from storefront_admin.domain.store import Store
from storefront_admin.main import app
from storefront_admin.services.analytics_service import AnalyticsService
from storefront_admin.services.domain_verifier import DomainVerifier


@pytest.fixture
def store_repo(store, store_row):
    repo = MagicMock()
    repo.find_by_id_for_user.side_effect = (
        lambda store_id, user_id: store if (store_id, user_id) == ("store-1", "user-1") else None
    )
    repo.find_by_slug.side_effect = lambda slug: store if slug == "boutique-faso" else None
    repo.count_for_user.return_value = 0
    repo.update.side_effect = lambda store_id, updates: Store.from_row({**store_row, **updates})
    repo.find_domains_to_verify.return_value = []
    return repo


@pytest.fixture
def client(store_repo):
    app.dependency_overrides[get_store_repository] = lambda: store_repo
    app.dependency_overrides[get_current_user] = lambda: TokenUser(id="user-1", email="merchant@example.com")
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def anonymous_client(store_repo):
    app.dependency_overrides[get_store_repository] = lambda: store_repo
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestStoresEndpoints:

    def test_requires_authentication(self, anonymous_client):
        response = anonymous_client.get("/api/v1/stores/store-1")

        assert response.status_code == 401

    def test_get_own_store(self, client):
        response = client.get("/api/v1/stores/store-1")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "success"
        assert body["data"]["slug"] == "boutique-faso"
        assert body["data"]["minimum_order_amount"] == 1000.0

    def test_foreign_store_is_not_found(self, client):
        response = client.get("/api/v1/stores/store-2")

        assert response.status_code == 404

    def test_store_limit_is_a_bad_request(self, client, store_repo):
        store_repo.count_for_user.return_value = settings.MAX_STORES_PER_USER

        response = client.post("/api/v1/stores/", json={"name": "Another"})

        assert response.status_code == 400
        assert "Store limit reached" in response.json()["detail"]

    def test_invalid_color_rejected(self, client):
        response = client.patch("/api/v1/stores/store-1", json={"primary_color": "red"})

        assert response.status_code == 422

    def test_null_name_rejected(self, client, store_repo):
        response = client.patch("/api/v1/stores/store-1", json={"name": None})

        assert response.status_code == 422
        assert "name cannot be null" in response.text
        store_repo.update.assert_not_called()

    def test_update_layout(self, client, store_repo):
        response = client.patch("/api/v1/stores/store-1", json={
            "header_style": "minimal",
            "product_grid_columns": 3,
            "sidebar_enabled": True,
        })

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["header_style"] == "minimal"
        assert data["product_grid_columns"] == 3
        store_repo.update.assert_called_once_with(
            "store-1", {"header_style": "minimal", "product_grid_columns": 3, "sidebar_enabled": True}
        )


class TestDomainEndpoints:

    @pytest.fixture
    def dns_checker(self):
        checker = MagicMock()
        checker.check_propagation = AsyncMock(return_value=DNSVerificationResult(
            is_propagated=False, errors=["A record missing"]
        ))
        return checker

    @pytest.fixture
    def domain_client(self, client, store_repo, dns_checker):
        app.dependency_overrides[get_domain_verifier] = lambda: DomainVerifier(store_repo, dns_checker)
        return client

    def test_invalid_domain(self, domain_client):
        response = domain_client.post("/api/v1/domains/stores/store-1/connect", json={"domain": "not a domain"})

        assert response.status_code == 400

    def test_connect_returns_instructions(self, domain_client):
        response = domain_client.post("/api/v1/domains/stores/store-1/connect", json={"domain": "myshop.com"})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["domain_status"] == "pending"
        assert data["dns_instructions"]["www_record"]["name"] == "www.myshop.com"

    def test_verify_without_domain(self, domain_client):
        response = domain_client.post("/api/v1/domains/stores/store-1/verify")

        assert response.status_code == 400

    def test_verify_all_requires_cron_key(self, domain_client, monkeypatch):
        monkeypatch.setattr(settings, "CRON_API_KEY", "cron-secret")

        missing = domain_client.post("/api/v1/domains/verify-all")
        wrong = domain_client.post("/api/v1/domains/verify-all", headers={"X-Cron-Key": "nope"})
        ok = domain_client.post("/api/v1/domains/verify-all", headers={"X-Cron-Key": "cron-secret"})

        assert missing.status_code == 401
        assert wrong.status_code == 401
        assert ok.status_code == 200
        assert ok.json()["data"]["checked"] == 0

    def test_verify_all_disabled_without_key(self, domain_client, monkeypatch):
        monkeypatch.setattr(settings, "CRON_API_KEY", None)

        response = domain_client.post("/api/v1/domains/verify-all", headers={"X-Cron-Key": "anything"})

        assert response.status_code == 503


class TestAnalyticsEndpoints:

    @pytest.fixture
    def analytics_client(self, client):
        repo = MagicMock()
        for method in ("get_active_products", "get_orders_between", "get_recent_orders",
                       "get_order_history", "get_view_history"):
            getattr(repo, method).return_value = []
        repo.count_customers_between.return_value = 0
        repo.count_store_views_between.side_effect = RuntimeError("missing table")
        app.dependency_overrides[get_analytics_service] = lambda: AnalyticsService(repo)
        return client

    def test_analytics(self, analytics_client):
        response = analytics_client.get("/api/v1/analytics/stores/store-1?range=7d")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["time_range"] == "7d"
        assert data["total_views"] == 0
        assert len(data["monthly_stats"]) == 12

    def test_invalid_range(self, analytics_client):
        response = analytics_client.get("/api/v1/analytics/stores/store-1?range=2w")

        assert response.status_code == 422

    def test_csv_export(self, analytics_client):
        response = analytics_client.get("/api/v1/analytics/stores/store-1/export")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert 'filename="store-analytics-' in response.headers["content-disposition"]
        assert len(response.text.split("\n")) == 13


class TestPublicStorefront:

    def test_legal_page(self, anonymous_client):
        response = anonymous_client.get("/api/v1/public/stores/boutique-faso/legal/terms")

        assert response.status_code == 200
        assert response.json()["data"]["content"] == "Terms text"

    def test_empty_legal_page(self, anonymous_client):
        response = anonymous_client.get("/api/v1/public/stores/boutique-faso/legal/privacy")

        assert response.status_code == 404
        assert response.json()["detail"] == "This legal page is not available"

    def test_unknown_legal_page(self, anonymous_client):
        response = anonymous_client.get("/api/v1/public/stores/boutique-faso/legal/about")

        assert response.status_code == 404
        assert response.json()["detail"] == "Legal page not found"

    def test_unknown_store(self, anonymous_client):
        response = anonymous_client.get("/api/v1/public/stores/nope/legal/terms")

        assert response.status_code == 404

    def test_tracking_config(self, anonymous_client):
        response = anonymous_client.get("/api/v1/public/stores/boutique-faso/tracking")

        assert response.json()["data"] == {"google_analytics_id": "G-ABCDEF1234"}

    def test_recommendations_for_signed_in_shopper(self, anonymous_client):
        service = MagicMock()
        service.get_recommendations = AsyncMock(return_value=RecommendationResult(
            recommendations=[], algorithm="hybrid_v1", processing_time_ms=3,
            context_used=["store_trends", "user_history"],
        ))
        app.dependency_overrides[get_recommendation_service] = lambda: service
        app.dependency_overrides[get_current_user_optional] = lambda: TokenUser(id="user-1", email="shopper@example.com")

        response = anonymous_client.get("/api/v1/public/stores/boutique-faso/recommendations")

        assert response.status_code == 200
        assert response.json()["data"]["context_used"] == ["store_trends", "user_history"]
        service.get_recommendations.assert_awaited_once_with("store-1", None, user_id="user-1")


def test_seo_validate_draft(client):
    response = client.post("/api/v1/seo/validate", json={})

    assert response.status_code == 200
    assert response.json()["data"]["score"] == 32
