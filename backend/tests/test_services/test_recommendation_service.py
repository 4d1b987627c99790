"""
Unit tests for the hybrid recommendation service
"""
import asyncio
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest

from storefront_admin.domain.recommendations import (
    BehaviorAction,
    BehaviorEvent,
    ProductRecommendation,
    RecommendationReason,
)
from storefront_admin.services.recommendation_service import (
    RecommendationService,
    behavioral_score,
    content_similarity,
    merge_recommendations,
    rank,
)


def rec(product_id, score, confidence, reason=RecommendationReason.CONTENT):
    return ProductRecommendation(product_id=product_id, score=score, reason=reason, confidence=confidence)


CATALOG = {
    product_id: {"id": product_id, "store_id": "store-1"}
    for product_id in ("p1", "p2", "p3", "p4", "p5")
}


def store_products(store_id, product_ids):
    if store_id != "store-1":
        return []
    return [CATALOG[product_id] for product_id in product_ids if product_id in CATALOG]


@pytest.fixture
def repo():
    repository = MagicMock()
    repository.find_by_ids.side_effect = store_products
    repository.find_by_id.return_value = {"id": "p1", "category": "dresses", "tags": ["wax", "cotton"]}
    repository.find_similar.return_value = [
        {"id": "p2", "category": "dresses", "tags": ["wax"]},
        {"id": "p3", "category": "hats", "tags": []},
        {"id": "p1", "category": "dresses", "tags": ["wax", "cotton"]},
    ]
    repository.find_behavior_since.return_value = (
        [{"product_id": "p2", "action": "view"}] * 4 + [{"product_id": "p4", "action": "cart"}] * 2
    )
    return repository


def test_content_similarity_is_deterministic():
    source = {"category": "dresses", "tags": ["wax", "cotton", "blue"]}

    assert content_similarity(source, {"category": "dresses", "tags": ["wax", "blue"]}) == 3.5
    assert content_similarity(source, {"category": "hats", "tags": []}) == 2.0
    assert content_similarity(None, {"category": "dresses"}) == 2.0


def test_merge_keeps_best_score_and_raises_confidence():
    merged = merge_recommendations([
        rec("p1", 3.0, 0.9),
        rec("p1", 0.5, 0.6, RecommendationReason.TRENDING),
        rec("p2", 1.0, 0.6),
    ])

    by_id = {r.product_id: r for r in merged}
    assert by_id["p1"].score == 3.0
    assert by_id["p1"].confidence == pytest.approx(0.96)
    assert len(merged) == 2


def test_merge_caps_confidence_at_one():
    merged = merge_recommendations([rec("p1", 1.0, 0.99), rec("p1", 1.0, 0.9)])

    assert merged[0].confidence == 1.0


def test_rank_filters_low_confidence_and_limits():
    recs = [rec(f"p{i}", float(i), 0.5) for i in range(30)] + [rec("weak", 100.0, 0.2)]

    ranked = rank(recs)

    assert len(ranked) == 20
    assert ranked[0].product_id == "p29"
    assert all(r.product_id != "weak" for r in ranked)


class TestRecommendationService:

    def test_hybrid_result(self, repo):
        service = RecommendationService(repo)

        result = asyncio.run(service.get_recommendations("store-1", product_id="p1"))

        ids = [r.product_id for r in result.recommendations]
        assert ids == ["p2", "p3", "p4"]
        p2 = result.recommendations[0]
        assert p2.score == 3.25
        assert p2.confidence == pytest.approx(0.96)
        assert result.recommendations[2].score == pytest.approx(0.1)
        assert result.recommendations[2].reason == RecommendationReason.TRENDING
        assert result.context_used == ["store_trends", "current_product"]
        repo.find_similar.assert_called_once_with("p1", 10)

    def test_failing_source_contributes_nothing(self, repo):
        repo.find_behavior_since.side_effect = RuntimeError("table missing")
        service = RecommendationService(repo)

        result = asyncio.run(service.get_recommendations("store-1", product_id="p1"))

        assert [r.product_id for r in result.recommendations] == ["p2", "p3"]
        assert all(r.reason == RecommendationReason.CONTENT for r in result.recommendations)

    def test_without_product_only_trending(self, repo):
        service = RecommendationService(repo)

        result = asyncio.run(service.get_recommendations("store-1"))

        repo.find_similar.assert_not_called()
        assert [r.product_id for r in result.recommendations] == ["p2", "p4"]
        assert result.recommendations[0].score == pytest.approx(0.2)

    def test_track_behavior_inserts_one_event(self, repo):
        service = RecommendationService(repo)

        service.track_behavior("store-1", BehaviorEvent(product_id="p2", action=BehaviorAction.CART), user_id="u1")

        repo.insert_behavior.assert_called_once()
        row = repo.insert_behavior.call_args.args[0]
        assert row["store_id"] == "store-1"
        assert row["action"] == "cart"
        assert row["user_id"] == "u1"
        assert row["timestamp"]


NOW = datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc)


class TestBehavioralScore:

    def test_long_recent_view_in_same_category(self):
        view = {"duration": 45, "timestamp": (NOW - timedelta(days=1)).isoformat(),
                "category": "dresses", "price": 10000}

        assert behavioral_score(view, {"category": "dresses", "price": 12000}, NOW) == pytest.approx(2.2)

    def test_old_short_view_with_distant_price(self):
        view = {"duration": 10, "timestamp": (NOW - timedelta(days=30)).isoformat(),
                "category": "dresses", "price": 10000}

        assert behavioral_score(view, {"category": "hats", "price": "25000"}, NOW) == pytest.approx(0.8)

    def test_missing_category_never_matches(self):
        assert behavioral_score({}, {}, NOW) == 1.0


class TestStoreScoping:

    def test_similar_products_of_other_stores_are_dropped(self, repo):
        repo.find_similar.return_value = [
            {"id": "other-store-prod", "store_id": "store-OTHER", "category": "dresses"},
            {"id": "p2", "store_id": "store-1", "category": "dresses"},
        ]
        repo.find_behavior_since.return_value = []

        result = asyncio.run(RecommendationService(repo).get_recommendations("store-1", product_id="p1"))

        assert [r.product_id for r in result.recommendations] == ["p2"]
        repo.find_by_ids.assert_any_call("store-1", ["other-store-prod", "p2"])

    def test_inactive_trending_product_is_dropped(self, repo):
        repo.find_behavior_since.return_value = [{"product_id": "retired", "action": "view"}] * 10

        result = asyncio.run(RecommendationService(repo).get_recommendations("store-1"))

        assert result.recommendations == []


class TestSignedInShopper:

    @pytest.fixture
    def shopper_repo(self, repo):
        repo.find_user_behavior.return_value = [
            {"product_id": "p1", "action": "view", "duration": 45, "category": "dresses",
             "price": 10000, "timestamp": (NOW - timedelta(days=1)).isoformat()},
            {"product_id": "p5", "action": "purchase", "timestamp": (NOW - timedelta(days=2)).isoformat()},
        ]
        repo.find_similar.side_effect = lambda product_id, limit: {
            "p1": [
                {"id": "p1", "category": "dresses", "price": 10000},
                {"id": "p2", "category": "dresses", "price": 12000},
                {"id": "p3", "category": "hats", "price": 30000},
            ],
        }.get(product_id, [])
        repo.find_similar_users.return_value = ["user-2", "user-3"]
        repo.find_purchases_by_users.return_value = [{"product_id": "p4"}] * 3 + [{"product_id": "elsewhere"}]
        return repo

    def test_behavioral_and_collaborative_sources(self, shopper_repo):
        service = RecommendationService(shopper_repo)

        result = asyncio.run(service.get_recommendations("store-1", user_id="user-1", now=NOW))

        by_id = {r.product_id: r for r in result.recommendations}
        assert [r.product_id for r in result.recommendations] == ["p2", "p3", "p4"]
        assert by_id["p2"].score == pytest.approx(2.2)
        assert by_id["p2"].reason == RecommendationReason.BEHAVIORAL
        assert by_id["p3"].score == pytest.approx(1.6)
        assert by_id["p3"].metadata["reason_text"] == "Because you viewed dresses"
        assert by_id["p4"].score == pytest.approx(0.3)
        assert by_id["p4"].reason == RecommendationReason.COLLABORATIVE
        assert "elsewhere" not in by_id
        assert result.context_used == ["store_trends", "user_history"]

        shopper_repo.find_user_behavior.assert_called_once_with("store-1", "user-1", 100)
        shopper_repo.find_similar.assert_called_once_with("p1", 10)
        shopper_repo.find_purchases_by_users.assert_called_once_with("store-1", ["user-2", "user-3"])

    def test_anonymous_shopper_skips_history(self, repo):
        asyncio.run(RecommendationService(repo).get_recommendations("store-1"))

        repo.find_user_behavior.assert_not_called()
        repo.find_similar_users.assert_not_called()

    def test_failing_history_contributes_nothing(self, shopper_repo):
        shopper_repo.find_user_behavior.side_effect = RuntimeError("table missing")
        shopper_repo.find_similar_users.side_effect = RuntimeError("function does not exist")

        result = asyncio.run(RecommendationService(shopper_repo).get_recommendations("store-1", user_id="user-1", now=NOW))

        assert [r.product_id for r in result.recommendations] == ["p2", "p4"]
        assert result.context_used == ["store_trends", "user_history"]
