"""
Recommendation Service - product suggestions on the storefront

Four sources, run concurrently:
- behavioral: products similar to what the signed-in shopper recently viewed
- collaborative: purchases of shoppers with a similar history
  (`find_similar_users` RPC)
- content: products similar to the one being viewed (`find_similar_products`
  RPC), scored by shared category and tags
- trending: the store's most viewed / carted / purchased products this week

Every candidate must be an active product of the store being browsed.
A failing source contributes nothing; the others still answer.
"""
import asyncio
import logging
import time
from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Dict, Iterable, List, Optional

from storefront_admin.domain.recommendations import (
    BehaviorAction,
    BehaviorEvent,
    ProductRecommendation,
    RecommendationReason,
    RecommendationResult,
)
from storefront_admin.repositories.product_repository import ProductRepository
from storefront_admin.services.analytics_service import parse_timestamp, to_amount

logger = logging.getLogger(__name__)

ALGORITHM = "hybrid_v1"
MAX_RECOMMENDATIONS = 20
MIN_CONFIDENCE = 0.3
SIMILAR_PRODUCTS_LIMIT = 10

TRENDING_LIMIT = 15
TRENDING_WINDOW = timedelta(days=7)
TRENDING_ACTIONS = [BehaviorAction.VIEW.value, BehaviorAction.CART.value, BehaviorAction.PURCHASE.value]
TRENDING_WEIGHT = 0.05

USER_HISTORY_LIMIT = 100
RECENT_VIEWS_LIMIT = 10
SIMILAR_USERS_LIMIT = 50
COLLABORATIVE_LIMIT = 10
COLLABORATIVE_WEIGHT = 0.1

BEHAVIORAL_CONFIDENCE = 0.8
COLLABORATIVE_CONFIDENCE = 0.7
CONTENT_CONFIDENCE = 0.9
TRENDING_CONFIDENCE = 0.6


def content_similarity(source: Optional[dict], target: dict) -> float:
    """
    Score in [2, 4]: base 2, +1 for the same category,
    +0.25 per shared tag (at most 4 tags counted)
    """
    score = 2.0
    if not source:
        return score
    if source.get("category") and source.get("category") == target.get("category"):
        score += 1.0
    shared_tags = set(source.get("tags") or []) & set(target.get("tags") or [])
    score += 0.25 * min(len(shared_tags), 4)
    return score


def behavioral_score(behavior: dict, product: dict, now: datetime) -> float:
    """
    How strongly one past view points at a similar product, in [0, 5]

    Base 1; +0.5 for a view longer than 30 seconds; +0.3 when the view is
    less than a week old; +0.4 when the viewed category matches the
    product's; -0.2 when the prices differ by more than half the viewed price.
    """
    score = 1.0

    if (behavior.get("duration") or 0) > 30:
        score += 0.5

    seen_at = parse_timestamp(behavior.get("timestamp"))
    if seen_at and now - seen_at < timedelta(days=7):
        score += 0.3

    if behavior.get("category") and behavior.get("category") == product.get("category"):
        score += 0.4

    seen_price = to_amount(behavior.get("price"))
    price = to_amount(product.get("price"))
    if seen_price and price and abs(seen_price - price) / seen_price > 0.5:
        score -= 0.2

    return max(0.0, min(5.0, score))


def merge_recommendations(recommendations: Iterable[ProductRecommendation]) -> List[ProductRecommendation]:
    """
    One entry per product: keep the best score and raise confidence
    by 10% of the duplicate's confidence (capped at 1)
    """
    merged: Dict[str, ProductRecommendation] = {}
    for rec in recommendations:
        existing = merged.get(rec.product_id)
        if existing is None:
            merged[rec.product_id] = rec.model_copy(deep=True)
            continue
        existing.score = max(existing.score, rec.score)
        existing.confidence = min(1.0, existing.confidence + rec.confidence * 0.1)
        existing.metadata = {**existing.metadata, **rec.metadata}
    return list(merged.values())


def rank(recommendations: Iterable[ProductRecommendation]) -> List[ProductRecommendation]:
    kept = [rec for rec in recommendations if rec.confidence >= MIN_CONFIDENCE]
    kept.sort(key=lambda rec: rec.score, reverse=True)
    return kept[:MAX_RECOMMENDATIONS]


class RecommendationService:
    def __init__(self, repository: Optional[ProductRepository] = None):
        self.repository = repository or ProductRepository()

    def _in_store(self, store_id: str, candidates: List[ProductRecommendation]) -> List[ProductRecommendation]:
        """Keep candidates that are active products of this store"""
        if not candidates:
            return []
        product_ids = list(dict.fromkeys(rec.product_id for rec in candidates))
        allowed = {str(row["id"]) for row in self.repository.find_by_ids(store_id, product_ids)}
        return [rec for rec in candidates if rec.product_id in allowed]

    def _behavioral_recommendations(
        self, store_id: str, user_id: Optional[str], now: datetime
    ) -> List[ProductRecommendation]:
        if not user_id:
            return []

        history = self.repository.find_user_behavior(store_id, user_id, USER_HISTORY_LIMIT)
        recent_views = [
            event for event in history
            if event.get("action") == BehaviorAction.VIEW.value and event.get("product_id")
        ][:RECENT_VIEWS_LIMIT]

        candidates = []
        for view in recent_views:
            viewed_id = str(view["product_id"])
            for product in self.repository.find_similar(viewed_id, SIMILAR_PRODUCTS_LIMIT):
                if not product.get("id") or str(product["id"]) == viewed_id:
                    continue
                candidates.append(ProductRecommendation(
                    product_id=str(product["id"]),
                    score=behavioral_score(view, product, now),
                    reason=RecommendationReason.BEHAVIORAL,
                    confidence=BEHAVIORAL_CONFIDENCE,
                    metadata={
                        "category": product.get("category"),
                        "price": product.get("price"),
                        "tags": product.get("tags") or [],
                        "reason_text": f"Because you viewed {view.get('category') or 'this kind of product'}",
                    },
                ))
        return self._in_store(store_id, candidates)

    def _collaborative_recommendations(self, store_id: str, user_id: Optional[str]) -> List[ProductRecommendation]:
        if not user_id:
            return []

        similar_users = self.repository.find_similar_users(user_id, SIMILAR_USERS_LIMIT)
        if not similar_users:
            return []

        purchases = self.repository.find_purchases_by_users(store_id, similar_users)
        counts = Counter(str(row["product_id"]) for row in purchases if row.get("product_id"))
        candidates = [
            ProductRecommendation(
                product_id=product_id,
                score=count * COLLABORATIVE_WEIGHT,
                reason=RecommendationReason.COLLABORATIVE,
                confidence=COLLABORATIVE_CONFIDENCE,
                metadata={"reason_text": "Popular with shoppers who share your taste", "purchases": count},
            )
            for product_id, count in counts.most_common(COLLABORATIVE_LIMIT)
        ]
        return self._in_store(store_id, candidates)

    def _content_recommendations(self, store_id: str, product_id: Optional[str]) -> List[ProductRecommendation]:
        if not product_id:
            return []
        source = self.repository.find_by_id(store_id, product_id)
        similar = self.repository.find_similar(product_id, SIMILAR_PRODUCTS_LIMIT)
        candidates = [
            ProductRecommendation(
                product_id=str(product["id"]),
                score=content_similarity(source, product),
                reason=RecommendationReason.CONTENT,
                confidence=CONTENT_CONFIDENCE,
                metadata={
                    "category": product.get("category"),
                    "tags": product.get("tags") or [],
                    "reason_text": "Similar to this product",
                },
            )
            for product in similar
            if product.get("id") and str(product["id"]) != product_id
        ]
        return self._in_store(store_id, candidates)

    def _trending_recommendations(self, store_id: str, now: datetime) -> List[ProductRecommendation]:
        events = self.repository.find_behavior_since(store_id, now - TRENDING_WINDOW, TRENDING_ACTIONS)
        counts = Counter(str(event["product_id"]) for event in events if event.get("product_id"))
        candidates = [
            ProductRecommendation(
                product_id=product_id,
                score=count * TRENDING_WEIGHT,
                reason=RecommendationReason.TRENDING,
                confidence=TRENDING_CONFIDENCE,
                metadata={"reason_text": "Trending this week", "events": count},
            )
            for product_id, count in counts.most_common(TRENDING_LIMIT)
        ]
        return self._in_store(store_id, candidates)

    async def get_recommendations(
        self,
        store_id: str,
        product_id: Optional[str] = None,
        user_id: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> RecommendationResult:
        started = time.monotonic()
        now = now or datetime.now(timezone.utc)

        sources = [
            ("behavioral", lambda: self._behavioral_recommendations(store_id, user_id, now)),
            ("collaborative", lambda: self._collaborative_recommendations(store_id, user_id)),
            ("content", lambda: self._content_recommendations(store_id, product_id)),
            ("trending", lambda: self._trending_recommendations(store_id, now)),
        ]
        settled = await asyncio.gather(
            *(asyncio.to_thread(source) for _, source in sources),
            return_exceptions=True,
        )

        collected: List[ProductRecommendation] = []
        for (name, _), value in zip(sources, settled):
            if isinstance(value, Exception):
                logger.warning(
                    f"Recommendation source '{name}' failed",
                    extra={"store_id": store_id, "product_id": product_id, "error": str(value)}
                )
                continue
            collected.extend(value)

        recommendations = rank(merge_recommendations(collected))

        context_used = ["store_trends"]
        if user_id:
            context_used.append("user_history")
        if product_id:
            context_used.append("current_product")

        return RecommendationResult(
            recommendations=recommendations,
            algorithm=ALGORITHM,
            processing_time_ms=int((time.monotonic() - started) * 1000),
            context_used=context_used,
        )

    def track_behavior(self, store_id: str, event: BehaviorEvent, user_id: Optional[str] = None) -> None:
        """Record one shopper interaction (feeds trending and the shopper's own history)"""
        row = {
            "store_id": store_id,
            "user_id": user_id,
            "product_id": event.product_id,
            "action": event.action.value,
            "duration": event.duration,
            "category": event.category,
            "price": event.price,
            "timestamp": (event.timestamp or datetime.now(timezone.utc)).isoformat(),
        }
        self.repository.insert_behavior(row)
