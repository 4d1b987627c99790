"""
Product recommendation models for the shopper page
"""
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class RecommendationReason(str, Enum):
    BEHAVIORAL = "behavioral"
    COLLABORATIVE = "collaborative"
    CONTENT = "content"
    TRENDING = "trending"


class BehaviorAction(str, Enum):
    VIEW = "view"
    CART = "cart"
    PURCHASE = "purchase"
    FAVORITE = "favorite"
    SHARE = "share"


class ProductRecommendation(BaseModel):
    product_id: str
    score: float
    reason: RecommendationReason
    confidence: float = Field(..., ge=0, le=1)
    metadata: Dict[str, Any] = Field(default_factory=dict)


class RecommendationResult(BaseModel):
    recommendations: List[ProductRecommendation]
    algorithm: str
    processing_time_ms: int
    context_used: List[str]


class BehaviorEvent(BaseModel):
    product_id: str
    action: BehaviorAction
    duration: Optional[int] = Field(None, ge=0, description="Seconds spent on the product")
    category: Optional[str] = None
    price: Optional[float] = Field(None, ge=0, description="Price shown to the shopper")
    timestamp: Optional[datetime] = None
