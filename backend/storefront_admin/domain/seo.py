"""
SEO Domain Models

Input snapshot and result of the store SEO scoring rubric.
"""
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SEOIssueType(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class SEOIssue(BaseModel):
    type: SEOIssueType
    field: str
    message: str
    suggestion: Optional[str] = None
    priority: int = Field(..., ge=1, le=10, description="10 is the most important")


class StoreSEOData(BaseModel):
    """Snapshot of the store fields the rubric looks at"""
    name: Optional[str] = None
    description: Optional[str] = None
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    meta_keywords: Optional[str] = None
    og_title: Optional[str] = None
    og_description: Optional[str] = None
    og_image: Optional[str] = None
    logo_url: Optional[str] = None
    banner_url: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    address_line1: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    facebook_url: Optional[str] = None
    instagram_url: Optional[str] = None
    twitter_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    slug: Optional[str] = None
    about: Optional[str] = None

    # Built from Store rows, which carry many more columns
    model_config = ConfigDict(extra="ignore")


class SEOValidationResult(BaseModel):
    score: int = Field(..., ge=0, le=100)
    issues: List[SEOIssue]
    strengths: List[str]
    recommendations: List[str]
    meta_title_length: int = 0
    meta_description_length: int = 0
    has_valid_images: bool = False
    has_contact_info: bool = False
    has_social_links: bool = False
    has_structured_data: bool = True
