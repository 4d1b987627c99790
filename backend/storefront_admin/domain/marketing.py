"""
Marketing content shown on the store's "About" page

Stored as the `stores.marketing_content` JSON column.
"""
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class TeamMember(BaseModel):
    name: str = Field(..., min_length=1)
    role: Optional[str] = None
    bio: Optional[str] = None
    photo_url: Optional[str] = None
    social_links: Dict[str, str] = Field(default_factory=dict)


class Testimonial(BaseModel):
    author: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    rating: int = Field(5, ge=1, le=5)
    photo_url: Optional[str] = None
    company: Optional[str] = None


class Certification(BaseModel):
    name: str = Field(..., min_length=1)
    issuer: Optional[str] = None
    image_url: Optional[str] = None
    verification_url: Optional[str] = None
    expiry_date: Optional[str] = None


class MarketingContent(BaseModel):
    """Welcome message, mission/vision, values, story, team, testimonials, certifications"""
    welcome_message: Optional[str] = None
    mission_statement: Optional[str] = None
    vision_statement: Optional[str] = None
    values: Optional[List[str]] = None
    story: Optional[str] = None
    team_section: Optional[List[TeamMember]] = None
    testimonials: Optional[List[Testimonial]] = None
    certifications: Optional[List[Certification]] = None

    def to_column(self) -> dict:
        """JSON for the column: blank texts and empty lists are left out"""
        data = self.model_dump(exclude_none=True)
        if "values" in data:
            data["values"] = [value.strip() for value in data["values"] if value and value.strip()]
        return {key: value for key, value in data.items() if not _is_blank(value)}


def _is_blank(value) -> bool:
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, list):
        return not value
    return False
