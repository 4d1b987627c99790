"""
Tracking pixel settings (injected into the public storefront only)
"""
from typing import Optional

from pydantic import BaseModel


class TrackingSettings(BaseModel):
    google_analytics_id: Optional[str] = None
    google_analytics_enabled: bool = False
    facebook_pixel_id: Optional[str] = None
    facebook_pixel_enabled: bool = False
    google_tag_manager_id: Optional[str] = None
    google_tag_manager_enabled: bool = False
    tiktok_pixel_id: Optional[str] = None
    tiktok_pixel_enabled: bool = False
    custom_tracking_scripts: Optional[str] = None
    custom_scripts_enabled: bool = False
