"""
Tracking pixels - ID validation and the public storefront config
"""
import re
from typing import Dict, List

from storefront_admin.domain.store import Store
from storefront_admin.domain.tracking import TrackingSettings

# (id field, enabled field, label, pattern, expected format)
PIXELS = [
    (
        "google_analytics_id", "google_analytics_enabled", "Google Analytics",
        re.compile(r"^(G-[A-Z0-9]{10}|UA-\d{9}-\d)$"), "G-XXXXXXXXXX or UA-XXXXXXXXX-X",
    ),
    (
        "facebook_pixel_id", "facebook_pixel_enabled", "Facebook Pixel",
        re.compile(r"^\d{15,16}$"), "15-16 digits",
    ),
    (
        "google_tag_manager_id", "google_tag_manager_enabled", "Google Tag Manager",
        re.compile(r"^GTM-[A-Z0-9]{7}$"), "GTM-XXXXXXX",
    ),
    (
        "tiktok_pixel_id", "tiktok_pixel_enabled", "TikTok Pixel",
        re.compile(r"^[A-Z0-9]{20}$"), "20 uppercase letters or digits",
    ),
]


def validate_tracking_settings(tracking: TrackingSettings) -> TrackingSettings:
    """
    Reject enabled pixels whose ID is empty or malformed

    Disabled pixels are kept as typed so the merchant can finish them later.

    Raises:
        ValueError: one message per problem, joined with "; "
    """
    problems: List[str] = []

    for id_field, enabled_field, label, pattern, expected in PIXELS:
        if not getattr(tracking, enabled_field):
            continue
        pixel_id = (getattr(tracking, id_field) or "").strip()
        if not pixel_id:
            problems.append(f"{label} is enabled but has no ID")
        elif not pattern.match(pixel_id):
            problems.append(f"{label} ID '{pixel_id}' is invalid (expected {expected})")

    if tracking.custom_scripts_enabled and not (tracking.custom_tracking_scripts or "").strip():
        problems.append("Custom scripts are enabled but empty")

    if problems:
        raise ValueError("; ".join(problems))

    return tracking


def public_tracking_config(store: Store) -> Dict[str, str]:
    """Enabled pixels only, keyed by id field, for injection in the storefront"""
    config = {}
    for id_field, enabled_field, _, _, _ in PIXELS:
        pixel_id = getattr(store, id_field)
        if getattr(store, enabled_field) and pixel_id:
            config[id_field] = pixel_id
    if store.custom_scripts_enabled and store.custom_tracking_scripts:
        config["custom_tracking_scripts"] = store.custom_tracking_scripts
    return config
