"""
Export Service - store configuration JSON and sitemap.xml

Also holds the legal page key mapping used by the public legal endpoint
and the sitemap.
"""
import logging
import xml.etree.ElementTree as ET
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional

from storefront_admin.domain.store import Store
from storefront_admin.services.analytics_service import parse_timestamp
from storefront_admin.services.store_service import get_product_url, get_store_url

logger = logging.getLogger(__name__)

SITEMAP_NAMESPACE = "http://www.sitemaps.org/schemas/sitemap/0.9"

# Public page key -> key inside stores.legal_pages
LEGAL_PAGE_KEYS = {
    "terms": "terms_of_service",
    "privacy": "privacy_policy",
    "returns": "return_policy",
    "shipping": "shipping_policy",
    "refund": "refund_policy",
    "cookies": "cookie_policy",
    "faq": "faq_content",
}

# Theme, SEO and layout fields carried by a configuration export.
# Images are left out: they point at the source store's storage.
CONFIG_EXPORT_FIELDS = [
    # Theme
    "primary_color", "secondary_color", "accent_color", "font_family", "theme_template",
    "background_color", "text_color", "text_secondary_color",
    "button_primary_color", "button_primary_text", "button_secondary_color", "button_secondary_text",
    "link_color", "link_hover_color", "border_radius", "shadow_intensity",
    "info_message", "info_message_color", "info_message_font",
    # Typography
    "heading_font", "body_font", "font_size_base",
    "heading_size_h1", "heading_size_h2", "heading_size_h3", "line_height", "letter_spacing",
    # Layout
    "header_style", "footer_style", "sidebar_enabled", "sidebar_position",
    "product_grid_columns", "product_card_style", "navigation_style",
    # SEO
    "meta_title", "meta_description", "meta_keywords", "og_title", "og_description",
]


class LegalPageNotFound(LookupError):
    """Unknown legal page key"""


class LegalPageUnavailable(LookupError):
    """Known key but the store has no content for it"""


def get_legal_page(store: Store, page_key: str) -> str:
    """
    Raises:
        LegalPageNotFound: page_key is not one of LEGAL_PAGE_KEYS
        LegalPageUnavailable: the store left that page empty
    """
    json_key = LEGAL_PAGE_KEYS.get(page_key)
    if json_key is None:
        raise LegalPageNotFound("Legal page not found")

    content = (store.legal_pages or {}).get(json_key)
    if not content or not content.strip():
        raise LegalPageUnavailable("This legal page is not available")
    return content


def export_store_config(store: Store, now: Optional[datetime] = None) -> Dict[str, Any]:
    """Theme, typography, layout and SEO configuration of a store, without images"""
    config = {field: getattr(store, field) for field in CONFIG_EXPORT_FIELDS}
    config["exported_at"] = (now or datetime.now(timezone.utc)).isoformat()
    config["store_name"] = store.name
    return config


def _lastmod(updated_at: Any, created_at: Any) -> Optional[str]:
    moment = parse_timestamp(updated_at) or parse_timestamp(created_at)
    return moment.date().isoformat() if moment else None


def _add_url(urlset: ET.Element, loc: str, lastmod: Optional[str]) -> None:
    url = ET.SubElement(urlset, "url")
    ET.SubElement(url, "loc").text = loc
    if lastmod:
        ET.SubElement(url, "lastmod").text = lastmod


def generate_sitemap(store: Store, products: Iterable[dict]) -> str:
    """
    sitemap.xml for the public storefront

    Entries: the store home, every active product with a slug, and every
    legal page that has content.
    """
    urlset = ET.Element("urlset", xmlns=SITEMAP_NAMESPACE)
    store_url = get_store_url(store)
    store_lastmod = _lastmod(store.updated_at, store.created_at)

    _add_url(urlset, store_url, store_lastmod)

    count = 0
    for product in products:
        slug = product.get("slug")
        if not slug:
            continue
        _add_url(
            urlset,
            get_product_url(store, slug),
            _lastmod(product.get("updated_at"), product.get("created_at")),
        )
        count += 1

    legal_pages = store.legal_pages or {}
    for page_key, json_key in LEGAL_PAGE_KEYS.items():
        content = legal_pages.get(json_key)
        if content and content.strip():
            _add_url(urlset, f"{store_url}/legal/{page_key}", store_lastmod)

    logger.info(f"Sitemap generated for store {store.id}: {count} products")

    body = ET.tostring(urlset, encoding="unicode")
    return f'<?xml version="1.0" encoding="UTF-8"?>\n{body}'
