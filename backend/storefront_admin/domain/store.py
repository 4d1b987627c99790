"""
Store Domain Model

Represents a merchant's shop as stored in the `stores` table.
This is the single source of truth for the store row structure.
"""
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from storefront_admin.domain.marketing import MarketingContent


class DomainStatus(str, Enum):
    """Custom domain lifecycle"""
    NOT_CONFIGURED = "not_configured"
    PENDING = "pending"
    VERIFIED = "verified"
    ERROR = "error"


# Columns the admin UI may write. Anything else in an update payload is dropped.
BRANDING_COLUMNS = {
    "name", "description", "about", "default_currency",
    "logo_url", "banner_url", "favicon_url",
    "primary_color", "secondary_color", "accent_color", "font_family", "theme_template",
    "info_message", "info_message_color", "info_message_font",
    "is_active",
}
THEME_COLUMNS = {
    "background_color", "text_color", "text_secondary_color",
    "button_primary_color", "button_primary_text", "button_secondary_color", "button_secondary_text",
    "link_color", "link_hover_color", "border_radius", "shadow_intensity",
}
TYPOGRAPHY_COLUMNS = {
    "heading_font", "body_font", "font_size_base",
    "heading_size_h1", "heading_size_h2", "heading_size_h3",
    "line_height", "letter_spacing",
}
LAYOUT_COLUMNS = {
    "header_style", "footer_style", "sidebar_enabled", "sidebar_position",
    "product_grid_columns", "product_card_style", "navigation_style",
}
CONTACT_COLUMNS = {
    "contact_email", "contact_phone",
    "support_email", "sales_email", "press_email", "partnership_email",
    "support_phone", "sales_phone", "whatsapp_number", "telegram_username",
    "facebook_url", "instagram_url", "twitter_url", "linkedin_url",
    "youtube_url", "tiktok_url", "pinterest_url", "snapchat_url", "discord_url", "twitch_url",
}
MARKETING_COLUMNS = {"marketing_content"}
SEO_COLUMNS = {
    "meta_title", "meta_description", "meta_keywords",
    "og_title", "og_description", "og_image",
}
LEGAL_COLUMNS = {"legal_pages"}
LOCATION_COLUMNS = {
    "address_line1", "address_line2", "city", "state_province", "postal_code", "country",
    "latitude", "longitude", "timezone", "opening_hours",
}
TRACKING_COLUMNS = {
    "google_analytics_id", "google_analytics_enabled",
    "facebook_pixel_id", "facebook_pixel_enabled",
    "google_tag_manager_id", "google_tag_manager_enabled",
    "tiktok_pixel_id", "tiktok_pixel_enabled",
    "custom_tracking_scripts", "custom_scripts_enabled",
}
COMMERCE_COLUMNS = {
    "minimum_order_amount", "maximum_order_amount", "accepted_currencies",
    "allow_partial_payment", "payment_terms", "invoice_prefix", "invoice_numbering",
    "free_shipping_threshold", "enabled_payment_providers",
}
DOMAIN_COLUMNS = {
    "custom_domain", "domain_status", "domain_verification_token",
    "domain_verified_at", "domain_error_message",
    "ssl_enabled", "redirect_www", "redirect_https",
}

UPDATABLE_COLUMNS = (
    BRANDING_COLUMNS | THEME_COLUMNS | TYPOGRAPHY_COLUMNS | LAYOUT_COLUMNS
    | CONTACT_COLUMNS | MARKETING_COLUMNS | SEO_COLUMNS | LEGAL_COLUMNS | LOCATION_COLUMNS
    | TRACKING_COLUMNS | COMMERCE_COLUMNS | DOMAIN_COLUMNS | {"slug"}
)

# Required columns: an explicit null in an update is never written
NON_NULLABLE_COLUMNS = {"name", "slug", "is_active", "sidebar_enabled"}


class Store(BaseModel):
    """
    Store domain model - a merchant's configurable shop

    Fields are grouped the way the admin screens are:
    identity, branding and theme, typography, layout, contacts,
    about-page content, SEO, legal pages, location and hours,
    tracking pixels, commerce settings and custom domain.
    """

    # Identity
    id: str = Field(..., description="Store UUID")
    user_id: str = Field(..., description="Owner (merchant) UUID")
    name: str = Field(..., description="Store name")
    slug: str = Field(..., description="URL-safe unique identifier")
    subdomain: Optional[str] = Field(None, description="Generated storefront subdomain")
    description: Optional[str] = None
    about: Optional[str] = None
    default_currency: Optional[str] = "XOF"
    is_active: bool = True

    # Branding
    logo_url: Optional[str] = None
    banner_url: Optional[str] = None
    favicon_url: Optional[str] = None
    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None
    accent_color: Optional[str] = None
    font_family: Optional[str] = None
    theme_template: Optional[str] = None
    info_message: Optional[str] = None
    info_message_color: Optional[str] = None
    info_message_font: Optional[str] = None

    # Extended theme
    background_color: Optional[str] = None
    text_color: Optional[str] = None
    text_secondary_color: Optional[str] = None
    button_primary_color: Optional[str] = None
    button_primary_text: Optional[str] = None
    button_secondary_color: Optional[str] = None
    button_secondary_text: Optional[str] = None
    link_color: Optional[str] = None
    link_hover_color: Optional[str] = None
    border_radius: Optional[str] = None
    shadow_intensity: Optional[str] = None

    # Typography
    heading_font: Optional[str] = None
    body_font: Optional[str] = None
    font_size_base: Optional[str] = None
    heading_size_h1: Optional[str] = None
    heading_size_h2: Optional[str] = None
    heading_size_h3: Optional[str] = None
    line_height: Optional[str] = None
    letter_spacing: Optional[str] = None

    # Layout
    header_style: Optional[str] = None
    footer_style: Optional[str] = None
    sidebar_enabled: bool = False
    sidebar_position: Optional[str] = None
    product_grid_columns: Optional[int] = None
    product_card_style: Optional[str] = None
    navigation_style: Optional[str] = None

    # Contact and social
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    support_email: Optional[str] = None
    sales_email: Optional[str] = None
    press_email: Optional[str] = None
    partnership_email: Optional[str] = None
    support_phone: Optional[str] = None
    sales_phone: Optional[str] = None
    whatsapp_number: Optional[str] = None
    telegram_username: Optional[str] = None
    facebook_url: Optional[str] = None
    instagram_url: Optional[str] = None
    twitter_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    youtube_url: Optional[str] = None
    tiktok_url: Optional[str] = None
    pinterest_url: Optional[str] = None
    snapchat_url: Optional[str] = None
    discord_url: Optional[str] = None
    twitch_url: Optional[str] = None

    # About page (welcome, mission, team, testimonials, ...)
    marketing_content: Optional[Dict[str, Any]] = None


    # SEO
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    meta_keywords: Optional[str] = None
    og_title: Optional[str] = None
    og_description: Optional[str] = None
    og_image: Optional[str] = None

    # Legal pages (terms_of_service, privacy_policy, ...)
    legal_pages: Optional[Dict[str, Optional[str]]] = None

    # Location and hours
    address_line1: Optional[str] = None
    address_line2: Optional[str] = None
    city: Optional[str] = None
    state_province: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    timezone: Optional[str] = None
    opening_hours: Optional[Dict[str, Any]] = None

    # Tracking pixels
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

    # Commerce
    minimum_order_amount: Optional[Decimal] = None
    maximum_order_amount: Optional[Decimal] = None
    accepted_currencies: Optional[List[str]] = None
    allow_partial_payment: bool = False
    payment_terms: Optional[str] = None
    invoice_prefix: Optional[str] = None
    invoice_numbering: Optional[str] = None
    free_shipping_threshold: Optional[Decimal] = None
    enabled_payment_providers: Optional[List[str]] = None

    # Custom domain
    custom_domain: Optional[str] = None
    domain_status: Optional[DomainStatus] = DomainStatus.NOT_CONFIGURED
    domain_verification_token: Optional[str] = None
    domain_verified_at: Optional[datetime] = None
    domain_error_message: Optional[str] = None
    ssl_enabled: bool = False
    redirect_www: bool = True
    redirect_https: bool = True

    # Metadata
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True, extra="ignore")

    @classmethod
    def from_row(cls, row: dict) -> "Store":
        """
        Build a Store from a `stores` row.

        Nullable booleans in the table come back as None; they keep the
        model defaults instead of failing validation.
        """
        data = {key: value for key, value in row.items() if value is not None or key not in _BOOL_DEFAULTS}
        if data.get("domain_status") is None:
            data["domain_status"] = DomainStatus.NOT_CONFIGURED
        return cls(**data)

    @property
    def effective_domain_status(self) -> DomainStatus:
        return self.domain_status or DomainStatus.NOT_CONFIGURED

    def to_dict(self) -> dict:
        """JSON friendly dict (Decimal -> float, datetime -> ISO)"""
        data = self.model_dump(mode="json")

        # Pydantic dumps Decimal as string in JSON mode
        for field in ["minimum_order_amount", "maximum_order_amount", "free_shipping_threshold"]:
            if data.get(field) is not None:
                data[field] = float(data[field])

        return data


_BOOL_DEFAULTS = {
    name for name, field in Store.model_fields.items()
    if isinstance(field.default, bool)
}


class StoreCreate(BaseModel):
    """Schema for creating a new store"""
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None


HEX_COLOR = r"^#[0-9a-fA-F]{6}$"
EMAIL = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"

Size = Literal["none", "sm", "md", "lg", "xl", "full"]
Shadow = Literal["none", "sm", "md", "lg", "xl"]
SectionStyle = Literal["minimal", "standard", "extended"]


class StoreUpdate(BaseModel):
    """Schema for updating branding, theme, layout, contact, marketing and SEO fields"""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    about: Optional[str] = None
    default_currency: Optional[str] = None
    logo_url: Optional[str] = None
    banner_url: Optional[str] = None
    favicon_url: Optional[str] = None
    primary_color: Optional[str] = Field(None, pattern=HEX_COLOR)
    secondary_color: Optional[str] = Field(None, pattern=HEX_COLOR)
    accent_color: Optional[str] = Field(None, pattern=HEX_COLOR)
    font_family: Optional[str] = None
    theme_template: Optional[str] = None
    info_message: Optional[str] = None
    info_message_color: Optional[str] = Field(None, pattern=HEX_COLOR)
    info_message_font: Optional[str] = None

    # Extended theme
    background_color: Optional[str] = Field(None, pattern=HEX_COLOR)
    text_color: Optional[str] = Field(None, pattern=HEX_COLOR)
    text_secondary_color: Optional[str] = Field(None, pattern=HEX_COLOR)
    button_primary_color: Optional[str] = Field(None, pattern=HEX_COLOR)
    button_primary_text: Optional[str] = Field(None, pattern=HEX_COLOR)
    button_secondary_color: Optional[str] = Field(None, pattern=HEX_COLOR)
    button_secondary_text: Optional[str] = Field(None, pattern=HEX_COLOR)
    link_color: Optional[str] = Field(None, pattern=HEX_COLOR)
    link_hover_color: Optional[str] = Field(None, pattern=HEX_COLOR)
    border_radius: Optional[Size] = None
    shadow_intensity: Optional[Shadow] = None

    # Typography
    heading_font: Optional[str] = None
    body_font: Optional[str] = None
    font_size_base: Optional[str] = None
    heading_size_h1: Optional[str] = None
    heading_size_h2: Optional[str] = None
    heading_size_h3: Optional[str] = None
    line_height: Optional[str] = None
    letter_spacing: Optional[str] = None

    # Layout
    header_style: Optional[SectionStyle] = None
    footer_style: Optional[SectionStyle] = None
    sidebar_enabled: Optional[bool] = None
    sidebar_position: Optional[Literal["left", "right"]] = None
    product_grid_columns: Optional[int] = Field(None, ge=1, le=6)
    product_card_style: Optional[Literal["minimal", "standard", "detailed"]] = None
    navigation_style: Optional[Literal["horizontal", "vertical", "mega"]] = None

    # Contact and social
    contact_email: Optional[str] = Field(None, pattern=EMAIL)
    contact_phone: Optional[str] = None
    support_email: Optional[str] = Field(None, pattern=EMAIL)
    sales_email: Optional[str] = Field(None, pattern=EMAIL)
    press_email: Optional[str] = Field(None, pattern=EMAIL)
    partnership_email: Optional[str] = Field(None, pattern=EMAIL)
    support_phone: Optional[str] = None
    sales_phone: Optional[str] = None
    whatsapp_number: Optional[str] = None
    telegram_username: Optional[str] = None
    facebook_url: Optional[str] = None
    instagram_url: Optional[str] = None
    twitter_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    youtube_url: Optional[str] = None
    tiktok_url: Optional[str] = None
    pinterest_url: Optional[str] = None
    snapchat_url: Optional[str] = None
    discord_url: Optional[str] = None
    twitch_url: Optional[str] = None

    marketing_content: Optional[MarketingContent] = None

    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    meta_keywords: Optional[str] = None
    og_title: Optional[str] = None
    og_description: Optional[str] = None
    og_image: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("name", "is_active", "sidebar_enabled")
    @classmethod
    def not_null(cls, value, info):
        if value is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return value

    def to_updates(self) -> Dict[str, Any]:
        """Fields the client actually sent, ready for the `stores` update"""
        updates = self.model_dump(exclude_unset=True)
        if self.marketing_content is not None:
            updates["marketing_content"] = self.marketing_content.to_column()
        return updates


class LegalPagesUpdate(BaseModel):
    """Schema for the legal_pages JSON column"""
    terms_of_service: Optional[str] = None
    privacy_policy: Optional[str] = None
    return_policy: Optional[str] = None
    shipping_policy: Optional[str] = None
    refund_policy: Optional[str] = None
    cookie_policy: Optional[str] = None
    faq_content: Optional[str] = None
