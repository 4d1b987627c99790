"""
Unit tests for the store update schema and marketing content
"""
import pytest
from pydantic import ValidationError

from storefront_admin.domain.marketing import MarketingContent
from storefront_admin.domain.store import Store, StoreUpdate


class TestStoreUpdate:

    def test_only_sent_fields_are_updated(self):
        update = StoreUpdate(header_style="minimal", sidebar_enabled=False)

        assert update.to_updates() == {"header_style": "minimal", "sidebar_enabled": False}

    def test_explicit_null_name_rejected(self):
        with pytest.raises(ValidationError, match="name cannot be null"):
            StoreUpdate(name=None)

    def test_explicit_null_description_allowed(self):
        assert StoreUpdate(description=None).to_updates() == {"description": None}

    @pytest.mark.parametrize("field,value", [
        ("header_style", "huge"),
        ("border_radius", "round"),
        ("sidebar_position", "top"),
        ("product_grid_columns", 9),
        ("background_color", "white"),
        ("support_email", "not-an-email"),
        ("sidebar_enabled", None),
    ])
    def test_invalid_layout_and_contact_values(self, field, value):
        with pytest.raises(ValidationError):
            StoreUpdate(**{field: value})

    def test_marketing_content_is_compacted(self):
        update = StoreUpdate(marketing_content={
            "welcome_message": "Bienvenue chez Boutique Faso",
            "mission_statement": "   ",
            "values": ["Quality", " ", "Fair trade "],
            "team_section": [{"name": "Awa", "role": "Founder"}],
            "testimonials": [],
        })

        content = update.to_updates()["marketing_content"]

        assert content == {
            "welcome_message": "Bienvenue chez Boutique Faso",
            "values": ["Quality", "Fair trade"],
            "team_section": [{"name": "Awa", "role": "Founder", "social_links": {}}],
        }


class TestMarketingContent:

    def test_testimonial_rating_range(self):
        with pytest.raises(ValidationError):
            MarketingContent(testimonials=[{"author": "Ines", "content": "Great", "rating": 6}])

    def test_empty_content(self):
        assert MarketingContent().to_column() == {}


def test_store_row_keeps_layout_and_marketing_columns(store_row):
    store = Store.from_row({
        **store_row,
        "footer_style": "extended",
        "sidebar_enabled": None,
        "youtube_url": "https://youtube.com/@boutiquefaso",
        "marketing_content": {"story": "Founded in 2019"},
    })

    assert store.footer_style == "extended"
    assert store.sidebar_enabled is False
    assert store.youtube_url == "https://youtube.com/@boutiquefaso"
    assert store.to_dict()["marketing_content"] == {"story": "Founded in 2019"}
