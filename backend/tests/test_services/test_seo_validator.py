"""
Unit tests for the store SEO rubric
"""
import pytest

from storefront_admin.domain.seo import SEOIssueType, StoreSEOData
from storefront_admin.services.seo_validator import validate_store_seo


def complete_store(**overrides):
    data = {
        "name": "Boutique Faso",
        "slug": "boutique-faso",
        "description": "Quality handmade goods. " * 4,
        "meta_title": "Boutique Faso - Handmade clothing from Burkina",
        "meta_description": "Handmade clothing. " * 7,
        "meta_keywords": "clothing, handmade, burkina",
        "logo_url": "https://cdn.example.com/logo.png",
        "banner_url": "https://cdn.example.com/banner.png",
        "og_image": "https://cdn.example.com/og.png",
        "contact_email": "contact@boutique-faso.example",
        "facebook_url": "https://facebook.com/boutiquefaso",
    }
    data.update(overrides)
    return StoreSEOData(**data)


class TestValidateStoreSEO:
    """Test the scoring rubric"""

    def test_empty_store_scores_32(self):
        """Every rule fails on an empty snapshot"""
        result = validate_store_seo(StoreSEOData())

        assert result.score == 32
        assert len(result.issues) == 11
        assert result.has_valid_images is False
        assert result.has_contact_info is False
        assert result.has_social_links is False
        assert result.has_structured_data is True
        assert result.recommendations[0].startswith("Your store needs significant SEO improvements")

    def test_complete_store_scores_100(self):
        result = validate_store_seo(complete_store())

        assert result.score == 100
        assert result.issues == []
        assert "Custom SEO title set" in result.strengths
        assert "Contact email available" in result.strengths
        assert result.recommendations == [
            "Excellent! Your store is very well optimised for search engines."
        ]

    def test_issues_sorted_by_priority_descending(self):
        result = validate_store_seo(StoreSEOData())

        priorities = [issue.priority for issue in result.issues]
        assert priorities == sorted(priorities, reverse=True)
        # name and slug both have priority 10; name was found first
        assert [issue.field for issue in result.issues[:2]] == ["name", "slug"]

    @pytest.mark.parametrize("length,expected_message", [
        (29, "SEO title is too short"),
        (30, None),
        (60, None),
        (61, "SEO title is too long and will be truncated in results"),
    ])
    def test_meta_title_length_window(self, length, expected_message):
        result = validate_store_seo(complete_store(meta_title="t" * length))

        messages = [issue.message for issue in result.issues if issue.field == "meta_title"]
        if expected_message is None:
            assert messages == []
        else:
            assert messages == [expected_message]
        assert result.meta_title_length == length

    def test_meta_title_falls_back_to_name(self):
        result = validate_store_seo(complete_store(meta_title=None))

        assert result.meta_title_length == len("Boutique Faso")
        fields = [issue.message for issue in result.issues if issue.field == "meta_title"]
        assert "Custom SEO title is not set" in fields
        assert "SEO title is too short" in fields

    def test_description_used_as_meta_description(self):
        result = validate_store_seo(complete_store(meta_description=None))

        types = {issue.message: issue.type for issue in result.issues if issue.field == "meta_description"}
        assert types["General description used as meta description"] == SEOIssueType.INFO
        assert types["SEO description is too short"] == SEOIssueType.WARNING
        assert result.meta_description_length == len("Quality handmade goods. " * 4)

    def test_address_counts_as_contact_only_when_complete(self):
        partial = validate_store_seo(complete_store(contact_email=None, address_line1="Rue 12", city="Ouagadougou"))
        full = validate_store_seo(complete_store(
            contact_email=None, address_line1="Rue 12", city="Ouagadougou", country="BF"
        ))

        assert partial.has_contact_info is False
        assert full.has_contact_info is True
        assert "Full address available" in full.strengths

    def test_score_never_decreases_when_a_field_is_added(self):
        """Filling in fields one by one only raises the score"""
        target = complete_store().model_dump()
        current = {}
        previous_score = validate_store_seo(StoreSEOData()).score

        for field, value in target.items():
            if value is None:
                continue
            current[field] = value
            score = validate_store_seo(StoreSEOData(**current)).score
            assert score >= previous_score, f"adding {field} lowered the score"
            previous_score = score

        assert previous_score == 100

    def test_whitespace_only_name_is_missing(self):
        result = validate_store_seo(complete_store(name="   "))

        assert any(issue.message == "Store name is required" for issue in result.issues)
