"""
SEO Validator - scores a store's metadata completeness

Pure function of the store snapshot: no I/O, no randomness.
Starts at 100 and subtracts points per rubric rule; missing
fields lower the score and add issues, nothing raises.
"""
from typing import List

from storefront_admin.domain.seo import (
    SEOIssue,
    SEOIssueType,
    SEOValidationResult,
    StoreSEOData,
)

# Length windows (characters)
NAME_MAX = 60
DESCRIPTION_MIN = 50
DESCRIPTION_MAX = 300
META_TITLE_MIN = 30
META_TITLE_MAX = 60
META_DESCRIPTION_MIN = 120
META_DESCRIPTION_MAX = 160


def _blank(value) -> bool:
    return not value or not value.strip()


def _issue(issue_type: SEOIssueType, field: str, message: str, suggestion: str, priority: int) -> SEOIssue:
    return SEOIssue(type=issue_type, field=field, message=message, suggestion=suggestion, priority=priority)


def validate_store_seo(store: StoreSEOData) -> SEOValidationResult:
    """
    Validate a store's SEO data and compute its score

    Args:
        store: Snapshot of the store's textual and media fields

    Returns:
        SEOValidationResult with score (0-100), issues sorted by priority,
        strengths, recommendations and summary flags
    """
    issues: List[SEOIssue] = []
    strengths: List[str] = []
    recommendations: List[str] = []
    score = 100

    # 1. Store name
    if _blank(store.name):
        issues.append(_issue(
            SEOIssueType.ERROR, "name",
            "Store name is required",
            "Add a clear, descriptive store name",
            10,
        ))
        score -= 10
    elif len(store.name) > NAME_MAX:
        issues.append(_issue(
            SEOIssueType.WARNING, "name",
            "Store name is too long",
            f"Shorten the name to under {NAME_MAX} characters (currently: {len(store.name)})",
            5,
        ))
        score -= 3
    else:
        strengths.append("Store name set")

    # 2. Description
    if _blank(store.description):
        issues.append(_issue(
            SEOIssueType.ERROR, "description",
            "Store description is required",
            "Add a clear description of your store (150-300 characters recommended)",
            9,
        ))
        score -= 10
    elif len(store.description) < DESCRIPTION_MIN:
        issues.append(_issue(
            SEOIssueType.WARNING, "description",
            "Description is too short",
            f"Extend the description to at least {DESCRIPTION_MIN} characters for better visibility",
            6,
        ))
        score -= 5
    elif len(store.description) > DESCRIPTION_MAX:
        issues.append(_issue(
            SEOIssueType.WARNING, "description",
            "Description is too long",
            f"Shorten the description to under {DESCRIPTION_MAX} characters",
            4,
        ))
        score -= 2
    else:
        strengths.append("Description set")

    # 3. Meta title (falls back to the store name)
    meta_title = store.meta_title or store.name or ""
    meta_title_length = len(meta_title)

    if not store.meta_title:
        issues.append(_issue(
            SEOIssueType.WARNING, "meta_title",
            "Custom SEO title is not set",
            "Add a custom SEO title optimised for search engines",
            8,
        ))
        score -= 5
    else:
        strengths.append("Custom SEO title set")

    if 0 < meta_title_length < META_TITLE_MIN:
        issues.append(_issue(
            SEOIssueType.WARNING, "meta_title",
            "SEO title is too short",
            f"Extend the title to {META_TITLE_MIN}-{META_TITLE_MAX} characters (currently: {meta_title_length})",
            7,
        ))
        score -= 3
    elif meta_title_length > META_TITLE_MAX:
        issues.append(_issue(
            SEOIssueType.WARNING, "meta_title",
            "SEO title is too long and will be truncated in results",
            f"Shorten the title to {META_TITLE_MAX} characters maximum (currently: {meta_title_length})",
            7,
        ))
        score -= 4

    # 4. Meta description (falls back to the description)
    meta_description = store.meta_description or store.description or ""
    meta_description_length = len(meta_description)

    if not store.meta_description and not store.description:
        issues.append(_issue(
            SEOIssueType.ERROR, "meta_description",
            "SEO description is not set",
            f"Add an SEO description of {META_DESCRIPTION_MIN}-{META_DESCRIPTION_MAX} characters",
            9,
        ))
        score -= 8
    else:
        if not store.meta_description:
            issues.append(_issue(
                SEOIssueType.INFO, "meta_description",
                "General description used as meta description",
                f"Write a separate SEO description ({META_DESCRIPTION_MIN}-{META_DESCRIPTION_MAX} characters)",
                5,
            ))
            score -= 2
        else:
            strengths.append("Custom SEO description set")

        if 0 < meta_description_length < META_DESCRIPTION_MIN:
            issues.append(_issue(
                SEOIssueType.WARNING, "meta_description",
                "SEO description is too short",
                f"Extend the description to {META_DESCRIPTION_MIN}-{META_DESCRIPTION_MAX} characters "
                f"(currently: {meta_description_length})",
                6,
            ))
            score -= 3
        elif meta_description_length > META_DESCRIPTION_MAX:
            issues.append(_issue(
                SEOIssueType.WARNING, "meta_description",
                "SEO description is too long and will be truncated",
                f"Shorten the description to {META_DESCRIPTION_MAX} characters maximum "
                f"(currently: {meta_description_length})",
                6,
            ))
            score -= 4

    # 5. Keywords
    if _blank(store.meta_keywords):
        issues.append(_issue(
            SEOIssueType.INFO, "meta_keywords",
            "SEO keywords are not set",
            "Add relevant comma-separated keywords (optional but recommended)",
            3,
        ))
        score -= 2
    else:
        strengths.append("SEO keywords set")

    # 6. Images
    has_logo = bool(store.logo_url)
    has_banner = bool(store.banner_url)
    has_og_image = bool(store.og_image)

    if not has_logo:
        issues.append(_issue(
            SEOIssueType.WARNING, "logo_url",
            "Store logo is not set",
            "Add a logo to strengthen your brand image",
            6,
        ))
        score -= 5
    else:
        strengths.append("Logo set")

    if not has_banner:
        issues.append(_issue(
            SEOIssueType.INFO, "banner_url",
            "Store banner is not set",
            "Add a banner to personalise your store",
            4,
        ))
        score -= 2
    else:
        strengths.append("Banner set")

    if not has_og_image:
        issues.append(_issue(
            SEOIssueType.WARNING, "og_image",
            "Open Graph image is not set",
            "Add an Open Graph image for better sharing on social networks",
            7,
        ))
        score -= 5
    else:
        strengths.append("Open Graph image set")

    has_valid_images = has_logo or has_banner or has_og_image

    # 7. Contact information
    has_email = bool(store.contact_email)
    has_phone = bool(store.contact_phone)
    has_address = bool(store.address_line1 and store.city and store.country)
    has_contact_info = has_email or has_phone or has_address

    if not has_contact_info:
        issues.append(_issue(
            SEOIssueType.WARNING, "contact",
            "No contact information is set",
            "Add at least an email, a phone number or an address to build customer trust",
            7,
        ))
        score -= 8
    else:
        strengths.append("Contact information set")
        if has_email:
            strengths.append("Contact email available")
        if has_phone:
            strengths.append("Contact phone available")
        if has_address:
            strengths.append("Full address available")

    # 8. Social networks
    has_social_links = bool(
        store.facebook_url or store.instagram_url or store.twitter_url or store.linkedin_url
    )

    if not has_social_links:
        issues.append(_issue(
            SEOIssueType.INFO, "social",
            "No social network links are set",
            "Add your social network links to improve your online presence",
            4,
        ))
        score -= 3
    else:
        strengths.append("Social network links set")

    # 9. Slug
    if _blank(store.slug):
        issues.append(_issue(
            SEOIssueType.ERROR, "slug",
            "Store slug is required",
            "The slug is generated automatically from the name",
            10,
        ))
        score -= 10
    else:
        strengths.append("Slug set")

    # 10. Recommendations
    if score < 50:
        recommendations.append("Your store needs significant SEO improvements to rank well.")
    elif score < 70:
        recommendations.append("Your store has a good SEO base but can be improved.")
    elif score < 85:
        recommendations.append("Your store is well optimised. A few minor improvements are possible.")
    else:
        recommendations.append("Excellent! Your store is very well optimised for search engines.")

    if not has_contact_info:
        recommendations.append("Add contact information to improve trust and local search ranking.")

    if not has_og_image:
        recommendations.append("Add an Open Graph image to improve sharing on social networks.")

    if meta_description_length < META_DESCRIPTION_MIN or meta_description_length > META_DESCRIPTION_MAX:
        recommendations.append(
            f"Tune your SEO description to {META_DESCRIPTION_MIN}-{META_DESCRIPTION_MAX} characters."
        )

    if not has_social_links:
        recommendations.append("Add your social network links to strengthen your online presence.")

    score = max(0, min(100, score))

    # Most important first; sorted() is stable for equal priorities
    issues = sorted(issues, key=lambda issue: issue.priority, reverse=True)

    return SEOValidationResult(
        score=round(score),
        issues=issues,
        strengths=strengths,
        recommendations=recommendations,
        meta_title_length=meta_title_length,
        meta_description_length=meta_description_length,
        has_valid_images=has_valid_images,
        has_contact_info=has_contact_info,
        has_social_links=has_social_links,
        # JSON-LD is always generated for the storefront
        has_structured_data=True,
    )
