"""
Domain Layer - Business Entities

Pydantic models for the stores, settings and computed results
exchanged between repositories, services and routers.
"""
from storefront_admin.domain.store import Store, StoreCreate, StoreUpdate, DomainStatus
from storefront_admin.domain.marketing import MarketingContent
from storefront_admin.domain.seo import SEOIssue, SEOValidationResult, StoreSEOData
from storefront_admin.domain.analytics import StoreAnalytics, MonthlyStat, TimeRange
from storefront_admin.domain.notifications import NotificationSettings
from storefront_admin.domain.commerce import TaxConfiguration, CommerceSettingsUpdate
from storefront_admin.domain.custom_domain import DNSVerificationResult, DNSInstructions

__all__ = [
    'Store', 'StoreCreate', 'StoreUpdate', 'DomainStatus',
    'MarketingContent',
    'SEOIssue', 'SEOValidationResult', 'StoreSEOData',
    'StoreAnalytics', 'MonthlyStat', 'TimeRange',
    'NotificationSettings',
    'TaxConfiguration', 'CommerceSettingsUpdate',
    'DNSVerificationResult', 'DNSInstructions',
]
