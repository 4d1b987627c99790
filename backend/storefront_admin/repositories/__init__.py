"""
Repository Layer - Data Access

This layer talks to the hosted database (tables and RPC functions)
and returns domain models. Repositories keep query details out of services.
"""
from storefront_admin.repositories.store_repository import StoreRepository
from storefront_admin.repositories.analytics_repository import AnalyticsRepository
from storefront_admin.repositories.product_repository import ProductRepository
from storefront_admin.repositories.settings_repository import (
    NotificationSettingsRepository,
    TaxConfigurationRepository,
)

__all__ = [
    'StoreRepository',
    'AnalyticsRepository',
    'ProductRepository',
    'NotificationSettingsRepository',
    'TaxConfigurationRepository',
]
