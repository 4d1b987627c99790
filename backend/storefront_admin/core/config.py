"""
Centralized application configuration
"""
import json
from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Storefront admin settings, read from environment and .env"""

    # API Settings
    API_TITLE: str = "Storefront Admin API"
    API_VERSION: str = "1.0.0"
    API_DESCRIPTION: str = "Backend for storefront administration and shopper pages"
    LOG_LEVEL: str = "INFO"

    # Hosted database (Supabase)
    SUPABASE_URL: str = ""
    SUPABASE_SERVICE_ROLE_KEY: str = ""
    SUPABASE_JWT_SECRET: str = ""
    # Only used by the /health database check
    DATABASE_URL: Optional[str] = None

    # CORS - Can be string (comma-separated) or JSON array
    # Example: "http://localhost:5173,https://admin.example.com" or '["http://localhost:5173"]'
    ALLOWED_ORIGINS: Optional[str] = "http://localhost:5173,http://localhost:3000"

    # Cron caller for scheduled domain re-verification (X-Cron-Key header)
    CRON_API_KEY: Optional[str] = None

    # Storefront URLs
    STOREFRONT_BASE_DOMAIN: str = "myshop.example"
    MAX_STORES_PER_USER: int = 3

    # Custom domains
    DOMAIN_TARGET_IP: str = "185.158.133.1"
    VERIFICATION_PREFIX: str = "storefront"
    DNS_RESOLVER_URL: str = "https://dns.google/resolve"

    # Geocoding (Nominatim compatible)
    GEOCODER_URL: str = "https://nominatim.openstreetmap.org/search"
    GEOCODER_USER_AGENT: str = "storefront-admin/1.0"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    def get_allowed_origins(self) -> List[str]:
        """Parse ALLOWED_ORIGINS string into list"""
        if not self.ALLOWED_ORIGINS:
            return ["http://localhost:5173"]

        if self.ALLOWED_ORIGINS.strip() == "*":
            return ["*"]

        # Try JSON parse first (for array format)
        try:
            origins = json.loads(self.ALLOWED_ORIGINS)
            if isinstance(origins, list):
                return origins
        except (json.JSONDecodeError, ValueError):
            pass

        # Fall back to comma-separated string
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
