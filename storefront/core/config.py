"""Storefront client configuration"""

import os
from decimal import Decimal
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Client settings loaded from environment"""

    model_config = SettingsConfigDict(
        env_prefix="STOREFRONT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "eBook Store"
    debug: bool = False

    # Backend API
    api_base_url: str = "http://localhost:5000/api"
    request_timeout: float = 30.0

    # Auth
    auth_token: Optional[str] = None
    auth_token_path: Optional[str] = None

    # Checkout
    shipping_fee_per_physical_item: Decimal = Decimal("50")
    currency: str = "BDT"
    default_payment_method: str = "sslcommerz"

    def get_auth_token(self) -> Optional[str]:
        """Get bearer token from file or inline"""
        if self.auth_token:
            return self.auth_token

        if self.auth_token_path and os.path.exists(self.auth_token_path):
            with open(self.auth_token_path, "r") as f:
                return f.read().strip() or None

        return None


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
