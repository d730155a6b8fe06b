"""
ShopAdmin Configuration Module
Loads settings from environment variables with sensible defaults.
"""

from functools import lru_cache
from typing import List
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    # Application
    app_name: str = "ShopAdmin"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 5000

    # Authentication
    secret_key: str = Field(..., min_length=32)  # Required, no default
    access_token_expire_minutes: int = 60 * 24 * 3  # 3 days
    jwt_algorithm: str = "HS256"
    token_header: str = "token"  # Carries "Bearer <jwt>"
    
    # Rate Limiting
    rate_limit_enabled: bool = True  # Login and registration limits

    # Database
    database_url: str = Field(...)
    database_echo: bool = False

    # Logging
    log_dir: str = "/var/log/shopadmin"
    log_level: str = "INFO"

    # API Settings
    api_prefix: str = "/api"
    cors_origins: str = "*"
    
    @field_validator('secret_key')
    @classmethod
    def validate_secret_key(cls, v: str) -> str:
        """Validate that the secret key is secure."""
        if not v or len(v) < 32:
            raise ValueError("SECRET_KEY must be at least 32 characters long")
        
        insecure_values = [
            "change-me-in-production",
            "secret",
            "password",
            "changeme",
            "default",
        ]
        if any(bad in v.lower() for bad in insecure_values):
            raise ValueError(
                "SECRET_KEY appears to be insecure. Generate a secure key with: "
                "python -c 'import secrets; print(secrets.token_hex(32))'"
            )
        
        return v
    
    @property
    def cors_origins_list(self) -> List[str]:
        """Parse comma-separated CORS origins into a list."""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]
    
    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
