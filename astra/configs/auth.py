"""
Supabase Auth configuration.

Dependencies: pydantic_settings
System role: Token verification endpoint configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AuthSettings(BaseSettings):
    """Supabase project settings used to resolve bearer tokens."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="SUPABASE_",
        case_sensitive=False,
        extra="ignore",
    )

    url: str = Field(default="", description="Supabase project URL")
    service_role_key: str = Field(default="", description="Service role key sent as apikey")
    request_timeout: float = Field(default=10.0, description="Auth request timeout in seconds")
