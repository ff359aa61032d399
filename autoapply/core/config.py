"""
Configuration management for AutoApply.

Loads settings from environment variables with sensible defaults.
Uses pydantic-settings for validation.
"""

from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class MailSettings(BaseSettings):
    """Outbound email settings - Resend as primary."""

    provider: str = Field(
        default="resend",
        description="Email transport: resend, smtp, or log (dry run)"
    )
    resend_api_key: Optional[str] = Field(
        default=None,
        description="Resend API key"
    )
    resend_api_url: str = Field(
        default="https://api.resend.com/emails",
        description="Resend send endpoint"
    )
    from_address: str = Field(
        default="AutoApply UAE <onboarding@resend.dev>",
        description="Sender shown on every application email"
    )

    # SMTP fallback
    smtp_host: Optional[str] = Field(default=None)
    smtp_port: int = Field(default=587)
    smtp_username: Optional[str] = Field(default=None)
    smtp_password: Optional[str] = Field(default=None)

    timeout: float = Field(
        default=30.0,
        description="Seconds before a single send is abandoned"
    )

    class Config:
        env_prefix = "MAIL_"


class JobSearchSettings(BaseSettings):
    """JSearch (RapidAPI) job listing settings."""

    rapidapi_key: Optional[str] = Field(
        default=None,
        description="RapidAPI key for JSearch"
    )
    api_host: str = Field(default="jsearch.p.rapidapi.com")
    country: str = Field(
        default="ae",
        description="ISO country code passed to JSearch"
    )
    location_suffix: str = Field(
        default="in UAE",
        description="Appended to every query to scope results geographically"
    )
    default_query: str = Field(default="software developer")
    timeout: float = Field(default=30.0)

    class Config:
        env_prefix = "JSEARCH_"


class ParserSettings(BaseSettings):
    """CV parsing limits."""

    max_skills: int = Field(default=20)
    summary_max_chars: int = Field(default=300)
    raw_preview_chars: int = Field(
        default=500,
        description="Characters of decoded CV text echoed back to the client"
    )

    class Config:
        env_prefix = "PARSER_"


class Settings(BaseSettings):
    """Main application settings aggregating all sub-settings."""

    # Application
    app_name: str = "AutoApply UAE"
    debug: bool = Field(default=False)
    environment: str = Field(default="development")

    # Sub-settings
    mail: MailSettings = Field(default_factory=MailSettings)
    job_search: JobSearchSettings = Field(default_factory=JobSearchSettings)
    parser: ParserSettings = Field(default_factory=ParserSettings)

    class Config:
        env_prefix = "AUTOAPPLY_"


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get application settings. Useful for dependency injection."""
    return settings
