"""Configuration management with pydantic-settings and validation."""

from pydantic_settings import BaseSettings
from pydantic import field_validator


# Fields that must be present and non-empty
REQUIRED_FIELDS = {
    "database_url",
    "session_secret_key",
}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database Configuration
    database_url: str

    # Signed session cookie (populated by the OAuth login flow)
    session_secret_key: str
    session_cookie_name: str = "recipe_ideas_session"

    # Resend transactional email (optional, reports fail without it)
    resend_api_key: str = ""
    resend_api_url: str = "https://api.resend.com/emails"
    admin_email: str = "admin@recipe-ideas.online"
    report_from_email: str = "Recipe Ideas Feedback <admin@recipe-ideas.online>"

    # Blob storage for uploaded images (optional)
    blob_read_write_token: str = ""
    blob_api_url: str = "https://blob.vercel-storage.com"

    http_timeout_seconds: float = 10.0

    # Behaviour knobs
    max_suggestions: int = 7
    recently_viewed_max: int = 12
    feedback_review_threshold: int = 3

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    @field_validator("database_url", mode="before")
    @classmethod
    def fix_database_url(cls, v):
        """Hosting providers hand out postgres:// but SQLAlchemy requires postgresql://."""
        if isinstance(v, str) and v.startswith("postgres://"):
            return v.replace("postgres://", "postgresql://", 1)
        return v

    @field_validator("*", mode="before")
    @classmethod
    def check_not_empty(cls, v, info):
        """Validate that required environment variables are not empty."""
        if info.field_name not in REQUIRED_FIELDS:
            return v
        if v is None:
            raise ValueError("Required environment variable is not set")
        if isinstance(v, str) and v.strip() == "":
            raise ValueError("Required environment variable is empty")
        return v

    @property
    def email_configured(self) -> bool:
        return bool(self.resend_api_key)


def get_settings() -> Settings:
    """Load and validate settings from environment.

    Raises:
        ValidationError: If required environment variables are missing or invalid.
    """
    return Settings()
