
from pydantic import Field
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application configuration loaded from environment variables / .env file."""

    app_name: str = "Artisan Market API"
    app_env: str = "development"
    app_port: int = 8000
    api_prefix: str = Field(default="", alias="API_PREFIX")  # e.g. "/make-server"
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")

    # Database (KV store + Vendors table). SQLite for local dev, Postgres in prod.
    database_url: str = Field(
        default="sqlite+aiosqlite:///./market_dev.db",
        alias="DATABASE_URL",
    )
    auto_create_tables: bool = Field(default=True, alias="AUTO_CREATE_TABLES")

    # Resend (new-application notification emails)
    resend_api_key: str | None = Field(default=None, alias="RESEND_API_KEY")
    resend_api_url: str = Field(
        default="https://api.resend.com/emails", alias="RESEND_API_URL",
    )
    notification_from: str = Field(
        default="Amherst Artisan Market <onboarding@resend.dev>",
        alias="NOTIFICATION_FROM",
    )
    notification_to: list[str] = Field(default_factory=list, alias="NOTIFICATION_TO")
    email_timeout_seconds: float = Field(default=10.0, alias="EMAIL_TIMEOUT_SECONDS")

    # Admin dashboard access
    admin_password: str | None = Field(default=None, alias="ADMIN_PASSWORD")
    admin_auth_enabled: bool = Field(default=True, alias="ADMIN_AUTH_ENABLED")
    admin_session_ttl_minutes: int = Field(
        default=480, alias="ADMIN_SESSION_TTL_MINUTES",
    )
    admin_login_delay_seconds: float = Field(
        default=0.5, alias="ADMIN_LOGIN_DELAY_SECONDS",
    )  # slows down password guessing

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "populate_by_name": True,
    }

    @property
    def email_enabled(self) -> bool:
        """Notification emails are sent only when a Resend key is configured."""
        return bool(self.resend_api_key)

settings = Settings()
