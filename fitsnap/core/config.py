"""Application configuration from environment variables."""

from functools import lru_cache
from urllib.parse import quote_plus

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment (and .env file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = "FitSnap API"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # API
    api_prefix: str = "/api"

    # Frontend the auth callback redirects back to
    site_url: str = "http://localhost:3000"
    login_path: str = "/login"
    dashboard_path: str = "/dashboard"
    # Where magic links land: this API's auth callback route
    auth_callback_url: str = "http://localhost:8000/api/auth/callback"

    # BaaS project: the anon key is the public credential tier, used for the auth API
    supabase_url: str = "http://localhost:54321"
    supabase_anon_key: str = ""
    auth_timeout_seconds: float = 10.0

    # BaaS Postgres, reached with the service credential (bypasses row-level security)
    database_host: str = "localhost"
    database_port: int = 54322
    database_user: str = "postgres"
    database_password: str = ""  # Set in .env - never commit
    database_name: str = "postgres"
    database_ssl_mode: str = "disable"

    # Pool (production tuning)
    database_pool_size: int = 5
    database_max_overflow: int = 10

    # Users whose email ends with this domain are treated as admins in the UI
    admin_email_domain: str = "@fitsnap.com"

    # CORS: comma-separated list of allowed origins in production
    cors_origins: str = ""

    def _build_db_url(self, scheme: str = "postgresql", ssl_query: str = "sslmode=disable") -> str:
        user = quote_plus(self.database_user)
        password = quote_plus(self.database_password)
        return (
            f"{scheme}://{user}:{password}@{self.database_host}:{self.database_port}"
            f"/{self.database_name}?{ssl_query}"
        )

    @property
    def database_url(self) -> str:
        """Synchronous URL for Alembic and tooling."""
        return self._build_db_url(scheme="postgresql", ssl_query=f"sslmode={self.database_ssl_mode}")

    @property
    def async_database_url(self) -> str:
        """Async URL for FastAPI (asyncpg driver)."""
        ssl = "require" if self.database_ssl_mode != "disable" else "disable"
        return self._build_db_url(scheme="postgresql+asyncpg", ssl_query=f"ssl={ssl}")

    @property
    def auth_url(self) -> str:
        """Base URL of the BaaS auth REST API."""
        return f"{self.supabase_url.rstrip('/')}/auth/v1"

    def site_path(self, path: str) -> str:
        return f"{self.site_url.rstrip('/')}{path}"


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
