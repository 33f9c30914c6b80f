from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Application
    app_name: str = "user-admin-api"
    environment: str = "development"
    log_level: str = "info"

    # Database
    database_url: str = "sqlite:///./user_admin.db"

    # Avatars
    webapp_url: str = "http://localhost:3000"
    gravatar_url: str = "https://www.gravatar.com/avatar"

    # JWT
    secret_key: str = "change-me"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 30

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_file_encoding="utf-8",
        extra="ignore",
    )


def get_settings() -> Settings:
    """Get application settings."""
    return Settings()


settings = get_settings()
