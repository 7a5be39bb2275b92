from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseSettings):
    # Application settings
    app_name: str = "hostpanel"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"

    # Database settings
    database_url: str = "sqlite+aiosqlite:///./data/hostpanel.db"

    # Logging settings
    log_level: str = "INFO"
    log_format: str = "text"  # "text" or "json"

    # Components, in install order (dotted class paths)
    servers: list[str] = []
    packages: list[str] = []

    # Available plugins (dotted class paths); enabled state lives in the plugin table
    plugins: list[str] = []

    # Setup behaviour
    restart_services: bool = True

    # Reconciliation scheduler (0 disables it)
    reconcile_interval_seconds: int = 0

    # Admin command surface
    admin_token: str | None = None

    model_config = SettingsConfigDict(
        env_prefix="HOSTPANEL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()
