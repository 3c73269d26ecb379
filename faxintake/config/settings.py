from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "authpilot"
    db_username: str = "authpilot"
    db_password: str = "secret"

    storage_backend: str = "local"
    storage_local_root: str = "/app/faxes"
    storage_connection_string: str = ""
    storage_container: str = "faxes"

    watch_poll_interval_seconds: int = 5
    organize_poll_interval_seconds: float = 0.1
    organize_timeout_seconds: float = 300.0

    analysis_provider: str = "document_intelligence"
    document_intelligence_endpoint: str = ""
    document_intelligence_key: str = ""
    document_intelligence_model_id: str = ""
