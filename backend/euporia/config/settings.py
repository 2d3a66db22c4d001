from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    database_url: str = "sqlite:///./euporia.db"
    database_echo: bool = False

    # All store routes are mounted under this prefix (health + root stay at "/")
    api_prefix: str = "/api"
    cors_origins: list[str] = ["*"]

    log_level: str = "INFO"
    request_log_body_limit: int = 4000

    # Insight cache entries expire this many seconds after being written (24h)
    insight_ttl_seconds: int = 24 * 60 * 60

    host: str = "0.0.0.0"
    port: int = 3010

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


settings = Settings()
