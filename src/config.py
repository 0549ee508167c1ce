from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Server
    host: str = "0.0.0.0"
    port: int = 9002
    log_level: str = "WARNING"

    # Reviews backend — api_base may also be an absolute URL
    backend_url: str = "http://localhost:4000"
    api_base: str = "/api"
    request_timeout: float | None = None  # None = wait indefinitely

    # Client refresh cadence, independent of the pushed poll interval
    refresh_interval: float = 60.0

    # Initial selection
    default_app_id: str = "595068606"
    default_time_window: int = 48
    default_sort_mode: str = "newest"
    default_poll_interval: str = "5m"
    result_limit: int = 100
