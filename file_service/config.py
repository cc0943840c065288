from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "file-service"
    storage_dir: str = "./files"
    host: str = "0.0.0.0"
    port: int = 8080
    max_upload_size_bytes: int = 10_000_000
    cors_allow_origins: list[str] = ["*"]
    cors_allow_methods: list[str] = ["GET", "POST", "DELETE", "OPTIONS"]
    cors_allow_headers: list[str] = [
        "User-Agent",
        "Sec-Fetch-Mode",
        "Referer",
        "Origin",
        "Access-Control-Request-Method",
        "Access-Control-Request-Headers",
        "Content-Type",
        "Accept",
        "Authorization",
        "content-type",
        "type",
    ]

    model_config = SettingsConfigDict(env_prefix="FILE_SERVICE_")


@lru_cache
def get_settings() -> Settings:
    return Settings()
