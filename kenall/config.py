from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_env: str = "development"
    log_level: str = "INFO"
    log_json: bool = False

    # Japan Post registry
    registry_url: str = "https://www.post.japanpost.jp/zipcode/dl/kogaki/zip/ken_all.zip"
    registry_encoding: str = "cp932"
    # KEN_ALL csv/zip or a normalized csv served by the API; empty = empty index
    registry_path: str = ""
    data_dir: str = "data"

    # Download
    download_timeout: float = 60.0

    # CORS: allowed origins (comma-separated, or "*" for dev only)
    cors_origins: str = "http://localhost:5173,http://localhost:3000"

    @property
    def data_path(self) -> Path:
        return Path(self.data_dir)

    @property
    def cors_origin_list(self) -> list[str]:
        """Parse CORS_ORIGINS into a list."""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


settings = Settings()
