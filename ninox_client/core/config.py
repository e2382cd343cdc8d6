from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_URI = "https://api.ninoxdb.de"
DEFAULT_API_VERSION = "1"


class Settings(BaseSettings):
    NINOX_API_URI: str = DEFAULT_API_URI
    NINOX_API_VERSION: str = DEFAULT_API_VERSION

    # Credentials
    NINOX_AUTH_KEY: str | None = None  # Bearer token
    NINOX_TEAM: str | None = None
    NINOX_DATABASE: str | None = None
    NINOX_TABLE: str | None = None  # 仅集成测试使用

    # Transport
    NINOX_HTTP_TIMEOUT: float = 30.0
    NINOX_MAX_PAGE_SIZE: int = 9999

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )


settings = Settings()
