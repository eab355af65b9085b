from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: str = Field(default="", alias="CLINIKO_API_KEY")
    vendor_name: str = Field(default="cliniko-python", alias="CLINIKO_VENDOR_NAME")
    vendor_email: str = Field(default="developer@example.com", alias="CLINIKO_VENDOR_EMAIL")

    # Overrides the shard-derived URL, e.g. for a sandbox or a proxy.
    base_url: str | None = Field(default=None, alias="CLINIKO_BASE_URL")
    default_shard: str = Field(default="au1", alias="CLINIKO_DEFAULT_SHARD")

    timeout: float = Field(default=30.0, alias="CLINIKO_TIMEOUT")
    upload_timeout: float = Field(default=120.0, alias="CLINIKO_UPLOAD_TIMEOUT")


@lru_cache
def get_settings() -> Settings:
    return Settings()
