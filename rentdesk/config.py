from functools import lru_cache
from typing import Annotated, List
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import AnyHttpUrl, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """RentDesk configuration, read from ``RENTDESK_*`` environment variables."""

    app_name: str = Field(default="RentDesk Rental Service")
    # Comma-separated in the environment, e.g. RENTDESK_CORS_ORIGINS=http://a,http://b
    cors_origins: Annotated[List[AnyHttpUrl], NoDecode] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://localhost:5174"]
    )
    backend_base_url: AnyHttpUrl | None = Field(default=None, description="Rental API root")
    backend_timeout: float = Field(default=10.0, gt=0)
    backend_token: str | None = Field(default=None, description="Bearer token for the rental API")
    use_mock_data: bool = Field(default=True)
    log_level: str = Field(default="INFO")
    currency: str = Field(default="INR", min_length=3, max_length=3)
    timezone: str = Field(default="Asia/Kolkata")
    seed_product_count: int = Field(default=100, ge=0)

    model_config = SettingsConfigDict(env_prefix="RENTDESK_", case_sensitive=False)

    @field_validator("cors_origins", mode="before")
    def _split_origins(cls, value):
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("currency")
    def _upper_currency(cls, value: str) -> str:
        return value.upper()

    @field_validator("timezone")
    def _known_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone {value!r}") from exc
        return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached application settings."""

    return Settings()
