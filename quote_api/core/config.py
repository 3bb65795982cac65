from typing import Any, List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import AliasChoices, Field, field_validator


class Settings(BaseSettings):
    APP_NAME: str = Field(
        default="Quote Pricing API",
        validation_alias=AliasChoices("APP_NAME"),
    )
    APP_VERSION: str = Field(
        default="0.1.0",
        validation_alias=AliasChoices("APP_VERSION"),
    )
    ENVIRONMENT: str = Field(
        default="dev",
        validation_alias=AliasChoices("ENVIRONMENT"),
    )
    DEBUG: bool = Field(
        default=False,
        validation_alias=AliasChoices("DEBUG"),
    )

    DATABASE_URL: str = Field(
        default="sqlite+aiosqlite:///./data/quotes.db",
        validation_alias=AliasChoices("DATABASE_URL"),
    )
    DB_CA_BUNDLE: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("DB_CA_BUNDLE", "RDS_CA_BUNDLE"),
    )
    SEED_CATALOG: bool = Field(
        default=True,
        validation_alias=AliasChoices("SEED_CATALOG"),
    )

    CORS_ORIGINS: List[str] = Field(
        default=["http://localhost:3000"],
        validation_alias=AliasChoices("CORS_ORIGINS"),
    )
    CORS_ALLOW_CREDENTIALS: bool = Field(
        default=True,
        validation_alias=AliasChoices("CORS_ALLOW_CREDENTIALS"),
    )
    ALLOWED_HOSTS: List[str] = Field(
        default=["*"],
        validation_alias=AliasChoices("ALLOWED_HOSTS"),
    )

    DEFAULT_TERM_LENGTH: int = Field(
        default=36,
        gt=0,
        validation_alias=AliasChoices("DEFAULT_TERM_LENGTH"),
    )
    DEFAULT_CURRENCY: str = Field(
        default="USD",
        validation_alias=AliasChoices("DEFAULT_CURRENCY"),
    )
    DEFAULT_PRICEBOOK: str = Field(
        default="FY26",
        validation_alias=AliasChoices("DEFAULT_PRICEBOOK"),
    )

    DATABRICKS_HOST: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("DATABRICKS_HOST"),
    )
    DATABRICKS_TOKEN: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("DATABRICKS_TOKEN"),
    )
    DATABRICKS_WAREHOUSE_ID: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("DATABRICKS_WAREHOUSE_ID"),
    )
    DATABRICKS_WAIT_TIMEOUT: int = Field(
        default=30,
        ge=0,
        validation_alias=AliasChoices("DATABRICKS_WAIT_TIMEOUT"),
    )
    DATABRICKS_POLL_INTERVAL: float = Field(
        default=1.0,
        ge=0,
        validation_alias=AliasChoices("DATABRICKS_POLL_INTERVAL"),
    )

    DEV_USER_NAME: str = Field(
        default="Test User",
        validation_alias=AliasChoices("DEV_USER_NAME"),
    )
    DEV_USER_EMAIL: str = Field(
        default="test.user@example.com",
        validation_alias=AliasChoices("DEV_USER_EMAIL"),
    )

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @field_validator("CORS_ORIGINS", "ALLOWED_HOSTS", mode="before")
    @classmethod
    def _coerce_list(cls, v: Any) -> List[str]:
        if isinstance(v, str):
            s = v.strip()
            if s.startswith("["):  # JSON
                import json

                try:
                    arr = json.loads(s)
                    if isinstance(arr, list):
                        return [str(x) for x in arr]
                except ValueError:
                    pass
            # CSV
            return [p.strip() for p in s.split(",") if p.strip()]
        return v


settings = Settings()
