from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "Bank Saving System API"
    version: str = "1.0.0"
    database_url: str = "sqlite:///bank_saving.db"
    log_level: str = "INFO"
    sql_echo: bool = False
    api_prefix: str = "/api"
    # When set, withdrawals dated before the account was opened are refused
    # instead of accruing negative interest.
    reject_backdated_withdrawals: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="BANK_SAVING_",
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
