from __future__ import annotations

import os

from pydantic import BaseModel


def _env(name: str, default: str) -> str:
    return os.getenv(name, default)


class RowStoreConfig(BaseModel):
    """Connection settings for the spreadsheet-backed row store."""

    base_url: str | None = None
    timeout: float = 30.0


class SummaryConfig(BaseModel):
    api_key: str | None = None
    model: str = "gemini-2.5-flash"
    api_base: str = "https://generativelanguage.googleapis.com/v1beta"
    timeout: float = 60.0


class OctobullConfig(BaseModel):
    row_store: RowStoreConfig = RowStoreConfig()
    summary: SummaryConfig = SummaryConfig()
    cors_origins: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "OctobullConfig":
        """Load the configuration from environment variables."""

        origins_env = _env("API_CORS_ORIGINS", "")
        origins = [origin.strip() for origin in origins_env.split(",") if origin.strip()]
        api_key = os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY") or None
        defaults = cls()
        return cls(
            row_store=RowStoreConfig(
                base_url=os.getenv("OCTOBULL_ROW_STORE_URL") or None,
                timeout=float(_env("OCTOBULL_ROW_STORE_TIMEOUT", "30")),
            ),
            summary=SummaryConfig(
                api_key=api_key,
                model=_env("OCTOBULL_SUMMARY_MODEL", "gemini-2.5-flash"),
                timeout=float(_env("OCTOBULL_SUMMARY_TIMEOUT", "60")),
            ),
            cors_origins=origins or defaults.cors_origins,
            log_level=_env("OCTOBULL_LOG_LEVEL", "INFO").upper(),
        )
