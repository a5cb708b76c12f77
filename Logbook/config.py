from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # --- Remote store ---
    api_base_url: str = "http://localhost:8000/api"
    request_timeout_s: float = 30.0 # Per-request timeout, enforced by the transport only
    remote_fetch_limit: int = 99999 # List calls ask for everything, pagination happens locally

    # --- View ---
    items_per_page: int = Field(10, gt=0)

    # --- Dates ---
    local_tz: Optional[str] = None # e.g. "Asia/Jakarta"; None uses the system zone

    # --- Export ---
    export_dir: Path = Path(".")

    # --- Logging ---
    log_level: str = "WARNING"

    model_config = SettingsConfigDict(
        env_prefix="LOGBOOK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra='ignore'
    )

    @property
    def tzinfo(self) -> Optional[ZoneInfo]:
        return ZoneInfo(self.local_tz) if self.local_tz else None
