from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Literal, Optional

class Settings(BaseSettings):
    # Access PINs (family for every endpoint, admin additionally for budget edits)
    family_pin: Optional[str] = None
    admin_pin: Optional[str] = None

    # Backing store: "sql" uses database_url, "google_sheets" uses the google_* settings
    store_backend: Literal["sql", "google_sheets"] = "sql"
    database_url: str = "sqlite:///./sheetbudget.db"

    # Google Sheets settings
    google_sheets_id: Optional[str] = None
    google_service_account_email: Optional[str] = None
    google_private_key: Optional[str] = None

    # Archival thresholds
    max_rows: int = 40000
    archive_chunk: int = 30000  # How many of the oldest rows move to an archive file
    archive_dir: str = "./archives"

    log_level: str = "INFO"

    class Config:
        env_file = ".env"

    @field_validator("google_private_key")
    @classmethod
    def restore_key_newlines(cls, value: Optional[str]) -> Optional[str]:
        # Keys pasted into .env files usually carry literal "\n" sequences
        if value:
            return value.replace("\\n", "\n")
        return value

    @model_validator(mode="after")
    def check_thresholds(self):
        if self.max_rows <= 0 or self.archive_chunk <= 0:
            raise ValueError("max_rows and archive_chunk must be positive")
        if self.archive_chunk > self.max_rows:
            raise ValueError("archive_chunk must not exceed max_rows")
        return self

@lru_cache()
def get_settings():
    return Settings()
