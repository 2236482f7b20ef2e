from pathlib import Path
import os
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parents[2]  # repo root

ENV_FILE = os.getenv("ENV_FILE", str(BASE_DIR / ".env"))

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=ENV_FILE, extra="ignore")

    APP_ENV: str = "local"
    LOG_LEVEL: str = "INFO"
    MUTATING_METHODS: str = "POST,PUT"  # Comma-separated; only these methods get payload validation
    VALUELESS_QUERY_AS_KEY: bool = True  # "?flag" -> "flag" when true, "" when false

    @property
    def mutating_methods_set(self) -> frozenset[str]:
        """Parse MUTATING_METHODS into an upper-cased set"""
        return frozenset(m.strip().upper() for m in self.MUTATING_METHODS.split(",") if m.strip())

settings = Settings()
