"""
Runtime configuration.

Values come from the environment (optionally seeded from a .env file by
``env.load_env``) and are passed explicitly to the objects that need them.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Tuple

ADZUNA_BASE_URL = "https://api.adzuna.com/v1/api/jobs"

# Adzuna country endpoints queried for every search.
DEFAULT_COUNTRIES: Tuple[str, ...] = (
    "gb", "us", "ca", "de", "fr", "in", "it", "nl", "pl", "ru", "sg",
)


def parse_countries(value: Optional[str]) -> Tuple[str, ...]:
    if not value:
        return DEFAULT_COUNTRIES
    countries = tuple(c.strip().lower() for c in value.split(",") if c.strip())
    return countries or DEFAULT_COUNTRIES


@dataclass(frozen=True)
class AdzunaConfig:
    app_id: str
    api_key: str
    countries: Tuple[str, ...] = DEFAULT_COUNTRIES
    results_per_page: int = 20
    base_url: str = ADZUNA_BASE_URL
    timeout: float = 15
    max_retries: int = 2
    retry_delay: float = 1.0

    def missing_credentials(self) -> bool:
        return not (self.app_id and self.api_key)


@dataclass(frozen=True)
class Settings:
    adzuna: AdzunaConfig
    db_path: Path = Path("data/matches.db")
    log_level: str = "INFO"
    log_dir: Path = Path("logs")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from environment variables.

        ADZUNA_APP_ID, ADZUNA_API_KEY, ADZUNA_COUNTRIES (comma-separated),
        CAREERSARTHI_DB, CAREERSARTHI_LOG_LEVEL, CAREERSARTHI_LOG_DIR.
        """
        env = os.environ if environ is None else environ
        adzuna = AdzunaConfig(
            app_id=env.get("ADZUNA_APP_ID", ""),
            api_key=env.get("ADZUNA_API_KEY", ""),
            countries=parse_countries(env.get("ADZUNA_COUNTRIES")),
        )
        return cls(
            adzuna=adzuna,
            db_path=Path(env.get("CAREERSARTHI_DB", "data/matches.db")),
            log_level=env.get("CAREERSARTHI_LOG_LEVEL", "INFO"),
            log_dir=Path(env.get("CAREERSARTHI_LOG_DIR", "logs")),
        )
