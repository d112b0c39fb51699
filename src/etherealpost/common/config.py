"""Project configuration and paths.

Loads settings from config/settings.yaml and environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

# === Paths ===
PROJECT_ROOT = Path(__file__).resolve().parents[3]
CONFIG_DIR = PROJECT_ROOT / "config"
DATA_DIR = PROJECT_ROOT / "data"
DATA_RAW_DIR = DATA_DIR / "raw"
DATA_TABLES_DIR = DATA_DIR / "tables"
DATA_EXPORTS_DIR = DATA_DIR / "exports"

# Load .env from project root
load_dotenv(PROJECT_ROOT / ".env")

REGIONS = ("us", "eu", "kr", "tw")


class BattleNetSettings(BaseModel):
    """Battle.net Game Data API settings."""
    region: str = "us"
    locale: str = "en_US"
    api_base_url: str = "https://{region}.api.blizzard.com"
    oauth_url: str = "https://oauth.battle.net/token"

    @property
    def base_url(self) -> str:
        return self.api_base_url.format(region=self.region)

    @property
    def dynamic_namespace(self) -> str:
        return f"dynamic-{self.region}"


class HTTPSettings(BaseModel):
    """Settings for the HTTP client."""
    request_timeout: int = 30
    rate_limit_rpm: int = 100
    max_retries: int = 3
    cache_raw_json: bool = False
    raw_cache_dir: str = str(DATA_RAW_DIR)


class DatabaseSettings(BaseModel):
    """Database connection settings."""
    db_path: str = str(DATA_DIR / "etherealpost.db")


class DataTablesSettings(BaseModel):
    """Location of the DB2 tables exported to CSV."""
    data_dir: str = str(DATA_TABLES_DIR)
    item_file: str = "item.csv"
    item_bonus_file: str = "itembonus.csv"
    curve_point_file: str = "curvepoint.csv"
    battle_pet_species_file: str = "battlepetspecies.csv"
    item_effect_file: str = "itemeffect.csv"
    item_sparse_file: str = "itemsparse.csv"


class Settings(BaseModel):
    """Top-level application settings."""
    battlenet: BattleNetSettings = Field(default_factory=BattleNetSettings)
    http: HTTPSettings = Field(default_factory=HTTPSettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    data_tables: DataTablesSettings = Field(default_factory=DataTablesSettings)

    @classmethod
    def load(cls, path: str | Path | None = None) -> Settings:
        """Load settings from YAML, falling back to defaults.

        Environment variables override whatever the file provides.
        """
        settings_path = Path(path) if path else CONFIG_DIR / "settings.yaml"
        data: dict = {}
        if settings_path.exists():
            with open(settings_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        settings = cls(**data)
        settings.apply_env_overrides()
        return settings

    def apply_env_overrides(self) -> None:
        if region := os.getenv("BLIZZARD_REGION"):
            region = region.lower()
            if region not in REGIONS:
                raise ValueError(f"Unsupported Battle.net region: {region}")
            self.battlenet.region = region
        if db_path := os.getenv("DATABASE_PATH"):
            self.database.db_path = db_path
        if timeout := os.getenv("REQUEST_TIMEOUT"):
            self.http.request_timeout = int(timeout)
        if rpm := os.getenv("RATE_LIMIT_REQUESTS_PER_MINUTE"):
            self.http.rate_limit_rpm = int(rpm)

    @property
    def database_abs_path(self) -> Path:
        """Resolve database path relative to project root."""
        p = Path(self.database.db_path)
        if p.is_absolute():
            return p
        return PROJECT_ROOT / p

    @property
    def raw_cache_abs_dir(self) -> Path:
        p = Path(self.http.raw_cache_dir)
        if p.is_absolute():
            return p
        return PROJECT_ROOT / p

    @property
    def data_tables_abs_dir(self) -> Path:
        """Resolve the DB2 table directory relative to project root."""
        p = Path(self.data_tables.data_dir)
        if p.is_absolute():
            return p
        return PROJECT_ROOT / p


def get_client_credentials() -> tuple[str, str]:
    """Get the Battle.net API client id and secret from environment."""
    client_id = os.getenv("BLIZZARD_CLIENT_ID", "")
    client_secret = os.getenv("BLIZZARD_CLIENT_SECRET", "")
    if not client_id or not client_secret:
        raise ValueError(
            "BLIZZARD_CLIENT_ID and BLIZZARD_CLIENT_SECRET must be set in environment"
        )
    return client_id, client_secret
