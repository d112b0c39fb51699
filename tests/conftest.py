"""Shared test fixtures for Ethereal Post."""

import sys
from pathlib import Path

import pytest

# Ensure src is importable without an editable install
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from etherealpost.battlenet.auctions import AuctionFile
from etherealpost.common.config import DatabaseSettings, Settings
from etherealpost.common.database import get_connection, init_db
from etherealpost.wow.game_data import GameData

ENV_VARS = (
    "BLIZZARD_CLIENT_ID",
    "BLIZZARD_CLIENT_SECRET",
    "BLIZZARD_REGION",
    "DATABASE_PATH",
    "REQUEST_TIMEOUT",
    "RATE_LIMIT_REQUESTS_PER_MINUTE",
    "LOG_LEVEL",
)


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the test fixtures directory."""
    return PROJECT_ROOT / "tests" / "fixtures"


@pytest.fixture
def tables_dir(fixtures_dir: Path) -> Path:
    """Return the directory holding the sample DB2 table exports."""
    return fixtures_dir / "tables"


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every environment variable the settings layer reads."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def temp_db(tmp_path):
    """Provide Settings pointing to a temporary SQLite database."""
    db_file = tmp_path / "test_etherealpost.db"
    settings = Settings(database=DatabaseSettings(db_path=str(db_file)))
    init_db(settings)
    return settings


@pytest.fixture
def db_conn(temp_db):
    """Provide an initialized SQLite connection from temp_db."""
    conn = get_connection(temp_db)
    yield conn
    conn.close()


@pytest.fixture
def auction_file(fixtures_dir: Path) -> AuctionFile:
    """Return the sample connected realm snapshot."""
    return AuctionFile.from_file(fixtures_dir / "auctions.json")


@pytest.fixture
def game_data(tables_dir: Path) -> GameData:
    """Return game data loaded from the sample DB2 tables."""
    return GameData.from_directory(tables_dir)
