"""SQLite database utilities for Ethereal Post.

Provides connection management and table initialization for
auction snapshot storage.
"""

from __future__ import annotations

import logging
import sqlite3

from .config import Settings

logger = logging.getLogger(__name__)

_SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS snapshots (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    source TEXT NOT NULL,
    collected_at TEXT NOT NULL,
    auction_count INTEGER NOT NULL DEFAULT 0,
    created_at TEXT DEFAULT (datetime('now'))
);

CREATE INDEX IF NOT EXISTS idx_snapshots_source_collected
    ON snapshots(source, collected_at);

CREATE TABLE IF NOT EXISTS item_summaries (
    snapshot_id INTEGER NOT NULL,
    item_id INTEGER NOT NULL,
    market_price INTEGER NOT NULL,
    std_dev REAL NOT NULL,
    min_buyout INTEGER NOT NULL,
    total_qty INTEGER NOT NULL,
    num_auctions INTEGER NOT NULL,
    PRIMARY KEY (snapshot_id, item_id),
    FOREIGN KEY (snapshot_id) REFERENCES snapshots(id) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS item_level_summaries (
    snapshot_id INTEGER NOT NULL,
    item_id INTEGER NOT NULL,
    item_level INTEGER NOT NULL,
    market_price INTEGER NOT NULL,
    std_dev REAL NOT NULL,
    min_buyout INTEGER NOT NULL,
    total_qty INTEGER NOT NULL,
    num_auctions INTEGER NOT NULL,
    PRIMARY KEY (snapshot_id, item_id, item_level),
    FOREIGN KEY (snapshot_id) REFERENCES snapshots(id) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS pet_summaries (
    snapshot_id INTEGER NOT NULL,
    species_id INTEGER NOT NULL,
    market_price INTEGER NOT NULL,
    std_dev REAL NOT NULL,
    min_buyout INTEGER NOT NULL,
    total_qty INTEGER NOT NULL,
    num_auctions INTEGER NOT NULL,
    PRIMARY KEY (snapshot_id, species_id),
    FOREIGN KEY (snapshot_id) REFERENCES snapshots(id) ON DELETE CASCADE
);

CREATE INDEX IF NOT EXISTS idx_item_summaries_item
    ON item_summaries(item_id);
CREATE INDEX IF NOT EXISTS idx_pet_summaries_species
    ON pet_summaries(species_id);
"""


def get_connection(settings: Settings | None = None) -> sqlite3.Connection:
    """Get a SQLite connection with row factory enabled.

    Args:
        settings: Optional Settings. Uses defaults if not provided.

    Returns:
        sqlite3.Connection with Row factory.
    """
    settings = settings or Settings.load()
    db_path = settings.database_abs_path
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute("PRAGMA foreign_keys=ON")
    return conn


def init_db(settings: Settings | None = None) -> None:
    """Initialize database schema (idempotent)."""
    settings = settings or Settings.load()
    conn = get_connection(settings)
    try:
        conn.executescript(_SCHEMA_SQL)
        conn.commit()
        logger.info("Database schema initialized at %s", settings.database_abs_path)
    finally:
        conn.close()
