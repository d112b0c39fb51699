"""SQLite persistence for auction snapshot summaries.

Usage:
    store = SnapshotStore(settings)
    snapshot_id = store.save_summary(summary, source="us-3678")
    history = store.item_history(item_id=171276)
"""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime, timezone

from ..common.config import Settings
from ..common.database import get_connection, init_db
from ..parse.summary import AuctionsSummary, ItemSummary

logger = logging.getLogger(__name__)


def _summary_row(s: ItemSummary) -> tuple:
    return (s.market_price, s.std_dev, s.min_buyout, s.total_qty, s.num_auctions)


class SnapshotStore:
    """Saves and queries snapshot summaries."""

    def __init__(self, settings: Settings | None = None, initialize: bool = True) -> None:
        self.settings = settings or Settings.load()
        if initialize:
            init_db(self.settings)

    def save_summary(
        self,
        summary: AuctionsSummary,
        source: str,
        collected_at: datetime | None = None,
    ) -> int:
        """Persist a summary as a new snapshot.

        Args:
            summary: The summarized snapshot.
            source: Where the snapshot came from, e.g. ``us-3678`` or
                    ``us-commodities``.
            collected_at: Scan time. Defaults to now (UTC).

        Returns:
            The new snapshot id.
        """
        collected_at = collected_at or datetime.now(timezone.utc)
        conn = get_connection(self.settings)
        try:
            cursor = conn.execute(
                "INSERT INTO snapshots (source, collected_at, auction_count) VALUES (?, ?, ?)",
                (source, collected_at.isoformat(), summary.auction_count),
            )
            snapshot_id = cursor.lastrowid
            assert snapshot_id is not None

            conn.executemany(
                """
                INSERT INTO item_summaries
                (snapshot_id, item_id, market_price, std_dev, min_buyout, total_qty, num_auctions)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                [
                    (snapshot_id, item_id, *_summary_row(s))
                    for item_id, s in summary.item_summaries.items()
                ],
            )
            conn.executemany(
                """
                INSERT INTO item_level_summaries
                (snapshot_id, item_id, item_level, market_price, std_dev,
                 min_buyout, total_qty, num_auctions)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                [
                    (snapshot_id, item_id, level, *_summary_row(s))
                    for item_id, levels in summary.item_level_summaries.items()
                    for level, s in levels.items()
                ],
            )
            conn.executemany(
                """
                INSERT INTO pet_summaries
                (snapshot_id, species_id, market_price, std_dev, min_buyout, total_qty, num_auctions)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                [
                    (snapshot_id, species_id, *_summary_row(s))
                    for species_id, s in summary.pet_summaries.items()
                ],
            )
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            logger.error("Failed to save snapshot for %s", source, exc_info=True)
            raise
        finally:
            conn.close()

        logger.info(
            "Saved snapshot %d for %s: %d items, %d pet species",
            snapshot_id,
            source,
            len(summary.item_summaries),
            len(summary.pet_summaries),
        )
        return snapshot_id

    def latest_snapshot(self, source: str) -> dict | None:
        """Most recent snapshot row for ``source``."""
        conn = get_connection(self.settings)
        try:
            row = conn.execute(
                """
                SELECT id, source, collected_at, auction_count FROM snapshots
                WHERE source = ? ORDER BY collected_at DESC, id DESC LIMIT 1
                """,
                (source,),
            ).fetchone()
        finally:
            conn.close()
        return dict(row) if row else None

    def item_history(self, item_id: int, source: str | None = None) -> list[dict]:
        """Summary of ``item_id`` in every snapshot, oldest first."""
        query = """
            SELECT s.id AS snapshot_id, s.source, s.collected_at,
                   i.market_price, i.std_dev, i.min_buyout, i.total_qty, i.num_auctions
            FROM item_summaries i
            JOIN snapshots s ON s.id = i.snapshot_id
            WHERE i.item_id = ?
        """
        params: list = [item_id]
        if source:
            query += " AND s.source = ?"
            params.append(source)
        query += " ORDER BY s.collected_at, s.id"

        conn = get_connection(self.settings)
        try:
            rows = conn.execute(query, params).fetchall()
        finally:
            conn.close()
        return [dict(row) for row in rows]

    def pet_history(self, species_id: int, source: str | None = None) -> list[dict]:
        """Summary of a pet species in every snapshot, oldest first."""
        query = """
            SELECT s.id AS snapshot_id, s.source, s.collected_at,
                   p.market_price, p.std_dev, p.min_buyout, p.total_qty, p.num_auctions
            FROM pet_summaries p
            JOIN snapshots s ON s.id = p.snapshot_id
            WHERE p.species_id = ?
        """
        params: list = [species_id]
        if source:
            query += " AND s.source = ?"
            params.append(source)
        query += " ORDER BY s.collected_at, s.id"

        conn = get_connection(self.settings)
        try:
            rows = conn.execute(query, params).fetchall()
        finally:
            conn.close()
        return [dict(row) for row in rows]
