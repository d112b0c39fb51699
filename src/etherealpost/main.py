"""CLI entry point for summarizing an Auction House snapshot.

Usage:
    # Summarize a previously downloaded auctions file:
    python -m etherealpost.main --auctions data/raw/auctions_us_3678.json \
        --data-dir data/tables --output data/exports/us_3678.json

    # Fetch from the Battle.net API and store the snapshot:
    python -m etherealpost.main --connected-realm-id 3678 --save-db
    python -m etherealpost.main --commodities --save-db
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

import requests
from pydantic import ValidationError

from .battlenet.auctions import AuctionFile
from .battlenet.client import BattleNetClient
from .common.config import Settings
from .common.logging import setup_logging
from .parse.summary import AuctionsSummary
from .snapshot.exporter import export_summary
from .snapshot.storage import SnapshotStore
from .wow.game_data import GameData

logger = logging.getLogger(__name__)


def _load_auctions(args: argparse.Namespace, settings: Settings) -> tuple[AuctionFile, str]:
    """Load the snapshot from disk or the API; returns it with its source label."""
    if args.auctions:
        path = Path(args.auctions)
        logger.info("Reading auctions from %s", path)
        return AuctionFile.from_file(path), path.stem

    region = settings.battlenet.region
    with BattleNetClient(settings) as client:
        if args.commodities:
            return client.get_commodities(), f"{region}-commodities"
        return (
            client.get_connected_realm_auctions(args.connected_realm_id),
            f"{region}-{args.connected_realm_id}",
        )


def _log_top_items(summary: AuctionsSummary, count: int) -> None:
    logger.info("=== Top %d items by auction count ===", count)
    for item_id, item_summary in summary.top_items(count):
        logger.info(
            "  item %d: %d auctions, %d units, market %s, min %s",
            item_id,
            item_summary.num_auctions,
            item_summary.total_qty,
            f"{item_summary.market_price:,}",
            f"{item_summary.min_buyout:,}",
        )


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Ethereal Post - Auction House snapshot summary")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument(
        "--auctions",
        type=str,
        help="Path to an auctions JSON file downloaded from the Battle.net API",
    )
    group.add_argument(
        "--connected-realm-id",
        type=int,
        help="Fetch auctions for this connected realm from the Battle.net API",
    )
    group.add_argument(
        "--commodities",
        action="store_true",
        help="Fetch the region-wide commodities market from the Battle.net API",
    )
    parser.add_argument(
        "--data-dir",
        type=str,
        help="Directory holding the DB2 table CSV exports (default: data/tables)",
    )
    parser.add_argument(
        "--config",
        type=str,
        help="Path to a settings YAML file (default: config/settings.yaml)",
    )
    parser.add_argument(
        "--save-db",
        action="store_true",
        help="Save the summary to the SQLite database",
    )
    parser.add_argument(
        "--output",
        type=str,
        help="Output JSON file path",
    )
    parser.add_argument(
        "--top",
        type=int,
        default=10,
        help="Log the N items with the most auctions (default: 10, 0 to disable)",
    )

    parser.add_argument(
        "--log-level",
        type=str,
        help="Logging level name (default: LOG_LEVEL env or INFO)",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        help="Also write log records to this file",
    )

    args = parser.parse_args(argv)
    try:
        setup_logging(args.log_level, log_file=args.log_file)
    except ValueError as exc:
        parser.error(str(exc))
    try:
        settings = Settings.load(args.config)
    except (ValidationError, ValueError) as exc:
        parser.error(f"invalid configuration: {exc}")

    try:
        game_data = GameData.from_directory(
            args.data_dir or settings.data_tables_abs_dir, settings.data_tables
        )
    except FileNotFoundError as exc:
        logger.error("Game data unavailable: %s", exc)
        sys.exit(1)

    try:
        auction_file, source = _load_auctions(args, settings)
    except (FileNotFoundError, ValidationError, ValueError, requests.RequestException) as exc:
        logger.error("Could not load auctions: %s", exc)
        sys.exit(1)

    collected_at = datetime.now(timezone.utc)
    summary = AuctionsSummary.from_game_data(auction_file, game_data)

    if args.top > 0:
        _log_top_items(summary, args.top)

    if args.save_db:
        snapshot_id = SnapshotStore(settings).save_summary(summary, source, collected_at)
        logger.info("Snapshot stored with id %d", snapshot_id)

    if args.output:
        export_summary(summary, args.output, source, collected_at)


if __name__ == "__main__":
    main()
