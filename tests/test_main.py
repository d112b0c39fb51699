"""Tests for the command line entry point."""

from __future__ import annotations

import json
from unittest.mock import MagicMock, patch

import pytest
import requests

from etherealpost.battlenet.auctions import AuctionFile
from etherealpost.common.config import PROJECT_ROOT, DatabaseSettings, Settings
from etherealpost.main import main
from etherealpost.snapshot.storage import SnapshotStore


@pytest.fixture
def config_file(tmp_path, clean_env):
    db_path = (tmp_path / "cli.db").as_posix()
    path = tmp_path / "settings.yaml"
    path.write_text(f"database:\n  db_path: {db_path}\n", encoding="utf-8")
    return path


class TestMain:
    def test_summarize_file_to_json(self, config_file, fixtures_dir, tables_dir, tmp_path):
        output = tmp_path / "out" / "summary.json"
        main([
            "--auctions", str(fixtures_dir / "auctions.json"),
            "--data-dir", str(tables_dir),
            "--config", str(config_file),
            "--output", str(output),
            "--top", "3",
        ])
        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["source"] == "auctions"
        assert data["auction_count"] == 15
        assert data["items"]["171276"]["market_price"] == 50000

    def test_save_db(self, config_file, fixtures_dir, tables_dir, tmp_path):
        main([
            "--auctions", str(fixtures_dir / "auctions.json"),
            "--data-dir", str(tables_dir),
            "--config", str(config_file),
            "--save-db",
            "--top", "0",
        ])
        settings = Settings(database=DatabaseSettings(db_path=str(tmp_path / "cli.db")))
        latest = SnapshotStore(settings).latest_snapshot("auctions")
        assert latest is not None
        assert latest["auction_count"] == 15

    @patch("etherealpost.main.BattleNetClient")
    def test_fetch_connected_realm(
        self, mock_client_cls, config_file, fixtures_dir, tables_dir, tmp_path
    ):
        client = MagicMock()
        client.get_connected_realm_auctions.return_value = AuctionFile.from_file(
            fixtures_dir / "auctions.json"
        )
        mock_client_cls.return_value.__enter__.return_value = client
        output = tmp_path / "realm.json"

        main([
            "--connected-realm-id", "3678",
            "--data-dir", str(tables_dir),
            "--config", str(config_file),
            "--output", str(output),
        ])

        client.get_connected_realm_auctions.assert_called_once_with(3678)
        assert json.loads(output.read_text(encoding="utf-8"))["source"] == "us-3678"

    @patch("etherealpost.main.BattleNetClient")
    def test_fetch_commodities(self, mock_client_cls, config_file, tables_dir, tmp_path):
        client = MagicMock()
        client.get_commodities.return_value = AuctionFile()
        mock_client_cls.return_value.__enter__.return_value = client
        output = tmp_path / "commodities.json"

        main([
            "--commodities",
            "--data-dir", str(tables_dir),
            "--config", str(config_file),
            "--output", str(output),
        ])

        assert json.loads(output.read_text(encoding="utf-8"))["source"] == "us-commodities"

    def test_missing_game_data_exits(self, config_file, fixtures_dir, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            main([
                "--auctions", str(fixtures_dir / "auctions.json"),
                "--data-dir", str(tmp_path / "no_tables"),
                "--config", str(config_file),
            ])
        assert exc_info.value.code == 1

    def test_missing_auctions_file_exits(self, config_file, tables_dir, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            main([
                "--auctions", str(tmp_path / "missing.json"),
                "--data-dir", str(tables_dir),
                "--config", str(config_file),
            ])
        assert exc_info.value.code == 1

    def test_malformed_auctions_file_exits(self, config_file, tables_dir, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text('{"auctions": [{"id": "x"}]}', encoding="utf-8")
        with pytest.raises(SystemExit) as exc_info:
            main([
                "--auctions", str(bad),
                "--data-dir", str(tables_dir),
                "--config", str(config_file),
            ])
        assert exc_info.value.code == 1

    def test_unknown_log_level_exits(self, config_file):
        with pytest.raises(SystemExit) as exc_info:
            main(["--commodities", "--log-level", "chatty", "--config", str(config_file)])
        assert exc_info.value.code == 2

    def test_sources_are_mutually_exclusive(self, config_file):
        with pytest.raises(SystemExit) as exc_info:
            main(["--auctions", "a.json", "--commodities", "--config", str(config_file)])
        assert exc_info.value.code == 2

    @patch("etherealpost.main.BattleNetClient")
    def test_api_failure_exits(self, mock_client_cls, config_file, tables_dir):
        client = MagicMock()
        client.get_connected_realm_auctions.side_effect = requests.HTTPError(
            "503 Server Error"
        )
        mock_client_cls.return_value.__enter__.return_value = client
        with pytest.raises(SystemExit) as exc_info:
            main([
                "--connected-realm-id", "3678",
                "--data-dir", str(tables_dir),
                "--config", str(config_file),
            ])
        assert exc_info.value.code == 1

    def test_unsupported_region_is_usage_error(self, config_file, clean_env, capsys):
        clean_env.setenv("BLIZZARD_REGION", "xx")
        with pytest.raises(SystemExit) as exc_info:
            main(["--commodities", "--config", str(config_file)])
        assert exc_info.value.code == 2
        assert "invalid configuration" in capsys.readouterr().err

    def test_invalid_config_file_is_usage_error(self, clean_env, tmp_path):
        config = tmp_path / "settings.yaml"
        config.write_text("http:\n  max_retries: lots\n", encoding="utf-8")
        with pytest.raises(SystemExit) as exc_info:
            main(["--commodities", "--config", str(config)])
        assert exc_info.value.code == 2

    @patch("etherealpost.main.GameData.from_directory")
    def test_relative_data_dir_resolves_to_project_root(
        self, mock_from_directory, clean_env, tmp_path
    ):
        config = tmp_path / "settings.yaml"
        config.write_text("data_tables:\n  data_dir: data/tables\n", encoding="utf-8")
        mock_from_directory.side_effect = FileNotFoundError("no tables")
        with pytest.raises(SystemExit):
            main(["--commodities", "--config", str(config)])
        assert mock_from_directory.call_args.args[0] == PROJECT_ROOT / "data" / "tables"
