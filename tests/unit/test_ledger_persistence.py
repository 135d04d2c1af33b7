"""Unit tests for JsonLedgerStore and the persisted snapshot schema."""

import json
from pathlib import Path
from unittest.mock import patch

from src.auc_ledger.domain.models import Ledger, PlayerKey, Team
from src.auc_ledger.infrastructure.persistence import JsonLedgerStore


class TestLoad:
    def test_missing_file_returns_none(self, json_store: JsonLedgerStore) -> None:
        assert json_store.load() is None

    def test_missing_collections_default_to_empty(self, tmp_path: Path) -> None:
        path = tmp_path / "auction_data.json"
        path.write_text(json.dumps({"teams": [{"id": "t1", "name": "A", "purse": 10}]}))
        ledger = JsonLedgerStore(path).load()

        assert ledger is not None
        assert ledger.categories == []
        assert ledger.players_snapshot == {}
        assert ledger.active_bids == {}
        assert ledger.sold_prices == {}
        assert ledger.pass_records == {}
        assert ledger.teams[0].purchases == {}

    def test_null_collections_default_to_empty(self, tmp_path: Path) -> None:
        path = tmp_path / "auction_data.json"
        path.write_text(json.dumps({"teams": None, "activeBids": None}))
        ledger = JsonLedgerStore(path).load()
        assert ledger is not None
        assert ledger.teams == []
        assert ledger.active_bids == {}

    def test_composite_keys_decoded(self, tmp_path: Path) -> None:
        path = tmp_path / "auction_data.json"
        path.write_text(json.dumps({
            "teams": [{"id": "t1", "purse": 200, "purchases": {"Batsman": "Virat"}}],
            "soldPrices": {"Batsman:Virat": 300},
            "activeBids": {"Bowler:Mr: Colon": 50},
        }))
        ledger = JsonLedgerStore(path).load()
        assert ledger is not None
        assert ledger.sold_prices == {PlayerKey("Batsman", "Virat"): 300}
        assert ledger.active_bids == {PlayerKey("Bowler", "Mr: Colon"): 50}
        assert ledger.sold_players == frozenset({"Virat"})

    def test_category_id_with_separator(self, tmp_path: Path) -> None:
        path = tmp_path / "auction_data.json"
        path.write_text(json.dumps({
            "teams": [{"id": "t1", "purse": 300, "purchases": {"U:19": "Gill"}}],
            "categories": [{"id": "U:19"}, {"id": "U"}],
            "soldPrices": {"U:19:Gill": 200},
            "activeBids": {"U:19:Jaiswal": 40, "U:Rinku": 10},
        }))
        ledger = JsonLedgerStore(path).load()
        assert ledger is not None
        assert ledger.sold_prices == {PlayerKey("U:19", "Gill"): 200}
        assert ledger.active_bids == {
            PlayerKey("U:19", "Jaiswal"): 40,
            PlayerKey("U", "Rinku"): 10,
        }

    def test_cleared_purchase_slots_dropped(self, tmp_path: Path) -> None:
        path = tmp_path / "auction_data.json"
        path.write_text(json.dumps({
            "teams": [{"id": "t1", "purse": 1, "purchases": {"Batsman": None, "Bowler": ""}}],
        }))
        ledger = JsonLedgerStore(path).load()
        assert ledger is not None
        assert ledger.teams[0].purchases == {}

    def test_corrupt_file_returns_none(self, tmp_path: Path) -> None:
        path = tmp_path / "auction_data.json"
        path.write_text("{not json")
        assert JsonLedgerStore(path).load() is None

    def test_malformed_key_returns_none(self, tmp_path: Path) -> None:
        path = tmp_path / "auction_data.json"
        path.write_text(json.dumps({"soldPrices": {"no-separator": 1}}))
        assert JsonLedgerStore(path).load() is None


class TestSave:
    def test_round_trip_is_identical(self, json_store: JsonLedgerStore) -> None:
        ledger = Ledger(
            teams=[
                Team(
                    id="t1", name="A", purse=200, password="p",
                    purchases={"Batsman": "Virat"}, extra={"color": "red"},
                ),
                Team(id="t2", name="B", purse=12.5, password="q"),
            ],
            categories=[{"id": "Batsman", "label": "Batters"}],
            players_snapshot={"Batsman": [{"name": "Virat", "age": 35}]},
            active_bids={PlayerKey("Bowler", "Bumrah"): 90},
            sold_prices={PlayerKey("Batsman", "Virat"): 300},
            pass_records={"Batsman": ["Gill"]},
        )
        assert json_store.save(ledger) is True
        assert json_store.load() == ledger

    def test_on_disk_schema(self, json_store: JsonLedgerStore) -> None:
        ledger = Ledger(
            teams=[Team(id="t1", name="A", purse=200, password="p", purchases={"C": "X"})],
            sold_prices={PlayerKey("C", "X"): 300},
        )
        json_store.save(ledger)
        data = json.loads(json_store.path.read_text())
        assert set(data) == {
            "teams", "categories", "playersSnapshot", "activeBids", "soldPrices", "passRecords",
        }
        assert data["soldPrices"] == {"C:X": 300}
        assert data["teams"][0]["password"] == "p"

    def test_no_temp_file_left_behind(self, json_store: JsonLedgerStore) -> None:
        json_store.save(Ledger())
        assert [p.name for p in json_store.path.parent.iterdir()] == ["auction_data.json"]

    def test_write_failure_returns_false(self, json_store: JsonLedgerStore) -> None:
        with patch("src.auc_ledger.infrastructure.persistence.os.replace", side_effect=OSError("disk full")):
            assert json_store.save(Ledger()) is False
