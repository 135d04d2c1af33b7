"""Shared test fixtures."""

import os

# Settings() requires JWT_SECRET at import time.
os.environ.setdefault("JWT_SECRET", "test-secret-not-for-production")

from pathlib import Path  # noqa: E402

import pytest  # noqa: E402

from src.auc_auction.engine.state_machine import AuctionEngine  # noqa: E402
from src.auc_ledger.domain.models import Ledger, Team  # noqa: E402
from src.auc_ledger.infrastructure.persistence import JsonLedgerStore  # noqa: E402


class MemoryStore:
    """In-memory LedgerStoreProtocol; records every save."""

    def __init__(self, ledger: Ledger | None = None, fail: bool = False) -> None:
        self.ledger = ledger
        self.fail = fail
        self.saves = 0

    def load(self) -> Ledger | None:
        return self.ledger

    def save(self, ledger: Ledger) -> bool:
        self.saves += 1
        if self.fail:
            return False
        self.ledger = ledger
        return True


def make_ledger() -> Ledger:
    return Ledger(
        teams=[
            Team(id="t1", name="Royal Challengers", purse=500, password="123"),
            Team(id="t2", name="Chennai Kings", purse=500, password="123"),
            Team(id="t3", name="Mumbai Indians", purse=100, password="456"),
        ],
        categories=[{"id": "Batsman", "name": "Batsman"}, {"id": "Bowler", "name": "Bowler"}],
    )


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def engine(memory_store: MemoryStore) -> AuctionEngine:
    return AuctionEngine(memory_store, default_purse=500, ledger=make_ledger())


@pytest.fixture
def json_store(tmp_path: Path) -> JsonLedgerStore:
    return JsonLedgerStore(tmp_path / "auction_data.json")


@pytest.fixture
def ledger() -> Ledger:
    return make_ledger()


@pytest.fixture
def failing_store() -> MemoryStore:
    return MemoryStore(fail=True)
