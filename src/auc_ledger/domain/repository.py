# src/auc_ledger/domain/repository.py
"""LedgerStore Protocol — interface contract for the persistence layer."""
from typing import Protocol

from src.auc_ledger.domain.models import Ledger


class LedgerStoreProtocol(Protocol):
    def load(self) -> Ledger | None: ...

    def save(self, ledger: Ledger) -> bool: ...
