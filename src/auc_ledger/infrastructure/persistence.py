"""JsonLedgerStore — concrete implementation of LedgerStoreProtocol.

One JSON file holds the whole ledger. Writes are synchronous (write-through)
and go to a sibling temp file first, then os.replace() over the target, so a
crash mid-write leaves the previous snapshot intact.

Failures never propagate: load() falls back to None, save() returns False.
"""

import logging
import os
from pathlib import Path

from pydantic import ValidationError

from src.auc_common.errors import PersistenceError
from src.auc_ledger.application.schemas import LedgerSnapshot
from src.auc_ledger.domain.models import Ledger

logger = logging.getLogger(__name__)


class JsonLedgerStore:
    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Ledger | None:
        """Read the snapshot. Returns None when absent or unreadable."""
        if not self._path.exists():
            logger.info("No persisted ledger at %s", self._path)
            return None
        try:
            raw = self._path.read_text(encoding="utf-8")
            snapshot = LedgerSnapshot.model_validate_json(raw)
            ledger = snapshot.to_domain()
        except (OSError, ValidationError, ValueError) as e:
            logger.warning("Load Error %s: %s", self._path, e)
            return None
        logger.info(
            "Loaded ledger from %s: teams=%d, categories=%d, sold=%d",
            self._path,
            len(ledger.teams),
            len(ledger.categories),
            len(ledger.sold_prices),
        )
        return ledger

    def save(self, ledger: Ledger) -> bool:
        """Write the snapshot. Logs and returns False on I/O failure."""
        try:
            self._write(LedgerSnapshot.from_domain(ledger).model_dump_json(by_alias=True, indent=2))
        except PersistenceError as e:
            logger.warning(e.message)
            return False
        return True

    def _write(self, payload: str) -> None:
        tmp = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(payload, encoding="utf-8")
            os.replace(tmp, self._path)
        except OSError as e:
            raise PersistenceError(f"{self._path}: {e}") from e
