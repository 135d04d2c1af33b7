"""Live reload: poll the client page's mtime, broadcast server:reload on change.

Side notification only; never touches the ledger. Missing files are skipped
until they appear (their first appearance counts as a change).
"""

import asyncio
import logging
from collections.abc import Iterable
from pathlib import Path

from src.auc_broadcast.hub import ConnectionHub
from src.auc_common.datetime_utils import epoch_ms
from src.auc_common.enums import OutboundEvent

logger = logging.getLogger(__name__)


class FileWatcher:
    def __init__(self, paths: Iterable[Path], hub: ConnectionHub, interval: float) -> None:
        self._paths = list(paths)
        self._hub = hub
        self._interval = interval
        self._mtimes: dict[Path, float | None] = {p: _mtime(p) for p in self._paths}

    def changed(self) -> list[Path]:
        """Paths whose mtime moved since the last call (appeared counts, vanished does not)."""
        out: list[Path] = []
        for path in self._paths:
            current = _mtime(path)
            if current is not None and current != self._mtimes.get(path):
                out.append(path)
            self._mtimes[path] = current
        return out

    async def poll_once(self) -> bool:
        changed = self.changed()
        if not changed:
            return False
        logger.info("Client files changed: %s", ", ".join(p.name for p in changed))
        await self._hub.broadcast(OutboundEvent.SERVER_RELOAD, {"ts": epoch_ms()})
        return True

    async def run(self) -> None:
        logger.debug("Watching %s", [str(p) for p in self._paths])
        while True:
            await asyncio.sleep(self._interval)
            await self.poll_once()


def _mtime(path: Path) -> float | None:
    try:
        return path.stat().st_mtime
    except OSError:
        return None
