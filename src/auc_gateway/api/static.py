"""Static files for the deployment root, minus the ledger snapshot.

The snapshot holds team passwords, so it is never served even when it sits
inside STATIC_DIR.
"""

import os
from pathlib import Path

from starlette.exceptions import HTTPException
from starlette.responses import Response
from starlette.staticfiles import StaticFiles
from starlette.types import Scope


class GuardedStaticFiles(StaticFiles):
    def __init__(self, *, directory: str | Path, hidden: list[str | Path], **kwargs: object) -> None:
        super().__init__(directory=directory, **kwargs)  # type: ignore[arg-type]
        self._hidden = {os.path.realpath(p) for p in hidden}

    async def get_response(self, path: str, scope: Scope) -> Response:
        full_path, _ = self.lookup_path(path)
        if full_path and os.path.realpath(full_path) in self._hidden:
            raise HTTPException(status_code=404)
        return await super().get_response(path, scope)
