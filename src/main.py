"""FastAPI application entry point.

Run with: uvicorn src.main:app --host 0.0.0.0 --port 3000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import asyncio
import contextlib
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI

from config.settings import settings
from src.auc_auction.engine.state_machine import AuctionEngine
from src.auc_broadcast.hub import ConnectionHub
from src.auc_gateway.api.router import router as http_router
from src.auc_gateway.api.static import GuardedStaticFiles
from src.auc_gateway.api.ws_router import router as ws_router
from src.auc_gateway.middleware.request_log import RequestLogMiddleware
from src.auc_gateway.reload.watcher import FileWatcher
from src.auc_gateway.session.dispatcher import EventDispatcher
from src.auc_ledger.infrastructure.persistence import JsonLedgerStore

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s %(levelname)-7s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: load the ledger, wire hub + dispatcher, start the watcher. Shutdown: stop it."""
    store = JsonLedgerStore(settings.PERSIST_FILE)
    engine = AuctionEngine.from_store(store, default_purse=settings.DEFAULT_PURSE)
    hub = ConnectionHub()
    app.state.hub = hub
    app.state.dispatcher = EventDispatcher(engine, hub)

    static_dir = Path(settings.STATIC_DIR)
    watcher = FileWatcher(
        (static_dir / name for name in settings.WATCHED_FILES),
        hub,
        interval=settings.RELOAD_POLL_SECONDS,
    )
    watch_task = asyncio.create_task(watcher.run())
    logger.info("%s ready (ledger: %s)", settings.APP_NAME, store.path)
    yield
    watch_task.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await watch_task


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    lifespan=lifespan,
)


app.add_middleware(RequestLogMiddleware)

app.include_router(ws_router)
app.include_router(http_router)
# Deployment root served last so the routes above win.
app.mount(
    "/",
    GuardedStaticFiles(
        directory=settings.STATIC_DIR,
        hidden=[settings.PERSIST_FILE, settings.PERSIST_FILE + ".tmp"],
        check_dir=False,
    ),
    name="static",
)
