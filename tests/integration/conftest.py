"""Integration-test fixtures.

Each test gets a fresh app lifespan with its own persist file and static
dir, so ledgers never leak between tests.
"""

from collections.abc import AsyncIterator, Iterator
from pathlib import Path

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient

from config.settings import settings
from src.main import app


@pytest.fixture
def persist_file(tmp_path: Path) -> Path:
    return tmp_path / "auction_data.json"


@pytest.fixture
def isolated_settings(tmp_path: Path, persist_file: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "Auction.html").write_text("<html><body>auction</body></html>")
    monkeypatch.setattr(settings, "PERSIST_FILE", str(persist_file))
    monkeypatch.setattr(settings, "STATIC_DIR", str(tmp_path))
    monkeypatch.setattr(settings, "RELOAD_POLL_SECONDS", 60.0)


@pytest.fixture
def client(isolated_settings: None) -> Iterator[TestClient]:
    """Sync client for WebSocket flows; runs the app lifespan."""
    with TestClient(app) as c:
        yield c


@pytest_asyncio.fixture
async def http(isolated_settings: None) -> AsyncIterator[AsyncClient]:
    """Async HTTP client; ASGITransport skips lifespan, so it is entered here."""
    async with app.router.lifespan_context(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
