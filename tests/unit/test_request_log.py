import logging
from pathlib import Path

import pytest
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Mount, Route
from starlette.staticfiles import StaticFiles
from starlette.testclient import TestClient

from src.auc_gateway.middleware.request_log import RequestLogMiddleware, is_app_route


async def _roster(request: Request) -> JSONResponse:
    return JSONResponse({"teams": []})


def _client(root: Path) -> TestClient:
    app = Starlette(
        routes=[Route("/api/v1/teams", _roster), Mount("/", app=StaticFiles(directory=root))],
        middleware=[Middleware(RequestLogMiddleware)],
    )
    app.state.hub = [object(), object()]
    return TestClient(app)


def _records(caplog: pytest.LogCaptureFixture) -> list[logging.LogRecord]:
    return [r for r in caplog.records if r.name == "auc.request"]


class TestRouteClassification:
    @pytest.mark.parametrize("path", ["/", "/health", "/api/v1/teams"])
    def test_app_routes(self, path: str) -> None:
        assert is_app_route(path)

    @pytest.mark.parametrize("path", ["/Auction.html", "/js/app.js", "/auction_data.json"])
    def test_static_assets(self, path: str) -> None:
        assert not is_app_route(path)


class TestRequestLogMiddleware:
    def test_roster_logged_at_info_with_connection_count(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        caplog.set_level(logging.DEBUG, logger="auc.request")
        resp = _client(tmp_path).get("/api/v1/teams")
        assert resp.headers["X-Request-ID"].startswith("req_")
        (record,) = _records(caplog)
        assert record.levelno == logging.INFO
        assert "ws=2" in record.getMessage()
        assert resp.headers["X-Request-ID"] in record.getMessage()

    def test_static_asset_logged_at_debug(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        (tmp_path / "app.js").write_text("console.log(1)")
        caplog.set_level(logging.DEBUG, logger="auc.request")
        assert _client(tmp_path).get("/app.js").status_code == 200
        assert [r.levelno for r in _records(caplog)] == [logging.DEBUG]

    def test_missing_asset_logged_at_warning(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        caplog.set_level(logging.DEBUG, logger="auc.request")
        assert _client(tmp_path).get("/missing.js").status_code == 404
        assert [r.levelno for r in _records(caplog)] == [logging.WARNING]
