"""HTTP surface: client page, public roster, health.

Static assets are mounted separately in src.main, after these routes.
"""

from pathlib import Path

from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import FileResponse

from config.settings import settings
from src.auc_gateway.session.dispatcher import EventDispatcher
from src.auc_ledger.application.schemas import public_roster

router = APIRouter()


@router.get("/", include_in_schema=False)
async def client_page() -> FileResponse:
    page = Path(settings.STATIC_DIR) / settings.CLIENT_PAGE
    if not page.is_file():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Client page not found")
    return FileResponse(page)


@router.get("/api/v1/teams", summary="Public team roster")
async def teams(request: Request) -> dict[str, list[dict[str, str]]]:
    """id + name only; same content as init:auth."""
    dispatcher: EventDispatcher = request.app.state.dispatcher
    return {"teams": public_roster(dispatcher.engine.ledger)}


@router.get("/health")
async def health(request: Request) -> dict[str, object]:
    return {
        "status": "ok",
        "version": "0.1.0",
        "connections": len(request.app.state.hub),
    }
