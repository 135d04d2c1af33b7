"""WebSocket endpoint: one bidirectional event channel per client.

Frames are JSON objects {"event": ..., "data": ...}. Anything else is logged
and skipped; the connection stays open.
"""

import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from src.auc_broadcast.hub import ConnectionHub
from src.auc_common.envelope import Envelope
from src.auc_gateway.session.dispatcher import EventDispatcher

logger = logging.getLogger(__name__)

router = APIRouter(tags=["realtime"])


@router.websocket("/ws")
async def auction_socket(websocket: WebSocket) -> None:
    hub: ConnectionHub = websocket.app.state.hub
    dispatcher: EventDispatcher = websocket.app.state.dispatcher

    await websocket.accept()
    conn = hub.add(websocket)
    try:
        await dispatcher.on_connect(conn)
        while True:
            raw = await websocket.receive_text()
            try:
                frame = Envelope.model_validate_json(raw)
            except ValidationError:
                logger.warning("Malformed frame from %s: %.120s", conn.id, raw)
                continue
            await dispatcher.dispatch(conn, frame.event, frame.data)
    except WebSocketDisconnect:
        pass
    finally:
        hub.remove(conn)
