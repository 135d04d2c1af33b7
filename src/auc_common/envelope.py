"""Unified WebSocket frame.

Every frame in both directions has this shape:
{
    "event": "player:sold",
    "data": { ... }      // any JSON value, including a bare string
}
"""

from typing import Any

from pydantic import BaseModel, ConfigDict


class Envelope(BaseModel):
    model_config = ConfigDict(extra="ignore")

    event: str
    data: Any = None


def make_frame(event: str, data: Any = None) -> dict[str, Any]:
    return Envelope(event=event, data=data).model_dump()
