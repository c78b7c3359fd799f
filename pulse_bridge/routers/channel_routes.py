# pulse_bridge/routers/channel_routes.py
from typing import Any, Dict

from fastapi import APIRouter, Body, Request

from ..models.command import Command

router = APIRouter(prefix="/channels", tags=["channels"])


@router.post("/media_scanner/{method}")
async def call_media_scanner(
    method: str,
    request: Request,
    arguments: Any = Body(default=None),
) -> Dict[str, Any]:
    """
    Invoke a command on the media scanner channel. Both success and tagged
    errors come back as 200; the body is {"success": ...} or {"error": {...}}.
    """
    dispatcher = request.app.state.media_scanner
    command = Command(name=method, arguments={} if arguments is None else arguments)
    resolution = await dispatcher.dispatch(command)
    return resolution.to_wire()
