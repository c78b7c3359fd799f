# pulse_bridge/routers/push_routes.py
from fastapi import APIRouter, HTTPException, Request

from ..models.push import PushReceipt, PushRequest

router = APIRouter(prefix="/push", tags=["push"])


@router.post("/send", response_model=PushReceipt)
def send_push(req: PushRequest, request: Request):
    client = request.app.state.push_client
    if client is None:
        raise HTTPException(503, detail="Push notifications are disabled")
    return client.send(req.target, req.payload)
