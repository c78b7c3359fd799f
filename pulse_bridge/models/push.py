# pulse_bridge/models/push.py
from __future__ import annotations

from typing import Dict, Optional

from pydantic import BaseModel, Field, model_validator


class PushTarget(BaseModel):
    token: Optional[str] = Field(default=None, min_length=1)
    topic: Optional[str] = Field(default=None, min_length=1)

    @model_validator(mode="after")
    def _exactly_one(self) -> "PushTarget":
        if (self.token is None) == (self.topic is None):
            raise ValueError("exactly one of 'token' or 'topic' is required")
        return self


class PushPayload(BaseModel):
    title: str
    body: str
    data: Dict[str, str] = {}


class PushRequest(BaseModel):
    target: PushTarget
    payload: PushPayload


class PushReceipt(BaseModel):
    ok: bool
    message_id: Optional[str] = None
    error: Optional[str] = None
