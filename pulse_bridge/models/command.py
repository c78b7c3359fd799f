# pulse_bridge/models/command.py
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class ErrorCode(str, Enum):
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    FILE_NOT_FOUND = "FILE_NOT_FOUND"
    SCAN_ERROR = "SCAN_ERROR"
    UNIMPLEMENTED = "UNIMPLEMENTED"


class Command(BaseModel):
    """A named request with arguments, as received on a channel."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    arguments: Any = Field(default_factory=dict)


class ErrorSignal(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: ErrorCode
    message: str


class ScanOutcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    found: bool


class Resolution(BaseModel):
    """
    Terminal outcome of one command: a success value or an ErrorSignal.
    Exactly one of `value`/`error` is meaningful; `error` wins when set.
    """
    model_config = ConfigDict(frozen=True)

    command: str
    request_id: str
    value: Any = None
    error: Optional[ErrorSignal] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_wire(self) -> Dict[str, Any]:
        if self.error is not None:
            return {"error": {"code": self.error.code.value, "message": self.error.message}}
        value = self.value
        if isinstance(value, ScanOutcome):
            value = value.found
        elif isinstance(value, BaseModel):
            value = value.model_dump(mode="json")
        return {"success": value}
