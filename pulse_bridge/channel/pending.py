# pulse_bridge/channel/pending.py
from __future__ import annotations

import asyncio
import threading
import uuid
from typing import Any, Optional

from ..exceptions import ResultAlreadySubmittedError
from ..logger import get_logger
from ..models.command import ErrorCode, ErrorSignal, Resolution

log = get_logger("channel")


class PendingResult:
    """
    One-shot completion handle for a single in-flight command.

    Handlers may resolve it from any thread; the resolution is marshaled onto
    the event loop that created it. The first call to success()/error()/
    not_implemented() wins and every later call raises
    ResultAlreadySubmittedError. A reply that arrives after the caller stopped
    waiting, or after the loop closed, is dropped.
    """

    def __init__(self, command: str, loop: Optional[asyncio.AbstractEventLoop] = None):
        self.command = command
        self.request_id = str(uuid.uuid4())
        self._loop = loop or asyncio.get_running_loop()
        self._future: asyncio.Future[Resolution] = self._loop.create_future()
        self._lock = threading.Lock()
        self._submitted = False

    @property
    def submitted(self) -> bool:
        return self._submitted

    def success(self, value: Any = None) -> None:
        self._submit(Resolution(command=self.command, request_id=self.request_id, value=value))

    def error(self, code: ErrorCode, message: str) -> None:
        signal = ErrorSignal(code=code, message=message)
        self._submit(Resolution(command=self.command, request_id=self.request_id, error=signal))

    def not_implemented(self) -> None:
        self.error(ErrorCode.UNIMPLEMENTED, f"No handler for command '{self.command}'")

    async def wait(self) -> Resolution:
        return await self._future

    def _submit(self, resolution: Resolution) -> None:
        with self._lock:
            if self._submitted:
                raise ResultAlreadySubmittedError(
                    f"Reply already submitted for {self.command} ({self.request_id})"
                )
            self._submitted = True

        if _on_loop_thread(self._loop):
            self._deliver(resolution)
            return
        try:
            self._loop.call_soon_threadsafe(self._deliver, resolution)
        except RuntimeError:
            # loop closed; nobody is left to receive the reply
            log.debug(f"Dropped reply for {self.command} request_id={self.request_id}: loop closed")

    def _deliver(self, resolution: Resolution) -> None:
        if self._future.done():
            # caller stopped waiting (timeout or cancellation)
            log.debug(f"Dropped late reply for {self.command} request_id={self.request_id}")
            return
        self._future.set_result(resolution)
        log.debug(f"Resolved {self.command} request_id={self.request_id} ok={resolution.ok}")


def _on_loop_thread(loop: asyncio.AbstractEventLoop) -> bool:
    try:
        return asyncio.get_running_loop() is loop
    except RuntimeError:
        return False
