# pulse_bridge/channel/dispatcher.py
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Dict, Optional

from ..logger import get_logger
from ..models.command import Command, ErrorCode, Resolution
from .pending import PendingResult

log = get_logger("dispatcher")

# handler(arguments, pending) -> None; must resolve `pending` exactly once,
# now or later from any thread.
CommandHandler = Callable[[Mapping[str, Any], PendingResult], None]


class CommandDispatcher:
    """
    Routes named commands on one channel to their handlers.

    The handler table is installed by attach()/register() and released by
    detach(); both happen at process start/stop, never while dispatching.
    """

    def __init__(self, channel: str):
        self.channel = channel
        self._handlers: Optional[Dict[str, CommandHandler]] = None

    @property
    def attached(self) -> bool:
        return self._handlers is not None

    def attach(self, handlers: Optional[Mapping[str, CommandHandler]] = None) -> "CommandDispatcher":
        self._handlers = dict(handlers or {})
        log.info(f"Channel {self.channel} attached: commands={sorted(self._handlers)}")
        return self

    def register(self, name: str, handler: CommandHandler) -> None:
        if self._handlers is None:
            self._handlers = {}
        self._handlers[name] = handler

    def detach(self) -> None:
        if self._handlers is None:
            return
        self._handlers = None
        log.info(f"Channel {self.channel} detached")

    async def dispatch(self, command: Command) -> Resolution:
        pending = PendingResult(command.name)
        handler = (self._handlers or {}).get(command.name)

        if handler is None:
            if not self.attached:
                pending.error(ErrorCode.UNIMPLEMENTED, f"Channel {self.channel} is detached")
            else:
                pending.not_implemented()
            return await pending.wait()

        if not isinstance(command.arguments, Mapping):
            pending.error(
                ErrorCode.INVALID_ARGUMENT,
                f"Arguments for '{command.name}' must be a mapping, got {type(command.arguments).__name__}",
            )
            return await pending.wait()

        try:
            handler(command.arguments, pending)
        except Exception:
            log.exception(f"Handler for {command.name} raised (request_id={pending.request_id})")
            raise
        return await pending.wait()

    async def invoke(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> Resolution:
        return await self.dispatch(Command(name=name, arguments=dict(arguments or {})))
