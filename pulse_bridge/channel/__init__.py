from .dispatcher import CommandDispatcher, CommandHandler
from .pending import PendingResult

__all__ = ["CommandDispatcher", "CommandHandler", "PendingResult"]
