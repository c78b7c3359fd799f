# pulse_bridge/scanner/invoker.py
from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any, Callable, Dict, Optional

from ..channel.dispatcher import CommandHandler
from ..channel.pending import PendingResult
from ..logger import get_logger
from ..models.command import ErrorCode, ScanOutcome
from .facility import MediaIndexingFacility

log = get_logger("scanner")

SCAN_FILE = "scanFile"


class IndexingInvoker:
    """
    Handler for the `scanFile` command.

    Validates the `path` argument, probes the filesystem, then hands the path
    to the indexing facility. Holds no per-invocation state: everything an
    invocation needs lives in its PendingResult and the callback closure.
    """

    def __init__(
        self,
        facility: MediaIndexingFacility,
        exists: Callable[[str], bool] = os.path.exists,
    ):
        self.facility = facility
        self.exists = exists

    def handlers(self) -> Dict[str, CommandHandler]:
        return {SCAN_FILE: self.scan_file}

    def scan_file(self, arguments: Mapping[str, Any], pending: PendingResult) -> None:
        path = arguments.get("path")
        if path is None:
            pending.error(ErrorCode.INVALID_ARGUMENT, "Path cannot be null")
            return
        if not isinstance(path, str):
            pending.error(ErrorCode.INVALID_ARGUMENT, f"Path must be a string, got {type(path).__name__}")
            return

        if not self.exists(path):
            pending.error(ErrorCode.FILE_NOT_FOUND, f"File does not exist: {path}")
            return

        def _on_scanned(scanned_path: str, resource_id: Optional[str]) -> None:
            log.debug(f"Scanned file: {scanned_path}, URI: {resource_id}")
            pending.success(ScanOutcome(found=bool(resource_id)))

        try:
            self.facility.scan([path], _on_scanned)
        except Exception as e:
            log.error(f"Error scanning file: {path}", exc_info=True)
            if not pending.submitted:
                pending.error(ErrorCode.SCAN_ERROR, f"Error scanning file: {e}")
