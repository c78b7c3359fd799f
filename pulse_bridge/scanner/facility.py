# pulse_bridge/scanner/facility.py
from __future__ import annotations

import re
import shutil
import subprocess
import threading
import time
from pathlib import Path
from typing import Callable, List, Optional, Protocol, Sequence

from ..exceptions import MediaScanError
from ..logger import get_logger

log = get_logger("scanner")

# callback(path, resource_id) where resource_id is None when nothing was indexed
ScanCallback = Callable[[str, Optional[str]], None]

_URI_RE = re.compile(r"\b[a-zA-Z][a-zA-Z0-9+.-]*://\S+")


class MediaIndexingFacility(Protocol):
    def scan(self, paths: Sequence[str], callback: ScanCallback) -> None: ...


class CommandMediaIndexer:
    """
    Drives the host's media indexer through an external command
    (tracker3 by default). Each scan runs on its own daemon thread and the
    callback fires once per path from that thread.
    """

    def __init__(self, command: Sequence[str], timeout_s: Optional[float] = None):
        self.command = list(command)
        self.timeout_s = timeout_s

    def scan(self, paths: Sequence[str], callback: ScanCallback) -> None:
        if not self.command:
            raise MediaScanError("No media scan command configured")
        executable = shutil.which(self.command[0])
        if executable is None:
            raise MediaScanError(f"Media indexer '{self.command[0]}' not found on PATH")

        worker = threading.Thread(
            target=self._run,
            args=(executable, list(paths), callback),
            name="media-scan",
            daemon=True,
        )
        worker.start()

    def build_command(self, executable: str, path: str) -> List[str]:
        args = [a.replace("{path}", path) for a in self.command[1:]]
        if not any("{path}" in a for a in self.command[1:]):
            args.append(path)
        return [executable, *args]

    def _run(self, executable: str, paths: List[str], callback: ScanCallback) -> None:
        for path in paths:
            callback(path, self._index_one(executable, path))

    def _index_one(self, executable: str, path: str) -> Optional[str]:
        cmd = self.build_command(executable, path)
        started = time.monotonic()
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                check=False,
                timeout=self.timeout_s,
            )
        except (OSError, subprocess.SubprocessError) as e:
            log.warning(f"Media indexer failed for {path}: {e}")
            return None

        elapsed_ms = int((time.monotonic() - started) * 1000)
        if result.returncode != 0:
            stderr = (result.stderr or "").strip() or f"exit status {result.returncode}"
            log.warning(f"Media indexer declined {path} in {elapsed_ms}ms: {stderr}")
            return None

        log.debug(f"Media indexer finished {path} in {elapsed_ms}ms")
        return resource_id_from_output(result.stdout, path)


def resource_id_from_output(stdout: Optional[str], path: str) -> str:
    match = _URI_RE.search(stdout or "")
    if match:
        return match.group(0)
    return Path(path).resolve().as_uri()
