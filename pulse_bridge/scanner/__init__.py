from .facility import CommandMediaIndexer, MediaIndexingFacility, ScanCallback
from .invoker import SCAN_FILE, IndexingInvoker

__all__ = [
    "CommandMediaIndexer",
    "IndexingInvoker",
    "MediaIndexingFacility",
    "SCAN_FILE",
    "ScanCallback",
]
