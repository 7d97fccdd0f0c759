from .config import SyncConfig
from .report import BatchSyncReport, MergeOutcome, SyncReport, SyncResult
from .service import SynchronizationService
from .datasets import DATASET_SYNCS, DatasetSync

__all__ = [
    "SyncConfig",
    "BatchSyncReport",
    "MergeOutcome",
    "SyncReport",
    "SyncResult",
    "SynchronizationService",
    "DATASET_SYNCS",
    "DatasetSync",
]
