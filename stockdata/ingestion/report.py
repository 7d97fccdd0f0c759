from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, computed_field


class MergeOutcome(BaseModel):
    """Counts of one dedup merge."""

    fetched: int = 0
    inserted: int = 0
    skipped: int = 0


class SyncResult(BaseModel):
    """Outcome of one dataset synchronization for one symbol."""

    dataset: str
    symbol: str
    success: bool
    fetched: int = 0
    inserted: int = 0
    skipped: int = 0
    watermark: Optional[datetime] = None
    error: Optional[str] = None
    started_at: datetime
    finished_at: datetime


class SyncReport(BaseModel):
    """All dataset results of one symbol."""

    symbol: str
    results: List[SyncResult] = Field(default_factory=list)

    @computed_field
    @property
    def success(self) -> bool:
        return all(r.success for r in self.results)

    @computed_field
    @property
    def inserted(self) -> int:
        return sum(r.inserted for r in self.results)

    @property
    def failures(self) -> Dict[str, str]:
        return {r.dataset: r.error or "" for r in self.results if not r.success}

    def add(self, result: SyncResult) -> None:
        self.results.append(result)


class BatchSyncReport(BaseModel):
    """Track a multi-symbol synchronization run."""

    attempted: List[str] = Field(default_factory=list)
    reports: List[SyncReport] = Field(default_factory=list)

    @property
    def success_count(self) -> int:
        return sum(1 for r in self.reports if r.success)

    @property
    def failure_count(self) -> int:
        return sum(1 for r in self.reports if not r.success)

    @property
    def inserted(self) -> int:
        return sum(r.inserted for r in self.reports)

    def add(self, report: SyncReport) -> None:
        self.attempted.append(report.symbol)
        self.reports.append(report)
