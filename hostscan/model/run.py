"""Scan run models."""

from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field

RUN_TIMESTAMP_FORMAT = "%Y%m%d-%H%M%S"


class ScanRun(BaseModel):
    """A single execution of the scanner and its two output artifacts."""

    clusters_file: Path
    output_directory: Path
    base_id: str
    run_timestamp: str

    class Config:
        frozen = True

    @classmethod
    def create(
        cls,
        clusters_file: Path,
        output_directory: Path,
        base_id: str,
        now: Optional[datetime] = None,
    ) -> "ScanRun":
        """Build a run, fixing the timestamp shared by both artifact names."""
        stamp = (now or datetime.now()).strftime(RUN_TIMESTAMP_FORMAT)
        return cls(
            clusters_file=Path(clusters_file),
            output_directory=Path(output_directory),
            base_id=base_id,
            run_timestamp=stamp,
        )

    @property
    def csv_path(self) -> Path:
        return self.output_directory / f"hostnetwork-pods-{self.base_id}-{self.run_timestamp}.csv"

    @property
    def log_path(self) -> Path:
        return self.output_directory / f"scan-hostnetwork-{self.base_id}-{self.run_timestamp}.log"


class ClusterStatus(str, Enum):
    """What happened to a cluster during the run."""

    SCANNED = "scanned"
    SKIPPED = "skipped"
    LOGIN_FAILED = "login_failed"
    QUERY_FAILED = "query_failed"


class ClusterOutcome(BaseModel):
    """Per-cluster result."""

    cluster: str
    status: ClusterStatus
    context: Optional[str] = None
    pod_count: int = 0


class ScanSummary(BaseModel):
    """Result of a complete run."""

    csv_path: Path
    log_path: Path
    outcomes: List[ClusterOutcome] = Field(default_factory=list)

    def _count(self, *statuses: ClusterStatus) -> int:
        return sum(1 for outcome in self.outcomes if outcome.status in statuses)

    @property
    def scanned(self) -> int:
        return self._count(ClusterStatus.SCANNED, ClusterStatus.QUERY_FAILED)

    @property
    def skipped(self) -> int:
        return self._count(ClusterStatus.SKIPPED)

    @property
    def failed(self) -> int:
        return self._count(ClusterStatus.LOGIN_FAILED, ClusterStatus.QUERY_FAILED)

    @property
    def pods_found(self) -> int:
        return sum(outcome.pod_count for outcome in self.outcomes)
