"""Cluster-related models."""

import re
from typing import FrozenSet, Optional

from pydantic import BaseModel, Field

# Braces and whitespace are ignored in --limit-cluster values
_FILTER_NOISE = re.compile(r"[{}\s]")


class ClusterEntry(BaseModel):
    """One cluster to scan, as listed in the clusters file."""

    identifier: str = Field(min_length=1)

    class Config:
        frozen = True

    def __str__(self) -> str:
        return self.identifier


class ScanFilter(BaseModel):
    """Inclusion set of cluster identifiers. Empty means scan everything."""

    clusters: FrozenSet[str] = frozenset()

    class Config:
        frozen = True

    @classmethod
    def parse(cls, raw: Optional[str]) -> "ScanFilter":
        """Parse ``a,b,c`` or ``{a,b,c}`` into a filter."""
        if not raw:
            return cls()
        cleaned = _FILTER_NOISE.sub("", raw)
        return cls(clusters=frozenset(part for part in cleaned.split(",") if part))

    @property
    def is_empty(self) -> bool:
        return not self.clusters

    def allows(self, identifier: str) -> bool:
        """Check whether a cluster should be scanned."""
        return self.is_empty or identifier in self.clusters


class ClusterSession(BaseModel):
    """Handle for a cluster whose context is active."""

    cluster: str
    context: str


class SessionResult(BaseModel):
    """Outcome of activating a cluster context."""

    session: Optional[ClusterSession] = None
    reason: Optional[str] = None

    @classmethod
    def active(cls, cluster: str, context: str) -> "SessionResult":
        return cls(session=ClusterSession(cluster=cluster, context=context))

    @classmethod
    def failed(cls, reason: str) -> "SessionResult":
        return cls(reason=reason)

    @property
    def ok(self) -> bool:
        return self.session is not None
