"""Core business logic."""

from .cluster_list import (
    PRESETS,
    ClusterListNotFoundError,
    InvalidClusterListError,
    load_cluster_list,
    resolve_clusters_file,
)
from .orchestrator import ScanOrchestrator

__all__ = [
    "PRESETS",
    "ClusterListNotFoundError",
    "InvalidClusterListError",
    "load_cluster_list",
    "resolve_clusters_file",
    "ScanOrchestrator",
]
