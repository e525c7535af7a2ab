"""Data models for hostscan."""

from .cluster import ClusterEntry, ScanFilter, ClusterSession, SessionResult
from .pod import PodRecord, CSV_HEADER, UNKNOWN_CONTEXT
from .run import ScanRun, ClusterStatus, ClusterOutcome, ScanSummary
from .config import ScannerConfig, ConfigError, load_config

__all__ = [
    "ClusterEntry",
    "ScanFilter",
    "ClusterSession",
    "SessionResult",
    "PodRecord",
    "CSV_HEADER",
    "UNKNOWN_CONTEXT",
    "ScanRun",
    "ClusterStatus",
    "ClusterOutcome",
    "ScanSummary",
    "ScannerConfig",
    "ConfigError",
    "load_config",
]
