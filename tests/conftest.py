"""Test configuration and fixtures."""

import pytest
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from hostscan.k8s.backend import ClusterBackend
from hostscan.k8s.client import MissingToolError
from hostscan.k8s.query import PodQueryError
from hostscan.model.cluster import ClusterSession, SessionResult
from hostscan.model.pod import PodRecord


class FakeBackend(ClusterBackend):
    """In-memory backend recording which clusters were touched."""

    def __init__(
        self,
        pods: Optional[Dict[str, List[Dict[str, str]]]] = None,
        failing_logins: Iterable[str] = (),
        failing_queries: Iterable[str] = (),
        contexts: Optional[Dict[str, str]] = None,
        missing_tool: Optional[str] = None,
    ):
        self.pods = pods or {}
        self.failing_logins = set(failing_logins)
        self.failing_queries = set(failing_queries)
        self.contexts = contexts or {}
        self.missing_tool = missing_tool
        self.activated: List[str] = []
        self.queried: List[str] = []

    def verify_tools(self) -> None:
        if self.missing_tool:
            raise MissingToolError(f"{self.missing_tool} command not found in PATH")

    def activate_context(self, cluster: str) -> SessionResult:
        self.activated.append(cluster)
        if cluster in self.failing_logins:
            return SessionResult.failed(f"login failed for cluster: {cluster}")
        return SessionResult.active(cluster, self.contexts.get(cluster, f"{cluster}-admin"))

    def list_host_network_pods(self, session: ClusterSession) -> List[PodRecord]:
        self.queried.append(session.cluster)
        if session.cluster in self.failing_queries:
            raise PodQueryError(f"failed to list pods in cluster {session.cluster}")
        return [
            PodRecord(cluster=session.cluster, context=session.context, **pod)
            for pod in self.pods.get(session.cluster, [])
        ]


@pytest.fixture
def make_backend():
    """Factory for FakeBackend instances."""
    return FakeBackend


@pytest.fixture
def fixed_clock():
    """Clock pinned to 2024-01-01 12:00:00."""
    return lambda: datetime(2024, 1, 1, 12, 0, 0)


@pytest.fixture
def write_clusters(tmp_path):
    """Write a clusters file and return its path."""

    def _write(content: str, name: str = "clusters.txt") -> Path:
        path = tmp_path / name
        path.write_text(content)
        return path

    return _write


@pytest.fixture
def kube_proxy_pod():
    """A typical DaemonSet-owned hostNetwork pod."""
    return {
        "namespace": "kube-system",
        "pod_name": "kube-proxy-abcde",
        "node_name": "node-1",
        "owner_kind": "DaemonSet",
        "owner_name": "kube-proxy",
    }


@pytest.fixture
def pod_list():
    """Sample ``kubectl get pods -A -o json`` payload."""
    return {
        "apiVersion": "v1",
        "kind": "List",
        "items": [
            {
                "metadata": {
                    "name": "kube-proxy-abcde",
                    "namespace": "kube-system",
                    "ownerReferences": [
                        {"kind": "DaemonSet", "name": "kube-proxy"},
                        {"kind": "Node", "name": "node-1"},
                    ],
                },
                "spec": {"hostNetwork": True, "nodeName": "node-1"},
            },
            {
                "metadata": {"name": "web-1", "namespace": "default"},
                "spec": {"hostNetwork": False, "nodeName": "node-2"},
            },
            {
                "metadata": {"name": "web-2", "namespace": "default"},
                "spec": {"nodeName": "node-2"},
            },
            {
                "metadata": {"name": "pending-agent", "namespace": "monitoring"},
                "spec": {"hostNetwork": True},
            },
        ],
    }
