"""Boundary between the scan orchestration and the clusters it talks to."""

from abc import ABC, abstractmethod
from typing import List

from ..model.cluster import ClusterSession, SessionResult
from ..model.config import ScannerConfig
from ..model.pod import PodRecord
from .client import K8sClient
from .query import PodHostNetworkQuery
from .session import LoginSession


class ClusterBackend(ABC):
    """Capabilities the orchestrator needs from the outside world."""

    @abstractmethod
    def verify_tools(self) -> None:
        """Raise MissingToolError if a required executable is unavailable."""
        pass

    @abstractmethod
    def activate_context(self, cluster: str) -> SessionResult:
        """Make ``cluster`` the active context."""
        pass

    @abstractmethod
    def list_host_network_pods(self, session: ClusterSession) -> List[PodRecord]:
        """List hostNetwork pods of the active cluster, raising PodQueryError on failure."""
        pass


class KubectlBackend(ClusterBackend):
    """Backend driving the ``login`` and ``kubectl`` executables."""

    def __init__(self, config: ScannerConfig):
        self.client = K8sClient(kubectl=config.kubectl)
        self.session = LoginSession(self.client, login_command=config.login_command)
        self.pod_query = PodHostNetworkQuery(self.client)

    def verify_tools(self) -> None:
        self.client.verify()
        self.session.verify()

    def activate_context(self, cluster: str) -> SessionResult:
        return self.session.activate(cluster)

    def list_host_network_pods(self, session: ClusterSession) -> List[PodRecord]:
        return self.pod_query.query(session)
