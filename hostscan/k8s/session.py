"""Cluster context activation through the external login command."""

import subprocess

from ..model.cluster import SessionResult
from ..model.pod import UNKNOWN_CONTEXT
from ..utils.logger import get_logger
from .client import K8sClient, require_executable

logger = get_logger(__name__)


class LoginSession:
    """Activates a cluster by running ``<login_command> <cluster>``.

    The login command is expected to be pre-authenticated and to switch the
    kubeconfig's current context. Its output is discarded.
    """

    def __init__(self, client: K8sClient, login_command: str = "login"):
        self.client = client
        self.login_command = login_command

    def verify(self) -> None:
        require_executable(self.login_command)

    def _login(self, cluster: str) -> bool:
        cmd = [self.login_command, cluster]
        logger.debug(f"Executing: {' '.join(cmd)}")
        try:
            subprocess.run(
                cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                check=True,
            )
            return True
        except (subprocess.CalledProcessError, FileNotFoundError) as e:
            logger.debug(f"Login failed for {cluster}: {e}")
            return False

    def resolve_context(self) -> str:
        """Current context name, or the placeholder when it can't be read."""
        return self.client.current_context() or UNKNOWN_CONTEXT

    def activate(self, cluster: str) -> SessionResult:
        if not self._login(cluster):
            return SessionResult.failed(f"login failed for cluster: {cluster}")
        return SessionResult.active(cluster, self.resolve_context())
