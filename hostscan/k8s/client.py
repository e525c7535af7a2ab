"""Kubernetes client wrapper."""

import json
import shutil
import subprocess
from typing import Any, Dict, List, Optional, Tuple

from ..utils.logger import get_logger

logger = get_logger(__name__)


class MissingToolError(RuntimeError):
    """A required executable is not available on PATH."""


def require_executable(name: str) -> str:
    """Return the resolved path of ``name`` or raise MissingToolError."""
    resolved = shutil.which(name)
    if resolved is None:
        raise MissingToolError(f"{name} command not found in PATH")
    logger.debug(f"Resolved {name} -> {resolved}")
    return resolved


class K8sClient:
    """Wrapper for kubectl commands."""

    def __init__(self, kubectl: str = "kubectl"):
        self.kubectl = kubectl

    def verify(self) -> None:
        """Verify kubectl is resolvable."""
        require_executable(self.kubectl)

    def _build_command(self, args: List[str]) -> List[str]:
        """Build kubectl command against the current context."""
        return [self.kubectl] + list(args)

    def execute(self, args: List[str]) -> Tuple[bool, str]:
        """Execute kubectl command and return success status and output."""
        cmd = self._build_command(args)
        logger.debug(f"Executing: {' '.join(cmd)}")

        try:
            result = subprocess.run(cmd, capture_output=True, text=True, check=True)
            return True, result.stdout
        except subprocess.CalledProcessError as e:
            logger.error(f"Command failed: {e.stderr}")
            return False, e.stderr
        except FileNotFoundError:
            logger.error(f"{self.kubectl} command not found")
            return False, f"{self.kubectl} command not found"

    def get_json(self, resource_type: str, all_namespaces: bool = False) -> Optional[Dict[str, Any]]:
        """Get resource(s) as JSON."""
        args = ["get", resource_type]

        if all_namespaces:
            args.append("--all-namespaces")

        args.extend(["-o", "json"])

        success, output = self.execute(args)
        if success:
            try:
                return json.loads(output)
            except json.JSONDecodeError:
                logger.error("Failed to parse JSON output")
                return None
        return None

    def current_context(self) -> Optional[str]:
        """Name of the kubeconfig's current context, if any."""
        success, output = self.execute(["config", "current-context"])
        if not success:
            return None
        return output.strip() or None
