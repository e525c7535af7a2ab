"""Cluster-wide hostNetwork pod query."""

from typing import Any, Dict, List, Optional

from ..model.cluster import ClusterSession
from ..model.pod import PodRecord
from ..utils.logger import get_logger
from .client import K8sClient

logger = get_logger(__name__)


class PodQueryError(RuntimeError):
    """The cluster-wide pod listing could not be obtained."""


def _as_text(value: Any) -> str:
    """Render a JSON scalar the way kubectl prints it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    return str(value)


class PodHostNetworkQuery:
    """Lists all pods of the active cluster and keeps the hostNetwork ones."""

    def __init__(self, client: K8sClient):
        self.client = client

    def query(self, session: ClusterSession) -> List[PodRecord]:
        """Return hostNetwork pods in the order the API listed them."""
        data = self.client.get_json("pods", all_namespaces=True)
        if data is None:
            raise PodQueryError(f"failed to list pods in cluster {session.cluster}")

        records = []
        for item in data.get("items", []):
            record = self._to_record(session, item)
            if record is not None:
                records.append(record)

        logger.debug(f"Found {len(records)} hostNetwork pods in {session.cluster}")
        return records

    def _to_record(self, session: ClusterSession, item: Dict[str, Any]) -> Optional[PodRecord]:
        metadata = item.get("metadata") or {}
        spec = item.get("spec") or {}

        if _as_text(spec.get("hostNetwork")) != "true":
            return None

        # Only the first owner reference is reported
        owners = metadata.get("ownerReferences") or []
        owner = owners[0] if owners else {}

        return PodRecord(
            cluster=session.cluster,
            context=session.context,
            namespace=_as_text(metadata.get("namespace")),
            pod_name=_as_text(metadata.get("name")),
            node_name=_as_text(spec.get("nodeName")),
            host_network=True,
            owner_kind=_as_text(owner.get("kind")),
            owner_name=_as_text(owner.get("name")),
        )
