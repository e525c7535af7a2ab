"""Pod models."""

from typing import List

from pydantic import BaseModel

CSV_HEADER = "cluster,context,namespace,pod,node,hostNetwork,ownerKind,ownerName"
UNKNOWN_CONTEXT = "(unknown)"

# Commas inside a value would shift the CSV columns
FIELD_SEPARATOR = ","
SEPARATOR_SUBSTITUTE = " _"


def sanitize_field(value: str) -> str:
    """Replace the CSV field separator inside a value."""
    return value.replace(FIELD_SEPARATOR, SEPARATOR_SUBSTITUTE)


class PodRecord(BaseModel):
    """A pod found running with hostNetwork enabled."""

    cluster: str
    context: str = UNKNOWN_CONTEXT
    namespace: str
    pod_name: str
    node_name: str = ""
    host_network: bool = True
    owner_kind: str = ""
    owner_name: str = ""

    class Config:
        frozen = True

    @property
    def owner(self) -> str:
        """Owner as ``Kind/name``, empty when the pod has no owner."""
        if not self.owner_kind and not self.owner_name:
            return ""
        return f"{self.owner_kind}/{self.owner_name}"

    def csv_fields(self) -> List[str]:
        """Sanitized column values, in CSV_HEADER order."""
        values = [
            self.cluster,
            self.context,
            self.namespace,
            self.pod_name,
            self.node_name,
            "true" if self.host_network else "false",
            self.owner_kind,
            self.owner_name,
        ]
        return [sanitize_field(value) for value in values]

    def to_csv_row(self) -> str:
        return FIELD_SEPARATOR.join(self.csv_fields())

    def describe(self) -> str:
        """Human readable one-liner for the scan log."""
        node = self.node_name or "<unscheduled>"
        owner = self.owner or "<no owner>"
        return f"{self.namespace}/{self.pod_name} node={node} owner={owner}"
