"""Cluster list loading."""

from pathlib import Path
from typing import List, Tuple

from ..model.cluster import ClusterEntry
from ..utils.logger import get_logger

logger = get_logger(__name__)

PRESETS = ("prod", "stg", "dev")
COMMENT_MARKER = "#"


class ClusterListNotFoundError(FileNotFoundError):
    """The clusters file does not exist."""


class InvalidClusterListError(ValueError):
    """The clusters file exists but cannot be read as text."""


def resolve_clusters_file(target: str, presets_dir: Path) -> Tuple[Path, str]:
    """Map a preset name or a path to ``(clusters_file, base_id)``.

    Presets resolve to ``<presets_dir>/<preset>_clusters.txt`` and keep the
    preset as base id; any other value is a path whose base id is the file
    name without its extension.
    """
    if target in PRESETS:
        return Path(presets_dir) / f"{target}_clusters.txt", target

    path = Path(target)
    return path, path.stem


def parse_cluster_line(raw: str) -> str:
    """Strip everything from the first '#' and surrounding whitespace."""
    return raw.split(COMMENT_MARKER, 1)[0].strip()


def load_cluster_list(path: Path) -> List[ClusterEntry]:
    """Load clusters in file order. Duplicates are kept."""
    path = Path(path)
    if not path.is_file():
        raise ClusterListNotFoundError(f"clusters file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            lines = f.readlines()
    except UnicodeDecodeError as e:
        raise InvalidClusterListError(f"clusters file is not valid UTF-8: {path} ({e.reason})") from e
    except OSError as e:
        raise InvalidClusterListError(f"cannot read clusters file {path}: {e.strerror or e}") from e

    entries = []
    for raw in lines:
        identifier = parse_cluster_line(raw)
        if identifier:
            entries.append(ClusterEntry(identifier=identifier))

    logger.debug(f"Loaded {len(entries)} clusters from {path}")
    return entries
