"""Base class for append-only report sinks."""

from abc import ABC, abstractmethod
from pathlib import Path


class AppendSink(ABC):
    """An output file that is only ever appended to.

    Every write is flushed before returning, so a crashed run leaves a valid
    prefix of the final artifact.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._closed = True

    @abstractmethod
    def open(self):
        """Open the underlying file for appending."""
        pass

    @abstractmethod
    def close(self):
        """Release the underlying file."""
        pass

    @property
    def closed(self) -> bool:
        return self._closed

    def _ensure_open(self):
        if self._closed:
            raise ValueError(f"sink for {self.path} is not open")

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
