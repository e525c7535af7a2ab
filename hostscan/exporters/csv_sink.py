"""CSV report sink."""

from ..model.pod import CSV_HEADER, PodRecord
from ..utils.logger import get_logger
from .base import AppendSink

logger = get_logger(__name__)


class CsvSink(AppendSink):
    """Writes one row per hostNetwork pod."""

    def open(self):
        self._file = open(self.path, "a", encoding="utf-8", buffering=1)
        self._closed = False
        return self

    def close(self):
        if not self._closed:
            self._file.close()
            self._closed = True

    def _write(self, line: str):
        self._ensure_open()
        self._file.write(line + "\n")
        self._file.flush()

    def write_header(self):
        self._write(CSV_HEADER)
        logger.debug(f"Wrote CSV header to {self.path}")

    def write_record(self, record: PodRecord):
        self._write(record.to_csv_row())
