"""Paired CSV and log outputs of a scan run."""

from typing import Optional

from rich.console import Console

from ..model.pod import PodRecord
from ..model.run import ScanRun
from .csv_sink import CsvSink
from .log_sink import LogSink


class ReportSink:
    """Both artifacts of a run, opened together and closed together."""

    def __init__(
        self,
        run: ScanRun,
        console: Optional[Console] = None,
        err_console: Optional[Console] = None,
    ):
        self.run = run
        self.csv = CsvSink(run.csv_path)
        self.log = LogSink(run.log_path, console=console, err_console=err_console)

    def open(self):
        self.csv.open()
        self.log.open()
        return self

    def close(self):
        self.csv.close()
        self.log.close()

    def __enter__(self):
        return self.open()

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def record(self, record: PodRecord):
        """Echo a match to the log and append it to the CSV."""
        self.log.write_line(f"  {record.describe()}")
        self.csv.write_record(record)
