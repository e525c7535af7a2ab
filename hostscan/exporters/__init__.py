"""Report sinks."""

from .base import AppendSink
from .csv_sink import CsvSink
from .log_sink import LogSink
from .report_sink import ReportSink

__all__ = ["AppendSink", "CsvSink", "LogSink", "ReportSink"]
