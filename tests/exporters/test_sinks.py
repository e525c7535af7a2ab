"""Test the CSV and log report sinks."""

import io
import re
from datetime import datetime
from pathlib import Path

import pytest
from rich.console import Console

from hostscan.exporters import CsvSink, LogSink, ReportSink
from hostscan.model.pod import CSV_HEADER, PodRecord
from hostscan.model.run import ScanRun

LOG_LINE = re.compile(r"^\[\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\] (?P<message>.*)$")


@pytest.fixture
def record():
    return PodRecord(
        cluster="a",
        context="a-admin",
        namespace="kube-system",
        pod_name="kube-proxy-abcde",
        node_name="node-1",
        owner_kind="DaemonSet",
        owner_name="kube-proxy",
    )


def _console():
    return Console(file=io.StringIO(), width=200)


@pytest.mark.unit
class TestCsvSink:
    def test_header_and_rows(self, tmp_path, record):
        path = tmp_path / "report.csv"

        with CsvSink(path) as sink:
            sink.write_header()
            sink.write_record(record)

        assert path.read_text().splitlines() == [
            CSV_HEADER,
            "a,a-admin,kube-system,kube-proxy-abcde,node-1,true,DaemonSet,kube-proxy",
        ]

    def test_rows_visible_before_close(self, tmp_path, record):
        """Each write reaches the file immediately."""
        path = tmp_path / "report.csv"
        sink = CsvSink(path).open()
        try:
            sink.write_header()
            assert path.read_text() == CSV_HEADER + "\n"
            sink.write_record(record)
            assert len(path.read_text().splitlines()) == 2
        finally:
            sink.close()

    def test_appends_to_existing_file(self, tmp_path, record):
        path = tmp_path / "report.csv"
        path.write_text("existing\n")

        with CsvSink(path) as sink:
            sink.write_record(record)

        assert path.read_text().splitlines()[0] == "existing"

    def test_creates_parent_directory(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "report.csv"
        with CsvSink(path) as sink:
            sink.write_header()
        assert path.exists()

    def test_write_on_closed_sink(self, tmp_path, record):
        sink = CsvSink(tmp_path / "report.csv")
        with pytest.raises(ValueError, match="not open"):
            sink.write_record(record)


@pytest.mark.unit
class TestLogSink:
    def test_lines_are_timestamped(self, tmp_path):
        path = tmp_path / "scan.log"

        with LogSink(path) as sink:
            sink.write_line("==> Cluster: a")
            sink.write_warning("login failed for cluster: b (skipping)")

        lines = path.read_text().splitlines()
        messages = [LOG_LINE.match(line).group("message") for line in lines]
        assert messages == ["==> Cluster: a", "WARN: login failed for cluster: b (skipping)"]

    def test_timestamp_is_current(self, tmp_path):
        path = tmp_path / "scan.log"
        before = datetime.now().replace(microsecond=0)

        with LogSink(path) as sink:
            sink.write_line("hello")

        stamp = path.read_text()[1:20]
        assert datetime.strptime(stamp, "%Y-%m-%d %H:%M:%S") >= before

    def test_lines_visible_before_close(self, tmp_path):
        path = tmp_path / "scan.log"
        sink = LogSink(path).open()
        try:
            sink.write_line("first")
            assert path.read_text().endswith("first\n")
        finally:
            sink.close()

    def test_console_echo(self, tmp_path):
        console, err_console = _console(), _console()

        with LogSink(tmp_path / "scan.log", console=console, err_console=err_console) as sink:
            sink.write_line("Context: [prod]")
            sink.write_warning("login failed for cluster: b (skipping)")

        assert console.file.getvalue() == "Context: [prod]\n"
        assert "WARN: login failed for cluster: b" in err_console.file.getvalue()
        assert "WARN" not in console.file.getvalue()

    def test_console_echo_keeps_long_lines_whole(self, tmp_path):
        console, err_console = Console(file=io.StringIO(), width=40), Console(file=io.StringIO(), width=40)
        long_path = "/var/reports/" + "x" * 120 + ".csv"

        with LogSink(tmp_path / "scan.log", console=console, err_console=err_console) as sink:
            sink.write_line(f"Output CSV:    {long_path}")
            sink.write_warning(f"pod query failed for cluster: {'y' * 80}")

        assert console.file.getvalue() == f"Output CSV:    {long_path}\n"
        assert err_console.file.getvalue().count("\n") == 1

    def test_reopen_does_not_duplicate_lines(self, tmp_path):
        path = tmp_path / "scan.log"

        with LogSink(path) as sink:
            sink.write_line("one")
        with LogSink(path) as sink:
            sink.write_line("two")

        assert len(path.read_text().splitlines()) == 2

    def test_write_on_closed_sink(self, tmp_path):
        sink = LogSink(tmp_path / "scan.log")
        with pytest.raises(ValueError):
            sink.write_line("nope")


class TestReportSink:
    def test_record_goes_to_both_artifacts(self, tmp_path, record):
        run = ScanRun.create(Path("c.txt"), tmp_path, "c", now=datetime(2024, 1, 1, 12, 0, 0))

        with ReportSink(run) as sink:
            sink.csv.write_header()
            sink.record(record)

        assert run.csv_path.read_text().splitlines()[1].startswith("a,a-admin,kube-system,")
        log_message = LOG_LINE.match(run.log_path.read_text().splitlines()[0]).group("message")
        assert log_message == "  kube-system/kube-proxy-abcde node=node-1 owner=DaemonSet/kube-proxy"

    def test_close_releases_both(self, tmp_path):
        run = ScanRun.create(Path("c.txt"), tmp_path, "c")
        sink = ReportSink(run).open()
        sink.close()

        assert sink.csv.closed
        assert sink.log.closed
