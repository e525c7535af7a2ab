"""Multi-cluster hostNetwork scan orchestration."""

from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from rich.console import Console

from ..exporters import ReportSink
from ..k8s.backend import ClusterBackend
from ..k8s.query import PodQueryError
from ..model.cluster import ClusterEntry, ScanFilter
from ..model.run import ClusterOutcome, ClusterStatus, ScanRun, ScanSummary
from ..utils.logger import get_logger
from .cluster_list import load_cluster_list, resolve_clusters_file

logger = get_logger(__name__)


class ScanOrchestrator:
    """Scans clusters one at a time, isolating per-cluster failures.

    Only startup problems (missing tools, missing clusters file) escape
    ``run``. Login failures and query failures are logged as warnings and the
    scan moves on to the next cluster.
    """

    def __init__(
        self,
        backend: ClusterBackend,
        presets_dir: Path = Path("."),
        console: Optional[Console] = None,
        err_console: Optional[Console] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.backend = backend
        self.presets_dir = Path(presets_dir)
        self.console = console
        self.err_console = err_console
        self.clock = clock

    def prepare(self, target: str, output_dir: Path) -> Tuple[ScanRun, List[ClusterEntry]]:
        """Validate the environment and build the run; nothing is written yet."""
        self.backend.verify_tools()

        clusters_file, base_id = resolve_clusters_file(target, self.presets_dir)
        entries = load_cluster_list(clusters_file)

        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        run = ScanRun.create(clusters_file, output_dir, base_id, now=self.clock())
        return run, entries

    def run(
        self, target: str, output_dir: Path, scan_filter: Optional[ScanFilter] = None
    ) -> ScanSummary:
        """Scan every cluster of ``target`` and write the CSV and log artifacts."""
        scan_filter = scan_filter or ScanFilter()
        run, entries = self.prepare(target, output_dir)
        summary = ScanSummary(csv_path=run.csv_path, log_path=run.log_path)

        logger.info(f"Starting scan of {len(entries)} clusters from {run.clusters_file}")

        with ReportSink(run, console=self.console, err_console=self.err_console) as sink:
            sink.csv.write_header()
            sink.log.write_line(f"Clusters file: {run.clusters_file}")
            sink.log.write_line(f"Output CSV:    {run.csv_path}")
            sink.log.write_line(f"Log file:      {run.log_path}")
            if not scan_filter.is_empty:
                limited = ", ".join(sorted(scan_filter.clusters))
                sink.log.write_line(f"Limiting scan to clusters: {limited}")

            for entry in entries:
                summary.outcomes.append(self._scan_cluster(entry, sink, scan_filter))

            sink.log.write_line(
                f"Scanned {summary.scanned} cluster(s), skipped {summary.skipped}, "
                f"failed {summary.failed}; {summary.pods_found} hostNetwork pod(s) found"
            )
            sink.log.write_line(f"Done. Report: {run.csv_path}")
            sink.log.write_line(f"Log: {run.log_path}")

        return summary

    def _scan_cluster(
        self, entry: ClusterEntry, sink: ReportSink, scan_filter: ScanFilter
    ) -> ClusterOutcome:
        cluster = entry.identifier

        if not scan_filter.allows(cluster):
            sink.log.write_line(f"Skipping cluster: {cluster} (not in --limit-cluster)")
            return ClusterOutcome(cluster=cluster, status=ClusterStatus.SKIPPED)

        sink.log.write_line(f"==> Cluster: {cluster}")
        sink.log.write_line(f"Logging in to cluster: {cluster}")

        result = self.backend.activate_context(cluster)
        if not result.ok:
            sink.log.write_warning(f"{result.reason} (skipping)")
            return ClusterOutcome(cluster=cluster, status=ClusterStatus.LOGIN_FAILED)

        session = result.session
        sink.log.write_line(f"Context: {session.context}")
        sink.log.write_line(f"Listing hostNetwork pods in cluster: {cluster}")

        try:
            records = self.backend.list_host_network_pods(session)
        except PodQueryError as e:
            # Reported like an empty cluster, but flagged
            sink.log.write_warning(f"pod query failed for cluster: {cluster} ({e}); no pods reported")
            return ClusterOutcome(
                cluster=cluster, status=ClusterStatus.QUERY_FAILED, context=session.context
            )

        for record in records:
            sink.record(record)

        sink.log.write_line(f"Finished cluster: {cluster} ({len(records)} hostNetwork pod(s))")
        return ClusterOutcome(
            cluster=cluster,
            status=ClusterStatus.SCANNED,
            context=session.context,
            pod_count=len(records),
        )
