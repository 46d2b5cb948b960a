"""Coverage aggregation over a parsed Clover report.

Functions:
    scan_file(file_element)           -> FileScan
    aggregate(root, project_root)     -> CoverageSummary

Per-file totals come from the file's own ``<metrics>`` element when it
carries non-zero counts, and from counting ``stmt`` / ``method`` lines
otherwise. The line scan always runs: it is the only source of uncovered
line numbers.
"""

from dataclasses import dataclass, field
from pathlib import Path
from xml.etree.ElementTree import Element

from clover_report import resolver
from clover_report.loader import int_attr, iter_files, project_metrics
from clover_report.models import CoverageSummary, FileEntry, ProjectMetrics, percentage

__all__ = ["FileScan", "aggregate", "percentage", "scan_file"]

#: Line types that count as executable code
_COUNTED_LINE_TYPES = frozenset({"stmt", "method"})


@dataclass
class FileScan:
    cov_path: str
    metrics_total: int = 0
    metrics_covered: int = 0
    lines_total: int = 0
    lines_covered: int = 0
    uncovered: list[int] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.metrics_total if self.metrics_total > 0 else self.lines_total

    @property
    def covered(self) -> int:
        return self.metrics_covered if self.metrics_total > 0 else self.lines_covered


# --------------------------------------------------------------------------- #
# Per-file scan
# --------------------------------------------------------------------------- #

def scan_file(file_element: Element) -> FileScan:
    """Extract counts and uncovered line numbers from one ``<file>`` element."""
    scan = FileScan(cov_path=file_element.get("name", ""))

    metrics = file_element.find("metrics")
    if metrics is not None:
        statements = int_attr(metrics, "statements")
        elements = int_attr(metrics, "elements")
        if statements > 0:
            scan.metrics_total = statements
            scan.metrics_covered = int_attr(metrics, "coveredstatements")
        elif elements > 0:
            scan.metrics_total = elements
            scan.metrics_covered = int_attr(metrics, "coveredelements")

    uncovered: list[int] = []
    for line in file_element.findall("line"):
        if line.get("type") not in _COUNTED_LINE_TYPES:
            continue
        scan.lines_total += 1
        if int_attr(line, "count") > 0:
            scan.lines_covered += 1
        else:
            uncovered.append(int_attr(line, "num"))

    scan.uncovered = list(dict.fromkeys(uncovered))
    return scan


# --------------------------------------------------------------------------- #
# Whole report
# --------------------------------------------------------------------------- #

def aggregate(root: Element, project_root: str | Path) -> CoverageSummary:
    """Build the summary for a parsed report.

    Project-level metrics are used verbatim for the overall figure when they
    report a non-zero total. Otherwise the overall figure is the sum of the
    line-scan counts of every file that has instrumented lines.
    """
    project_root = Path(project_root).resolve()
    project = project_metrics(root)
    from_project = project is not None and project.total > 0

    acc_total = 0
    acc_covered = 0
    entries: list[FileEntry] = []

    for file_element in iter_files(root):
        scan = scan_file(file_element)

        if scan.uncovered:
            full_path = resolver.resolve(scan.cov_path, project_root)
            entries.append(FileEntry(
                cov_path=scan.cov_path,
                display_path=resolver.display_path(scan.cov_path, full_path, project_root),
                full_path=full_path,
                covered=scan.covered,
                total=scan.total,
                uncovered=tuple(scan.uncovered),
            ))

        if not from_project and scan.lines_total > 0:
            acc_total += scan.lines_total
            acc_covered += scan.lines_covered

    overall = project if from_project else ProjectMetrics(total=acc_total, covered=acc_covered)
    return CoverageSummary(
        overall=overall,
        from_project_metrics=from_project,
        files=tuple(entries),
    )
