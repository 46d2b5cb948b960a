"""Data models for Clover coverage reports.

Contains dataclasses used to structure the report and serialize it to JSON:
    - ProjectMetrics   overall (total, covered) element counts
    - FileEntry        one file with at least one uncovered line
    - CoverageSummary  the aggregated result of a run
"""

from dataclasses import dataclass, field
from pathlib import Path


def percentage(covered: int, total: int) -> float:
    """Coverage percentage; an empty population counts as fully covered."""
    if total <= 0:
        return 100.0
    return covered / total * 100.0


@dataclass(frozen=True)
class ProjectMetrics:
    total: int = 0
    covered: int = 0

    @property
    def percentage(self) -> float:
        return percentage(self.covered, self.total)

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "covered": self.covered,
            "percentage": round(self.percentage, 1),
        }


@dataclass(frozen=True)
class FileEntry:
    """A reported file with uncovered statement/method lines."""

    cov_path: str
    display_path: str
    full_path: Path | None
    covered: int
    total: int
    uncovered: tuple[int, ...] = ()

    @property
    def percentage(self) -> float | None:
        """Percentage for the header line, None when no total is known."""
        if self.total <= 0:
            return None
        return percentage(self.covered, self.total)

    def to_dict(self) -> dict:
        pct = self.percentage
        return {
            "path": self.display_path,
            "reported_path": self.cov_path,
            "resolved_path": str(self.full_path) if self.full_path else None,
            "covered": self.covered,
            "total": self.total,
            "percentage": round(pct, 1) if pct is not None else None,
            "uncovered_lines": list(self.uncovered),
        }


@dataclass(frozen=True)
class CoverageSummary:
    overall: ProjectMetrics = field(default_factory=ProjectMetrics)
    from_project_metrics: bool = False
    files: tuple[FileEntry, ...] = ()

    @property
    def has_overall(self) -> bool:
        return self.overall.total > 0

    def to_dict(self) -> dict:
        return {
            "report_type": "uncovered_lines",
            "overall": self.overall.to_dict() if self.has_overall else None,
            "overall_source": "project" if self.from_project_metrics else "files",
            "summary": {
                "files_with_uncovered_lines": len(self.files),
                "total_uncovered_lines": sum(len(f.uncovered) for f in self.files),
            },
            "files": [f.to_dict() for f in self.files],
        }
