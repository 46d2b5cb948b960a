"""Clover XML loading and attribute helpers.

Usage:
    root    = load("coverage.xml")        # raises LoadError / ParseError
    project = project_metrics(root)       # ProjectMetrics or None
    for file_el in iter_files(root):      # every <file>, at any depth
        name = file_el.get("name", "")
"""

from pathlib import Path
from typing import Iterator
from xml.etree.ElementTree import Element

from defusedxml import DefusedXmlException
from defusedxml import ElementTree as ET

from clover_report.models import ProjectMetrics


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class ReportError(Exception):
    """Base exception for coverage report loading errors."""


class LoadError(ReportError):
    """Raised when the coverage file is missing or cannot be read."""


class ParseError(ReportError):
    """Raised when the coverage file is not well-formed XML."""


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

def load(path: str | Path) -> Element:
    """Parse the coverage report at *path* and return its root element.

    Raises:
        LoadError:  the file does not exist or cannot be read
        ParseError: the content is not well-formed XML (or uses forbidden
                    constructs such as entity declarations)
    """
    path = Path(path)
    if not path.exists():
        raise LoadError(f"Coverage file not found: {path}")

    try:
        tree = ET.parse(str(path))
    except ET.ParseError as exc:
        raise ParseError(f"Failed to parse XML: {_diagnostics(exc)}") from exc
    except DefusedXmlException as exc:
        raise ParseError(f"Failed to parse XML: {exc}") from exc
    except OSError as exc:
        raise LoadError(f"Unable to read coverage file {path}: {exc.strerror or exc}") from exc

    return tree.getroot()


def _diagnostics(exc: Exception) -> str:
    """Join every message carried by a parser exception into one line."""
    messages = [str(arg).strip() for arg in exc.args if str(arg).strip()]
    return "; ".join(messages) or exc.__class__.__name__


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------

def project_metrics(root: Element) -> ProjectMetrics | None:
    """Return the ``project/metrics`` totals, or None when the element is absent."""
    metrics = root.find("project/metrics")
    if metrics is None:
        return None
    return ProjectMetrics(
        total=int_attr(metrics, "elements"),
        covered=int_attr(metrics, "coveredelements"),
    )


def iter_files(root: Element) -> Iterator[Element]:
    """Yield every ``file`` element in document order, whatever its depth.

    Clover reports nest files under ``package`` elements for namespaced
    code, so this is a full descendant walk rather than a child lookup.
    """
    return root.iter("file")


def int_attr(element: Element, name: str) -> int:
    """Return attribute *name* of *element* as an int, 0 when absent or non-numeric."""
    raw = element.get(name)
    if raw is None:
        return 0
    try:
        return int(raw)
    except ValueError:
        pass
    try:
        return int(float(raw))
    except (ValueError, OverflowError):
        return 0
