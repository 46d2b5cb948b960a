"""Shared fixtures: Clover XML snippets written to a temporary project."""

import textwrap
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.delenv("CLOVER_REPORT_ROOT", raising=False)


@pytest.fixture
def write_xml(tmp_path):
    """Write a (dedented) XML document into tmp_path and return its path."""
    def _write(content: str, name: str = "coverage.xml") -> Path:
        p = tmp_path / name
        p.write_text(textwrap.dedent(content).lstrip(), encoding="utf-8")
        return p
    return _write


@pytest.fixture
def write_source(tmp_path):
    """Create a source file below tmp_path with the given lines."""
    def _write(rel_path: str, lines: list[str]) -> Path:
        p = tmp_path / rel_path
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return p
    return _write
