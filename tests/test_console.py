"""Tests for reports/console.py"""

import re
from pathlib import Path

import pytest

from clover_report.models import CoverageSummary, FileEntry, ProjectMetrics
from clover_report.reports.console import (
    Palette,
    Role,
    read_source_lines,
    render,
    source_line,
    threshold_color,
)

PLAIN = Palette.create(enabled=False)
COLORS = Palette.create(enabled=True)


def _entry(uncovered=(42,), covered=1, total=2, full_path=None, display="app/Models/Card.php"):
    return FileEntry(
        cov_path=display,
        display_path=display,
        full_path=full_path,
        covered=covered,
        total=total,
        uncovered=tuple(uncovered),
    )


def _summary(*files, total=100, covered=90):
    return CoverageSummary(
        overall=ProjectMetrics(total=total, covered=covered),
        from_project_metrics=True,
        files=tuple(files),
    )


# ---------------------------------------------------------------------------
# Palette / thresholds
# ---------------------------------------------------------------------------

def test_disabled_palette_is_all_empty():
    assert PLAIN.paint("text", Role.RED) == "text"
    assert PLAIN.reset == PLAIN.code(Role.BOLD) == ""


def test_enabled_palette_wraps_escape_codes():
    assert COLORS.paint("ok", Role.GREEN) == "\033[32mok\033[0m"


@pytest.mark.parametrize("pct, role", [
    (100.0, Role.GREEN),
    (90.0, Role.GREEN),
    (89.9, Role.YELLOW),
    (75.0, Role.YELLOW),
    (74.9, Role.RED),
    (0.0, Role.RED),
    (None, Role.YELLOW),
])
def test_threshold_color(pct, role):
    assert threshold_color(pct) is role


def test_threshold_color_custom_bounds():
    assert threshold_color(80.0, good=80.0, warning=50.0) is Role.GREEN
    assert threshold_color(49.0, good=80.0, warning=50.0) is Role.RED


# ---------------------------------------------------------------------------
# Source access
# ---------------------------------------------------------------------------

def test_read_source_lines_missing_file(tmp_path):
    assert read_source_lines(tmp_path / "gone.php") == []


def test_read_source_lines_none():
    assert read_source_lines(None) == []


def test_read_source_lines_invalid_utf8(tmp_path):
    p = tmp_path / "latin1.php"
    p.write_bytes(b"<?php\n$x = '\xe9';\n")
    assert len(read_source_lines(p)) == 2


def test_read_source_lines_splits_on_newline_only(tmp_path):
    p = tmp_path / "feed.php"
    p.write_bytes(b"one\r\n\x0c\ntwo\x0bstill two\nthree\xe2\x80\xa8same\n")
    assert read_source_lines(p) == ["one", "\x0c", "two\x0bstill two", "three\u2028same"]


def test_render_form_feed_keeps_line_numbers(tmp_path):
    src = tmp_path / "feed.php"
    src.write_text("one\n\x0c\ntwo\nthree\n", encoding="utf-8")
    lines = list(render(_summary(_entry(uncovered=(3, 4), full_path=src)), PLAIN))
    assert lines[4:6] == [">>    3 | two", ">>    4 | three"]


@pytest.mark.parametrize("number, expected", [
    (1, "first"),
    (2, "  second"),
    (0, ""),
    (-1, ""),
    (3, ""),
])
def test_source_line_bounds(number, expected):
    assert source_line(["first", "  second  "], number) == expected


# ---------------------------------------------------------------------------
# render()
# ---------------------------------------------------------------------------

def test_render_overall_and_file_block():
    lines = list(render(_summary(_entry()), PLAIN, reader=lambda path: []))
    assert lines == [
        "",
        "Test coverage:  90.0%  (covered 90 of 100 elements)",
        "",
        "app/Models/Card.php -  50.0%",
        ">>   42 | ",
        "",
    ]


def test_render_source_text(tmp_path):
    src = tmp_path / "Card.php"
    src.write_text("<?php\n\nclass Card\n{\n    return $this->id;   \n}\n", encoding="utf-8")
    entry = _entry(uncovered=(5, 3, 99), full_path=src)
    lines = list(render(_summary(entry), PLAIN))
    assert lines[4:8] == [
        ">>    5 |     return $this->id;",
        ">>    3 | class Card",
        ">>   99 | ",
        "",
    ]


def test_render_unknown_overall():
    summary = CoverageSummary()
    lines = list(render(summary, PLAIN))
    assert lines[1] == "Overall coverage: unknown (no metrics found)"


def test_render_no_uncovered_lines():
    lines = list(render(_summary(), PLAIN))
    assert lines[-1] == "No uncovered statements/methods found in coverage file."
    assert len(lines) == 4


def test_render_file_without_total_shows_na():
    lines = list(render(_summary(_entry(covered=0, total=0)), PLAIN, reader=lambda path: []))
    assert lines[3] == "app/Models/Card.php -   n/a"


def test_render_colored_threshold():
    lines = list(render(_summary(total=100, covered=60), COLORS))
    assert "\033[31m 60.0%\033[0m" in lines[1]
    assert lines[-1] == "\033[32mNo uncovered statements/methods found in coverage file.\033[0m"


def test_colors_do_not_change_content():
    summary = _summary(_entry(uncovered=(1, 2)), _entry(display="b.php", covered=0, total=0))
    strip = re.compile(r"\033\[\d+m")
    plain = list(render(summary, PLAIN, reader=lambda path: ["a", "b"]))
    colored = list(render(summary, COLORS, reader=lambda path: ["a", "b"]))
    assert [strip.sub("", line) for line in colored] == plain


def test_render_is_idempotent(tmp_path):
    src = tmp_path / "Card.php"
    src.write_text("a\nb\nc\n", encoding="utf-8")
    summary = _summary(_entry(uncovered=(2,), full_path=Path(src)))
    assert list(render(summary, COLORS)) == list(render(summary, COLORS))
