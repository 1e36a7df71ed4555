"""Unit tests for TeX log scraping."""

import pytest

from jinja_latex.contexts.rendering.compiler import _parse_latex_log


def _write_log(tmp_path, lines):
    log_file = tmp_path / "tt2latex.log"
    log_file.write_text("\n".join(lines) + "\n", encoding="latin-1")
    return log_file


@pytest.mark.unit
def test_error_lines_paired_with_first_line_designator(tmp_path):
    log_file = _write_log(
        tmp_path,
        [
            "This is pdfTeX",
            "! Undefined control sequence.",
            "<recently read> \\foo",
            "l.12 \\foo",
            "l.13 second designator is skipped",
            "Overfull \\hbox in paragraph",
            "! LaTeX Error: File `missing.sty' not found.",
            "l.4 \\usepackage",
        ],
    )

    assert _parse_latex_log(log_file) == (
        "! Undefined control sequence.\n"
        "l.12 \\foo\n"
        "! LaTeX Error: File `missing.sty' not found.\n"
        "l.4 \\usepackage\n"
    )


@pytest.mark.unit
def test_consecutive_errors_share_next_designator(tmp_path):
    log_file = _write_log(tmp_path, ["! first", "! second", "l.9 here", "l.10 not here"])
    assert _parse_latex_log(log_file) == "! first\n! second\nl.9 here\n"


@pytest.mark.unit
def test_designator_needs_a_digit(tmp_path):
    log_file = _write_log(tmp_path, ["! oops", "l.x not a line number", "l.3 line"])
    assert _parse_latex_log(log_file) == "! oops\nl.3 line\n"


@pytest.mark.unit
def test_designator_before_any_error_is_ignored(tmp_path):
    log_file = _write_log(tmp_path, ["l.1 stray", "nothing to see"])
    assert _parse_latex_log(log_file) == ""


@pytest.mark.unit
def test_error_without_designator(tmp_path):
    log_file = _write_log(tmp_path, ["! Emergency stop.", "*** (job aborted)"])
    assert _parse_latex_log(log_file) == "! Emergency stop.\n"


@pytest.mark.unit
def test_latin1_log_content(tmp_path):
    log_file = _write_log(tmp_path, ["! Package inputenc Error: Unicode char \xe9", "l.2 caf\xe9"])
    assert "caf\xe9" in _parse_latex_log(log_file)


@pytest.mark.unit
def test_missing_log_file(tmp_path):
    log_file = tmp_path / "tt2latex.log"
    assert _parse_latex_log(log_file) == f"failed to open {log_file} for input"
