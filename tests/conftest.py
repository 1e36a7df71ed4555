"""Shared fixtures: a fake TeX toolchain made of small shell scripts."""

import os
import stat
from pathlib import Path

import pytest

# pdflatex/latex stand-ins copy the source so output bytes can be checked
FAKE_SCRIPTS = {
    "pdflatex": """#!/bin/sh
[ -n "$FAKE_TEX_RECORD" ] && pwd -P >> "$FAKE_TEX_RECORD"
[ "$1" = "-interaction=nonstopmode" ] || exit 2
cp "$2" tt2latex.pdf
""",
    "latex": """#!/bin/sh
[ -n "$FAKE_TEX_RECORD" ] && pwd -P >> "$FAKE_TEX_RECORD"
[ "$1" = "-interaction=nonstopmode" ] || exit 2
cp "$2" tt2latex.dvi
""",
    "dvips": """#!/bin/sh
[ "$2" = "-o" ] || exit 2
cp "$1.dvi" "$1.ps"
""",
    "failing": """#!/bin/sh
cat > tt2latex.log <<'LOG'
This is pdfTeX, Version 3.141592653
(./tt2latex.tex
! Undefined control sequence.
l.3 \\foo
         {bar}
! Missing $ inserted.
<inserted text>
                $
l.7 a_
      b
l.8 this designator is not wanted
! Emergency stop.
LOG
exit 1
""",
    "failing_no_log": """#!/bin/sh
exit 1
""",
    "silent": """#!/bin/sh
exit 0
""",
    "binary": """#!/bin/sh
printf '%%PDF\\377\\000\\201' > tt2latex.pdf
""",
    "vanishing": """#!/bin/sh
dir="$(pwd)"
cd /
rm -rf "$dir"
""",
}



def write_script(path: Path, body: str) -> str:
    path.write_text(body)
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return str(path)


@pytest.fixture
def fake_bin(tmp_path):
    """Directory holding executable fake toolchain programs, keyed by name."""
    if os.name != "posix":
        pytest.skip("fake toolchain scripts need a POSIX shell")

    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    return {name: write_script(bin_dir / name, body) for name, body in FAKE_SCRIPTS.items()}


@pytest.fixture
def tmp_root(tmp_path):
    """Parent directory for working directories, so cleanup can be checked."""
    root = tmp_path / "tmp"
    root.mkdir()
    return root


@pytest.fixture
def output_root(tmp_path):
    root = tmp_path / "out"
    root.mkdir()
    return root


@pytest.fixture
def failing_detail():
    """Log excerpt the "failing" script's log must produce."""
    return (
        "! Undefined control sequence.\n"
        "l.3 \\foo\n"
        "! Missing $ inserted.\n"
        "l.7 a_\n"
        "! Emergency stop.\n"
    )
