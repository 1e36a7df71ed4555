"""
Document Compilation Module

Runs latex/pdflatex (and dvips for PostScript) over filter text inside an
isolated working directory and hands back the generated document.
"""

import os
import re
import subprocess
import sys
from pathlib import Path, PurePath
from typing import Optional, Union

from jinja_latex.contexts.rendering.exceptions import (
    ChdirRestoreFailed,
    DocumentReadFailed,
    OutputPathUnset,
    OutputWriteFailed,
    ProgramNotFound,
    SourceWriteFailed,
    ToolchainError,
    UnsupportedPlatform,
)
from jinja_latex.contexts.rendering.formats import FilterConfig, ResolvedJob, resolve_job
from jinja_latex.contexts.rendering.logger import (
    _log_debug,
    _log_info,
    log_compile_start,
    log_toolchain_failure,
)
from jinja_latex.contexts.rendering.workdir import working_directory

# Base name of the source file and everything latex generates from it
DOC = "tt2latex"

# Platforms with exit statuses and per-child working directories
SUPPORTED_OS_NAMES = ("posix", "nt")

TEX_ERROR_PATTERN = re.compile(r"^!")
TEX_LINE_PATTERN = re.compile(r"^l\.\d")

# Documents pass through templates as text; undecodable bytes survive as surrogates
DOCUMENT_ENCODING = ("utf-8", "surrogateescape")


def _parse_latex_log(log_file: Path) -> str:
    """
    Extract the interesting lines from a TeX log file.

    TeX errors start with "!" at the start of a line and are followed, some
    lines later, by a line designator of the form "l.nnn". Every "!" line
    is kept along with the first "l.<digit>" line after it.

    Args:
        log_file: Path to the .log file

    Returns:
        Extracted lines, each followed by a newline, or a fallback message
        if the log cannot be read
    """
    errors = []
    matched = False

    try:
        # TeX writes logs in latin-1 (font metadata contains non-UTF-8)
        with open(log_file, encoding="latin-1") as fh:
            for line in fh:
                line = line.rstrip("\n")
                if TEX_ERROR_PATTERN.match(line):
                    errors.append(line)
                    matched = True
                if matched and TEX_LINE_PATTERN.match(line):
                    errors.append(line)
                    matched = False
    except OSError:
        return f"failed to open {log_file} for input"

    return "".join(f"{line}\n" for line in errors)


def _run(cmd: list, cwd: Path, program_name: str) -> int:
    """Run a toolchain command non-interactively and return its exit status."""
    try:
        result = subprocess.run(
            cmd,
            cwd=cwd,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
    except OSError as e:
        _log_debug(f"failed to launch {cmd[0]}: {e}")
        raise ProgramNotFound(program_name, str(cmd[0])) from e
    return result.returncode


def _check_platform() -> None:
    if os.name not in SUPPORTED_OS_NAMES:
        raise UnsupportedPlatform(sys.platform)


def output_destination(output_path: Optional[str], output: str) -> Path:
    """
    Join an output file name onto the output root.

    Absolute names are re-anchored under the root, so a destination never
    lands outside it.

    Raises:
        OutputPathUnset: No output root is configured
    """
    if not output_path:
        raise OutputPathUnset()
    relative = PurePath(output)
    if relative.anchor:
        relative = relative.relative_to(relative.anchor)
    return Path(output_path) / relative


def _destination(job: ResolvedJob, config: FilterConfig) -> Optional[Path]:
    if not job.destination:
        return None
    return output_destination(config.output_path, job.destination)


def _write_output(dest: Path, data: bytes) -> None:
    try:
        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_bytes(data)
    except OSError as e:
        raise OutputWriteFailed(dest, e) from e


def _run_toolchain(job: ResolvedJob, workdir: Path) -> None:
    """Run the primary program, then dvips for PostScript output."""
    cmd = [job.program_path, "-interaction=nonstopmode", f"{DOC}.tex"]
    log_compile_start(job, workdir, cmd)

    returncode = _run(cmd, workdir, job.program_name)
    if returncode != 0:
        detail = _parse_latex_log(workdir / f"{DOC}.log")
        log_toolchain_failure(job.program_name, returncode, detail)
        raise ToolchainError(job.program_name, detail, returncode)

    if job.dvips_path:
        dvi_file = workdir / f"{DOC}.dvi"
        cmd = [job.dvips_path, DOC, "-o"]
        _log_debug(f"cmd: {' '.join(cmd)}")

        returncode = _run(cmd, workdir, "dvips")
        if returncode != 0:
            detail = f"{job.dvips_path} {dvi_file} failed"
            log_toolchain_failure("dvips", returncode, detail)
            raise ToolchainError("dvips", detail, returncode, message=detail)


def compile_document(
    text: Union[str, bytes],
    config: FilterConfig,
    tmp_root: Optional[Union[str, Path]] = None,
) -> bytes:
    """
    Typeset LaTeX source into a PDF, PostScript or DVI document.

    The toolchain runs inside a fresh working directory passed to each child
    process; the caller's working directory is never changed. The directory
    is removed before returning, on success and on failure.

    If the config names an output file, the document is moved (or, across
    filesystems, written) to output_path/output and b"" is returned.
    Otherwise the document bytes are returned.

    Args:
        text: LaTeX source; str is encoded as UTF-8 (surrogate escapes become raw bytes)
        config: Merged filter options
        tmp_root: Parent for the working directory (default: system temp dir)

    Returns:
        Document bytes, or b"" when written to a destination

    Raises:
        LatexFilterError: Any subclass, see jinja_latex.contexts.rendering.exceptions
    """
    _check_platform()

    job = resolve_job(config)
    dest = _destination(job, config)

    if isinstance(text, str):
        text = text.encode(*DOCUMENT_ENCODING)

    with working_directory(tmp_root) as workdir:
        source = workdir / f"{DOC}.tex"
        try:
            source.write_bytes(text)
        except OSError as e:
            raise SourceWriteFailed(source, e) from e

        _run_toolchain(job, workdir)

        # A vanished working directory fails the call even after a clean run
        if not workdir.is_dir():
            raise ChdirRestoreFailed(workdir)

        document = workdir / f"{DOC}.{job.format}"

        if dest is not None:
            # Renaming fails across filesystem boundaries; fall back to copying bytes
            try:
                dest.parent.mkdir(parents=True, exist_ok=True)
                os.replace(document, dest)
            except OSError as e:
                _log_debug(f"cannot rename {document} to {dest} ({e}), copying instead")
            else:
                _log_info(f"Document saved to: {dest}")
                return b""

        try:
            data = document.read_bytes()
        except OSError as e:
            raise DocumentReadFailed(document, e) from e

    if dest is not None:
        _write_output(dest, data)
        _log_info(f"Document saved to: {dest}")
        return b""

    _log_debug(f"returning {len(data)} bytes of document data")
    return data
