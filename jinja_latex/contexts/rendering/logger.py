"""
Rendering context logger.

Provides logging interface for the latex filter with automatic [latex] prefix.
Messages are only emitted once debugging is enabled (see enable_debug()),
since the package disables its loguru namespace on import.
"""

import sys
from pathlib import Path
from typing import Dict, Optional

from loguru import logger

CONTEXT_PREFIX = "[latex]"
PACKAGE_NAME = "jinja_latex"


def enable_debug(enabled: bool = True) -> None:
    """Turn the package's diagnostic stream on or off."""
    if enabled:
        logger.enable(PACKAGE_NAME)
    else:
        logger.disable(PACKAGE_NAME)


def setup_rendering_logger(
    log_dir: Path, programs: Optional[Dict[str, Optional[str]]] = None, console_level: str = "INFO"
) -> Path:
    """
    Send the [latex] stream to a session log file and the console.

    Enables diagnostics, replaces any existing loguru sinks, and writes a
    header naming the command, working directory and toolchain programs.

    Args:
        log_dir: Directory for this rendering session (created if missing)
        programs: Program name -> path mapping (latex, pdflatex, dvips)
        console_level: Minimum level written to stderr

    Returns:
        Path to the log file (log_dir/latex.log)
    """
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / "latex.log"

    enable_debug()
    logger.remove()
    logger.add(log_file, format="{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}", level="DEBUG")
    logger.add(
        sys.stderr,
        format="{time:YYYY-MM-DD HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>",
        level=console_level,
        colorize=True,
    )

    _log_info(f"Command: {' '.join(sys.argv)}")
    _log_info(f"Working directory: {Path.cwd()}")
    for name, path in (programs or {}).items():
        _log_info(f"{name}: {path or '<unset>'}")

    return log_file


# Wrapper functions with automatic [latex] prefix


def _log_info(message: str) -> None:
    """Log info message with [latex] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [latex] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [latex] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level compile logging helpers


def log_compile_start(job, working_dir: Path, cmd: list) -> None:
    """Log the resolved job before the toolchain runs."""
    _log_debug(f"output: {job.destination or '<none>'}")
    _log_debug(f"format: {job.format}")
    _log_debug(f"progname: {job.program_name}")
    _log_debug(f"program: {job.program_path}")
    _log_debug(f"dir: {working_dir}")
    _log_debug(f"cmd: {' '.join(str(part) for part in cmd)}")


def log_toolchain_failure(program: str, returncode: int, detail: str) -> None:
    """Log a failed toolchain run with the scraped log excerpt."""
    _log_error(f"{program} exited with status {returncode}")
    for line in detail.splitlines():
        _log_error(f"  {line}")
