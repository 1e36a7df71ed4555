"""
Per-call working directories for the TeX toolchain.

latex writes its auxiliary files next to the source, so every compile
runs in its own directory under the temp root. Names combine the process
id with a process-wide counter and are checked for existence before use.
"""

import itertools
import os
import shutil
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Union

from jinja_latex.contexts.rendering.exceptions import TempDirCreationFailed
from jinja_latex.contexts.rendering.logger import _log_debug

# Prefix for temporary directory names
DIR_PREFIX = "tt2latex"

_counter = itertools.count()
_counter_lock = threading.Lock()


def _next_suffix() -> int:
    with _counter_lock:
        return next(_counter)


def next_workdir_name() -> str:
    """Return a name unique within this process, e.g. ``tt2latex4242_7``."""
    return f"{DIR_PREFIX}{os.getpid()}_{_next_suffix()}"


def create_workdir(tmp_root: Optional[Union[str, Path]] = None) -> Path:
    """
    Create a uniquely named working directory.

    Keeps drawing new names while the candidate exists. Creation itself is
    exclusive, so a directory made by another process between the check
    and mkdir just moves on to the next name.

    Args:
        tmp_root: Parent directory (default: the system temp directory)

    Returns:
        Path to the new directory (mode 0700)

    Raises:
        TempDirCreationFailed: The directory could not be created
    """
    root = Path(tmp_root) if tmp_root else Path(tempfile.gettempdir())

    while True:
        path = root / next_workdir_name()
        if path.exists():
            continue
        try:
            path.mkdir(mode=0o700, parents=True)
        except FileExistsError:
            continue
        except OSError as e:
            raise TempDirCreationFailed(path, e) from e
        return path


def remove_workdir(path: Path) -> None:
    """Remove a working directory, logging (never raising) any failure."""
    try:
        shutil.rmtree(path)
    except OSError as e:
        _log_debug(f"failed to remove {path}: {e}")


@contextmanager
def working_directory(tmp_root: Optional[Union[str, Path]] = None) -> Iterator[Path]:
    """
    Provide a fresh working directory that is removed on exit.

    Example:
        with working_directory() as workdir:
            (workdir / "tt2latex.tex").write_bytes(source)
    """
    path = create_workdir(tmp_root)
    _log_debug(f"created working directory {path}")
    try:
        yield path
    finally:
        remove_workdir(path)
