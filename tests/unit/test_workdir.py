"""Unit tests for per-call working directories."""

import os
from concurrent.futures import ThreadPoolExecutor

import pytest

from jinja_latex.contexts.rendering import workdir as workdir_module
from jinja_latex.contexts.rendering.exceptions import TempDirCreationFailed
from jinja_latex.contexts.rendering.workdir import (
    create_workdir,
    next_workdir_name,
    remove_workdir,
    working_directory,
)


@pytest.mark.unit
def test_name_contains_pid_and_counter():
    name = next_workdir_name()
    prefix, counter = name.rsplit("_", 1)
    assert prefix == f"tt2latex{os.getpid()}"
    assert counter.isdigit()


@pytest.mark.unit
def test_names_unique_across_threads():
    with ThreadPoolExecutor(max_workers=8) as pool:
        names = list(pool.map(lambda _: next_workdir_name(), range(500)))
    assert len(set(names)) == len(names)


@pytest.mark.unit
def test_create_skips_existing_names(tmp_root, monkeypatch):
    suffixes = iter([0, 0, 1])
    monkeypatch.setattr(workdir_module, "_next_suffix", lambda: next(suffixes))
    (tmp_root / f"tt2latex{os.getpid()}_0").mkdir()

    path = create_workdir(tmp_root)

    assert path.name == f"tt2latex{os.getpid()}_1"
    assert path.is_dir()


@pytest.mark.unit
@pytest.mark.skipif(os.name != "posix", reason="permission bits are POSIX only")
def test_created_directory_is_private(tmp_root):
    path = create_workdir(tmp_root)
    assert path.stat().st_mode & 0o077 == 0


@pytest.mark.unit
def test_concurrent_creation_never_collides(tmp_root):
    with ThreadPoolExecutor(max_workers=8) as pool:
        paths = list(pool.map(lambda _: create_workdir(tmp_root), range(64)))
    assert len(set(paths)) == 64
    assert all(path.is_dir() for path in paths)


@pytest.mark.unit
def test_creation_failure(tmp_path):
    not_a_dir = tmp_path / "file"
    not_a_dir.write_text("x")

    with pytest.raises(TempDirCreationFailed) as exc_info:
        create_workdir(not_a_dir)
    assert exc_info.value.path.parent == not_a_dir


@pytest.mark.unit
def test_context_manager_removes_directory(tmp_root):
    with working_directory(tmp_root) as path:
        (path / "tt2latex.aux").write_text("aux")
        assert path.is_dir()
    assert not path.exists()


@pytest.mark.unit
def test_context_manager_removes_directory_on_error(tmp_root):
    with pytest.raises(RuntimeError):
        with working_directory(tmp_root) as path:
            raise RuntimeError("boom")
    assert not path.exists()


@pytest.mark.unit
def test_remove_missing_directory_is_silent(tmp_root):
    remove_workdir(tmp_root / "never-created")
