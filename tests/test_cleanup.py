from __future__ import annotations

import os
from pathlib import Path

import pytest

from tsinit.cleanup import CleanupOutcome, CleanupTask, delete_directory, hoist_directory
from tsinit.config import CleanupMode
from tsinit.errors import CleanupError


@pytest.fixture()
def setup_dir(tmp_path: Path) -> Path:
    path = tmp_path / "project" / "setup"
    (path / "nested").mkdir(parents=True)
    (path / "setup.ts").write_text("// setup\n", encoding="utf-8")
    (path / "nested" / "modules.txt").write_text("typescript\n", encoding="utf-8")
    return path


def test_delete_task_removes_directory_after_delay(setup_dir: Path):
    task = CleanupTask(setup_dir, CleanupMode.DELETE, 0.05, project_dir=setup_dir.parent)
    task.start()

    assert task.wait(timeout=5)
    assert task.outcome is CleanupOutcome.DONE
    assert not setup_dir.exists()
    assert setup_dir.parent.exists()


def test_cancelled_task_keeps_directory(setup_dir: Path):
    task = CleanupTask(setup_dir, CleanupMode.DELETE, 30)
    task.start()

    assert task.cancel() is True
    assert task.wait(timeout=1)
    assert task.outcome is CleanupOutcome.CANCELLED
    assert setup_dir.exists()
    assert task.cancel() is False


def test_failure_is_recorded_not_raised(setup_dir: Path):
    task = CleanupTask(setup_dir, CleanupMode.HOIST, 0)
    (setup_dir.parent / "setup.ts").write_text("// clash\n", encoding="utf-8")
    task.start()

    assert task.wait(timeout=5)
    assert task.outcome is CleanupOutcome.FAILED
    assert isinstance(task.error, CleanupError)
    assert (setup_dir / "setup.ts").exists()


def test_hoist_moves_entries_then_removes_directory(setup_dir: Path):
    parent = setup_dir.parent
    moved = hoist_directory(setup_dir)

    assert sorted(path.name for path in moved) == ["nested", "setup.ts"]
    assert (parent / "setup.ts").exists()
    assert (parent / "nested" / "modules.txt").exists()
    assert not setup_dir.exists()


def test_delete_leaves_working_directory_first(setup_dir: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.chdir(setup_dir / "nested")
    delete_directory(setup_dir)

    assert not setup_dir.exists()
    assert Path(os.getcwd()).resolve() == setup_dir.parent.resolve()


def test_delete_refuses_directory_containing_project(setup_dir: Path):
    with pytest.raises(CleanupError, match="contains the project"):
        CleanupTask(setup_dir, CleanupMode.DELETE, 0, project_dir=setup_dir / "nested")
    with pytest.raises(CleanupError):
        CleanupTask(setup_dir, CleanupMode.DELETE, 0, project_dir=setup_dir)


def test_hoist_allows_project_inside_setup_directory(setup_dir: Path):
    task = CleanupTask(setup_dir, CleanupMode.HOIST, 0, project_dir=setup_dir)
    assert task.outcome is CleanupOutcome.PENDING


def test_filesystem_root_is_refused():
    with pytest.raises(CleanupError, match="filesystem root"):
        CleanupTask(Path("/"), CleanupMode.DELETE, 0)


def test_invalid_arguments():
    with pytest.raises(ValueError):
        CleanupTask("somewhere", CleanupMode.NONE, 1)
    with pytest.raises(ValueError):
        CleanupTask("somewhere", CleanupMode.DELETE, -1)
