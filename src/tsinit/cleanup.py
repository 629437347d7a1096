"""Deferred cleanup of the setup directory once scaffolding has finished.

The cleanup runs on a timer owned by the current process rather than in a
detached child, so its outcome is logged and it can be cancelled until the
delay has elapsed.
"""

from __future__ import annotations

import logging
import os
import shutil
import threading
from enum import Enum
from pathlib import Path

from .config import CleanupMode
from .errors import CleanupError

__all__ = ["CleanupOutcome", "CleanupTask", "delete_directory", "hoist_directory"]


LOGGER = logging.getLogger(__name__)


class CleanupOutcome(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    DONE = "done"
    CANCELLED = "cancelled"
    FAILED = "failed"


def _leave_directory(directory: Path) -> None:
    """Move the working directory out of ``directory`` before it disappears."""

    try:
        cwd = Path.cwd().resolve()
    except FileNotFoundError:
        return
    if cwd == directory or directory in cwd.parents:
        os.chdir(directory.parent)
        LOGGER.debug("changed working directory to %s", directory.parent)


def delete_directory(directory: Path) -> None:
    """Remove ``directory`` and everything below it."""

    directory = directory.resolve()
    if not directory.is_dir():
        raise CleanupError(f"{directory} is not a directory")
    _leave_directory(directory)
    shutil.rmtree(directory)
    LOGGER.info("deleted setup directory %s", directory)


def hoist_directory(directory: Path) -> list[Path]:
    """Move every entry of ``directory`` into its parent, then remove it.

    Nothing is moved when any entry would overwrite an existing path in the
    parent directory.
    """

    directory = directory.resolve()
    if not directory.is_dir():
        raise CleanupError(f"{directory} is not a directory")

    parent = directory.parent
    entries = sorted(directory.iterdir())
    conflicts = [entry.name for entry in entries if (parent / entry.name).exists()]
    if conflicts:
        raise CleanupError(
            f"cannot move entries of {directory} to {parent}; already present: "
            + ", ".join(conflicts)
        )

    moved: list[Path] = []
    for entry in entries:
        destination = parent / entry.name
        shutil.move(str(entry), str(destination))
        moved.append(destination)

    _leave_directory(directory)
    directory.rmdir()
    LOGGER.info("moved %d entries from %s to %s", len(moved), directory, parent)
    return moved


class CleanupTask:
    """Clean up ``setup_dir`` after ``delay`` seconds on a background timer.

    Parameters
    ----------
    setup_dir:
        Directory to remove (``delete``) or empty into its parent (``hoist``).
    mode:
        One of :attr:`CleanupMode.DELETE` or :attr:`CleanupMode.HOIST`.
    delay:
        Seconds to wait after :meth:`start` before acting.
    project_dir:
        The scaffolded project. Deleting a directory that contains it is
        refused.
    """

    def __init__(
        self,
        setup_dir: str | Path,
        mode: str,
        delay: float,
        *,
        project_dir: str | Path | None = None,
    ) -> None:
        if mode not in (CleanupMode.DELETE, CleanupMode.HOIST):
            raise ValueError(f"unsupported cleanup mode '{mode}'")
        if delay < 0:
            raise ValueError("delay must not be negative")

        self.setup_dir = Path(setup_dir).expanduser().resolve()
        self.mode = mode
        self.delay = delay
        self._check_target(Path(project_dir).resolve() if project_dir else None)

        self.outcome = CleanupOutcome.PENDING
        self.error: BaseException | None = None
        self._lock = threading.Lock()
        self._finished = threading.Event()
        self._timer = threading.Timer(delay, self._execute)
        self._timer.daemon = True

    def _check_target(self, project_dir: Path | None) -> None:
        if self.setup_dir.parent == self.setup_dir:
            raise CleanupError(f"refusing to clean up filesystem root {self.setup_dir}")
        if project_dir is None or self.mode != CleanupMode.DELETE:
            return
        if project_dir == self.setup_dir or self.setup_dir in project_dir.parents:
            raise CleanupError(
                f"refusing to delete {self.setup_dir}: it contains the project {project_dir}"
            )

    def start(self) -> None:
        LOGGER.info(
            "setup directory %s will be cleaned up (%s) in %g seconds",
            self.setup_dir,
            self.mode,
            self.delay,
        )
        self._timer.start()

    def cancel(self) -> bool:
        """Cancel the task unless it already started; return whether it did."""

        with self._lock:
            if self.outcome is not CleanupOutcome.PENDING:
                return False
            self._timer.cancel()
            self.outcome = CleanupOutcome.CANCELLED
        LOGGER.info("cleanup of %s cancelled", self.setup_dir)
        self._finished.set()
        return True

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the task finished or was cancelled."""

        return self._finished.wait(timeout)

    def _execute(self) -> None:
        with self._lock:
            if self.outcome is not CleanupOutcome.PENDING:
                return
            self.outcome = CleanupOutcome.RUNNING

        try:
            if self.mode == CleanupMode.HOIST:
                hoist_directory(self.setup_dir)
            else:
                delete_directory(self.setup_dir)
        except (CleanupError, OSError) as exc:
            LOGGER.error("cleanup of %s failed: %s", self.setup_dir, exc)
            self.error = exc
            self.outcome = CleanupOutcome.FAILED
        else:
            self.outcome = CleanupOutcome.DONE
        finally:
            self._finished.set()
