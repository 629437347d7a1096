"""Invocation of the external package manager and compiler tools."""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Protocol, Sequence

from .errors import CommandFailedError, CommandNotFoundError

__all__ = ["CommandRunner", "SubprocessRunner"]


LOGGER = logging.getLogger(__name__)


class CommandRunner(Protocol):
    """Run a single external command to completion."""

    def run(self, argv: Sequence[str], cwd: Path) -> None:  # pragma: no cover - protocol
        ...


class SubprocessRunner:
    """Run commands with :func:`subprocess.run`, sharing the operator's terminal.

    Each command is a single blocking attempt without a timeout. Standard
    streams are inherited so the tool's own output reaches the operator.
    """

    def run(self, argv: Sequence[str], cwd: Path) -> None:
        if not argv:
            raise ValueError("argv must not be empty")

        # shutil.which resolves npm.cmd and friends on Windows.
        executable = shutil.which(argv[0])
        if executable is None:
            raise CommandNotFoundError(argv[0])

        LOGGER.debug("running %s in %s", " ".join(argv), cwd)
        try:
            subprocess.run([executable, *argv[1:]], cwd=cwd, check=True)
        except subprocess.CalledProcessError as exc:
            raise CommandFailedError(argv, exc.returncode) from exc
