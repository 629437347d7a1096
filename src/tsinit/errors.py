"""Custom exception types raised while scaffolding a project."""

from __future__ import annotations

from collections.abc import Sequence


class ScaffoldError(RuntimeError):
    """Base class for failures that abort a scaffolding run."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class CommandFailedError(ScaffoldError):
    """Raised when an external tool exits with a non-zero status."""

    def __init__(self, argv: Sequence[str], returncode: int) -> None:
        self.argv = tuple(argv)
        self.returncode = returncode
        super().__init__(f"command '{' '.join(self.argv)}' exited with status {returncode}")


class CommandNotFoundError(ScaffoldError):
    """Raised when the executable of an external tool cannot be located."""

    def __init__(self, executable: str) -> None:
        self.executable = executable
        super().__init__(f"executable '{executable}' was not found on PATH")


class DocumentError(ScaffoldError):
    """Raised when a manifest or compiler configuration cannot be parsed."""


class CleanupError(ScaffoldError):
    """Raised when the setup directory cannot be cleaned up."""


class InputClosedError(ScaffoldError):
    """Raised when standard input closes before a question was answered."""


class UnknownPresetError(ScaffoldError):
    """Raised when a compiler or package manager preset name is unknown."""

    def __init__(self, kind: str, name: str, known: Sequence[str]) -> None:
        self.name = name
        super().__init__(f"unknown {kind} '{name}'. Expected one of: {', '.join(sorted(known))}")


__all__ = [
    "CleanupError",
    "CommandFailedError",
    "CommandNotFoundError",
    "DocumentError",
    "InputClosedError",
    "ScaffoldError",
    "UnknownPresetError",
]
