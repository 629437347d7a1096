"""Set up a minimal TypeScript project from the command line.

The package drives the project's package manager and the TypeScript compiler
to create ``package.json`` and ``tsconfig.json``, merges the operator's
compiler choices and run scripts into them, writes a starter source file and
can clean up the setup directory afterwards.
"""

from __future__ import annotations

from .answers import CompilerAnswers
from .cleanup import CleanupOutcome, CleanupTask
from .config import PACKAGE_MANAGERS, PRESETS, CompilerPreset, PackageManager, ScaffoldConfig
from .errors import (
    CleanupError,
    CommandFailedError,
    CommandNotFoundError,
    DocumentError,
    InputClosedError,
    ScaffoldError,
    UnknownPresetError,
)
from .prompts import CompilerPrompter
from .runner import CommandRunner, SubprocessRunner
from .scaffold import ProjectScaffolder, ScaffoldReport

__all__ = [
    "CleanupError",
    "CleanupOutcome",
    "CleanupTask",
    "CommandFailedError",
    "CommandNotFoundError",
    "CommandRunner",
    "CompilerAnswers",
    "CompilerPreset",
    "CompilerPrompter",
    "DocumentError",
    "InputClosedError",
    "PACKAGE_MANAGERS",
    "PRESETS",
    "PackageManager",
    "ProjectScaffolder",
    "ScaffoldConfig",
    "ScaffoldError",
    "ScaffoldReport",
    "SubprocessRunner",
    "UnknownPresetError",
]

__version__ = "0.1.0"
