"""Individual scaffolding steps executed in a fixed order.

Every step receives a :class:`StepContext`, performs its side effects inside
``config.target_dir`` and returns a :class:`StepResult` describing what it did.
Steps never catch errors: a failing external command or filesystem operation
propagates to the caller and aborts the remaining steps.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from rich.console import Console

from .answers import STARTER_PROGRAM, CompilerAnswers
from .config import ScaffoldConfig
from .documents import load_document, merge_compiler_options, merge_scripts, save_document
from .prompts import CompilerPrompter
from .runner import CommandRunner

__all__ = [
    "STEPS",
    "StepContext",
    "StepResult",
    "StepStatus",
    "configure_compiler",
    "create_starter_file",
    "ensure_compiler_config",
    "ensure_manifest",
    "install_dependencies",
    "update_manifest_scripts",
]


LOGGER = logging.getLogger(__name__)


class StepStatus(str, Enum):
    CREATED = "created"
    SKIPPED = "skipped"
    UPDATED = "updated"
    RAN = "ran"


@dataclass(frozen=True, slots=True)
class StepResult:
    name: str
    status: StepStatus
    detail: str = ""


@dataclass(slots=True)
class StepContext:
    """State shared between the steps of a single run."""

    config: ScaffoldConfig
    runner: CommandRunner
    prompter: CompilerPrompter
    console: Console
    answers: CompilerAnswers | None = None

    def announce(self, message: str) -> None:
        self.console.print(f"\n[cyan]{message}[/cyan]")

    def resolved_answers(self) -> CompilerAnswers:
        if self.answers is None:
            return CompilerAnswers.defaults(self.config.preset)
        return self.answers


def ensure_manifest(context: StepContext) -> StepResult:
    config = context.config
    if config.manifest_path.exists():
        LOGGER.info("%s already exists, skipping init", config.manifest_name)
        return StepResult("ensure_manifest", StepStatus.SKIPPED, str(config.manifest_path))

    context.announce(f"Initializing {config.manifest_name}...")
    context.runner.run(config.package_manager.init_manifest, config.target_dir)
    return StepResult("ensure_manifest", StepStatus.CREATED, str(config.manifest_path))


def install_dependencies(context: StepContext) -> StepResult:
    config = context.config
    packages = ", ".join(config.dev_dependencies)
    context.announce(f"Installing development dependencies: {packages}")
    argv = config.package_manager.install_command(config.dev_dependencies)
    context.runner.run(argv, config.target_dir)
    return StepResult("install_dependencies", StepStatus.RAN, packages)


def ensure_compiler_config(context: StepContext) -> StepResult:
    config = context.config
    if config.compiler_config_path.exists():
        LOGGER.info("%s already exists, skipping init", config.compiler_config_name)
        return StepResult(
            "ensure_compiler_config", StepStatus.SKIPPED, str(config.compiler_config_path)
        )

    context.announce(f"Creating {config.compiler_config_name}...")
    context.runner.run(config.package_manager.init_compiler, config.target_dir)
    return StepResult("ensure_compiler_config", StepStatus.CREATED, str(config.compiler_config_path))


def configure_compiler(context: StepContext) -> StepResult:
    config = context.config
    document = load_document(config.compiler_config_path)
    answers = context.prompter.prompt(config.preset)
    context.answers = answers

    updated = merge_compiler_options(document, answers.compiler_options(config.preset))
    save_document(config.compiler_config_path, updated)
    LOGGER.info("%s updated", config.compiler_config_name)
    return StepResult("configure_compiler", StepStatus.UPDATED, str(config.compiler_config_path))


def update_manifest_scripts(context: StepContext) -> StepResult:
    config = context.config
    answers = context.resolved_answers()
    document = load_document(config.manifest_path)
    updated = merge_scripts(document, answers.scripts(), config.preset.module_type)
    save_document(config.manifest_path, updated)
    LOGGER.info("%s scripts updated", config.manifest_name)
    return StepResult("update_manifest_scripts", StepStatus.UPDATED, str(config.manifest_path))


def create_starter_file(context: StepContext) -> StepResult:
    config = context.config
    entry = config.target_dir / context.resolved_answers().entry_file
    if entry.exists():
        LOGGER.info("%s already exists, leaving it untouched", entry)
        return StepResult("create_starter_file", StepStatus.SKIPPED, str(entry))

    entry.parent.mkdir(parents=True, exist_ok=True)
    entry.write_text(STARTER_PROGRAM, encoding="utf-8")
    LOGGER.info("created %s", entry)
    return StepResult("create_starter_file", StepStatus.CREATED, str(entry))


Step = Callable[[StepContext], StepResult]

STEPS: tuple[Step, ...] = (
    ensure_manifest,
    install_dependencies,
    ensure_compiler_config,
    configure_compiler,
    update_manifest_scripts,
    create_starter_file,
)
