"""Project scaffolding helpers."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

from rich.console import Console

from .config import ScaffoldConfig
from .prompts import CompilerPrompter
from .runner import CommandRunner, SubprocessRunner
from .steps import STEPS, Step, StepContext, StepResult

__all__ = ["ProjectScaffolder", "ScaffoldReport"]


LOGGER = logging.getLogger(__name__)


NEXT_STEPS = """
[bold green]Setup complete![/bold green]
Next steps:
  - npm run dev   -> runs {entry} directly with tsx in watch mode
  - npm run run   -> compiles with tsc and runs the output from {out_dir}/
  - npm run build -> builds the project with tsc
  - edit {compiler_config} anytime to adjust compiler settings
"""


@dataclass(slots=True)
class ScaffoldReport:
    """Outcome of the steps that completed during a run."""

    results: list[StepResult] = field(default_factory=list)

    def status_of(self, name: str) -> str | None:
        for result in self.results:
            if result.name == name:
                return result.status.value
        return None


@dataclass(slots=True)
class ProjectScaffolder:
    """Set up a TypeScript project by running the scaffolding steps in order."""

    runner: CommandRunner
    prompter: CompilerPrompter
    console: Console
    steps: tuple[Step, ...]

    def __init__(
        self,
        runner: CommandRunner | None = None,
        prompter: CompilerPrompter | None = None,
        *,
        console: Console | None = None,
        steps: Iterable[Step] | None = None,
    ) -> None:
        self.console = console or Console()
        self.runner = runner or SubprocessRunner()
        self.prompter = prompter or CompilerPrompter(console=self.console)
        self.steps = tuple(steps) if steps is not None else STEPS

    def run(self, config: ScaffoldConfig) -> ScaffoldReport:
        """Run every step against ``config.target_dir``.

        The first failing step aborts the run and its exception propagates
        unchanged. Changes applied by earlier steps are kept.
        """

        if not config.target_dir.is_dir():
            raise NotADirectoryError(f"{config.target_dir} is not a directory")

        self.console.print(f"Starting TypeScript project setup in {config.target_dir}")
        context = StepContext(
            config=config,
            runner=self.runner,
            prompter=self.prompter,
            console=self.console,
        )
        report = ScaffoldReport()
        for step in self.steps:
            result = step(context)
            LOGGER.debug("step %s: %s", result.name, result.status.value)
            report.results.append(result)

        answers = context.resolved_answers()
        self.console.print(
            NEXT_STEPS.format(
                entry=answers.entry_file,
                out_dir=answers.out_dir,
                compiler_config=config.compiler_config_name,
            )
        )
        return report
