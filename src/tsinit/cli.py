"""Command line interface for tsinit."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Iterable, Sequence

from rich.console import Console
from rich.table import Table

from .cleanup import CleanupOutcome, CleanupTask
from .config import (
    DEFAULT_CLEANUP_DELAY,
    DEFAULT_PRESET,
    PACKAGE_MANAGERS,
    PRESETS,
    CleanupMode,
    ScaffoldConfig,
)
from .errors import ScaffoldError
from .prompts import CompilerPrompter, parse_answer_overrides
from .runner import CommandRunner
from .scaffold import ProjectScaffolder

LOGGER = logging.getLogger(__name__)

EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130


def _parse_key_value_pairs(pairs: Iterable[str]) -> dict[str, str]:
    context: dict[str, str] = {}
    for pair in pairs:
        if "=" not in pair:
            raise argparse.ArgumentTypeError(
                f"invalid key/value pair '{pair}'. Expected KEY=VALUE syntax."
            )
        key, value = pair.split("=", 1)
        key = key.strip()
        if not key:
            raise argparse.ArgumentTypeError("keys must not be empty")
        context[key] = value
    return context


def _non_negative_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"'{value}' is not a number") from None
    if number < 0:
        raise argparse.ArgumentTypeError("value must not be negative")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Set up a minimal TypeScript project")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    init_parser = subparsers.add_parser(
        "init", help="initialize package.json, tsconfig.json and a starter file"
    )
    init_parser.add_argument(
        "-d",
        "--directory",
        type=Path,
        help="Project directory. Defaults to the parent of --setup-dir, else the working directory",
    )
    init_parser.add_argument(
        "--setup-dir",
        type=Path,
        help="Directory holding the setup files; the target of --cleanup",
    )
    init_parser.add_argument(
        "--preset",
        choices=sorted(PRESETS),
        default=DEFAULT_PRESET,
        help="Compiler option defaults offered in the prompts",
    )
    init_parser.add_argument(
        "--package-manager",
        choices=sorted(PACKAGE_MANAGERS),
        default="npm",
        help="Package manager used to initialize and install",
    )
    init_parser.add_argument(
        "-s",
        "--set",
        metavar="KEY=VALUE",
        action="append",
        default=[],
        dest="answers",
        help="Answer a prompt up front, e.g. --set target=es2022",
    )
    init_parser.add_argument(
        "-y",
        "--yes",
        action="store_true",
        help="Accept the default for every prompt that was not answered with --set",
    )
    init_parser.add_argument(
        "--cleanup",
        choices=CleanupMode.choices,
        default=CleanupMode.NONE,
        help="Remove the setup directory (delete) or move its entries to its parent (hoist)",
    )
    init_parser.add_argument(
        "--cleanup-delay",
        type=_non_negative_float,
        default=DEFAULT_CLEANUP_DELAY,
        metavar="SECONDS",
        help="Seconds to wait before cleaning up",
    )

    subparsers.add_parser("presets", help="list the available compiler presets")

    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(message)s",
    )


def _run_cleanup(task: CleanupTask, console: Console) -> None:
    console.print(
        f"\nSetup directory will be cleaned up in {task.delay:g} seconds. "
        "Press CTRL+C to keep it."
    )
    task.start()
    try:
        task.wait()
    except KeyboardInterrupt:
        task.cancel()
        # The timer may have fired between the interrupt and the cancel.
        task.wait()

    if task.outcome is CleanupOutcome.DONE:
        console.print(f"Cleaned up setup directory {task.setup_dir}")
    elif task.outcome is CleanupOutcome.CANCELLED:
        console.print(f"Kept setup directory {task.setup_dir}")
    else:
        console.print(f"[yellow]Could not clean up {task.setup_dir}: {task.error}[/yellow]")


def _handle_init(
    args: argparse.Namespace,
    *,
    runner: CommandRunner | None,
    console: Console,
) -> int:
    try:
        overrides = parse_answer_overrides(_parse_key_value_pairs(args.answers))
    except (argparse.ArgumentTypeError, KeyError) as exc:
        LOGGER.error("%s", exc.args[0])
        return EXIT_FAILURE

    try:
        config = ScaffoldConfig.resolve(
            directory=args.directory,
            setup_dir=args.setup_dir,
            preset=args.preset,
            package_manager=args.package_manager,
            cleanup_mode=args.cleanup,
            cleanup_delay=args.cleanup_delay,
        )
        task = None
        if config.cleanup_mode != CleanupMode.NONE and config.setup_dir is not None:
            task = CleanupTask(
                config.setup_dir,
                config.cleanup_mode,
                config.cleanup_delay,
                project_dir=config.target_dir,
            )

        prompter = CompilerPrompter(
            console=console, answers=overrides, accept_defaults=args.yes
        )
        scaffolder = ProjectScaffolder(runner, prompter, console=console)
        scaffolder.run(config)
    except (ScaffoldError, OSError, ValueError) as exc:
        LOGGER.error("setup failed: %s", exc)
        return EXIT_FAILURE

    if task is not None:
        _run_cleanup(task, console)
    return 0


def _handle_presets(console: Console) -> int:
    table = Table(title="Compiler presets")
    for column in ("name", "target", "module", "resolution", "type", "description"):
        table.add_column(column)
    for preset in PRESETS.values():
        table.add_row(
            preset.name + (" (default)" if preset.name == DEFAULT_PRESET else ""),
            preset.target,
            preset.module,
            preset.module_resolution,
            preset.module_type or "-",
            preset.description,
        )
    console.print(table)
    return 0


def main(
    argv: Sequence[str] | None = None,
    *,
    runner: CommandRunner | None = None,
    console: Console | None = None,
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)
    console = console or Console()
    try:
        if args.command == "init":
            return _handle_init(args, runner=runner, console=console)
        if args.command == "presets":
            return _handle_presets(console)
    except KeyboardInterrupt:
        LOGGER.error("interrupted")
        return EXIT_INTERRUPTED
    parser.error("no command provided")
    return 2


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
