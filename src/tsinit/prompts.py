"""Line based questions asked while configuring the compiler."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Mapping

from rich.console import Console

from .answers import CompilerAnswers
from .config import CompilerPreset
from .errors import InputClosedError

__all__ = ["CompilerPrompter", "Question", "QUESTIONS", "parse_answer_overrides"]


LOGGER = logging.getLogger(__name__)

AskFunction = Callable[[str], str]


@dataclass(frozen=True, slots=True)
class Question:
    key: str
    label: str

    def default_for(self, preset: CompilerPreset) -> str:
        value = getattr(preset, self.key)
        if isinstance(value, bool):
            return "y" if value else "n"
        return str(value)

    def text(self, preset: CompilerPreset) -> str:
        default = self.default_for(preset)
        if self.key == "strict":
            return f"{self.label} (y/n, default: {default}): "
        return f"{self.label} (default: {default}): "


QUESTIONS: tuple[Question, ...] = (
    Question("target", "Target"),
    Question("module", "Module system"),
    Question("module_resolution", "Module resolution"),
    Question("root_dir", "Root directory"),
    Question("out_dir", "Output directory"),
    Question("strict", "Enable strict mode?"),
)

_QUESTION_KEYS = {question.key for question in QUESTIONS}
# Keys as they appear in tsconfig.json are accepted as aliases.
_ALIASES = {
    "moduleResolution": "module_resolution",
    "rootDir": "root_dir",
    "outDir": "out_dir",
}


def parse_answer_overrides(pairs: Mapping[str, str]) -> dict[str, str]:
    """Normalise ``KEY=VALUE`` answers supplied on the command line."""

    overrides: dict[str, str] = {}
    for key, value in pairs.items():
        normalized = _ALIASES.get(key, key.replace("-", "_"))
        if normalized not in _QUESTION_KEYS:
            known = ", ".join(sorted(_QUESTION_KEYS))
            raise KeyError(f"unknown answer '{key}'. Expected one of: {known}")
        overrides[normalized] = value
    return overrides


class CompilerPrompter:
    """Ask the operator for compiler options, falling back to preset defaults.

    ``ask`` receives the full question text and returns the raw response. An
    empty response selects the default shown in the question. Keys present in
    ``answers`` are answered up front and never asked; with
    ``accept_defaults`` no question is asked at all.
    """

    def __init__(
        self,
        ask: AskFunction | None = None,
        *,
        console: Console | None = None,
        answers: Mapping[str, str] | None = None,
        accept_defaults: bool = False,
    ) -> None:
        self.console = console or Console()
        self._ask = ask or self.console.input
        self._answers = dict(answers or {})
        self.accept_defaults = accept_defaults

    def prompt(self, preset: CompilerPreset) -> CompilerAnswers:
        values: dict[str, str] = {}
        if not self.accept_defaults:
            self.console.print("\nConfigure your TypeScript options:", style="bold")

        for question in QUESTIONS:
            if question.key in self._answers:
                response = self._answers[question.key].strip()
            elif self.accept_defaults:
                response = ""
            else:
                try:
                    response = self._ask(question.text(preset)).strip()
                except EOFError:
                    raise InputClosedError(f"no answer for '{question.label}'; input closed") from None

            if not response:
                response = question.default_for(preset)
            LOGGER.debug("answer %s=%r", question.key, response)
            values[question.key] = response

        return CompilerAnswers(**values)
