"""Validated operator answers for the compiler configuration prompts."""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .config import CompilerPreset

__all__ = ["CompilerAnswers", "STARTER_PROGRAM", "parse_flag"]


STARTER_PROGRAM = (
    'let message: string = "TypeScript setup complete. Ready to build!";\n'
    "console.log(message);\n"
)

_TRUTHY = {"y", "yes", "true"}


def parse_flag(value: str | bool) -> bool:
    """Interpret a free-text yes/no answer."""

    if isinstance(value, bool):
        return value
    return value.strip().lower() in _TRUTHY


class CompilerAnswers(BaseModel):
    """Answers to the six compiler configuration questions."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    target: str = Field(..., min_length=1, description="ECMAScript target of the emitted code.")
    module: str = Field(..., min_length=1, description="Module system of the emitted code.")
    module_resolution: str = Field(..., min_length=1, description="Module resolution strategy.")
    root_dir: str = Field(..., min_length=1, description="Directory holding the sources.")
    out_dir: str = Field(..., min_length=1, description="Directory receiving compiled output.")
    strict: bool = Field(True, description="Whether strict type checking is enabled.")

    @field_validator("strict", mode="before")
    @classmethod
    def _coerce_strict(cls, value: object) -> object:
        if isinstance(value, str):
            return parse_flag(value)
        return value

    @classmethod
    def defaults(cls, preset: CompilerPreset) -> "CompilerAnswers":
        """Return the answers an operator gets by pressing enter everywhere."""

        return cls(
            target=preset.target,
            module=preset.module,
            module_resolution=preset.module_resolution,
            root_dir=preset.root_dir,
            out_dir=preset.out_dir,
            strict=preset.strict,
        )

    def compiler_options(self, preset: CompilerPreset) -> Dict[str, object]:
        """Return the entries merged into ``compilerOptions``."""

        options: Dict[str, object] = dict(preset.extra_options)
        options.update(
            {
                "target": self.target,
                "module": self.module,
                "moduleResolution": self.module_resolution,
                "rootDir": self.root_dir,
                "outDir": self.out_dir,
                "strict": self.strict,
            }
        )
        return options

    @property
    def entry_file(self) -> PurePosixPath:
        """Project relative path of the starter source file."""

        return PurePosixPath(self.root_dir) / "index.ts"

    def scripts(self) -> Dict[str, str]:
        """Return the ``dev``/``run``/``build`` manifest scripts."""

        compiled = PurePosixPath(self.out_dir) / "index.js"
        return {
            "dev": f"npx tsx --watch {self.entry_file}",
            "run": f"npx tsc && node {compiled}",
            "build": "npx tsc",
        }
