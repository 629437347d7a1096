from __future__ import annotations

import io
import json
import sys
from pathlib import Path
from typing import Sequence

import pytest
from rich.console import Console

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from tsinit.errors import CommandFailedError  # noqa: E402


GENERATED_TSCONFIG = """{
  // Visit https://aka.ms/tsconfig to read more about this file
  "compilerOptions": {
    // File Layout
    // "rootDir": "./src",
    // "outDir": "./dist",

    /* Environment Settings */
    "target": "es2016",
    "module": "commonjs",
    "esModuleInterop": true,
    "strict": true,
    "skipLibCheck": true,
  },
}
"""


class FakeToolRunner:
    """Stand-in for npm and tsc that records calls and writes their files."""

    def __init__(self, fail_on: str | None = None, returncode: int = 1) -> None:
        self.calls: list[tuple[tuple[str, ...], Path]] = []
        self.fail_on = fail_on
        self.returncode = returncode

    def commands(self) -> list[tuple[str, ...]]:
        return [argv for argv, _ in self.calls]

    def run(self, argv: Sequence[str], cwd: Path) -> None:
        argv = tuple(argv)
        self.calls.append((argv, cwd))
        if self.fail_on is not None and self.fail_on in argv:
            raise CommandFailedError(argv, self.returncode)

        if "init" in argv and "--init" not in argv:
            manifest = {
                "name": cwd.name,
                "version": "1.0.0",
                "main": "index.js",
                "scripts": {"test": 'echo "Error: no test specified" && exit 1'},
                "license": "ISC",
            }
            (cwd / "package.json").write_text(json.dumps(manifest, indent=2), encoding="utf-8")
        elif "--init" in argv:
            (cwd / "tsconfig.json").write_text(GENERATED_TSCONFIG, encoding="utf-8")


@pytest.fixture()
def fake_runner() -> FakeToolRunner:
    return FakeToolRunner()


@pytest.fixture()
def failing_install_runner() -> FakeToolRunner:
    return FakeToolRunner(fail_on="--save-dev")


@pytest.fixture()
def console() -> Console:
    return Console(file=io.StringIO(), width=120)


@pytest.fixture()
def project_dir(tmp_path: Path) -> Path:
    path = tmp_path / "project"
    path.mkdir()
    return path
