from __future__ import annotations

import json
from pathlib import Path

import pytest
from rich.console import Console

from tsinit.config import PRESETS, ScaffoldConfig
from tsinit.errors import CommandFailedError
from tsinit.prompts import CompilerPrompter
from tsinit.scaffold import ProjectScaffolder


def _read(path: Path) -> dict:
    return json.loads(path.read_text(encoding="utf-8"))


@pytest.fixture()
def scaffolder(fake_runner, console: Console) -> ProjectScaffolder:
    prompter = CompilerPrompter(lambda question: "", console=console)
    return ProjectScaffolder(fake_runner, prompter, console=console)


def test_empty_directory_with_default_answers(project_dir: Path, scaffolder: ProjectScaffolder, fake_runner):
    report = scaffolder.run(ScaffoldConfig(target_dir=project_dir))

    manifest = _read(project_dir / "package.json")
    assert manifest["scripts"]["dev"] == "npx tsx --watch src/index.ts"
    assert manifest["scripts"]["run"] == "npx tsc && node dist/index.js"
    assert manifest["scripts"]["build"] == "npx tsc"
    assert manifest["type"] == "module"

    options = _read(project_dir / "tsconfig.json")["compilerOptions"]
    assert options["target"] == "esnext"
    assert options["module"] == "NodeNext"
    assert options["strict"] is True
    assert options["skipLibCheck"] is True

    assert (project_dir / "src" / "index.ts").exists()
    assert fake_runner.commands() == [
        ("npm", "init", "-y"),
        ("npm", "install", "--save-dev", "typescript", "tsx", "@types/node"),
        ("npx", "tsc", "--init"),
    ]
    assert report.status_of("ensure_manifest") == "created"
    assert report.status_of("create_starter_file") == "created"


def test_commonjs_preset_defaults(project_dir: Path, scaffolder: ProjectScaffolder):
    scaffolder.run(ScaffoldConfig(target_dir=project_dir, preset=PRESETS["commonjs"]))

    options = _read(project_dir / "tsconfig.json")["compilerOptions"]
    assert options["target"] == "ES2020"
    assert options["module"] == "CommonJS"
    assert options["strict"] is True
    assert options["skipLibCheck"] is True
    assert "type" not in _read(project_dir / "package.json")


def test_existing_manifest_fields_are_preserved(project_dir: Path, scaffolder: ProjectScaffolder, fake_runner):
    original = {
        "name": "existing",
        "version": "3.1.4",
        "private": True,
        "dependencies": {"zod": "^3.0.0"},
        "scripts": {"lint": "eslint ."},
    }
    (project_dir / "package.json").write_text(json.dumps(original), encoding="utf-8")

    scaffolder.run(ScaffoldConfig(target_dir=project_dir))

    manifest = _read(project_dir / "package.json")
    for key in ("name", "version", "private", "dependencies"):
        assert manifest[key] == original[key]
    assert manifest["scripts"]["lint"] == "eslint ."
    assert ("npm", "init", "-y") not in fake_runner.commands()


def test_second_run_skips_ensure_steps(project_dir: Path, scaffolder: ProjectScaffolder, fake_runner):
    config = ScaffoldConfig(target_dir=project_dir)
    scaffolder.run(config)
    (project_dir / "src" / "index.ts").write_text("export {};\n", encoding="utf-8")
    fake_runner.calls.clear()

    report = scaffolder.run(config)

    assert report.status_of("ensure_manifest") == "skipped"
    assert report.status_of("ensure_compiler_config") == "skipped"
    assert report.status_of("create_starter_file") == "skipped"
    assert fake_runner.commands() == [
        ("npm", "install", "--save-dev", "typescript", "tsx", "@types/node"),
    ]
    assert (project_dir / "src" / "index.ts").read_text(encoding="utf-8") == "export {};\n"


def test_failed_install_stops_before_configuration(project_dir: Path, failing_install_runner, console: Console):
    scaffolder = ProjectScaffolder(
        failing_install_runner, CompilerPrompter(lambda question: "", console=console), console=console
    )

    with pytest.raises(CommandFailedError):
        scaffolder.run(ScaffoldConfig(target_dir=project_dir))

    manifest = _read(project_dir / "package.json")
    assert set(manifest["scripts"]) == {"test"}
    assert not (project_dir / "tsconfig.json").exists()
    assert not (project_dir / "src").exists()


def test_missing_target_directory_is_rejected(tmp_path: Path, scaffolder: ProjectScaffolder):
    with pytest.raises(NotADirectoryError):
        scaffolder.run(ScaffoldConfig(target_dir=tmp_path / "missing"))


def test_next_steps_are_printed(project_dir: Path, scaffolder: ProjectScaffolder, console: Console):
    scaffolder.run(ScaffoldConfig(target_dir=project_dir))
    output = console.file.getvalue()
    assert "Setup complete!" in output
    assert "npm run dev" in output
