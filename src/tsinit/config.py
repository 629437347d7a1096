"""Configuration helpers shared by the project scaffolder and CLI."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from .errors import UnknownPresetError

__all__ = [
    "CleanupMode",
    "CompilerPreset",
    "DEFAULT_CLEANUP_DELAY",
    "DEV_DEPENDENCIES",
    "PACKAGE_MANAGERS",
    "PRESETS",
    "PackageManager",
    "ScaffoldConfig",
    "get_package_manager",
    "get_preset",
]


DEV_DEPENDENCIES: tuple[str, ...] = ("typescript", "tsx", "@types/node")
DEFAULT_CLEANUP_DELAY = 5.0


class CleanupMode:
    """Names of the supported deferred cleanup strategies."""

    NONE = "none"
    DELETE = "delete"
    HOIST = "hoist"

    choices = (NONE, DELETE, HOIST)


@dataclass(frozen=True, slots=True)
class CompilerPreset:
    """Defaults offered to the operator when configuring the compiler.

    Attributes
    ----------
    name:
        Identifier used on the command line.
    target, module, module_resolution, root_dir, out_dir:
        Defaults applied when the operator leaves the matching prompt empty.
    strict:
        Default answer for the strict mode question.
    extra_options:
        Fixed ``compilerOptions`` entries written on every run. Prompted values
        take precedence over these when the keys collide.
    module_type:
        Value written to the manifest ``type`` field. ``None`` leaves the field
        untouched.
    """

    name: str
    target: str
    module: str
    module_resolution: str
    root_dir: str = "src"
    out_dir: str = "dist"
    strict: bool = True
    extra_options: Mapping[str, object] = field(default_factory=dict)
    module_type: str | None = None
    description: str = ""


PRESETS: Mapping[str, CompilerPreset] = MappingProxyType(
    {
        "nodenext": CompilerPreset(
            name="nodenext",
            target="esnext",
            module="NodeNext",
            module_resolution="NodeNext",
            extra_options=MappingProxyType(
                {
                    "verbatimModuleSyntax": True,
                    "allowImportingTsExtensions": True,
                    "esModuleInterop": True,
                    "skipLibCheck": True,
                    "noEmit": True,
                    "forceConsistentCasingInFileNames": True,
                }
            ),
            module_type="module",
            description="ES modules resolved the Node.js way, run through tsx",
        ),
        "commonjs": CompilerPreset(
            name="commonjs",
            target="ES2020",
            module="CommonJS",
            module_resolution="Node",
            extra_options=MappingProxyType(
                {
                    "esModuleInterop": True,
                    "skipLibCheck": True,
                    "forceConsistentCasingInFileNames": True,
                }
            ),
            description="CommonJS output compiled to dist/",
        ),
    }
)

DEFAULT_PRESET = "nodenext"


def get_preset(name: str) -> CompilerPreset:
    """Return the compiler preset registered under ``name``."""

    try:
        return PRESETS[name]
    except KeyError:
        raise UnknownPresetError("preset", name, list(PRESETS)) from None


@dataclass(frozen=True, slots=True)
class PackageManager:
    """Command lines used to drive a JavaScript package manager."""

    name: str
    init_manifest: tuple[str, ...]
    install_dev: tuple[str, ...]
    init_compiler: tuple[str, ...]

    def install_command(self, packages: tuple[str, ...] | list[str]) -> list[str]:
        return [*self.install_dev, *packages]


PACKAGE_MANAGERS: Mapping[str, PackageManager] = MappingProxyType(
    {
        "npm": PackageManager(
            name="npm",
            init_manifest=("npm", "init", "-y"),
            install_dev=("npm", "install", "--save-dev"),
            init_compiler=("npx", "tsc", "--init"),
        ),
        "pnpm": PackageManager(
            name="pnpm",
            init_manifest=("pnpm", "init"),
            install_dev=("pnpm", "add", "--save-dev"),
            init_compiler=("pnpm", "exec", "tsc", "--init"),
        ),
        "yarn": PackageManager(
            name="yarn",
            init_manifest=("yarn", "init", "-y"),
            install_dev=("yarn", "add", "--dev"),
            init_compiler=("yarn", "tsc", "--init"),
        ),
    }
)


def get_package_manager(name: str) -> PackageManager:
    """Return the package manager registered under ``name``."""

    try:
        return PACKAGE_MANAGERS[name]
    except KeyError:
        raise UnknownPresetError("package manager", name, list(PACKAGE_MANAGERS)) from None


@dataclass(slots=True)
class ScaffoldConfig:
    """Everything a scaffolding run needs besides the operator's answers."""

    target_dir: Path
    preset: CompilerPreset = field(default_factory=lambda: PRESETS[DEFAULT_PRESET])
    package_manager: PackageManager = field(default_factory=lambda: PACKAGE_MANAGERS["npm"])
    dev_dependencies: tuple[str, ...] = DEV_DEPENDENCIES
    manifest_name: str = "package.json"
    compiler_config_name: str = "tsconfig.json"
    setup_dir: Path | None = None
    cleanup_mode: str = CleanupMode.NONE
    cleanup_delay: float = DEFAULT_CLEANUP_DELAY

    @classmethod
    def resolve(
        cls,
        *,
        directory: str | Path | None = None,
        setup_dir: str | Path | None = None,
        preset: str = DEFAULT_PRESET,
        package_manager: str = "npm",
        cleanup_mode: str = CleanupMode.NONE,
        cleanup_delay: float = DEFAULT_CLEANUP_DELAY,
    ) -> "ScaffoldConfig":
        """Build a :class:`ScaffoldConfig` from command line style values.

        The target directory is ``directory`` when given. Otherwise a setup
        directory places the project in its parent, and without either the
        current working directory is used.
        """

        if cleanup_mode not in CleanupMode.choices:
            raise ValueError(f"cleanup mode must be one of {', '.join(CleanupMode.choices)}")
        if cleanup_delay < 0:
            raise ValueError("cleanup delay must not be negative")

        resolved_setup = Path(setup_dir).expanduser().resolve() if setup_dir else None
        if cleanup_mode != CleanupMode.NONE and resolved_setup is None:
            raise ValueError("a setup directory is required when cleanup is enabled")

        if directory is not None:
            target = Path(directory).expanduser().resolve()
        elif resolved_setup is not None:
            target = resolved_setup.parent
        else:
            target = Path.cwd().resolve()

        return cls(
            target_dir=target,
            preset=get_preset(preset),
            package_manager=get_package_manager(package_manager),
            setup_dir=resolved_setup,
            cleanup_mode=cleanup_mode,
            cleanup_delay=cleanup_delay,
        )

    @property
    def manifest_path(self) -> Path:
        return self.target_dir / self.manifest_name

    @property
    def compiler_config_path(self) -> Path:
        return self.target_dir / self.compiler_config_name
