"""Reading, merging and writing the manifest and compiler configuration."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping

import json5

from .errors import DocumentError

__all__ = [
    "load_document",
    "merge_compiler_options",
    "merge_scripts",
    "save_document",
]


def load_document(path: str | Path) -> dict[str, Any]:
    """Parse ``path`` as JSON allowing comments and trailing commas.

    ``tsc --init`` writes a commented ``tsconfig.json`` which the standard
    JSON parser rejects, so both documents go through ``json5``.
    """

    path = Path(path)
    text = path.read_text(encoding="utf-8")
    try:
        data = json5.loads(text)
    except ValueError as exc:
        raise DocumentError(f"{path} is not valid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise DocumentError(f"{path} must contain a JSON object, found {type(data).__name__}")
    return data


def save_document(path: str | Path, data: Mapping[str, Any]) -> None:
    """Rewrite ``path`` in full with two-space indented JSON."""

    Path(path).write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")


def _section(document: Mapping[str, Any], key: str) -> dict[str, Any]:
    section = document.get(key)
    if section is None:
        return {}
    if not isinstance(section, Mapping):
        raise DocumentError(f"'{key}' must be an object, found {type(section).__name__}")
    return dict(section)


def merge_compiler_options(
    document: Mapping[str, Any], options: Mapping[str, Any]
) -> dict[str, Any]:
    """Return a copy of ``document`` with ``options`` merged into ``compilerOptions``."""

    merged = dict(document)
    compiler_options = _section(document, "compilerOptions")
    compiler_options.update(options)
    merged["compilerOptions"] = compiler_options
    return merged


def merge_scripts(
    document: Mapping[str, Any],
    scripts: Mapping[str, str],
    module_type: str | None = None,
) -> dict[str, Any]:
    """Return a copy of ``document`` with ``scripts`` merged and ``type`` set.

    Existing scripts with other names are kept; same-named ones are replaced.
    ``module_type`` of ``None`` leaves the ``type`` field as it was.
    """

    merged = dict(document)
    merged_scripts = _section(document, "scripts")
    merged_scripts.update(scripts)
    merged["scripts"] = merged_scripts
    if module_type is not None:
        merged["type"] = module_type
    return merged
