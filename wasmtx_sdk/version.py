"""
Package version.

Installed distribution metadata wins; a source checkout falls back to the
version declared in ``pyproject.toml``.
"""
import importlib.metadata
from pathlib import Path

import tomli

DIST_NAME = "wasmtx-sdk"
PYPROJECT = Path(__file__).resolve().parent.parent / "pyproject.toml"
DEFAULT_VERSION = "0.1.0"


def resolve_version(pyproject: Path = PYPROJECT) -> str:
    try:
        return importlib.metadata.version(DIST_NAME)
    except importlib.metadata.PackageNotFoundError:
        pass

    try:
        project = tomli.loads(pyproject.read_text(encoding="utf-8"))["project"]
    except (OSError, KeyError, tomli.TOMLDecodeError):
        return DEFAULT_VERSION
    return project.get("version", DEFAULT_VERSION)


__version__ = resolve_version()
