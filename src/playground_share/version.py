"""Detect a stale installed package by comparing versions."""

import tomllib
from pathlib import Path


def check_version_consistency() -> tuple[bool, str]:
    """Check that the runtime ``__version__`` matches pyproject.toml.

    Returns:
        ``(is_consistent, message)``. When pyproject.toml is not reachable
        (installed from a wheel), the result is inconsistent with an
        explanatory message rather than an exception.
    """
    from . import __version__ as runtime_version

    pyproject_path = Path(__file__).parent.parent.parent / "pyproject.toml"

    if not pyproject_path.exists():
        return False, "Cannot find pyproject.toml for version comparison"

    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        return False, f"Failed to read version from pyproject.toml: {e}"
    source_version = data.get("project", {}).get("version", "unknown")

    if runtime_version != source_version:
        return False, (
            f"Version mismatch detected! "
            f"Runtime: {runtime_version}, Source: {source_version}. "
            f"Reinstall with: pip install -e ."
        )

    return True, f"Version verified: {runtime_version}"
