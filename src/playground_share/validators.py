"""
Input validation for share links and project files.

Validators return ``(is_valid, error_message)`` tuples so callers can
decide whether to reject, log, or fall back.
"""

import re
from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import ProjectFile

# Sample ids are path-like: letters, digits, underscore, hyphen, slash
SAMPLE_ID_PATTERN = re.compile(r"^[a-zA-Z0-9_\-/]+$")


def format_validation_error(field_name: str, reason: str) -> str:
    return f"{field_name} {reason}"


def validate_sample_id(sample: str | None) -> bool:
    """Return True if *sample* may be used to build a manifest path."""
    return bool(sample) and SAMPLE_ID_PATTERN.fullmatch(sample) is not None


def validate_file_name(name: str) -> tuple[bool, str]:
    """
    Validate a project file name.

    Rules:
        - Cannot be empty or whitespace-only
        - Cannot contain a '..' path segment
        - Cannot have empty path segments (e.g. 'src//app.ts')
    """
    if not name or not name.strip():
        return False, format_validation_error("File name", "cannot be empty")

    segments = name.split("/")
    if ".." in segments:
        return False, format_validation_error(
            "File name", "cannot contain '..' segments"
        )
    if "" in segments:
        return False, format_validation_error(
            "File name", "cannot have empty path segments"
        )

    return True, ""


def validate_project_files(files: Iterable["ProjectFile"]) -> tuple[bool, str]:
    """Validate every file name and require names to be unique."""
    seen: set[str] = set()
    for file in files:
        is_valid, error = validate_file_name(file.name)
        if not is_valid:
            return False, f"{error}: {file.name!r}"
        if file.name in seen:
            return False, f"Duplicate file name: {file.name!r}"
        seen.add(file.name)
    return True, ""
