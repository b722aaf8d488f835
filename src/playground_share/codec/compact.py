"""Drop and restore default-valued fields of project files."""

from ..models import CompactProjectFile, ProjectFile


def compact_file(file: ProjectFile) -> CompactProjectFile:
    """``hidden`` is omitted unless true."""
    return CompactProjectFile(
        name=file.name,
        content=file.content,
        hidden=True if file.hidden else None,
    )


def expand_file(compact: CompactProjectFile) -> ProjectFile:
    """Absent ``hidden`` means visible."""
    return ProjectFile(
        name=compact.name,
        content=compact.content,
        hidden=bool(compact.hidden),
    )
