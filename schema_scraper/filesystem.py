"""
Writing generated files and post-processing the generated tree.

Index synthesis and import rewriting both walk the same four folder levels
below a version: version -> top-level namespace -> sub-level namespace ->
entity/type folder (Record, Search, Other).
"""

import logging
import re
from pathlib import Path

from .config import INDEX_FILE
from .models import FolderContents
from .render import create_index_file_content

logger = logging.getLogger(__name__)

FOLDER_LEVELS = 4

IMPORT_REGEX = re.compile(r"(import\s+type\s+\{\s*\w+\s*\}\s+from\s+')(src[A-Za-z0-9_/-]+)(';)")


def write_file(path: Path, content: str):
    """Write *content* to *path*, creating parent folders as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def parse_folder_contents(names: list[str]) -> FolderContents:
    """
    Split a directory listing into folders and renderable ``.ts`` files.

    Anything without a dot is a folder. The folder's own index file is left
    out so it never re-exports itself.
    """
    contents = FolderContents()
    for name in sorted(names):
        if "." not in name:
            contents.folders.append(name)
        elif ".ts" in name and name != INDEX_FILE:
            contents.files.append(name.replace(".ts", "", 1))
    return contents


def read_folder(folder: Path) -> FolderContents:
    return parse_folder_contents([entry.name for entry in folder.iterdir()])


def get_version_folder(output_dir: str | Path, version: str) -> Path:
    return Path(output_dir) / "src" / version


# ---------------------------------------------------------------------------
# Index files
# ---------------------------------------------------------------------------

def create_index_files(
    output_dir: str | Path,
    version: str,
    logger: logging.Logger = logger,
) -> list[Path]:
    """Write an index.ts re-exporting everything at each level of a version's tree."""
    version_folder = get_version_folder(output_dir, version)
    created: list[Path] = []
    _create_index_files(version_folder, 1, created, logger)
    return created


def _create_index_files(folder: Path, level: int, created: list[Path], logger: logging.Logger):
    contents = read_folder(folder)
    index_file = folder / INDEX_FILE
    write_file(index_file, create_index_file_content(contents.files + contents.folders))
    created.append(index_file)
    logger.info(f"Created file {index_file}")

    if level >= FOLDER_LEVELS:
        return
    for sub_folder in contents.folders:
        _create_index_files(folder / sub_folder, level + 1, created, logger)


# ---------------------------------------------------------------------------
# Import rewriting
# ---------------------------------------------------------------------------

def has_full_imports(file_content: str) -> bool:
    """True if the file still imports from a ``src/...`` project path."""
    return IMPORT_REGEX.search(file_content) is not None


def relative_import_path(file_path: str, import_path: str) -> str:
    """
    Express *import_path* relative to the folder of *file_path*.

    Both are project paths starting with ``src/``. Leading folders they share
    are dropped; once they diverge every remaining folder of the import costs
    one ``..``.
    """
    file_parts = file_path.split("/")
    import_parts = import_path.split("/")
    new_parts = []
    count = 0
    is_different_path = False

    for i, import_part in enumerate(import_parts):
        file_part = file_parts[i] if i < len(file_parts) else None

        # Sub-level namespaces reuse folder names, so stop matching at the first difference
        if file_part == import_part and not is_different_path:
            continue
        is_different_path = True

        new_parts.append(import_part)
        # The last part is the file name
        if i < len(import_parts) - 1:
            count += 1

    prefix = [".."] * count if count else ["."]
    return "/".join(prefix + new_parts)


def replace_full_imports(file_path: str, file_content: str) -> str:
    """Rewrite every ``src/...`` type import in *file_content* as a relative import."""
    lines = []
    for line in file_content.split("\n"):
        match = IMPORT_REGEX.search(line)
        if match is None:
            lines.append(line)
            continue
        import_start, import_path, import_end = match.groups()
        new_path = relative_import_path(file_path, import_path)
        lines.append(line[:match.start()] + import_start + new_path + import_end + line[match.end():])
    return "\n".join(lines)


def fix_imports(
    output_dir: str | Path,
    version: str,
    logger: logging.Logger = logger,
) -> list[Path]:
    """Rewrite project-path imports as relative imports across a version's tree."""
    output_dir = Path(output_dir)
    updated: list[Path] = []
    _fix_imports(output_dir, get_version_folder(output_dir, version), 1, updated, logger)
    return updated


def _fix_imports(output_dir: Path, folder: Path, level: int, updated: list[Path], logger: logging.Logger):
    contents = read_folder(folder)

    for name in contents.files:
        file = folder / f"{name}.ts"
        file_content = file.read_text(encoding="utf-8")
        if not has_full_imports(file_content):
            continue

        logger.info(f"Updating imports for {file}...")
        project_path = file.relative_to(output_dir).as_posix()
        write_file(file, replace_full_imports(project_path, file_content))
        updated.append(file)
        logger.info(f"Finished updating imports for {file}")

    if level >= FOLDER_LEVELS:
        return
    for sub_folder in contents.folders:
        _fix_imports(output_dir, folder / sub_folder, level + 1, updated, logger)
