"""
Per-version lookup of generated type names to their project paths.

Interfaces use it to import the other generated types they reference, so the
table for a version has to be complete before any of its pages are rendered.
"""

import json
import logging
from pathlib import Path

from .config import FILE_PATHS_DIR
from .errors import FilePathTableMissingError

logger = logging.getLogger(__name__)


class FilePathTables:
    """File-path tables keyed by NetSuite version, persisted as JSON."""

    def __init__(self, table_dir: str | Path = FILE_PATHS_DIR):
        self.table_dir = Path(table_dir)
        self._tables: dict[str, dict[str, str]] = {}

    def table_file(self, version: str) -> Path:
        return self.table_dir / f"filePath_{version}.json"

    def set(self, version: str, file_paths: dict[str, str]):
        self._tables[version] = dict(file_paths)

    def get(self, version: str) -> dict[str, str]:
        """Return the table for *version*, loading it from disk the first time."""
        if version not in self._tables:
            self._tables[version] = self.load(version)
        return self._tables[version]

    def load(self, version: str) -> dict[str, str]:
        table_file = self.table_file(version)
        if not table_file.exists():
            raise FilePathTableMissingError(version)

        with open(table_file, "r", encoding="utf-8") as f:
            file_paths = json.load(f)
        logger.debug(f"Loaded {len(file_paths)} file paths from {table_file}")
        return file_paths

    def save(self, version: str) -> Path:
        """Write the table for *version* to disk, sorted case-insensitively by name."""
        file_paths = self._tables[version]
        ordered = dict(sorted(file_paths.items(), key=lambda item: item[0].lower()))

        table_file = self.table_file(version)
        table_file.parent.mkdir(parents=True, exist_ok=True)
        with open(table_file, "w", encoding="utf-8") as f:
            json.dump(ordered, f, indent=2, ensure_ascii=False)
            f.write("\n")
        return table_file
