"""Exceptions raised by the generator."""


class SchemaScraperError(Exception):
    """Base class for every error raised by this package."""


class PageExtractionError(SchemaScraperError):
    """A detail page did not have the expected layout."""


class FilePathTableMissingError(SchemaScraperError):
    """No file-path table has been built or persisted for a version."""

    def __init__(self, version: str):
        super().__init__(
            f"No file-path table for version {version}. "
            f"Run with --create-file-path-object-file --netsuite-version {version} first."
        )
        self.version = version
