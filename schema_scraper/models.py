"""Data models shared by the scraping, rendering and writing stages."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class PageContent(BaseModel):
    """Text pulled from one schema browser detail page."""

    model_config = ConfigDict(frozen=True)

    type_name: str = Field(..., min_length=1, description="Declared name of the record/enum type")
    folder_path: str = Field(..., description="Folder the generated file lives in, e.g. src/2019_1/lists/accounting")
    rows: list[str] = Field(default_factory=list, description="Remaining non-blank text lines of the page")


class FieldRow(BaseModel):
    """One row of an Attributes or Fields table."""

    name: str = ""
    type: str = ""
    cardinality: str = ""
    label: str = ""
    required: str = ""
    help: str = ""

    @property
    def minimum(self) -> str:
        return self.cardinality.split("..")[0]

    @property
    def maximum(self) -> Optional[str]:
        parts = self.cardinality.split("..")
        return parts[1] if len(parts) > 1 else None


class FileRow(BaseModel):
    """A rendered interface property and the import it needs, if any."""

    file_row: str
    import_line: Optional[str] = None


class FolderContents(BaseModel):
    """Renderable files (without extension) and sub-folders of one directory."""

    files: list[str] = Field(default_factory=list)
    folders: list[str] = Field(default_factory=list)
