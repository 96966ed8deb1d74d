"""
Render scraped schema pages as TypeScript source.

Enum pages become ``export enum`` declarations, record/search/other pages
become ``export interface`` declarations that import the other generated
types they reference.
"""

import re
from typing import Optional

from .config import RENDERED_SECTIONS, SECTION_MARKERS, STANDARD_COLUMNS, TYPE_MAPPING
from .models import FieldRow, FileRow
from .paths import capitalize_word

IMPORT_ROOT = "src/"
INDENT = "    "


def enum_member_name(row: str) -> str:
    """``in_active`` -> ``Inactive``."""
    return capitalize_word(re.sub(r"[_-]", "", row))


def create_enum(link: str, type_name: str, rows: list[str]) -> str:
    """
    Create a TypeScript enum from an enum page.

    The first row is always the 'Value' column header and is skipped.
    """
    content = f"// {link}\nexport enum {type_name} {{"
    for row in rows[1:]:
        content += f"\n{INDENT}{enum_member_name(row)} = '{row}',"
    content += "\n}\n"
    return content


def parse_field_row(column_names: list[str], row: str) -> FieldRow:
    """
    Line tab-separated *row* values up with *column_names*.

    Rows that don't match the header width but do match the browser's usual
    six columns are read with those columns instead.
    """
    values = row.split("\t")
    if len(values) != len(column_names) and len(values) == len(STANDARD_COLUMNS):
        column_names = STANDARD_COLUMNS

    known = set(FieldRow.model_fields)
    fields = {
        column: value
        for column, value in zip(column_names, values)
        if column in known
    }
    return FieldRow(**fields)


def create_file_row(file_paths: dict[str, str], column_names: list[str], row: str) -> FileRow:
    """Render one table row as an interface property."""
    field = parse_field_row(column_names, row)

    prop_type = TYPE_MAPPING.get(field.type, field.type)
    prop_array = "[]" if field.maximum == "unbounded" else ""

    # Required when flagged 'T' or when at least one value must be present
    prop_required = "" if field.required == "T" or field.minimum == "1" else "?"
    prop_comment = f" // {field.help}" if field.help else ""

    file_row = f"\n{INDENT}{field.name}{prop_required}: {prop_type}{prop_array};{prop_comment}"

    import_line = None
    if prop_type in file_paths:
        import_line = f"import type {{ {prop_type} }} from '{file_paths[prop_type]}';\n"

    return FileRow(file_row=file_row, import_line=import_line)


def import_sort_key(import_line: str) -> str:
    """Sort imports on their project path, not on the imported name."""
    index = import_line.find(IMPORT_ROOT)
    return import_line[index:] if index != -1 else import_line


def find_sections(rows: list[str]) -> list[tuple[str, int, Optional[int]]]:
    """Return ``(section, start, end)`` for each section marker present in *rows*."""
    positions = sorted(
        (rows.index(marker), marker)
        for marker in SECTION_MARKERS
        if marker in rows
    )
    sections = []
    for i, (position, marker) in enumerate(positions):
        end = positions[i + 1][0] if i + 1 < len(positions) else None
        sections.append((marker, position + 1, end))
    return sections


def create_interface(
    file_paths: dict[str, str],
    link: str,
    type_name: str,
    rows: list[str],
) -> str:
    """Create a TypeScript interface from a record, search or other page."""
    attributes_interface = ""
    attributes_prop = ""
    interface_props = ""
    imports_set: set[str] = set()

    for section, start, end in find_sections(rows):
        if section not in RENDERED_SECTIONS:
            continue

        section_rows = rows[start:end]

        # First row holds the column headers
        column_names = [name.lower() for name in section_rows[0].split("\t")] if section_rows else []
        rendered = ""
        for row in section_rows[1:]:
            file_row = create_file_row(file_paths, column_names, row)
            rendered += file_row.file_row
            if file_row.import_line is not None:
                imports_set.add(file_row.import_line)

        if section == "Attributes":
            attributes_name = f"{type_name}Attributes"
            # Blank line separates `attributes` from the other props
            attributes_prop = f"\n{INDENT}attributes: {attributes_name};\n"
            attributes_interface = f"\nexport interface {attributes_name} {{{rendered}\n}}\n"
        else:
            interface_props += rendered

    imports = ""
    if imports_set:
        imports = "".join(sorted(imports_set, key=import_sort_key)) + "\n"

    return (
        f"{imports}// {link}\n"
        f"export interface {type_name} {{{attributes_prop}{interface_props}\n}}\n"
        f"{attributes_interface}"
    )


def create_file_path_enum(enum_name: str, file_paths: dict[str, str]) -> str:
    """
    Create an enum of every generated type and its project path.

    Entries are ordered by path with a blank line between parent folders.
    """
    content = f"export enum {enum_name} {{"
    previous_parent = ""
    for type_name, file_path in sorted(file_paths.items(), key=lambda item: item[1]):
        parent = file_path[:file_path.rfind("/") + 1]
        separator = "\n" if previous_parent not in ("", parent) else ""
        content += f"\n{separator}{INDENT}{type_name} = '{file_path}',"
        previous_parent = parent
    content += "\n}\n"
    return content


def create_index_file_content(entries: list[str]) -> str:
    """Re-export every file and folder in *entries*."""
    return "\n".join(f"export * from './{entry}';" for entry in entries)
