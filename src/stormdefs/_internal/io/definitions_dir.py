"""Definition folder I/O helpers (internal)."""

from pathlib import Path
from typing import Any, List, Union

from stormdefs._internal.pretty_json import pretty_dumps

DEFINITION_SUFFIX = ".xml"
OUTPUT_FILENAME = "output.json"


def list_definition_files(directory: Union[str, Path]) -> List[Path]:
    """List the definition files of a folder.

    Only regular files whose name ends with ".xml" (case-sensitive) are
    returned, sorted by name so every run enumerates them identically.

    Raises:
        FileNotFoundError: If the folder does not exist
        NotADirectoryError: If the path is not a folder
    """
    folder = Path(directory)
    if not folder.exists():
        raise FileNotFoundError(f"Definitions folder not found: {folder}")
    if not folder.is_dir():
        raise NotADirectoryError(f"Not a folder: {folder}")
    return sorted(
        (entry for entry in folder.iterdir() if entry.name.endswith(DEFINITION_SUFFIX) and entry.is_file()),
        key=lambda entry: entry.name,
    )


def read_definition_bytes(path: Path) -> bytes:
    """Read a definition file as raw bytes; the XML parser decodes it."""
    return path.read_bytes()


def write_output_document(document: Any, output_dir: Union[str, Path]) -> Path:
    """Write the document to output_dir/output.json and return that path."""
    out_path = Path(output_dir) / OUTPUT_FILENAME
    out_path.write_text(pretty_dumps(document), encoding="utf-8")
    return out_path
