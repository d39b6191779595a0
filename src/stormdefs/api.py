"""Public API for stormdefs.

High-level functions that return complete, structured results.
The CLI is a thin shell over these functions.
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Literal, Sequence, Union

from pydantic import BaseModel, Field, SerializeAsAny

from stormdefs.codes import IssueCode
from stormdefs.kernel.definition import (
    DEFAULT_SCHEMA,
    DEFINITION_ROOT_TAG,
    DefinitionSchema,
    MinimalDefinition,
    UnexpectedRootError,
    normalize_definition,
)
from stormdefs.kernel.xml_tree import MalformedXmlError, parse_definition_xml
from stormdefs._internal.io.definitions_dir import (
    list_definition_files,
    read_definition_bytes,
    write_output_document,
)

OnMalformed = Literal["abort", "skip"]
ON_MALFORMED_CHOICES = ("abort", "skip")


def _normalize_path(path: Union[str, os.PathLike, Path]) -> Path:
    """Normalize path input to Path object."""
    return Path(path) if not isinstance(path, Path) else path


class ConversionIssue(BaseModel):
    """A file that was skipped during conversion."""
    code: IssueCode
    path: str
    message: str


class ConversionResult(BaseModel):
    """Result of converting a batch of definition files."""
    schema_name: str
    files: List[str] = Field(default_factory=list)  # Converted files, in processing order
    definitions: List[SerializeAsAny[MinimalDefinition]] = Field(default_factory=list)  # One record per converted file
    issues: List[ConversionIssue] = Field(default_factory=list)  # Skipped files, in processing order

    def to_document(self) -> Dict[str, Any]:
        """Build the output document: {"definitions": [...]}."""
        return build_document(self.definitions)


def build_document(definitions: Sequence[MinimalDefinition]) -> Dict[str, Any]:
    """Serialize records with their JSON field names, keeping their order."""
    return {
        "definitions": [record.model_dump(by_alias=True) for record in definitions]
    }


def convert_definition(
    text: Union[str, bytes],
    schema: DefinitionSchema = DEFAULT_SCHEMA,
    source: Union[str, None] = None
) -> MinimalDefinition:
    """Parse and normalize a single definition document.

    Raises:
        MalformedXmlError: If the text is not well-formed XML
        UnexpectedRootError: If the root element is not <definition>
    """
    document = parse_definition_xml(text, source=source)
    if document.root_tag != DEFINITION_ROOT_TAG:
        raise UnexpectedRootError(document.root_tag, source=source)
    return normalize_definition(document.tree, schema)


def convert_files(
    paths: Sequence[Union[str, os.PathLike, Path]],
    schema: DefinitionSchema = DEFAULT_SCHEMA,
    on_malformed: OnMalformed = "abort"
) -> ConversionResult:
    """Convert definition files, one at a time, in the order given.

    Args:
        paths: Definition files; output order follows this order exactly
        schema: Record schema applied to every file
        on_malformed: "abort" re-raises the first parse failure (nothing is
            returned), "skip" records it as an issue and continues

    Returns:
        ConversionResult with one record per converted file

    Raises:
        ValueError: If on_malformed is not a known policy
        MalformedXmlError, UnexpectedRootError: Under the "abort" policy
    """
    if on_malformed not in ON_MALFORMED_CHOICES:
        raise ValueError(
            f"Unknown on_malformed policy '{on_malformed}' (expected one of: {', '.join(ON_MALFORMED_CHOICES)})"
        )

    definitions: List[MinimalDefinition] = []
    files: List[str] = []
    issues: List[ConversionIssue] = []

    for raw_path in paths:
        path = _normalize_path(raw_path)
        try:
            record = convert_definition(read_definition_bytes(path), schema, source=path.name)
        except MalformedXmlError as e:
            if on_malformed == "abort":
                raise
            issues.append(ConversionIssue(code=IssueCode.MALFORMED_XML, path=str(path), message=str(e)))
            continue
        except UnexpectedRootError as e:
            if on_malformed == "abort":
                raise
            issues.append(ConversionIssue(code=IssueCode.UNEXPECTED_ROOT, path=str(path), message=str(e)))
            continue
        definitions.append(record)
        files.append(str(path))

    return ConversionResult(
        schema_name=schema.name,
        files=files,
        definitions=definitions,
        issues=issues,
    )


def convert_directory(
    input_dir: Union[str, os.PathLike, Path],
    schema: DefinitionSchema = DEFAULT_SCHEMA,
    on_malformed: OnMalformed = "abort"
) -> ConversionResult:
    """Convert every *.xml file of a folder (see list_definition_files for order)."""
    return convert_files(
        list_definition_files(_normalize_path(input_dir)),
        schema=schema,
        on_malformed=on_malformed,
    )


def write_document(
    result: Union[ConversionResult, Sequence[MinimalDefinition]],
    output_dir: Union[str, os.PathLike, Path]
) -> Path:
    """Write output.json into output_dir and return its path.

    Raises:
        FileNotFoundError: If output_dir does not exist
    """
    out_dir = _normalize_path(output_dir)
    if not out_dir.is_dir():
        raise FileNotFoundError(f"Output folder not found: {out_dir}")
    if isinstance(result, ConversionResult):
        document = result.to_document()
    else:
        document = build_document(result)
    return write_output_document(document, out_dir)
