"""stormdefs: Stormworks definition XML to JSON conversion."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("stormdefs")
except PackageNotFoundError:
    __version__ = "dev"

# Public API exports
from stormdefs.api import (
    ConversionIssue,
    ConversionResult,
    convert_definition,
    convert_directory,
    convert_files,
    write_document,
)
from stormdefs.codes import IssueCode
from stormdefs.kernel.definition import (
    DEFAULT_SCHEMA,
    EXTENDED_SCHEMA,
    MINIMAL_SCHEMA,
    ExtendedDefinition,
    MinimalDefinition,
    UnexpectedRootError,
)
from stormdefs.kernel.xml_tree import MalformedXmlError, StormdefsError

__all__ = [
    "__version__",
    "convert_definition",
    "convert_directory",
    "convert_files",
    "write_document",
    "ConversionIssue",
    "ConversionResult",
    "IssueCode",
    "DEFAULT_SCHEMA",
    "EXTENDED_SCHEMA",
    "MINIMAL_SCHEMA",
    "ExtendedDefinition",
    "MinimalDefinition",
    "MalformedXmlError",
    "UnexpectedRootError",
    "StormdefsError",
]
