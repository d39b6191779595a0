"""Parse one definition XML document into a generic element tree.

Tree shape:
- attributes become keys prefixed with ATTRIBUTE_PREFIX ("@" cannot start an
  XML name, so attribute keys never collide with child element keys)
- every child element key holds a list of nodes in document order, whether
  the element occurs once or many times
- element text next to attributes or children is stored under TEXT_KEY
- a leaf element is its text (str) or None when empty

Attribute values are never converted; callers parse numbers themselves.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union
from xml.parsers.expat import ExpatError

import xmltodict

ATTRIBUTE_PREFIX = "@"
TEXT_KEY = "#text"

Node = Union[None, str, Dict[str, Any], List[Any]]


class StormdefsError(Exception):
    """Base exception for stormdefs errors."""
    pass


class MalformedXmlError(StormdefsError, ValueError):
    """Raised when a document is not well-formed XML."""
    def __init__(self, reason: str, source: Optional[str] = None):
        self.reason = reason
        self.source = source
        where = f" in {source}" if source else ""
        super().__init__(f"Malformed XML{where}: {reason}")


@dataclass(frozen=True)
class ParsedDocument:
    """Root element name and the element tree below it."""
    root_tag: str
    tree: Dict[str, Any]


def is_attribute_key(key: str) -> bool:
    return key.startswith(ATTRIBUTE_PREFIX)


def _as_tree(node: Any) -> Node:
    if not isinstance(node, dict):
        return node
    tree: Dict[str, Any] = {}
    for key, value in node.items():
        if is_attribute_key(key) or key == TEXT_KEY:
            tree[key] = value
        else:
            tree[key] = _as_sequence(value)
    return tree


def _as_sequence(value: Any) -> List[Node]:
    items = value if isinstance(value, list) else [value]
    return [_as_tree(item) for item in items]


def parse_definition_xml(text: Union[str, bytes], source: Optional[str] = None) -> ParsedDocument:
    """Parse XML text into a ParsedDocument.

    Args:
        text: Document text (str) or raw bytes (encoding taken from the XML declaration)
        source: Optional label (usually the file name) used in error messages

    Returns:
        ParsedDocument for the single root element

    Raises:
        MalformedXmlError: If the text is not well-formed XML
    """
    try:
        parsed = xmltodict.parse(
            text,
            attr_prefix=ATTRIBUTE_PREFIX,
            cdata_key=TEXT_KEY,
            dict_constructor=dict,
        )
    except (ExpatError, ValueError) as e:
        # ValueError covers entity declarations (entities are disabled) and
        # str input that cannot be encoded (lone surrogates)
        raise MalformedXmlError(str(e), source=source) from e

    # A well-formed document has exactly one root element
    root_tag, root = next(iter(parsed.items()))
    if root is None:
        tree: Dict[str, Any] = {}
    elif isinstance(root, str):
        tree = {TEXT_KEY: root}
    else:
        tree = _as_tree(root)
    return ParsedDocument(root_tag=root_tag, tree=tree)
