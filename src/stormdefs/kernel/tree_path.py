"""Optional path lookups over the generic element tree.

A path is a dotted string of keys, e.g. "tooltip_properties.@description".
Every step returns the node or None; a lookup never raises.
"""

from typing import Tuple

from .xml_tree import Node


def split_path(path: str) -> Tuple[str, ...]:
    """Split a dotted path into its keys. The empty path addresses the node itself."""
    if not path:
        return ()
    return tuple(path.split("."))


def unwrap_single(node: Node) -> Node:
    """Return the only element of a one-element list, otherwise the node unchanged."""
    if isinstance(node, list) and len(node) == 1:
        return node[0]
    return node


def _step(node: Node, key: str) -> Node:
    # Intermediate lists resolve only when unambiguous
    if isinstance(node, list):
        if len(node) != 1:
            return None
        node = node[0]
    if not isinstance(node, dict):
        return None
    return node.get(key)


def lookup(node: Node, path: str) -> Node:
    """Return the node at `path` below `node`, or None if any step is missing.

    The final node is returned as found: a child element path yields its list
    of occurrences, an attribute path yields the attribute string.
    """
    current = node
    for key in split_path(path):
        current = _step(current, key)
        if current is None:
            return None
    return current

