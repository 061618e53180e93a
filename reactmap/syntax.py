"""Syntax tree traversal and node helpers.

Every detector is a visitor passed to ``walk_tree``; none of them recurse on
their own. Text is always sliced from the exact byte buffer the tree was
parsed from, since tree-sitter offsets are byte offsets into that buffer.
"""

from typing import Any, Callable, Iterable

Visitor = Callable[[Any], None]

QUOTE_CHARS = "'\"`"


def walk_tree(root, visitor: Visitor) -> None:
    """Call ``visitor`` on ``root`` and every descendant, pre-order.

    Parents are visited before children and siblings left to right. Uses an
    explicit stack so deeply nested JSX cannot exhaust the interpreter's
    recursion limit. A ``None`` root is a no-op.
    """
    if root is None:
        return

    stack = [root]
    while stack:
        node = stack.pop()
        if node is None:
            continue
        visitor(node)
        children = node.children
        if children:
            stack.extend(reversed(children))


def safe_decode(data: bytes) -> str:
    """Decode UTF-8, replacing invalid bytes instead of raising."""
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return data.decode("utf-8", errors="replace")


def node_text(node, source: bytes) -> str:
    return safe_decode(source[node.start_byte:node.end_byte])


def strip_quotes(text: str) -> str:
    """Remove surrounding quote/backtick characters from a string literal."""
    return text.strip(QUOTE_CHARS)


def first_field(node, field_names: Iterable[str]):
    """First of ``field_names`` present on ``node``."""
    for name in field_names:
        child = node.child_by_field_name(name)
        if child is not None:
            return child
    return None


def first_child_of_type(node, types: set[str] | frozenset[str]):
    for child in node.children:
        if child.type in types:
            return child
    return None


def child_at(node, index: int):
    children = node.children
    if 0 <= index < len(children):
        return children[index]
    return None


def has_ancestor(node, types: set[str] | frozenset[str]) -> bool:
    """Whether ``node`` or any ancestor (via ``parent``) has a kind in ``types``."""
    current = node
    while current is not None:
        if current.type in types:
            return True
        current = current.parent
    return False


def field_or_child(node, field_name: str, index: int):
    """Named field, falling back to the positional child for older grammars."""
    child = node.child_by_field_name(field_name)
    if child is None:
        child = child_at(node, index)
    return child
