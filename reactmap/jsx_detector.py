"""JSX presence detection."""

from .syntax import walk_tree

JSX_NODE_TYPES = frozenset({"jsx_element", "jsx_self_closing_element"})


def contains_jsx(tree) -> bool:
    """True if any node of the tree is a JSX element."""
    root = getattr(tree, "root_node", tree)
    found = False

    def visit(node):
        nonlocal found
        if not found and node.type in JSX_NODE_TYPES:
            found = True

    walk_tree(root, visit)
    return found
