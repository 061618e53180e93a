"""
Exported declaration detection.

A declaration counts as exported when it sits anywhere below an export
node, found by walking up ``parent`` links. Recognized shapes:

    export class Foo {}                     -> "Foo"
    export function Foo() {}                -> "Foo"
    export const Foo = () => ..., Bar = 1   -> "Foo" (function-valued only)
    export default function () {}           -> "DefaultExport"
    export default Foo;                     -> "Foo"

Anything else (``export default memo(Foo)``, object literals, ...) is
skipped without error.
"""

from .syntax import first_field, has_ancestor, node_text, walk_tree

DEFAULT_EXPORT_NAME = "DefaultExport"

EXPORT_NODE_TYPES = frozenset({
    "export_statement",
    "export_named_declaration",
    "export_default_declaration",
    "export_declaration",
})
CLASS_TYPES = frozenset({"class_declaration", "abstract_class_declaration"})
FUNCTION_TYPES = frozenset({"function_declaration", "generator_function_declaration"})
VARIABLE_TYPES = frozenset({"variable_declaration", "lexical_declaration"})
FUNCTION_EXPRESSION_TYPES = frozenset({"function", "function_expression", "generator_function"})


def is_function_like(node) -> bool:
    """Arrow functions and function expressions, looking through parentheses."""
    if node is None:
        return False
    if "arrow_function" in node.type or node.type in FUNCTION_EXPRESSION_TYPES:
        return True
    if node.type == "parenthesized_expression":
        inner = node.named_children
        if len(inner) == 1:
            return is_function_like(inner[0])
    return False


def is_exported(node) -> bool:
    return has_ancestor(node, EXPORT_NODE_TYPES)


def is_default_export(node) -> bool:
    if node.type == "export_default_declaration":
        return True
    if node.type == "export_statement":
        return any(child.type == "default" for child in node.children)
    return False


def exported_declaration_name(node, source: bytes) -> str | None:
    """Name of an exported class or function declaration."""
    if not is_exported(node):
        return None
    name_node = node.child_by_field_name("name")
    if name_node is None:
        return None
    return node_text(name_node, source)


def exported_variable_names(node, source: bytes) -> list[str]:
    """Names of function-valued declarators in an exported var/let/const."""
    if not is_exported(node):
        return []

    names = []
    for declarator in node.children:
        if declarator.type != "variable_declarator":
            continue
        name_node = declarator.child_by_field_name("name")
        value_node = declarator.child_by_field_name("value")
        if name_node is not None and is_function_like(value_node):
            names.append(node_text(name_node, source))
    return names


def default_export_name(node, source: bytes) -> str | None:
    """Component name for ``export default <declaration>``.

    tree-sitter keeps declarations under ``declaration`` and plain
    expressions under ``value``.
    """
    declaration = first_field(node, ("declaration", "value"))
    if declaration is None:
        return None

    if (
        declaration.type in FUNCTION_TYPES
        or declaration.type in CLASS_TYPES
        or declaration.type == "class"
        or is_function_like(declaration)
    ):
        name_node = declaration.child_by_field_name("name")
        if name_node is not None:
            return node_text(name_node, source)
        return DEFAULT_EXPORT_NAME

    if declaration.type == "identifier":
        return node_text(declaration, source)

    return None


def collect_local_components(tree, source: bytes) -> list[str]:
    """Exported component names of a file, deduplicated in first-seen order."""
    root = getattr(tree, "root_node", tree)
    names: list[str] = []

    def visit(node):
        node_type = node.type
        if node_type in CLASS_TYPES or node_type in FUNCTION_TYPES:
            name = exported_declaration_name(node, source)
            if name:
                names.append(name)
        elif node_type in VARIABLE_TYPES:
            names.extend(exported_variable_names(node, source))
        elif is_default_export(node):
            name = default_export_name(node, source)
            if name:
                names.append(name)

    walk_tree(root, visit)
    return list(dict.fromkeys(names))
