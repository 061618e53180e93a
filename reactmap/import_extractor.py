"""
Import extraction for JS/TS syntax trees.

Handles:
- ``import React from "react"``                  default import
- ``import { a, b as C } from "m"``              named imports, "b as C" alias form
- ``import * as NS from "m"``                    namespace import, "* as NS"
- ``import "./styles.css"``                      bare side-effect import
- ``import fs = require("fs")``                  TypeScript import-require
- ``const x = require("m")``                     CommonJS require, at any depth

Declarations are returned in document order, followed by require calls in
document order.
"""

from .models import ImportRecord, NamedImport
from .syntax import (
    child_at,
    field_or_child,
    first_child_of_type,
    first_field,
    node_text,
    strip_quotes,
    walk_tree,
)

IMPORT_DECLARATION_TYPES = frozenset({"import_declaration", "import_statement"})
SOURCE_FIELDS = ("source", "module_name")


def _default_import_name(clause, source: bytes) -> str | None:
    """Default binding of an import_clause.

    Some grammar versions expose it as the ``name`` field; tree-sitter-javascript
    keeps it as a bare leading identifier.
    """
    name_node = clause.child_by_field_name("name")
    if name_node is None:
        name_node = first_child_of_type(clause, {"identifier"})
    if name_node is None:
        return None
    return node_text(name_node, source)


def _namespace_import_text(node, source: bytes) -> str:
    star = child_at(node, 0)
    alias = child_at(node, 2)
    if star is not None and alias is not None:
        return f"{node_text(star, source)} as {node_text(alias, source)}"
    # Unexpected shape: keep the raw text
    return node_text(node, source)


def parse_import_declaration(import_node, source: bytes) -> ImportRecord:
    """Build an ImportRecord from one import declaration node."""
    record = ImportRecord()

    source_node = first_field(import_node, SOURCE_FIELDS)
    if source_node is not None:
        record.source = strip_quotes(node_text(source_node, source))

    def visit(node):
        node_type = node.type

        if node_type == "import_clause":
            name = _default_import_name(node, source)
            if name:
                record.default_import = name

        elif node_type == "import_specifier":
            name_node = node.child_by_field_name("name")
            alias_node = node.child_by_field_name("alias")
            if name_node is not None:
                record.named.append(NamedImport(
                    original=node_text(name_node, source),
                    alias=node_text(alias_node, source) if alias_node is not None else None,
                ))

        elif node_type == "namespace_import":
            record.namespace_import = _namespace_import_text(node, source)

        elif node_type == "import_identifier":
            if not record.default_import:
                record.default_import = node_text(node, source)

        elif node_type == "import_require_clause":
            # import fs = require("fs")
            if not record.default_import:
                ident = first_child_of_type(node, {"identifier"})
                if ident is not None:
                    record.default_import = node_text(ident, source)
            if not record.source:
                require_source = node.child_by_field_name("source")
                if require_source is not None:
                    record.source = strip_quotes(node_text(require_source, source))

    walk_tree(import_node, visit)
    return record


def extract_require_calls(root, source: bytes) -> list[str]:
    """Module paths passed as string literals to ``require(...)``.

    Template literals and computed arguments are ignored.
    """
    paths: list[str] = []

    def visit(node):
        if node.type != "call_expression":
            return
        callee = field_or_child(node, "function", 0)
        if callee is None or callee.type != "identifier":
            return
        if node_text(callee, source) != "require":
            return
        args = field_or_child(node, "arguments", 1)
        if args is None:
            return
        for argument in args.children:
            if argument.type == "string":
                paths.append(strip_quotes(node_text(argument, source)))

    walk_tree(root, visit)
    return paths


def collect_imports(tree, source: bytes) -> list[ImportRecord]:
    """All import declarations then all require calls of a parsed file."""
    root = getattr(tree, "root_node", tree)
    imports: list[ImportRecord] = []

    def visit(node):
        if node.type in IMPORT_DECLARATION_TYPES:
            imports.append(parse_import_declaration(node, source))

    walk_tree(root, visit)

    for path in extract_require_calls(root, source):
        imports.append(ImportRecord(source=path))

    return imports
