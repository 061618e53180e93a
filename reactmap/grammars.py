"""Grammar adapters for the JS/TS family.

Detectors only rely on node kinds and field names shared by
tree-sitter-javascript and tree-sitter-typescript, so switching grammar is a
matter of picking the right ``Language`` before parsing.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

logger = logging.getLogger(__name__)

TREE_SITTER_AVAILABLE = False
try:
    from tree_sitter import Language, Parser
    import tree_sitter_javascript
    import tree_sitter_typescript

    TREE_SITTER_AVAILABLE = True
except ImportError:
    pass


class UnsupportedLanguageError(ValueError):
    """Raised for a language tag or file extension with no grammar."""


@dataclass(frozen=True)
class Grammar:
    """One tree-sitter grammar and the files it applies to.

    ``tag`` is the host-facing grammar tag ("javascript" or "typescript");
    ``name`` distinguishes the TSX dialect, which the plain TypeScript
    grammar cannot parse.
    """

    name: str
    tag: str
    extensions: frozenset[str]
    loader: Callable[[], Any]

    def language(self) -> Any:
        return Language(self.loader())


def _load_javascript():
    return tree_sitter_javascript.language()


def _load_typescript():
    return tree_sitter_typescript.language_typescript()


def _load_tsx():
    return tree_sitter_typescript.language_tsx()


GRAMMARS: dict[str, Grammar] = {
    "javascript": Grammar(
        name="javascript",
        tag="javascript",
        extensions=frozenset({".js", ".jsx", ".mjs", ".cjs"}),
        loader=_load_javascript,
    ),
    "typescript": Grammar(
        name="typescript",
        tag="typescript",
        extensions=frozenset({".ts", ".mts", ".cts"}),
        loader=_load_typescript,
    ),
    "tsx": Grammar(
        name="tsx",
        tag="typescript",
        extensions=frozenset({".tsx"}),
        loader=_load_tsx,
    ),
}

EXTENSION_TO_LANGUAGE: dict[str, str] = {
    ext: grammar.name for grammar in GRAMMARS.values() for ext in grammar.extensions
}

# Extensions enumerated when scanning a project
SOURCE_EXTENSIONS = frozenset({".js", ".jsx", ".ts", ".tsx"})


def language_for_path(file_path: str | Path) -> str:
    """Grammar name for a file, chosen by extension."""
    suffix = Path(file_path).suffix.lower()
    try:
        return EXTENSION_TO_LANGUAGE[suffix]
    except KeyError:
        raise UnsupportedLanguageError(f"No grammar for extension {suffix!r} ({file_path})") from None


def resolve_language(language: str | None, file_path: str | Path) -> str:
    """Grammar name for a host grammar tag and file name.

    With no tag the extension decides. The "typescript" tag selects the TSX
    dialect for .tsx files.
    """
    if language is None:
        return language_for_path(file_path)
    if language == "typescript" and Path(file_path).suffix.lower() == ".tsx":
        return "tsx"
    return language


def get_grammar(language: str) -> Grammar:
    """Look up a grammar by name.

    The host tag "typescript" maps to the plain TypeScript grammar; pass
    "tsx" explicitly (or use ``language_for_path``) for .tsx sources.
    """
    try:
        return GRAMMARS[language]
    except KeyError:
        raise UnsupportedLanguageError(
            f"Unsupported language: {language} (expected one of {', '.join(GRAMMARS)})"
        ) from None


def get_parser(language: str) -> Any:
    """Create a tree-sitter parser configured for ``language``."""
    if not TREE_SITTER_AVAILABLE:
        raise RuntimeError("tree-sitter, tree-sitter-javascript and tree-sitter-typescript are required")

    grammar = get_grammar(language)
    parser = Parser()
    parser.language = grammar.language()
    logger.debug(f"Created tree-sitter parser for {grammar.name}")
    return parser
