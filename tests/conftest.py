"""Pytest configuration and fixtures."""

import pytest


class FakeNode:
    """Minimal stand-in for a tree-sitter node."""

    def __init__(self, type, children=None, fields=None, start_byte=0, end_byte=0):
        self.type = type
        self.children = children or []
        self.parent = None
        self._fields = fields or {}
        self.start_byte = start_byte
        self.end_byte = end_byte
        for child in self.children:
            child.parent = self
        for child in self._fields.values():
            if child.parent is None:
                child.parent = self

    @property
    def named_children(self):
        return [c for c in self.children if c.type.isidentifier()]

    def child_by_field_name(self, name):
        return self._fields.get(name)


@pytest.fixture
def fake_node():
    return FakeNode


@pytest.fixture
def parse():
    """Parse a snippet with a real grammar, returning (tree, source bytes)."""
    pytest.importorskip("tree_sitter_javascript")
    pytest.importorskip("tree_sitter_typescript")
    from reactmap.grammars import get_parser

    parsers = {}

    def _parse(code: str, language: str = "javascript"):
        if language not in parsers:
            parsers[language] = get_parser(language)
        source = code.encode("utf-8")
        return parsers[language].parse(source), source

    return _parse


@pytest.fixture
def analyzer():
    pytest.importorskip("tree_sitter_javascript")
    pytest.importorskip("tree_sitter_typescript")
    from reactmap.analyzer import ReactAnalyzer

    return ReactAnalyzer()
