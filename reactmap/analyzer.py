"""
Per-file React structure analysis.

Pipeline for one file:

    parse -> contains JSX? --no--> None
                  |
                 yes
                  v
    imports + exported components (same tree) -> merge -> FileAnalysisResult

The grammar is chosen from the file extension and installed on the parser
before parsing. Parsers are cached per language on the analyzer instance,
so each worker thread should own its own ``ReactAnalyzer``.
"""

import logging
import os
from pathlib import Path
from typing import Any

from .component_merger import collect_imported_components, merge_components
from .export_detector import collect_local_components
from .grammars import get_parser, resolve_language
from .import_extractor import collect_imports
from .jsx_detector import contains_jsx
from .models import FileAnalysisResult, SkippedFile

logger = logging.getLogger(__name__)

# tree-sitter memory usage is a multiple of file size; override with REACTMAP_MAX_FILE_SIZE
DEFAULT_MAX_FILE_SIZE = 5_000_000  # 5MB
MAX_FILE_SIZE = int(os.environ.get("REACTMAP_MAX_FILE_SIZE", DEFAULT_MAX_FILE_SIZE))


class ReactMapError(Exception):
    """Base class for analysis failures."""


class FileTooLargeError(ReactMapError):
    """Raised when a file exceeds the size limit."""
    def __init__(self, file_path: Path, size: int, limit: int):
        self.file_path = file_path
        self.size = size
        self.limit = limit
        super().__init__(
            f"File {file_path} is {size:,} bytes, exceeds limit of {limit:,} bytes. "
            f"Set REACTMAP_MAX_FILE_SIZE environment variable to increase limit."
        )


class ParseError(ReactMapError):
    """Raised when tree-sitter parsing fails."""
    def __init__(self, file_path: Path | str, language: str, error: Exception):
        self.file_path = file_path
        self.language = language
        self.original_error = error
        super().__init__(f"Failed to parse {file_path} as {language}: {error}")


def _to_bytes(source: str | bytes) -> bytes:
    if isinstance(source, bytes):
        return source
    return source.encode("utf-8")


class ReactAnalyzer:
    """Extract imports and components from JS/TS files that render JSX."""

    def __init__(self, max_file_size: int | None = None):
        self.max_file_size = MAX_FILE_SIZE if max_file_size is None else max_file_size
        self._parsers: dict[str, Any] = {}

    def _get_parser(self, language: str) -> Any:
        if language not in self._parsers:
            self._parsers[language] = get_parser(language)
        return self._parsers[language]

    def parse(self, source: bytes, language: str, filename: str | Path = "<source>") -> Any:
        """Parse ``source`` with the grammar for ``language``."""
        parser = self._get_parser(language)
        try:
            return parser.parse(source)
        except Exception as e:
            logger.error(f"Tree-sitter parse failed for {filename} ({language}): {e}")
            raise ParseError(filename, language, e)

    def analyze_source(
        self,
        source: str | bytes,
        filename: str | Path = "<source>",
        language: str | None = None,
    ) -> FileAnalysisResult | None:
        """Analyze in-memory source text.

        Args:
            source: File contents. ``str`` is encoded as UTF-8 so that byte
                offsets match the buffer that was parsed.
            filename: Name reported in the result.
            language: Grammar name or host tag ("javascript", "typescript");
                inferred from ``filename`` when omitted.

        Returns:
            The analysis, or ``None`` when the source contains no JSX.

        Raises:
            ParseError: If tree-sitter fails on the source.
            UnsupportedLanguageError: If no grammar matches.
        """
        language = resolve_language(language, filename)
        data = _to_bytes(source)
        tree = self.parse(data, language, filename)

        if not contains_jsx(tree):
            logger.debug(f"No JSX in {filename}, skipping")
            return None

        imports = collect_imports(tree, data)
        local_components = collect_local_components(tree, data)
        imported_components = collect_imported_components(imports)

        return FileAnalysisResult(
            filename=str(filename),
            imports=imports,
            components=merge_components(local_components, imported_components),
        )

    def analyze_file(
        self,
        file_path: str | Path,
        root: str | Path | None = None,
        language: str | None = None,
    ) -> FileAnalysisResult | SkippedFile | None:
        """Analyze one file on disk.

        Failures (unreadable, too large, parse error) are returned as a
        ``SkippedFile`` so that batch runs keep going. ``filename`` is made
        relative to ``root`` when given.
        """
        file_path = Path(file_path)
        filename = str(file_path)
        if root is not None:
            try:
                filename = str(file_path.relative_to(root))
            except ValueError:
                pass

        try:
            language = resolve_language(language, file_path)

            size = file_path.stat().st_size
            if size > self.max_file_size:
                raise FileTooLargeError(file_path, size, self.max_file_size)

            source = file_path.read_bytes()
            return self.analyze_source(source, filename, language)
        except (ReactMapError, OSError, ValueError) as e:
            logger.warning(f"Skipping {filename}: {e}")
            return SkippedFile(filename=filename, reason=str(e))


def analyze_source(
    source: str | bytes,
    filename: str | Path = "<source>",
    language: str | None = None,
) -> FileAnalysisResult | None:
    """Convenience wrapper around ``ReactAnalyzer().analyze_source``."""
    return ReactAnalyzer().analyze_source(source, filename, language)
