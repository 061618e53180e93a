"""Extract React component and import structure from JS/TS source trees."""

__version__ = "0.1.0"

from .analyzer import (
    FileTooLargeError,
    ParseError,
    ReactAnalyzer,
    ReactMapError,
    analyze_source,
)
from .grammars import UnsupportedLanguageError
from .models import (
    ComponentRef,
    FileAnalysisResult,
    ImportRecord,
    NamedImport,
    ProjectAnalysis,
    SkippedFile,
)
from .project import RepositoryError, analyze_project, analyze_repository, scan_project

__all__ = [
    "ComponentRef",
    "FileAnalysisResult",
    "FileTooLargeError",
    "ImportRecord",
    "NamedImport",
    "ParseError",
    "ProjectAnalysis",
    "ReactAnalyzer",
    "ReactMapError",
    "RepositoryError",
    "SkippedFile",
    "UnsupportedLanguageError",
    "analyze_project",
    "analyze_repository",
    "analyze_source",
    "scan_project",
]
