"""
Per-file records produced by the React structure extractor.

The JSON shape emitted by ``to_dict()`` is the wire format consumed by graph
builders downstream, so keys stay camelCase:

    {
      "filename": "src/App.jsx",
      "imports": [{"source": "react", "defaultImport": "React",
                   "namedImports": ["useState"], "namespaceImport": null}],
      "components": [{"name": "App", "source": null}]
    }
"""

import re
from dataclasses import dataclass, field

# Separator used when a named import carries an alias: "Foo as Bar"
ALIAS_SEPARATOR = re.compile(r"\s+as\s+")


@dataclass(frozen=True)
class NamedImport:
    """One specifier of ``import { original as alias } from "m"``."""

    original: str
    alias: str | None = None

    @property
    def local_name(self) -> str:
        """Name bound in the importing file."""
        return self.alias or self.original

    def __str__(self) -> str:
        if self.alias:
            return f"{self.original} as {self.alias}"
        return self.original

    @classmethod
    def parse(cls, text: str) -> "NamedImport":
        """Inverse of ``str()``: split ``"original as alias"``."""
        parts = ALIAS_SEPARATOR.split(text)
        if len(parts) > 1:
            return cls(original=parts[0], alias=parts[1])
        return cls(original=parts[0])


@dataclass
class ImportRecord:
    """One ``import`` declaration or one ``require("...")`` argument.

    ``source`` is empty only when the declaration had no resolvable source
    field. Named imports are kept as structured pairs and serialized to the
    ``"original as alias"`` text form by ``named_imports``/``to_dict()``.
    """

    source: str = ""
    default_import: str | None = None
    named: list[NamedImport] = field(default_factory=list)
    namespace_import: str | None = None

    @property
    def named_imports(self) -> list[str]:
        return [str(n) for n in self.named]

    @property
    def is_bare(self) -> bool:
        """True for records with no bindings (side-effect imports, require calls)."""
        return not (self.default_import or self.named or self.namespace_import)

    def to_dict(self) -> dict:
        return {
            "source": self.source,
            "defaultImport": self.default_import,
            "namedImports": self.named_imports,
            "namespaceImport": self.namespace_import,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ImportRecord":
        return cls(
            source=data.get("source", ""),
            default_import=data.get("defaultImport"),
            named=[NamedImport.parse(n) for n in data.get("namedImports", [])],
            namespace_import=data.get("namespaceImport"),
        )


@dataclass(frozen=True)
class ComponentRef:
    """A component name and where it comes from.

    ``source is None`` means the component is declared in the analyzed file.
    Identity is the ``(name, source)`` pair.
    """

    name: str
    source: str | None = None

    @property
    def is_local(self) -> bool:
        return self.source is None

    def to_dict(self) -> dict:
        return {"name": self.name, "source": self.source}


@dataclass
class FileAnalysisResult:
    """Structure of one file that renders JSX."""

    filename: str
    imports: list[ImportRecord] = field(default_factory=list)
    components: list[ComponentRef] = field(default_factory=list)

    @property
    def local_components(self) -> list[ComponentRef]:
        return [c for c in self.components if c.is_local]

    @property
    def imported_components(self) -> list[ComponentRef]:
        return [c for c in self.components if not c.is_local]

    def to_dict(self) -> dict:
        return {
            "filename": self.filename,
            "imports": [i.to_dict() for i in self.imports],
            "components": [c.to_dict() for c in self.components],
        }


@dataclass
class SkippedFile:
    """A file that could not be analyzed, with the reason why."""

    filename: str
    reason: str

    def to_dict(self) -> dict:
        return {"filename": self.filename, "reason": self.reason}


@dataclass
class ProjectAnalysis:
    """Results for every JSX file under a root, plus per-file failures."""

    root: str
    files: list[FileAnalysisResult] = field(default_factory=list)
    skipped: list[SkippedFile] = field(default_factory=list)

    def to_dict(self, include_skipped: bool = False) -> dict:
        d = {
            "root": self.root,
            "files": [f.to_dict() for f in self.files],
        }
        if include_skipped:
            d["skipped"] = [s.to_dict() for s in self.skipped]
        return d
