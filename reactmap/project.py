"""
Project-level analysis: enumerate source files, analyze each, collect results.

Key functions:
- scan_project(root) - find all .js/.jsx/.ts/.tsx files under a root
- analyze_project(root) - analyze every file, relative filenames in results
- clone_repository(url, target) / remove_repository(path) - git checkout handling
- analyze_repository(url) - clone, analyze, clean up
"""

import logging
import os
import shutil
import subprocess
import tempfile
import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from .analyzer import ReactAnalyzer, ReactMapError
from .grammars import SOURCE_EXTENSIONS
from .models import FileAnalysisResult, ProjectAnalysis, SkippedFile

logger = logging.getLogger(__name__)

DEFAULT_CLONE_TIMEOUT = 300
CLONE_TIMEOUT = int(os.environ.get("REACTMAP_CLONE_TIMEOUT", DEFAULT_CLONE_TIMEOUT))


class RepositoryError(ReactMapError):
    """Raised when a repository cannot be acquired."""


def scan_project(
    root: str | Path,
    respect_ignore: bool = True,
    extensions: frozenset[str] = SOURCE_EXTENSIONS,
) -> list[str]:
    """
    Find all JS/TS source files under ``root``.

    Args:
        root: Project root directory
        respect_ignore: If True, honour .reactmapignore (or its defaults) and .gitignore
        extensions: File extensions to collect, lowercase with leading dot

    Returns:
        Sorted list of absolute paths
    """
    from .ignore import load_ignore_patterns, should_ignore

    root = Path(root).resolve()
    if not root.is_dir():
        raise FileNotFoundError(f"Not a directory: {root}")

    ignore_spec = load_ignore_patterns(root) if respect_ignore else None
    files = []

    for dirpath, dirnames, filenames in os.walk(root):
        rel_dir = os.path.relpath(dirpath, root)
        if ignore_spec is not None:
            # Pruning dirnames in place stops os.walk from descending
            dirnames[:] = [
                d for d in dirnames
                if not should_ignore(os.path.normpath(os.path.join(rel_dir, d)) + "/", root, ignore_spec)
            ]

        for filename in filenames:
            if os.path.splitext(filename)[1].lower() not in extensions:
                continue
            if ignore_spec is not None:
                rel_path = os.path.normpath(os.path.join(rel_dir, filename))
                if should_ignore(rel_path, root, ignore_spec):
                    logger.debug(f"Ignoring {rel_path}")
                    continue
            files.append(os.path.join(dirpath, filename))

    return sorted(files)


def analyze_project(
    root: str | Path,
    respect_ignore: bool = True,
    max_workers: int = 1,
) -> ProjectAnalysis:
    """Analyze every source file under ``root``.

    Files without JSX are left out; files that fail are recorded in
    ``skipped``. Each worker thread owns its own parsers, and results keep
    the order of ``scan_project``.
    """
    root = Path(root).resolve()
    files = scan_project(root, respect_ignore=respect_ignore)
    logger.info(f"Analyzing {len(files)} files under {root}")

    if max_workers > 1 and len(files) > 1:
        local = threading.local()

        def analyze(path: str):
            if not hasattr(local, "analyzer"):
                local.analyzer = ReactAnalyzer()
            return local.analyzer.analyze_file(path, root=root)

        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            outcomes = list(executor.map(analyze, files))
    else:
        analyzer = ReactAnalyzer()
        outcomes = [analyzer.analyze_file(path, root=root) for path in files]

    analysis = ProjectAnalysis(root=str(root))
    for outcome in outcomes:
        if isinstance(outcome, FileAnalysisResult):
            analysis.files.append(outcome)
        elif isinstance(outcome, SkippedFile):
            analysis.skipped.append(outcome)

    logger.info(
        f"Found {len(analysis.files)} files with JSX, skipped {len(analysis.skipped)} under {root}"
    )
    return analysis


def project_name_from_url(repository_url: str) -> str:
    """``https://github.com/org/app.git`` -> ``app``."""
    name = repository_url.rstrip("/").rsplit("/", 1)[-1]
    if name.endswith(".git"):
        name = name[: -len(".git")]
    if not name:
        raise RepositoryError(f"Cannot derive a project name from {repository_url!r}")
    return name


def clone_repository(repository_url: str, target_dir: str | Path, timeout: int | None = None) -> Path:
    """Shallow-clone ``repository_url`` into ``target_dir`` unless it already exists."""
    target = Path(target_dir)
    if target.exists():
        logger.debug(f"{target} already exists, not cloning")
        return target

    target.parent.mkdir(parents=True, exist_ok=True)
    try:
        result = subprocess.run(
            ["git", "clone", "--depth", "1", repository_url, str(target)],
            capture_output=True,
            text=True,
            timeout=timeout or CLONE_TIMEOUT,
        )
    except (subprocess.TimeoutExpired, FileNotFoundError, OSError) as e:
        logger.error(f"git clone of {repository_url} failed: {e}")
        raise RepositoryError(f"Failed to clone {repository_url}: {e}") from e

    if result.returncode != 0:
        logger.error(f"git clone of {repository_url} exited with {result.returncode}: {result.stderr.strip()}")
        raise RepositoryError(f"Failed to clone {repository_url}: {result.stderr.strip()}")

    return target


def remove_repository(directory: str | Path) -> None:
    """Delete a checkout if it exists."""
    path = Path(directory)
    if path.exists():
        shutil.rmtree(path, ignore_errors=True)


def analyze_repository(
    repository_url: str,
    workdir: str | Path | None = None,
    keep: bool = False,
    max_workers: int = 1,
) -> ProjectAnalysis:
    """Clone a repository, analyze it and remove the checkout.

    An existing directory named after the project under ``workdir`` is
    analyzed in place and never removed.

    Args:
        repository_url: Anything ``git clone`` accepts
        workdir: Parent directory for the checkout (a temp dir by default)
        keep: Leave the checkout on disk afterwards
        max_workers: Threads used for analysis

    Raises:
        RepositoryError: If the clone fails
    """
    project_name = project_name_from_url(repository_url)
    parent = Path(workdir) if workdir else Path(tempfile.mkdtemp(prefix="reactmap-"))
    target = parent / project_name
    preexisting = target.exists()
    if preexisting:
        logger.info(f"Using existing checkout at {target}")

    try:
        clone_repository(repository_url, target)
        return analyze_project(target, max_workers=max_workers)
    finally:
        if not keep and not preexisting:
            remove_repository(target)
            if workdir is None:
                remove_repository(parent)
