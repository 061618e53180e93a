"""Ignore file handling (.reactmapignore + .gitignore).

Gitignore-style pattern matching for excluding paths from a project scan,
using the pathspec library.

Precedence (highest to lowest):
1. .reactmapignore patterns (explicit include/exclude)
2. .gitignore patterns (via git check-ignore, if in git repo)
3. Default patterns (if no .reactmapignore exists)
"""

from __future__ import annotations

import subprocess
from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathspec import PathSpec

IGNORE_FILENAME = ".reactmapignore"

DEFAULT_TEMPLATE = """\
# reactmap ignore patterns (gitignore syntax)
# Docs: https://git-scm.com/docs/gitignore

# Dependencies
node_modules/
bower_components/
jspm_packages/
vendor/

# Build outputs
dist/
build/
out/
.next/
.nuxt/
.output/
coverage/
storybook-static/
*.min.js
*.bundle.js
*.chunk.js

# Caches
.cache/
.parcel-cache/
.turbo/
.vite/

# Type declarations
*.d.ts

# Version control
.git/
.hg/
.svn/

# IDE/editors
.idea/
.vscode/

# Project-specific
# Add your custom patterns below
"""


GIT_TIMEOUT = 5


def _git_status(args: list[str], cwd: str | Path) -> int | None:
    """Exit code of ``git <args>`` run in ``cwd``, or None when git cannot run."""
    try:
        result = subprocess.run(["git", *args], cwd=str(cwd), capture_output=True, timeout=GIT_TIMEOUT)
    except (subprocess.TimeoutExpired, OSError):
        return None
    return result.returncode


@lru_cache(maxsize=128)
def is_git_repo(project_dir: str) -> bool:
    return _git_status(["rev-parse", "--is-inside-work-tree"], project_dir) == 0


def is_gitignored(rel_path: str, project_dir: str | Path) -> bool:
    """Whether git's ignore rules exclude ``rel_path`` (relative to ``project_dir``).

    Directories keep their trailing ``/`` so directory-only patterns in
    .gitignore apply to them.
    """
    # check-ignore exits 0 when ignored, 1 when not, 128 on error
    return _git_status(["check-ignore", "-q", "--", rel_path], project_dir) == 0


def load_ignore_patterns(project_dir: str | Path) -> "PathSpec":
    """Load patterns from .reactmapignore, or the defaults when it is missing."""
    import pathspec

    ignore_path = Path(project_dir) / IGNORE_FILENAME

    if ignore_path.exists():
        patterns = ignore_path.read_text().splitlines()
    else:
        patterns = DEFAULT_TEMPLATE.splitlines()

    return pathspec.GitIgnoreSpec.from_lines(patterns)


def ensure_ignore_file(project_dir: str | Path) -> tuple[bool, str]:
    """Create .reactmapignore with the default template if it does not exist.

    Returns:
        Tuple of (created, message)
    """
    project_path = Path(project_dir)

    if not project_path.is_dir():
        return False, f"Project directory does not exist: {project_path}"

    ignore_path = project_path / IGNORE_FILENAME
    if ignore_path.exists():
        return False, f"{IGNORE_FILENAME} already exists at {ignore_path}"

    ignore_path.write_text(DEFAULT_TEMPLATE)
    return True, f"Created {ignore_path} (node_modules/, build outputs, *.d.ts excluded)"


def _has_negation_for_file(spec: "PathSpec", rel_path: str) -> bool:
    """Whether a ``!`` pattern in ``spec`` matches ``rel_path``."""
    for pattern in spec.patterns:
        if getattr(pattern, "include", None) is False and pattern.match_file(rel_path):
            return True
    return False


def should_ignore(
    file_path: str | Path,
    project_dir: str | Path,
    spec: "PathSpec | None" = None,
    use_gitignore: bool = True,
) -> bool:
    """Check if a path should be ignored.

    Directory paths should carry a trailing ``/`` so directory-only
    patterns match.

    Args:
        file_path: Path to check (absolute or relative)
        project_dir: Root directory of the project
        spec: Optional pre-loaded PathSpec (for efficiency in loops)
        use_gitignore: Whether to also check .gitignore

    Returns:
        True if the path should be ignored
    """
    if spec is None:
        spec = load_ignore_patterns(project_dir)

    project_path = Path(project_dir)
    rel_path_str = str(file_path)
    if Path(file_path).is_absolute():
        try:
            rel_path_str = str(Path(file_path).relative_to(project_path))
        except ValueError:
            pass
        if str(file_path).endswith("/"):
            rel_path_str += "/"

    ignored = spec.match_file(rel_path_str)

    # An explicit ! pattern in .reactmapignore overrides .gitignore
    if _has_negation_for_file(spec, rel_path_str):
        return ignored

    if ignored:
        return True

    if use_gitignore and is_git_repo(str(project_path)):
        return is_gitignored(rel_path_str, project_path)

    return False
