"""Command line interface.

    reactmap analyze ./my-app              # every JSX file under a directory
    reactmap file src/App.tsx              # a single file
    reactmap repo https://github.com/org/app.git
    reactmap init-ignore ./my-app          # write a default .reactmapignore
"""

import argparse
import json
import logging
import os
import sys

from . import __version__
from .analyzer import ReactAnalyzer, ReactMapError
from .ignore import ensure_ignore_file
from .models import SkippedFile
from .project import analyze_project, analyze_repository

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="reactmap",
        description="Extract React component and import structure from JS/TS sources",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="More logging (-vv for debug)")
    parser.add_argument("--indent", type=int, default=2, help="JSON indentation (0 for compact)")

    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze_p = subparsers.add_parser("analyze", help="Analyze all source files under a directory")
    analyze_p.add_argument("path", help="Project root")
    analyze_p.add_argument("--no-ignore", action="store_true", help="Ignore .reactmapignore/.gitignore")
    analyze_p.add_argument("--include-skipped", action="store_true", help="Report files that failed")
    analyze_p.add_argument("-j", "--jobs", type=int, default=1, help="Worker threads")

    file_p = subparsers.add_parser("file", help="Analyze a single file")
    file_p.add_argument("path", help="Source file")
    file_p.add_argument(
        "--lang",
        choices=["auto", "javascript", "typescript", "tsx"],
        default="auto",
        help="Grammar (default: from extension)",
    )

    repo_p = subparsers.add_parser("repo", help="Clone a git repository and analyze it")
    repo_p.add_argument("url", help="Repository URL")
    repo_p.add_argument(
        "--workdir",
        help="Directory to clone into (default: a temp dir); an existing checkout there is reused and kept",
    )
    repo_p.add_argument("--keep", action="store_true", help="Keep the checkout afterwards")
    repo_p.add_argument("--include-skipped", action="store_true", help="Report files that failed")
    repo_p.add_argument("-j", "--jobs", type=int, default=1, help="Worker threads")

    init_p = subparsers.add_parser("init-ignore", help="Create a default .reactmapignore")
    init_p.add_argument("path", help="Project root")

    return parser


def _configure_logging(verbosity: int) -> None:
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = getattr(logging, os.environ.get("REACTMAP_LOG_LEVEL", "WARNING").upper(), logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)


def _emit(data, indent: int) -> None:
    print(json.dumps(data, indent=indent or None))


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        if args.command == "analyze":
            analysis = analyze_project(args.path, respect_ignore=not args.no_ignore, max_workers=args.jobs)
            _emit(analysis.to_dict(include_skipped=args.include_skipped), args.indent)

        elif args.command == "file":
            language = None if args.lang == "auto" else args.lang
            result = ReactAnalyzer().analyze_file(args.path, language=language)
            if isinstance(result, SkippedFile):
                print(f"Error: {result.reason}", file=sys.stderr)
                return 1
            _emit(result.to_dict() if result else None, args.indent)

        elif args.command == "repo":
            analysis = analyze_repository(
                args.url, workdir=args.workdir, keep=args.keep, max_workers=args.jobs
            )
            _emit(analysis.to_dict(include_skipped=args.include_skipped), args.indent)

        elif args.command == "init-ignore":
            created, message = ensure_ignore_file(args.path)
            print(message)
            return 0 if created else 1

    except (ReactMapError, OSError) as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
