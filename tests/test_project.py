"""Tests for project scanning, batch analysis and repository handling."""

import os
import subprocess
from pathlib import Path

import pytest

from reactmap import project
from reactmap.models import ComponentRef
from reactmap.project import (
    RepositoryError,
    analyze_project,
    analyze_repository,
    clone_repository,
    project_name_from_url,
    remove_repository,
    scan_project,
)


def _write(root: Path, rel: str, text: str = "") -> Path:
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    return path


@pytest.fixture
def sample_project(tmp_path: Path) -> Path:
    _write(tmp_path, "src/App.jsx", 'import Header from "./Header";\nexport default function App() { return <Header/>; }')
    _write(tmp_path, "src/Header.tsx", "export const Header = () => <header/>;")
    _write(tmp_path, "src/api.ts", "export const get = (url: string) => fetch(url);")
    _write(tmp_path, "src/legacy.js", "module.exports = require('./api');")
    _write(tmp_path, "src/styles.css", ".a { color: red; }")
    _write(tmp_path, "node_modules/react/index.js", "module.exports = {};")
    _write(tmp_path, "build/bundle.js", "var a = 1;")
    return tmp_path


def _rel(paths, root):
    return sorted(os.path.relpath(p, root).replace(os.sep, "/") for p in paths)


class TestScanProject:
    def test_finds_source_extensions_and_skips_default_ignores(self, sample_project: Path):
        files = scan_project(sample_project)

        assert _rel(files, sample_project.resolve()) == [
            "src/App.jsx",
            "src/Header.tsx",
            "src/api.ts",
            "src/legacy.js",
        ]
        assert all(os.path.isabs(f) for f in files)

    def test_no_ignore_includes_everything(self, sample_project: Path):
        files = scan_project(sample_project, respect_ignore=False)
        rel = _rel(files, sample_project.resolve())
        assert "node_modules/react/index.js" in rel
        assert "build/bundle.js" in rel

    def test_custom_ignore_file(self, sample_project: Path):
        (sample_project / ".reactmapignore").write_text("src/legacy.js\n")
        rel = _rel(scan_project(sample_project), sample_project.resolve())

        assert "src/legacy.js" not in rel
        # Custom file replaces the defaults
        assert "node_modules/react/index.js" in rel

    def test_uppercase_extension(self, tmp_path: Path):
        _write(tmp_path, "Legacy.JSX", "")
        assert _rel(scan_project(tmp_path), tmp_path.resolve()) == ["Legacy.JSX"]

    def test_missing_root(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            scan_project(tmp_path / "nope")


class TestAnalyzeProject:
    @pytest.fixture(autouse=True)
    def _grammars(self):
        pytest.importorskip("tree_sitter_javascript")
        pytest.importorskip("tree_sitter_typescript")

    def test_only_jsx_files_reported(self, sample_project: Path):
        analysis = analyze_project(sample_project)

        names = [f.filename.replace(os.sep, "/") for f in analysis.files]
        assert names == ["src/App.jsx", "src/Header.tsx"]
        assert analysis.skipped == []

        app = analysis.files[0]
        assert app.components == [ComponentRef("App", None), ComponentRef("Header", "./Header")]

    def test_threaded_matches_sequential(self, sample_project: Path):
        sequential = analyze_project(sample_project).to_dict()
        threaded = analyze_project(sample_project, max_workers=4).to_dict()
        assert threaded == sequential

    def test_bad_file_does_not_abort(self, sample_project: Path, monkeypatch):
        monkeypatch.setattr("reactmap.analyzer.MAX_FILE_SIZE", 10_000)
        _write(sample_project, "src/Huge.jsx", "const a = <div/>;\n" * 1000)

        analysis = analyze_project(sample_project)

        assert [s.filename.replace(os.sep, "/") for s in analysis.skipped] == ["src/Huge.jsx"]
        assert len(analysis.files) == 2


class TestRepositoryHandling:
    def test_project_name_from_url(self):
        assert project_name_from_url("https://github.com/jgudo/ecommerce-react.git") == "ecommerce-react"
        assert project_name_from_url("https://github.com/org/app/") == "app"
        assert project_name_from_url("git@github.com:org/site.git") == "site"

    def test_project_name_from_empty_url(self):
        with pytest.raises(RepositoryError):
            project_name_from_url("")

    def test_clone_skipped_when_target_exists(self, tmp_path: Path, monkeypatch):
        calls = []
        monkeypatch.setattr(project.subprocess, "run", lambda *a, **kw: calls.append(a))

        assert clone_repository("https://example.com/app.git", tmp_path) == tmp_path
        assert calls == []

    def test_clone_failure_raises(self, tmp_path: Path, monkeypatch):
        def fake_run(cmd, **kwargs):
            return subprocess.CompletedProcess(cmd, 128, stdout="", stderr="fatal: repository not found")

        monkeypatch.setattr(project.subprocess, "run", fake_run)

        with pytest.raises(RepositoryError, match="repository not found"):
            clone_repository("https://example.com/missing.git", tmp_path / "missing")

    def test_clone_without_git_raises(self, tmp_path: Path, monkeypatch):
        def fake_run(cmd, **kwargs):
            raise FileNotFoundError("git")

        monkeypatch.setattr(project.subprocess, "run", fake_run)

        with pytest.raises(RepositoryError):
            clone_repository("https://example.com/app.git", tmp_path / "app")

    def test_remove_repository(self, tmp_path: Path):
        target = tmp_path / "checkout"
        _write(target, "a/b.js", "x")

        remove_repository(target)
        remove_repository(target)

        assert not target.exists()

    def test_analyze_repository_cleans_up(self, tmp_path: Path, monkeypatch):
        pytest.importorskip("tree_sitter_javascript")
        cloned = []

        def fake_clone(url, target, timeout=None):
            _write(Path(target), "src/App.jsx", "export const App = () => <div/>;")
            cloned.append(Path(target))
            return Path(target)

        monkeypatch.setattr(project, "clone_repository", fake_clone)

        analysis = analyze_repository("https://example.com/org/shop.git", workdir=tmp_path)

        assert cloned == [tmp_path / "shop"]
        assert [f.filename.replace(os.sep, "/") for f in analysis.files] == ["src/App.jsx"]
        assert not (tmp_path / "shop").exists()
        assert tmp_path.exists()

    def test_analyze_repository_keep(self, tmp_path: Path, monkeypatch):
        pytest.importorskip("tree_sitter_javascript")

        def fake_clone(url, target, timeout=None):
            _write(Path(target), "index.js", "const a = 1;")
            return Path(target)

        monkeypatch.setattr(project, "clone_repository", fake_clone)

        analysis = analyze_repository("https://example.com/org/lib", workdir=tmp_path, keep=True)

        assert analysis.files == []
        assert (tmp_path / "lib" / "index.js").exists()

    def test_analyze_repository_leaves_existing_checkout(self, tmp_path: Path, monkeypatch):
        pytest.importorskip("tree_sitter_javascript")
        existing = tmp_path / "shop"
        _write(existing, "src/App.jsx", "export const App = () => <div/>;")
        cloned = []

        def fake_clone(url, target, timeout=None):
            cloned.append(Path(target))
            return Path(target)

        monkeypatch.setattr(project, "clone_repository", fake_clone)

        analysis = analyze_repository("https://example.com/org/shop.git", workdir=tmp_path)

        assert cloned == [existing]
        assert [f.filename.replace(os.sep, "/") for f in analysis.files] == ["src/App.jsx"]
        assert (existing / "src" / "App.jsx").exists()

    def test_analyze_repository_cleans_up_on_failure(self, tmp_path: Path, monkeypatch):
        def fake_clone(url, target, timeout=None):
            Path(target).mkdir(parents=True)
            raise RepositoryError("network down")

        monkeypatch.setattr(project, "clone_repository", fake_clone)

        with pytest.raises(RepositoryError):
            analyze_repository("https://example.com/org/app.git", workdir=tmp_path)
        assert not (tmp_path / "app").exists()
