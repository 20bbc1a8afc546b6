"""
Tests for PathResolver and the path-string helpers.
"""
from __future__ import annotations

from pathlib import Path

import pytest

from asm_dependencies.models import ResolutionMode, ScanContext
from asm_dependencies.pipeline.path_resolver import (
    PathResolver,
    absolute_path,
    normalize,
    relative_path,
    to_posix,
)


def _touch(path: Path, text: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    return path


def _context(root: Path, mode: ResolutionMode = ResolutionMode.ROOT, working_dir: Path | None = None):
    return ScanContext(
        root_dir=root.as_posix(),
        working_dir=(working_dir or root).as_posix(),
        mode=mode,
    )


# ─────────────────────────────────────────────────────────────────────────────
# Path helpers
# ─────────────────────────────────────────────────────────────────────────────


class TestPathHelpers:
    def test_to_posix(self):
        assert to_posix("lib\\gfx\\a.bin") == "lib/gfx/a.bin"

    def test_normalize_collapses_dots(self):
        assert normalize("/w/src/../lib/./a.inc") == "/w/lib/a.inc"

    def test_normalize_backslashes(self):
        assert normalize("/w\\lib\\a.inc") == "/w/lib/a.inc"

    def test_absolute_path_relative_operand(self):
        assert absolute_path("a.inc", "/w/src") == "/w/src/a.inc"

    def test_absolute_path_keeps_rooted_operand(self):
        assert absolute_path("/opt/inc/a.inc", "/w/src") == "/opt/inc/a.inc"

    def test_relative_path(self):
        assert relative_path("/w/lib/foo.inc", "/w") == "lib/foo.inc"
        assert relative_path("/other/x.inc", "/w") == "../other/x.inc"


# ─────────────────────────────────────────────────────────────────────────────
# PathResolver
# ─────────────────────────────────────────────────────────────────────────────


class TestPathResolver:
    @pytest.fixture
    def resolver(self):
        return PathResolver()

    def test_parent_directory_first(self, resolver, tmp_path):
        local = _touch(tmp_path / "a.inc")
        lib = tmp_path / "lib"
        _touch(lib / "a.inc")
        ctx = _context(tmp_path)
        ctx.add_search_path(lib.as_posix())
        assert resolver.resolve_file("a.inc", ctx, ctx.root_dir) == local.as_posix()

    def test_search_path_fallback(self, resolver, tmp_path):
        lib_file = _touch(tmp_path / "lib" / "only.inc")
        ctx = _context(tmp_path)
        ctx.add_search_path((tmp_path / "lib").as_posix())
        assert resolver.resolve_file("only.inc", ctx, ctx.root_dir) == lib_file.as_posix()

    def test_not_found(self, resolver, tmp_path):
        ctx = _context(tmp_path)
        assert resolver.resolve_file("missing.inc", ctx, ctx.root_dir) is None

    def test_directory_is_not_a_file_match(self, resolver, tmp_path):
        (tmp_path / "data.bin").mkdir()
        ctx = _context(tmp_path)
        assert resolver.resolve_file("data.bin", ctx, ctx.root_dir) is None

    def test_search_paths_in_registration_order(self, resolver, tmp_path):
        first = _touch(tmp_path / "one" / "x.inc")
        _touch(tmp_path / "two" / "x.inc")
        ctx = _context(tmp_path)
        ctx.add_search_path((tmp_path / "one").as_posix())
        ctx.add_search_path((tmp_path / "two").as_posix())
        assert resolver.resolve_file("x.inc", ctx, ctx.root_dir) == first.as_posix()

    def test_result_is_normalised(self, resolver, tmp_path):
        target = _touch(tmp_path / "lib" / "a.inc")
        _touch(tmp_path / "src" / "main.asm")
        ctx = _context(tmp_path / "src")
        assert resolver.resolve_file("../lib/./a.inc", ctx, ctx.root_dir) == target.as_posix()

    def test_backslash_operand(self, resolver, tmp_path):
        target = _touch(tmp_path / "lib" / "a.inc")
        ctx = _context(tmp_path)
        assert resolver.resolve_file("lib\\a.inc", ctx, ctx.root_dir) == target.as_posix()

    def test_absolute_operand(self, resolver, tmp_path):
        target = _touch(tmp_path / "abs" / "a.inc")
        ctx = _context(tmp_path / "elsewhere")
        assert resolver.resolve_file(target.as_posix(), ctx, ctx.root_dir) == target.as_posix()

    def test_working_directory_only_in_relative_mode(self, resolver, tmp_path):
        cwd = tmp_path / "cwd"
        target = _touch(cwd / "common.inc")
        src = tmp_path / "src"
        src.mkdir()

        root_ctx = _context(src, ResolutionMode.ROOT, working_dir=cwd)
        assert resolver.resolve_file("common.inc", root_ctx, root_ctx.root_dir) is None

        rel_ctx = _context(src, ResolutionMode.RELATIVE, working_dir=cwd)
        assert resolver.resolve_file("common.inc", rel_ctx, src.as_posix()) == target.as_posix()

    def test_candidates_are_unique(self, resolver, tmp_path):
        ctx = _context(tmp_path, ResolutionMode.RELATIVE)
        ctx.add_search_path(tmp_path.as_posix())
        assert resolver.candidates("a.inc", ctx, ctx.root_dir) == [(tmp_path / "a.inc").as_posix()]

    def test_resolve_directory(self, resolver, tmp_path):
        (tmp_path / "lib").mkdir()
        assert resolver.resolve_directory("lib", tmp_path.as_posix()) == (tmp_path / "lib").as_posix()
        assert resolver.resolve_directory("nope", tmp_path.as_posix()) is None
