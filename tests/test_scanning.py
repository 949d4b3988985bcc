"""Tests for source file discovery."""

from __future__ import annotations

import os

import pytest

from phpdeps.errors import ConfigurationError
from phpdeps.phases.scanning import FileScanner


def _touch(root, relative: str) -> str:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("<?php\n")
    return str(path)


class TestFileScanner:
    def test_finds_php_files_recursively(self, tmp_path):
        a = _touch(tmp_path, "A.php")
        b = _touch(tmp_path, "sub/B.php")
        _touch(tmp_path, "sub/readme.md")
        assert FileScanner([str(tmp_path)]).php_files() == [a, b]

    def test_extension_case_insensitive(self, tmp_path):
        upper = _touch(tmp_path, "Upper.PHP")
        assert FileScanner([str(tmp_path)]).php_files() == [upper]

    def test_sorted_order(self, tmp_path):
        _touch(tmp_path, "b/Two.php")
        _touch(tmp_path, "a/One.php")
        _touch(tmp_path, "Zero.php")
        names = [os.path.basename(p) for p in FileScanner([str(tmp_path)]).php_files()]
        assert names == ["Zero.php", "One.php", "Two.php"]

    def test_multiple_roots_in_order(self, tmp_path):
        second = _touch(tmp_path, "second/X.php")
        first = _touch(tmp_path, "first/Y.php")
        scanner = FileScanner([str(tmp_path / "second"), str(tmp_path / "first")])
        assert scanner.php_files() == [second, first]

    def test_overlapping_roots_deduplicated(self, tmp_path):
        a = _touch(tmp_path, "A.php")
        b = _touch(tmp_path, "sub/B.php")
        scanner = FileScanner([str(tmp_path), str(tmp_path / "sub"), str(tmp_path)])
        assert scanner.php_files() == [a, b]

    def test_exclude_paths(self, tmp_path):
        kept = _touch(tmp_path, "src/Kept.php")
        _touch(tmp_path, "vendor/lib/Dropped.php")
        scanner = FileScanner([str(tmp_path)], exclude_paths=[str(tmp_path / "vendor")])
        assert scanner.php_files() == [kept]
        assert scanner.is_excluded(str(tmp_path / "vendor" / "lib" / "Dropped.php"))

    def test_result_cached(self, tmp_path):
        _touch(tmp_path, "A.php")
        scanner = FileScanner([str(tmp_path)])
        first = scanner.php_files()
        _touch(tmp_path, "B.php")
        assert scanner.php_files() is first

    def test_missing_directory(self, tmp_path):
        with pytest.raises(ConfigurationError, match="does not exist"):
            FileScanner([str(tmp_path / "missing")]).php_files()

    def test_custom_extensions(self, tmp_path):
        _touch(tmp_path, "a.php")
        inc = _touch(tmp_path, "b.inc")
        assert FileScanner([str(tmp_path)], extensions={".INC"}).php_files() == [inc]

    def test_directory_named_like_source_file(self, tmp_path):
        (tmp_path / "folder.php").mkdir()
        inner = _touch(tmp_path, "folder.php/Inner.php")
        assert FileScanner([str(tmp_path)]).php_files() == [inner]

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
    def test_symlinked_directory_not_followed(self, tmp_path):
        real = _touch(tmp_path, "real/A.php")
        os.symlink(tmp_path / "real", tmp_path / "zlink")
        assert FileScanner([str(tmp_path)]).php_files() == [real]
