"""Tests for path normalisation."""

from __future__ import annotations

import os

import pytest

from phpdeps.errors import PathError
from phpdeps.paths import normalize_path, normalize_path_without_resolving_symlinks


class TestNormalizePath:
    def test_empty_path(self):
        with pytest.raises(PathError):
            normalize_path("")
        with pytest.raises(PathError):
            normalize_path_without_resolving_symlinks("")

    def test_dot_segments(self):
        assert normalize_path_without_resolving_symlinks("/a/./b/../c") == "/a/c"

    def test_duplicate_separators(self):
        assert normalize_path_without_resolving_symlinks("/a//b///c/") == "/a/b/c"

    def test_parent_above_root(self):
        assert normalize_path_without_resolving_symlinks("/../a") == "/a"

    def test_relative_to_cwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        expected = os.path.join(os.getcwd(), "x", "y.php")
        assert normalize_path_without_resolving_symlinks("x/y.php") == expected
        assert normalize_path("x/y.php") == expected

    def test_home_expansion(self, monkeypatch):
        monkeypatch.setenv("HOME", "/home/tester")
        assert normalize_path_without_resolving_symlinks("~/src/A.php") == "/home/tester/src/A.php"

    def test_backslashes_converted(self):
        assert normalize_path_without_resolving_symlinks("/a\\b\\c.php") == "/a/b/c.php"

    def test_missing_path_normalised_lexically(self):
        assert normalize_path("/does/not/../exist.php") == "/does/exist.php"

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
    def test_existing_symlink_resolved(self, tmp_path):
        target = tmp_path / "target.php"
        target.write_text("<?php\n")
        link = tmp_path / "link.php"
        os.symlink(target, link)

        assert normalize_path(str(link)) == os.path.realpath(target)
        assert normalize_path_without_resolving_symlinks(str(link)).endswith("link.php")
