"""Tests for plugin_guard.guards module."""

from __future__ import annotations

from pathlib import Path

import pytest

from plugin_guard.config import GuardConfig, default_config
from plugin_guard.guards import Diagnostic, Rule, RuleReport, Violation
from plugin_guard.guards.plugin_rules import PluginRule
from plugin_guard.guards.util import expand_paths, iter_php_files, read_source


def _write(path: Path, text: str) -> None:
    """Helper to write a file, creating parent dirs as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


class TestRecords:
    """Tests for the shared guard records."""

    def test_violation_fields(self, tmp_path: Path) -> None:
        v = Violation(file=tmp_path, line_no=42, kind="PluginError", line="message")
        assert v.file == tmp_path
        assert v.line_no == 42
        assert v.kind == "PluginError"
        assert v.line == "message"

    def test_rule_report_fields(self) -> None:
        r = RuleReport(name="plugin", violations=5)
        assert r.name == "plugin"
        assert r.violations == 5

    def test_diagnostic_fields(self) -> None:
        d = Diagnostic(message="bad", position=7, code="PluginError")
        assert (d.message, d.position, d.code) == ("bad", 7, "PluginError")

    def test_plugin_rule_is_a_rule(self) -> None:
        rule: Rule = PluginRule()
        assert rule.name == "plugin"


class TestReadSource:
    """Tests for read_source."""

    def test_read_source_basic(self, tmp_path: Path) -> None:
        f = tmp_path / "a.php"
        f.write_text("<?php\necho 1;\n", encoding="utf-8")
        assert read_source(f) == "<?php\necho 1;\n"

    def test_read_source_with_bom(self, tmp_path: Path) -> None:
        f = tmp_path / "a.php"
        f.write_bytes(b"\xef\xbb\xbf<?php")
        assert read_source(f) == "<?php"

    def test_read_source_nonexistent_file(self, tmp_path: Path) -> None:
        with pytest.raises(RuntimeError, match="failed to read"):
            read_source(tmp_path / "missing.php")

    def test_read_source_invalid_utf8(self, tmp_path: Path) -> None:
        f = tmp_path / "a.php"
        f.write_bytes(b"<?php \xff\xfe")
        with pytest.raises(RuntimeError, match="failed to read"):
            read_source(f)


class TestIterPhpFiles:
    """Tests for iter_php_files."""

    def test_walks_configured_directories(self, tmp_path: Path) -> None:
        _write(tmp_path / "app" / "code" / "A" / "Plugin" / "One.php", "<?php")
        _write(tmp_path / "app" / "code" / "A" / "Two.php", "<?php")
        _write(tmp_path / "app" / "code" / "A" / "notes.txt", "")
        _write(tmp_path / "lib" / "Three.php", "<?php")
        config = default_config(tmp_path)._replace(directories=("app/code",))
        assert iter_php_files(config) == [
            tmp_path / "app" / "code" / "A" / "Plugin" / "One.php",
            tmp_path / "app" / "code" / "A" / "Two.php",
        ]

    def test_skips_excluded_parts(self, tmp_path: Path) -> None:
        _write(tmp_path / "vendor" / "x" / "Plugin" / "A.php", "<?php")
        _write(tmp_path / "app" / "node_modules" / "B.php", "<?php")
        _write(tmp_path / "app" / "C.php", "<?php")
        assert iter_php_files(default_config(tmp_path)) == [tmp_path / "app" / "C.php"]

    def test_excluded_parts_are_relative_to_directory(self, tmp_path: Path) -> None:
        base = tmp_path / "vendor" / "shop"
        _write(base / "Plugin" / "A.php", "<?php")
        config = default_config(tmp_path)._replace(directories=("vendor/shop",))
        assert iter_php_files(config) == [base / "Plugin" / "A.php"]

    def test_overlapping_directories_are_deduplicated(self, tmp_path: Path) -> None:
        _write(tmp_path / "app" / "A.php", "<?php")
        config = default_config(tmp_path)._replace(directories=(".", "app"))
        assert iter_php_files(config) == [tmp_path / "app" / "A.php"]

    def test_missing_directory_is_skipped(self, tmp_path: Path) -> None:
        config = GuardConfig(
            root=tmp_path, directories=("missing",), exclude_parts=(), exclude_methods=()
        )
        assert iter_php_files(config) == []


class TestExpandPaths:
    """Tests for expand_paths."""

    def test_files_and_directories(self, tmp_path: Path) -> None:
        single = tmp_path / "Single.php"
        _write(single, "<?php")
        _write(tmp_path / "dir" / "B.php", "<?php")
        _write(tmp_path / "dir" / "vendor" / "C.php", "<?php")
        result = expand_paths(default_config(tmp_path), ["dir", str(single)])
        assert result == [single, tmp_path / "dir" / "B.php"]

    def test_explicit_file_is_kept_regardless_of_suffix(self, tmp_path: Path) -> None:
        _write(tmp_path / "plugin.phtml", "<?php")
        result = expand_paths(default_config(tmp_path), ["plugin.phtml"])
        assert result == [tmp_path / "plugin.phtml"]

    def test_missing_path(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="No such file or directory: nope.php"):
            expand_paths(default_config(tmp_path), ["nope.php"])
