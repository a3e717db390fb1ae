#!/usr/bin/env python3
"""Command-line runner for the plugin guard rules.

Run with: plugin-guard [--root DIR] [--config FILE] [--exclude NAME] [PATH ...]
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import TypedDict

from plugin_guard._console import (
    log_config,
    log_error,
    log_failed,
    log_header,
    log_info,
    log_passed,
    log_rule_summary,
    log_violation,
)
from plugin_guard.config import GuardConfig
from plugin_guard.config_loader import load_guard_config
from plugin_guard.guards import Rule, RuleReport, Violation
from plugin_guard.guards.plugin_rules import PluginRule
from plugin_guard.guards.util import expand_paths, iter_php_files

_MAX_TEXT = 180


class ParsedArgs(TypedDict):
    """Parsed command-line arguments."""

    root: str
    config: str | None
    exclude: list[str]
    paths: list[str]


def _extract_str_list(value: list[str] | None, label: str) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        msg = f"Expected list for {label}, got {type(value).__name__}"
        raise TypeError(msg)
    items: list[str] = []
    for item in value:
        if not isinstance(item, str):
            msg = f"Expected str items for {label}, got {type(item).__name__}"
            raise TypeError(msg)
        items.append(item)
    return items


def _extract_args(args: argparse.Namespace) -> ParsedArgs:
    """Extract and validate arguments from Namespace.

    Raises:
        TypeError: If argument types are incorrect.
    """
    root = args.root
    if not isinstance(root, str):
        msg = f"Expected str for root, got {type(root).__name__}"
        raise TypeError(msg)

    config = args.config
    if config is not None and not isinstance(config, str):
        msg = f"Expected str or None for config, got {type(config).__name__}"
        raise TypeError(msg)
    config_typed: str | None = config

    return {
        "root": root,
        "config": config_typed,
        "exclude": _extract_str_list(args.exclude, "exclude"),
        "paths": _extract_str_list(args.paths, "paths"),
    }


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="plugin-guard",
        description="Check interceptor plugin methods in PHP sources",
    )
    parser.add_argument(
        "--root",
        type=str,
        default=".",
        help="Project root; relative paths and config lookup start here (default: .)",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Config file (default: plugin-guard.toml or pyproject.toml under the root)",
    )
    parser.add_argument(
        "--exclude",
        type=str,
        action="append",
        default=None,
        metavar="NAME",
        help="Method name to skip; may be repeated",
    )
    parser.add_argument(
        "paths",
        type=str,
        nargs="*",
        metavar="PATH",
        help="Files or directories to check (default: configured directories)",
    )
    return parser.parse_args(argv)


def _format_location(violation: Violation, root: Path) -> str:
    path = violation.file
    rel_path = path.relative_to(root) if path.is_relative_to(root) else path
    return f"{rel_path}:{violation.line_no}"


def run_guards(config: GuardConfig, files: list[Path] | None = None) -> int:
    """Run all guard rules and return exit code."""
    targets = iter_php_files(config) if files is None else files
    rules: list[Rule] = [PluginRule(exclude=config.exclude_methods)]

    log_header("Plugin guard")
    log_config("Root", str(config.root))
    log_config("Files", len(targets))
    if config.exclude_methods:
        log_config("Excluded methods", ", ".join(config.exclude_methods))

    reports: list[RuleReport] = []
    violations: list[Violation] = []
    for rule in rules:
        res = rule.run(targets)
        reports.append(RuleReport(name=rule.name, violations=len(res)))
        violations.extend(res)

    log_info("Guard rule summary:")
    for rep in reports:
        log_rule_summary(rep.name, rep.violations)

    if violations:
        log_failed("Guard checks failed:")
        for v in violations:
            text = v.line[: _MAX_TEXT - 3] + "..." if len(v.line) > _MAX_TEXT else v.line
            log_violation(_format_location(v, config.root), v.kind, text)
        return 2

    log_passed("Guard checks passed: no violations found.")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the plugin-guard command."""
    args = _extract_args(parse_args(argv))
    root = Path(args["root"]).resolve()
    config_path = Path(args["config"]).resolve() if args["config"] is not None else None

    try:
        config = load_guard_config(root, config_path)
        if args["exclude"]:
            config = config._replace(
                exclude_methods=config.exclude_methods + tuple(args["exclude"])
            )
        files = expand_paths(config, args["paths"]) if args["paths"] else None
    except (FileNotFoundError, ValueError) as exc:
        log_error(f"ERROR: {exc}")
        return 1

    return run_guards(config, files)


if __name__ == "__main__":
    raise SystemExit(main())
