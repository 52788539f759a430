"""CLI entry-point for route_audit.

Usage:
    python -m route_audit [<project-root>] [--out DIR] [--config FILE] [--ci]
    python -m route_audit extract [<project-root>] [--out DIR] [--config FILE] [--ci]
    python -m route_audit modules [<project-root>] [--config FILE] [--json]
    python -m route_audit validate <routes-complete.json>
"""

from __future__ import annotations

import argparse
import logging
import sys
import traceback
from pathlib import Path

import jsonschema
from rich.console import Console

from route_audit import __version__
from route_audit.api import extract_routes, find_routing_files
from route_audit.contracts.load import validate_file
from route_audit.core.config import RouteAuditConfig
from route_audit.reports.emitter import RouteReport, write_artifacts
from route_audit.utils.exit_codes import ExitCode
from route_audit.utils.json_norm import stable_json_dump

_KNOWN_COMMANDS = {"extract", "modules", "validate"}

# Options whose next token is their value, never a command or project root.
_VALUE_OPTIONS = {"--config", "--out", "--app-root", "--routing-file"}


def _add_extract_args(p: argparse.ArgumentParser, verbose_default: object = False) -> None:
    p.add_argument(
        "path",
        nargs="?",
        type=Path,
        default=Path("."),
        help="Project root (default: current directory).",
    )
    p.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML config file (default: <root>/.route-audit.yaml when present).",
    )
    p.add_argument(
        "--out",
        dest="out_dir",
        type=Path,
        default=None,
        help="Directory for routes*.json artifacts (default: project root).",
    )
    p.add_argument(
        "--app-root",
        dest="app_root",
        type=Path,
        default=None,
        help="Application source root, relative to the project (default: src/app).",
    )
    p.add_argument(
        "--routing-file",
        dest="root_routing_file",
        type=Path,
        default=None,
        help="Root routing module (default: src/app/app-routing.module.ts).",
    )
    p.add_argument(
        "--ci",
        "--deterministic",
        dest="ci_mode",
        action="store_true",
        default=None,
        help="Fix the generatedAt timestamp so artifacts are byte-identical.",
    )
    p.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=False,
        help="Suppress the console report.",
    )
    _add_verbose(p, verbose_default)


def _add_verbose(p: argparse.ArgumentParser, default: object = False) -> None:
    p.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=default,
        help="Log traversal details to stderr.",
    )


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="route-audit",
        description="Static route inventory for single-page applications.",
    )
    p.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    _add_verbose(p)
    sub = p.add_subparsers(dest="command")

    # ── extract ────────────────────────────────────────────────────
    ext_p = sub.add_parser(
        "extract",
        help="Extract routes and write routes*.json artifacts.",
    )
    _add_extract_args(ext_p, argparse.SUPPRESS)

    # ── modules ────────────────────────────────────────────────────
    mod_p = sub.add_parser(
        "modules",
        help="List every routing module file under the app root.",
    )
    mod_p.add_argument("path", nargs="?", type=Path, default=Path("."))
    mod_p.add_argument("--config", type=Path, default=None)
    mod_p.add_argument("--app-root", dest="app_root", type=Path, default=None)
    mod_p.add_argument(
        "--json",
        dest="json_out",
        action="store_true",
        default=False,
        help="Print the list as JSON to stdout.",
    )
    _add_verbose(mod_p, argparse.SUPPRESS)

    # ── validate ───────────────────────────────────────────────────
    val_p = sub.add_parser(
        "validate",
        help="Validate a routes-complete.json artifact against the bundled schema.",
    )
    val_p.add_argument("instance", type=Path, help="Path to routes-complete.json.")
    _add_verbose(val_p, argparse.SUPPRESS)

    return p


def _build_default_parser() -> argparse.ArgumentParser:
    """Parser for default positional mode (``route-audit <root> ...``).

    Subparsers would otherwise treat the project root as a command name.
    """
    p = argparse.ArgumentParser(
        prog="route-audit",
        description="Static route inventory for single-page applications.",
    )
    _add_extract_args(p)
    p.set_defaults(command="extract")
    return p


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _load_config(args: argparse.Namespace) -> RouteAuditConfig:
    root = Path(args.path)
    if args.config is not None:
        cfg = RouteAuditConfig.from_yaml(args.config, project_root=root)
    else:
        cfg = RouteAuditConfig.from_root(root)
    return cfg.with_overrides(
        app_root=getattr(args, "app_root", None),
        root_routing_file=getattr(args, "root_routing_file", None),
        out_dir=getattr(args, "out_dir", None),
        ci_mode=getattr(args, "ci_mode", None),
    )


def _print_error(exc: BaseException) -> None:
    print(f"\n❌ ERROR: {exc}", file=sys.stderr)
    traceback.print_exception(type(exc), exc, exc.__traceback__, file=sys.stderr)


# ── handlers ────────────────────────────────────────────────────────


def _handle_extract(args: argparse.Namespace) -> int:
    try:
        cfg = _load_config(args)
        result = extract_routes(config=cfg)
        written = write_artifacts(result, cfg.out_path)
    except Exception as e:
        _print_error(e)
        return ExitCode.ERROR

    report = RouteReport(
        Console(quiet=args.quiet),
        sample_size=cfg.sample_size,
        example_lookups=cfg.example_lookups,
    )
    report.render(result, written)
    return ExitCode.SUCCESS


def _handle_modules(args: argparse.Namespace) -> int:
    try:
        cfg = _load_config(args)
        files = find_routing_files(config=cfg)
    except Exception as e:
        _print_error(e)
        return ExitCode.ERROR

    if args.json_out:
        stable_json_dump(files, sys.stdout)
    else:
        report = RouteReport(Console())
        report.routing_files(files)
    return ExitCode.SUCCESS


def _handle_validate(args: argparse.Namespace) -> int:
    try:
        validate_file(args.instance)
    except jsonschema.ValidationError as e:
        print(f"FAIL: {e.message}", file=sys.stderr)
        return ExitCode.ERROR
    except Exception as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return ExitCode.ERROR
    print("OK")
    return ExitCode.SUCCESS


def _first_positional(argv: list[str]) -> str | None:
    tokens = iter(argv)
    for token in tokens:
        if token in _VALUE_OPTIONS:
            next(tokens, None)
        elif not token.startswith("-"):
            return token
    return None


def main(argv: list[str] | None = None) -> int:
    """Entry-point — returns an exit code (0 = success, 1 = error)."""
    effective_argv = list(argv) if argv is not None else sys.argv[1:]

    # The first positional token picks the parser: a known command, or a
    # project root for the default extract mode.
    first_positional = _first_positional(effective_argv)
    if first_positional in _KNOWN_COMMANDS or "--version" in effective_argv:
        args = _build_parser().parse_args(effective_argv)
    else:
        args = _build_default_parser().parse_args(effective_argv)

    _configure_logging(args.verbose)

    if args.command == "validate":
        return _handle_validate(args)
    if args.command == "modules":
        return _handle_modules(args)
    return _handle_extract(args)


if __name__ == "__main__":
    raise SystemExit(main())
