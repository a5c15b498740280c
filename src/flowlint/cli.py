"""Command line entry point for flowlint."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from flowlint.diagnostics import has_errors
from flowlint.lint import FlowLinter, LintMode, LintOptions
from flowlint.loader import FlowLoader, FlowLoadError
from flowlint.registry import NodeTypeRegistry, RegistryLoadError
from flowlint.settings import settings

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_LINT_ERRORS = 1
EXIT_LOAD_FAILURE = 2


def build_registry(registry_file: str | None) -> NodeTypeRegistry:
    if registry_file:
        return NodeTypeRegistry.from_yaml(registry_file)
    return NodeTypeRegistry.from_settings()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="flowlint", description="Lint workflow graphs.")
    parser.add_argument("--registry", default=None, help="YAML file with node type contracts")
    parser.add_argument("--log-level", default=settings.log_level, help="logging level (default: %(default)s)")
    commands = parser.add_subparsers(dest="command", required=True)

    check = commands.add_parser("check", help="lint a flow file")
    check.add_argument("path", help="flow file (.yaml, .yml or .json) or a flow key in the flow dir")
    check.add_argument(
        "--mode",
        choices=[mode.value for mode in LintMode],
        default=settings.default_mode,
        help="flow runs every check, node skips edge and graph checks (default: %(default)s)",
    )
    check.add_argument("--strict", action="store_true", default=settings.strict)
    check.add_argument("--require-versions", action="store_true", default=settings.require_versions)
    check.add_argument("--format", choices=["text", "json"], default="text")

    types = commands.add_parser("types", help="list node types or show one contract")
    types.add_argument("node_type", nargs="?", default=None)
    return parser


def _load_flow(target: str):
    loader = FlowLoader(settings.flow_dir_path)
    if Path(target).suffix in {".yaml", ".yml", ".json"}:
        return loader.load_path(target)
    return loader.load(target)


def _run_check(args: argparse.Namespace, registry: NodeTypeRegistry) -> int:
    try:
        payload = _load_flow(args.path)
    except (FileNotFoundError, FlowLoadError) as exc:
        logger.error("%s", exc)
        return EXIT_LOAD_FAILURE

    options = LintOptions(
        mode=LintMode(args.mode),
        strict=args.strict,
        require_versions=args.require_versions,
    )
    issues = FlowLinter(registry=registry, options=options).lint(payload)

    if args.format == "json":
        print(json.dumps([issue.to_dict() for issue in issues], indent=2))
    else:
        for issue in issues:
            print(str(issue))
        print(f"{len(issues)} issue(s)")
    return EXIT_LINT_ERRORS if has_errors(issues) else EXIT_OK


def _run_types(args: argparse.Namespace, registry: NodeTypeRegistry) -> int:
    if args.node_type is None:
        for node_type in registry.supported_types():
            print(node_type)
        return EXIT_OK

    contract = registry.get(args.node_type)
    if contract is None:
        logger.error("unknown node type: %s", args.node_type)
        return EXIT_LINT_ERRORS
    print(json.dumps(contract.model_dump(mode="json"), indent=2))
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, str(args.log_level).upper(), logging.INFO))

    try:
        registry = build_registry(args.registry)
    except (FileNotFoundError, RegistryLoadError) as exc:
        logger.error("%s", exc)
        return EXIT_LOAD_FAILURE

    if args.command == "check":
        return _run_check(args, registry)
    return _run_types(args, registry)


if __name__ == "__main__":
    sys.exit(main())
