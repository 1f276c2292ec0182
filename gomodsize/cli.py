"""CLI entrypoint for gomodsize."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError, load_config
from .graph.resolver import MaxDepthExceededError, StallPolicy
from .graph.source import GraphSourceError
from .logging import configure_logging
from .orchestrator import Orchestrator


def _positive_int(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}") from exc
    if parsed < 1:
        raise argparse.ArgumentTypeError("must be at least 1")
    return parsed


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gomodsize",
        description="List Go module dependencies by their total size on disk.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Directory to run `go mod graph` in (defaults to current directory).",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write debug logs to this file.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a .gomodsize.yml file (defaults to the one in PATH).",
    )
    parser.add_argument(
        "--module-root",
        type=Path,
        default=None,
        help="Module cache directory (defaults to GOMODCACHE or GOPATH/pkg/mod).",
    )
    parser.add_argument(
        "--max-rounds",
        type=_positive_int,
        default=None,
        help="Resolution rounds allowed before giving up.",
    )
    parser.add_argument(
        "--stall-policy",
        choices=[policy.value for policy in StallPolicy],
        default=None,
        help="How to break dependency cycles: resolve all remaining modules at once "
        "(greedy) or one at a time (first).",
    )
    parser.add_argument(
        "--measure-leaves",
        action="store_true",
        default=None,
        help="Also measure modules that only appear as dependencies.",
    )
    parser.add_argument(
        "--top",
        type=_positive_int,
        default=None,
        help="Only print the N largest modules.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for gomodsize."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        configure_logging(verbose=bool(args.verbose), log_file=args.log_file)
    except OSError as exc:
        parser.exit(1, f"gomodsize failed: cannot open log file: {exc}\n")

    target = Path(args.path).expanduser()
    try:
        if args.config is not None:
            config = load_config(args.config, explicit=True)
        else:
            config = load_config(target)
    except ConfigError as exc:
        parser.exit(1, f"gomodsize failed: {exc}\n")

    config = config.merged(
        module_root=args.module_root,
        max_rounds=args.max_rounds,
        stall_policy=args.stall_policy,
        measure_leaves=args.measure_leaves,
        top=args.top,
    )

    orchestrator = Orchestrator(config=config)
    try:
        outcome = orchestrator.run(target)
    except (GraphSourceError, MaxDepthExceededError) as exc:
        parser.exit(1, f"gomodsize failed: {exc}\n")

    sys.stdout.write(orchestrator.render(outcome))


if __name__ == "__main__":
    main(sys.argv[1:])
