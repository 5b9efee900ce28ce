#!/usr/bin/env python
"""``upkeep`` command line: run the user's maintenance commands as steps."""
from __future__ import annotations

import argparse
import functools
import json
import logging
import sys
from pathlib import Path
from typing import List

from pydantic import ValidationError

from .command import run_if_installed
from .config import RunConfig, load_config
from .context import ExecutionContext
from .errors import PromptError, RunAborted
from .interrupt import handle_interrupts
from .runner import Runner
from .step import Step
from .summary import exit_code


logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("~/.config/upkeep/config.json")


def _parse_args(argv: List[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="upkeep",
        description="Run maintenance steps and report how each one went.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_CONFIG_PATH,
        help=f"Path to the JSON config file (default: {DEFAULT_CONFIG_PATH}).",
    )
    # Flags default to None so an unset flag does not override the config file.
    parser.add_argument("--dry-run", "-n", action="store_true", default=None, help="Print commands instead of running them.")
    parser.add_argument("--no-retry", action="store_true", default=None, help="Do not ask to retry failed steps.")
    parser.add_argument("--verbose", "-v", action="store_true", default=None, help="Verbose output (also shows skipped steps).")
    parser.add_argument("--show-skipped", action="store_true", default=None, help="Show skipped steps in the summary.")
    parser.add_argument("--only", nargs="+", metavar="STEP", default=None, help="Run only these steps.")
    parser.add_argument("--disable", nargs="+", metavar="STEP", default=None, help="Do not run these steps.")
    parser.add_argument("--ignore-failure", nargs="+", metavar="STEP", dest="ignore_failures", default=None,
                        help="Treat failures of these steps as non-fatal.")
    return parser.parse_args(argv)


def run(ctx: ExecutionContext) -> Runner:
    """Run every configured custom command as a ``custom_commands`` step."""
    runner = Runner(ctx)
    config = ctx.config
    for key, argv in config.commands.items():
        runner.execute(
            Step.CUSTOM_COMMANDS,
            key,
            functools.partial(run_if_installed, argv, dry_run=config.dry_run),
        )
    return runner


def main(argv: List[str] | None = None) -> int:
    args = _parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config: RunConfig = load_config(
            args.config.expanduser(),
            dry_run=args.dry_run,
            no_retry=args.no_retry,
            verbose=args.verbose,
            show_skipped=args.show_skipped,
            only=args.only,
            disable=args.disable,
            ignore_failures=args.ignore_failures,
        )
    except (ValidationError, json.JSONDecodeError) as e:
        logger.error("Invalid configuration: %s", e)
        print(f"upkeep: invalid configuration: {e}", file=sys.stderr)
        return 2

    ctx = ExecutionContext(config=config)

    try:
        with handle_interrupts(ctx.interrupts):
            runner = run(ctx)
    except RunAborted as e:
        print(f"upkeep: {e}", file=sys.stderr)
        return 2
    except PromptError as e:
        logger.error("Cannot ask whether to retry: %s", e)
        print(f"upkeep: {e}", file=sys.stderr)
        return 2

    ctx.terminal.print_summary(runner.report)
    return exit_code(runner.report)


if __name__ == "__main__":
    sys.exit(main())
