from __future__ import annotations

import argparse
import logging
import sys
from contextlib import ExitStack

from .config import DEFAULT_GENERATIONS, RunConfig, load_run_config, resolve_run_config, save_run_config
from .engine import Automaton
from .errors import InvalidConfiguration
from .output import GenerationLog
from .render import describe_run, render_row, render_rule

logger = logging.getLogger(__name__)

_CONFIG_FLAGS = ("rule", "population", "generations", "output", "quiet", "verbose", "seed")


class _StoreOnce(argparse.Action):
    """Store a value, refusing a second occurrence of the same option."""

    def __call__(self, parser, namespace, values, option_string=None):
        if getattr(namespace, self.dest) is not None:
            raise argparse.ArgumentError(self, "may only be given once")
        setattr(namespace, self.dest, values)


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ecell",
        description="Produces elementary cellular automata. Any rule or population not given is chosen at random.",
    )
    parser.add_argument("-r", "--rule", action=_StoreOnce, type=int, default=None, help="rule number (8-bit unsigned int)")
    parser.add_argument("-p", "--population", action=_StoreOnce, type=int, default=None, help="initial population (32-bit unsigned int)")
    parser.add_argument(
        "-n",
        "--generations",
        action=_StoreOnce,
        type=int,
        default=None,
        help=f"number of generations after the initial one (default {DEFAULT_GENERATIONS})",
    )
    parser.add_argument("-o", "--output", action=_StoreOnce, default=None, help="write each generation's value to this file")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("-q", "--quiet", action="store_true", default=None, help="no generation output on stdout")
    mode.add_argument("-v", "--verbose", action="store_true", default=None, help="print run parameters and the rule chart")
    parser.add_argument("--seed", type=int, default=None, help="seed for the random rule and population")
    parser.add_argument("--config", default=None, help="path to a run config YAML")
    parser.add_argument("--save-config", default=None, help="write the resolved run config to this YAML path")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser


def run_automaton(config: RunConfig) -> int:
    """Print and record every generation of a resolved run config."""
    automaton = Automaton.configure(config.rule, config.population)

    with ExitStack() as stack:
        log = stack.enter_context(GenerationLog(config.output)) if config.output else None

        if config.verbose:
            print(describe_run(config))
            print(f"The rule {config.rule} corresponds to...")
            print(render_rule(config.rule))
            print()
            print("Generating...")
            if log is not None:
                log.write_header(config.population, config.rule, config.generations)

        for row in automaton.generations(config.generations):
            if not config.quiet:
                print(render_row(row, automaton.width))
            if log is not None:
                log.write_row(row)

    logger.info("finished after %d generations", automaton.generation)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    overrides = {}
    for key in _CONFIG_FLAGS:
        value = getattr(args, key)
        if value is not None:
            overrides[key] = value

    try:
        config = resolve_run_config(load_run_config(args.config, overrides))
        logger.info("rule=%d population=%d generations=%d", config.rule, config.population, config.generations)
        if args.save_config:
            save_run_config(config, args.save_config)
        return run_automaton(config)
    except InvalidConfiguration as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
