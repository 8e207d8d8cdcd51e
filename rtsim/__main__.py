"""Command-line entry point: ``python -m rtsim [CONFIG] [options]``."""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from loguru import logger

from rtsim.config import SimulationConfig, load_config
from rtsim.engine import simulate
from rtsim.errors import RTSimError
from rtsim.log import setup_logging
from rtsim.models import Task, TaskSet
from rtsim.policies import POLICIES, get_policy
from rtsim.trace import render_header, render_summary, render_trace, summarize


def example_config() -> SimulationConfig:
    """Classic two-task example: T1=5, C1=3; T2=8, C2=3.

    At t=5 task 1 is released while task 2 runs; its shorter period makes
    RMS preempt task 2.
    """
    return SimulationConfig(
        taskset=TaskSet(tasks=[Task(id=1, period=5, wcet=3), Task(id=2, period=8, wcet=3)])
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rtsim",
        description="Simulate preemptive RMS/EDF scheduling of periodic tasks on one processor.",
    )
    parser.add_argument("config", nargs="?", help="YAML task set / configuration file.")
    parser.add_argument(
        "--policy",
        choices=sorted(POLICIES) + ["both"],
        help="Policy to simulate (default: from the config, or both).",
    )
    parser.add_argument("--horizon", type=int, help="Simulate this many time units instead of the hyperperiod.")
    parser.add_argument("--max-horizon", type=int, help="Reject hyperperiods larger than this.")
    parser.add_argument("--summary", action="store_true", help="Print a per-task summary after each trace.")
    parser.add_argument("--quiet", action="store_true", help="Do not print the tick-by-tick trace.")
    parser.add_argument(
        "--gantt",
        type=str,
        help="Write a Gantt chart per policy; '{policy}' in the path is replaced by the policy name.",
    )
    parser.add_argument("--log-level", type=str, help="loguru level (default: from the config, or WARNING).")
    return parser


def _gantt_path(template: str, policy_name: str, multiple: bool) -> str:
    if "{policy}" in template:
        return template.replace("{policy}", policy_name.lower())
    if not multiple:
        return template
    path = Path(template)
    return str(path.with_name(f"{path.stem}_{policy_name.lower()}{path.suffix}"))


def run(args: argparse.Namespace) -> int:
    setup_logging(args.log_level or "WARNING")
    config = load_config(args.config) if args.config else example_config()
    if args.log_level is None:
        setup_logging(config.log_level)

    if args.policy == "both":
        config.policies = ["rms", "edf"]
    elif args.policy:
        config.policies = [args.policy]
    if args.horizon is not None:
        config.horizon = args.horizon
    if args.max_horizon is not None:
        config.max_horizon = args.max_horizon

    tasks = list(config.taskset)
    for name in config.policies:
        policy = get_policy(name)
        events = simulate(config.taskset, policy, horizon=config.horizon, max_horizon=config.max_horizon)

        print(render_header(policy.name))
        if not args.quiet:
            for line in render_trace(events, tasks):
                print(line)
        if args.summary:
            print()
            for line in render_summary(summarize(events, tasks)):
                print(line)
        print()

        if args.gantt:
            from rtsim.plotting import plot_gantt

            path = _gantt_path(args.gantt, policy.name, len(config.policies) > 1)
            plot_gantt(events, tasks, path, title=f"{policy.name} schedule")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    argv = argv if argv is not None else sys.argv[1:]
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return run(args)
    except RTSimError as e:
        logger.opt(exception=e).debug("Aborted with {}", type(e).__name__)
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
