"""CLI entrypoint."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from api_chain.chain_executor import ChainExecutor
from api_chain.config import load_chain_file, load_executor_settings
from api_chain.models.chain_run import ChainRun
from api_chain.models.step import Step
from api_chain.models.step_outcome import StepOutcome
from api_chain.rendering import render_outcome


class OutcomePrinter:
    def __init__(self, steps: list[Step]) -> None:
        self._steps = steps

    def __call__(self, outcome: StepOutcome) -> None:
        print(render_outcome(self._steps[outcome.index], outcome))
        print()


async def run_chain(executor: ChainExecutor, steps: list[Step]) -> ChainRun:
    return await executor.run(steps, on_outcome=OutcomePrinter(steps))


def main() -> None:
    parser = argparse.ArgumentParser(description="Run a chain of HTTP requests defined in a YAML file.")
    parser.add_argument("chain_file", type=str, help="Path to the chain definition")
    parser.add_argument("--comments-endpoint", type=str, default=None, help="Override the comments endpoint")
    parser.add_argument("--timeout", type=float, default=None, help="Per-request timeout in seconds")
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    try:
        chain_file = load_chain_file(Path(args.chain_file))
        settings = load_executor_settings(chain_file.settings)
    except ValueError as exc:
        parser.error(str(exc))

    updates: dict[str, object] = {}
    if args.comments_endpoint is not None:
        updates["comments_endpoint"] = args.comments_endpoint
    if args.timeout is not None:
        updates["timeout"] = args.timeout
    if updates:
        settings = settings.model_copy(update=updates)

    steps = list(chain_file.steps)
    executor = ChainExecutor(settings)

    # Async entrypoint
    import anyio

    run = anyio.run(run_chain, executor, steps)
    if run.completed:
        print(f"Chain completed: {len(run.outcomes)} step(s).")
        return
    print(f"Chain halted at step {len(run.outcomes)} of {len(steps)}.")
    raise SystemExit(1)
