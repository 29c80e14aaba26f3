"""Text rendering of steps and their outcomes."""

from __future__ import annotations

import json
from typing import Any, Optional

from api_chain.models.step import GetCommentsStep, PostStep, Step
from api_chain.models.step_outcome import StepFailed, StepOutcome


def pretty_json(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False, default=str)


def describe_step(step: Step) -> str:
    if isinstance(step, GetCommentsStep):
        return f"GET comments for post {step.related_id or '?'}"
    return f"{step.kind} {step.url or '<no url>'}"


def _render(index: int, step: Step, outcome: Optional[StepOutcome]) -> str:
    lines = [f"Step {index + 1}: {describe_step(step)}"]
    if isinstance(step, PostStep) and step.body is not None:
        lines.extend(["Request Body:", pretty_json(step.body)])
    if outcome is None:
        lines.append("(not run)")
    elif isinstance(outcome, StepFailed):
        lines.extend(["Error:", outcome.failure])
    else:
        lines.extend(["Response:", pretty_json(outcome.result)])
    return "\n".join(lines)


def render_outcome(step: Step, outcome: StepOutcome) -> str:
    return _render(outcome.index, step, outcome)


def render_step(index: int, step: Step) -> str:
    """Render a step at ``index`` with its latest outcome, if any."""
    return _render(index, step, step.outcome)


def render_chain(steps: list[Step]) -> str:
    return "\n\n".join(render_step(index, step) for index, step in enumerate(steps))
