"""In-memory editing of a chain of steps."""

from __future__ import annotations

import json
import logging
from typing import Any, Iterable

from api_chain.errors import InvalidBodyError
from api_chain.models.step import STEP_TYPES, GetStep, PostStep, Step, StepKind


logger = logging.getLogger(__name__)


class ChainEditor:
    """Owns an ordered list of steps and applies edits to it.

    The list in :attr:`steps` is what gets handed to
    :class:`~api_chain.chain_executor.ChainExecutor`; edits made while a run
    is in progress are the caller's responsibility.
    """

    def __init__(self, steps: Iterable[Step] | None = None) -> None:
        self.steps: list[Step] = list(steps or [])

    def add_step(self) -> GetStep:
        step = GetStep()
        self.steps.append(step)
        return step

    def get(self, step_id: str) -> Step:
        return self.steps[self._index_of(step_id)]

    def remove_step(self, step_id: str) -> None:
        del self.steps[self._index_of(step_id)]

    def update_step(self, step_id: str, **updates: Any) -> Step:
        """Set fields on a step. Fields must exist on the step's current kind."""
        step = self.get(step_id)
        for name in ("id", "kind", "outcome"):
            if name in updates:
                raise ValueError(f"Field {name!r} cannot be edited.")
        unknown = [name for name in updates if name not in type(step).model_fields]
        if unknown:
            raise ValueError(f"Step kind {step.kind} has no field(s): {', '.join(sorted(unknown))}")
        # Validate every update before touching the step so a rejected edit leaves it unchanged.
        candidate = type(step).model_validate({**step.model_dump(), **updates})
        for name in updates:
            setattr(step, name, getattr(candidate, name))
        return step

    def change_kind(self, step_id: str, kind: StepKind) -> Step:
        """Replace a step with one of another kind, keeping its identity.

        ``url`` carries over between GET and POST. The latest outcome and the
        ``use_last_response`` flag are kept.
        """
        index = self._index_of(step_id)
        current = self.steps[index]
        if current.kind == kind:
            return current
        step_type = STEP_TYPES.get(kind)
        if step_type is None:
            raise ValueError(f"Unknown step kind: {kind}")
        data: dict[str, Any] = {
            "id": current.id,
            "use_last_response": current.use_last_response,
            "outcome": current.outcome,
        }
        url = getattr(current, "url", None)
        if url is not None and "url" in step_type.model_fields:
            data["url"] = url
        replacement: Step = step_type(**data)  # type: ignore[assignment]
        self.steps[index] = replacement
        return replacement

    def set_body_text(self, step_id: str, text: str) -> PostStep:
        """Parse ``text`` as the JSON body of a POST step.

        Text that is not a JSON object is rejected and the current body is kept.
        """
        step = self.get(step_id)
        if not isinstance(step, PostStep):
            raise ValueError(f"Step {step_id} is {step.kind}; only POST steps have a body.")
        try:
            parsed = json.loads(text)
        except json.JSONDecodeError as exc:
            logger.error("Invalid JSON input for step %s: %s", step_id, exc)
            raise InvalidBodyError(f"Invalid JSON input: {exc}") from exc
        if not isinstance(parsed, dict):
            logger.error("Body for step %s must be a JSON object, got %s", step_id, type(parsed).__name__)
            raise InvalidBodyError("Request body must be a JSON object.")
        step.body = parsed
        return step

    def _index_of(self, step_id: str) -> int:
        for index, step in enumerate(self.steps):
            if step.id == step_id:
                return index
        raise KeyError(f"Step not found: {step_id}")
