"""Pydantic models for chain steps, one variant per request kind."""

from __future__ import annotations

import uuid
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from api_chain.models.step_outcome import StepFailed, StepOutcome, StepSucceeded


def new_step_id() -> str:
    return uuid.uuid4().hex


class StepBase(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(default_factory=new_step_id)
    use_last_response: bool = False
    outcome: Optional[StepOutcome] = None

    @property
    def result(self) -> Any:
        """Decoded response of the latest successful attempt.

        A response body of JSON ``null`` also reads as ``None``; use
        :attr:`attempted` or :attr:`outcome` to tell that apart from a step
        that has not run.
        """
        if isinstance(self.outcome, StepSucceeded):
            return self.outcome.result
        return None

    @property
    def failure(self) -> str | None:
        if isinstance(self.outcome, StepFailed):
            return self.outcome.failure
        return None

    @property
    def attempted(self) -> bool:
        return self.outcome is not None


class GetStep(StepBase):
    kind: Literal["GET"] = "GET"
    url: str = ""


class PostStep(StepBase):
    kind: Literal["POST"] = "POST"
    url: str = ""
    body: Optional[dict[str, Any]] = None


class GetCommentsStep(StepBase):
    kind: Literal["GET_COMMENTS"] = "GET_COMMENTS"
    related_id: str = ""  # post id for the comments endpoint

    @field_validator("related_id", mode="before")
    @classmethod
    def _post_id_as_text(cls, value: Any) -> Any:
        # YAML chain files commonly write post ids as bare numbers.
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


Step = Annotated[Union[GetStep, PostStep, GetCommentsStep], Field(discriminator="kind")]

StepKind = Literal["GET", "POST", "GET_COMMENTS"]

STEP_TYPES: dict[str, type[StepBase]] = {
    "GET": GetStep,
    "POST": PostStep,
    "GET_COMMENTS": GetCommentsStep,
}
