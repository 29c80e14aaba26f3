"""Pydantic models for the outcome of one step attempt."""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field


class StepSucceeded(BaseModel):
    status: Literal["succeeded"] = "succeeded"
    step_id: str
    index: int
    result: Any = None


class StepFailed(BaseModel):
    status: Literal["failed"] = "failed"
    step_id: str
    index: int
    failure: str


StepOutcome = Annotated[Union[StepSucceeded, StepFailed], Field(discriminator="status")]
