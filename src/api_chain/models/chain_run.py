"""Pydantic model for the result of a chain run."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from api_chain.models.step_outcome import StepOutcome


class ChainStatus(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    HALTED = "halted"


class ChainRun(BaseModel):
    status: ChainStatus
    outcomes: list[StepOutcome] = Field(default_factory=list)

    @property
    def completed(self) -> bool:
        return self.status == ChainStatus.COMPLETED
