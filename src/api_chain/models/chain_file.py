"""Pydantic model for a chain definition file."""

from __future__ import annotations

from pydantic import BaseModel, Field

from api_chain.models.executor_settings import ExecutorSettings
from api_chain.models.step import Step


class ChainFile(BaseModel):
    settings: ExecutorSettings = Field(default_factory=ExecutorSettings)
    steps: list[Step] = Field(default_factory=list)
