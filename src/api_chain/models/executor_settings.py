"""Pydantic model for executor configuration."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

DEFAULT_COMMENTS_ENDPOINT = "https://jsonplaceholder.typicode.com/comments"


class ExecutorSettings(BaseModel):
    comments_endpoint: str = Field(default=DEFAULT_COMMENTS_ENDPOINT)
    timeout: Optional[float] = None  # seconds; None waits indefinitely
