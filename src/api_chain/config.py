"""Chain file and settings loading."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Mapping, Optional

import yaml
from pydantic import ValidationError

from api_chain.errors import ChainFileError
from api_chain.models.chain_file import ChainFile
from api_chain.models.executor_settings import ExecutorSettings

logger = logging.getLogger(__name__)

COMMENTS_ENDPOINT_ENV = "API_CHAIN_COMMENTS_ENDPOINT"
TIMEOUT_ENV = "API_CHAIN_TIMEOUT"


def load_chain_file(path: Path) -> ChainFile:
    """Load a YAML chain definition.

    The file holds an optional ``settings`` mapping and a ``steps`` list whose
    entries are discriminated on ``kind``.
    """
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ChainFileError(f"Cannot read chain file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ChainFileError(f"Chain file {path} is not valid YAML: {exc}") from exc
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ChainFileError(f"Chain file {path} must contain a mapping at the top level.")
    try:
        chain_file = ChainFile.model_validate(raw)
    except ValidationError as exc:
        raise ChainFileError(f"Chain file {path} is invalid: {exc}") from exc
    logger.debug("Loaded %d steps from %s", len(chain_file.steps), path)
    return chain_file


def load_executor_settings(
    base: Optional[ExecutorSettings] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ExecutorSettings:
    """Apply environment overrides on top of ``base``.

    Args:
        base: Settings from the chain file, or defaults when omitted.
        environ: Environment mapping. Falls back to ``os.environ``.
    """
    settings = base or ExecutorSettings()
    env = os.environ if environ is None else environ
    updates: dict[str, object] = {}

    endpoint = env.get(COMMENTS_ENDPOINT_ENV)
    if endpoint:
        updates["comments_endpoint"] = endpoint

    raw_timeout = env.get(TIMEOUT_ENV)
    if raw_timeout:
        try:
            updates["timeout"] = float(raw_timeout)
        except ValueError as exc:
            raise ValueError(f"{TIMEOUT_ENV} must be a number, got {raw_timeout!r}") from exc

    if not updates:
        return settings
    return ExecutorSettings.model_validate({**settings.model_dump(), **updates})
