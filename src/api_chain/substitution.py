"""Placeholder substitution against the previous step's response.

URL tokens and body tokens resolve missing fields differently: a URL token
whose field is absent becomes an empty string, while a body token whose
field is absent is left as the literal ``"{name}"`` string.
"""

from __future__ import annotations

import json
import re
from typing import Any, Mapping

PLACEHOLDER_RE = re.compile(r"\{([^}]+)\}")


def _url_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(",", ":"))


def substitute_url(url: str, last_response: Any) -> str:
    """Replace each ``{name}`` token with the matching top-level field."""
    fields = last_response if isinstance(last_response, dict) else {}

    def replace(match: re.Match[str]) -> str:
        return _url_text(fields.get(match.group(1)))

    return PLACEHOLDER_RE.sub(replace, url)


def is_body_token(value: Any) -> bool:
    return isinstance(value, str) and value.startswith("{") and value.endswith("}")


def substitute_body(body: Mapping[str, Any], last_response: Any) -> dict[str, Any]:
    """Resolve top-level ``"{name}"`` string values. Nested values are not visited."""
    fields = last_response if isinstance(last_response, dict) else {}
    resolved: dict[str, Any] = {}
    for key, value in body.items():
        if is_body_token(value):
            field = value[1:-1]
            resolved[key] = fields[field] if field in fields else value
        else:
            resolved[key] = value
    return resolved
