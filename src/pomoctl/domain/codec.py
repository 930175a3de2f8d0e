"""Versioned serialization for session sequences.

Wire format (JSON)::

    {"version": 1, "items": [{"minutes": 25, "kind": "work"}, ...]}

Bare JSON lists of ``{"duration": 25, "type": "work"}`` objects (the
unversioned browser-storage shape) are accepted on decode and upgraded.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from pomoctl.domain.errors import ValidationError
from pomoctl.domain.session import Duration

SEQUENCE_FORMAT_VERSION = 1


class SequencePayload(BaseModel):
    """Envelope for an encoded session sequence."""

    version: int = SEQUENCE_FORMAT_VERSION
    items: list[Duration] = Field(min_length=1)


def _upgrade_legacy(raw: list[Any]) -> dict[str, Any]:
    items = []
    for entry in raw:
        if isinstance(entry, dict) and "duration" in entry:
            items.append({"minutes": entry["duration"], "kind": entry.get("type")})
        else:
            items.append(entry)
    return {"version": SEQUENCE_FORMAT_VERSION, "items": items}


def encode_sequence(items: Iterable[Duration]) -> str:
    """Encode Durations as the versioned JSON envelope."""
    payload = SequencePayload(items=list(items))
    return payload.model_dump_json()


def decode_sequence(raw: str) -> tuple[Duration, ...]:
    """Decode a JSON envelope (or legacy bare list) into Durations.

    Raises:
        ValidationError: On malformed JSON, an unknown version, an empty
            item list, or any invalid item.
    """
    try:
        data = json.loads(raw)
    except (TypeError, json.JSONDecodeError) as exc:
        raise ValidationError(f"Sequence is not valid JSON: {exc}") from exc

    if isinstance(data, list):
        data = _upgrade_legacy(data)
    if not isinstance(data, dict):
        raise ValidationError("Sequence payload must be a JSON object")

    version = data.get("version")
    if version != SEQUENCE_FORMAT_VERSION:
        raise ValidationError(f"Unsupported sequence format version: {version!r}")

    try:
        payload = SequencePayload.model_validate(data)
    except PydanticValidationError as exc:
        raise ValidationError(f"Invalid sequence payload: {exc.error_count()} error(s)") from exc
    return tuple(payload.items)
