"""Decode the text carried by a scanned QR code."""

from __future__ import annotations

import json
from typing import Any, Mapping, Union

from .models import Payload
from .serialize import check_value


class PayloadError(ValueError):
    """Scanned data is not a usable ``{"value": ...}`` object."""


def payload_from_mapping(data: Mapping[str, Any]) -> Payload:
    if "value" not in data:
        raise PayloadError("Payload has no 'value' field")
    try:
        return Payload(value=check_value(data["value"]))
    except ValueError as exc:
        raise PayloadError(str(exc)) from exc


def parse_payload(raw: Union[str, bytes]) -> Payload:
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8")
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise PayloadError(f"Payload is not valid JSON: {exc.msg}") from exc
    if not isinstance(data, dict):
        raise PayloadError(f"Payload must be a JSON object, got {type(data).__name__}")
    return payload_from_mapping(data)


def payload_text(value: Any) -> str:
    """Canonical text to encode into a QR code for ``value``."""
    return json.dumps({"value": check_value(value)}, ensure_ascii=False, separators=(",", ":"))
