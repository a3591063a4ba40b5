from __future__ import annotations

import hashlib
import json
import math
import platform
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Mapping

from .models import Position, Sheet, Slot, Variation


def ensure_parent(path: Path, *, mkdirs: bool) -> None:
    parent = path.parent
    if not parent.exists() and mkdirs:
        parent.mkdir(parents=True, exist_ok=True)


def write_json(path: Path, data: object, *, mkdirs: bool, overwrite: bool) -> None:
    if path.exists() and not overwrite:
        raise FileExistsError(
            f"Refusing to overwrite existing file without --force: {path}"
        )
    ensure_parent(path, mkdirs=mkdirs)
    text = json.dumps(data, ensure_ascii=True, sort_keys=True, indent=2)
    path.write_text(text + "\n", encoding="utf-8")


def build_run_meta(*, app_version: str, params_hash: str | None) -> Dict[str, object]:
    return {
        "app_version": app_version,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "python_version": sys.version.split()[0],
        "platform": platform.system().lower(),
        "params_hash": params_hash,
        "hash_algorithm": "sha256",
    }


def check_value(value: Any) -> Any:
    """Slot values are strings or finite numbers; booleans are not numbers here."""
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise ValueError(f"Slot value must be a string or number, got {value!r}")
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError(f"Slot value must be a finite number, got {value!r}")
    return value


def variation_from_dict(data: Mapping[str, Any]) -> Variation:
    """Read a catalog entry; accepts both ``imageURL`` and ``image_url``."""
    if not isinstance(data, Mapping):
        raise ValueError(f"Variation must be a mapping, got {type(data).__name__}")
    if "value" not in data:
        raise ValueError(f"Variation is missing 'value': {dict(data)!r}")
    return Variation(
        value=check_value(data["value"]),
        label=str(data.get("label", "")),
        description=str(data.get("description", "")),
        image_url=str(data.get("imageURL", data.get("image_url", ""))),
    )


def slot_to_dict(slot: Slot) -> Dict[str, Any]:
    return {
        "value": slot.value,
        "label": slot.label,
        "description": slot.description,
        "imageURL": slot.image_url,
        "position": {"x": slot.position.x, "y": slot.position.y},
        "punched": slot.punched,
        "bingo": slot.bingo,
    }


def slot_from_dict(data: Mapping[str, Any]) -> Slot:
    pos = data["position"]
    return Slot(
        value=check_value(data["value"]),
        position=Position(int(pos["x"]), int(pos["y"])),
        label=str(data.get("label", "")),
        description=str(data.get("description", "")),
        image_url=str(data.get("imageURL", "")),
        punched=bool(data.get("punched", False)),
        bingo=bool(data.get("bingo", False)),
    )


def sheet_to_dict(sheet: Sheet) -> Dict[str, Any]:
    return {
        "width": sheet.width,
        "height": sheet.height,
        "initialized": sheet.initialized.isoformat(),
        "slots": [[slot_to_dict(slot) for slot in row] for row in sheet.slots],
    }


def sheet_from_dict(data: Mapping[str, Any]) -> Sheet:
    """Rebuild a sheet; grid shape and positions are re-validated by ``Sheet``."""
    rows: List[List[Slot]] = [
        [slot_from_dict(cell) for cell in row] for row in data["slots"]
    ]
    initialized = datetime.fromisoformat(data["initialized"])
    if initialized.tzinfo is None:
        initialized = initialized.replace(tzinfo=timezone.utc)
    return Sheet(
        width=int(data["width"]),
        height=int(data["height"]),
        slots=rows,
        initialized=initialized,
    )


def grid_hash(sheet: Sheet) -> str:
    values = [[slot.value for slot in row] for row in sheet.slots]
    payload = json.dumps(values, ensure_ascii=True, separators=(",", ":"))
    return "sha256:" + hashlib.sha256(payload.encode("utf-8")).hexdigest()
