"""Singleton sheet stores.

A store holds at most one sheet. ``find`` hands out a fresh working copy;
changes only take effect once the copy is passed back to ``save``.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional

from .models import Sheet
from .serialize import build_run_meta, grid_hash, sheet_from_dict, sheet_to_dict, write_json
from .version import __version__

logger = logging.getLogger(__name__)


class SheetStore(ABC):
    """find/save contract for the live sheet."""

    @abstractmethod
    def find(self) -> Optional[Sheet]:
        raise NotImplementedError

    @abstractmethod
    def save(self, sheet: Sheet) -> Sheet:
        raise NotImplementedError

    @abstractmethod
    def clear(self) -> None:
        raise NotImplementedError

    def exists(self) -> bool:
        return self.find() is not None


class MemorySheetStore(SheetStore):
    def __init__(self) -> None:
        self._snapshot: Optional[Dict[str, Any]] = None

    def find(self) -> Optional[Sheet]:
        if self._snapshot is None:
            return None
        return sheet_from_dict(self._snapshot)

    def save(self, sheet: Sheet) -> Sheet:
        self._snapshot = sheet_to_dict(sheet)
        return sheet

    def clear(self) -> None:
        self._snapshot = None


class JsonFileSheetStore(SheetStore):
    """Keeps the sheet in a single JSON file; last writer wins."""

    def __init__(self, path: Path | str, *, params_hash: Optional[str] = None, mkdirs: bool = True):
        self.path = Path(path)
        self.params_hash = params_hash
        self.mkdirs = mkdirs

    def _read(self) -> Optional[Dict[str, Any]]:
        if not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ValueError(f"Sheet store {self.path} is not valid JSON: {exc}") from exc
        if not isinstance(data, dict) or "sheet" not in data:
            raise ValueError(f"Sheet store {self.path} has no 'sheet' entry")
        return data

    def find(self) -> Optional[Sheet]:
        data = self._read()
        if data is None:
            return None
        if self.params_hash is None:
            self.params_hash = (data.get("run_meta") or {}).get("params_hash")
        try:
            sheet = sheet_from_dict(data["sheet"])
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"Sheet store {self.path} is corrupt: {exc}") from exc
        logger.debug("Loaded sheet from %s", self.path)
        return sheet

    def save(self, sheet: Sheet) -> Sheet:
        data = {
            "run_meta": build_run_meta(app_version=__version__, params_hash=self.params_hash),
            "sheet": sheet_to_dict(sheet),
            "grid_hash": grid_hash(sheet),
        }
        write_json(self.path, data, mkdirs=self.mkdirs, overwrite=True)
        logger.debug("Saved sheet to %s", self.path)
        return sheet

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()
