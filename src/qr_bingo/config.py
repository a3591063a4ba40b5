from __future__ import annotations

import copy
import hashlib
import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

import yaml

from .models import Variation
from .serialize import variation_from_dict

ENV_PREFIX = "QR_BINGO_"


@dataclass
class BingoConfig:
    width: int
    height: int
    variations: List[Variation]
    rng_engine: str = "py_random"
    seed: Optional[int] = None


def _read_config_file(config_path: Path | None) -> Dict[str, Any]:
    if not config_path:
        return {}
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    suffix = config_path.suffix.lower()
    text = config_path.read_text(encoding="utf-8")
    if suffix in (".yaml", ".yml"):
        data = yaml.safe_load(text) or {}
        if not isinstance(data, dict):
            raise ValueError("Top-level YAML config must be a mapping")
        return data
    if suffix == ".json":
        data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError("Top-level JSON config must be a mapping")
        return data
    raise ValueError(f"Unsupported config extension: {suffix}")


# dotted config key -> converter applied to the matching QR_BINGO_* variable
ENV_KEYS: Dict[str, Callable[[str], Any]] = {
    "sheet.width": int,
    "sheet.height": int,
    "seed.engine": str,
    "seed.value": int,
    "store_path": str,
    "qr_dir": str,
    "log_level": str,
    "log_format": str,
    "log_file": str,
}

PATH_KEYS = ("store_path", "log_file", "qr_dir")

DEFAULTS: Dict[str, Any] = {
    "log_level": "INFO",
    "log_format": "text",
    "store_path": "bingo_sheet.json",
    "qr_dir": "qr_codes",
    "seed": {"engine": "py_random"},
}


def env_name(key: str) -> str:
    """``sheet.width`` -> ``QR_BINGO_SHEET_WIDTH``."""
    return ENV_PREFIX + key.replace(".", "_").upper()


def _collect_env_vars(env: Mapping[str, str]) -> Dict[str, Any]:
    result: Dict[str, Any] = {}
    for key, convert in ENV_KEYS.items():
        raw = env.get(env_name(key))
        if raw is None:
            continue
        try:
            result[key] = convert(raw)
        except ValueError:
            # left as text so load_bingo_config reports the bad value
            result[key] = raw
    return result


def _expand_dotted(flat: Mapping[str, Any]) -> Dict[str, Any]:
    tree: Dict[str, Any] = {}
    for key, value in flat.items():
        *parents, leaf = key.split(".")
        node = tree
        for part in parents:
            node = node.setdefault(part, {})
        node[leaf] = value
    return tree


def _deep_merge(base: Mapping[str, Any], overlay: Mapping[str, Any]) -> Dict[str, Any]:
    """Mappings merge key by key; any other overlay value replaces the base."""
    merged = copy.deepcopy(dict(base))
    for key, value in overlay.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), Mapping):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def canonical_json_dumps(data: Any) -> str:
    return json.dumps(data, ensure_ascii=True, sort_keys=True, separators=(",", ":"))


def _extract(path: str, source: Mapping[str, Any]) -> Any:
    cur: Any = source
    for part in path.split("."):
        if not isinstance(cur, Mapping) or part not in cur:
            return None
        cur = cur[part]
    return cur


def compute_params_hash(resolved: Mapping[str, Any]) -> str:
    """Hash of everything that decides what a generated sheet looks like."""
    contract = {
        key: _extract(key, resolved)
        for key in ("sheet.width", "sheet.height", "slot.variations", "seed.engine", "seed.value")
    }
    contract = {k: v for k, v in contract.items() if v is not None}
    digest = hashlib.sha256(canonical_json_dumps(contract).encode("utf-8")).hexdigest()
    return f"sha256:{digest}"


def _anchor_paths(resolved: Dict[str, Any], base: Path, keys: Iterable[str]) -> None:
    for key in keys:
        value = resolved.get(key)
        if not value:
            continue
        p = Path(str(value))
        resolved[key] = str(p if p.is_absolute() else (base / p).resolve())


def resolve_parameters(
    *,
    config_path_str: str | None,
    cli_overrides: Dict[str, Any],
    env: Mapping[str, str] | None = None,
) -> Tuple[Dict[str, Any], str, Path | None]:
    """Resolve parameters with precedence CLI > ENV > config > defaults.

    Relative paths given on the command line or in the environment are
    anchored at the working directory, the rest at the config file's directory.

    Returns (resolved_params, params_hash, config_path)
    """
    config_path = Path(config_path_str).resolve() if config_path_str else None
    file_cfg = _read_config_file(config_path)
    env_map = _collect_env_vars(os.environ if env is None else env)

    merged = _deep_merge(DEFAULTS, file_cfg)
    merged = _deep_merge(merged, _expand_dotted(env_map))
    merged = _deep_merge(merged, _expand_dotted(cli_overrides))

    overridden = {k for k in PATH_KEYS if k in env_map or k in cli_overrides}
    _anchor_paths(merged, Path.cwd(), overridden)
    _anchor_paths(merged, config_path.parent if config_path else Path.cwd(), set(PATH_KEYS) - overridden)

    return merged, compute_params_hash(merged), config_path


def _positive_int(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValueError(f"{name} must be a positive integer, got {value!r}")
    return value


def load_bingo_config(resolved: Mapping[str, Any]) -> BingoConfig:
    """Validate the generation part of resolved parameters."""
    width = _positive_int(_extract("sheet.width", resolved), "sheet.width")
    height = _positive_int(_extract("sheet.height", resolved), "sheet.height")

    raw_variations = _extract("slot.variations", resolved)
    if not isinstance(raw_variations, list) or not raw_variations:
        raise ValueError("slot.variations must be a non-empty list")
    variations = [variation_from_dict(item) for item in raw_variations]

    seed = _extract("seed.value", resolved)
    if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
        raise ValueError(f"seed.value must be an integer, got {seed!r}")

    return BingoConfig(
        width=width,
        height=height,
        variations=variations,
        rng_engine=str(_extract("seed.engine", resolved) or "py_random"),
        seed=seed,
    )

