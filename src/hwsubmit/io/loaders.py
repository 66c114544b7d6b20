from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from .schema import DEFAULT_SOURCE_EXTENSIONS, SubmitConfig


DEFAULT_CONFIG: Dict[str, Any] = {
    "dest_dir": "/usr/class/cs346/redbase/submit",
    "manifest_name": "MANIFEST.{ident}",
    "root_markers": {
        "source": "src",
        "library": "lib",
        "build": "build",
    },
    "source_extensions": list(DEFAULT_SOURCE_EXTENSIONS),
    "allowed_hosts": [],
}


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            out[key] = _deep_merge(out[key], value)
        else:
            out[key] = value
    return out


def _load_json(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"config is not a JSON object: {path}")
    return data


def _str_list(value: Any, key: str) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) and v for v in value):
        raise ValueError(f"{key} must be a list of non-empty strings")
    return list(value)


def load_submit_config(config_path: str | Path | None = None) -> SubmitConfig:
    cfg = dict(DEFAULT_CONFIG)
    if config_path:
        cfg = _deep_merge(cfg, _load_json(Path(config_path)))

    markers = cfg["root_markers"]
    for key in ("source", "library", "build"):
        if not isinstance(markers.get(key), str) or not markers[key]:
            raise ValueError(f"root_markers.{key} must be a non-empty string")

    manifest_name = str(cfg["manifest_name"])
    try:
        sample = manifest_name.format(ident="rm", number="1")
    except (KeyError, IndexError, ValueError) as exc:
        raise ValueError(
            f"invalid manifest_name {manifest_name!r}: only {{ident}} and {{number}} may be used"
        ) from exc
    if "/" in sample or sample.strip() == "":
        raise ValueError(f"invalid manifest_name: {manifest_name!r}")

    extensions = [ext.lstrip(".") for ext in _str_list(cfg["source_extensions"], "source_extensions")]
    if not extensions:
        raise ValueError("source_extensions must not be empty")

    return SubmitConfig(
        dest_dir=Path(str(cfg["dest_dir"])).expanduser(),
        manifest_name=manifest_name,
        source_dir=markers["source"],
        library_dir=markers["library"],
        build_dir=markers["build"],
        source_extensions=extensions,
        allowed_hosts=_str_list(cfg.get("allowed_hosts", []), "allowed_hosts"),
    )
