from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Tuple

import yaml

Color = Tuple[int, int, int]

DEFAULT_CONFIG: Dict[str, Any] = {
    "window": {
        "width": 1280,
        "height": 800,
        "fullscreen": False,
        "title": "Mondrian",
    },
    "sketch": {
        "stroke_width": 6,
        "edge_margin": 30,
        "min_lines": 5,
        "long_press_ms": 2000,
        "double_click_ms": 400,
        "double_click_slop": 8,
    },
    "colors": {
        "red": [255, 0, 0],
        "yellow": [255, 255, 0],
        "blue": [0, 0, 255],
        "white": [255, 255, 255],
        "line": [0, 0, 0],
        "background": [255, 255, 255],
    },
    "logging": {
        "level": "INFO",
        "file": None,
    },
}


@dataclass(frozen=True)
class SketchSettings:
    stroke_width: int = 6
    edge_margin: int = 30
    min_lines: int = 5
    long_press_ms: int = 2000
    double_click_ms: int = 400
    double_click_slop: int = 8


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if (
            key in merged
            and isinstance(merged[key], dict)
            and isinstance(value, dict)
        ):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _candidate_config_paths() -> list[Path]:
    env_path = os.environ.get("MONDRIAN_CONFIG")
    paths = []
    if env_path:
        paths.append(Path(env_path))
    paths.extend([
        Path("config.yaml"),
        Path("~/.config/mondrian/config.yaml").expanduser(),
    ])
    return paths


def load_config() -> Dict[str, Any]:
    config = dict(DEFAULT_CONFIG)
    for path in _candidate_config_paths():
        if path.exists():
            with path.open("r", encoding="utf-8") as handle:
                data = yaml.safe_load(handle) or {}
            if isinstance(data, dict):
                config = _deep_merge(config, data)
            break
    return config


def _coerce_int(value: object, default: int, *, minimum: int = 0) -> int:
    try:
        number = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default
    return max(minimum, number)


def _coerce_color(value: object, default: Color) -> Color:
    if not isinstance(value, (list, tuple)) or len(value) != 3:
        return default
    try:
        channels = [int(channel) for channel in value]
    except (TypeError, ValueError):
        return default
    return tuple(max(0, min(255, channel)) for channel in channels)  # type: ignore[return-value]


def sketch_settings(config: Dict[str, Any]) -> SketchSettings:
    raw = config.get("sketch", {}) or {}
    defaults = SketchSettings()
    return SketchSettings(
        stroke_width=_coerce_int(raw.get("stroke_width"), defaults.stroke_width, minimum=1),
        edge_margin=_coerce_int(raw.get("edge_margin"), defaults.edge_margin),
        min_lines=_coerce_int(raw.get("min_lines"), defaults.min_lines),
        long_press_ms=_coerce_int(raw.get("long_press_ms"), defaults.long_press_ms),
        double_click_ms=_coerce_int(raw.get("double_click_ms"), defaults.double_click_ms),
        double_click_slop=_coerce_int(raw.get("double_click_slop"), defaults.double_click_slop),
    )


def color_table(config: Dict[str, Any]) -> Dict[str, Color]:
    raw = config.get("colors", {}) or {}
    table: Dict[str, Color] = {}
    for name, default in DEFAULT_CONFIG["colors"].items():
        table[name] = _coerce_color(raw.get(name), tuple(default))  # type: ignore[arg-type]
    return table
