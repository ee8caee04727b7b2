from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional
import json
import math
import os

import yaml

DEFAULT_INPUT_SIZE_LIMIT = 128_000
DEFAULT_OUTPUT_SIZE_LIMIT = 20_000
DEFAULT_INSTRUCTIONS_LIMIT = 11_000_000

SCALE_FACTOR_ENV = "RUNREPORT_SCALE_FACTOR"


@dataclass(frozen=True)
class ResourceLimits:
    input_size: int
    output_size: int
    instructions: int


@dataclass(frozen=True)
class LimitSettings:
    input_size: int = DEFAULT_INPUT_SIZE_LIMIT
    output_size: int = DEFAULT_OUTPUT_SIZE_LIMIT
    instructions: int = DEFAULT_INSTRUCTIONS_LIMIT
    scale_factor: float = 1.0

    def __post_init__(self) -> None:
        for name in ("input_size", "output_size", "instructions"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} default must be >= 0")
        if not (self.scale_factor > 0 and math.isfinite(self.scale_factor)):
            raise ValueError("scale_factor must be a finite number > 0")

    def scaled(self) -> ResourceLimits:
        return compute_limits(self)


def compute_limits(settings: LimitSettings) -> ResourceLimits:
    """Scale each default by the run's scale factor, discarding any fraction."""
    factor = settings.scale_factor
    return ResourceLimits(
        input_size=int(settings.input_size * factor),
        output_size=int(settings.output_size * factor),
        instructions=int(settings.instructions * factor),
    )


def parse_scale_factor(raw: Any) -> float:
    try:
        value = float(raw)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"invalid scale factor: {raw!r}") from exc
    if not (value > 0 and math.isfinite(value)):
        raise ValueError(f"scale factor must be a finite number > 0, got {raw!r}")
    return value


def _read_settings_file(path: Path) -> Dict[str, Any]:
    text = path.read_text()
    if path.suffix in {".yaml", ".yml"}:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ValueError(f"invalid limit settings in {path}: {exc}") from exc
    else:
        data = json.loads(text)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"limit settings in {path} must be a mapping")
    return data


def load_limit_settings(
    path: str | Path | None = None,
    scale_factor: Optional[float] = None,
) -> LimitSettings:
    """Build limit settings from an optional YAML/JSON file and the environment.

    An explicit ``scale_factor`` wins over the file, which wins over
    ``RUNREPORT_SCALE_FACTOR``.
    """
    data: Dict[str, Any] = _read_settings_file(Path(path)) if path is not None else {}
    known = {f.name for f in fields(LimitSettings)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise TypeError(f"unknown limit settings: {', '.join(unknown)}")

    if scale_factor is not None:
        data["scale_factor"] = parse_scale_factor(scale_factor)
    elif "scale_factor" in data:
        data["scale_factor"] = parse_scale_factor(data["scale_factor"])
    elif os.getenv(SCALE_FACTOR_ENV):
        data["scale_factor"] = parse_scale_factor(os.getenv(SCALE_FACTOR_ENV))

    for name in ("input_size", "output_size", "instructions"):
        if name in data:
            data[name] = int(data[name])
    return LimitSettings(**data)


__all__ = [
    "DEFAULT_INPUT_SIZE_LIMIT",
    "DEFAULT_INSTRUCTIONS_LIMIT",
    "DEFAULT_OUTPUT_SIZE_LIMIT",
    "LimitSettings",
    "ResourceLimits",
    "compute_limits",
    "load_limit_settings",
    "parse_scale_factor",
]
