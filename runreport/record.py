from __future__ import annotations

import logging
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .limits import LimitSettings, ResourceLimits, compute_limits, parse_scale_factor
from .payload import BytesContainer
from .report import render_report

log = logging.getLogger(__name__)


class FunctionRunResult(BaseModel):
    """Telemetry captured from one sandboxed module run.

    ``profile`` and ``scale_factor`` describe the local run only and are left
    out of the serialized form; a deserialized record gets ``None`` and ``1.0``.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str
    size: int = Field(..., ge=0)
    memory_usage: int = Field(..., ge=0)
    instructions: int = Field(..., ge=0)
    logs: str = ""
    input: BytesContainer
    output: BytesContainer
    profile: Optional[str] = Field(default=None, exclude=True)
    scale_factor: float = Field(default=1.0, gt=0, allow_inf_nan=False, exclude=True)
    success: bool

    @property
    def input_size(self) -> int:
        return len(self.input.raw)

    @property
    def output_size(self) -> int:
        return len(self.output.raw)

    def limits(self, settings: Optional[LimitSettings] = None) -> ResourceLimits:
        base = settings or LimitSettings()
        return compute_limits(
            LimitSettings(
                input_size=base.input_size,
                output_size=base.output_size,
                instructions=base.instructions,
                scale_factor=self.scale_factor,
            )
        )

    def to_json(self) -> str:
        try:
            return self.model_dump_json(indent=2)
        except ValueError as exc:
            log.warning("record serialization failed", extra={"run": self.name, "error": str(exc)})
            return str(exc)

    @classmethod
    def from_json(cls, text: str | bytes, *, scale_factor: float = 1.0) -> "FunctionRunResult":
        record = cls.model_validate_json(text)
        return record.model_copy(update={"profile": None, "scale_factor": parse_scale_factor(scale_factor)})

    def __str__(self) -> str:
        return render_report(self)


__all__ = ["FunctionRunResult"]
