"""Human-readable, limit-annotated reports for sandboxed module runs."""

from .limits import LimitSettings, ResourceLimits, compute_limits, load_limit_settings
from .payload import BytesContainer, Codec, ContainerKind, PayloadDecodeError
from .record import FunctionRunResult
from .report import FUNCTION_LOG_LIMIT, ReportStyle, render_report
from .units import BYTE_SIZE, INSTRUCTION_COUNT, ScaledUnitFormatter, humanize_instructions, humanize_size

__all__ = [
    "BYTE_SIZE",
    "BytesContainer",
    "Codec",
    "ContainerKind",
    "FUNCTION_LOG_LIMIT",
    "FunctionRunResult",
    "INSTRUCTION_COUNT",
    "LimitSettings",
    "PayloadDecodeError",
    "ReportStyle",
    "ResourceLimits",
    "ScaledUnitFormatter",
    "compute_limits",
    "humanize_instructions",
    "humanize_size",
    "load_limit_settings",
    "render_report",
]
