from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, List, Optional

from rich.style import Style

from .limits import ResourceLimits
from .units import BYTE_SIZE, INSTRUCTION_COUNT, HighlightFn, ansi_highlight, plain

if TYPE_CHECKING:
    from .record import FunctionRunResult

FUNCTION_LOG_LIMIT = 1_000
BANNER_WIDTH = 28

INPUT_STYLE = "black on bright_yellow"
LOGS_STYLE = "black on bright_blue"
ERROR_STYLE = "black on bright_red"
OUTPUT_STYLE = "black on bright_green"
LIMITS_STYLE = "black on bright_magenta"
RESULTS_STYLE = "black on rgb(150,191,72)"

BannerFn = Callable[[str, str], str]


def ansi_banner(text: str, style: str) -> str:
    return Style.parse(style).render(text)


def plain_banner(text: str, style: str) -> str:
    return text


@dataclass(frozen=True)
class ReportStyle:
    """Decorations applied to banners and over-limit lines."""

    banner: BannerFn = ansi_banner
    highlight: HighlightFn = field(default_factory=ansi_highlight)

    @classmethod
    def plain(cls) -> "ReportStyle":
        return cls(banner=plain_banner, highlight=plain)


def _banner(style: ReportStyle, label: str, color: str) -> str:
    return style.banner(f"{label:^{BANNER_WIDTH}}", color)


def render_report(
    result: "FunctionRunResult",
    limits: Optional[ResourceLimits] = None,
    style: Optional[ReportStyle] = None,
) -> str:
    """Render the run as labelled Input/Logs/Output/Limits/Benchmark sections."""
    limits = limits or result.limits()
    style = style or ReportStyle()
    parts: List[str] = []

    parts.append(f"{_banner(style, 'Input', INPUT_STYLE)}\n\n{result.input.humanized}\n")
    parts.append(f"{_banner(style, 'Logs', LOGS_STYLE)}\n\n{result.logs}\n\n")

    logs_length = len(result.logs)
    if logs_length > FUNCTION_LOG_LIMIT:
        warning = (
            f"Logs would be truncated in production, length {logs_length} > {FUNCTION_LOG_LIMIT} limit"
        )
        parts.append(f"{style.highlight(warning)}\n\n\n")

    output = result.output
    if output.encoding_error:
        parts.append(f"{_banner(style, 'Invalid Output', ERROR_STYLE)}\n\n{output.humanized}\n")
        parts.append(f"{_banner(style, 'JSON Error', ERROR_STYLE)}\n\n{output.encoding_error}\n")
    else:
        parts.append(f"{_banner(style, 'Output', OUTPUT_STYLE)}\n\n{output.humanized}\n")

    # Each limit is its own threshold, so these lines are never highlighted.
    parts.append(f"\n{_banner(style, 'Resource Limits', LIMITS_STYLE)}\n\n\n")
    parts.append(BYTE_SIZE.format("Input Size", limits.input_size, limits.input_size, style.highlight) + "\n")
    parts.append(BYTE_SIZE.format("Output Size", limits.output_size, limits.output_size, style.highlight) + "\n")
    parts.append(
        INSTRUCTION_COUNT.format("Instructions", limits.instructions, limits.instructions, style.highlight) + "\n"
    )

    parts.append(f"\n\n{_banner(style, 'Benchmark Results', RESULTS_STYLE)}\n\n")
    parts.append(f"Name: {result.name}\n")
    parts.append(f"Linear Memory Usage: {result.memory_usage}KB\n")
    parts.append(
        INSTRUCTION_COUNT.format("Instructions", result.instructions, limits.instructions, style.highlight) + "\n"
    )
    parts.append(BYTE_SIZE.format("Input Size", result.input_size, limits.input_size, style.highlight) + "\n")
    parts.append(BYTE_SIZE.format("Output Size", result.output_size, limits.output_size, style.highlight) + "\n")
    parts.append(f"Module Size: {result.size}KB\n\n")
    return "".join(parts)


__all__ = [
    "FUNCTION_LOG_LIMIT",
    "ReportStyle",
    "ansi_banner",
    "plain_banner",
    "render_report",
]
