from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Optional, Sequence, Tuple

from rich.markup import escape
from rich.style import Style

HighlightFn = Callable[[str], str]

PRECISION_FIXED2 = "fixed2"
PRECISION_SHORTEST = "shortest"


def ansi_highlight(style: str = "red") -> HighlightFn:
    """Return a strategy that wraps text in the ANSI codes for ``style``."""
    parsed = Style.parse(style)

    def _apply(text: str) -> str:
        return parsed.render(text)

    return _apply


def markup_highlight(style: str = "red") -> HighlightFn:
    """Return a strategy emitting rich console markup instead of raw escapes."""

    def _apply(text: str) -> str:
        return f"[{style}]{escape(text)}[/{style}]"

    return _apply


def plain(text: str) -> str:
    return text


@dataclass(frozen=True)
class Band:
    floor: int
    divisor: int
    suffix: str


def _shortest_decimal(quotient: float) -> str:
    # repr() is the shortest round-trip form; Decimal keeps it positional.
    text = format(Decimal(repr(quotient)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


class ScaledUnitFormatter:
    """Map an unsigned magnitude onto a unit band and flag it against a limit."""

    def __init__(
        self,
        bands: Sequence[Band],
        precision: str = PRECISION_FIXED2,
        highlight: Optional[HighlightFn] = None,
    ) -> None:
        if not bands or bands[0].floor != 0:
            raise ValueError("band table must start at 0")
        floors = [band.floor for band in bands]
        if floors != sorted(set(floors)):
            raise ValueError("band floors must be strictly ascending")
        if precision not in {PRECISION_FIXED2, PRECISION_SHORTEST}:
            raise ValueError(f"unknown precision policy: {precision}")
        self.bands: Tuple[Band, ...] = tuple(bands)
        self.precision = precision
        self.highlight = highlight or ansi_highlight()

    def band_for(self, value: int) -> Band:
        chosen = self.bands[0]
        for band in self.bands:
            if value < band.floor:
                break
            chosen = band
        return chosen

    def scale(self, value: int) -> str:
        if value < 0:
            raise ValueError("value must be >= 0")
        band = self.band_for(value)
        if band.divisor == 1:
            return f"{value}{band.suffix}"
        quotient = float(value) / band.divisor
        if self.precision == PRECISION_FIXED2:
            return f"{quotient:.2f}{band.suffix}"
        return f"{_shortest_decimal(quotient)}{band.suffix}"

    def format(
        self,
        label: str,
        value: int,
        threshold: int,
        highlight: Optional[HighlightFn] = None,
    ) -> str:
        text = f"{label}: {self.scale(value)}"
        if value > threshold:
            return (highlight or self.highlight)(text)
        return text


BYTE_BANDS = (
    Band(0, 1, "B"),
    Band(1024, 1024, "KB"),
    Band(1_048_576, 1_048_576, "MB"),
    Band(1_073_741_824, 1_073_741_824, "GB"),
)

INSTRUCTION_BANDS = (
    Band(0, 1, ""),
    Band(1000, 1000, "K"),
    Band(1_000_000, 1_000_000, "M"),
    Band(1_000_000_000, 1_000_000_000, "B"),
)

BYTE_SIZE = ScaledUnitFormatter(BYTE_BANDS, PRECISION_FIXED2)
INSTRUCTION_COUNT = ScaledUnitFormatter(INSTRUCTION_BANDS, PRECISION_SHORTEST)


def humanize_size(title: str, size_bytes: int, size_limit: int, highlight: Optional[HighlightFn] = None) -> str:
    return BYTE_SIZE.format(title, size_bytes, size_limit, highlight)


def humanize_instructions(
    title: str, instructions: int, instructions_limit: int, highlight: Optional[HighlightFn] = None
) -> str:
    return INSTRUCTION_COUNT.format(title, instructions, instructions_limit, highlight)


__all__ = [
    "Band",
    "BYTE_SIZE",
    "HighlightFn",
    "INSTRUCTION_COUNT",
    "ScaledUnitFormatter",
    "ansi_highlight",
    "humanize_instructions",
    "humanize_size",
    "markup_highlight",
    "plain",
]
