"""Tolerances and runtime configuration for grid detection."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional

# Two coordinates closer than this are treated as the same coordinate.
SEPARATION_EPSILON = 1.0
# Offset used to build a one-sided dummy bound for range queries.
CONTEXT_LIMIT = 1000.0

# Ruling strokes on a PDF page not longer than this are ignored.
MIN_RULING_LENGTH = 5.0
MIN_SLOPE_VERTICAL = 5.67  # tan(80 degree)
MAX_SLOPE_HORIZONTAL = 0.18  # tan(10 degree)
# Filled rectangles thinner than this are drawn rules, not boxes.
MAX_RULE_THICKNESS = 3.0


@dataclass(slots=True)
class DetectionConfig:
    """Runtime configuration for the page-level grid detector.

    The geometry core itself is parameter free; these settings only drive
    the pipeline that feeds it and filters its output.

    Attributes:
        min_rows: Minimum number of rows a polygon needs to count as a table.
        min_columns: Minimum number of columns a polygon needs to count as a
            table.
        min_ruling_length: Strokes not longer than this are not treated as
            ruling lines when reading a PDF page.
        progress_callback: Optional callback function that receives
            (current_page, total_pages) for progress reporting.
        verbose: Log at DEBUG level for the duration of a detection call.
        join_blank_gaps: Also splice broken vertical rules whose gap holds no
            words on the page. By default only gaps under the separation
            epsilon are closed.
    """

    min_rows: int = 2
    min_columns: int = 2
    min_ruling_length: float = MIN_RULING_LENGTH
    progress_callback: Optional[Callable[[int, int], None]] = field(
        default=None, compare=False
    )
    verbose: bool = False
    join_blank_gaps: bool = False

    def __post_init__(self) -> None:
        if self.min_rows < 1:
            raise ValueError("min_rows must be >= 1")
        if self.min_columns < 1:
            raise ValueError("min_columns must be >= 1")
        if self.min_ruling_length < 0:
            raise ValueError("min_ruling_length must be >= 0")


__all__ = [
    "CONTEXT_LIMIT",
    "DetectionConfig",
    "MAX_RULE_THICKNESS",
    "MAX_SLOPE_HORIZONTAL",
    "MIN_RULING_LENGTH",
    "MIN_SLOPE_VERTICAL",
    "SEPARATION_EPSILON",
]
