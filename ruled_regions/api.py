"""Public facing API for ruled-grid detection."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

import pymupdf  # type: ignore

from .conditions import (
    OpenRectangleCondition,
    any_condition,
    clear_closing_border_condition,
    no_obstacle_condition,
    proximity_condition,
)
from .config import DetectionConfig
from .elements import HorizontalLine, Rectangle, VerticalLine
from .geometry_utils import filter_valid_rectangles
from .logging_config import get_logger, verbose_logging
from .open_rectangle import CombineCondition, combine_horizontally_open_rectangles
from .page_lines import extract_ruling_lines, extract_text_boxes
from .polygon import RectilinearPolygon, build_rectilinear_polygons
from .rectangle_finder import RectangleFinder

logger = get_logger(__name__)


class DetectionError(RuntimeError):
    """Raised when a PDF page cannot be read for grid detection."""


@dataclass(slots=True)
class GridDetection:
    """Rectangles and polygons detected on one page."""

    page_number: Optional[int]
    rectangles: List[Rectangle] = field(default_factory=list)
    polygons: List[RectilinearPolygon] = field(default_factory=list)
    table_candidates: List[RectilinearPolygon] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "page": self.page_number,
            "rectangles": [r.to_dict() for r in self.rectangles],
            "polygons": [p.to_dict() for p in self.polygons],
            "tables": [p.to_dict() for p in self.table_candidates],
        }


def is_tabular(polygon: RectilinearPolygon, config: DetectionConfig | None = None) -> bool:
    """Decide whether a polygon looks like a ruled table."""
    config = config or DetectionConfig()
    return (
        len(polygon.enclosed_rectangles) > 1
        and polygon.number_of_rows >= config.min_rows
        and polygon.number_of_columns >= config.min_columns
    )


def find_rectilinear_polygons(
    horizontal_lines: Sequence[HorizontalLine],
    vertical_lines: Sequence[VerticalLine],
    *,
    combine_condition: CombineCondition = proximity_condition,
    right_open_condition: OpenRectangleCondition | None = None,
) -> Tuple[List[Rectangle], List[RectilinearPolygon]]:
    """Run the full reconstruction for one page.

    Closed rectangles from the sweep, RIGHT-open rectangles accepted by
    ``right_open_condition`` (all of them when it is None) and the repaired
    horizontally open rectangles are pooled and grouped into polygons.

    Returns:
        The pooled rectangles and the polygons built from them.
    """
    finder = RectangleFinder(horizontal_lines, vertical_lines)
    right_open = finder.get_right_side_open_rectangles()
    if right_open_condition is not None:
        right_open = [r for r in right_open if right_open_condition(r)]
    closed_vertically = filter_valid_rectangles(
        [r.create_closed_rectangle() for r in right_open]
    )
    closed_horizontally = combine_horizontally_open_rectangles(
        finder.horizontally_open_rectangles, combine_condition
    )
    rectangles = finder.found_rectangles + closed_vertically + closed_horizontally
    return rectangles, build_rectilinear_polygons(rectangles)


def detect_grids(
    horizontal_lines: Sequence[HorizontalLine],
    vertical_lines: Sequence[VerticalLine],
    *,
    config: DetectionConfig | None = None,
    combine_condition: CombineCondition = proximity_condition,
    right_open_condition: OpenRectangleCondition | None = None,
    page_number: Optional[int] = None,
) -> GridDetection:
    """Detect rectangles, polygons and table candidates from ruling lines."""
    config = config or DetectionConfig()
    rectangles, polygons = find_rectilinear_polygons(
        horizontal_lines,
        vertical_lines,
        combine_condition=combine_condition,
        right_open_condition=right_open_condition,
    )
    tables = [p for p in polygons if is_tabular(p, config)]
    logger.debug(
        "Page %s: %d rectangles, %d polygons, %d table candidates",
        page_number,
        len(rectangles),
        len(polygons),
        len(tables),
    )
    return GridDetection(page_number, rectangles, polygons, tables)


def _detect_on_page(page: "pymupdf.Page", config: DetectionConfig) -> GridDetection:
    horizontal_lines, vertical_lines = extract_ruling_lines(page, config.min_ruling_length)
    text_boxes = extract_text_boxes(page)
    combine_condition: CombineCondition = proximity_condition
    if config.join_blank_gaps:
        combine_condition = any_condition(
            proximity_condition, no_obstacle_condition(text_boxes)
        )
    return detect_grids(
        horizontal_lines,
        vertical_lines,
        config=config,
        combine_condition=combine_condition,
        right_open_condition=clear_closing_border_condition(text_boxes),
        page_number=page.number,
    )


def _open_document(pdf_path: str | Path) -> "pymupdf.Document":
    pdf_path = Path(pdf_path).resolve()
    if not pdf_path.exists():
        raise FileNotFoundError(f"Input PDF not found: {pdf_path}")
    try:
        return pymupdf.open(str(pdf_path))
    except (RuntimeError, ValueError) as exc:
        raise DetectionError(f"Cannot open {pdf_path}: {exc}") from exc


def detect_page_grids(
    pdf_path: str | Path,
    page_number: int,
    *,
    config: DetectionConfig | None = None,
) -> GridDetection:
    """Detect ruled grids on one page (0-based) of ``pdf_path``."""
    if page_number < 0:
        raise ValueError("page_number must be >= 0")
    config = config or DetectionConfig()

    with verbose_logging(config.verbose), _open_document(pdf_path) as doc:
        if page_number >= doc.page_count:
            raise DetectionError(
                f"Page {page_number} out of range; document has {doc.page_count} pages"
            )
        return _detect_on_page(doc[page_number], config)


def detect_document_grids(
    pdf_path: str | Path,
    *,
    config: DetectionConfig | None = None,
    pages: Tuple[int, int] | None = None,
) -> List[GridDetection]:
    """Detect ruled grids page by page.

    Args:
        pdf_path: Path to the PDF document.
        config: Detection settings; defaults to ``DetectionConfig()``.
        pages: Optional inclusive (first, last) 0-based page range.
    """
    config = config or DetectionConfig()

    results: List[GridDetection] = []
    with verbose_logging(config.verbose), _open_document(pdf_path) as doc:
        first, last = pages if pages is not None else (0, doc.page_count - 1)
        if first < 0 or last >= doc.page_count or first > last:
            raise DetectionError(
                f"Invalid page range {pages!r} for a document with {doc.page_count} pages"
            )
        total = last - first + 1
        for index, page_number in enumerate(range(first, last + 1), start=1):
            results.append(_detect_on_page(doc[page_number], config))
            if config.progress_callback is not None:
                config.progress_callback(index, total)
    return results


__all__ = [
    "DetectionError",
    "GridDetection",
    "detect_document_grids",
    "detect_grids",
    "detect_page_grids",
    "find_rectilinear_polygons",
    "is_tabular",
]
