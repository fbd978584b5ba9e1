"""Reconstruction of ruled rectangles and grids from page line segments."""

from __future__ import annotations

from importlib import metadata

from .api import (
    DetectionError,
    GridDetection,
    detect_document_grids,
    detect_grids,
    detect_page_grids,
    find_rectilinear_polygons,
    is_tabular,
)
from .config import DetectionConfig
from .elements import HorizontalLine, InvalidGeometryError, Rectangle, VerticalLine
from .open_rectangle import OpenRectangle, OpenSide, combine_horizontally_open_rectangles
from .polygon import RectilinearPolygon, build_rectilinear_polygons
from .rectangle_finder import RectangleFinder, find_rectangles

__all__ = [
    "DetectionConfig",
    "DetectionError",
    "GridDetection",
    "HorizontalLine",
    "InvalidGeometryError",
    "OpenRectangle",
    "OpenSide",
    "Rectangle",
    "RectangleFinder",
    "RectilinearPolygon",
    "VerticalLine",
    "build_rectilinear_polygons",
    "combine_horizontally_open_rectangles",
    "detect_document_grids",
    "detect_grids",
    "detect_page_grids",
    "find_rectangles",
    "find_rectilinear_polygons",
    "is_tabular",
    "__version__",
]

try:  # pragma: no cover - metadata only available when installed
    __version__ = metadata.version("ruled-regions")
except metadata.PackageNotFoundError:  # pragma: no cover - fallback for local dev
    __version__ = "1.0.0"
