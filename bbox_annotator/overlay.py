from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .box_model import BoundingBoxModel, Zone
from .config import OverlayStyle, RGBA
from .geometry import CanvasGeometry, Point


# -------------------------
# Cursor hints
# -------------------------
class Cursor(Enum):
    DEFAULT = "default"
    RESIZE_NWSE = "resize_nwse"
    RESIZE_NESW = "resize_nesw"
    RESIZE_NS = "resize_ns"
    RESIZE_EW = "resize_ew"
    MOVE = "move"


_CURSOR_FOR_ZONE = {
    Zone.TOP_LEFT: Cursor.RESIZE_NWSE,
    Zone.BOTTOM_RIGHT: Cursor.RESIZE_NWSE,
    Zone.TOP_RIGHT: Cursor.RESIZE_NESW,
    Zone.BOTTOM_LEFT: Cursor.RESIZE_NESW,
    Zone.TOP: Cursor.RESIZE_NS,
    Zone.BOTTOM: Cursor.RESIZE_NS,
    Zone.LEFT: Cursor.RESIZE_EW,
    Zone.RIGHT: Cursor.RESIZE_EW,
}


def cursor_for(hovered: Optional[Zone], over_canvas: bool) -> Cursor:
    if hovered is not None and hovered.is_handle:
        return _CURSOR_FOR_ZONE[hovered]
    return Cursor.MOVE if over_canvas else Cursor.DEFAULT


# -------------------------
# Draw primitives
# -------------------------
@dataclass(frozen=True)
class RectOutline:
    p1: Point
    p2: Point
    color: RGBA
    thickness: float


@dataclass(frozen=True)
class FilledRect:
    p1: Point
    p2: Point
    color: RGBA


@dataclass(frozen=True)
class Line:
    p1: Point
    p2: Point
    color: RGBA
    thickness: float


def _handle_centers(p1: Point, p2: Point) -> List[Point]:
    mid_x = (p1[0] + p2[0]) / 2
    mid_y = (p1[1] + p2[1]) / 2
    return [
        (p1[0], p1[1]), (p2[0], p1[1]), (p1[0], p2[1]), (p2[0], p2[1]),  # corners
        (mid_x, p1[1]), (mid_x, p2[1]), (p1[0], mid_y), (p2[0], mid_y),  # edges
    ]


def _edge_line(p1: Point, p2: Point, zone: Zone):
    if zone is Zone.TOP:
        return (p1[0], p1[1]), (p2[0], p1[1])
    if zone is Zone.BOTTOM:
        return (p1[0], p2[1]), (p2[0], p2[1])
    if zone is Zone.LEFT:
        return (p1[0], p1[1]), (p1[0], p2[1])
    return (p2[0], p1[1]), (p2[0], p2[1])


def box_primitives(model: BoundingBoxModel, canvas: CanvasGeometry,
                   hovered: Optional[Zone], style: OverlayStyle) -> list:
    """Rectangle, fill, handles and edge highlight for the current box."""
    if not (model.is_drawing or model.is_valid):
        return []
    min_x, min_y, max_x, max_y = model.bounds()
    p1 = canvas.clamp(min_x, min_y)
    p2 = canvas.clamp(max_x, max_y)

    if model.is_drawing:
        color = style.drawing_color
    elif model.is_selected:
        color = style.selected_color
    else:
        color = style.idle_color
    prims: list = [RectOutline(p1, p2, color, style.border_thickness),
                   FilledRect(p1, p2, style.fill_color)]

    if model.is_valid and model.is_selected:
        half = style.handle_size / 2
        for hx, hy in _handle_centers(p1, p2):
            prims.append(FilledRect((hx - half, hy - half), (hx + half, hy + half),
                                    style.handle_color))

    # corners only change the cursor
    if model.is_valid and hovered is not None and hovered.is_edge:
        a, b = _edge_line(p1, p2, hovered)
        prims.append(Line(a, b, style.highlight_color, style.highlight_thickness))
    return prims


def crosshair_primitives(pointer: Point, display_size: Point, style: OverlayStyle) -> list:
    x, y = pointer
    w, h = display_size
    return [
        Line((0.0, y), (w, y), style.crosshair_color, style.crosshair_thickness),
        Line((x, 0.0), (x, h), style.crosshair_color, style.crosshair_thickness),
    ]
