from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple, Union

from .config import CORNER_SIZE, EDGE_SIZE
from .geometry import CanvasGeometry, PixelBox, Point, pixel_to_screen

Bounds = Tuple[float, float, float, float]  # xmin, ymin, xmax, ymax


# -------------------------
# Zones
# -------------------------
class Zone(Enum):
    TOP_LEFT = "top_left"
    TOP_RIGHT = "top_right"
    BOTTOM_LEFT = "bottom_left"
    BOTTOM_RIGHT = "bottom_right"
    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"
    INSIDE = "inside"
    OUTSIDE = "outside"

    @property
    def is_corner(self) -> bool:
        return self in _CORNERS

    @property
    def is_edge(self) -> bool:
        return self in _EDGES

    @property
    def is_handle(self) -> bool:
        return self.is_corner or self.is_edge


_CORNERS = (Zone.TOP_LEFT, Zone.TOP_RIGHT, Zone.BOTTOM_LEFT, Zone.BOTTOM_RIGHT)
_EDGES = (Zone.TOP, Zone.BOTTOM, Zone.LEFT, Zone.RIGHT)

# coordinate attributes each handle owns while resizing: (x attr, y attr)
_HANDLE_COORDS: Dict[Zone, Tuple[Optional[str], Optional[str]]] = {
    Zone.TOP_LEFT: ("x1", "y1"),
    Zone.TOP_RIGHT: ("x2", "y1"),
    Zone.BOTTOM_LEFT: ("x1", "y2"),
    Zone.BOTTOM_RIGHT: ("x2", "y2"),
    Zone.TOP: (None, "y1"),
    Zone.BOTTOM: (None, "y2"),
    Zone.LEFT: ("x1", None),
    Zone.RIGHT: ("x2", None),
}


# -------------------------
# HitTester
# -------------------------
def hit_test(bounds: Bounds, point: Point, selected: bool,
             corner_size: float = CORNER_SIZE, edge_size: float = EDGE_SIZE) -> Zone:
    """Classify a display-space point against a normalized box.

    Corners win over edges, edges are only live on a selected box, then
    interior containment, else OUTSIDE.
    """
    min_x, min_y, max_x, max_y = bounds
    x, y = point

    corners = (
        (Zone.TOP_LEFT, min_x, min_y),
        (Zone.TOP_RIGHT, max_x, min_y),
        (Zone.BOTTOM_LEFT, min_x, max_y),
        (Zone.BOTTOM_RIGHT, max_x, max_y),
    )
    for zone, cx, cy in corners:
        if abs(x - cx) <= corner_size and abs(y - cy) <= corner_size:
            return zone

    if selected:
        between_x = min_x + corner_size < x < max_x - corner_size
        between_y = min_y + corner_size < y < max_y - corner_size
        if abs(y - min_y) <= edge_size and between_x:
            return Zone.TOP
        if abs(y - max_y) <= edge_size and between_x:
            return Zone.BOTTOM
        if abs(x - min_x) <= edge_size and between_y:
            return Zone.LEFT
        if abs(x - max_x) <= edge_size and between_y:
            return Zone.RIGHT

    if min_x <= x <= max_x and min_y <= y <= max_y:
        return Zone.INSIDE
    return Zone.OUTSIDE


# -------------------------
# Box states
# -------------------------
@dataclass(frozen=True)
class Empty:
    pass


@dataclass(frozen=True)
class Drawing:
    pass


@dataclass(frozen=True)
class Valid:
    selected: bool = False
    active_handle: Optional[Zone] = None  # set while resizing


BoxState = Union[Empty, Drawing, Valid]


# -------------------------
# BoundingBoxModel
# -------------------------
class BoundingBoxModel:
    """The single box of the current image.

    Display-space corners (x1, y1, x2, y2) are not kept normalized while a
    draw or resize is in progress. ``pixel_box`` is the image-space anchor of
    a valid box; it is what gets saved and what the display corners are
    re-derived from when the canvas geometry changes.
    """

    def __init__(self):
        self.state: BoxState = Empty()
        self.x1 = self.y1 = self.x2 = self.y2 = 0.0
        self.pixel_box: Optional[PixelBox] = None
        self._layout_canvas: Optional[CanvasGeometry] = None

    # -- flags --
    @property
    def is_drawing(self) -> bool:
        return isinstance(self.state, Drawing)

    @property
    def is_valid(self) -> bool:
        return isinstance(self.state, Valid)

    @property
    def is_selected(self) -> bool:
        return isinstance(self.state, Valid) and self.state.selected

    @property
    def active_handle(self) -> Optional[Zone]:
        if isinstance(self.state, Valid):
            return self.state.active_handle
        return None

    @property
    def is_resizing(self) -> bool:
        return self.active_handle is not None

    def bounds(self) -> Bounds:
        return (min(self.x1, self.x2), min(self.y1, self.y2),
                max(self.x1, self.x2), max(self.y1, self.y2))

    def hit_test(self, point: Point) -> Zone:
        if not self.is_valid or self._layout_canvas is None:
            return Zone.OUTSIDE
        return hit_test(self.bounds(), point, self.is_selected)

    # -- transitions --
    def reset(self):
        self.__init__()

    def seed(self, box: PixelBox):
        """Adopt a pixel box read from disk; display corners come later via layout()."""
        self.state = Valid(selected=False)
        self.pixel_box = box
        self._layout_canvas = None

    def layout(self, canvas: CanvasGeometry, image_size: Tuple[int, int]) -> bool:
        """Derive display corners from the pixel anchor when the canvas changed."""
        if self.pixel_box is None or canvas == self._layout_canvas:
            return False
        if not self.is_valid or self.is_resizing:
            return False
        box = PixelBox.from_corners(*self.pixel_box.as_tuple(), image_size)
        self.x1, self.y1 = pixel_to_screen((box.xmin, box.ymin), canvas, image_size)
        self.x2, self.y2 = pixel_to_screen((box.xmax, box.ymax), canvas, image_size)
        self.pixel_box = box
        self._layout_canvas = canvas
        return True

    def start_drawing(self, point: Point):
        self.x1, self.y1 = point
        self.x2, self.y2 = point
        self.state = Drawing()
        self.pixel_box = None

    def begin_resize(self, handle: Zone):
        if not self.is_valid:
            raise ValueError("cannot resize without a valid box")
        if not handle.is_handle:
            raise ValueError(f"{handle} is not a resize handle")
        self.state = Valid(selected=True, active_handle=handle)

    def select(self):
        if self.is_valid:
            self.state = Valid(selected=True)

    def deselect(self):
        if self.is_valid:
            self.state = Valid(selected=False)

    def drag_to(self, point: Point):
        if self.is_drawing:
            self.x2, self.y2 = point
        elif self.is_resizing:
            x_attr, y_attr = _HANDLE_COORDS[self.active_handle]
            if x_attr:
                setattr(self, x_attr, point[0])
            if y_attr:
                setattr(self, y_attr, point[1])

    def finish(self, canvas: CanvasGeometry, image_size: Tuple[int, int]) -> Optional[PixelBox]:
        """End the active draw or resize; returns the finalized pixel box."""
        if not (self.is_drawing or self.is_resizing):
            return None
        min_x, min_y, max_x, max_y = self.bounds()
        self.x1, self.y1 = canvas.clamp(min_x, min_y)
        self.x2, self.y2 = canvas.clamp(max_x, max_y)
        self.state = Valid(selected=True)
        self.pixel_box = PixelBox.from_display(self.x1, self.y1, self.x2, self.y2,
                                               canvas, image_size)
        self._layout_canvas = canvas
        return self.pixel_box
