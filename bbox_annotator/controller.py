import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .box_model import BoundingBoxModel, Zone
from .config import OverlayStyle
from .geometry import CanvasGeometry, PixelBox, Point
from .overlay import Cursor, box_primitives, crosshair_primitives, cursor_for

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FrameInput:
    """Pointer signals for one frame; edges are true only on the frame they happen."""
    pointer: Point
    over_canvas: bool
    pressed: bool = False
    dragging: bool = False
    released: bool = False
    display_size: Point = (0.0, 0.0)


@dataclass(frozen=True)
class FinalizeEvent:
    box: PixelBox
    image_size: Tuple[int, int]

    @property
    def yolo(self) -> Tuple[float, float, float, float]:
        return self.box.to_cxcywh(self.image_size)

    def console_line(self) -> str:
        return "(Xmin, Ymin, Xmax, Ymax) = ({}, {}, {}, {})".format(*self.box.as_tuple())

    def yolo_line(self, class_id: int = 0) -> str:
        cx, cy, w, h = self.yolo
        return f"YOLOv5 format: {class_id} {cx:g} {cy:g} {w:g} {h:g}"


@dataclass
class FrameResult:
    cursor: Cursor
    hovered: Optional[Zone] = None
    finalized: Optional[FinalizeEvent] = None
    primitives: List = field(default_factory=list)


def hovered_zone(model: BoundingBoxModel, pointer: Point, over_canvas: bool) -> Optional[Zone]:
    """Zone under the pointer, recomputed each frame; None off-canvas or without a box."""
    if not model.is_valid or not over_canvas:
        return None
    return model.hit_test(pointer)


class InteractionController:
    """Drives a BoundingBoxModel from per-frame pointer signals."""

    def __init__(self, model: BoundingBoxModel, style: Optional[OverlayStyle] = None):
        self.model = model
        self.style = style or OverlayStyle()

    def frame(self, inp: FrameInput, canvas: CanvasGeometry,
              image_size: Tuple[int, int]) -> FrameResult:
        model = self.model
        model.layout(canvas, image_size)

        if inp.pressed:
            if inp.over_canvas:
                self._on_press(inp.pointer)
            else:
                model.deselect()

        finalized = None
        if model.is_drawing or model.is_resizing:
            point = canvas.clamp(*inp.pointer)
            # a resize only moves on drag; a draw also takes the release point
            if inp.dragging or (inp.released and model.is_drawing):
                model.drag_to(point)
            if inp.released:
                box = model.finish(canvas, image_size)
                finalized = FinalizeEvent(box, image_size)
                logger.debug("Finalized box %s", box.as_tuple())

        hovered = hovered_zone(model, inp.pointer, inp.over_canvas)
        prims = box_primitives(model, canvas, hovered, self.style)
        if inp.over_canvas:
            prims.extend(crosshair_primitives(inp.pointer, inp.display_size, self.style))
        return FrameResult(cursor=cursor_for(hovered, inp.over_canvas), hovered=hovered,
                           finalized=finalized, primitives=prims)

    def _on_press(self, point: Point):
        model = self.model
        if model.is_valid:
            zone = model.hit_test(point)
            if zone.is_handle:
                model.begin_resize(zone)
                return
            if zone is Zone.INSIDE:
                model.select()
                return
        # anywhere else starts a new box, dropping the old one
        model.start_drawing(point)


class KeyLatch:
    """Turns key press/release events into one trigger per physical press.

    Held keys autorepeat either as bare presses or, on X11, as release/press
    pairs with (nearly) the same timestamp; both are swallowed.
    """

    def __init__(self, repeat_gap_ms: int = 30):
        self.repeat_gap_ms = repeat_gap_ms
        self.down = False
        self._released_at: Optional[int] = None

    def press(self, time_ms: int) -> bool:
        if self.down:
            return False
        self.down = True
        if self._released_at is not None and time_ms - self._released_at <= self.repeat_gap_ms:
            return False
        return True

    def release(self, time_ms: int):
        self.down = False
        self._released_at = time_ms
