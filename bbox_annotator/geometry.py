from dataclasses import dataclass
from typing import Tuple

Point = Tuple[float, float]
Size = Tuple[float, float]


# -------------------------
# Canvas (display space)
# -------------------------
@dataclass(frozen=True)
class CanvasGeometry:
    """Display-space rectangle the image occupies for the current frame."""
    x: float
    y: float
    width: float
    height: float

    @property
    def origin(self) -> Point:
        return self.x, self.y

    @property
    def size(self) -> Size:
        return self.width, self.height

    def contains(self, px: float, py: float) -> bool:
        return (self.x <= px <= self.x + self.width and
                self.y <= py <= self.y + self.height)

    def clamp(self, px: float, py: float) -> Point:
        px = max(self.x, min(px, self.x + self.width))
        py = max(self.y, min(py, self.y + self.height))
        return px, py


def fit_canvas(avail_w: float, avail_h: float, img_w: int, img_h: int,
               offset: Point = (0.0, 0.0)) -> CanvasGeometry:
    """Aspect-fit the image into the available area and center the remainder."""
    ox, oy = offset
    if img_w <= 0 or img_h <= 0 or avail_w <= 0 or avail_h <= 0:
        return CanvasGeometry(ox, oy, 0.0, 0.0)
    image_aspect = img_w / img_h
    window_aspect = avail_w / avail_h
    if image_aspect > window_aspect:
        # wider than the window: fit to width
        width = float(avail_w)
        height = avail_w / image_aspect
    else:
        height = float(avail_h)
        width = avail_h * image_aspect
    return CanvasGeometry(ox + (avail_w - width) * 0.5,
                          oy + (avail_h - height) * 0.5,
                          width, height)


# -------------------------
# CoordinateMapper
# -------------------------
def _to_screen_axis(p: float, origin: float, canvas: float, dim: float) -> float:
    if canvas == 0 or dim == 0:
        return origin
    return origin + p * (canvas / dim)


def _to_pixel_axis(s: float, origin: float, canvas: float, dim: float) -> float:
    if canvas == 0:
        return 0.0
    p = (s - origin) * (dim / canvas)
    return max(0.0, min(p, float(dim)))


def pixel_to_screen(p: Point, canvas: CanvasGeometry, image_size: Tuple[int, int]) -> Point:
    img_w, img_h = image_size
    return (_to_screen_axis(p[0], canvas.x, canvas.width, img_w),
            _to_screen_axis(p[1], canvas.y, canvas.height, img_h))


def screen_to_pixel(s: Point, canvas: CanvasGeometry, image_size: Tuple[int, int]) -> Point:
    """Inverse of pixel_to_screen, clamped to [0, dimension] on each axis."""
    img_w, img_h = image_size
    return (_to_pixel_axis(s[0], canvas.x, canvas.width, img_w),
            _to_pixel_axis(s[1], canvas.y, canvas.height, img_h))


# -------------------------
# Pixel-space box
# -------------------------
@dataclass(frozen=True)
class PixelBox:
    """Integer box in image pixels, always xmin<=xmax and ymin<=ymax."""
    xmin: int
    ymin: int
    xmax: int
    ymax: int

    @classmethod
    def from_corners(cls, x1: int, y1: int, x2: int, y2: int,
                     image_size: Tuple[int, int]) -> "PixelBox":
        img_w, img_h = image_size
        xmin, xmax = sorted((x1, x2))
        ymin, ymax = sorted((y1, y2))
        return cls(max(0, min(xmin, img_w)), max(0, min(ymin, img_h)),
                   max(0, min(xmax, img_w)), max(0, min(ymax, img_h)))

    @classmethod
    def from_display(cls, x1: float, y1: float, x2: float, y2: float,
                     canvas: CanvasGeometry, image_size: Tuple[int, int]) -> "PixelBox":
        # normalize first, then scale, truncate and clamp
        left, right = min(x1, x2), max(x1, x2)
        top, bottom = min(y1, y2), max(y1, y2)
        px1, py1 = screen_to_pixel((left, top), canvas, image_size)
        px2, py2 = screen_to_pixel((right, bottom), canvas, image_size)
        return cls.from_corners(int(px1), int(py1), int(px2), int(py2), image_size)

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return self.xmin, self.ymin, self.xmax, self.ymax

    def to_cxcywh(self, image_size: Tuple[int, int]) -> Tuple[float, float, float, float]:
        """Normalized YOLO (x_center, y_center, width, height)."""
        img_w, img_h = image_size
        if img_w <= 0 or img_h <= 0:
            return 0.0, 0.0, 0.0, 0.0
        cx = ((self.xmin + self.xmax) / 2) / img_w
        cy = ((self.ymin + self.ymax) / 2) / img_h
        w = (self.xmax - self.xmin) / img_w
        h = (self.ymax - self.ymin) / img_h
        return cx, cy, w, h
