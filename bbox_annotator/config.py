# all configurations in one place

from dataclasses import dataclass
from typing import Tuple

RGBA = Tuple[int, int, int, int]

# hit-test zones, display-space units
CORNER_SIZE = 12.0
EDGE_SIZE = 6.0

# drawn handle squares
HANDLE_SIZE = 8.0

IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".bmp", ".tif", ".tiff")

CSV_SUFFIX = ".csv"
CSV_HEADER = "x_min,y_min,x_max,y_max"


@dataclass
class OverlayStyle:
    drawing_color: RGBA = (255, 255, 0, 128)
    selected_color: RGBA = (0, 255, 0, 128)
    idle_color: RGBA = (255, 0, 0, 128)
    fill_color: RGBA = (255, 255, 255, 20)
    border_thickness: float = 2.0
    handle_color: RGBA = (255, 255, 255, 255)
    handle_size: float = HANDLE_SIZE
    highlight_color: RGBA = (255, 255, 0, 255)
    highlight_thickness: float = 3.0
    crosshair_color: RGBA = (255, 255, 255, 128)
    crosshair_thickness: float = 1.0


@dataclass
class WindowConfig:
    title: str = "Bounding Box Annotation Tool"
    width: int = 1200
    height: int = 800
    background: str = "#738c99"
