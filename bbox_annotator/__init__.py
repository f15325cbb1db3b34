"""Draw, resize and save a single bounding box over an image."""

from .box_model import BoundingBoxModel, Zone, hit_test
from .controller import FinalizeEvent, FrameInput, InteractionController
from .directory_index import DirectoryIndex
from .geometry import CanvasGeometry, PixelBox, fit_canvas, pixel_to_screen, screen_to_pixel
from .session import Session

__version__ = "0.1.0"
