import logging
import os
from typing import Callable, Optional, Tuple

from PIL import Image, UnidentifiedImageError

from . import persistence
from .box_model import BoundingBoxModel
from .controller import FrameInput, FrameResult, InteractionController
from .directory_index import DirectoryIndex
from .errors import AnnotationWriteFailure, AnnotatorError, ImageDecodeFailure
from .geometry import CanvasGeometry, PixelBox

logger = logging.getLogger(__name__)


def decode_image(path: str) -> Image.Image:
    """Decode ``path`` into an RGB pixel buffer."""
    if not os.path.isfile(path):
        raise ImageDecodeFailure(f"File does not exist: {path}")
    try:
        with Image.open(path) as img:
            return img.convert("RGB")
    except (UnidentifiedImageError, OSError) as e:
        raise ImageDecodeFailure(f"Failed to load image (could not decode): {path}") from e


class Session:
    """The displayed image, its sibling list and the one box drawn on it.

    Loading or navigating replaces the model wholesale; a failed load keeps
    whatever was shown before.
    """

    def __init__(self, index_factory: Callable[[str], DirectoryIndex] = DirectoryIndex.for_image):
        self.index_factory = index_factory
        self.image: Optional[Image.Image] = None
        self.image_path: Optional[str] = None
        self.image_size: Tuple[int, int] = (0, 0)
        self.index = DirectoryIndex()
        self.model = BoundingBoxModel()
        self.controller = InteractionController(self.model)
        self.last_error: Optional[AnnotatorError] = None

    @property
    def has_image(self) -> bool:
        return self.image is not None

    def _decode(self, path: str) -> Optional[Image.Image]:
        logger.info("Attempting to load image: %s", path)
        try:
            return decode_image(path)
        except ImageDecodeFailure as e:
            logger.error("%s", e)
            self.last_error = e
            return None

    def _adopt(self, path: str, img: Image.Image):
        """Replace the model and seed it from the sidecar of ``path``."""
        self.model.reset()
        self.image = img
        self.image_path = path
        self.image_size = img.size
        logger.info("Image loaded: %s (%dx%d)", path, *img.size)
        box = persistence.load_box(path)
        if box is not None:
            self.model.seed(PixelBox.from_corners(*box.as_tuple(), self.image_size))

    def load_image(self, path: str) -> bool:
        """Open ``path`` and rescan its directory."""
        self.last_error = None
        img = self._decode(path)
        if img is None:
            return False
        self._adopt(path, img)
        self.index = self.index_factory(path)
        return True

    def _navigate(self, forward: bool) -> bool:
        self.last_error = None
        index = self.index
        target = index.peek_next() if forward else index.peek_previous()
        if target is None:
            logger.debug("Navigation skipped: %d image(s) in directory", len(index))
            return False
        # decode before moving so a bad target leaves everything as it was
        img = self._decode(index.paths[target])
        if img is None:
            return False
        path = index.navigate_next() if forward else index.navigate_previous()
        logger.info("Navigated to %d/%d: %s", index.index + 1, len(index), path)
        self._adopt(path, img)
        return True

    def navigate_next(self) -> bool:
        return self._navigate(forward=True)

    def navigate_previous(self) -> bool:
        return self._navigate(forward=False)

    def save(self) -> bool:
        self.last_error = None
        box = self.model.pixel_box
        if not self.model.is_valid or box is None or not self.image_path:
            logger.info("No bounding box to save")
            return False
        try:
            persistence.save_box(self.image_path, box)
        except AnnotationWriteFailure as e:
            logger.error("%s", e)
            self.last_error = e
            return False
        return True

    def frame(self, inp: FrameInput, canvas: CanvasGeometry) -> FrameResult:
        return self.controller.frame(inp, canvas, self.image_size)
