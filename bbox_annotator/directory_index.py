import logging
import os
from typing import List, Optional, Sequence

from .config import IMAGE_EXTENSIONS
from .errors import DirectoryScanFailure

logger = logging.getLogger(__name__)


def scan_directory(folder: str, extensions: Sequence[str] = IMAGE_EXTENSIONS) -> List[str]:
    """Sorted paths of the supported image files directly inside ``folder``."""
    try:
        names = os.listdir(folder)
    except OSError as e:
        raise DirectoryScanFailure(f"Cannot list directory {folder!r}: {e}") from e
    exts = tuple(ext.lower() for ext in extensions)
    paths = [
        os.path.join(folder, name) for name in names
        if name.lower().endswith(exts) and os.path.isfile(os.path.join(folder, name))
    ]
    return sorted(paths)


class DirectoryIndex:
    """Ordered sibling image paths plus the position of the current one."""

    def __init__(self, paths: Optional[List[str]] = None, index: int = -1):
        self.paths: List[str] = list(paths or [])
        self.index = index

    @classmethod
    def for_image(cls, img_path: str) -> "DirectoryIndex":
        folder = os.path.dirname(os.path.abspath(img_path))
        try:
            paths = scan_directory(folder)
        except DirectoryScanFailure as e:
            logger.error("%s", e)
            return cls([], -1)
        index = cls(paths)
        index.index = index.position_of(img_path)
        if index.index < 0:
            logger.warning("%s not found among %d images in %s", img_path, len(paths), folder)
        return index

    def position_of(self, img_path: str) -> int:
        target = os.path.abspath(img_path)
        for i, p in enumerate(self.paths):
            if os.path.abspath(p) == target:
                return i
        return -1

    def __len__(self) -> int:
        return len(self.paths)

    @property
    def current(self) -> Optional[str]:
        if 0 <= self.index < len(self.paths):
            return self.paths[self.index]
        return None

    def _step(self, delta: int) -> Optional[int]:
        n = len(self.paths)
        if n <= 1:
            return None
        if self.index < 0:
            return 0 if delta > 0 else n - 1
        return (self.index + delta) % n

    def peek_next(self) -> Optional[int]:
        return self._step(1)

    def peek_previous(self) -> Optional[int]:
        return self._step(-1)

    def navigate_next(self) -> Optional[str]:
        """Move forward (circular); None when there is nowhere to go."""
        target = self.peek_next()
        if target is None:
            return None
        self.index = target
        return self.paths[target]

    def navigate_previous(self) -> Optional[str]:
        target = self.peek_previous()
        if target is None:
            return None
        self.index = target
        return self.paths[target]
