import logging
import os
from typing import Optional

from .config import CSV_HEADER, CSV_SUFFIX
from .errors import AnnotationWriteFailure
from .geometry import PixelBox

logger = logging.getLogger(__name__)


def csv_path_for(img_path: str) -> str:
    """Sidecar path: image extension replaced by .csv, or .csv appended."""
    base, _ = os.path.splitext(img_path)
    return base + CSV_SUFFIX


def _has_alpha(line: str) -> bool:
    return any(ch.isalpha() for ch in line)


def _parse_row(line: str) -> Optional[PixelBox]:
    parts = line.strip().split(",")
    if len(parts) < 4:
        return None
    try:
        xmin, ymin, xmax, ymax = (int(p) for p in parts[:4])
    except ValueError:
        return None
    return PixelBox(xmin, ymin, xmax, ymax)


def save_box(img_path: str, box: PixelBox) -> str:
    """Overwrite the sidecar of ``img_path`` with a header and one row."""
    csv_path = csv_path_for(img_path)
    try:
        with open(csv_path, "w", encoding="utf-8") as f:
            f.write(CSV_HEADER + "\n")
            f.write(f"{box.xmin},{box.ymin},{box.xmax},{box.ymax}\n")
    except OSError as e:
        raise AnnotationWriteFailure(f"Failed to save CSV file: {csv_path} ({e})") from e
    logger.info("Bounding box saved to: %s", csv_path)
    return csv_path


def load_box(img_path: str) -> Optional[PixelBox]:
    """Return the first parseable row of the sidecar, or None.

    A missing or unreadable file, or one with no integer row, loads nothing.
    """
    csv_path = csv_path_for(img_path)
    if not os.path.exists(csv_path):
        logger.debug("No annotation file for %s", img_path)
        return None
    try:
        # undecodable bytes become U+FFFD, so only their row fails to parse
        with open(csv_path, "r", encoding="utf-8", errors="replace") as f:
            for lineno, line in enumerate(f, start=1):
                # header only if the first line has letters in it
                if lineno == 1 and _has_alpha(line):
                    continue
                if not line.strip():
                    continue
                box = _parse_row(line)
                if box is not None:
                    logger.info("Loaded bounding box %s from %s", box.as_tuple(), csv_path)
                    return box
                logger.debug("Skipping malformed row %d in %s: %r",
                             lineno, csv_path, line.rstrip("\n"))
    except OSError as e:
        logger.warning("Could not read annotation file %s: %s", csv_path, e)
        return None
    logger.info("No valid bounding box in %s", csv_path)
    return None
