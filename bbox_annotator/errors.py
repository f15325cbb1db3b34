class AnnotatorError(Exception):
    """Base class for recoverable annotator failures."""


class ImageDecodeFailure(AnnotatorError):
    """Image file is missing or cannot be decoded."""


class DirectoryScanFailure(AnnotatorError):
    """Containing directory of an image could not be listed."""


class AnnotationWriteFailure(AnnotatorError):
    """Sidecar CSV could not be written."""
