"""
Compare decoded frame headers against OpenCV's own decode of the same file.

OpenCV is the ground truth here: if its decoded array disagrees with the
SOFn directory on size or channel count, one of the two is reading the file
wrong.
"""
from __future__ import annotations
import logging
from pathlib import Path
from typing import List, Tuple, Union

import cv2
import numpy as np

from .marker import JpegProcessingError
from .primitives import JpegDirectory

logger = logging.getLogger(__name__)


def reference_shape(path: Union[str, Path]) -> Tuple[int, int, int]:
    """(height, width, channels) of the image as decoded by OpenCV."""
    # np.fromfile + imdecode also works for non-ASCII paths, unlike imread
    raw = np.fromfile(str(path), dtype=np.uint8)
    try:
        img = cv2.imdecode(raw, cv2.IMREAD_UNCHANGED)
    except cv2.error as e:
        raise JpegProcessingError(f"OpenCV could not decode {path}: {e}") from e
    if img is None:
        raise JpegProcessingError(f"OpenCV could not decode {path}")

    if img.ndim == 2:
        h, w = img.shape
        return h, w, 1
    h, w, c = img.shape
    return h, w, c


def compare_with_reference(directory: JpegDirectory, path: Union[str, Path]) -> List[str]:
    """Mismatches between ``directory`` and OpenCV's decode; empty when they agree."""
    h_ref, w_ref, c_ref = reference_shape(path)
    logger.debug("OpenCV reference shape for %s: %dx%dx%d", path, w_ref, h_ref, c_ref)

    mismatches = []
    if directory.image_height != h_ref:
        mismatches.append(f"Image Height: SOF says {directory.image_height}, OpenCV decoded {h_ref}")
    if directory.image_width != w_ref:
        mismatches.append(f"Image Width: SOF says {directory.image_width}, OpenCV decoded {w_ref}")

    # OpenCV expands YCbCr to BGR, so 3 and 1 are the only counts it preserves
    components = directory.number_of_components
    if components in (1, 3) and components != c_ref:
        mismatches.append(f"Number of Components: SOF says {components}, OpenCV decoded {c_ref} channel(s)")
    return mismatches
