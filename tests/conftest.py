import cv2
import numpy as np
import pytest


def encode_jpeg(height, width, channels=3, progressive=False):
    """Encode a gradient test image with OpenCV and return the JPEG bytes."""
    ramp = np.linspace(0, 255, width, dtype=np.uint8)
    img = np.tile(ramp, (height, 1))
    if channels == 3:
        img = np.dstack([img, img[::-1], np.full_like(img, 128)])
    params = [cv2.IMWRITE_JPEG_QUALITY, 90]
    if progressive:
        params += [cv2.IMWRITE_JPEG_PROGRESSIVE, 1]
    ok, buf = cv2.imencode(".jpg", img, params)
    assert ok
    return buf.tobytes()


@pytest.fixture
def color_jpeg(tmp_path):
    path = tmp_path / "color.jpg"
    path.write_bytes(encode_jpeg(48, 64))
    return path


@pytest.fixture
def gray_jpeg(tmp_path):
    path = tmp_path / "gray.jpg"
    path.write_bytes(encode_jpeg(30, 20, channels=1))
    return path
