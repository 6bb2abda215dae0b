import logging
from pathlib import Path
from typing import Union

import cv2
import numpy as np

logger = logging.getLogger(__name__)


def read_rgb_image(path: Union[str, Path]) -> np.ndarray:
    """
    Read an image file as an RGB uint8 array.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file cannot be decoded as an image
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(path)

    # imread does not handle non-ascii paths on every platform
    data = np.fromfile(str(path), dtype=np.uint8)
    image = cv2.imdecode(data, cv2.IMREAD_COLOR)
    if image is None:
        raise ValueError(f"Could not decode image: {path}")

    logger.debug("Read image %s with shape %s", path, image.shape)
    return cv2.cvtColor(image, cv2.COLOR_BGR2RGB)
