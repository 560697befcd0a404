"""Raster sink: a mutable RGB bitmap with solid polygon fill.

The fractal driver only ever calls :meth:`RasterSink.fill_polygon`; pixel
coverage is left to PIL's ImageDraw. Fills are solid, aliased, include the
polygon boundary, and overwrite whatever was there before.

Usage:
    sink = RasterSink(1024, 1024)
    sink.fill_polygon(triangle, (255, 255, 255))
    sink.save("fractal.png")
"""

import logging
from pathlib import Path
from typing import Sequence, Tuple, Union

import numpy as np
from PIL import Image, ImageDraw

from sierpinski.utils import fs, hashing
from sierpinski.utils.geometry import Point

logger = logging.getLogger(__name__)

RGB = Tuple[int, int, int]


class RasterSink:
    """Fixed-size RGB canvas backed by a PIL image.

    Attributes
    ----------
    width : int
        Canvas width in pixels
    height : int
        Canvas height in pixels
    background : RGB
        Initial color of every pixel
    fill_count : int
        Number of polygons filled so far
    """

    def __init__(self, width: int, height: int, background: RGB = (0, 0, 0)):
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas dimensions must be positive, got {width}x{height}")

        self.width = width
        self.height = height
        self.background = tuple(background)
        self.fill_count = 0

        self._image = Image.new("RGB", (width, height), self.background)
        self._draw = ImageDraw.Draw(self._image)

    @property
    def image(self) -> Image.Image:
        """Underlying PIL image (shared, not a copy)."""
        return self._image

    def fill_polygon(self, vertices: Sequence[Point], color: RGB) -> None:
        """Fill a polygon's interior and boundary with a solid color.

        Parameters
        ----------
        vertices : Sequence[Point]
            Polygon vertices in pixel coordinates; a Triangle works as is
        color : RGB
            Fill color
        """
        xy = [(int(p[0]), int(p[1])) for p in vertices]
        color = tuple(color)
        self._draw.polygon(xy, fill=color, outline=color)
        self.fill_count += 1

    def pixel(self, x: int, y: int) -> RGB:
        """Color at (x, y)."""
        return self._image.getpixel((x, y))

    def to_array(self) -> np.ndarray:
        """Copy of the pixels as an (H, W, 3) uint8 array."""
        return np.array(self._image, dtype=np.uint8)

    def fingerprint(self) -> str:
        """SHA-256 of the pixel buffer; equal for bit-identical canvases."""
        return hashing.sha256_array(self.to_array())

    def save(self, path: Union[str, Path]) -> Path:
        """Write the canvas atomically; the format follows the extension.

        Raises
        ------
        RuntimeError
            If the file cannot be written
        """
        path = Path(path)
        fs.atomic_save_image(self.to_array(), path)
        logger.info(f"Saved {self.width}x{self.height} raster to {path}")
        return path
