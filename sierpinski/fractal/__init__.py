"""Sierpinski fractal renderer.

Modules:
    - raster: RGB bitmap sink with solid polygon fill (PIL)
    - driver: Generation loop, termination policy, render_fractal()

Invariants:
    - Starting triangle painted solid before the first round
    - Each round paints every center hole, then tests only the first
      candidate corner against min_area
    - Candidates that fail the test are never painted

Used by:
    - scripts/render_fractal.py: CLI render to fractal.png
    - tests: end-to-end and property tests
"""

from .driver import (
    DriverState,
    FractalDriver,
    RenderResult,
    RenderStats,
    max_rounds_bound,
    reference_min_area,
    render_fractal,
)
from .raster import RasterSink

__all__ = [
    'DriverState',
    'FractalDriver',
    'RasterSink',
    'RenderResult',
    'RenderStats',
    'max_rounds_bound',
    'reference_min_area',
    'render_fractal',
]
