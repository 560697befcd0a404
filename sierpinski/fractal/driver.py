"""Fractal driver: breadth-first subdivision loop with area-based termination.

Algorithm:
    1. Paint the starting triangle in the solid color
    2. Generation 0 = [start]
    3. Round: subdivide every triangle of the generation, paint each center
       in the empty color, collect all corners (in order) as the candidate
       generation
    4. If area(candidates[0]) > min_area the candidates become the next
       generation, otherwise they are dropped unpainted and the loop ends

The recursion tree is never materialized: each generation is a flat list
that replaces the previous one. Only the first candidate is tested. From
an equilateral start every triangle at a given depth has the same area up
to truncation, and the reference images depend on this exact test.

Termination is guaranteed for min_area >= 1 because each round divides the
area by four; ``max_rounds`` is a hard stop for anything else.

Usage:
    from sierpinski.fractal.driver import render_fractal
    from sierpinski.utils import validators

    cfg = validators.load_fractal_config("configs/fractal_v1.yaml")
    result = render_fractal(cfg)
    result.sink.save(cfg.output.path)
"""

import enum
import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from sierpinski.fractal.raster import RasterSink
from sierpinski.utils import geometry
from sierpinski.utils.geometry import Triangle
from sierpinski.utils.validators import FractalV1

logger = logging.getLogger(__name__)

RGB = Tuple[int, int, int]

# Lowest accepted threshold; 0 would never stop on degenerate triangles
MIN_AREA_FLOOR = 1

# Reference policy: one area unit per 32000 canvas pixels, never below 32
REFERENCE_AREA_DIVISOR = 32000
REFERENCE_AREA_MINIMUM = 32

DEFAULT_MAX_ROUNDS = 64


class DriverState(enum.Enum):
    RUNNING = "running"
    TERMINATED = "terminated"


@dataclass
class RenderStats:
    """Summary of one driver run.

    Attributes
    ----------
    rounds : int
        Subdivision rounds whose centers were painted
    generation_sizes : list[int]
        Size of each generation that was subdivided, in order
    centers_painted : int
        Total hole triangles painted
    initial_area : int
        Area of the starting triangle
    last_area : int
        Area of the first triangle of the last subdivided generation
    discarded_area : int, optional
        Area of the first dropped candidate (None if the candidate set was empty)
    min_area : int
        Threshold used
    """
    rounds: int = 0
    generation_sizes: List[int] = field(default_factory=list)
    centers_painted: int = 0
    initial_area: int = 0
    last_area: int = 0
    discarded_area: Optional[int] = None
    min_area: int = 0

    def to_dict(self) -> dict:
        return {
            'rounds': self.rounds,
            'generation_sizes': list(self.generation_sizes),
            'centers_painted': self.centers_painted,
            'initial_area': self.initial_area,
            'last_area': self.last_area,
            'discarded_area': self.discarded_area,
            'min_area': self.min_area,
        }


@dataclass
class RenderResult:
    """Rendered canvas plus the statistics of the run."""
    sink: RasterSink
    stats: RenderStats
    start: Triangle


def reference_min_area(width: int, height: int) -> int:
    """Resolution-proportional threshold: ``max(w*h // 32000, 32)``."""
    return max(width * height // REFERENCE_AREA_DIVISOR, REFERENCE_AREA_MINIMUM)


def resolve_min_area(min_area: Optional[int], width: int, height: int) -> int:
    """Explicit threshold if given, else the reference policy."""
    if min_area is None:
        return reference_min_area(width, height)
    return min_area


def max_rounds_bound(initial_area: int, min_area: int) -> int:
    """Upper bound on painting rounds: ``ceil(log4(initial/min)) + 1``.

    Returns 1 when the starting triangle is already at or below the
    threshold (the start is still subdivided once).
    """
    if min_area < MIN_AREA_FLOOR:
        raise ValueError(f"min_area must be >= {MIN_AREA_FLOOR}, got {min_area}")
    if initial_area <= min_area:
        return 1
    return math.ceil(math.log(initial_area / min_area, 4)) + 1


class FractalDriver:
    """Two-state (RUNNING → TERMINATED) subdivision loop over a raster sink.

    Parameters
    ----------
    sink : RasterSink
        Canvas to paint on; mutated in place
    start : Triangle
        Generation 0
    min_area : int
        Continue only while the first new triangle's area exceeds this
    solid : RGB
        Color of the starting triangle
    empty : RGB
        Color of every hole
    max_rounds : int
        Hard ceiling on rounds; exceeding it raises RuntimeError
    """

    def __init__(
        self,
        sink: RasterSink,
        start: Triangle,
        min_area: int,
        solid: RGB = (255, 255, 255),
        empty: RGB = (0, 0, 0),
        max_rounds: int = DEFAULT_MAX_ROUNDS,
    ):
        if isinstance(min_area, bool) or not isinstance(min_area, int):
            raise ValueError(f"min_area must be an integer, got {min_area!r}")
        if min_area < MIN_AREA_FLOOR:
            raise ValueError(
                f"min_area must be >= {MIN_AREA_FLOOR}, got {min_area} "
                f"(non-positive thresholds never terminate)"
            )
        if max_rounds < 1:
            raise ValueError(f"max_rounds must be >= 1, got {max_rounds}")

        self.sink = sink
        self.start = start
        self.min_area = min_area
        self.solid = tuple(solid)
        self.empty = tuple(empty)
        self.max_rounds = max_rounds

        self.state = DriverState.RUNNING
        self.generation: List[Triangle] = [start]
        self.stats = RenderStats(initial_area=geometry.area(start), min_area=min_area)
        self._start_painted = False

    def paint_start(self) -> None:
        """Paint generation 0 in the solid color (once)."""
        if self._start_painted:
            return
        self.sink.fill_polygon(self.start, self.solid)
        self._start_painted = True
        logger.debug(f"Painted starting triangle {tuple(self.start)} area={self.stats.initial_area}")

    def step(self) -> bool:
        """Run one subdivision round.

        Returns
        -------
        bool
            True if still RUNNING afterwards

        Raises
        ------
        RuntimeError
            If called after termination, or if max_rounds is exceeded
        """
        if self.state is DriverState.TERMINATED:
            raise RuntimeError("Driver already terminated")
        if self.stats.rounds >= self.max_rounds:
            raise RuntimeError(
                f"Exceeded max_rounds={self.max_rounds} "
                f"(min_area={self.min_area}, initial_area={self.stats.initial_area})"
            )

        generation = self.generation
        logger.info(f"Round {self.stats.rounds + 1}: {len(generation)} triangles")

        candidates: List[Triangle] = []
        for triangle in generation:
            center, corners = geometry.subdivide(triangle)
            self.sink.fill_polygon(center, self.empty)
            candidates.extend(corners)

        self.stats.rounds += 1
        self.stats.generation_sizes.append(len(generation))
        self.stats.centers_painted += len(generation)
        if generation:
            self.stats.last_area = geometry.area(generation[0])

        if not candidates:
            self._terminate(None)
            return False

        first_area = geometry.area(candidates[0])
        if first_area > self.min_area:
            self.generation = candidates
            return True

        self._terminate(first_area)
        return False

    def _terminate(self, discarded_area: Optional[int]) -> None:
        self.state = DriverState.TERMINATED
        self.stats.discarded_area = discarded_area
        logger.info(
            f"Terminated after {self.stats.rounds} rounds: next area "
            f"{discarded_area} <= min_area {self.min_area}"
        )

    def run(self) -> RenderStats:
        """Paint the start and subdivide until TERMINATED."""
        self.paint_start()
        while self.step():
            pass
        return self.stats


def starting_triangle(placement: str, width: int, height: int) -> Triangle:
    """Generation 0 for a placement mode ("equilateral" or "canvas")."""
    if placement == "equilateral":
        return geometry.max_centered_equilateral_triangle(width, height)
    if placement == "canvas":
        return geometry.canvas_triangle(width, height)
    raise ValueError(f"Unknown placement: {placement}. Use 'equilateral' or 'canvas'.")


def render_fractal(cfg: FractalV1) -> RenderResult:
    """Render a Sierpinski triangle for a validated config.

    Parameters
    ----------
    cfg : FractalV1
        Render configuration

    Returns
    -------
    RenderResult
        Painted sink, run statistics and the starting triangle

    Notes
    -----
    Nothing is written to disk; persisting ``result.sink`` is up to the
    caller.
    """
    width = cfg.canvas.width_px
    height = cfg.canvas.height_px
    min_area = resolve_min_area(cfg.min_area, width, height)

    start = starting_triangle(cfg.placement, width, height)
    start_area = geometry.area(start)
    sink = RasterSink(width, height, background=cfg.colors.background)

    logger.info(
        f"Rendering {width}x{height} placement={cfg.placement} "
        f"start_area={start_area} min_area={min_area} "
        f"bound={max_rounds_bound(start_area, min_area)} rounds"
    )

    driver = FractalDriver(
        sink,
        start,
        min_area,
        solid=cfg.colors.solid,
        empty=cfg.colors.empty,
        max_rounds=cfg.max_rounds,
    )
    stats = driver.run()
    return RenderResult(sink=sink, stats=stats, start=start)
