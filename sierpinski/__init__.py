"""Sierpinski Raster: deterministic Sierpinski triangle renderer.

Subdivides a starting triangle generation by generation, painting the
central hole of every subdivision, until triangles fall below an area
threshold. The result is a single flat raster image.

Architecture layers (strict one-way dependency):
    scripts/ → sierpinski/fractal/ → sierpinski/utils/

Key invariants:
    - Integer pixel coordinates, image frame (top-left origin, +Y down)
    - All integer division truncates toward zero
    - Generations are flat lists; no recursion tree is kept
    - YAML-only configs
    - Identical config → bit-identical image
"""

__version__ = "1.0.0"
