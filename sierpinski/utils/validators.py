"""YAML schema validation and config loading.

Provides validation for the render configuration using pydantic:
    - Fractal schema (fractal.v1.yaml): canvas size, termination threshold,
      colors, starting-triangle placement, output and logging settings

Configs are validated up front so a bad threshold or color fails before
any pixel is drawn, with the offending key in the message.

Units:
    - Canvas: pixels
    - Area threshold: square pixels (same units as geometry.area)
    - Color: 8-bit RGB, given as [r, g, b] or a PIL color string
      ("#ff8800", "white")

Usage:
    from sierpinski.utils import validators

    cfg = validators.load_fractal_config("configs/fractal_v1.yaml")
    cfg.canvas.width_px, cfg.colors.solid
"""

from pathlib import Path
from typing import Any, Dict, Literal, Optional, Tuple, Union

from PIL import ImageColor
from pydantic import BaseModel, ConfigDict, Field, field_validator

RGB = Tuple[int, int, int]

WHITE: RGB = (255, 255, 255)
BLACK: RGB = (0, 0, 0)

# Raster formats PIL writes losslessly as a single flat image
SUPPORTED_IMAGE_SUFFIXES = (".png", ".bmp", ".ppm", ".tif", ".tiff")


def parse_rgb(value: Any) -> RGB:
    """Coerce a color spec to an (r, g, b) tuple of ints in [0, 255].

    Parameters
    ----------
    value : Any
        [r, g, b] sequence or a PIL color string

    Returns
    -------
    RGB
        Color triple

    Raises
    ------
    ValueError
        If the value isn't a valid color
    """
    if isinstance(value, str):
        try:
            rgb = ImageColor.getrgb(value)
        except ValueError as e:
            raise ValueError(f"Unknown color string: {value!r}") from e
        return tuple(rgb[:3])

    try:
        components = tuple(value)
    except TypeError:
        raise ValueError(f"Color must be [r, g, b] or a color string, got {value!r}")

    if len(components) != 3:
        raise ValueError(f"Color must have 3 components, got {len(components)}: {value!r}")
    for c in components:
        if isinstance(c, bool) or not isinstance(c, int):
            raise ValueError(f"Color components must be integers, got {value!r}")
        if not 0 <= c <= 255:
            raise ValueError(f"Color component {c} out of range [0, 255]")
    return components


# ============================================================================
# FRACTAL SCHEMA V1
# ============================================================================

class CanvasConfig(BaseModel):
    """Raster dimensions in pixels."""
    width_px: int = Field(..., ge=2, description="Canvas width (px)")
    height_px: int = Field(..., ge=2, description="Canvas height (px)")


class ColorsConfig(BaseModel):
    """Paint colors.

    ``solid`` fills the starting triangle, ``empty`` paints every hole,
    ``background`` is the untouched canvas outside the triangle.
    """
    solid: RGB = Field(WHITE, description="Solid triangle color")
    empty: RGB = Field(BLACK, description="Hole color")
    background: RGB = Field(BLACK, description="Initial canvas color")

    @field_validator('solid', 'empty', 'background', mode='before')
    @classmethod
    def validate_color(cls, v: Any) -> RGB:
        return parse_rgb(v)


class OutputConfig(BaseModel):
    """Output artifact settings."""
    path: str = Field("fractal.png", description="Image file path")
    write_manifest: bool = Field(True, description="Write <stem>_manifest.yaml beside the image")

    @field_validator('path')
    @classmethod
    def validate_suffix(cls, v: str) -> str:
        suffix = Path(v).suffix.lower()
        if suffix not in SUPPORTED_IMAGE_SUFFIXES:
            raise ValueError(
                f"Output path must end in one of {SUPPORTED_IMAGE_SUFFIXES}, got '{v}'"
            )
        return v


class LoggingConfig(BaseModel):
    """Logging settings passed to logging_config.setup_logging()."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    file: Optional[str] = Field(None, description="Log file path; None for console only")
    json_format: bool = Field(False, description="JSON lines in the log file")

    @field_validator('level', mode='before')
    @classmethod
    def upper_level(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v


class FractalV1(BaseModel):
    """Render configuration (fractal.v1.yaml schema).

    ``min_area`` is optional; when omitted the driver applies the
    resolution-proportional reference policy.
    """
    model_config = ConfigDict(populate_by_name=True)

    schema_version: str = Field("fractal.v1", alias="schema", description="Schema version")
    canvas: CanvasConfig
    min_area: Optional[int] = Field(
        None, ge=1, description="Stop when the first new triangle's area is <= this"
    )
    colors: ColorsConfig = Field(default_factory=ColorsConfig)
    placement: Literal["equilateral", "canvas"] = Field(
        "equilateral", description="Starting triangle: centered equilateral or full canvas"
    )
    max_rounds: int = Field(64, ge=1, description="Hard ceiling on subdivision rounds")
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator('schema_version')
    @classmethod
    def validate_schema(cls, v: str) -> str:
        if v != "fractal.v1":
            raise ValueError(f"Expected schema 'fractal.v1', got '{v}'")
        return v


# ============================================================================
# PUBLIC API
# ============================================================================

def load_fractal_config(path: Union[str, Path]) -> FractalV1:
    """Load and validate render config from YAML.

    Parameters
    ----------
    path : Union[str, Path]
        Path to fractal.v1.yaml file

    Returns
    -------
    FractalV1
        Validated render configuration

    Raises
    ------
    FileNotFoundError
        If path doesn't exist
    ValueError
        If validation fails (with actionable error message)
    """
    from . import fs

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Fractal config not found: {path}")

    data = fs.load_yaml(path)
    if not isinstance(data, dict):
        raise ValueError(f"Fractal config at {path} must be a mapping, got {type(data).__name__}")
    try:
        return FractalV1(**data)
    except Exception as e:
        raise ValueError(f"Fractal config validation failed at {path}: {e}") from e


def flatten_config(cfg: Union[Dict, BaseModel], prefix: str = "") -> Dict[str, Any]:
    """Flatten nested config to dot-separated keys (for manifests and logs).

    Examples
    --------
    >>> flatten_config({"canvas": {"width_px": 100}})
    {'canvas.width_px': 100}
    """
    if isinstance(cfg, BaseModel):
        cfg = cfg.model_dump(by_alias=True)

    flat: Dict[str, Any] = {}
    for key, value in cfg.items():
        full_key = f"{prefix}{key}"
        if isinstance(value, dict):
            flat.update(flatten_config(value, prefix=f"{full_key}."))
        elif isinstance(value, tuple):
            flat[full_key] = list(value)
        else:
            flat[full_key] = value
    return flat
