"""Test render config validation.

Tests for sierpinski.utils.validators:
    - Shipped configs/fractal_v1.yaml loads with expected values
    - Defaults: white solid, black empty and background, fractal.png
    - Colors from lists, hex strings and names; bad colors rejected
    - Canvas below 2 px, min_area below 1, wrong schema, bad suffix rejected
    - load_fractal_config error paths (missing file, non-mapping, invalid)
    - flatten_config dot keys

Run:
    pytest tests/test_validators.py -v
"""

from pathlib import Path

import pytest

from sierpinski.utils import validators
from sierpinski.utils.validators import FractalV1


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture(scope="module")
def project_root():
    """Project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def minimal():
    return {'schema': 'fractal.v1', 'canvas': {'width_px': 100, 'height_px': 100}}


# ============================================================================
# SHIPPED CONFIG & DEFAULTS
# ============================================================================

def test_load_shipped_config(project_root):
    cfg = validators.load_fractal_config(project_root / "configs/fractal_v1.yaml")
    assert cfg.canvas.width_px == 1024
    assert cfg.canvas.height_px == 1024
    assert cfg.min_area is None
    assert cfg.placement == "equilateral"
    assert cfg.output.path == "fractal.png"


def test_defaults(minimal):
    cfg = FractalV1(**minimal)
    assert cfg.colors.solid == (255, 255, 255)
    assert cfg.colors.empty == (0, 0, 0)
    assert cfg.colors.background == (0, 0, 0)
    assert cfg.max_rounds == 64
    assert cfg.output.write_manifest is True
    assert cfg.logging.level == "INFO"


def test_schema_key_optional():
    cfg = FractalV1(canvas={'width_px': 5, 'height_px': 5})
    assert cfg.schema_version == "fractal.v1"


# ============================================================================
# COLORS
# ============================================================================

@pytest.mark.parametrize("spec,expected", [
    ([1, 2, 3], (1, 2, 3)),
    ((255, 0, 128), (255, 0, 128)),
    ("#ff8800", (255, 136, 0)),
    ("white", (255, 255, 255)),
])
def test_parse_rgb(spec, expected):
    assert validators.parse_rgb(spec) == expected


@pytest.mark.parametrize("spec", [
    [1, 2],
    [1, 2, 3, 4],
    [0, 0, 256],
    [-1, 0, 0],
    [0.5, 0, 0],
    "not-a-color",
    7,
])
def test_parse_rgb_rejects(spec):
    with pytest.raises(ValueError):
        validators.parse_rgb(spec)


def test_colors_in_config(minimal):
    minimal['colors'] = {'solid': '#00ff00', 'empty': [10, 10, 10]}
    cfg = FractalV1(**minimal)
    assert cfg.colors.solid == (0, 255, 0)
    assert cfg.colors.empty == (10, 10, 10)


def test_bad_color_in_config(minimal):
    minimal['colors'] = {'solid': [300, 0, 0]}
    with pytest.raises(ValueError):
        FractalV1(**minimal)


# ============================================================================
# BOUNDS
# ============================================================================

@pytest.mark.parametrize("min_area", [0, -32])
def test_rejects_non_positive_min_area(minimal, min_area):
    minimal['min_area'] = min_area
    with pytest.raises(ValueError):
        FractalV1(**minimal)


def test_rejects_tiny_canvas(minimal):
    minimal['canvas']['width_px'] = 1
    with pytest.raises(ValueError):
        FractalV1(**minimal)


def test_rejects_wrong_schema(minimal):
    minimal['schema'] = 'stroke.v1'
    with pytest.raises(ValueError, match="fractal.v1"):
        FractalV1(**minimal)


def test_rejects_unknown_placement(minimal):
    minimal['placement'] = 'spiral'
    with pytest.raises(ValueError):
        FractalV1(**minimal)


def test_rejects_lossy_output_format(minimal):
    minimal['output'] = {'path': 'fractal.jpg'}
    with pytest.raises(ValueError):
        FractalV1(**minimal)


def test_logging_level_case_insensitive(minimal):
    minimal['logging'] = {'level': 'debug'}
    assert FractalV1(**minimal).logging.level == "DEBUG"


# ============================================================================
# LOADER
# ============================================================================

def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        validators.load_fractal_config(tmp_path / "missing.yaml")


def test_load_non_mapping(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n")
    with pytest.raises(ValueError, match="mapping"):
        validators.load_fractal_config(path)


def test_load_invalid_reports_path(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("schema: fractal.v1\ncanvas:\n  width_px: 100\n  height_px: 0\n")
    with pytest.raises(ValueError, match="bad.yaml"):
        validators.load_fractal_config(path)


def test_load_roundtrip(tmp_path):
    path = tmp_path / "cfg.yaml"
    path.write_text(
        "schema: fractal.v1\n"
        "canvas: {width_px: 640, height_px: 480}\n"
        "min_area: 50\n"
        "colors: {solid: '#ffffff', empty: [0, 0, 0]}\n"
        "placement: canvas\n"
    )
    cfg = validators.load_fractal_config(path)
    assert cfg.canvas.width_px == 640
    assert cfg.min_area == 50
    assert cfg.placement == "canvas"


def test_flatten_config(minimal):
    flat = validators.flatten_config(FractalV1(**minimal))
    assert flat['canvas.width_px'] == 100
    assert flat['colors.solid'] == [255, 255, 255]
    assert flat['schema'] == 'fractal.v1'
    assert validators.flatten_config({'a': {'b': {'c': 1}}}) == {'a.b.c': 1}
