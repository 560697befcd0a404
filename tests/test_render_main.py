"""Test render_main() callable API.

Validates that scripts.render_fractal.render_main():
    - Returns dict with expected keys
    - Writes the image at exactly width × height
    - Defaults to fractal.png in the working directory
    - Writes a manifest with stats and hashes (optional)
    - Accepts a config path or a validated FractalV1
    - Output override beats output.path from the config
    - Two runs produce identical raster and file digests
    - Save failures propagate as RuntimeError

Test cases:
    - test_render_main_return_dict_structure()
    - test_render_main_default_output()
    - test_render_main_manifest()
    - test_render_main_without_manifest()
    - test_render_main_deterministic()
    - test_render_main_save_failure()

Run:
    pytest tests/test_render_main.py -v
"""

import pytest
import yaml
from PIL import Image

from scripts.render_fractal import render_main
from sierpinski.utils import hashing
from sierpinski.utils.validators import FractalV1


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def config_path(tmp_path):
    path = tmp_path / "fractal.yaml"
    path.write_text(
        "schema: fractal.v1\n"
        "canvas:\n"
        "  width_px: 100\n"
        "  height_px: 100\n"
        "min_area: 32\n"
    )
    return path


@pytest.fixture
def cfg_small():
    return FractalV1(canvas={'width_px': 64, 'height_px': 48}, min_area=32)


# ============================================================================
# TESTS
# ============================================================================

def test_render_main_return_dict_structure(config_path, tmp_path):
    result = render_main(config_path, output_path=tmp_path / "out" / "sierpinski.png")

    assert set(result) == {
        'image_path', 'manifest_path', 'stats', 'raster_sha256', 'file_sha256', 'timings'
    }
    assert result['stats']['rounds'] == 4
    assert result['stats']['generation_sizes'] == [1, 3, 9, 27]
    assert set(result['timings']) == {'render', 'save'}
    assert result['file_sha256'] == hashing.sha256_file(result['image_path'])

    with Image.open(result['image_path']) as img:
        assert img.size == (100, 100)
        assert img.getpixel((0, 0)) == (0, 0, 0)
        assert img.getpixel((50, 8)) == (255, 255, 255)


def test_render_main_default_output(config_path, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = render_main(config_path)

    assert result['image_path'] == "fractal.png"
    assert (tmp_path / "fractal.png").exists()
    assert (tmp_path / "fractal_manifest.yaml").exists()


def test_render_main_manifest(cfg_small, tmp_path):
    result = render_main(cfg_small, output_path=tmp_path / "small.png")

    with open(result['manifest_path']) as f:
        manifest = yaml.safe_load(f)

    assert manifest['schema'] == 'render_manifest.v1'
    assert manifest['image']['width_px'] == 64
    assert manifest['image']['height_px'] == 48
    assert manifest['image']['raster_sha256'] == result['raster_sha256']
    assert manifest['stats'] == result['stats']
    assert manifest['config']['canvas'] == {'width_px': 64, 'height_px': 48}
    assert manifest['config']['colors']['solid'] == [255, 255, 255]
    assert len(manifest['start_triangle']) == 3


def test_render_main_without_manifest(tmp_path):
    cfg = FractalV1(
        canvas={'width_px': 32, 'height_px': 32},
        output={'path': str(tmp_path / "plain.png"), 'write_manifest': False},
    )
    result = render_main(cfg)

    assert result['manifest_path'] is None
    assert sorted(p.name for p in tmp_path.iterdir()) == ["plain.png"]


def test_render_main_deterministic(cfg_small, tmp_path):
    first = render_main(cfg_small, output_path=tmp_path / "a.png")
    second = render_main(cfg_small, output_path=tmp_path / "b.png")

    assert first['raster_sha256'] == second['raster_sha256']
    assert first['file_sha256'] == second['file_sha256']


def test_render_main_save_failure(cfg_small, tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    with pytest.raises(RuntimeError):
        render_main(cfg_small, output_path=blocker / "fractal.png")


def test_render_main_missing_config(tmp_path):
    with pytest.raises(FileNotFoundError):
        render_main(tmp_path / "missing.yaml")
