"""Render script: config → Sierpinski triangle raster on disk.

Runs the full pipeline:
    1. Load and validate the render config (fractal.v1.yaml)
    2. Resolve the area threshold (explicit or reference policy)
    3. Run the fractal driver on a fresh canvas
    4. Save the image atomically (default: fractal.png)
    5. Write the render manifest (<stem>_manifest.yaml) with stats and hashes

Refactored architecture:
    - render_main(config, output_path) → dict
        * Callable function (used by tests and batch renders)
        * Returns: {image_path, manifest_path, stats, raster_sha256, ...}
    - CLI entry point: if __name__ == "__main__"

Canvas size, threshold and colors live in the config file only; the CLI
selects the config and where the image goes.

CLI:
    python scripts/render_fractal.py
    python scripts/render_fractal.py --config configs/fractal_v1.yaml \\
                                     --output out/fractal.png

Output structure:
    <output_dir>/
        <stem>.png
        <stem>_manifest.yaml

A failed save is fatal: the RuntimeError propagates, is logged by the
installed excepthook, and the process exits non-zero.
"""

import argparse
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from sierpinski import __version__
from sierpinski.fractal.driver import render_fractal
from sierpinski.utils import fs, hashing, logging_config, profiler, validators

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "configs/fractal_v1.yaml"


def render_main(
    config: Union[str, Path, validators.FractalV1] = DEFAULT_CONFIG_PATH,
    output_path: Optional[Union[str, Path]] = None,
) -> Dict[str, Any]:
    """Render and persist one fractal image.

    Parameters
    ----------
    config : Union[str, Path, FractalV1]
        Config file path or an already validated config
    output_path : Optional[Union[str, Path]]
        Image path; overrides ``config.output.path`` when given

    Returns
    -------
    Dict[str, Any]
        Results dict with:
            - image_path: str
            - manifest_path: Optional[str]
            - stats: dict (RenderStats.to_dict())
            - raster_sha256: str (pixel buffer digest)
            - file_sha256: str (encoded file digest)
            - timings: dict[str, float] seconds

    Raises
    ------
    FileNotFoundError
        If the config file doesn't exist
    ValueError
        If the config is invalid
    RuntimeError
        If the image or manifest cannot be written
    """
    if isinstance(config, validators.FractalV1):
        cfg = config
    else:
        cfg = validators.load_fractal_config(config)

    image_path = Path(output_path) if output_path is not None else Path(cfg.output.path)
    timings: Dict[str, float] = {}

    logger.debug(f"Resolved config: {validators.flatten_config(cfg)}")

    with profiler.timer("render", sink=timings.__setitem__):
        result = render_fractal(cfg)

    with profiler.timer("save", sink=timings.__setitem__):
        result.sink.save(image_path)

    raster_sha256 = result.sink.fingerprint()
    file_sha256 = hashing.sha256_file(image_path)

    logger.info(
        f"Render complete: {result.stats.rounds} rounds, "
        f"{result.stats.centers_painted} holes, "
        f"render {timings['render']:.3f} s, save {timings['save']:.3f} s"
    )

    manifest_path = None
    if cfg.output.write_manifest:
        manifest_path = image_path.with_name(f"{image_path.stem}_manifest.yaml")
        manifest = {
            'schema': 'render_manifest.v1',
            'version': __version__,
            'image': {
                'path': str(image_path),
                'width_px': result.sink.width,
                'height_px': result.sink.height,
                'raster_sha256': raster_sha256,
                'file_sha256': file_sha256,
            },
            'start_triangle': [list(p) for p in result.start],
            'stats': result.stats.to_dict(),
            'timings_s': {k: round(v, 6) for k, v in timings.items()},
            'config': cfg.model_dump(mode="json", by_alias=True),
        }
        fs.atomic_yaml_dump(manifest, manifest_path)

    return {
        'image_path': str(image_path),
        'manifest_path': str(manifest_path) if manifest_path else None,
        'stats': result.stats.to_dict(),
        'raster_sha256': raster_sha256,
        'file_sha256': file_sha256,
        'timings': timings,
    }


def main():
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Render a Sierpinski triangle to a raster image"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=DEFAULT_CONFIG_PATH,
        help="Path to render config (fractal.v1.yaml)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Image path (overrides output.path from the config)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Override logging.level from the config",
    )

    args = parser.parse_args()

    cfg = validators.load_fractal_config(args.config)

    logging_config.setup_logging(
        log_level=args.log_level or cfg.logging.level,
        log_file=cfg.logging.file,
        json=cfg.logging.json_format,
        quiet_libs=["PIL"],
        context={"app": "render", "canvas": f"{cfg.canvas.width_px}x{cfg.canvas.height_px}"},
    )
    logging_config.install_excepthook()

    result = render_main(cfg, output_path=args.output)

    print("\n=== Render Complete ===")
    print(f"Image: {result['image_path']}")
    if result['manifest_path']:
        print(f"Manifest: {result['manifest_path']}")
    print(f"Rounds: {result['stats']['rounds']}")

    logging_config.shutdown()


if __name__ == "__main__":
    main()
