#!/usr/bin/env python3
"""Render one of the built-in scenes.

This script renders a scene from the SCENES registry with the multi-threaded
renderer and writes the result as PNG or PPM, chosen by the output suffix.

Usage:
    python examples/render_scene.py [options]

Options:
    --scene NAME        Scene to render (default: random_spheres)
    --width WIDTH       Image width in pixels (default: 400)
    --height HEIGHT     Image height in pixels (default: width / aspect ratio)
    --samples SAMPLES   Number of samples per pixel (default: 100)
    --depth DEPTH       Maximum ray bounces (default: 50)
    --workers N         Worker threads (default: CPU count)
    --seed SEED         Render seed for reproducible noise
    --texture PATH      Earth texture for the earth scene
    --output OUTPUT     Output file path, .png or .ppm (default: <scene>.png)
    --quiet             Suppress progress and log output

Example:
    python examples/render_scene.py --scene cornell_box --width 300 --samples 200
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pathtracer.core.renderer import Renderer, RenderSettings
from pathtracer.preview.export import save_png, save_ppm
from pathtracer.scene.examples import DEFAULT_EARTH_TEXTURE, SCENES

logger = logging.getLogger("render_scene")

# Aspect ratio each scene is framed for
SCENE_ASPECT_RATIOS = {
    "cornell_box": 1.0,
}
DEFAULT_ASPECT_RATIO = 16.0 / 9.0


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a built-in path tracing scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--scene",
        choices=sorted(SCENES),
        default="random_spheres",
        help="Scene to render (default: random_spheres)",
    )
    parser.add_argument(
        "--width",
        type=int,
        default=400,
        help="Image width in pixels (default: 400)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=None,
        help="Image height in pixels (default: width / aspect ratio)",
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=100,
        help="Number of samples per pixel (default: 100)",
    )
    parser.add_argument(
        "--depth",
        type=int,
        default=50,
        help="Maximum ray bounces (default: 50)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Worker threads (default: CPU count)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Render seed for reproducible noise",
    )
    parser.add_argument(
        "--texture",
        type=Path,
        default=DEFAULT_EARTH_TEXTURE,
        help=f"Earth texture for the earth scene (default: {DEFAULT_EARTH_TEXTURE})",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Output file path, .png or .ppm (default: <scene>.png)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress and log output",
    )
    return parser.parse_args(argv)


def render_scene(args: argparse.Namespace) -> Path:
    """Build the requested scene, render it and save the image.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Path to the saved image file.
    """
    aspect_ratio = SCENE_ASPECT_RATIOS.get(args.scene, DEFAULT_ASPECT_RATIO)
    width = args.width
    height = args.height if args.height is not None else max(int(width / aspect_ratio), 1)

    factory = SCENES[args.scene]
    if args.scene == "earth":
        scene = factory(aspect_ratio=width / height, texture_path=args.texture)
    else:
        scene = factory(aspect_ratio=width / height)

    settings = RenderSettings(
        width=width,
        height=height,
        samples_per_pixel=args.samples,
        max_depth=args.depth,
        background=scene.background,
        workers=args.workers,
        seed=args.seed,
        show_progress=not args.quiet,
    )
    image = Renderer(scene.camera, scene.world, settings).render()

    output_file = args.output if args.output is not None else Path(f"{args.scene}.png")
    if output_file.suffix.lower() == ".ppm":
        save_ppm(image, output_file)
    else:
        save_png(image, output_file)

    logger.info("Saved to: %s", output_file.absolute())
    return output_file


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.WARNING if args.quiet else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        render_scene(args)
        return 0
    except (OSError, ValueError) as e:
        logger.error("Error: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
