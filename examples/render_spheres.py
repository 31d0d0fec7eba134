#!/usr/bin/env python3
"""Render a sphere scene to an image file.

This script renders the default scene (a small sphere resting on a large
ground sphere) or a scene loaded from JSON, colored by surface normals over a
sky gradient, and writes it as PPM or PNG.

Usage:
    python -m examples.render_spheres [options]

Options:
    --width WIDTH           Image width in pixels (default: 512)
    --height HEIGHT         Image height in pixels (default: 400)
    --output OUTPUT         Output file path (default: out.ppm)
    --ascii                 Write ASCII PPM (P3) instead of binary (P6)
    --scene FILE            JSON scene file (default: built-in scene)
    --aspect-ratio RATIO    Camera viewport aspect ratio (default: 16/9)
    --reference             Use the pure-Python renderer instead of Taichi
    --rows-per-batch ROWS   Rows per progress update (default: 50)
    --gpu                   Try a GPU backend (needs f64 support)
    --quiet                 Suppress progress output

Example:
    python -m examples.render_spheres --width 256 --height 200 --output spheres.png
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

import taichi as ti


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a sphere scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=512,
        help="Image width in pixels (default: 512)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=400,
        help="Image height in pixels (default: 400)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="out.ppm",
        help="Output file path (default: out.ppm)",
    )
    parser.add_argument(
        "--ascii",
        action="store_true",
        help="Write ASCII PPM (P3) instead of binary (P6)",
    )
    parser.add_argument(
        "--scene",
        type=str,
        default=None,
        help="JSON scene file (default: built-in scene)",
    )
    parser.add_argument(
        "--aspect-ratio",
        type=float,
        default=16.0 / 9.0,
        help="Camera viewport aspect ratio (default: 16/9)",
    )
    parser.add_argument(
        "--reference",
        action="store_true",
        help="Use the pure-Python renderer instead of Taichi",
    )
    parser.add_argument(
        "--rows-per-batch",
        type=int,
        default=50,
        help="Rows per progress update (default: 50)",
    )
    parser.add_argument(
        "--gpu",
        action="store_true",
        help="Try a GPU backend (needs f64 support)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args(argv)


def render_spheres(
    width: int = 512,
    height: int = 400,
    output_path: str = "out.ppm",
    scene_path: str | None = None,
    aspect_ratio: float = 16.0 / 9.0,
    binary: bool = True,
    reference: bool = False,
    rows_per_batch: int = 50,
    quiet: bool = False,
) -> Path:
    """Render a scene and save it to file.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        output_path: Output file path (.ppm, .png, ...).
        scene_path: Optional JSON scene file; the default scene otherwise.
        aspect_ratio: Camera viewport aspect ratio. Independent of the image
            dimensions, as with the fixed 16:9 default camera.
        binary: For PPM output, write P6 (True) or P3 (False).
        reference: Render with the pure-Python path instead of Taichi.
        rows_per_batch: Number of rows to render between progress updates.
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    from src.raysphere.camera.pinhole import PinholeCamera
    from src.raysphere.core.render import RenderParams, render_reference
    from src.raysphere.core.renderer import Renderer
    from src.raysphere.preview.export import save_image
    from src.raysphere.scene.presets import create_default_scene, load_scene_file

    params = RenderParams(width, height)

    if scene_path is None:
        scene = create_default_scene()
    else:
        scene = load_scene_file(scene_path)

    if not quiet:
        print(f"Rendering {len(scene)} sphere(s) at {width}x{height}...")

    camera = PinholeCamera(aspect_ratio=aspect_ratio)

    start_time = time.time()

    def progress_callback(current: int, target: int) -> None:
        if not quiet:
            elapsed = time.time() - start_time
            progress_pct = (current / target) * 100 if target > 0 else 0
            rows_per_sec = current / elapsed if elapsed > 0 else 0
            print(
                f"\r  Progress: {current}/{target} rows "
                f"({progress_pct:.1f}%) - {rows_per_sec:.1f} rows/s",
                end="",
                flush=True,
            )

    if reference:
        image = render_reference(scene, camera, params)
    else:
        renderer = Renderer(params)
        renderer.render(
            scene,
            camera,
            rows_per_batch=rows_per_batch,
            callback=progress_callback,
        )
        image = renderer.get_image()

        if not quiet:
            print()  # Newline after progress

    output_file = Path(output_path)
    save_image(image, output_file, binary=binary)

    total_time = time.time() - start_time
    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {total_time:.2f}s")

    return output_file


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    # Geometry is double precision; CPU is the default backend
    if args.gpu:
        try:
            ti.init(arch=ti.gpu, default_fp=ti.f64)
            if not args.quiet:
                print("Using GPU backend")
        except Exception:
            ti.init(arch=ti.cpu, default_fp=ti.f64)
            if not args.quiet:
                print("Using CPU backend")
    else:
        ti.init(arch=ti.cpu, default_fp=ti.f64)
        if not args.quiet:
            print("Using CPU backend")

    try:
        render_spheres(
            width=args.width,
            height=args.height,
            output_path=args.output,
            scene_path=args.scene,
            aspect_ratio=args.aspect_ratio,
            binary=not args.ascii,
            reference=args.reference,
            rows_per_batch=args.rows_per_batch,
            quiet=args.quiet,
        )
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
