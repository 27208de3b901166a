#!/usr/bin/env python3
"""Render the demo scene.

This script renders three Phong-shaded spheres standing in the corner of a
room, lit by a single point light. It builds the scene, renders it through
the Taichi kernel (or the serial Python renderer) and writes a PNG or PPM.

Usage:
    python examples/render_scene.py [options]

Options:
    --width WIDTH           Image width in pixels (default: 720)
    --height HEIGHT         Image height in pixels (default: 480)
    --output OUTPUT         Output file path, .png or .ppm (default: scene.png)
    --backend BACKEND       "taichi" or "python" (default: taichi)
    --rows-per-batch ROWS   Rows per progress update (default: 64)
    --gamma GAMMA           Gamma for PNG output (default: 1.0)
    --cpu                   Force the Taichi CPU backend
    --quiet                 Suppress progress output

Example:
    python examples/render_scene.py --width 360 --height 240 --output scene.ppm
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

import taichi as ti


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the demo scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=720,
        help="Image width in pixels (default: 720)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=480,
        help="Image height in pixels (default: 480)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="scene.png",
        help="Output file path, .png or .ppm (default: scene.png)",
    )
    parser.add_argument(
        "--backend",
        choices=("taichi", "python"),
        default="taichi",
        help="Render backend (default: taichi)",
    )
    parser.add_argument(
        "--rows-per-batch",
        type=int,
        default=64,
        help="Rows per progress update (default: 64)",
    )
    parser.add_argument(
        "--gamma",
        type=float,
        default=1.0,
        help="Gamma for PNG output (default: 1.0)",
    )
    parser.add_argument(
        "--cpu",
        action="store_true",
        help="Force the Taichi CPU backend",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args()


def supports_f64() -> bool:
    """Return True if the active Taichi backend can run float64 kernels.

    Some GPU backends (Metal, for one) accept ti.init with default_fp=ti.f64
    but cannot compile float64 arithmetic, so a small kernel is run to find out.
    """
    try:
        value = ti.field(dtype=ti.f64, shape=())

        @ti.kernel
        def fill():
            value[None] = ti.sqrt(ti.f64(2.0))

        fill()
        # float32 would round sqrt(2) far outside this tolerance
        return abs(value[None] - 2.0**0.5) < 1e-12
    except Exception:
        return False


def render_scene(
    width: int = 720,
    height: int = 480,
    output_path: str = "scene.png",
    backend: str = "taichi",
    rows_per_batch: int = 64,
    gamma: float = 1.0,
    quiet: bool = False,
) -> Path:
    """Render the demo scene and save to file.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        output_path: Output file path (.png or .ppm).
        backend: "taichi" for the parallel kernel, "python" for the serial renderer.
        rows_per_batch: Number of rows to render between progress updates.
        gamma: Gamma for PNG encoding.
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    from phongtracer.preview.export import save_image
    from phongtracer.scene.demo import create_demo_scene

    if not quiet:
        print(f"Creating demo scene ({width}x{height})...")

    world, camera = create_demo_scene(width, height)

    if not quiet:
        print(f"Rendering {len(world.objects)} spheres, {len(world.lights)} light(s) with the {backend} backend...")

    start_time = time.time()

    def progress_callback(rows: int, total: int) -> None:
        if not quiet:
            elapsed = time.time() - start_time
            progress_pct = (rows / total) * 100 if total > 0 else 0
            rows_per_sec = rows / elapsed if elapsed > 0 else 0
            print(
                f"\r  Progress: {rows}/{total} rows "
                f"({progress_pct:.1f}%) - {rows_per_sec:.1f} rows/s",
                end="",
                flush=True,
            )

    canvas = camera.render(
        world,
        backend=backend,
        rows_per_batch=rows_per_batch,
        callback=progress_callback,
    )

    if not quiet:
        print()  # Newline after progress

    output_file = save_image(canvas, output_path, gamma=gamma)

    total_time = time.time() - start_time
    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {total_time:.2f}s")

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()

    # The render kernel works in float64
    # Use GPU if available and float64-capable, fall back to CPU
    if args.cpu:
        ti.init(arch=ti.cpu, default_fp=ti.f64)
    else:
        try:
            ti.init(arch=ti.gpu, default_fp=ti.f64)
            gpu_ready = supports_f64()
        except Exception:
            gpu_ready = False
        if gpu_ready:
            if not args.quiet:
                print("Using GPU backend")
        else:
            ti.reset()
            ti.init(arch=ti.cpu, default_fp=ti.f64)
            if not args.quiet:
                print("Using CPU backend")

    try:
        render_scene(
            width=args.width,
            height=args.height,
            output_path=args.output,
            backend=args.backend,
            rows_per_batch=args.rows_per_batch,
            gamma=args.gamma,
            quiet=args.quiet,
        )
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
