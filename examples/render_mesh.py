#!/usr/bin/env python3
"""Render a .geo polygon mesh over a checkered floor.

The mesh is scaled to fit a 10 unit box and rendered with flat or smooth
normals. Optionally the result is shown with Matplotlib or in the Taichi
image viewer.

Usage:
    python examples/render_mesh.py MESH.geo [options]

Options:
    --width WIDTH       Image width in pixels (default: 800)
    --height HEIGHT     Image height in pixels (default: 600)
    --shading MODE      flat or smooth (default: smooth)
    --output PATTERN    Output filename pattern (default: mesh-{}.png)
    --workers N         Worker processes (default: CPU count)
    --preview           Show the render with Matplotlib when done
    --interactive       Open the Taichi viewer after rendering
    --verbose           Enable debug logging

Example:
    python examples/render_mesh.py teapot.geo --shading flat --width 400 --height 300
"""

from __future__ import annotations

import argparse
import logging
import sys
import time


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a .geo mesh.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("mesh", type=str, help="Path to a .geo mesh file")
    parser.add_argument("--width", type=int, default=800, help="Image width in pixels (default: 800)")
    parser.add_argument("--height", type=int, default=600, help="Image height in pixels (default: 600)")
    parser.add_argument(
        "--shading",
        choices=("flat", "smooth"),
        default="smooth",
        help="Mesh normal mode (default: smooth)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="mesh-{}.png",
        help="Output filename pattern, {} is the camera index (default: mesh-{}.png)",
    )
    parser.add_argument("--workers", type=int, default=None, help="Worker processes (default: CPU count)")
    parser.add_argument("--preview", action="store_true", help="Show the render with Matplotlib when done")
    parser.add_argument("--interactive", action="store_true", help="Open the Taichi viewer")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args()


def show_interactive(images) -> None:
    """Show the rendered images in the Taichi viewer, if a display exists."""
    import taichi as ti

    from prism.preview.interactive import ImageViewer

    if not ImageViewer.is_display_available():
        print("No display available, skipping the viewer")
        return

    ti.init(arch=ti.cpu)
    print("Controls: left/right arrows switch camera, 'p' saves a PNG, Esc quits")
    ImageViewer(images, title="Prism - Mesh").run()


def main() -> int:
    """Main entry point."""
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    from prism.errors import RaytracerError
    from prism.geometry import ShadingMode
    from prism.io import load_geo
    from prism.preview import save_pngs
    from prism.scene import create_mesh_scene

    try:
        description = load_geo(args.mesh)
        print(f"Loaded {args.mesh}: {description.num_faces} faces, {len(description.positions)} vertices")

        scene = create_mesh_scene(
            description, args.width, args.height, shading=ShadingMode(args.shading)
        )
        start_time = time.time()
        images = scene.par_raytrace(args.workers)
        print(f"Rendered in {time.time() - start_time:.2f}s")

        for path in save_pngs(images, args.output):
            print(f"Saved to: {path}")
    except (OSError, RaytracerError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.preview:
        from prism.preview import show_preview

        show_preview(images[0], title=f"{args.mesh} ({args.shading} shading)")
    if args.interactive:
        show_interactive(images)
    return 0


if __name__ == "__main__":
    sys.exit(main())
