#!/usr/bin/env python3
"""Render the demo scene, or a scene loaded from JSON.

Renders every camera of the scene in parallel and writes one PNG per
camera.

Usage:
    python examples/render_demo.py [options]

Options:
    --width WIDTH           Image width in pixels (default: 800)
    --height HEIGHT         Image height in pixels (default: 600)
    --max-generations N     Recursion bound (default: 7)
    --texture PATH          Image for the textured sphere
    --config PATH           JSON scene description (replaces the demo scene)
    --output PATTERN        Output filename pattern (default: cam-{}.png)
    --workers N             Worker processes (default: CPU count)
    --serial                Render in the calling process
    --preview               Show the images with matplotlib when done
    --verbose               Enable debug logging

Example:
    python examples/render_demo.py --width 320 --height 240 --output demo-{}.png
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the demo scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--width", type=int, default=800, help="Image width in pixels (default: 800)")
    parser.add_argument("--height", type=int, default=600, help="Image height in pixels (default: 600)")
    parser.add_argument(
        "--max-generations",
        type=int,
        default=7,
        help="Recursion bound for reflection and refraction (default: 7)",
    )
    parser.add_argument("--texture", type=str, default=None, help="Image for the textured sphere")
    parser.add_argument("--config", type=str, default=None, help="JSON scene description")
    parser.add_argument(
        "--output",
        type=str,
        default="cam-{}.png",
        help="Output filename pattern, {} is the camera index (default: cam-{}.png)",
    )
    parser.add_argument("--workers", type=int, default=None, help="Worker processes (default: CPU count)")
    parser.add_argument("--serial", action="store_true", help="Render in the calling process")
    parser.add_argument("--preview", action="store_true", help="Show the images when done")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args()


def build_scene(args: argparse.Namespace):
    """Create the scene selected by the command-line options."""
    from prism.scene import DemoParams, create_demo_scene, scene_from_dict

    if args.config is not None:
        with open(args.config, encoding="utf-8") as f:
            return scene_from_dict(json.load(f))

    params = DemoParams(
        width=args.width,
        height=args.height,
        max_generations=args.max_generations,
        texture_path=args.texture,
    )
    return create_demo_scene(params=params)


def main() -> int:
    """Main entry point."""
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    from prism.preview import save_pngs, show_images

    try:
        scene = build_scene(args)
        print(f"Rendering {scene!r}...")

        start_time = time.time()
        images = scene.raytrace() if args.serial else scene.par_raytrace(args.workers)
        print(f"Rendered {len(images)} image(s) in {time.time() - start_time:.2f}s")

        for path in save_pngs(images, args.output):
            print(f"Saved to: {path}")
        if args.preview:
            show_images(images)
        return 0
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
