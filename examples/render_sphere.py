#!/usr/bin/env python3
"""Render a sphere scene with hard shadows.

With no scene file this renders the reference scene: a red unit sphere at
(0, 0, -5), eye at the origin, light at (10, 10, 10), 800x600 pixels.

Usage:
    python -m examples.render_sphere [options]

Options:
    --scene FILE        JSON scene file (spheres plus optional render settings)
    --width WIDTH       Image width in pixels (overrides scene file)
    --height HEIGHT     Image height in pixels (overrides scene file)
    --eye X Y Z         Eye position (overrides scene file)
    --light X Y Z       Light position (overrides scene file)
    --brightness B      Light brightness (overrides scene file)
    --output OUTPUT     Output PNG path (default: sphere.png)
    --gamma GAMMA       Gamma applied at export (default: 1.0)
    --show              Show the result in a Matplotlib figure
    --window            Show the result in a Taichi window until closed
    --arch {cpu,gpu}    Taichi backend (default: cpu)
    --quiet             Suppress progress output

Example:
    python -m examples.render_sphere --width 320 --height 240 --output small.png
"""

from __future__ import annotations

import argparse
import dataclasses
import sys
import time
from pathlib import Path

import taichi as ti


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a sphere scene with hard shadows.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--scene",
        type=str,
        default=None,
        help="JSON scene file (default: built-in single red sphere)",
    )
    parser.add_argument("--width", type=int, default=None, help="Image width in pixels")
    parser.add_argument("--height", type=int, default=None, help="Image height in pixels")
    parser.add_argument(
        "--eye",
        type=float,
        nargs=3,
        metavar=("X", "Y", "Z"),
        default=None,
        help="Eye position",
    )
    parser.add_argument(
        "--light",
        type=float,
        nargs=3,
        metavar=("X", "Y", "Z"),
        default=None,
        help="Light position",
    )
    parser.add_argument("--brightness", type=float, default=None, help="Light brightness")
    parser.add_argument(
        "--output",
        type=str,
        default="sphere.png",
        help="Output file path (default: sphere.png)",
    )
    parser.add_argument(
        "--gamma",
        type=float,
        default=1.0,
        help="Gamma applied at export (default: 1.0)",
    )
    parser.add_argument("--show", action="store_true", help="Show a Matplotlib preview")
    parser.add_argument("--window", action="store_true", help="Show a Taichi preview window")
    parser.add_argument(
        "--arch",
        choices=("cpu", "gpu"),
        default="cpu",
        help="Taichi backend (default: cpu)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args(argv)


def render_scene(args: argparse.Namespace) -> Path:
    """Build the scene and settings from arguments, render, and save.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    from spheretrace.core.integrator import RenderConfig, render
    from spheretrace.preview.export import save_png
    from spheretrace.scene.scene import default_scene, load_scene_file

    if args.scene is not None:
        scene, config = load_scene_file(args.scene)
    else:
        scene, config = default_scene(), RenderConfig()

    overrides = {
        name: value
        for name, value in (
            ("width", args.width),
            ("height", args.height),
            ("eye", args.eye),
            ("light", args.light),
            ("brightness", args.brightness),
        )
        if value is not None
    }
    config = dataclasses.replace(config, **overrides)

    if not args.quiet:
        print(f"Rendering {len(scene)} sphere(s) at {config.width}x{config.height}...")

    start_time = time.time()
    image = render(scene, config)
    elapsed = time.time() - start_time

    output_file = Path(args.output)
    save_png(image, str(output_file), gamma=args.gamma)

    if not args.quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Render time: {elapsed:.2f}s")

    if args.show:
        from spheretrace.preview.display import show_image

        show_image(image, gamma=args.gamma)

    if args.window:
        from spheretrace.preview.interactive import PreviewWindow

        if not PreviewWindow.is_display_available():
            print("Warning: No display available, skipping preview window.", file=sys.stderr)
        else:
            window = PreviewWindow(config.width, config.height)
            window.update_image(image)
            window.run()

    return output_file


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    if args.arch == "gpu":
        ti.init(arch=ti.gpu)
    else:
        ti.init(arch=ti.cpu)

    try:
        render_scene(args)
        return 0
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
