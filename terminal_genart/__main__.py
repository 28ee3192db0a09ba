"""
Terminal Generative Art - Entry Point

Usage:
    python -m terminal_genart [experiment] [--size WxH] [--seed N]
                              [--aspect A] [--terminal] [--snap N]

Examples:
    python -m terminal_genart
    python -m terminal_genart plasma
    python -m terminal_genart julia --size 120x40
    python -m terminal_genart flow --terminal
    python -m terminal_genart life --seed 7 --snap 50

Experiments:
    flow        - Simplex noise flow field
    plasma      - Demoscene sine plasma
    fractal     - Mandelbrot / Julia explorer
    life        - Conway's Game of Life
    tunnel      - Forward-travelling ring tunnel
    marquee     - Scrolling LED ticker

Without an experiment the pygame viewer opens on its menu.
--terminal draws with ANSI escapes in the current terminal instead.
--snap N runs N frames headlessly and saves a PNG to screenshots/.
Use --list to see all presets.
"""

import os
import sys

from .fields import CELL_ASPECT
from .presets import (DEFAULT_CANVAS, EXPERIMENT_ORDER, PRESET_ORDER,
                      create_experiment, list_presets)


class UsageError(Exception):
    """Bad command line."""


def parse_args(argv):
    """Parse argv (without the program name) into an options dict.

    Raises:
        UsageError: unknown argument or malformed value
    """
    opts = {
        "experiment": None,
        "width": DEFAULT_CANVAS[0],
        "height": DEFAULT_CANVAS[1],
        "seed": None,
        "aspect": CELL_ASPECT,
        "terminal": False,
        "snap": 0,
        "list": False,
        "help": False,
    }
    args = list(argv)
    i = 0
    while i < len(args):
        arg = args[i]
        has_value = i + 1 < len(args)
        try:
            if arg == "--size" and has_value:
                parts = args[i + 1].lower().split("x")
                opts["width"], opts["height"] = int(parts[0]), int(parts[1])
                if opts["width"] < 1 or opts["height"] < 1:
                    raise UsageError(f"Size must be positive: {args[i + 1]}")
                i += 2
            elif arg == "--seed" and has_value:
                opts["seed"] = int(args[i + 1])
                i += 2
            elif arg == "--aspect" and has_value:
                opts["aspect"] = float(args[i + 1])
                if opts["aspect"] <= 0:
                    raise UsageError(f"Aspect must be positive: {args[i + 1]}")
                i += 2
            elif arg == "--snap" and has_value:
                opts["snap"] = int(args[i + 1])
                i += 2
            elif arg == "--terminal":
                opts["terminal"] = True
                i += 1
            elif arg == "--list":
                opts["list"] = True
                i += 1
            elif arg in ("--help", "-h"):
                opts["help"] = True
                i += 1
            elif arg in PRESET_ORDER:
                opts["experiment"] = arg
                i += 1
            else:
                raise UsageError(f"Unknown argument: {arg}")
        except (ValueError, IndexError):
            raise UsageError(f"Bad value for {arg}: {args[i + 1]}") from None
    return opts


def print_presets():
    print("\nAvailable presets:")
    for name in EXPERIMENT_ORDER:
        print(f"\n  [{name}]")
        for key, label, desc in list_presets(name):
            print(f"    {key:16s} {label:20s} {desc}")
    print()


def snap(name, width, height, aspect, seed, frames):
    """Headless mode: run N frames, save screenshot, exit."""
    from .session import Session
    from .sinks import ImageSink

    screenshots_dir = os.path.join(os.getcwd(), "screenshots")
    os.makedirs(screenshots_dir, exist_ok=True)

    session = Session(create_experiment(name, width, height, aspect, seed))
    print(f"[genart] {name}: running {frames} frames...", end="", flush=True)
    frame = None
    for frame in session.run_frames(frames):
        pass
    session.close()

    sink = ImageSink()
    path = os.path.join(screenshots_dir, f"genart_{name}.png")
    img = sink.save(frame, path)
    img.save(os.path.join(screenshots_dir, "latest.png"))
    print(f" saved: {path} ({frame.segment_count} segments)")
    return path


def main(argv=None):
    if argv is None:
        argv = sys.argv[1:]
    try:
        opts = parse_args(argv)
    except UsageError as e:
        print(f"[genart] {e}")
        print("[genart] Use --list to see available experiments")
        return 1

    if opts["help"]:
        print(__doc__)
        return 0
    if opts["list"]:
        print_presets()
        return 0

    size = f"{opts['width']}x{opts['height']}"

    if opts["snap"] > 0:
        name = opts["experiment"] or EXPERIMENT_ORDER[0]
        print(f"[genart] Headless snap mode: {name} @ {size}, {opts['snap']} frames")
        snap(name, opts["width"], opts["height"], opts["aspect"], opts["seed"], opts["snap"])
        return 0

    if opts["terminal"]:
        from .terminal import run_terminal
        name = opts["experiment"] or EXPERIMENT_ORDER[0]
        run_terminal(name, opts["width"], opts["height"], opts["aspect"], opts["seed"])
        return 0

    from .viewer import Viewer
    print("[genart] Starting Terminal Generative Art viewer")
    print(f"  Experiment: {opts['experiment'] or 'menu'}")
    print(f"  Canvas: {size}  aspect {opts['aspect']}")
    print()
    viewer = Viewer(start=opts["experiment"], width=opts["width"],
                    height=opts["height"], aspect=opts["aspect"], seed=opts["seed"])
    viewer.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
