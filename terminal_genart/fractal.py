"""
Fractal Explorer - interactive Mandelbrot and Julia sets

There is no animation clock here: the picture only changes when the view
(centre, zoom) or the iteration parameters change. Arrow keys pan by
0.5 / zoom, so a key press always moves the same fraction of the screen.
"""

import numpy as np

from .experiment_base import Experiment
from .fields import complex_plane, escape_time_grid
from .palettes import get_palette
from .quantize import glyph_table


FRACTAL_CHARS = " .:-=+*#%@"

PAN_FRACTION = 0.5
ZOOM_FACTOR = 1.5
MIN_ZOOM = 0.1

MANDELBROT_CENTER = (-0.5, 0.0)
JULIA_CENTER = (0.0, 0.0)

# Hue cycles around the wheel this many times from 0 to max_iterations
HUE_CYCLES = 3


def _julia_only(values):
    return values["julia_mode"]


class FractalExplorer(Experiment):
    """Mandelbrot / Julia escape-time explorer."""

    experiment_name = "fractal"
    experiment_label = "Fractal Explorer"
    description = "Mandelbrot and Julia set explorer"

    @classmethod
    def get_param_defs(cls):
        return [
            {"key": "max_iterations", "label": "Iterations", "kind": "int",
             "min": 20, "max": 500, "step": 20, "default": 100,
             "fmt": "d", "slider": True},
            {"key": "julia_real", "label": "Julia Real (c.r)", "kind": "float",
             "min": -2.0, "max": 2.0, "step": 0.05, "default": -0.7,
             "fmt": ".2f", "slider": True, "when": _julia_only},
            {"key": "julia_imag", "label": "Julia Imag (c.i)", "kind": "float",
             "min": -2.0, "max": 2.0, "step": 0.05, "default": 0.27015,
             "fmt": ".2f", "slider": True, "when": _julia_only},
            {"key": "julia_mode", "label": "Julia", "kind": "bool",
             "default": False},
            {"key": "color_mode", "label": "Color", "kind": "bool",
             "default": True},
            {"key": "center_x", "label": "", "kind": "float",
             "min": None, "max": None, "default": MANDELBROT_CENTER[0]},
            {"key": "center_y", "label": "", "kind": "float",
             "min": None, "max": None, "default": MANDELBROT_CENTER[1]},
            {"key": "zoom", "label": "Zoom", "kind": "float",
             "min": MIN_ZOOM, "max": None, "default": 1.0, "fmt": ".1f"},
        ]

    def key_bindings(self):
        zoom_in = [("call", "zoom_by", ZOOM_FACTOR)]
        zoom_out = [("call", "zoom_by", 1.0 / ZOOM_FACTOR)]
        slower = [("adjust", -1)]
        faster = [("adjust", 1)]
        return {
            "left": [("call", "pan", -1, 0)],
            "right": [("call", "pan", 1, 0)],
            "up": [("call", "pan", 0, -1)],
            "down": [("call", "pan", 0, 1)],
            "+": zoom_in, "=": zoom_in, "]": zoom_in,
            "-": zoom_out, "_": zoom_out, "[": zoom_out,
            "m": [("toggle", "julia_mode")],
            "c": [("toggle", "color_mode")],
            "r": [("call", "reset_view")],
            "tab": [("focus_next",)],
            ",": slower, "<": slower,
            ".": faster, ">": faster,
        }

    def pan(self, dx, dy):
        """Move the view by whole pan steps (PAN_FRACTION / zoom each)."""
        amount = PAN_FRACTION / self.params["zoom"]
        self.params.set("center_x", self.params["center_x"] + dx * amount)
        self.params.set("center_y", self.params["center_y"] + dy * amount)

    def zoom_by(self, factor):
        """Multiply zoom; the floor of MIN_ZOOM is enforced by the parameter."""
        return self.params.set("zoom", self.params["zoom"] * factor)

    def reset_view(self):
        center = JULIA_CENTER if self.params["julia_mode"] else MANDELBROT_CENTER
        self.params.set("center_x", center[0])
        self.params.set("center_y", center[1])
        self.params.set("zoom", 1.0)

    def palette(self, snapshot):
        if snapshot["color_mode"]:
            return get_palette("fractal_hue")
        return get_palette("fractal_gray")

    def sample(self, snapshot):
        max_iter = snapshot["max_iterations"]
        re, im = complex_plane(self.width, self.height, snapshot["center_x"],
                               snapshot["center_y"], snapshot["zoom"], self.aspect)
        _, escaped, smooth = escape_time_grid(
            re, im, max_iter, snapshot["julia_mode"],
            (snapshot["julia_real"], snapshot["julia_imag"]))

        ratio = np.where(escaped, smooth / max_iter, 0.0)

        # Escaped points use floor(ratio * (len - 1)); inside points the first glyph
        n_chars = len(FRACTAL_CHARS)
        char_idx = np.clip(np.floor(ratio * (n_chars - 1)), 0, n_chars - 1).astype(np.int64)
        char_idx[~escaped] = 0
        glyphs = glyph_table(FRACTAL_CHARS)[char_idx]

        # Palette entry 0 is reserved for points inside the set
        levels = len(self.palette(snapshot)) - 1
        if snapshot["color_mode"]:
            hue = np.mod(ratio * 360.0 * HUE_CYCLES, 360.0)
            shade = np.floor(hue / 360.0 * levels)
        else:
            shade = np.floor(np.clip(ratio, 0.0, 1.0) * (levels - 0.01))
        colors = 1 + np.clip(shade, 0, levels - 1).astype(np.int64)
        colors[~escaped] = 0
        return glyphs, colors

    @property
    def stats(self):
        return {
            "mode": "Julia" if self.params["julia_mode"] else "Mandelbrot",
            "center": f"({self.params['center_x']:.3f}, {self.params['center_y']:.3f})",
        }
