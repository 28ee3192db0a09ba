"""
Flow Field - simplex noise rendered as a direction field

Each cell samples 3D noise at (x * s, y * s * aspect, t) with
s = scale / 100, and the sample becomes an angle (n + 1) * pi. The
angle picks an arrow (8-way) or a line glyph (symmetric 4-way); in dots
mode the raw magnitude picks a dot size instead. Time is the third noise
axis, so the field morphs smoothly while playing.
"""

import math
import numpy as np

from .clock import AnimationClock
from .experiment_base import Experiment
from .fields import CELL_ASPECT
from .noise import NoiseField
from .palettes import get_palette
from .quantize import (angle_to_bucket, angle_to_sector, glyph_table,
                       signed_to_unit, to_index)


ARROWS = "→↘↓↙←↖↑↗"
LINES = "─╲│╱"
DOTS = " ·•●█"

TIME_STEP = 0.12

DISPLAY_MODES = ["arrows", "lines", "dots"]


class FlowField(Experiment):
    """Perlin-style flow field from 3D simplex noise."""

    experiment_name = "flow"
    experiment_label = "Flow Field"
    description = "Simplex noise flow field with arrows"

    def __init__(self, width=80, height=24, aspect=CELL_ASPECT, **overrides):
        super().__init__(width, height, aspect, **overrides)
        self.noise = NoiseField(self.params["seed"])
        self.clock = AnimationClock(TIME_STEP, self.params["playing"])

    @classmethod
    def get_param_defs(cls):
        return [
            {"key": "scale", "label": "Scale", "kind": "int",
             "min": 1, "max": 20, "step": 1, "default": 1,
             "fmt": "d", "slider": True},
            {"key": "speed", "label": "Speed", "kind": "int",
             "min": 10, "max": 200, "step": 10, "default": 10,
             "fmt": "d", "slider": True},
            {"key": "seed", "label": "Seed", "kind": "int",
             "min": None, "max": None, "step": 1, "default": 42, "fmt": "d"},
            {"key": "display_mode", "label": "Display", "kind": "enum",
             "choices": DISPLAY_MODES, "default": "arrows"},
            {"key": "color_mode", "label": "Color", "kind": "bool",
             "default": False},
            {"key": "playing", "label": "Playing", "kind": "bool",
             "default": True},
        ]

    def key_bindings(self):
        return {
            "space": [("toggle", "playing")],
            "r": [("reseed",)],
            "d": [("cycle", "display_mode")],
            "c": [("toggle", "color_mode")],
            "tab": [("focus_next",)],
            "left": [("adjust", -1)],
            "right": [("adjust", 1)],
        }

    def tick(self):
        self.clock.playing = self.params["playing"]
        self.clock.tick(self.params["speed"])

    def state(self):
        return {"time": self.clock.time}

    def reseed(self, seed):
        super().reseed(seed)
        self.noise.reseed(self.params["seed"])
        self.clock.reset()

    def palette(self, snapshot):
        if snapshot["color_mode"]:
            return get_palette("flow_rainbow")
        return get_palette("flow_gray")

    def sample(self, snapshot):
        s = snapshot["scale"] / 100.0
        xs = np.arange(self.width, dtype=np.float64) * s
        ys = np.arange(self.height, dtype=np.float64) * s * self.aspect
        n = self.noise.sample3_grid(xs[np.newaxis, :], ys[:, np.newaxis],
                                    snapshot["time"])
        angle = (n + 1.0) * math.pi

        mode = snapshot["display_mode"]
        if mode == "arrows":
            glyphs = glyph_table(ARROWS)[angle_to_sector(angle, 8)]
        elif mode == "lines":
            glyphs = glyph_table(LINES)[angle_to_sector(angle, 4, span=math.pi)]
        else:
            glyphs = glyph_table(DOTS)[to_index(signed_to_unit(n), len(DOTS))]

        palette = self.palette(snapshot)
        if snapshot["color_mode"]:
            colors = angle_to_bucket(angle, len(palette))
        else:
            colors = to_index(signed_to_unit(n), len(palette))
        return glyphs, colors

    @property
    def stats(self):
        return {"time": self.clock.time}
