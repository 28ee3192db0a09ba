"""
Plasma - demoscene sine-superposition field

The whole frame is one vectorised plasma_value call; the vertical axis
is stretched by the cell aspect so the circular waves stay circular.
"""

import numpy as np

from .clock import AnimationClock
from .experiment_base import Experiment
from .fields import CELL_ASPECT, plasma_value
from .palettes import get_palette
from .quantize import to_color_index, to_glyph


CHAR_SETS = {
    "blocks": " ░▒▓█",
    "dots": " ·•●█",
    "ascii": " .:-=+*#%@",
}

TIME_STEP = 0.06


class Plasma(Experiment):
    """Classic plasma built from five layered sine waves."""

    experiment_name = "plasma"
    experiment_label = "Plasma"
    description = "Classic demoscene plasma effect"

    def __init__(self, width=80, height=24, aspect=CELL_ASPECT, **overrides):
        super().__init__(width, height, aspect, **overrides)
        self.clock = AnimationClock(TIME_STEP, self.params["playing"])

    @classmethod
    def get_param_defs(cls):
        return [
            {"key": "scale", "label": "Scale", "kind": "int",
             "min": 1, "max": 20, "step": 1, "default": 4,
             "fmt": "d", "slider": True},
            {"key": "speed", "label": "Speed", "kind": "int",
             "min": 10, "max": 200, "step": 10, "default": 100,
             "fmt": "d", "slider": True},
            {"key": "palette", "label": "Palette", "kind": "enum",
             "choices": ["gray", "rainbow", "fire", "ocean"], "default": "gray"},
            {"key": "charset", "label": "Chars", "kind": "enum",
             "choices": ["blocks", "dots", "ascii"], "default": "blocks"},
            {"key": "playing", "label": "Playing", "kind": "bool",
             "default": True},
        ]

    def key_bindings(self):
        return {
            "space": [("toggle", "playing")],
            "c": [("cycle", "palette")],
            "d": [("cycle", "charset")],
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
        self.clock.reset()

    def palette(self, snapshot):
        return get_palette(snapshot["palette"])

    def sample(self, snapshot):
        xs = np.arange(self.width, dtype=np.float64)[np.newaxis, :]
        ys = np.arange(self.height, dtype=np.float64)[:, np.newaxis] * self.aspect
        value = plasma_value(xs, ys, snapshot["time"], snapshot["scale"])

        chars = CHAR_SETS[snapshot["charset"]]
        glyphs = to_glyph(value, chars)
        colors = to_color_index(value, len(self.palette(snapshot)))
        return glyphs, colors
