"""
Tunnel - concentric rings travelling outward from the centre
"""

import numpy as np

from .clock import AnimationClock
from .experiment_base import Experiment
from .fields import CELL_ASPECT, tunnel_intensity
from .palettes import get_palette
from .quantize import to_color_index, to_glyph


CHAR_SETS = {
    "lines": " ·:=≡#",
    "blocks": " ░▒▓█",
}

TIME_STEP = 0.04


class Tunnel(Experiment):
    experiment_name = "tunnel"
    experiment_label = "Tunnel"
    description = "Infinite forward-travelling tunnel"

    def __init__(self, width=80, height=24, aspect=CELL_ASPECT, **overrides):
        super().__init__(width, height, aspect, **overrides)
        self.clock = AnimationClock(TIME_STEP, self.params["playing"])

    @classmethod
    def get_param_defs(cls):
        return [
            {"key": "speed", "label": "Speed", "kind": "int",
             "min": 10, "max": 200, "step": 10, "default": 100,
             "fmt": "d", "slider": True},
            {"key": "rings", "label": "Rings", "kind": "int",
             "min": 4, "max": 20, "step": 1, "default": 12,
             "fmt": "d", "slider": True},
            {"key": "charset", "label": "Chars", "kind": "enum",
             "choices": ["lines", "blocks"], "default": "lines"},
            {"key": "playing", "label": "Playing", "kind": "bool",
             "default": True},
        ]

    def key_bindings(self):
        return {
            "space": [("toggle", "playing")],
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
        return get_palette("tunnel_gray")

    def sample(self, snapshot):
        xs = np.arange(self.width, dtype=np.float64)[np.newaxis, :]
        ys = np.arange(self.height, dtype=np.float64)[:, np.newaxis]
        intensity = tunnel_intensity(xs, ys, snapshot["time"], self.width,
                                     self.height, snapshot["rings"], self.aspect)

        chars = CHAR_SETS[snapshot["charset"]]
        glyphs = to_glyph(intensity, chars)
        colors = to_color_index(intensity, len(self.palette(snapshot)))
        return glyphs, colors
