"""
Game of Life Experiment

Wraps a LifeGrid sized to the canvas. The tick interval is itself a live
parameter ("interval", ms per generation), so the scheduler reads it
through interval_ms() on every advance. Starts paused.
"""

import numpy as np

from .clock import GenerationClock
from .experiment_base import Experiment
from .fields import CELL_ASPECT
from .life import CONWAY, LifeGrid
from .palettes import get_palette
from .patterns import get_pattern, pattern_count


ALIVE = "█"
DEAD = " "


class GameOfLife(Experiment):
    """Conway's Game of Life on a toroidal (or bounded) grid."""

    experiment_name = "life"
    experiment_label = "Game of Life"
    description = "Conway's cellular automaton"

    def __init__(self, width=80, height=24, aspect=CELL_ASPECT, rule=CONWAY, **overrides):
        super().__init__(width, height, aspect, **overrides)
        self.grid = LifeGrid(self.width, self.height, wrap=self.params["wrap"], rule=rule)
        self.clock = GenerationClock(self.grid, self.params["playing"])
        self.randomize()

    @classmethod
    def get_param_defs(cls):
        return [
            {"key": "interval", "label": "Speed (ms)", "kind": "int",
             "min": 25, "max": 500, "step": 25, "default": 100,
             "fmt": "d", "slider": True, "inverted": True},
            {"key": "density", "label": "Density %", "kind": "int",
             "min": 10, "max": 90, "step": 10, "default": 30,
             "fmt": "d", "slider": True},
            {"key": "wrap", "label": "Wrap", "kind": "bool", "default": True},
            {"key": "pattern_index", "label": "Pattern", "kind": "int",
             "min": None, "max": None, "step": 1, "default": 0, "fmt": "d"},
            {"key": "playing", "label": "Playing", "kind": "bool",
             "default": False},
            {"key": "seed", "label": "Seed", "kind": "int",
             "min": None, "max": None, "step": 1, "default": 0, "fmt": "d"},
        ]

    def key_bindings(self):
        bindings = {
            "space": [("toggle", "playing")],
            "n": [("call", "step_once")],
            "x": [("call", "clear")],
            "r": [("reseed",)],
            "w": [("toggle", "wrap")],
            "p": [("call", "next_pattern")],
            "tab": [("focus_next",)],
            ",": [("adjust", -1)],
            "<": [("adjust", -1)],
            ".": [("call", "step_once"), ("adjust", 1)],
            ">": [("adjust", 1)],
        }
        for i in range(min(9, pattern_count())):
            bindings[str(i + 1)] = [("call", "load_pattern", i)]
        return bindings

    def interval_ms(self):
        return self.params["interval"]

    def tick(self):
        self.clock.playing = self.params["playing"]
        self.clock.tick()

    def step_once(self):
        self.clock.playing = self.params["playing"]
        return self.clock.step_once()

    def state(self):
        # step() swaps in a new array, so a snapshot keeps the generation it saw
        return {"generation": self.grid.generation, "cells": self.grid.cells}

    def on_param_change(self, key):
        if key == "wrap":
            self.grid.wrap = self.params["wrap"]

    def randomize(self, seed=None):
        if seed is None:
            seed = self.params["seed"]
        rng = np.random.default_rng(seed)
        self.grid.randomize(self.params["density"] / 100.0, rng)

    def reseed(self, seed):
        super().reseed(seed)
        self.randomize(seed)

    def clear(self):
        self.grid.clear()
        self.params.set("playing", False)

    def load_pattern(self, index):
        index = index % pattern_count()
        self.params.set("pattern_index", index)
        self.grid.place_centered(get_pattern(index).data)

    def next_pattern(self):
        self.load_pattern(self.params["pattern_index"] + 1)

    def palette(self, snapshot):
        return get_palette("life")

    def sample(self, snapshot):
        cells = snapshot["cells"]
        glyphs = np.where(cells, ALIVE, DEAD)
        colors = cells.astype(np.int64)
        return glyphs, colors

    @property
    def stats(self):
        s = self.grid.stats
        s["pattern"] = get_pattern(self.params["pattern_index"]).name
        return s
