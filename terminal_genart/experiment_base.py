"""
Abstract Base Class for Generative Art Experiments

Every visualisation (flow field, plasma, fractal, Game of Life, ...)
implements this interface so the session, the viewer and the terminal
loop can drive any of them interchangeably.

Per frame the pipeline is always the same:

    snapshot = experiment.snapshot()          # frozen parameters + time
    glyphs, colors = experiment.sample(snapshot)
    frame = batch_frame(glyphs, colors, experiment.palette(snapshot))

Only sample() and palette() differ between experiments.
"""

from abc import ABC, abstractmethod
from types import MappingProxyType

from .fields import CELL_ASPECT
from .params import ParameterSet
from .segments import batch_frame


RENDER_INTERVAL_MS = 16


class Experiment(ABC):
    """Base class for generative art experiments."""

    experiment_name = ""   # e.g. "flow", "life"
    experiment_label = ""  # e.g. "Flow Field", "Game of Life"
    description = ""
    tick_interval_ms = RENDER_INTERVAL_MS

    def __init__(self, width=80, height=24, aspect=CELL_ASPECT, **overrides):
        if width < 1 or height < 1:
            raise ValueError(f"canvas needs positive dimensions, got {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        self.aspect = aspect
        self.params = ParameterSet(self.get_param_defs(), overrides)

    @classmethod
    @abstractmethod
    def get_param_defs(cls):
        """Return list of parameter definitions (see params.py)."""

    @abstractmethod
    def key_bindings(self):
        """Return {key name: [action, ...]} for the controller."""

    @abstractmethod
    def sample(self, snapshot):
        """Sample every cell for one frame.

        Returns:
            (glyphs, color_indices): (height, width) arrays of single
            characters and of palette indices
        """

    @abstractmethod
    def palette(self, snapshot):
        """Active palette (tuple of RGB tuples) for a snapshot."""

    def interval_ms(self):
        """Milliseconds between ticks. May depend on live parameters."""
        return self.tick_interval_ms

    def tick(self):
        """Advance one scheduler tick (time, generation or scroll offset)."""

    def state(self):
        """Non-parameter values a frame depends on (time, generation)."""
        return {}

    def snapshot(self):
        """Immutable view of parameters plus state for one frame."""
        values = dict(self.params.values)
        values.update(self.state())
        return MappingProxyType(values)

    def render(self, snapshot=None):
        """Sample and batch one frame."""
        if snapshot is None:
            snapshot = self.snapshot()
        glyphs, colors = self.sample(snapshot)
        return batch_frame(glyphs, colors, self.palette(snapshot))

    def reseed(self, seed):
        """Take a new seed and restart the animation from zero."""
        if "seed" in self.params:
            self.params.set("seed", seed)

    def on_param_change(self, key):
        """Hook run after the controller changes a parameter."""

    @property
    def stats(self):
        """Values for the status panel."""
        return {}

    def status_lines(self):
        """Short text lines describing the current state, for sidebars."""
        lines = []
        for key in self.params.order:
            d = self.params.defs[key]
            if d.get("label"):
                lines.append(f"{d['label']}: {self.params.format(key)}")
        for key, value in self.stats.items():
            if isinstance(value, float):
                value = f"{value:.1f}"
            lines.append(f"{key}: {value}")
        return lines

    def teardown(self):
        """Release anything held by the experiment. Safe to call twice."""
