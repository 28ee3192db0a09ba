"""
Session - headless frame loop shared by every front end

The viewer, the terminal loop and --snap all drive the same Session:

    session = Session(create_experiment("plasma"))
    session.post_key("c")          # queued, applied before the next frame
    frame = session.advance(16)    # pump input, run timers, render

Input is applied in pump() before the frame's snapshot is taken, so a
frame never sees a half-applied key. Everything runs on one thread.

Usage:
    from terminal_genart.session import Session
    frames = Session(create_experiment("flow")).run_frames(10)
"""

from collections import deque

from .clock import Scheduler
from .controller import ExperimentController
from .experiment_base import RENDER_INTERVAL_MS


class Session:
    """Owns one active experiment, its controller and its timers.

    Args:
        experiment: Experiment instance to run
        rng: Optional random.Random used for reseeding (deterministic tests)
    """

    def __init__(self, experiment, rng=None):
        self.rng = rng
        self.scheduler = Scheduler()
        self.pending_keys = deque()
        self.closed = False
        self.frames_rendered = 0
        self.experiment = None
        self.controller = None
        self._timer = None
        self._attach(experiment)

    def _attach(self, experiment):
        self.experiment = experiment
        self.controller = ExperimentController(experiment, self.rng)
        self._timer = self.scheduler.every(experiment.interval_ms, experiment.tick)

    def _detach(self):
        if self._timer is not None:
            self.scheduler.cancel(self._timer)
            self._timer = None
        if self.experiment is not None:
            self.experiment.teardown()

    @property
    def width(self):
        return self.experiment.width

    @property
    def height(self):
        return self.experiment.height

    def post_key(self, key):
        """Queue a key press; it takes effect at the next pump()."""
        if not self.closed:
            self.pending_keys.append(key)

    def pump(self):
        """Apply all queued keys in arrival order. Returns how many were bound."""
        handled = 0
        while self.pending_keys:
            key = self.pending_keys.popleft()
            if self.controller.handle_key(key):
                handled += 1
        return handled

    def frame(self):
        """Render one frame from a single frozen snapshot."""
        snapshot = self.experiment.snapshot()
        frame = self.experiment.render(snapshot)
        self.frames_rendered += 1
        return frame

    def advance(self, dt_ms=RENDER_INTERVAL_MS):
        """One loop iteration: input, timers, render."""
        if self.closed:
            raise RuntimeError("session is closed")
        self.pump()
        self.scheduler.advance(dt_ms)
        return self.frame()

    def run_frames(self, n, dt_ms=RENDER_INTERVAL_MS):
        """Drive n iterations headlessly and return the frames."""
        return [self.advance(dt_ms) for _ in range(n)]

    def switch(self, experiment):
        """Tear down the current experiment and start another."""
        self._detach()
        self.pending_keys.clear()
        self._attach(experiment)

    def close(self):
        """Stop all timers. Safe to call more than once."""
        if self.closed:
            return
        self._detach()
        self.scheduler.cancel_all()
        self.pending_keys.clear()
        self.closed = True

    @property
    def focused(self):
        return self.controller.focused
