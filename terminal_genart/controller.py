"""
Experiment Controller - key presses to parameter changes

An experiment publishes a key table:

    {"space": [("toggle", "playing")],
     "d":     [("cycle", "display_mode")],
     "r":     [("reseed",)],
     ",":     [("adjust", -1)],
     "tab":   [("focus_next",)],
     "left":  [("call", "pan", -1, 0)]}

The controller interprets it synchronously. Every bound key has a
deterministic effect; unbound keys do nothing. Held keys simply repeat
the same action.
"""

import random


SEED_RANGE = 100000


class ExperimentController:
    """Owns focus state and applies key actions to one experiment."""

    def __init__(self, experiment, rng=None):
        self.experiment = experiment
        self.rng = rng if rng is not None else random.Random()
        self.focused = None
        self._fix_focus()

    @property
    def params(self):
        return self.experiment.params

    def _fix_focus(self):
        """Keep focus on a slider that is currently focusable."""
        focusable = self.params.focusable_sliders()
        if not focusable:
            self.focused = None
        elif self.focused not in focusable:
            self.focused = focusable[0]

    def focus_next(self):
        focusable = self.params.focusable_sliders()
        if not focusable:
            self.focused = None
            return None
        if self.focused in focusable:
            i = focusable.index(self.focused)
            self.focused = focusable[(i + 1) % len(focusable)]
        else:
            self.focused = focusable[0]
        return self.focused

    def reseed(self):
        seed = self.rng.randrange(SEED_RANGE)
        self.experiment.reseed(seed)
        return seed

    def handle_key(self, key):
        """Apply every action bound to `key`.

        Returns:
            True if the key was bound, False for a no-op
        """
        actions = self.experiment.key_bindings().get(key)
        if not actions:
            return False
        for action in actions:
            self._apply(action)
        self._fix_focus()
        return True

    def _apply(self, action):
        verb = action[0]
        args = action[1:]
        params = self.params
        if verb == "toggle":
            key = args[0]
            params.toggle(key)
            self.experiment.on_param_change(key)
        elif verb == "cycle":
            key = args[0]
            direction = args[1] if len(args) > 1 else 1
            params.cycle(key, direction)
            self.experiment.on_param_change(key)
        elif verb == "reseed":
            self.reseed()
        elif verb == "adjust":
            if self.focused is not None:
                params.adjust(self.focused, args[0])
                self.experiment.on_param_change(self.focused)
        elif verb == "focus_next":
            self.focus_next()
        elif verb == "call":
            getattr(self.experiment, args[0])(*args[1:])
        else:
            raise ValueError(f"unknown controller action {verb!r}")
