"""
Parameter Sets - declared, range-checked experiment parameters

Each experiment declares its parameters as a list of dicts:

    {"key": "scale", "label": "Scale", "kind": "int",
     "min": 1, "max": 20, "step": 1, "default": 4,
     "fmt": "d", "slider": True}

kind is one of "int", "float", "enum", "bool". min/max of None means
unbounded on that side (seed, pan centre). Enum parameters also carry
"choices". Optional keys:

    inverted  -- "+" on the slider lowers the value (tick interval: faster)
    when      -- callable(values) -> bool; the slider is only focusable
                 while it returns True

Out-of-range values are clamped, never rejected; enums wrap.
"""

import math
from types import MappingProxyType


KINDS = ("int", "float", "enum", "bool")


def _check_def(d):
    if d.get("kind", "float") not in KINDS:
        raise ValueError(f"unknown parameter kind {d.get('kind')!r} for {d['key']!r}")
    if d.get("kind") == "enum" and not d.get("choices"):
        raise ValueError(f"enum parameter {d['key']!r} has no choices")


class ParameterSet:
    """Live parameter values for one experiment.

    Args:
        defs: List of parameter definition dicts
        overrides: Optional {key: value} applied (and clamped) over defaults
    """

    def __init__(self, defs, overrides=None):
        self.defs = {}
        self.order = []
        for d in defs:
            _check_def(d)
            self.defs[d["key"]] = d
            self.order.append(d["key"])
        self.values = {}
        self.reset()
        for key, value in (overrides or {}).items():
            self.set(key, value)

    def reset(self, keys=None):
        """Restore defaults for `keys` (all parameters when None)."""
        for key in keys if keys is not None else self.order:
            d = self.defs[key]
            self.values[key] = self._coerce(d, d["default"])

    def _coerce(self, d, value):
        kind = d.get("kind", "float")
        if kind == "bool":
            return bool(value)
        if kind == "enum":
            choices = d["choices"]
            if isinstance(value, str):
                if value not in choices:
                    raise ValueError(f"{value!r} is not one of {choices} for {d['key']!r}")
                return value
            return choices[int(value) % len(choices)]

        lo = d.get("min")
        hi = d.get("max")
        value = float(value)
        if math.isnan(value):
            value = float(d["default"])
        elif math.isinf(value):
            # Infinity sits on the bound it points at, or the default when unbounded
            bound = hi if value > 0 else lo
            value = float(d["default"] if bound is None else bound)
        if kind == "int":
            value = int(round(value))
        if lo is not None and value < lo:
            value = lo
        if hi is not None and value > hi:
            value = hi
        if kind == "float" and d.get("step"):
            # Keep repeated +0.05 steps from drifting (-0.7 + 0.05 * 3 ...)
            value = round(float(value), 10)
        return value

    def get(self, key):
        return self.values[key]

    def __getitem__(self, key):
        return self.values[key]

    def __contains__(self, key):
        return key in self.values

    def set(self, key, value):
        """Store a value, clamped to the declared range. Returns stored value."""
        d = self.defs[key]
        self.values[key] = self._coerce(d, value)
        return self.values[key]

    def adjust(self, key, direction):
        """Move a numeric parameter by direction * step, clamped."""
        d = self.defs[key]
        kind = d.get("kind", "float")
        if kind in ("enum", "bool"):
            return self.cycle(key, direction)
        if d.get("inverted"):
            direction = -direction
        step = d.get("step") or 1
        return self.set(key, self.values[key] + direction * step)

    def cycle(self, key, direction=1):
        """Next (or previous) enum choice, wrapping; bools flip."""
        d = self.defs[key]
        kind = d.get("kind", "float")
        if kind == "bool":
            return self.toggle(key)
        if kind != "enum":
            return self.adjust(key, direction)
        return self.set(key, (self.index_of(key) + direction) % len(d["choices"]))

    def toggle(self, key):
        d = self.defs[key]
        if d.get("kind") != "bool":
            raise ValueError(f"{key!r} is not a bool parameter")
        self.values[key] = not self.values[key]
        return self.values[key]

    def index_of(self, key):
        """Position of an enum's current value within its choices."""
        return self.defs[key]["choices"].index(self.values[key])

    def snapshot(self):
        """Read-only copy of the current values."""
        return MappingProxyType(dict(self.values))

    def focusable_sliders(self):
        """Keys of sliders the user can currently focus, in declared order."""
        keys = []
        for key in self.order:
            d = self.defs[key]
            if not d.get("slider"):
                continue
            when = d.get("when")
            if when is not None and not when(self.values):
                continue
            keys.append(key)
        return keys

    def format(self, key):
        """Display string for a value using its fmt."""
        d = self.defs[key]
        value = self.values[key]
        fmt = d.get("fmt")
        if fmt and d.get("kind") in ("int", "float"):
            return format(value, fmt)
        if d.get("kind") == "bool":
            return "ON" if value else "OFF"
        return str(value)
