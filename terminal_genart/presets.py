"""
Experiment Registry and Presets

Each preset names an experiment class and a set of parameter overrides
known to look good. The "experiment" field picks the class; every other
field except name/description is passed to its constructor.
"""

from .fields import CELL_ASPECT
from .flow_field import FlowField
from .fractal import FractalExplorer
from .game_of_life import GameOfLife
from .marquee import Marquee
from .plasma import Plasma
from .tunnel import Tunnel


DEFAULT_CANVAS = (80, 24)

EXPERIMENT_CLASSES = {
    "flow": FlowField,
    "plasma": Plasma,
    "fractal": FractalExplorer,
    "life": GameOfLife,
    "tunnel": Tunnel,
    "marquee": Marquee,
}

# Menu order (number keys 1..6 in the viewer)
EXPERIMENT_ORDER = ["flow", "plasma", "fractal", "life", "tunnel", "marquee"]

PRESETS = {
    # =====================================================================
    # FLOW FIELD
    # =====================================================================
    "flow": {
        "experiment": "flow",
        "name": "Flow Field",
        "description": "Slow drifting arrows over simplex noise",
    },
    "flow_lines": {
        "experiment": "flow",
        "name": "Flow Lines",
        "description": "Symmetric line glyphs, coarser noise",
        "display_mode": "lines", "scale": 4, "speed": 30,
    },
    "flow_rainbow": {
        "experiment": "flow",
        "name": "Flow Rainbow",
        "description": "Arrows colored by direction",
        "color_mode": True, "scale": 2, "speed": 20,
    },

    # =====================================================================
    # PLASMA
    # =====================================================================
    "plasma": {
        "experiment": "plasma",
        "name": "Plasma",
        "description": "Classic demoscene plasma",
    },
    "plasma_fire": {
        "experiment": "plasma",
        "name": "Plasma Fire",
        "description": "Red to yellow plasma in dot glyphs",
        "palette": "fire", "charset": "dots", "scale": 6,
    },
    "plasma_ocean": {
        "experiment": "plasma",
        "name": "Plasma Ocean",
        "description": "Slow cyan waves",
        "palette": "ocean", "speed": 50,
    },

    # =====================================================================
    # FRACTAL
    # =====================================================================
    "fractal": {
        "experiment": "fractal",
        "name": "Mandelbrot",
        "description": "The full Mandelbrot set",
    },
    "julia": {
        "experiment": "fractal",
        "name": "Julia",
        "description": "Julia set for c = -0.7 + 0.27015i",
        "julia_mode": True, "center_x": 0.0, "center_y": 0.0,
    },
    "seahorse": {
        "experiment": "fractal",
        "name": "Seahorse Valley",
        "description": "Zoomed into the valley between the bulbs",
        "center_x": -0.75, "center_y": 0.1, "zoom": 15.0, "max_iterations": 200,
    },

    # =====================================================================
    # GAME OF LIFE
    # =====================================================================
    "life": {
        "experiment": "life",
        "name": "Game of Life",
        "description": "Conway's Life, random soup",
    },
    "highlife": {
        "experiment": "life",
        "name": "HighLife",
        "description": "B36/S23 - replicators",
        "rule": "B36/S23",
    },
    "day_night": {
        "experiment": "life",
        "name": "Day & Night",
        "description": "B3678/S34678 - symmetric live/dead",
        "rule": "B3678/S34678", "density": 50,
    },

    # =====================================================================
    # TUNNEL / MARQUEE
    # =====================================================================
    "tunnel": {
        "experiment": "tunnel",
        "name": "Tunnel",
        "description": "Rings rushing outward",
    },
    "tunnel_blocks": {
        "experiment": "tunnel",
        "name": "Block Tunnel",
        "description": "Shaded block rings",
        "charset": "blocks", "rings": 8,
    },
    "marquee": {
        "experiment": "marquee",
        "name": "Marquee",
        "description": "Amber LED ticker",
    },
    "marquee_green": {
        "experiment": "marquee",
        "name": "Green Ticker",
        "description": "Fast green LED ticker",
        "palette": "green", "speed": 100,
    },
}

PRESET_ORDER = list(PRESETS.keys())

_META_KEYS = ("experiment", "name", "description")


def get_preset(name):
    """Get a preset by name. Returns None if not found."""
    return PRESETS.get(name)


def list_presets(experiment=None):
    """Return list of (key, name, description) for presets.
    If experiment is specified, filter to that experiment only."""
    result = []
    for key in PRESET_ORDER:
        p = PRESETS[key]
        if experiment and p["experiment"] != experiment:
            continue
        result.append((key, p["name"], p["description"]))
    return result


def preset_overrides(preset):
    return {k: v for k, v in preset.items() if k not in _META_KEYS}


def create_experiment(name, width=None, height=None, aspect=CELL_ASPECT, seed=None):
    """Instantiate an experiment from a preset or bare experiment name.

    Raises:
        ValueError: unknown name
    """
    preset = get_preset(name)
    if preset is None:
        raise ValueError(
            f"Unknown experiment or preset {name!r}. "
            f"Available: {', '.join(PRESET_ORDER)}")
    cls = EXPERIMENT_CLASSES[preset["experiment"]]
    if width is None:
        width = DEFAULT_CANVAS[0]
    if height is None:
        height = DEFAULT_CANVAS[1]
    overrides = preset_overrides(preset)
    if seed is not None and any(d["key"] == "seed" for d in cls.get_param_defs()):
        overrides["seed"] = seed
    return cls(width, height, aspect, **overrides)
