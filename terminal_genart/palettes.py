"""
Color Palettes for Glyph Rendering

Each palette is a small tuple of (r, g, b) ints. Palettes are built once
at import from a few generator functions (hue ramps, lightness ramps,
gray ramps, hex lists) and never mutated; experiments only change which
one is active.

Palettes are deliberately short (2-9 entries): the fewer distinct colors,
the more often neighbouring cells share one and the fewer segments a row
batches into.
"""

import colorsys


BACKGROUND = (0, 0, 0)


def hsl_to_rgb(h, s, l):
    """HSL (h in degrees, s and l in [0, 1]) to an (r, g, b) int tuple."""
    r, g, b = colorsys.hls_to_rgb((h % 360) / 360.0, l, s)
    return (int(round(r * 255)), int(round(g * 255)), int(round(b * 255)))


def hex_to_rgb(hex_str):
    """'#rgb' or '#rrggbb' to an (r, g, b) tuple."""
    h = hex_str.lstrip("#")
    if len(h) == 3:
        h = "".join(c * 2 for c in h)
    return (int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16))


# --- Generators ---

def hue_ramp(n, saturation=0.8, lightness=0.5, start=0.0, span=360.0):
    """n evenly spaced hues starting at `start` degrees."""
    return tuple(hsl_to_rgb(start + (i / n) * span, saturation, lightness)
                 for i in range(n))


def lightness_ramp(n, hue_start, hue_span, saturation, l_start, l_span):
    """Hue and lightness both sweep linearly (fire, ocean)."""
    colors = []
    for i in range(n):
        t = i / n
        colors.append(hsl_to_rgb(hue_start + t * hue_span, saturation,
                                 l_start + t * l_span))
    return tuple(colors)


def gray_ramp(n, lo=40, span=200):
    colors = []
    for i in range(n):
        v = int(lo + (i / n) * span)
        colors.append((v, v, v))
    return tuple(colors)


def from_hex(*hex_colors):
    return tuple(hex_to_rgb(h) for h in hex_colors)


# --- Palette Definitions ---

PALETTES = {
    # Plasma
    "gray": gray_ramp(6),
    "rainbow": hue_ramp(6, 0.8, 0.5),
    "fire": lightness_ramp(6, 0, 60, 0.9, 0.3, 0.4),        # red -> yellow
    "ocean": lightness_ramp(6, 180, 60, 0.7, 0.3, 0.3),     # cyan -> blue

    # Flow field
    "flow_gray": from_hex("#444", "#666", "#888", "#aaa", "#ccc", "#fff"),
    "flow_rainbow": hue_ramp(6, 0.75, 0.55),

    # Tunnel
    "tunnel_gray": from_hex("#222", "#444", "#666", "#888", "#aaa", "#ddd"),

    # Fractal: entry 0 is the inside of the set
    "fractal_hue": ((0, 0, 0),) + hue_ramp(12, 0.8, 0.5),
    "fractal_gray": ((0, 0, 0),) + gray_ramp(8, 48, 232),

    # Game of Life: dead, alive
    "life": from_hex("#1a1a1a", "#00ff00"),

    # Marquee LED colors, darkest to brightest
    "amber": from_hex("#3d2800", "#5c3d00", "#7a5200", "#996600",
                      "#b87a00", "#d68f00", "#f5a300", "#ffb700"),
    "green": from_hex("#002200", "#003300", "#004400", "#005500",
                      "#006600", "#007700", "#008800", "#00aa00"),
    "blue": from_hex("#001133", "#001a4d", "#002266", "#002b80",
                     "#003399", "#003db3", "#0047cc", "#0052e6"),
    "red": from_hex("#330000", "#4d0000", "#660000", "#800000",
                    "#990000", "#b30000", "#cc0000", "#e60000"),
    "white": from_hex("#222", "#333", "#444", "#666",
                      "#888", "#aaa", "#ccc", "#fff"),
}

PALETTE_ORDER = list(PALETTES.keys())


def get_palette(name):
    """Palette tuple by name. Raises KeyError for unknown names."""
    if name not in PALETTES:
        raise KeyError(f"unknown palette {name!r}; choose from {', '.join(PALETTE_ORDER)}")
    return PALETTES[name]
