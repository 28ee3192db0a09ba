"""
Marquee - scrolling LED-style ticker with a 5x5 bitmap font

Runs on its own slower tick (MARQUEE_INTERVAL_MS). The banner is
vertically centred: a border row, a padding row, five text rows, a
padding row and a border row. Text enters from the right edge and the
offset wraps to 0 once it has scrolled fully off the left.
"""

import numpy as np

from .experiment_base import Experiment
from .fields import CELL_ASPECT
from .palettes import get_palette


MARQUEE_INTERVAL_MS = 50

LETTER_WIDTH = 5
LETTER_HEIGHT = 5
LETTER_SPACING = 1
BANNER_HEIGHT = LETTER_HEIGHT + 4

LIT = "█"
BORDER = "="

FONT = {
    "A": [" ### ", "#   #", "#####", "#   #", "#   #"],
    "B": ["#### ", "#   #", "#### ", "#   #", "#### "],
    "C": [" ####", "#    ", "#    ", "#    ", " ####"],
    "D": ["#### ", "#   #", "#   #", "#   #", "#### "],
    "E": ["#####", "#    ", "###  ", "#    ", "#####"],
    "F": ["#####", "#    ", "###  ", "#    ", "#    "],
    "G": [" ####", "#    ", "#  ##", "#   #", " ### "],
    "H": ["#   #", "#   #", "#####", "#   #", "#   #"],
    "I": ["#####", "  #  ", "  #  ", "  #  ", "#####"],
    "J": ["#####", "   # ", "   # ", "#  # ", " ##  "],
    "K": ["#   #", "#  # ", "###  ", "#  # ", "#   #"],
    "L": ["#    ", "#    ", "#    ", "#    ", "#####"],
    "M": ["#   #", "## ##", "# # #", "#   #", "#   #"],
    "N": ["#   #", "##  #", "# # #", "#  ##", "#   #"],
    "O": [" ### ", "#   #", "#   #", "#   #", " ### "],
    "P": ["#### ", "#   #", "#### ", "#    ", "#    "],
    "Q": [" ### ", "#   #", "#   #", "#  # ", " ## #"],
    "R": ["#### ", "#   #", "#### ", "#  # ", "#   #"],
    "S": [" ####", "#    ", " ### ", "    #", "#### "],
    "T": ["#####", "  #  ", "  #  ", "  #  ", "  #  "],
    "U": ["#   #", "#   #", "#   #", "#   #", " ### "],
    "V": ["#   #", "#   #", "#   #", " # # ", "  #  "],
    "W": ["#   #", "#   #", "# # #", "## ##", "#   #"],
    "X": ["#   #", " # # ", "  #  ", " # # ", "#   #"],
    "Y": ["#   #", " # # ", "  #  ", "  #  ", "  #  "],
    "Z": ["#####", "   # ", "  #  ", " #   ", "#####"],
    " ": ["     ", "     ", "     ", "     ", "     "],
    "!": ["  #  ", "  #  ", "  #  ", "     ", "  #  "],
    ".": ["     ", "     ", "     ", "     ", "  #  "],
    ":": ["     ", "  #  ", "     ", "  #  ", "     "],
    "?": [" ### ", "#   #", "  ## ", "     ", "  #  "],
    "0": [" ### ", "#  ##", "# # #", "##  #", " ### "],
    "1": [" ##  ", "  #  ", "  #  ", "  #  ", "#####"],
    "2": [" ### ", "#   #", "  ## ", " #   ", "#####"],
    "3": ["#####", "   # ", "  ## ", "    #", "#### "],
    "4": ["#   #", "#   #", "#####", "    #", "    #"],
    "5": ["#####", "#    ", "#### ", "    #", "#### "],
    "6": [" ### ", "#    ", "#### ", "#   #", " ### "],
    "7": ["#####", "    #", "   # ", "  #  ", "  #  "],
    "8": [" ### ", "#   #", " ### ", "#   #", " ### "],
    "9": [" ### ", "#   #", " ####", "    #", " ### "],
}

MESSAGES = [
    "HELLO WORLD",
    "GENERATIVE ART",
    "LIVE UPDATE",
    "TERMINAL ROCKS",
    "SIMPLEX NOISE 3D",
]

PALETTE_NAMES = ["amber", "green", "blue", "red", "white"]


def render_text(text):
    """Rasterise text with FONT into a (5, n) bool array.

    Unknown characters render as a space. Each letter is followed by
    LETTER_SPACING blank columns.
    """
    rows = [""] * LETTER_HEIGHT
    for ch in text.upper():
        letter = FONT.get(ch, FONT[" "])
        for row in range(LETTER_HEIGHT):
            rows[row] += letter[row] + " " * LETTER_SPACING
    if not rows[0]:
        return np.zeros((LETTER_HEIGHT, 0), dtype=bool)
    return np.array([[c == "#" for c in row] for row in rows], dtype=bool)


class Marquee(Experiment):
    """Scrolling LED news ticker."""

    experiment_name = "marquee"
    experiment_label = "Marquee"
    description = "Scrolling LED ticker with block letters"
    tick_interval_ms = MARQUEE_INTERVAL_MS

    def __init__(self, width=80, height=24, aspect=CELL_ASPECT, messages=None, **overrides):
        self.messages = list(messages or MESSAGES)
        super().__init__(width, height, aspect, **overrides)
        self.offset = 0.0
        self._bitmap = render_text(self.message)

    @classmethod
    def get_param_defs(cls):
        return [
            {"key": "speed", "label": "Speed", "kind": "int",
             "min": 10, "max": 200, "step": 10, "default": 50,
             "fmt": "d", "slider": True},
            {"key": "message_index", "label": "Message", "kind": "int",
             "min": None, "max": None, "step": 1, "default": 0, "fmt": "d"},
            {"key": "palette", "label": "Palette", "kind": "enum",
             "choices": PALETTE_NAMES, "default": "amber"},
            {"key": "playing", "label": "Playing", "kind": "bool",
             "default": True},
        ]

    def key_bindings(self):
        return {
            "space": [("toggle", "playing")],
            "m": [("call", "next_message")],
            "c": [("cycle", "palette")],
            "tab": [("focus_next",)],
            "left": [("adjust", -1)],
            "right": [("adjust", 1)],
        }

    @property
    def message(self):
        return self.messages[self.params["message_index"] % len(self.messages)]

    @property
    def text_width(self):
        return self._bitmap.shape[1]

    def next_message(self):
        self.params.set("message_index",
                        (self.params["message_index"] + 1) % len(self.messages))
        self._bitmap = render_text(self.message)
        self.offset = 0.0

    def tick(self):
        if not self.params["playing"]:
            return
        self.offset += self.params["speed"] / 50.0
        if self.offset > self.text_width + self.width:
            self.offset = 0.0

    def state(self):
        return {"offset": self.offset}

    def reseed(self, seed):
        self.offset = 0.0

    def palette(self, snapshot):
        return get_palette(snapshot["palette"])

    def sample(self, snapshot):
        palette = self.palette(snapshot)
        brightest = len(palette) - 1
        w, h = self.width, self.height
        glyphs = np.full((h, w), " ", dtype="<U1")
        colors = np.zeros((h, w), dtype=np.int64)

        top = (h - BANNER_HEIGHT) // 2
        bitmap = self._bitmap

        def put_row(y, glyph, color):
            if 0 <= y < h:
                glyphs[y, :] = glyph
                colors[y, :] = color

        put_row(top, BORDER, 3)
        put_row(top + 1, " ", 1)
        put_row(top + LETTER_HEIGHT + 2, " ", 1)
        put_row(top + LETTER_HEIGHT + 3, BORDER, 3)

        # Column x shows bitmap column floor(x + offset - width)
        text_x = np.floor(np.arange(w) + snapshot["offset"] - w).astype(np.int64)
        visible = (text_x >= 0) & (text_x < bitmap.shape[1])
        for row in range(LETTER_HEIGHT):
            y = top + 2 + row
            if not 0 <= y < h:
                continue
            lit = np.zeros(w, dtype=bool)
            lit[visible] = bitmap[row, text_x[visible]]
            glyphs[y, :] = np.where(lit, LIT, " ")
            colors[y, :] = np.where(lit, brightest, 0)
        return glyphs, colors

    @property
    def stats(self):
        return {"message": self.message, "offset": self.offset}
