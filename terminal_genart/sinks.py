"""
Rendering Sinks

Three ways to get a Frame out of the core:

- CellBuffer: direct per-cell writes into numpy glyph/color arrays
- AnsiSink: one truecolor escape per segment, written to a text stream
- ImageSink: rasterise to a PIL image for headless snapshots

The pygame window in viewer.py is the fourth, drawing one surface per
segment.
"""

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from .palettes import BACKGROUND


ESC = "\x1b["
HIDE_CURSOR = ESC + "?25l"
SHOW_CURSOR = ESC + "?25h"
CURSOR_HOME = ESC + "H"
CLEAR_SCREEN = ESC + "2J"
RESET = ESC + "0m"


def fg_escape(rgb):
    r, g, b = rgb
    return f"{ESC}38;2;{r};{g};{b}m"


def bg_escape(rgb):
    r, g, b = rgb
    return f"{ESC}48;2;{r};{g};{b}m"


class CellBuffer:
    """Rectangular grid of (glyph, foreground, background) cells."""

    def __init__(self, width, height, background=BACKGROUND):
        if width < 1 or height < 1:
            raise ValueError(f"buffer needs positive dimensions, got {width}x{height}")
        self.width = width
        self.height = height
        self.background = background
        self.glyphs = np.full((height, width), " ", dtype="<U1")
        self.fg = np.zeros((height, width, 3), dtype=np.uint8)
        self.bg = np.zeros((height, width, 3), dtype=np.uint8)
        self.clear()

    def clear(self):
        self.glyphs[:] = " "
        self.fg[:] = 0
        self.bg[:] = self.background

    def set_cell(self, x, y, glyph, fg, bg=None):
        """Write one cell; writes outside the buffer are dropped."""
        if 0 <= x < self.width and 0 <= y < self.height:
            self.glyphs[y, x] = glyph
            self.fg[y, x] = fg
            self.bg[y, x] = self.background if bg is None else bg

    def write_frame(self, frame, origin=(0, 0)):
        """Write every cell of a frame, offset by origin. Returns cell count."""
        count = 0
        for x, y, glyph, rgb in frame.cells(origin):
            self.set_cell(x, y, glyph, rgb)
            count += 1
        return count

    def row_text(self, y):
        return "".join(self.glyphs[y])

    def text(self):
        return "\n".join(self.row_text(y) for y in range(self.height))


class AnsiSink:
    """Segment-per-escape terminal writer.

    Args:
        stream: Text stream with write() and flush() (sys.stdout)
        origin: (column, row) of the frame's top-left corner, 0-based
    """

    def __init__(self, stream, origin=(0, 0)):
        self.stream = stream
        self.origin = origin
        self.is_open = False

    def open(self):
        if not self.is_open:
            self.stream.write(HIDE_CURSOR + CLEAR_SCREEN)
            self.stream.flush()
            self.is_open = True

    def close(self):
        if self.is_open:
            self.stream.write(RESET + SHOW_CURSOR + "\n")
            self.stream.flush()
            self.is_open = False

    def encode(self, frame, footer=None):
        """Build the escape string for one frame."""
        ox, oy = self.origin
        parts = [CURSOR_HOME, bg_escape(BACKGROUND)]
        for y, row in enumerate(frame.rows):
            parts.append(f"{ESC}{oy + y + 1};{ox + 1}H")
            for seg in row:
                parts.append(fg_escape(frame.color(seg.color_index)))
                parts.append(seg.text)
        parts.append(RESET)
        if footer:
            parts.append(f"{ESC}{oy + frame.height + 1};{ox + 1}H{ESC}2K{footer}")
        return "".join(parts)

    def write_frame(self, frame, footer=None):
        self.stream.write(self.encode(frame, footer))
        self.stream.flush()

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


# Shade glyphs drawn as filled rectangles at this fraction of the
# foreground brightness
_SHADES = {"░": 0.25, "▒": 0.5, "▓": 0.75}


class ImageSink:
    """Rasterise frames with Pillow, one fixed-size rectangle per cell."""

    def __init__(self, cell_width=8, cell_height=16, font=None):
        self.cell_width = cell_width
        self.cell_height = cell_height
        self.font = font if font is not None else ImageFont.load_default()

    def render(self, frame):
        w = frame.width * self.cell_width
        h = frame.height * self.cell_height
        img = Image.new("RGB", (max(1, w), max(1, h)), BACKGROUND)
        draw = ImageDraw.Draw(img)
        cw, ch = self.cell_width, self.cell_height
        for x, y, glyph, rgb in frame.cells():
            if glyph == " ":
                continue
            left = x * cw
            top = y * ch
            box = (left, top, left + cw - 1, top + ch - 1)
            if glyph == "█":
                draw.rectangle(box, fill=tuple(rgb))
            elif glyph in _SHADES:
                k = _SHADES[glyph]
                shaded = tuple(int(c * k) for c in rgb)
                draw.rectangle(box, fill=shaded)
            else:
                draw.text((left, top), glyph, fill=tuple(rgb), font=self.font)
        return img

    def to_array(self, frame):
        """(H, W, 3) uint8 array of the rendered frame."""
        return np.asarray(self.render(frame))

    def save(self, frame, path):
        img = self.render(frame)
        img.save(path)
        return img
