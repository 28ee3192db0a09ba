"""
Segment Batcher - run-length batching of glyph rows

A row of per-cell (glyph, color index) pairs becomes a list of Segments,
one per maximal run of equal color index. Concatenating the segment
texts reproduces the row exactly and no two neighbouring segments share
a color index, so a sink issues one styled write per run instead of one
per cell.
"""

from collections import namedtuple


Segment = namedtuple("Segment", ["text", "color_index"])


def batch_row(glyphs, color_indices):
    """Compress one row into color runs in a single left-to-right pass.

    Args:
        glyphs: Sequence of single characters (str, list or numpy array)
        color_indices: Sequence of ints, same length as glyphs

    Returns:
        list of Segment, empty for an empty row
    """
    if len(glyphs) != len(color_indices):
        raise ValueError(
            f"row has {len(glyphs)} glyphs but {len(color_indices)} color indices")

    segments = []
    run = []
    run_color = None
    for glyph, color in zip(glyphs, color_indices):
        color = int(color)
        if run and color != run_color:
            segments.append(Segment("".join(run), run_color))
            run = []
        if not run:
            run_color = color
        run.append(str(glyph))
    if run:
        segments.append(Segment("".join(run), run_color))
    return segments


def segments_to_cells(row_segments, row, origin=(0, 0)):
    """Expand a row's segments into (column, row, glyph, color_index) tuples."""
    ox, oy = origin
    cells = []
    x = ox
    for seg in row_segments:
        for glyph in seg.text:
            cells.append((x, oy + row, glyph, seg.color_index))
            x += 1
    return cells


class Frame:
    """One rendered frame: batched rows plus the palette they index into."""

    def __init__(self, rows, palette, width, height):
        self.rows = rows
        self.palette = tuple(palette)
        self.width = width
        self.height = height

    def text_rows(self):
        """Plain text of every row, colors dropped."""
        return ["".join(seg.text for seg in row) for row in self.rows]

    @property
    def segment_count(self):
        return sum(len(row) for row in self.rows)

    def cells(self, origin=(0, 0)):
        """Every cell as (column, row, glyph, (r, g, b))."""
        for y, row in enumerate(self.rows):
            for x, yy, glyph, color_index in segments_to_cells(row, y, origin):
                yield x, yy, glyph, self.color(color_index)

    def color(self, color_index):
        """Palette lookup, clamped to the palette bounds."""
        index = min(max(int(color_index), 0), len(self.palette) - 1)
        return self.palette[index]


def batch_frame(glyphs, color_indices, palette):
    """Batch every row of 2-D glyph and color-index arrays into a Frame."""
    height = len(glyphs)
    if len(color_indices) != height:
        raise ValueError("glyph and color grids have different heights")
    width = len(glyphs[0]) if height else 0
    rows = [batch_row(glyphs[y], color_indices[y]) for y in range(height)]
    return Frame(rows, palette, width, height)
