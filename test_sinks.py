#!/usr/bin/env python3
"""
Tests for the rendering sinks: cell buffer, ANSI writer, PIL rasteriser.
"""

import io
import numpy as np
import pytest
from terminal_genart.palettes import BACKGROUND
from terminal_genart.segments import batch_frame
from terminal_genart.sinks import (HIDE_CURSOR, SHOW_CURSOR, AnsiSink, CellBuffer,
                                   ImageSink, fg_escape)


RED = (255, 0, 0)
BLUE = (0, 0, 255)


def _frame(rows, colors, palette=(RED, BLUE)):
    glyphs = np.array([list(r) for r in rows])
    return batch_frame(glyphs, np.array(colors), palette)


def test_cell_buffer():
    print("Testing cell buffer...")
    buf = CellBuffer(4, 2)
    frame = _frame(["ab", "cd"], [[0, 1], [1, 1]])
    assert buf.write_frame(frame, origin=(1, 0)) == 4
    assert buf.row_text(0) == " ab "
    assert buf.row_text(1) == " cd "
    assert tuple(buf.fg[0, 1]) == RED and tuple(buf.fg[0, 2]) == BLUE
    assert tuple(buf.bg[1, 1]) == BACKGROUND

    buf.set_cell(10, 10, "x", RED)
    buf.set_cell(-1, 0, "x", RED)
    assert "x" not in buf.text(), "Out-of-bounds writes are dropped"

    buf.write_frame(frame, origin=(3, 1))
    assert buf.row_text(1) == " cda", "Frames clip at the buffer edge"

    buf.clear()
    assert buf.text() == "    \n    "
    with pytest.raises(ValueError):
        CellBuffer(0, 3)
    print("  ✓ Cell buffer writes and clips")


def test_ansi_one_escape_per_segment():
    print("Testing ANSI encoding...")
    frame = _frame(["aab", "ccc"], [[0, 0, 1], [1, 1, 1]])
    sink = AnsiSink(io.StringIO())
    out = sink.encode(frame)
    assert out.count("\x1b[38;2;") == frame.segment_count == 3
    assert fg_escape(RED) + "aa" in out
    assert fg_escape(BLUE) + "b" in out
    assert fg_escape(BLUE) + "ccc" in out
    assert "\x1b[2;1H" in out, "Each row starts with a cursor move"

    footer = sink.encode(frame, footer="hello")
    assert footer.endswith("hello")
    print("  ✓ One escape per segment")


def test_ansi_open_close():
    print("Testing ANSI lifecycle...")
    stream = io.StringIO()
    with AnsiSink(stream, origin=(2, 3)) as sink:
        sink.open()
        sink.write_frame(_frame(["a"], [[0]]))
    sink.close()
    text = stream.getvalue()
    assert text.count(HIDE_CURSOR) == 1, "open() is idempotent"
    assert text.count(SHOW_CURSOR) == 1, "close() is idempotent"
    assert "\x1b[4;3H" in text, "Origin offsets the cursor"
    print("  ✓ Open/close restore the terminal once")


def test_image_sink():
    print("Testing image sink...")
    frame = _frame(["█ ▒"], [[0, 0, 1]])
    sink = ImageSink(cell_width=8, cell_height=16)
    img = sink.render(frame)
    assert img.size == (24, 16)

    pixels = sink.to_array(frame)
    assert pixels.shape == (16, 24, 3)
    assert tuple(pixels[8, 4]) == RED, "Full block fills its cell"
    assert tuple(pixels[8, 12]) == BACKGROUND, "Spaces stay background"
    assert tuple(pixels[8, 20]) == (0, 0, 127), "Medium shade is half brightness"
    print("  ✓ Image sink rasterises cells")


def test_image_sink_text_glyphs(tmp_path):
    print("Testing image sink text glyphs...")
    frame = _frame(["#@"], [[0, 1]])
    path = tmp_path / "frame.png"
    img = ImageSink().save(frame, str(path))
    assert path.exists()
    assert img.size == (16, 16)
    assert np.asarray(img).any(), "Text glyphs leave some ink"
    print("  ✓ Image sink saves PNGs")


if __name__ == "__main__":
    import pathlib
    import tempfile

    print("\n=== Testing Sinks ===\n")

    test_cell_buffer()
    test_ansi_one_escape_per_segment()
    test_ansi_open_close()
    test_image_sink()
    with tempfile.TemporaryDirectory() as d:
        test_image_sink_text_glyphs(pathlib.Path(d))

    print("\n✓ All tests passed!\n")
