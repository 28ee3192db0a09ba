"""
Preset Patterns for the Game of Life

Patterns are written as text art ('O' or '#' alive, anything else dead)
and parsed into boolean numpy arrays once at import.
"""

from collections import namedtuple
import numpy as np


Pattern = namedtuple("Pattern", ["name", "description", "data"])


def parse_pattern(text):
    """Convert text art to a (rows, cols) bool array, padding short rows."""
    lines = text.strip("\n").split("\n")
    width = max(len(line) for line in lines)
    data = np.zeros((len(lines), width), dtype=bool)
    for y, line in enumerate(lines):
        for x, ch in enumerate(line):
            data[y, x] = ch in ("O", "#")
    return data


PATTERNS = [
    Pattern("Glider", "Small spaceship that moves diagonally", parse_pattern("""
.O.
..O
OOO
""")),
    Pattern("Blinker", "Simple period-2 oscillator", parse_pattern("""
OOO
""")),
    Pattern("Toad", "Period-2 oscillator", parse_pattern("""
.OOO
OOO.
""")),
    Pattern("Beacon", "Period-2 oscillator", parse_pattern("""
OO..
OO..
..OO
..OO
""")),
    Pattern("Pulsar", "Period-3 oscillator", parse_pattern("""
..OOO...OOO..
.............
O....O.O....O
O....O.O....O
O....O.O....O
..OOO...OOO..
.............
..OOO...OOO..
O....O.O....O
O....O.O....O
O....O.O....O
.............
..OOO...OOO..
""")),
    Pattern("LWSS", "Lightweight spaceship", parse_pattern("""
.O..O
O....
O...O
OOOO.
""")),
    Pattern("R-pentomino", "Methuselah - chaotic evolution", parse_pattern("""
.OO
OO.
.O.
""")),
    Pattern("Gosper Gun", "Glider gun - produces gliders", parse_pattern("""
........................O...........
......................O.O...........
............OO......OO............OO
...........O...O....OO............OO
OO........O.....O...OO..............
OO........O...O.OO....O.O...........
..........O.....O.......O...........
...........O...O....................
............OO......................
""")),
    Pattern("Acorn", "Methuselah - produces many patterns", parse_pattern("""
.O.....
...O...
OO..OOO
""")),
]

BLOCK = parse_pattern("""
OO
OO
""")


def get_pattern(index):
    """Pattern by index, wrapping in both directions."""
    return PATTERNS[index % len(PATTERNS)]


def pattern_count():
    return len(PATTERNS)
