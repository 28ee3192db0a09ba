"""
Quantizer - continuous samples to discrete glyph and palette indices

Linear bucketing: index = floor(value * (size - epsilon)), clamped to
[0, size - 1]. The small epsilon keeps value == 1.0 inside the last
bucket. Angles are quantized to the nearest of N equal sectors.

All functions accept scalars or numpy arrays; scalars come back as int
(or str for glyphs).
"""

import math
import numpy as np


EPSILON = 0.01

TWO_PI = 2.0 * math.pi


def _as_result(arr, scalar):
    if scalar:
        return arr.item()
    return arr


def to_index(value, size, epsilon=EPSILON):
    """Bucket a [0, 1] value into one of `size` slots.

    Out-of-range and NaN inputs are clamped, never rejected.
    """
    if size < 1:
        raise ValueError(f"need at least one bucket, got {size}")
    scalar = np.ndim(value) == 0
    v = np.nan_to_num(np.asarray(value, dtype=np.float64), nan=0.0,
                      posinf=1.0, neginf=0.0)
    idx = np.floor(v * (size - epsilon))
    idx = np.clip(idx, 0, size - 1).astype(np.int64)
    return _as_result(idx, scalar)


def to_color_index(value, palette_size):
    return to_index(value, palette_size)


def to_glyph(value, ramp, epsilon=EPSILON):
    """Character from an ordered ramp for a [0, 1] value."""
    if len(ramp) == 0:
        raise ValueError("character ramp is empty")
    scalar = np.ndim(value) == 0
    idx = to_index(value, len(ramp), epsilon)
    if scalar:
        return ramp[idx]
    return glyph_table(ramp)[idx]


def glyph_table(ramp):
    """Ramp as a numpy array of single characters, for fancy indexing."""
    if len(ramp) == 0:
        raise ValueError("character ramp is empty")
    return np.array(list(ramp), dtype="<U1")


def signed_to_unit(value):
    """[-1, 1] -> [0, 1]."""
    return (value + 1.0) / 2.0


def angle_to_sector(angle, sectors, span=TWO_PI):
    """Nearest of `sectors` equal sectors covering `span` radians.

    span = 2 pi gives 8-way arrows; span = pi gives symmetric 4-way line
    glyphs, where opposite directions share a sector.
    """
    if sectors < 1:
        raise ValueError(f"need at least one sector, got {sectors}")
    scalar = np.ndim(angle) == 0
    normalized = np.mod(np.asarray(angle, dtype=np.float64), span)
    idx = np.floor(normalized / (span / sectors) + 0.5).astype(np.int64) % sectors
    return _as_result(idx, scalar)


def angle_to_bucket(angle, size):
    """Angle -> one of `size` hue buckets, by truncation around the circle."""
    if size < 1:
        raise ValueError(f"need at least one bucket, got {size}")
    scalar = np.ndim(angle) == 0
    normalized = np.mod(np.asarray(angle, dtype=np.float64), TWO_PI)
    idx = np.floor(normalized / TWO_PI * size).astype(np.int64) % size
    return _as_result(idx, scalar)
