"""
Scalar Field Generators

Pure functions of position, time and parameters:

- plasma_value: demoscene plasma, a sum of five sine waves
- tunnel_intensity: log-spaced rings travelling out from the centre
- escape_time / escape_time_grid: Mandelbrot and Julia iteration

Everything here accepts numpy arrays as well as scalars where noted,
so a whole frame is one call.
"""

from collections import namedtuple
import math
import numpy as np


# Vertical samples are stretched by this factor: terminal cells are
# roughly twice as tall as they are wide. Display dependent.
CELL_ASPECT = 2.0

# An orbit has escaped once |z|^2 exceeds this
BAILOUT_SQ = 4.0

_LN2 = math.log(2.0)


FractalSample = namedtuple("FractalSample", ["iterations", "escaped", "smooth"])


def plasma_value(x, y, t, scale):
    """Plasma field value in [0, 1].

    Five terms, each bounded to [-1, 1]:
      1. horizontal wave      sin(0.3 x s + t)
      2. vertical wave        sin(0.5 y s + 1.3 t)
      3. diagonal wave        sin(0.3 (x + y) s + 0.7 t)
      4. circular wave about (4, 4) in scaled space, freq 0.5, phase +t
      5. circular wave about (-2, 2) in scaled space, freq 0.4, phase -1.2 t
    with s = scale / 10. The sum is mapped to [0, 1] by (v + 5) / 10.

    Args:
        x, y: Cell coordinates (scalars or arrays)
        t: Simulation time
        scale: Zoom level, 1..20 in the UI
    """
    s = scale / 10.0
    xs = x * s
    ys = y * s

    value = np.sin(xs * 0.3 + t)
    value = value + np.sin(ys * 0.5 + t * 1.3)
    value = value + np.sin((xs + ys) * 0.3 + t * 0.7)

    cx = xs - 4.0
    cy = ys - 4.0
    value = value + np.sin(np.sqrt(cx * cx + cy * cy) * 0.5 + t)

    cx2 = xs + 2.0
    cy2 = ys - 2.0
    value = value + np.sin(np.sqrt(cx2 * cx2 + cy2 * cy2) * 0.4 - t * 1.2)

    return (value + 5.0) / 10.0


def tunnel_intensity(x, y, t, width, height, rings, aspect=CELL_ASPECT):
    """Ring brightness in [0, 1] for a tunnel centred on the canvas.

    Distance uses a log scale so rings bunch up near the centre
    (perspective), and each ring fades with distance from the middle.
    """
    center_x = width / 2.0
    center_y = height / 2.0
    max_dist = math.sqrt(center_x * center_x + (center_y * aspect) ** 2)

    dx = x - center_x
    dy = (y - center_y) * aspect
    dist = np.sqrt(dx * dx + dy * dy) / max_dist

    log_dist = np.log(dist * 10.0 + 1.0) / math.log(11.0)
    phase = np.mod(log_dist * rings - t, 1.0)
    ring = np.sqrt(np.abs(np.sin(phase * math.pi)))
    depth_fade = 1.0 - dist * 0.7
    return np.clip(ring * depth_fade, 0.0, 1.0)


def complex_plane(width, height, center_x, center_y, zoom, aspect=CELL_ASPECT):
    """Map a width x height cell grid onto the complex plane.

    The horizontal range is 4 / zoom; the vertical range is divided by
    width / (height * aspect) so circles stay round on tall cells.

    Returns:
        (re, im) arrays of shape (height, width)
    """
    aspect_ratio = width / (height * aspect)
    range_x = 4.0 / zoom
    range_y = range_x / aspect_ratio

    min_x = center_x - range_x / 2.0
    min_y = center_y - range_y / 2.0

    re = min_x + (np.arange(width) / width) * range_x
    im = min_y + (np.arange(height) / height) * range_y
    return np.meshgrid(re, im)


def _smooth_value(iterations, mag_sq):
    # Continuous escape time: n + 1 - log2(log|z|)
    log_zn = math.log(mag_sq) / 2.0
    nu = math.log(log_zn / _LN2) / _LN2
    return iterations + 1 - nu


def escape_time(x0, y0, max_iter, julia_mode=False, c=(-0.7, 0.27015)):
    """Iterate z <- z^2 + c for one point.

    Mandelbrot: z starts at 0 and c is the point.
    Julia: z starts at the point and c is the fixed constant.

    An orbit escapes once |z|^2 exceeds the bailout. Points on the radius-2
    circle are still bounded, so c = -2 stays inside while (2, 0) escapes
    on its second iteration.

    Returns:
        FractalSample(iterations, escaped, smooth)
    """
    if julia_mode:
        x, y = x0, y0
        cx, cy = c
    else:
        x, y = 0.0, 0.0
        cx, cy = x0, y0

    iterations = 0
    x2 = x * x
    y2 = y * y
    while x2 + y2 <= BAILOUT_SQ and iterations < max_iter:
        y = 2.0 * x * y + cy
        x = x2 - y2 + cx
        x2 = x * x
        y2 = y * y
        iterations += 1

    escaped = iterations < max_iter
    smooth = float(iterations)
    if escaped and iterations > 0:
        smooth = _smooth_value(iterations, x2 + y2)

    return FractalSample(iterations, escaped, smooth)


def escape_time_grid(x0, y0, max_iter, julia_mode=False, c=(-0.7, 0.27015)):
    """Vectorised escape_time over arrays of points.

    Only orbits that are still bounded are updated each pass, so the
    per-element result matches escape_time exactly.

    Returns:
        (iterations int array, escaped bool array, smooth float array)
    """
    x0 = np.asarray(x0, dtype=np.float64)
    y0 = np.asarray(y0, dtype=np.float64)
    x0, y0 = np.broadcast_arrays(x0, y0)

    if julia_mode:
        x = x0.copy()
        y = y0.copy()
        cx = np.full(x0.shape, float(c[0]))
        cy = np.full(x0.shape, float(c[1]))
    else:
        x = np.zeros(x0.shape)
        y = np.zeros(x0.shape)
        cx = x0
        cy = y0

    x2 = x * x
    y2 = y * y
    iterations = np.zeros(x0.shape, dtype=np.int64)

    for _ in range(max_iter):
        active = x2 + y2 <= BAILOUT_SQ
        if not active.any():
            break
        xa = x[active]
        ya = y[active]
        new_y = 2.0 * xa * ya + cy[active]
        new_x = x2[active] - y2[active] + cx[active]
        y[active] = new_y
        x[active] = new_x
        x2[active] = new_x * new_x
        y2[active] = new_y * new_y
        iterations[active] += 1

    escaped = iterations < max_iter
    smooth = iterations.astype(np.float64)
    mask = escaped & (iterations > 0)
    if mask.any():
        mag_sq = x2[mask] + y2[mask]
        log_zn = np.log(mag_sq) / 2.0
        nu = np.log(log_zn / _LN2) / _LN2
        smooth[mask] = iterations[mask] + 1 - nu

    return iterations, escaped, smooth
