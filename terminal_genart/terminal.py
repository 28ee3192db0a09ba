"""
Terminal Front End

Runs a Session straight in the terminal: stdin in cbreak mode, polled
with select() each frame, frames written through AnsiSink. Keys are
decoded into the same names the pygame viewer produces.
"""

import os
import select
import sys
import termios
import time
import tty

from .controls import slider_track
from .experiment_base import RENDER_INTERVAL_MS
from .presets import create_experiment
from .session import Session
from .sinks import AnsiSink


_ARROWS = {"A": "up", "B": "down", "C": "right", "D": "left"}

_SINGLE = {
    " ": "space",
    "\t": "tab",
    "\x7f": "backspace",
    "\x08": "backspace",
    "\r": "return",
    "\n": "return",
}


def decode_keys(data):
    """Split raw terminal input into key names.

    Arrow escape sequences become "up"/"down"/"left"/"right", a lone ESC
    becomes "escape", letters are lower-cased and other printable
    characters pass through.
    """
    keys = []
    i = 0
    while i < len(data):
        ch = data[i]
        if ch == "\x1b":
            if data[i + 1:i + 2] in ("[", "O") and data[i + 2:i + 3] in _ARROWS:
                keys.append(_ARROWS[data[i + 2]])
                i += 3
                continue
            keys.append("escape")
            i += 1
            continue
        if ch in _SINGLE:
            keys.append(_SINGLE[ch])
        elif ch.isprintable():
            keys.append(ch.lower() if ch.isalpha() else ch)
        i += 1
    return keys


def footer_text(session, width=18):
    """One-line status: focused slider track plus the experiment label."""
    experiment = session.experiment
    params = experiment.params
    parts = [experiment.experiment_label]
    key = session.focused
    if key is not None:
        d = params.defs[key]
        parts.append(f"{d['label']} {slider_track(params[key], d['min'], d['max'], width)} "
                     f"{params.format(key)}")
    parts.append("[Tab] focus  [Esc] quit")
    return "  ".join(parts)


def _read_available(fd):
    """Drain whatever bytes are waiting on fd without blocking."""
    data = b""
    while select.select([fd], [], [], 0)[0]:
        chunk = os.read(fd, 1024)
        if not chunk:
            break
        data += chunk
    return data.decode("utf-8", errors="ignore")


def run_terminal(name, width, height, aspect, seed=None, stream=None):
    """Interactive loop in the current terminal until ESC or q."""
    stream = stream or sys.stdout
    session = Session(create_experiment(name, width, height, aspect, seed))
    fd = sys.stdin.fileno()
    old_settings = termios.tcgetattr(fd)
    tty.setcbreak(fd)
    sink = AnsiSink(stream)
    try:
        with sink:
            last = time.monotonic()
            while True:
                quit_requested = False
                for key in decode_keys(_read_available(fd)):
                    if key in ("escape", "q"):
                        quit_requested = True
                        break
                    session.post_key(key)
                if quit_requested:
                    break
                now = time.monotonic()
                dt_ms = min((now - last) * 1000.0, 100.0)
                last = now
                frame = session.advance(dt_ms)
                sink.write_frame(frame, footer_text(session))
                time.sleep(RENDER_INTERVAL_MS / 1000.0)
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)
        session.close()
