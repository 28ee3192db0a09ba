"""
Interactive Pygame Viewer for Terminal Generative Art

Draws the character grid in a window with a monospace font, one
font.render call per batched segment, and a side panel showing the
experiment's sliders (the focused one highlighted) and status.

Controls:
  1-6         Pick an experiment (menu)
  ESC / BKSP  Back to the menu (quit from the menu)
  Q           Quit
  S           Save screenshot
  H           Toggle side panel
  other keys  Passed to the running experiment (see its key table)
"""

import os
import time
import pygame

from .controls import ControlPanel, THEME
from .experiment_base import RENDER_INTERVAL_MS
from .fields import CELL_ASPECT
from .palettes import BACKGROUND
from .presets import (DEFAULT_CANVAS, EXPERIMENT_CLASSES, EXPERIMENT_ORDER,
                      create_experiment)
from .session import Session


PANEL_WIDTH = 260
FONT_NAME = "menlo"
FONT_SIZE = 14

_NAMED_KEYS = {
    pygame.K_LEFT: "left",
    pygame.K_RIGHT: "right",
    pygame.K_UP: "up",
    pygame.K_DOWN: "down",
    pygame.K_SPACE: "space",
    pygame.K_TAB: "tab",
    pygame.K_ESCAPE: "escape",
    pygame.K_BACKSPACE: "backspace",
    pygame.K_RETURN: "return",
}


def translate_key(key, unicode=""):
    """pygame key code + event.unicode -> controller key name.

    Named keys map to words ("left", "space", "tab"); printable keys map
    to their character, letters lower-cased. Anything else gives None.
    """
    if key in _NAMED_KEYS:
        return _NAMED_KEYS[key]
    if unicode and unicode.isprintable():
        return unicode.lower() if unicode.isalpha() else unicode
    return None


class Viewer:
    """Menu plus one running experiment, drawn with pygame."""

    def __init__(self, start=None, width=None, height=None,
                 aspect=CELL_ASPECT, seed=None):
        self.cols = width or DEFAULT_CANVAS[0]
        self.rows = height or DEFAULT_CANVAS[1]
        self.aspect = aspect
        self.seed = seed
        self.running = True
        self.panel_visible = True
        self.session = None
        self.current = None
        self.panel = None
        self._panel_keys = None
        self._status_lines = []
        self.start = start

    def _open(self, name):
        experiment = create_experiment(name, self.cols, self.rows, self.aspect, self.seed)
        if self.session is None:
            self.session = Session(experiment)
        else:
            self.session.switch(experiment)
        self.current = name
        self._panel_keys = None
        print(f"[genart] {experiment.experiment_label} ({name}) "
              f"{self.cols}x{self.rows}")

    def _to_menu(self):
        if self.session is not None:
            self.session.close()
        self.session = None
        self.current = None
        self.panel = None

    @property
    def canvas_w(self):
        return self.cols * self.cell_w

    @property
    def canvas_h(self):
        return self.rows * self.cell_h

    @property
    def total_w(self):
        return self.canvas_w + (PANEL_WIDTH if self.panel_visible else 0)

    # --- Side panel ---

    def _build_panel(self):
        experiment = self.session.experiment
        params = experiment.params
        panel = ControlPanel(self.canvas_w, 0, PANEL_WIDTH, self.canvas_h)
        panel.add_section(experiment.experiment_label.upper())
        for key in params.focusable_sliders():
            panel.add_param(params.defs[key], params[key], on_change=self._on_slider_change)
        flags = [key for key in params.order if params.defs[key].get("kind") == "bool"]
        if flags:
            panel.add_section("TOGGLES")
            for key in flags:
                panel.add_param(params.defs[key], params[key])
        panel.add_section("STATUS")
        self._status_lines = [panel.add_text() for _ in range(8)]
        self.panel = panel
        self._panel_keys = tuple(params.focusable_sliders())

    def _on_slider_change(self, key, value):
        experiment = self.session.experiment
        experiment.params.set(key, value)
        experiment.on_param_change(key)

    def _sync_panel(self):
        params = self.session.experiment.params
        if self._panel_keys != tuple(params.focusable_sliders()):
            self._build_panel()
        self.panel.sync(params.values, self.session.focused)
        lines = [f"{k}: {v:.1f}" if isinstance(v, float) else f"{k}: {v}"
                 for k, v in self.session.experiment.stats.items()]
        for i, widget in enumerate(self._status_lines):
            widget.text = lines[i] if i < len(lines) else ""

    # --- Drawing ---

    def _draw_frame(self, screen, frame):
        cw, ch = self.cell_w, self.cell_h
        for y, row in enumerate(frame.rows):
            x = 0
            for seg in row:
                surf = self.font.render(seg.text, True, frame.color(seg.color_index), BACKGROUND)
                screen.blit(surf, (x * cw, y * ch))
                x += len(seg.text)

    def _draw_menu(self, screen):
        screen.fill(THEME["bg"])
        title = self.font.render("TERMINAL GENERATIVE ART", True, THEME["text_bright"])
        screen.blit(title, (2 * self.cell_w, 2 * self.cell_h))
        for i, name in enumerate(EXPERIMENT_ORDER):
            cls = EXPERIMENT_CLASSES[name]
            line = f"[{i + 1}] {cls.experiment_label:18s} {cls.description}"
            surf = self.font.render(line, True, THEME["text"])
            screen.blit(surf, (2 * self.cell_w, (4 + i * 2) * self.cell_h))
        hint = self.font.render("[Q] Quit", True, THEME["text_dim"])
        screen.blit(hint, (2 * self.cell_w, (5 + len(EXPERIMENT_ORDER) * 2) * self.cell_h))

    def _save_screenshot(self, screen):
        screenshots_dir = os.path.join(os.getcwd(), "screenshots")
        os.makedirs(screenshots_dir, exist_ok=True)
        timestamp = time.strftime("%Y%m%d_%H%M%S")
        name = self.current or "menu"
        path = os.path.join(screenshots_dir, f"genart_{name}_{timestamp}.png")
        latest_path = os.path.join(screenshots_dir, "latest.png")
        pygame.image.save(screen, path)
        pygame.image.save(screen, latest_path)
        print(f"[genart] Screenshot saved: {path}")

    # --- Main loop ---

    def run(self):
        """Main viewer loop."""
        pygame.init()
        self.font = pygame.font.SysFont(FONT_NAME, FONT_SIZE)
        self.cell_w, self.cell_h = self.font.size("█")

        screen = pygame.display.set_mode((self.total_w, self.canvas_h))
        pygame.display.set_caption("Terminal Generative Art")
        clock = pygame.time.Clock()

        if self.start:
            self._open(self.start)

        dt_ms = RENDER_INTERVAL_MS
        while self.running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                    continue
                if event.type == pygame.KEYDOWN:
                    screen = self._handle_keydown(event, screen)
                    continue
                if self.panel_visible and self.panel:
                    self.panel.handle_event(event)

            screen.fill(THEME["bg"])
            if self.session is None:
                self._draw_menu(screen)
            else:
                frame = self.session.advance(dt_ms)
                self._draw_frame(screen, frame)
                if self.panel_visible:
                    if self.panel is None or self._panel_keys is None:
                        self._build_panel()
                    self._sync_panel()
                    self.panel.draw(screen, self.font)

            pygame.display.flip()
            dt_ms = clock.tick(60)

        self._to_menu()
        pygame.quit()

    def _handle_keydown(self, event, screen):
        name = translate_key(event.key, getattr(event, "unicode", ""))

        if name == "q":
            self.running = False
        elif name in ("escape", "backspace"):
            if self.session is None:
                self.running = False
            else:
                self._to_menu()
        elif name == "s":
            self._save_screenshot(screen)
        elif name == "h":
            self.panel_visible = not self.panel_visible
            screen = pygame.display.set_mode((self.total_w, self.canvas_h))
        elif self.session is None:
            if name and name.isdigit() and 1 <= int(name) <= len(EXPERIMENT_ORDER):
                self._open(EXPERIMENT_ORDER[int(name) - 1])
        elif name is not None:
            self.session.post_key(name)
        return screen
