"""
Side Panel Widgets for the Generative Art Viewer

Dark-themed widgets drawn directly with pygame. Widgets are built from
the same parameter definition dicts the experiments declare (see
params.py): numeric parameters become sliders, bools become ON/OFF flags.

slider_track() is the text version of a slider, used by the terminal
front end's footer.
"""

import pygame


THEME = {
    "bg": (18, 18, 24),
    "panel": (25, 25, 35),
    "track": (50, 50, 65),
    "track_fill": (80, 140, 220),
    "track_focus": (255, 204, 0),
    "handle": (200, 210, 230),
    "handle_active": (255, 255, 255),
    "text": (180, 185, 195),
    "text_bright": (230, 235, 245),
    "text_dim": (100, 105, 115),
    "divider": (40, 40, 55),
    "on": (0, 255, 0),
    "off": (102, 102, 102),
}


def slider_track(value, min_val, max_val, width=18, filled="█", empty="░"):
    """Text slider: filled cells up to the value, empty after."""
    span = max_val - min_val
    position = (value - min_val) / span if span else 0.0
    handle = int(round(max(0.0, min(1.0, position)) * width))
    return filled * handle + empty * (width - handle)


class ParamSlider:
    """Horizontal slider for one numeric parameter definition.

    Mouse drags report through on_change(key, value). Keyboard changes go
    through the controller, so the panel pushes the stored value back in
    every frame with set_value().
    """

    height = 36

    def __init__(self, x, y, width, defn, value, on_change=None):
        self.x = x
        self.y = y
        self.width = width
        self.defn = defn
        self.key = defn["key"]
        self.value = value
        self.on_change = on_change
        self.dragging = False
        self.hovered = False
        self.focused = False

        self.track_x = x + 8
        self.track_y = y + 22
        self.track_w = width - 16

    @property
    def min_val(self):
        return self.defn["min"]

    @property
    def max_val(self):
        return self.defn["max"]

    def _fraction(self, val):
        span = self.max_val - self.min_val
        return (val - self.min_val) / span if span else 0.0

    def _val_to_x(self, val):
        return self.track_x + self._fraction(val) * self.track_w

    def _x_to_val(self, px):
        frac = max(0.0, min(1.0, (px - self.track_x) / self.track_w))
        val = self.min_val + frac * (self.max_val - self.min_val)
        step = self.defn.get("step")
        if step:
            val = self.min_val + round((val - self.min_val) / step) * step
        return val

    def _on_track(self, pos):
        mx, my = pos
        return (self.track_x - 4 <= mx <= self.track_x + self.track_w + 4
                and abs(my - self.track_y) <= 12)

    def _drag_to(self, px):
        self.value = self._x_to_val(px)
        if self.on_change:
            self.on_change(self.key, self.value)

    def handle_event(self, event):
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self._on_track(event.pos):
                self.dragging = True
                self._drag_to(event.pos[0])
                return True
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self.dragging = False
        elif event.type == pygame.MOUSEMOTION:
            mx, my = event.pos
            self.hovered = (abs(mx - self._val_to_x(self.value)) < 12
                            and abs(my - self.track_y) < 12)
            if self.dragging:
                self._drag_to(mx)
                return True
        return False

    def set_value(self, val):
        if not self.dragging:
            self.value = max(self.min_val, min(self.max_val, val))

    def draw(self, surface, font):
        label_color = THEME["text_bright"] if self.focused else THEME["text"]
        surface.blit(font.render(self.defn["label"], True, label_color), (self.x + 8, self.y + 2))

        text = format(self.value, self.defn.get("fmt", "d"))
        val_surf = font.render(text, True, THEME["text_bright"])
        surface.blit(val_surf, (self.x + self.width - val_surf.get_width() - 8, self.y + 2))

        top = self.track_y - 2
        pygame.draw.rect(surface, THEME["track"],
                         pygame.Rect(self.track_x, top, self.track_w, 4), border_radius=2)
        hx = self._val_to_x(self.value)
        fill = THEME["track_focus"] if self.focused else THEME["track_fill"]
        pygame.draw.rect(surface, fill,
                         pygame.Rect(self.track_x, top, hx - self.track_x, 4), border_radius=2)

        active = self.dragging or self.hovered
        radius = 9 if self.dragging else 7
        pygame.draw.circle(surface, THEME["handle_active"] if active else THEME["handle"],
                           (int(hx), self.track_y), radius)


class FlagLine:
    """Label with a coloured ON/OFF state for a bool parameter."""

    height = 18

    def __init__(self, x, y, defn, value=False):
        self.x = x
        self.y = y
        self.defn = defn
        self.key = defn["key"]
        self.value = value

    def set_value(self, val):
        self.value = bool(val)

    def draw(self, surface, font):
        label = font.render(f"{self.defn['label']}:", True, THEME["text"])
        surface.blit(label, (self.x, self.y))
        state = font.render("ON" if self.value else "OFF", True,
                            THEME["on"] if self.value else THEME["off"])
        surface.blit(state, (self.x + label.get_width() + 6, self.y))


class TextLine:
    """Single line of status text."""

    height = 18

    def __init__(self, x, y, text="", color=None):
        self.x = x
        self.y = y
        self.text = text
        self.color = color or THEME["text_dim"]

    def draw(self, surface, font):
        surface.blit(font.render(self.text, True, self.color), (self.x, self.y))


class SectionHeader:
    """Divider line with a title."""

    height = 24

    def __init__(self, x, y, width, title):
        self.x = x
        self.y = y
        self.width = width
        self.title = title

    def draw(self, surface, font):
        pygame.draw.line(surface, THEME["divider"],
                         (self.x + 8, self.y + 8), (self.x + self.width - 8, self.y + 8))
        surface.blit(font.render(self.title, True, THEME["text_dim"]), (self.x + 8, self.y + 12))


class ControlPanel:
    """Side panel: lays out widgets top to bottom and routes mouse events.

    Events arrive in window coordinates and are shifted into the panel's
    own coordinate space before reaching the widgets.
    """

    def __init__(self, x, y, width, height):
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        self.widgets = []
        self.params = {}
        self.surface = pygame.Surface((width, height))
        self._cursor_y = 8

    def _push(self, widget, gap=0):
        self.widgets.append(widget)
        self._cursor_y += widget.height + gap
        return widget

    def add_section(self, title):
        return self._push(SectionHeader(0, self._cursor_y, self.width, title), gap=4)

    def add_param(self, defn, value, on_change=None):
        """Slider for numeric parameters, ON/OFF line for bools."""
        if defn.get("kind") == "bool":
            widget = self._push(FlagLine(8, self._cursor_y, defn, value))
        else:
            widget = self._push(ParamSlider(0, self._cursor_y, self.width, defn, value,
                                            on_change), gap=6)
        self.params[defn["key"]] = widget
        return widget

    def add_text(self, text="", color=None):
        return self._push(TextLine(8, self._cursor_y, text, color))

    def sync(self, values, focused=None):
        """Push live parameter values (and slider focus) into the widgets."""
        for key, widget in self.params.items():
            widget.set_value(values[key])
            if isinstance(widget, ParamSlider):
                widget.focused = key == focused

    def _release_drags(self):
        for widget in self.params.values():
            if isinstance(widget, ParamSlider):
                widget.dragging = False

    def handle_event(self, event):
        if not hasattr(event, "pos"):
            return False
        local = (event.pos[0] - self.x, event.pos[1] - self.y)
        if not (0 <= local[0] <= self.width and 0 <= local[1] <= self.height):
            if event.type == pygame.MOUSEBUTTONUP:
                self._release_drags()
            return False
        attrs = dict(event.__dict__, pos=local)
        shifted = pygame.event.Event(event.type, attrs)
        for widget in self.widgets:
            handler = getattr(widget, "handle_event", None)
            if handler is not None and handler(shifted):
                return True
        return False

    def draw(self, target_surface, font):
        self.surface.fill(THEME["panel"])
        pygame.draw.line(self.surface, THEME["divider"], (0, 0), (0, self.height))
        for widget in self.widgets:
            widget.draw(self.surface, font)
        target_surface.blit(self.surface, (self.x, self.y))
