from typing import Protocol

from cellpaint.style import Style

BLANK = ' '

class Surface(Protocol):
    def set_cell(self, x : int, y : int, style : Style, glyph : str): ...

def draw_text(surface : Surface, x : int, y : int, style : Style, text : str):
    # no wrapping, anything past the edge is up to the surface
    for c in text:
        surface.set_cell(x, y, style, c)
        x += 1

def draw_box(surface : Surface,
             x : int, y : int,
             w : int, h : int,
             style : Style):
    # border and inside use the same blank, so one pass covers both
    for ty in range(y, y + h):
        for tx in range(x, x + w):
            surface.set_cell(tx, ty, style, BLANK)
