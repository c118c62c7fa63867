from dataclasses import dataclass, field
from enum import Enum, auto
import logging
from typing import Protocol

from cellpaint.canvas import Surface, draw_box, draw_text
from cellpaint.events import Buttons, Event, KeyEvent, PasteEvent, PointerEvent, ResizeEvent, WHEEL_MASK
from cellpaint.style import COLOR_KEYS, COLOR_NAMES, DEFAULT_STYLE, PENCIL_FG, Color, Style

log = logging.getLogger(__name__)

LEGEND = "q - quit | x - switch color | c - clear | e - erase | " \
         "[ ] - pencil size | Left Click - draw | 1-8 - colors"
LEGEND_ROW = 0
INFO_ROW = 1
SWATCH_ROW = 2
STATUS_ROW = 3
# fields pencil_style is derived from
STYLE_FIELDS = ("active_slot", "primary_color", "secondary_color")

class Slot(Enum):
    PRIMARY = auto()
    SECONDARY = auto()

class KeyActions(Enum):
    NONE = auto()
    QUIT = auto()
    SWAP = auto()
    CLEAR = auto()
    ERASE = auto()
    GROW = auto()
    SHRINK = auto()

KEY_ACTIONS = {
    'q': KeyActions.QUIT,
    'Q': KeyActions.QUIT,
    'x': KeyActions.SWAP,
    'X': KeyActions.SWAP,
    'c': KeyActions.CLEAR,
    'C': KeyActions.CLEAR,
    'e': KeyActions.ERASE,
    ']': KeyActions.GROW,
    '[': KeyActions.SHRINK
}

def key_to_action(key : str) -> KeyActions:
    try:
        return KEY_ACTIONS[key]
    except KeyError:
        pass

    return KeyActions.NONE

class PaintSurface(Surface, Protocol):
    def clear(self): ...
    def sync(self): ...
    def show(self): ...
    def poll_event(self) -> Event: ...

@dataclass
class PencilState:
    x : int = 0
    y : int = 0
    width : int = 1
    height : int = 1
    erase_mode : bool = False
    active_slot : Slot = Slot.PRIMARY
    primary_color : Color = COLOR_KEYS['1']
    secondary_color : Color = COLOR_KEYS['1']
    pencil_style : Style = field(init=False)

    def __setattr__(self, name, value):
        super().__setattr__(name, value)
        # __init__ sets the slot before the colors exist
        if name in STYLE_FIELDS and all(f in self.__dict__ for f in STYLE_FIELDS):
            self.restyle()

    @property
    def active_color(self) -> Color:
        if self.active_slot == Slot.PRIMARY:
            return self.primary_color
        return self.secondary_color

    def restyle(self):
        self.pencil_style = Style(fg=PENCIL_FG, bg=self.active_color)

    def set_color(self, color : Color):
        if self.active_slot == Slot.PRIMARY:
            self.primary_color = color
        else:
            self.secondary_color = color

    def swap_slot(self):
        if self.active_slot == Slot.PRIMARY:
            self.active_slot = Slot.SECONDARY
        else:
            self.active_slot = Slot.PRIMARY

    def grow(self):
        self.width += 1
        self.height += 1

    def shrink(self):
        if self.width > 1 and self.height > 1:
            self.width -= 1
            self.height -= 1

    def stroke_style(self) -> Style:
        if self.erase_mode:
            return DEFAULT_STYLE
        return self.pencil_style

def handle_key(surface : PaintSurface, state : PencilState, key : str) -> bool:
    try:
        color = COLOR_KEYS[key]
    except KeyError:
        pass
    else:
        state.set_color(color)
        log.debug("%s color set to %s", state.active_slot.name.lower(), COLOR_NAMES[key])
        return True

    match key_to_action(key):
        case KeyActions.QUIT:
            return False
        case KeyActions.SWAP:
            state.swap_slot()
        case KeyActions.CLEAR:
            surface.clear()
        case KeyActions.ERASE:
            state.erase_mode = not state.erase_mode
        case KeyActions.GROW:
            state.grow()
        case KeyActions.SHRINK:
            state.shrink()
        case KeyActions.NONE:
            log.debug("ignoring key %r", key)

    return True

def handle_pointer(surface : PaintSurface, state : PencilState, event : PointerEvent):
    state.x = event.x
    state.y = event.y

    # wheel reports say nothing about what's held
    if event.buttons & ~WHEEL_MASK == Buttons.PRIMARY:
        draw_box(surface, state.x, state.y, state.width, state.height, state.stroke_style())

def handle_event(surface : PaintSurface, state : PencilState, event : Event) -> bool:
    """Apply one event to the state and the surface.

    Returns False once the session should end."""
    match event:
        case ResizeEvent():
            surface.sync()
        case KeyEvent(char=char) if char:
            return handle_key(surface, state, char)
        case KeyEvent():
            log.debug("ignoring key %s", event.name)
        case PointerEvent():
            handle_pointer(surface, state, event)
        case PasteEvent():
            pass

    return True

class Overlay():
    """Legend and status lines drawn over the canvas every frame.

    The surface is cells, not lines, so each line is padded out to the
    widest text drawn on its row so far, covering whatever a longer
    earlier line left behind."""

    def __init__(self):
        self.widths : dict[int, int] = {}

    def draw_line(self, surface : Surface, row : int, text : str):
        width = max(self.widths.get(row, 0), len(text))
        self.widths[row] = width
        draw_text(surface, 0, row, DEFAULT_STYLE, text.ljust(width))

    def draw(self, surface : Surface, state : PencilState):
        self.draw_line(surface, LEGEND_ROW, LEGEND)
        self.draw_line(surface, INFO_ROW, f"{state.x}, {state.y} | {state.width}, {state.height}")
        # both slots stay visible, primary on the left
        draw_text(surface, 0, SWATCH_ROW, state.pencil_style.with_bg(state.primary_color), " ")
        draw_text(surface, 1, SWATCH_ROW, state.pencil_style.with_bg(state.secondary_color), " ")
        self.draw_line(surface, STATUS_ROW,
                       f"{state.active_slot.name.lower()} | {str(state.erase_mode).lower()}")

def run(surface : PaintSurface, state : None | PencilState = None) -> PencilState:
    if state is None:
        state = PencilState()
    overlay = Overlay()

    overlay.draw(surface, state)
    while True:
        surface.show()
        event = surface.poll_event()
        if not handle_event(surface, state, event):
            log.info("quit at %d, %d", state.x, state.y)
            break
        overlay.draw(surface, state)

    return state
