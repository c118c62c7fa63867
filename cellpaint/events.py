from dataclasses import dataclass
from enum import IntFlag, auto
import re

class Buttons(IntFlag):
    NONE = 0
    PRIMARY = auto()
    MIDDLE = auto()
    SECONDARY = auto()
    WHEEL_UP = auto()
    WHEEL_DOWN = auto()
    WHEEL_LEFT = auto()
    WHEEL_RIGHT = auto()
    # buttons 8-11 (back, forward, ...)
    EXTRA = auto()

WHEEL_MASK = Buttons.WHEEL_UP | Buttons.WHEEL_DOWN | \
             Buttons.WHEEL_LEFT | Buttons.WHEEL_RIGHT

@dataclass(frozen=True)
class ResizeEvent:
    width : int
    height : int

@dataclass(frozen=True)
class KeyEvent:
    # char is empty for named keys (arrows, escape, ...)
    char : str
    name : None | str = None

@dataclass(frozen=True)
class PointerEvent:
    x : int
    y : int
    buttons : Buttons = Buttons.NONE

@dataclass(frozen=True)
class PasteEvent:
    start : bool

Event = ResizeEvent | KeyEvent | PointerEvent | PasteEvent

SGR_MOUSE = re.compile(r'\x1b\[<(\d+);(\d+);(\d+)([Mm])')
PASTE_START = '\x1b[200~'
PASTE_END = '\x1b[201~'

# low two bits of a plain button report
SGR_BUTTONS = {
    0: Buttons.PRIMARY,
    1: Buttons.MIDDLE,
    2: Buttons.SECONDARY,
    3: Buttons.NONE
}

# low two bits of a wheel report (bit 64 set)
SGR_WHEEL = {
    0: Buttons.WHEEL_UP,
    1: Buttons.WHEEL_DOWN,
    2: Buttons.WHEEL_LEFT,
    3: Buttons.WHEEL_RIGHT
}

SGR_WHEEL_BIT = 64
SGR_EXTRA_BIT = 128

def is_complete_sequence(text : str) -> bool:
    if not text.startswith('\x1b'):
        return True
    if len(text) == 1:
        return False
    if text[1] != '[':
        # ESC + one char (alt-key style)
        return True
    if len(text) < 3:
        return False
    # CSI final bytes are 0x40-0x7E, '<' is a parameter prefix
    return '@' <= text[-1] <= '~'

def decode_sequence(text : str) -> None | Event:
    """Decode an escape sequence the keymap doesn't know about.

    Handles SGR (mode 1006) mouse reports and bracketed paste markers,
    returns None for anything else.  Terminal coordinates are 1-based,
    events are 0-based."""
    if text == PASTE_START:
        return PasteEvent(True)
    if text == PASTE_END:
        return PasteEvent(False)

    match = SGR_MOUSE.fullmatch(text)
    if match is None:
        return None

    code = int(match.group(1))
    x = int(match.group(2)) - 1
    y = int(match.group(3)) - 1
    if match.group(4) == 'm':
        # release, nothing held anymore
        return PointerEvent(x, y, Buttons.NONE)

    if code & SGR_EXTRA_BIT:
        buttons = Buttons.EXTRA
    elif code & SGR_WHEEL_BIT:
        buttons = SGR_WHEEL[code & 3]
    else:
        # motion reports carry the held button, or 3 when none is held
        buttons = SGR_BUTTONS[code & 3]

    return PointerEvent(x, y, buttons)
