from contextlib import contextmanager
import logging
import signal
import sys

import blessed

from cellpaint.events import Event, KeyEvent, ResizeEvent, decode_sequence, is_complete_sequence
from cellpaint.style import Color, DEFAULT_STYLE, Style, is_default

log = logging.getLogger(__name__)

POLL_TIMEOUT = 0.5
# how long to wait for the rest of an escape sequence, blessed uses the same
ESC_DELAY = 0.35
# a report can come in pieces over a slow link
SEQUENCE_WAITS = 3

# press/release, drag, any motion, SGR extended coordinates
MOUSE_MODES = (1000, 1002, 1003, 1006)
PASTE_MODE = 2004

class ScreenError(RuntimeError):
    pass

class Screen():
    """Cell surface over a blessed terminal.

    Cells are kept in a map and only the ones touched since the last
    show() are written out.  Writes outside the terminal are dropped."""

    def __init__(self, t : blessed.Terminal, style : Style = DEFAULT_STYLE):
        self.t : blessed.Terminal = t
        self.style : Style = style
        self.cells : dict[tuple[int, int], tuple[Style, str]] = {}
        self.dirty : set[tuple[int, int]] = set()
        self.need_clear : bool = True
        self.width : int = t.width
        self.height : int = t.height
        self.mouse : bool = False
        self.paste : bool = False
        self.resized : bool = False
        self.continued : bool = False
        self.orig_winch = None
        self.orig_cont = None
        self.reset()

    @classmethod
    def open(cls, style : Style = DEFAULT_STYLE, stream = None) -> "Screen":
        t = blessed.Terminal(stream=stream)
        if not t.is_a_tty:
            raise ScreenError("standard output is not a terminal")
        if not t.does_styling:
            raise ScreenError(f"terminal {t.kind!r} can't do styling")
        return cls(t, style)

    # SGR state caching, so runs of same-styled cells are cheap
    def reset(self):
        self.fg : None | Color = None
        self.bg : None | Color = None
        self.normal : bool = False

    def send_normal(self):
        if not self.normal:
            print(self.t.normal, end='')
            self.normal = True
            self.fg = None
            self.bg = None

    def send_fg(self, color : Color):
        if self.fg == color:
            return
        if is_default(color):
            # only a full reset gets the default color back, so put the
            # background back afterwards
            bg = self.bg
            self.send_normal()
            if bg is not None and not is_default(bg):
                self.send_bg(bg)
        else:
            print(self.t.color_rgb(*color), end='')
            self.normal = False
        self.fg = color

    def send_bg(self, color : Color):
        if self.bg == color:
            return
        if is_default(color):
            fg = self.fg
            self.send_normal()
            if fg is not None and not is_default(fg):
                self.send_fg(fg)
        else:
            print(self.t.on_color_rgb(*color), end='')
            self.normal = False
        self.bg = color

    def send_style(self, style : Style):
        self.send_bg(style.bg)
        self.send_fg(style.fg)

    def send_pos(self, x : int, y : int):
        print(self.t.move_xy(x, y), end='')

    def set_cell(self, x : int, y : int, style : Style, glyph : str):
        if x < 0 or x >= self.width or y < 0 or y >= self.height:
            return
        self.cells[(x, y)] = (style, glyph)
        self.dirty.add((x, y))

    def get_cell(self, x : int, y : int) -> tuple[Style, str]:
        try:
            return self.cells[(x, y)]
        except KeyError:
            pass

        return self.style, ' '

    def clear(self):
        self.cells.clear()
        self.dirty.clear()
        self.need_clear = True

    def show(self):
        if self.need_clear:
            self.need_clear = False
            self.send_normal()
            self.send_style(self.style)
            print(self.t.clear, end='')

        # row-major so adjacent cells don't need a cursor move
        last_x : int = -2
        last_y : int = -2
        for x, y in sorted(self.dirty, key=lambda pos: (pos[1], pos[0])):
            style, glyph = self.cells[(x, y)]
            if y != last_y or x != last_x + 1:
                self.send_pos(x, y)
            self.send_style(style)
            print(glyph, end='')
            last_x = x
            last_y = y
        self.dirty.clear()
        self.send_normal()
        sys.stdout.flush()

    def sync(self):
        self.width = self.t.width
        self.height = self.t.height
        for x, y in list(self.cells.keys()):
            if x >= self.width or y >= self.height:
                del self.cells[(x, y)]
        self.reset()
        self.need_clear = True
        self.dirty = set(self.cells.keys())
        log.debug("synced to %dx%d", self.width, self.height)

    def send_mode(self, mode : int, enable : bool):
        print(f"\x1b[?{mode}{'h' if enable else 'l'}", end='')

    def enable_mouse(self):
        for mode in MOUSE_MODES:
            self.send_mode(mode, True)
        self.mouse = True

    def disable_mouse(self):
        for mode in reversed(MOUSE_MODES):
            self.send_mode(mode, False)
        self.mouse = False

    def enable_paste(self):
        self.send_mode(PASTE_MODE, True)
        self.paste = True

    def disable_paste(self):
        self.send_mode(PASTE_MODE, False)
        self.paste = False

    def handler_winch(self, signum, frame):
        self.resized = True
        if callable(self.orig_winch):
            self.orig_winch(signum, frame)

    def handler_cont(self, signum, frame):
        # coming back from being stopped, the terminal state is gone
        self.resized = True
        self.continued = True
        if callable(self.orig_cont):
            self.orig_cont(signum, frame)

    def read_key(self, timeout : None | float) -> None | Event:
        key = self.t.inkey(timeout)
        if not key:
            return None

        text = str(key)
        if not text.startswith('\x1b'):
            return KeyEvent(text)

        # finish off sequences blessed doesn't have in its keymap
        waits : int = 0
        while not is_complete_sequence(text):
            more = self.t.inkey(ESC_DELAY)
            if not more:
                waits += 1
                # a lone ESC is just the escape key
                if text == '\x1b' or waits >= SEQUENCE_WAITS:
                    break
                continue
            text += str(more)

        if text == str(key) and key.is_sequence:
            return KeyEvent('', key.name)

        event = decode_sequence(text)
        if event is None:
            if text == '\x1b':
                return KeyEvent('', 'KEY_ESCAPE')
            log.debug("ignoring unknown sequence %r", text)
        return event

    def poll_event(self) -> Event:
        while True:
            if self.continued:
                self.continued = False
                if self.mouse:
                    self.enable_mouse()
                if self.paste:
                    self.enable_paste()
            if self.resized:
                self.resized = False
                return ResizeEvent(self.t.width, self.t.height)

            event = self.read_key(POLL_TIMEOUT)
            if event is not None:
                return event

    @contextmanager
    def active(self):
        """Put the terminal in drawing mode for the duration of the block.

        Everything is undone on the way out, however the block is left."""
        self.orig_winch = signal.getsignal(signal.SIGWINCH)
        self.orig_cont = signal.getsignal(signal.SIGCONT)
        signal.signal(signal.SIGWINCH, self.handler_winch)
        signal.signal(signal.SIGCONT, self.handler_cont)
        try:
            with self.t.cbreak(), self.t.fullscreen(), self.t.hidden_cursor():
                self.enable_mouse()
                self.enable_paste()
                self.clear()
                try:
                    yield self
                finally:
                    self.disable_paste()
                    self.disable_mouse()
                    self.send_normal()
                    sys.stdout.flush()
        finally:
            # getsignal() gives None for handlers not installed from python
            signal.signal(signal.SIGWINCH, self.orig_winch or signal.SIG_DFL)
            signal.signal(signal.SIGCONT, self.orig_cont or signal.SIG_DFL)
            log.debug("terminal restored")
