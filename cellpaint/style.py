from dataclasses import dataclass, replace
from types import MappingProxyType

# (r, g, b), with -1 components meaning the terminal's own default color
Color = tuple[int, int, int]

DEFAULT_COLOR : Color = (-1, -1, -1)
WHITE : Color = (255, 255, 255)
BLACK : Color = (0, 0, 0)

@dataclass(frozen=True)
class Style:
    fg : Color = DEFAULT_COLOR
    bg : Color = DEFAULT_COLOR

    def with_fg(self, fg : Color) -> "Style":
        return replace(self, fg=fg)

    def with_bg(self, bg : Color) -> "Style":
        return replace(self, bg=bg)

def is_default(color : Color) -> bool:
    return color[0] < 0

COLOR_KEYS = MappingProxyType({
    '1': WHITE,
    '2': (26, 28, 44), # light black
    '3': (255, 0, 0), # red
    '4': (0, 128, 0), # green
    '5': (255, 255, 0), # yellow
    '6': (0, 0, 255), # blue
    '7': (139, 0, 139), # dark magenta
    '8': (165, 42, 42) # brown
})

COLOR_NAMES = MappingProxyType({
    '1': "white",
    '2': "light black",
    '3': "red",
    '4': "green",
    '5': "yellow",
    '6': "blue",
    '7': "dark magenta",
    '8': "brown"
})

# white on whatever the terminal background is
DEFAULT_STYLE = Style(fg=WHITE, bg=DEFAULT_COLOR)
PENCIL_FG : Color = BLACK
