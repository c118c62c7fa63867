#!/usr/bin/env python

import argparse
import logging
import sys

from cellpaint import __version__
from cellpaint.screen import Screen, ScreenError
from cellpaint.session import run

log = logging.getLogger("cellpaint")

def main(argv : None | list[str] = None) -> int:
    parser = argparse.ArgumentParser(prog="cellpaint",
                                     description="Paint with the mouse in the terminal")
    parser.add_argument("--log", metavar="FILE", default=None,
                        help="Write debug logging to FILE (the screen itself is in use)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    args = parser.parse_args(argv)

    if args.log is not None:
        logging.basicConfig(filename=args.log, level=logging.DEBUG,
                            format="%(asctime)s %(name)s %(levelname)s: %(message)s")

    try:
        screen = Screen.open()
    except ScreenError as e:
        print(f"cellpaint: {e}", file=sys.stderr)
        return 1

    log.info("starting on %s, %dx%d", screen.t.kind, screen.width, screen.height)
    with screen.active():
        run(screen)

    return 0

if __name__ == '__main__':
    sys.exit(main())
