import logging
import sys

# send everything to stderr. stdout is kept for the generated wiring.
def setup_logging(level="INFO", quiet=False):
    root = logging.getLogger()
    root.handlers.clear()

    lvl = getattr(logging, level.upper(), logging.INFO)
    if quiet:
        lvl = max(lvl, logging.WARNING)
    root.setLevel(lvl)

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(lvl)
    fmt = "[%(levelname)s] %(name)s: %(message)s" if not quiet else "%(message)s"
    ch.setFormatter(logging.Formatter(fmt))
    root.addHandler(ch)
