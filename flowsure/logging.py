import logging
import sys
from rich.highlighter import RegexHighlighter
from rich.logging import RichHandler


def logger():
    return logging.getLogger("flowsure")


def configure_logger(debug: bool, rich: bool = True):
    """Route flowsure log records to the terminal. The library never calls
    this itself; applications opt in."""
    class BackTickHighlighter(RegexHighlighter):
        highlights = [r"`(?P<bold>[^`]*)`"]

    if rich:
        handler: logging.Handler = RichHandler(
            show_path=debug, highlighter=BackTickHighlighter(), log_time_format="[%X]")
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler(sys.stdout)

    log = logger()
    log.setLevel(logging.DEBUG if debug else logging.INFO)
    log.handlers = [handler]
    log.propagate = False
    return log
