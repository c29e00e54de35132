"""
Logging setup for the speaker directory.

Services log through ``logging.getLogger(__name__)``; this module only
wires the root logger once per process.  Records go to stderr and,
when ``LOG_FILE`` is set, to that file as well.  The HTTP stack used
by the Gemini client is held at WARNING so request-level debug output
does not drown the service's own messages.
"""

import logging
from pathlib import Path
from typing import Optional


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_QUIET_LOGGERS = ("urllib3", "httpx")


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> logging.Logger:
    """Attach handlers to the root logger and return it.

    Parameters
    ----------
    level : str
        Level name such as ``"DEBUG"``; unknown names mean ``INFO``.
    logfile : Optional[str]
        Extra file to append records to.

    A root logger that already has handlers (a second ``create_app``
    call, pytest's capture) is left as it is.
    """
    root = logging.getLogger()
    if root.handlers:
        return root

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return root
