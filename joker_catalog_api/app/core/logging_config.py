"""
Logging configuration for the catalog service.

Every module logs through ``logging.getLogger(__name__)``; this module
decides where those records end up.  ``setup_logging`` installs a
console handler and, when ``LOG_FILE`` is configured, a UTF‑8 file
handler on the root logger, and aligns the uvicorn loggers with the
chosen level so server and application output read the same.
"""

import logging
from pathlib import Path
from typing import List, Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Loggers owned by the ASGI server.  They keep their own handlers but
# follow the application level.
SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")

# Marks handlers installed here, so a second call is a no-op while
# handlers added by other tools (pytest, uvicorn) are left alone.
_HANDLER_FLAG = "_joker_catalog_handler"


def resolve_level(level: str) -> int:
    """Map a level name such as ``"debug"`` to its number; unknown names give ``INFO``."""
    value = logging.getLevelName(str(level).upper())
    return value if isinstance(value, int) else logging.INFO


def build_handlers(logfile: Optional[str] = None) -> List[logging.Handler]:
    """Create the console handler and, if ``logfile`` is set, a file handler."""
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if logfile:
        log_path = Path(logfile).resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        setattr(handler, _HANDLER_FLAG, True)
    return handlers


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger once per process.

    Parameters
    ----------
    level : str
        Logging level name, case insensitive.
    logfile : Optional[str]
        File that receives a copy of every record.  Missing parent
        directories are created.
    """
    root = logging.getLogger()
    numeric_level = resolve_level(level)
    for name in SERVER_LOGGERS:
        logging.getLogger(name).setLevel(numeric_level)

    if any(getattr(h, _HANDLER_FLAG, False) for h in root.handlers):
        return

    root.setLevel(numeric_level)
    for handler in build_handlers(logfile):
        root.addHandler(handler)
