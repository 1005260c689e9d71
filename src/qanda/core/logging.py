"""Root logger configuration.

``setup_logging`` attaches a console handler (and optionally a file
handler) to the root logger. Handlers it installs are named, and a
second call is a no-op while they are present; handlers installed by
anyone else (uvicorn, pytest) are left alone.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from qanda.config.schema import LoggingConfig

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_STRUCTURED_FORMAT = (
    'time=%(asctime)s level=%(levelname)s logger=%(name)s msg="%(message)s"'
)
_DATEFMT = "%Y-%m-%d %H:%M:%S"

CONSOLE_HANDLER = "qanda.console"
FILE_HANDLER = "qanda.file"


def setup_logging(config: LoggingConfig) -> bool:
    """Configure the root logger from config.

    Returns True if handlers were attached, False if qanda logging was
    already configured.
    """
    root = logging.getLogger()
    if any(h.get_name() == CONSOLE_HANDLER for h in root.handlers):
        return False

    root.setLevel(getattr(logging, config.level.upper(), logging.INFO))

    formatter = logging.Formatter(
        fmt=_STRUCTURED_FORMAT if config.structured else _FORMAT,
        datefmt=_DATEFMT,
    )

    console = logging.StreamHandler()
    console.set_name(CONSOLE_HANDLER)
    console.setFormatter(formatter)
    root.addHandler(console)

    if config.file:
        log_path = Path(config.file).expanduser().resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.set_name(FILE_HANDLER)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    return True
