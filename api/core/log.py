"""
Process-wide logging setup.

Modules log through `logging.getLogger(__name__)`; this only decides where the
records go and at which level.
"""

from __future__ import annotations

import logging
import sys

from core import settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    level_name = (level or settings.log_level()).upper()
    numeric = logging.getLevelName(level_name)
    if not isinstance(numeric, int):
        numeric = logging.INFO

    root = logging.getLogger()
    root.setLevel(numeric)

    # Reconfiguring (e.g. uvicorn reload) must not stack handlers.
    for handler in list(root.handlers):
        if getattr(handler, "_contacts_service", False):
            root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._contacts_service = True  # type: ignore[attr-defined]
    root.addHandler(handler)
