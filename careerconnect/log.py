"""Logging for the client library and the Streamlit app.

Library modules only ask for named loggers. Handlers are installed by
:func:`configure_logging`, which the app calls with the loaded settings.
"""
from __future__ import annotations

import logging
import sys
from datetime import date
from pathlib import Path

LOG_DIR = Path(__file__).resolve().parent.parent / "logs"
_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"
_DATE_FMT = "%Y-%m-%d %H:%M:%S"
# Marks handlers we own so reconfiguring replaces them instead of stacking.
_OWNED = "_careerconnect_handler"


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_file_path(log_dir: Path = LOG_DIR, day: date | None = None) -> Path:
    day = day or date.today()
    return log_dir / f"careerconnect_{day:%Y-%m-%d}.log"


def _own(handler: logging.Handler, level: int) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FMT))
    setattr(handler, _OWNED, True)
    return handler


def configure_logging(level: str = "INFO", to_file: bool = True, log_dir: Path = LOG_DIR) -> None:
    """Install stderr and (optionally) daily-file handlers on the root logger.

    Safe to call on every Streamlit rerun: previously installed handlers
    are swapped out, handlers added by others are left alone.
    """
    numeric = getattr(logging, level.upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(numeric)

    for handler in [h for h in root.handlers if getattr(h, _OWNED, False)]:
        root.removeHandler(handler)
        handler.close()

    root.addHandler(_own(logging.StreamHandler(sys.stderr), numeric))

    if not to_file:
        return
    path = log_file_path(log_dir)
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
    except OSError as exc:
        logging.getLogger(__name__).warning("File logging disabled, cannot open %s: %s", path, exc)
        return
    root.addHandler(_own(file_handler, logging.DEBUG))
