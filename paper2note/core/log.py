"""
Logging setup for the paper2note CLI

``setup_logging`` is called once from ``cli.main()``; every other module uses
``logging.getLogger(__name__)`` and lets records propagate to the
``paper2note`` logger.
"""
import logging
import sys
from pathlib import Path
from typing import Optional

_FMT = "%(asctime)s  %(levelname)-7s %(name)s: %(message)s"
_DATE = "%H:%M:%S"


def setup_logging(verbose: bool = False, log_file: Optional[Path] = None) -> None:
    """
    Configure the ``paper2note`` logger

    Args:
        verbose: DEBUG level when True, WARNING otherwise (notices already
            tell the user what happened)
        log_file: Also append records to this file; parent folders are created

    Safe to call repeatedly: existing handlers are replaced.
    """
    logger = logging.getLogger("paper2note")
    logger.handlers.clear()
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False

    fmt = logging.Formatter(_FMT, datefmt=_DATE)

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(fmt)
    logger.addHandler(console)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setFormatter(fmt)
        fh.setLevel(logging.DEBUG)
        logger.addHandler(fh)
        if not verbose:
            logger.setLevel(logging.INFO)
            console.setLevel(logging.WARNING)
