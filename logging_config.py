"""Shared logging configuration for the percolation command-line drivers.

Call ``configure_logging()`` once at a CLI entry point. The simulation
classes themselves never log. The function is idempotent: if the root
logger already has handlers, only the level is updated.
"""

import logging


def configure_logging(level: int = logging.INFO) -> None:
    """Configure the root logger with a console (stderr) handler."""
    root = logging.getLogger()
    root.setLevel(level)
    if root.handlers:
        return

    fmt = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter(fmt))
    root.addHandler(console)
