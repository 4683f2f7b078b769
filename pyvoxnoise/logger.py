"""
Logging setup for the PyVoxNoise command line tools.

Library modules only create module loggers; handlers are installed here,
once, by the CLI entry points.

Author: B.G.
"""

import logging
import sys


def setup_logger(verbose: bool = False, log_file: str = None) -> logging.Logger:
    """
    Configure the root logger.

    Args:
        verbose: DEBUG level instead of INFO
        log_file: Optional file receiving timestamped records as well

    Returns:
        The root logger
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger()
    logger.setLevel(level)

    # Clear existing handlers to prevent duplicate logs when called twice
    if logger.hasHandlers():
        logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w")
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
        logger.addHandler(file_handler)

    return logger
