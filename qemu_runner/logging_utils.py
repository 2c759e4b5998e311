#!/usr/bin/env python3
"""
Shared logging utilities for qemu-runner.

Provides timestamped debug logging to file for diagnostic purposes.
"""

import logging

PACKAGE_LOGGER_NAME = "qemu_runner"

_FORMAT = "[%(created).6f] %(name)s: %(message)s"


def configure_debug_log(path):
    """
    Send every debug message from the qemu_runner loggers to a file.

    Args:
        path: The file to append debug messages to.

    Returns:
        The FileHandler that was attached, so callers can close it.
    """
    handler = logging.FileHandler(path)
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(_FORMAT))

    logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    logger.addHandler(handler)
    return handler
