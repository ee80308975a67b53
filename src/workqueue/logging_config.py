"""
Console logging for the producer and worker commands.

Both roles log to stdout through a single handler whose format carries the
role name, so interleaved output from several processes stays readable.
"""

import logging
import sys
from typing import Optional


def setup_logging(
    level: int = logging.INFO,
    microservice_name: Optional[str] = None,
    force_setup: bool = False,
) -> None:
    """
    Install the stdout handler on the root logger.

    Calling this again is cheap: when the root logger already has handlers
    only the level is updated, unless ``force_setup`` replaces them.

    Args:
        level: Level for the root and ``workqueue`` loggers
        microservice_name: Role shown in every line ('producer' or 'worker')
        force_setup: Drop existing root handlers and install ours
    """
    root_logger = logging.getLogger()
    if root_logger.handlers and not force_setup:
        root_logger.setLevel(level)
        return

    if force_setup:
        root_logger.handlers.clear()

    _setup_console_logging(microservice_name)

    root_logger.setLevel(level)

    # amqpstorm logs every frame on its io thread at INFO/DEBUG
    logging.getLogger("amqpstorm").setLevel(logging.WARNING)

    from workqueue.config import SERVICE_NAME

    logging.getLogger(SERVICE_NAME).setLevel(level)


def create_formatter(microservice_name: Optional[str] = None) -> logging.Formatter:
    """
    Build the line format, prefixed with ``[role]`` when a role is given.
    """
    if microservice_name:
        service_prefix = f"[{microservice_name}] "
    else:
        service_prefix = ""

    return logging.Formatter(
        f"%(asctime)s - {service_prefix}%(name)s - %(levelname)s - %(message)s"
    )


def _setup_console_logging(microservice_name: Optional[str] = None) -> None:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(create_formatter(microservice_name))
    logging.getLogger().addHandler(handler)
