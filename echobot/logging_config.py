"""
Logging setup shared by the web app and the serverless handler.

Both entry points call setup_logging() at import time; repeated calls are
no-ops so a warm serverless container never stacks handlers.
"""

import logging
import sys

_logging_configured = False


def setup_logging(log_level: str = "INFO") -> logging.Logger:
    global _logging_configured

    root_logger = logging.getLogger()
    if _logging_configured:
        return root_logger

    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)

    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    root_logger.addHandler(console_handler)

    logging.getLogger("httpx").setLevel(logging.WARNING)

    _logging_configured = True
    return root_logger
