#!/usr/bin/env python3
# platform_manager.py
"""
Helper functions shared by the standalone server and the AWS Lambda entry point.
"""

from __future__ import annotations

import logging
import os

""" Parameters """


def get_parameters(
    param_names: list[str] | str,
    defaults: dict[str, str] | None = None,
) -> dict[str, str | None]:
    """
    Retrieve configuration parameters from environment variables.

    Parameters are stored in the environment in uppercase, but the result dictionary is
    keyed by the lowercase name. Empty values count as missing and fall back to the default.

    Args:
        param_names (list[str] | str): Parameter name or names to look up.
        defaults (dict[str, str] | None): Fallback values keyed by lowercase name.

    Returns:
        dict: Mapping of each lowercase name to its value, or None when unset with no default.
    """
    if isinstance(param_names, str):
        param_names = [param_names]

    defaults = defaults or {}

    result: dict[str, str | None] = {}
    for param_name in param_names:
        name = param_name.lower()
        value = os.getenv(param_name.upper())
        result[name] = value if value else defaults.get(name)
    return result


""" Logging """


def create_logger(log_level: str = "INFO", logger_name: str = "hello-api") -> logging.Logger:
    """
    Create a logger that writes to the console (and so to CloudWatch when running in Lambda).

    Args:
        log_level (str): Logging level (e.g., "INFO", "DEBUG").
        logger_name (str): Name for the logger instance.

    Returns:
        logging.Logger: Configured logger instance.
    """
    logger = logging.getLogger(logger_name)
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    # Check if the logger already has its own handler to avoid duplication
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        logger.addHandler(handler)

    return logger
