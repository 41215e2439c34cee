# -*- coding: utf-8 -*-
# Copyright (c) 2025, PT. Innovasi Terbaik Bangsa and contributors
# For license information, please see license.txt

"""
Common Frappe helper functions for Portal Payroll.

The calculation engine runs both inside a Frappe site (salary slip override,
reports, API) and as a plain library. This module gives every module a logger
that works in either context:

Usage:
    from portal_payroll.frappe_helpers import get_logger

    logger = get_logger("calculator.bpjs")
    logger.info("This is an info message")
"""

import logging

try:
    import frappe
    FRAPPE_AVAILABLE = True
except (ImportError, ModuleNotFoundError):
    FRAPPE_AVAILABLE = False

LOGGER_PREFIX = "portal_payroll"


def get_logger(name: str, fallback_level: int = logging.INFO) -> logging.Logger:
    """
    Get a logger that integrates with Frappe's logging system when available.

    Uses frappe.logger() when a site is initialized and falls back to standard
    Python logging otherwise (library use, CLI scripts, tests).

    Args:
        name: The name of the logger, typically the module name
        fallback_level: Default log level when not using Frappe's logger
    Returns:
        logging.Logger: A configured logger instance
    """
    if not name.startswith(LOGGER_PREFIX + "."):
        logger_name = f"{LOGGER_PREFIX}.{name}"
    else:
        logger_name = name

    if FRAPPE_AVAILABLE and getattr(frappe, "local", None) is not None and getattr(frappe.local, "site", None):
        try:
            return frappe.logger(logger_name)
        except Exception:
            pass

    logger = logging.getLogger(logger_name)

    if not logger.handlers:
        logger.setLevel(fallback_level)

        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            "%(asctime)s [%(name)s] %(levelname)s: %(message)s"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


logger = get_logger(__name__)
