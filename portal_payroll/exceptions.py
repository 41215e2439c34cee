# -*- coding: utf-8 -*-
# Copyright (c) 2025, PT. Innovasi Terbaik Bangsa and contributors
# For license information, please see license.txt

"""Exceptions raised by the payroll engine."""


class PayrollValidationError(ValueError):
    """Input rejected by the engine. ``field`` names the offending input."""

    def __init__(self, field, message):
        self.field = field
        super().__init__(f"{field}: {message}")


class PayrollStateError(Exception):
    """Payroll run lifecycle transition not allowed from the current status."""


class ConfigError(Exception):
    """Tax year configuration is missing or malformed."""
