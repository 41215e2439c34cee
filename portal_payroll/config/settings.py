# -*- coding: utf-8 -*-
# Copyright (c) 2025, PT. Innovasi Terbaik Bangsa and contributors
# For license information, please see license.txt

"""
Payroll Portal Settings bridge.

Reads rate and cap overrides from the "Payroll Portal Settings" single DocType
and applies them on top of the bundled tax year configuration. Empty fields
keep the bundled value.
"""

import frappe
from frappe import ValidationError
from frappe.utils import flt

from portal_payroll.config.tax_year import OVERRIDABLE_FIELDS, TaxYearConfig, get_tax_year_config
from portal_payroll.constants import SETTINGS_DOCTYPE, SETTINGS_NAME
from portal_payroll.exceptions import ConfigError
from portal_payroll.frappe_helpers import get_logger

logger = get_logger("config.settings")

DEFAULT_JKK_RISK_LEVEL = 0.24


class _EmptySettings(dict):
    def get(self, key, default=None):
        return default


def settings_exist() -> bool:
    """
    Check if Payroll Portal Settings exists in the database.
    """
    return bool(frappe.db.exists(SETTINGS_DOCTYPE, SETTINGS_NAME))


def get_settings():
    """
    Return cached Payroll Portal Settings document.
    Logs a warning if settings don't exist.
    """
    try:
        if settings_exist():
            return frappe.get_cached_doc(SETTINGS_DOCTYPE, SETTINGS_NAME)
        logger.warning(f"{SETTINGS_DOCTYPE} not found. Using bundled tax tables.")
    except Exception as e:
        logger.warning(f"Error loading {SETTINGS_DOCTYPE}: {str(e)}. Using bundled tax tables.")
    return _EmptySettings()


def get_value(fieldname: str, default=None):
    """
    Helper to fetch a field value from Payroll Portal Settings.
    """
    return get_settings().get(fieldname, default)


def collect_overrides(source) -> dict:
    """
    Overridable rate/cap fields filled in ``source`` (settings doc or dict).

    A Single stores unfilled Float/Currency/Int fields as 0, so 0 means
    "keep the bundled value" for every overridable field.
    """
    overrides = {}
    for fieldname in OVERRIDABLE_FIELDS:
        value = source.get(fieldname)
        if value is None or value == "" or not flt(value):
            continue
        overrides[fieldname] = value
    return overrides


def get_overrides() -> dict:
    """Collect the overridable rate/cap fields that are filled in settings."""
    return collect_overrides(get_settings())


def get_live_tax_year_config(year: int) -> TaxYearConfig:
    """
    Return the tax year configuration for ``year`` with settings overrides applied.

    Overrides only apply when settings enable them for the current year so that
    historical payslips keep reproducing with the tables of their own year.
    """
    config = get_tax_year_config(int(year))
    override_year = get_value("override_tax_year")
    if not override_year or int(override_year) != int(year):
        return config

    overrides = get_overrides()
    if not overrides:
        return config

    try:
        config = config.with_overrides(**overrides)
    except ConfigError as e:
        logger.error(f"Invalid {SETTINGS_DOCTYPE} override: {e}")
        raise ValidationError(f"Invalid {SETTINGS_DOCTYPE} override: {e}")

    logger.info(f"Applied {SETTINGS_DOCTYPE} overrides for {year}: {sorted(overrides)}")
    return config


def get_company_jkk_risk_level(company: str) -> float:
    """
    Return the JKK risk level (%) recorded on the Company.
    Falls back to the settings default, then to risk class I.
    """
    value = None
    if company:
        value = frappe.db.get_value("Company", company, "jkk_risk_level")
    if value in (None, "", 0):
        value = get_value("default_jkk_risk_level") or DEFAULT_JKK_RISK_LEVEL
        logger.info(f"Company {company!r} has no JKK risk level. Using {value}")
    return flt(value)
