# -*- coding: utf-8 -*-
# Copyright (c) 2025, PT. Innovasi Terbaik Bangsa and contributors
# For license information, please see license.txt

"""
Payroll Portal Settings DocType Controller

Holds optional rate/cap overrides for one tax year and the default JKK risk
level. Overrides are validated against the bundled tables of that year before
the document is saved.
"""

import frappe
from frappe import _
from frappe.model.document import Document
from frappe.utils import cint

from portal_payroll.config.settings import collect_overrides
from portal_payroll.config.tax_year import get_tax_year_config
from portal_payroll.exceptions import ConfigError, PayrollValidationError

logger = frappe.logger("portal_payroll.settings")


def on_update(doc, method=None):
    """Drop cached settings so the next slip picks up the new values."""
    frappe.clear_document_cache(doc.doctype, doc.name)
    logger.info(f"{doc.doctype} updated by {frappe.session.user}")


class PayrollPortalSettings(Document):
    def validate(self):
        self.validate_overrides()

    def validate_overrides(self):
        overrides = collect_overrides(self)
        if not overrides:
            return

        year = cint(self.get("override_tax_year"))
        if not year:
            frappe.throw(_("Override Tax Year is required when rates or caps are overridden"))

        try:
            get_tax_year_config(year).with_overrides(**overrides)
        except (ConfigError, PayrollValidationError) as e:
            frappe.throw(_("Invalid override: {0}").format(str(e)))
