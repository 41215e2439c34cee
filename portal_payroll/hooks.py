app_name = "portal_payroll"
app_title = "Portal Payroll"
app_publisher = "PT. Innovasi Terbaik Bangsa"
app_description = "Portal Payroll - Perhitungan Gaji, BPJS & PPh 21 Indonesia"
app_email = "hello@imogi.tech"
app_license = "MIT"

# Jinja
# ----------

# add methods and filters to jinja environment
jinja = {
    "methods": [
        "portal_payroll.override.slip_mapping.salary_slip_print_context",
        "portal_payroll.utils.get_month_name",
    ],
    "filters": [
        "portal_payroll.utils.format_rupiah",
    ],
}

# Installation
# ------------

after_install = "portal_payroll.setup.install_custom_fields.install_custom_fields"

# Integration Setup
# ------------------
# `after_migrate` runs once all patches have been applied, so custom fields
# added in a later release are created on the next migrate.
after_migrate = [
    "portal_payroll.setup.install_custom_fields.install_custom_fields"
]

# DocType Class
# ---------------
# Override standard doctype classes

override_doctype_class = {
    "Salary Slip": "portal_payroll.override.salary_slip.CustomSalarySlip"
}

# Document Events
# ---------------

doc_events = {
    "Payroll Portal Settings": {
        "on_update": "portal_payroll.portal_payroll.doctype.payroll_portal_settings.payroll_portal_settings.on_update"
    }
}

fixtures = [
    "Payroll Portal Settings",
]
