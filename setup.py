from setuptools import setup, find_packages

with open("requirements.txt") as f:
    install_requires = [
        line.strip() for line in f.read().split("\n") if line.strip() and not line.strip().startswith("#")
    ]

# get version from __version__ variable in portal_payroll/__init__.py
from portal_payroll import __version__ as version

setup(
    name="portal_payroll",
    version=version,
    description="Portal Payroll - Perhitungan Gaji, BPJS & PPh 21 Indonesia",
    author="PT. Innovasi Terbaik Bangsa",
    author_email="hello@imogi.tech",
    packages=find_packages(exclude=["tests", "tests.*", "scripts"]),
    zip_safe=False,
    include_package_data=True,
    package_data={
        "portal_payroll": [
            "config/*.json",
            "modules.txt",
            "portal_payroll/doctype/*/*.json",
        ]
    },
    install_requires=install_requires,
    extras_require={
        "frappe": ["frappe"],
        "test": ["pytest"],
    },
)
