from .tax_year import (
    TaxYearConfig,
    available_tax_years,
    build_config,
    get_tax_year_config,
    load_defaults,
    validate_config,
)

__all__ = [
    "TaxYearConfig",
    "available_tax_years",
    "build_config",
    "get_tax_year_config",
    "load_defaults",
    "validate_config",
]
