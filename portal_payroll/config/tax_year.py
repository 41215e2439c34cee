# -*- coding: utf-8 -*-
# Copyright (c) 2025, PT. Innovasi Terbaik Bangsa and contributors
# For license information, please see license.txt

"""
Versioned statutory tables for PPh 21 and BPJS.

Each tax year in ``defaults.json`` becomes a frozen ``TaxYearConfig``. A payroll
period uses the newest configuration whose year is not after the period year,
so a regulation change only needs a new entry in ``defaults.json`` (or a
settings override), never a change to the calculators.
"""

import dataclasses
import json
from dataclasses import dataclass, field
from decimal import Decimal
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from portal_payroll.constants import MONTHS_PER_YEAR, PTKP_STATUSES
from portal_payroll.exceptions import ConfigError, PayrollValidationError
from portal_payroll.frappe_helpers import get_logger

logger = get_logger(__name__)

DEFAULTS_PATH = Path(__file__).parent / "defaults.json"

# Fields that may be overridden from settings, with the type they coerce to
OVERRIDABLE_FIELDS = {
    "kesehatan_employee_percent": Decimal,
    "kesehatan_employer_percent": Decimal,
    "kesehatan_max_salary": int,
    "jht_employee_percent": Decimal,
    "jht_employer_percent": Decimal,
    "jp_employee_percent": Decimal,
    "jp_employer_percent": Decimal,
    "jp_max_salary": int,
    "jkm_percent": Decimal,
    "biaya_jabatan_percent": Decimal,
    "biaya_jabatan_cap_yearly": int,
    "pkp_rounding": int,
}

PERCENT_FIELDS = tuple(k for k, v in OVERRIDABLE_FIELDS.items() if v is Decimal)


@dataclass(frozen=True)
class TaxYearConfig:
    """Rates, caps and tables in force for one tax year. Percent values are in %."""

    year: int
    kesehatan_employee_percent: Decimal
    kesehatan_employer_percent: Decimal
    kesehatan_max_salary: int
    jht_employee_percent: Decimal
    jht_employer_percent: Decimal
    jp_employee_percent: Decimal
    jp_employer_percent: Decimal
    jp_max_salary: int
    jkm_percent: Decimal
    jkk_risk_levels: Tuple[Decimal, ...]
    biaya_jabatan_percent: Decimal
    biaya_jabatan_cap_yearly: int
    ptkp_table: Mapping[str, int] = field(compare=False)
    # (upper bound of the layer or None for the open top layer, rate %)
    tax_brackets: Tuple[Tuple[Optional[int], Decimal], ...] = ()
    pkp_rounding: int = 1000

    @property
    def biaya_jabatan_cap_monthly(self) -> Decimal:
        return Decimal(self.biaya_jabatan_cap_yearly) / MONTHS_PER_YEAR

    def get_ptkp_amount(self, ptkp_status: str) -> int:
        """Annual PTKP for a status code. Unknown codes are rejected."""
        try:
            return self.ptkp_table[ptkp_status]
        except (KeyError, TypeError):
            raise PayrollValidationError(
                "ptkp_status", f"unknown PTKP status {ptkp_status!r}"
            )

    def validate_jkk_risk_level(self, risk_level: Any) -> Decimal:
        """Return the risk level as Decimal if it is one of the enumerated JKK rates."""
        if isinstance(risk_level, bool) or risk_level is None:
            raise PayrollValidationError(
                "jkk_risk_level", f"unknown JKK risk level {risk_level!r}"
            )
        try:
            level = Decimal(str(risk_level))
        except ArithmeticError:
            raise PayrollValidationError(
                "jkk_risk_level", f"unknown JKK risk level {risk_level!r}"
            )
        if level not in self.jkk_risk_levels:
            allowed = ", ".join(str(v) for v in self.jkk_risk_levels)
            raise PayrollValidationError(
                "jkk_risk_level",
                f"unknown JKK risk level {risk_level!r}, expected one of {allowed}",
            )
        return level

    def with_overrides(self, **overrides) -> "TaxYearConfig":
        """Return a copy with the given named rates or caps replaced."""
        if not overrides:
            return self
        changes = {}
        for key, value in overrides.items():
            if key not in OVERRIDABLE_FIELDS:
                raise ConfigError(f"{key} is not an overridable tax year setting")
            changes[key] = _coerce(key, value, OVERRIDABLE_FIELDS[key])
        config = dataclasses.replace(self, **changes)
        validate_config(config)
        return config

    def as_dict(self) -> Dict[str, Any]:
        data = {f.name: getattr(self, f.name) for f in dataclasses.fields(self)}
        data["jkk_risk_levels"] = [str(v) for v in self.jkk_risk_levels]
        data["ptkp_table"] = dict(self.ptkp_table)
        data["tax_brackets"] = [
            {"income_to": upper, "tax_rate": str(rate)} for upper, rate in self.tax_brackets
        ]
        for key in PERCENT_FIELDS:
            data[key] = str(data[key])
        return data


def _coerce(key: str, value: Any, kind):
    try:
        if kind is int:
            result = Decimal(str(value))
            if result != result.to_integral_value():
                raise ConfigError(f"{key} must be a whole rupiah amount, got {value!r}")
            return int(result)
        return Decimal(str(value))
    except ArithmeticError:
        raise ConfigError(f"{key} is not a number: {value!r}")


def validate_config(config: TaxYearConfig) -> None:
    """Raise ConfigError when a configuration cannot produce correct withholding."""
    for key in PERCENT_FIELDS:
        value = getattr(config, key)
        if not Decimal(0) <= value <= Decimal(100):
            raise ConfigError(f"{config.year}: {key} out of bounds: {value}")

    for key in ("kesehatan_max_salary", "jp_max_salary", "biaya_jabatan_cap_yearly"):
        if getattr(config, key) <= 0:
            raise ConfigError(f"{config.year}: {key} must be positive")

    if config.pkp_rounding < 1:
        raise ConfigError(f"{config.year}: pkp_rounding must be at least 1")

    if not config.jkk_risk_levels:
        raise ConfigError(f"{config.year}: jkk_risk_levels is empty")

    missing = [s for s in PTKP_STATUSES if s not in config.ptkp_table]
    if missing:
        raise ConfigError(f"{config.year}: PTKP table missing {', '.join(missing)}")

    if not config.tax_brackets:
        raise ConfigError(f"{config.year}: tax_brackets is empty")

    previous = 0
    for i, (upper, rate) in enumerate(config.tax_brackets, 1):
        last = i == len(config.tax_brackets)
        if upper is None and not last:
            raise ConfigError(f"{config.year}: only the last tax bracket may be open-ended")
        if upper is not None and upper <= previous:
            raise ConfigError(f"{config.year}: tax bracket {i} is not ascending")
        if not Decimal(0) <= rate <= Decimal(100):
            raise ConfigError(f"{config.year}: tax bracket {i} rate out of bounds: {rate}")
        previous = upper or previous
    if config.tax_brackets[-1][0] is not None:
        raise ConfigError(f"{config.year}: last tax bracket must be open-ended")


def load_defaults(path=None) -> Dict[str, Any]:
    """Load defaults.json, keeping every fractional number as Decimal."""
    path = Path(path) if path else DEFAULTS_PATH
    try:
        with path.open() as f:
            return json.load(f, parse_float=Decimal)
    except FileNotFoundError:
        raise ConfigError(f"Tax year defaults not found at {path}")
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}")


def build_config(year: int, data: Mapping[str, Any]) -> TaxYearConfig:
    """Build a TaxYearConfig from one ``tax_years`` entry of defaults.json."""
    try:
        bpjs = data["bpjs"]
        biaya_jabatan = data["biaya_jabatan"]
        config = TaxYearConfig(
            year=int(year),
            kesehatan_employee_percent=_coerce("kesehatan_employee_percent", bpjs["kesehatan_employee_percent"], Decimal),
            kesehatan_employer_percent=_coerce("kesehatan_employer_percent", bpjs["kesehatan_employer_percent"], Decimal),
            kesehatan_max_salary=_coerce("kesehatan_max_salary", bpjs["kesehatan_max_salary"], int),
            jht_employee_percent=_coerce("jht_employee_percent", bpjs["jht_employee_percent"], Decimal),
            jht_employer_percent=_coerce("jht_employer_percent", bpjs["jht_employer_percent"], Decimal),
            jp_employee_percent=_coerce("jp_employee_percent", bpjs["jp_employee_percent"], Decimal),
            jp_employer_percent=_coerce("jp_employer_percent", bpjs["jp_employer_percent"], Decimal),
            jp_max_salary=_coerce("jp_max_salary", bpjs["jp_max_salary"], int),
            jkm_percent=_coerce("jkm_percent", bpjs["jkm_percent"], Decimal),
            jkk_risk_levels=tuple(
                _coerce("jkk_risk_levels", v, Decimal) for v in bpjs["jkk_risk_levels"]
            ),
            biaya_jabatan_percent=_coerce("biaya_jabatan_percent", biaya_jabatan["rate_percent"], Decimal),
            biaya_jabatan_cap_yearly=_coerce("biaya_jabatan_cap_yearly", biaya_jabatan["cap_yearly"], int),
            ptkp_table=MappingProxyType(
                {status: _coerce(f"ptkp[{status}]", amount, int) for status, amount in data["ptkp"].items()}
            ),
            tax_brackets=tuple(
                (
                    None if row["income_to"] is None else _coerce("income_to", row["income_to"], int),
                    _coerce("tax_rate", row["tax_rate"], Decimal),
                )
                for row in data["tax_brackets"]
            ),
            pkp_rounding=_coerce("pkp_rounding", data.get("pkp_rounding", 1000), int),
        )
    except (KeyError, TypeError) as e:
        raise ConfigError(f"Tax year {year} is missing required setting: {e}")

    validate_config(config)
    return config


@lru_cache(maxsize=1)
def _registry() -> Tuple[TaxYearConfig, ...]:
    data = load_defaults()
    years = data.get("tax_years") or {}
    if not years:
        raise ConfigError("defaults.json defines no tax years")
    configs = [build_config(int(year), entry) for year, entry in years.items()]
    configs.sort(key=lambda c: c.year)
    logger.debug(f"Loaded tax year configurations: {[c.year for c in configs]}")
    return tuple(configs)


def available_tax_years() -> Tuple[int, ...]:
    return tuple(c.year for c in _registry())


def get_tax_year_config(year: int) -> TaxYearConfig:
    """
    Return the configuration in force for ``year``.

    Uses the newest configuration not after ``year``; a year before the oldest
    bundled table is rejected rather than guessed.
    """
    if isinstance(year, bool) or not isinstance(year, int):
        raise PayrollValidationError("period_year", f"expected an integer year, got {year!r}")

    selected = None
    for config in _registry():
        if config.year <= year:
            selected = config
        else:
            break

    if selected is None:
        raise PayrollValidationError(
            "period_year",
            f"no tax year configuration for {year}; oldest available is {_registry()[0].year}",
        )

    if selected.year != year:
        logger.info(f"No tax tables for {year}; using {selected.year} configuration")
    return selected
