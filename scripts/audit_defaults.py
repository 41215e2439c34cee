from __future__ import annotations

from pathlib import Path
import sys

# Allow running from a source checkout without installing the package
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from portal_payroll.config.tax_year import DEFAULTS_PATH, build_config, load_defaults  # noqa: E402
from portal_payroll.constants import PTKP_STATUSES  # noqa: E402
from portal_payroll.exceptions import ConfigError  # noqa: E402

REQUIRED_KEYS = ["ptkp_statuses", "tax_years"]


def validate_defaults(data: dict) -> list[str]:
    """Return a list of validation errors."""
    errors: list[str] = []

    for key in REQUIRED_KEYS:
        if key not in data:
            errors.append(f"Missing required key: {key}")

    statuses = data.get("ptkp_statuses", [])
    if list(statuses) != list(PTKP_STATUSES):
        errors.append("ptkp_statuses does not match the supported PTKP status codes")

    years = data.get("tax_years", {})
    if not isinstance(years, dict) or not years:
        errors.append("tax_years must be a non-empty dictionary")
        return errors

    previous = None
    for year in sorted(years, key=lambda y: int(y) if str(y).isdigit() else -1):
        if not str(year).isdigit():
            errors.append(f"tax_years key {year!r} is not a year")
            continue
        try:
            config = build_config(int(year), years[year])
        except ConfigError as e:
            errors.append(str(e))
            continue

        # Statutory caps never go down from one year to the next
        if previous is not None:
            for key in ("kesehatan_max_salary", "jp_max_salary", "biaya_jabatan_cap_yearly"):
                if getattr(config, key) < getattr(previous, key):
                    errors.append(f"{year}: {key} is lower than in {previous.year}")
        previous = config

    return errors


def main(path: str = None) -> None:
    """Audit a defaults.json file and print results."""
    path = Path(path) if path else DEFAULTS_PATH
    print(f"Loading defaults from: {path}")
    try:
        data = load_defaults(path)
    except ConfigError as e:
        print(f"Error: {e}")
        sys.exit(1)

    errors = validate_defaults(data)

    if errors:
        print("\n--- AUDIT FAILED ---")
        for err in errors:
            print(f"❌ {err}")
        sys.exit(1)

    print(f"\nAll checks passed for {len(data['tax_years'])} tax years! ✅")


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Audit defaults.json")
    parser.add_argument(
        "--path",
        default=None,
        help="Path to defaults.json (defaults to portal_payroll/config/defaults.json)",
    )
    args = parser.parse_args()
    main(args.path)
