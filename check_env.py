#!/usr/bin/env python3
"""Check the .env file and print the configuration the ledger API would run with."""

import sys
from pathlib import Path

TEMPLATE = """# Supabase Configuration (leave empty to run with an empty in-memory view)
LEDGER_SUPABASE_URL=https://your-project-id.supabase.co
LEDGER_SUPABASE_KEY=your-service-role-key-here

# API Configuration
LEDGER_API_PREFIX=/api
LEDGER_LOG_LEVEL=INFO
# Comma-separated or JSON array: http://localhost:3000,http://127.0.0.1:3000
# LEDGER_FRONTEND_ALLOWED_ORIGINS=

# Rates: company billing per parcel for each area, flat courier pay per parcel
LEDGER_COURIER_RATE=14
LEDGER_AREA_RATES=BHILAI_3:19,CHARODA:35
# LEDGER_COURIER_RATE_OVERRIDES=CHARODA:16
LEDGER_RVP_AREA=BHILAI_3

# Export copies are kept under <data root>/outputs
LEDGER_DATA_ROOT=./data
"""


def _mask(value: str) -> str:
    return value if len(value) <= 20 else f"{value[:20]}...{value[-6:]}"


def main() -> int:
    project_root = Path(__file__).parent
    env_file = project_root / ".env"

    if not env_file.exists():
        env_file.write_text(TEMPLATE, encoding="utf-8")
        print(f"Created template .env file at: {env_file}")
        print("Edit it and add your Supabase credentials, then run this script again.")
        return 1

    print(f"Found .env file at: {env_file}")
    for line in env_file.read_text(encoding="utf-8").splitlines():
        if line.startswith("LEDGER_SUPABASE_KEY=") and "=" in line:
            key, value = line.split("=", 1)
            print(f"  {key}={_mask(value.strip())}")
        elif line and not line.startswith("#"):
            print(f"  {line}")
    print()

    sys.path.insert(0, str(project_root / "src"))
    try:
        from courier_ledger.config import settings
        from courier_ledger.services.rates import RateTable
    except Exception as exc:
        print(f"Error loading config: {exc}")
        return 1

    rates = RateTable.from_settings(settings)
    print(f"Courier rate: {rates.courier_rate} per parcel (RVP billed as {rates.rvp_area})")
    for code, values in rates.as_dict().items():
        print(f"  {code:<12} {values['name']:<12} courier {values['courier_rate']:>6}  company {values['company_rate']:>6}")
    print()

    if settings.supabase_url and settings.supabase_key:
        print("Supabase is configured.")
        return 0

    print("Supabase is NOT configured: every view will be empty and writes are skipped.")
    print("Make sure variables use the LEDGER_ prefix and restart the API after editing .env")
    return 1


if __name__ == "__main__":
    sys.exit(main())
