#!/usr/bin/env python3
"""
Build the country corpus from pycountry.

Writes countries.parquet (and optionally countries.csv) next to this script
with two string columns, `code` (ISO 3166-1 alpha-2) and `name`, sorted by
code. load_countries() picks the file up automatically; without it the
corpus is built in memory on first use.

Usage:
    python -m mapsidentity.countries.data.build_countries
    python -m mapsidentity.countries.data.build_countries --csv
"""

import argparse
import sys
from pathlib import Path

import pandas as pd
import pycountry


def build_country_frame() -> pd.DataFrame:
    """One row per pycountry country, preferring the common name when set."""
    rows = []
    for c in pycountry.countries:
        code = getattr(c, "alpha_2", None)
        if not code:
            continue
        name = getattr(c, "common_name", None) or c.name
        rows.append({"code": code.upper(), "name": name})

    df = pd.DataFrame(rows, columns=["code", "name"]).astype(str)
    df = df.drop_duplicates(subset="code", keep="first")
    return df.sort_values("code").reset_index(drop=True)


def validate_country_frame(df: pd.DataFrame) -> list:
    """Return a list of human-readable problems (empty when the frame is sound)."""
    issues = []
    bad_codes = df[~df["code"].str.fullmatch(r"[A-Z]{2}")]
    if not bad_codes.empty:
        issues.append(f"{len(bad_codes)} code(s) are not two uppercase letters")
    if df["code"].duplicated().any():
        issues.append("duplicate codes present")
    if (df["name"].str.strip() == "").any():
        issues.append("blank names present")
    return issues


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Build countries.parquet from pycountry")
    parser.add_argument("--out-dir", type=Path, default=Path(__file__).parent)
    parser.add_argument("--csv", action="store_true", help="Also write countries.csv")
    args = parser.parse_args(argv)

    df = build_country_frame()
    issues = validate_country_frame(df)
    if issues:
        print("Validation failed, nothing written:")
        for issue in issues:
            print(f"  ! {issue}")
        return 1

    args.out_dir.mkdir(parents=True, exist_ok=True)
    parquet_path = args.out_dir / "countries.parquet"
    df.to_parquet(parquet_path, index=False)
    print(f"Wrote {len(df)} countries to {parquet_path}")

    if args.csv:
        csv_path = args.out_dir / "countries.csv"
        df.to_csv(csv_path, index=False)
        print(f"Wrote {len(df)} countries to {csv_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
