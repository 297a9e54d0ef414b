#!/usr/bin/env python3
"""Validate licenses.json against schema.json and the project licensing rules.

Stages:
  1. Schema compliance (jsonschema, all errors collected)
  2. Consistency checks (see license_tools/consistency.py), only when stage 1 passes

Exits 0 when both stages pass, 1 on any schema error, consistency error or
unreadable input.

Usage:
  python -m license_tools.validate_licenses \\
    [--licenses license_tools/data/licenses.json] \\
    [--schema license_tools/data/schema.json] \\
    [--spdx-ids license_tools/data/spdx_license_ids.json] \\
    [--policy license_tools/data/allowed_spdx.yaml] \\
    [--report output/license_report.json]
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from license_tools import consistency, structural
from license_tools.dataset import DEFAULT_LICENSES_PATH, LicensesDataset
from license_tools.reference_sets import (
    DATA_DIR,
    DEFAULT_POLICY_PATH,
    DEFAULT_SPDX_IDS_PATH,
    LoadError,
    load_json,
    load_reference_sets,
)


DEFAULT_SCHEMA_PATH = DATA_DIR / "schema.json"


class Report:
    def __init__(self, licenses_name: str = "licenses.json", schema_name: str = "schema.json"):
        self.licenses_name = licenses_name
        self.schema_name = schema_name
        self.structural_errors: list[structural.StructuralError] = []
        self.errors: list[str] = []
        self.license_count = 0
        self.source_count = 0

    @property
    def ok(self) -> bool:
        return not self.structural_errors and not self.errors

    def print_structural(self, result: structural.StructuralResult):
        self.structural_errors = list(result.errors)
        if result.valid:
            print(f"✅ Validation successful! {self.licenses_name} is valid according to {self.schema_name}")
            return
        print("❌ Validation failed! Errors:", file=sys.stderr)
        for i, err in enumerate(result.errors, 1):
            print(f"\nError {i}:", file=sys.stderr)
            print(f"  Path: {err.path or '(root)'}", file=sys.stderr)
            print(f"  Message: {err.message}", file=sys.stderr)
            if err.params:
                print(f"  Details: {json.dumps(err.params, ensure_ascii=False, indent=2)}", file=sys.stderr)

    def print_consistency(self, dataset: LicensesDataset, errors: list[str]):
        self.errors = list(errors)
        self.license_count = len(dataset.proprietary_licenses)
        self.source_count = len(dataset.sources)
        if not errors:
            print("✅ All custom validations passed!")
            print("\nSummary:")
            print(f"  - {self.license_count} proprietary licenses defined")
            print(f"  - {self.source_count} data sources registered")
            return
        print("⚠️  Custom validation warnings/errors:\n", file=sys.stderr)
        for i, e in enumerate(errors, 1):
            print(f"  {i}. {e}", file=sys.stderr)
        print(f"\n{len(errors)} issue(s) found", file=sys.stderr)

    def to_dict(self) -> dict:
        return {
            "valid": self.ok,
            "structural_errors": [
                {"path": e.path, "message": e.message, "params": e.params}
                for e in self.structural_errors
            ],
            "errors": self.errors,
            "license_count": self.license_count,
            "source_count": self.source_count,
        }


def run(
    licenses_path: str | Path = DEFAULT_LICENSES_PATH,
    schema_path: str | Path = DEFAULT_SCHEMA_PATH,
    spdx_ids_path: str | Path = DEFAULT_SPDX_IDS_PATH,
    policy_path: str | Path = DEFAULT_POLICY_PATH,
) -> Report:
    """Load everything, run both stages, print as we go. Raises LoadError."""
    schema = load_json(schema_path)
    document = load_json(licenses_path)
    registry, allowed = load_reference_sets(spdx_ids_path, policy_path)

    report = Report(Path(licenses_path).name, Path(schema_path).name)
    result = structural.validate(document, schema)
    report.print_structural(result)
    if not result.valid:
        return report

    print("\n🔍 Performing additional validations...\n")
    dataset = LicensesDataset.from_dict(document)
    report.print_consistency(dataset, consistency.check(dataset, registry, allowed))
    return report


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Validate licenses.json (schema + licensing rules).")
    parser.add_argument("--licenses", default=str(DEFAULT_LICENSES_PATH), help="Path to licenses.json")
    parser.add_argument("--schema", default=str(DEFAULT_SCHEMA_PATH), help="Path to schema.json")
    parser.add_argument("--spdx-ids", default=str(DEFAULT_SPDX_IDS_PATH),
                        help="JSON array of known SPDX license identifiers")
    parser.add_argument("--policy", default=str(DEFAULT_POLICY_PATH),
                        help="YAML policy with the allowed SPDX identifiers")
    parser.add_argument("--report", help="Write validation report JSON to this path")
    args = parser.parse_args(argv)

    try:
        report = run(args.licenses, args.schema, args.spdx_ids, args.policy)
    except LoadError as e:
        print(f"❌ Error during validation: {e}", file=sys.stderr)
        return 1

    if args.report:
        with open(args.report, "w", encoding="utf-8") as f:
            json.dump(report.to_dict(), f, ensure_ascii=False, indent=2)
        print(f"\nReport written to {args.report}")

    return 0 if report.ok else 1


if __name__ == "__main__":
    sys.exit(main())
