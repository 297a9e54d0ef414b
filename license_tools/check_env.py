#!/usr/bin/env python3
"""Environment sanity-check for the license validator.

Checks:
- Python version (>= 3.11)
- Required dependencies importable (jsonschema, PyYAML)
- Bundled data files present and loadable (schema, licenses, SPDX ids, policy)
"""

from __future__ import annotations

import argparse
import importlib
import platform
import sys
from importlib import metadata
from pathlib import Path

from license_tools.reference_sets import (
    DATA_DIR,
    LoadError,
    load_json,
    load_policy,
    load_registry,
)


MIN_PY = (3, 11)

REQUIRED = [
    ("yaml", "PyYAML"),
    ("jsonschema", "jsonschema"),
]


def get_installed_version(dist_name: str) -> str | None:
    try:
        return metadata.version(dist_name)
    except metadata.PackageNotFoundError:
        return None


def check_python_version(version_info=None) -> list[str]:
    v = version_info or sys.version_info
    issues: list[str] = []
    if tuple(v[:2]) < MIN_PY:
        issues.append(
            f"Python >= {MIN_PY[0]}.{MIN_PY[1]} required; found {v[0]}.{v[1]}.{v[2]}."
        )
    return issues


def check_import(module: str, pip_name: str) -> tuple[bool, str | None]:
    try:
        importlib.import_module(module)
        return True, None
    except ImportError as e:
        return False, f"Missing module '{module}'. Install '{pip_name}' (pip install -e .). ({e})"


def check_data_files(data_dir: Path) -> list[str]:
    issues: list[str] = []
    for fn in ("schema.json", "licenses.json"):
        try:
            load_json(data_dir / fn)
        except LoadError as e:
            issues.append(str(e))
    try:
        _, extensions = load_policy(data_dir / "allowed_spdx.yaml")
        load_registry(data_dir / "spdx_license_ids.json", extensions)
    except LoadError as e:
        issues.append(str(e))
    return issues


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Check the license validator runtime environment.")
    ap.add_argument("--data-dir", default=str(DATA_DIR), help="Directory holding the bundled data files")
    args = ap.parse_args(argv)

    print("License validator environment check")
    print("-" * 72)
    print(f"Python: {sys.executable}")
    print(f"Python version: {sys.version.splitlines()[0]}")
    print(f"OS: {platform.system()} {platform.release()}")
    print(f"Data dir: {args.data_dir}")

    issues: list[str] = []
    issues.extend(check_python_version())

    print("\nDependencies:")
    for mod, pip_name in REQUIRED:
        ok, msg = check_import(mod, pip_name)
        if not ok and msg:
            issues.append(msg)
        print(f"  - {pip_name}: {get_installed_version(pip_name) or 'NOT INSTALLED'}")

    issues.extend(check_data_files(Path(args.data_dir)))

    print("\nResult:")
    if issues:
        print("ENV CHECK: FAIL")
        for i in issues:
            print(f"- {i}")
        return 2
    print("ENV CHECK: PASS")
    print("Next:")
    print("  validate-licenses")
    return 0


if __name__ == "__main__":
    sys.exit(main())
