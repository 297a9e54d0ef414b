"""Consistency checks for licenses.json beyond what JSON Schema can express.

Checks (run in this order, every check runs, nothing short-circuits):
  1. Custom license identifiers must not be known SPDX identifiers
  2. Custom license identifiers are unique
  3. sources[].custom_license refers to an existing custom license
  4. sources[].spdx is a recognized SPDX identifier
  5. sources[].spdx is on the project allow-list
  6. Every source has spdx or custom_license (or both)
  7. sources[].file is unique

Each check returns a list of human readable error strings. ``check`` runs them
all and concatenates the results; an empty list means the dataset passed.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from typing import TypeVar

from license_tools.dataset import LicensesDataset
from license_tools.reference_sets import AllowedIdentifierSet, StandardIdentifierRegistry


T = TypeVar("T")


def find_duplicates(records: Iterable[T], key: Callable[[T], str]) -> Iterator[tuple[int, str]]:
    """Yield (index, key) for every record whose key was already seen.

    The first occurrence of a key is never reported, only later repeats.
    """
    seen: set[str] = set()
    for i, rec in enumerate(records):
        k = key(rec)
        if k in seen:
            yield i, k
        seen.add(k)


def check_known_spdx_as_custom(dataset: LicensesDataset, registry: StandardIdentifierRegistry) -> list[str]:
    errors = []
    for i, lic in enumerate(dataset.proprietary_licenses):
        if lic.identifier in registry:
            errors.append(
                f'License identifier "{lic.identifier}" at index {i} is a known SPDX license. '
                f'Consider using the "spdx" field in sources instead of defining it as a custom license.'
            )
    return errors


def check_duplicate_license_identifiers(dataset: LicensesDataset) -> list[str]:
    return [
        f'Duplicate license identifier found: "{ident}" at index {i}'
        for i, ident in find_duplicates(dataset.proprietary_licenses, lambda lic: lic.identifier)
    ]


def check_custom_license_references(dataset: LicensesDataset) -> list[str]:
    known = {lic.identifier for lic in dataset.proprietary_licenses}
    errors = []
    for i, src in enumerate(dataset.sources):
        if src.custom_license and src.custom_license not in known:
            errors.append(
                f'Source "{src.file}" (index {i}) references unknown custom_license: "{src.custom_license}"'
            )
    return errors


def check_spdx_recognized(dataset: LicensesDataset, registry: StandardIdentifierRegistry) -> list[str]:
    errors = []
    for i, src in enumerate(dataset.sources):
        if src.spdx and src.spdx not in registry:
            errors.append(
                f'Source "{src.file}" (index {i}) has invalid spdx license: "{src.spdx}". '
                f"It is not a recognized SPDX identifier."
            )
    return errors


def check_spdx_allowed(dataset: LicensesDataset, allowed: AllowedIdentifierSet) -> list[str]:
    allowed_list = ", ".join(allowed)
    errors = []
    for i, src in enumerate(dataset.sources):
        if src.spdx and src.spdx not in allowed:
            errors.append(
                f'Source "{src.file}" (index {i}) has invalid spdx license: "{src.spdx}". '
                f"Allowed SPDX licenses are: {allowed_list}"
            )
    return errors


def check_license_mode_present(dataset: LicensesDataset) -> list[str]:
    return [
        f'Source "{src.file}" (index {i}) has neither spdx nor custom_license defined'
        for i, src in enumerate(dataset.sources)
        if not src.spdx and not src.custom_license
    ]


def check_duplicate_source_files(dataset: LicensesDataset) -> list[str]:
    return [
        f'Duplicate source file found: "{file}" at index {i}'
        for i, file in find_duplicates(dataset.sources, lambda src: src.file)
    ]


def check(
    dataset: LicensesDataset,
    registry: StandardIdentifierRegistry,
    allowed: AllowedIdentifierSet,
) -> list[str]:
    """Run every consistency check and return all errors found."""
    errors: list[str] = []
    errors.extend(check_known_spdx_as_custom(dataset, registry))
    errors.extend(check_duplicate_license_identifiers(dataset))
    errors.extend(check_custom_license_references(dataset))
    errors.extend(check_spdx_recognized(dataset, registry))
    errors.extend(check_spdx_allowed(dataset, allowed))
    errors.extend(check_license_mode_present(dataset))
    errors.extend(check_duplicate_source_files(dataset))
    return errors
