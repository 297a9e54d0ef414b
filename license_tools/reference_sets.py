"""Reference data for license validation: SPDX registry and allow-list policy.

Both sets are loaded once per run from bundled data files and handed to the
consistency checker as immutable values.

Files:
  data/spdx_license_ids.json   flat JSON array of SPDX license identifiers
  data/allowed_spdx.yaml       project policy:
                                 allowed: [...]              identifiers accepted for sources
                                 registry_extensions: [...]  ids treated as SPDX though not listed
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

import yaml


DATA_DIR = Path(__file__).resolve().parent / "data"
DEFAULT_SPDX_IDS_PATH = DATA_DIR / "spdx_license_ids.json"
DEFAULT_POLICY_PATH = DATA_DIR / "allowed_spdx.yaml"


class LoadError(Exception):
    """An input file is missing, unreadable, or not in the expected shape."""


def load_json(path: str | Path):
    p = Path(path)
    try:
        with open(p, encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError as e:
        raise LoadError(f"File not found: {p}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise LoadError(f"Cannot read {p}: {e}") from e
    except json.JSONDecodeError as e:
        raise LoadError(f"Invalid JSON in {p}: {e}") from e


def load_yaml(path: str | Path):
    p = Path(path)
    try:
        with open(p, encoding="utf-8") as f:
            return yaml.safe_load(f)
    except FileNotFoundError as e:
        raise LoadError(f"File not found: {p}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise LoadError(f"Cannot read {p}: {e}") from e
    except yaml.YAMLError as e:
        raise LoadError(f"Invalid YAML in {p}: {e}") from e


@dataclass(frozen=True)
class StandardIdentifierRegistry:
    """Known SPDX license identifiers."""
    identifiers: frozenset[str]

    @classmethod
    def from_iterable(cls, ids, extensions=()) -> StandardIdentifierRegistry:
        return cls(frozenset(ids) | frozenset(extensions))

    def __contains__(self, identifier: object) -> bool:
        return identifier in self.identifiers

    def __len__(self) -> int:
        return len(self.identifiers)


@dataclass(frozen=True)
class AllowedIdentifierSet:
    """Project-approved identifiers, de-duplicated in first-seen order.

    Order matters only for the error message that lists the allowed set.
    """
    identifiers: tuple[str, ...]

    @classmethod
    def from_iterable(cls, ids) -> AllowedIdentifierSet:
        return cls(tuple(dict.fromkeys(ids)))

    def __contains__(self, identifier: object) -> bool:
        return identifier in self.identifiers

    def __iter__(self):
        return iter(self.identifiers)

    def __len__(self) -> int:
        return len(self.identifiers)


def _string_list(value, what: str, path: Path) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise LoadError(f"{path}: '{what}' must be a list of strings")
    return value


def load_registry(
    spdx_ids_path: str | Path = DEFAULT_SPDX_IDS_PATH,
    extensions=(),
) -> StandardIdentifierRegistry:
    ids = load_json(spdx_ids_path)
    ids = _string_list(ids, "identifiers", Path(spdx_ids_path))
    return StandardIdentifierRegistry.from_iterable(ids, extensions)


def load_policy(policy_path: str | Path = DEFAULT_POLICY_PATH) -> tuple[AllowedIdentifierSet, list[str]]:
    """Return (allowed set, registry extensions) from the policy YAML."""
    p = Path(policy_path)
    data = load_yaml(p)
    if not isinstance(data, dict):
        raise LoadError(f"{p}: expected a mapping at top level")
    allowed = _string_list(data.get("allowed"), "allowed", p)
    extensions = _string_list(data.get("registry_extensions"), "registry_extensions", p)
    return AllowedIdentifierSet.from_iterable(allowed), extensions


def load_reference_sets(
    spdx_ids_path: str | Path = DEFAULT_SPDX_IDS_PATH,
    policy_path: str | Path = DEFAULT_POLICY_PATH,
) -> tuple[StandardIdentifierRegistry, AllowedIdentifierSet]:
    allowed, extensions = load_policy(policy_path)
    registry = load_registry(spdx_ids_path, extensions)
    return registry, allowed
