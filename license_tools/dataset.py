"""In-memory model of licenses.json."""

from __future__ import annotations

from dataclasses import dataclass

from license_tools.reference_sets import DATA_DIR


DEFAULT_LICENSES_PATH = DATA_DIR / "licenses.json"


@dataclass(frozen=True)
class LicenseRecord:
    """A custom (non-SPDX) license defined by the dataset."""
    identifier: str
    name: str | None
    url: str
    attribution_test: str | None

    @classmethod
    def from_dict(cls, d: dict) -> LicenseRecord:
        return cls(
            identifier=d["identifier"],
            name=d.get("name"),
            url=d["url"],
            attribution_test=d.get("attribution_test"),
        )


@dataclass(frozen=True)
class SourceRecord:
    """A data file and the license that governs it."""
    file: str
    spdx: str | None
    custom_license: str | None

    @classmethod
    def from_dict(cls, d: dict) -> SourceRecord:
        return cls(
            file=d["file"],
            spdx=d.get("spdx"),
            custom_license=d.get("custom_license"),
        )


@dataclass(frozen=True)
class LicensesDataset:
    proprietary_licenses: tuple[LicenseRecord, ...]
    sources: tuple[SourceRecord, ...]

    @classmethod
    def from_dict(cls, d: dict) -> LicensesDataset:
        """Build from a document that already passed schema validation."""
        return cls(
            proprietary_licenses=tuple(LicenseRecord.from_dict(x) for x in d.get("proprietary_licenses", [])),
            sources=tuple(SourceRecord.from_dict(x) for x in d.get("sources", [])),
        )

    @classmethod
    def empty(cls) -> LicensesDataset:
        return cls((), ())

