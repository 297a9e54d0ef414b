"""Tests for the command line tools (validate_licenses, check_env)."""

import json

import pytest

from license_tools import check_env
from license_tools.reference_sets import DATA_DIR, load_json
from license_tools.validate_licenses import main


def _write(path, obj):
    path.write_text(json.dumps(obj, ensure_ascii=False), encoding="utf-8")
    return str(path)


@pytest.fixture
def bundled():
    return load_json(DATA_DIR / "licenses.json")


# ---------------------------------------------------------------------------
# validate_licenses
# ---------------------------------------------------------------------------

class TestValidateLicensesMain:

    def test_bundled_dataset_passes(self, capsys):
        assert main([]) == 0
        out = capsys.readouterr().out
        assert "✅ Validation successful! licenses.json is valid according to schema.json" in out
        assert "✅ All custom validations passed!" in out
        assert "  - 3 proprietary licenses defined" in out
        assert "  - 9 data sources registered" in out

    def test_structural_failure_skips_custom_checks(self, tmp_path, capsys, bundled):
        bundled["proprietary_licenses"][0]["url"] = "not a url"
        bundled["sources"].append(bundled["sources"][0])  # would be a consistency error
        path = _write(tmp_path / "licenses.json", bundled)
        assert main(["--licenses", path]) == 1
        captured = capsys.readouterr()
        assert "❌ Validation failed! Errors:" in captured.err
        assert "Error 1:" in captured.err
        assert "  Path: /proprietary_licenses/0/url" in captured.err
        assert '"format": "uri"' in captured.err
        assert "Performing additional validations" not in captured.out

    def test_root_error_path_printed(self, tmp_path, capsys):
        path = _write(tmp_path / "licenses.json", {"sources": []})
        assert main(["--licenses", path]) == 1
        assert "  Path: (root)" in capsys.readouterr().err

    def test_consistency_failure(self, tmp_path, capsys, bundled):
        bundled["sources"].append({"file": "x.csv", "spdx": None, "custom_license": None})
        bundled["sources"].append(dict(bundled["sources"][0]))
        path = _write(tmp_path / "licenses.json", bundled)
        assert main(["--licenses", path]) == 1
        captured = capsys.readouterr()
        assert "🔍 Performing additional validations..." in captured.out
        assert '  1. Source "x.csv" (index 9) has neither spdx nor custom_license defined' in captured.err
        assert '  2. Duplicate source file found: "fr/communes.geojson" at index 10' in captured.err
        assert "2 issue(s) found" in captured.err

    def test_missing_dataset(self, tmp_path, capsys):
        assert main(["--licenses", str(tmp_path / "missing.json")]) == 1
        assert "❌ Error during validation: File not found" in capsys.readouterr().err

    def test_non_utf8_dataset(self, tmp_path, capsys):
        path = tmp_path / "licenses.json"
        path.write_bytes(b"\xff\xfe{}")
        assert main(["--licenses", str(path)]) == 1
        assert "❌ Error during validation: Cannot read" in capsys.readouterr().err

    def test_directory_as_dataset(self, tmp_path, capsys):
        assert main(["--licenses", str(tmp_path)]) == 1
        assert "❌ Error during validation: Cannot read" in capsys.readouterr().err

    def test_non_utf8_policy(self, tmp_path, capsys):
        policy = tmp_path / "policy.yaml"
        policy.write_bytes(b"allowed:\n  - \xff\xfe\n")
        assert main(["--policy", str(policy)]) == 1
        assert "❌ Error during validation:" in capsys.readouterr().err

    def test_malformed_schema(self, tmp_path, capsys):
        schema = tmp_path / "schema.json"
        schema.write_text("{", encoding="utf-8")
        assert main(["--schema", str(schema)]) == 1
        assert "Invalid JSON" in capsys.readouterr().err

    def test_alternate_policy(self, tmp_path, capsys):
        policy = tmp_path / "policy.yaml"
        policy.write_text("allowed: [MIT]\n", encoding="utf-8")
        assert main(["--policy", str(policy)]) == 1
        err = capsys.readouterr().err
        # OGL-ROU-1.0 is no longer a registry extension either
        assert '"OGL-ROU-1.0". It is not a recognized SPDX identifier.' in err
        assert "Allowed SPDX licenses are: MIT" in err

    def test_report_written(self, tmp_path, bundled):
        bundled["proprietary_licenses"].append(dict(bundled["proprietary_licenses"][0]))
        path = _write(tmp_path / "licenses.json", bundled)
        report_path = tmp_path / "report.json"
        assert main(["--licenses", path, "--report", str(report_path)]) == 1
        report = json.loads(report_path.read_text(encoding="utf-8"))
        assert report["valid"] is False
        assert report["structural_errors"] == []
        assert report["errors"] == ['Duplicate license identifier found: "swisstopo-OGD" at index 3']
        assert report["license_count"] == 4
        assert report["source_count"] == 9

    def test_report_structural(self, tmp_path):
        path = _write(tmp_path / "licenses.json", {"proprietary_licenses": [], "sources": [{"file": ""}]})
        report_path = tmp_path / "report.json"
        assert main(["--licenses", path, "--report", str(report_path)]) == 1
        report = json.loads(report_path.read_text(encoding="utf-8"))
        assert report["valid"] is False
        assert {e["path"] for e in report["structural_errors"]} == {"/sources/0", "/sources/0/file"}
        assert report["errors"] == []


# ---------------------------------------------------------------------------
# check_env
# ---------------------------------------------------------------------------

class TestCheckEnv:

    def test_python_version(self):
        assert check_env.check_python_version((3, 9, 1)) != []
        assert check_env.check_python_version((3, 12, 0)) == []

    def test_bundled_data_ok(self):
        assert check_env.check_data_files(DATA_DIR) == []

    def test_missing_data(self, tmp_path):
        issues = check_env.check_data_files(tmp_path)
        assert len(issues) == 3

    def test_main_pass(self, capsys):
        assert check_env.main([]) == 0
        assert "ENV CHECK: PASS" in capsys.readouterr().out

    def test_main_fail(self, tmp_path, capsys):
        assert check_env.main(["--data-dir", str(tmp_path)]) == 2
        assert "ENV CHECK: FAIL" in capsys.readouterr().out
