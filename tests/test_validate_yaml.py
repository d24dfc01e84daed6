#!/usr/bin/env python3
"""Tests for validate_yaml schema and invariant validation."""

from pathlib import Path

from validate_yaml import load_schema, main, validate_ledger_file

VALID_LEDGER = """
config:
  maxRecords: 10000
host:
  blockHeight: 1
authority: ST2TEST
nextRecordId: 1
records:
  0:
    vin: 1HGCM82633A004352
    serviceType: Oil Change
    mechanic: ST1TEST
    parts: [Oil Filter]
    details: Changed engine oil
    timestamp: 1
    recordedBy: ST1TEST
recordsByVin:
  1HGCM82633A004352: [0]
"""


class TestLoadSchema:
    """Tests for load_schema function."""

    def test_returns_dict(self):
        schema = load_schema()
        assert isinstance(schema, dict)

    def test_has_expected_structure(self):
        schema = load_schema()
        assert "records" in schema["properties"]
        assert "recordsByVin" in schema["properties"]
        assert "nextRecordId" in schema["required"]


class TestValidateLedgerFile:
    """Tests for validate_ledger_file function."""

    def test_valid_ledger_returns_no_errors(self, tmp_path):
        path = tmp_path / "valid.yaml"
        path.write_text(VALID_LEDGER)
        assert validate_ledger_file(path, load_schema()) == []

    def test_overlong_vin_returns_schema_error(self, tmp_path):
        path = tmp_path / "invalid.yaml"
        path.write_text(VALID_LEDGER.replace("vin: 1HGCM82633A004352", "vin: 1HGCM82633A0043529"))
        errors = validate_ledger_file(path, load_schema())
        assert len(errors) >= 1
        assert errors[0].startswith("Schema validation error")

    def test_too_many_parts_returns_schema_error(self, tmp_path):
        path = tmp_path / "invalid.yaml"
        path.write_text(VALID_LEDGER.replace("[Oil Filter]", "[" + ", ".join(["P"] * 11) + "]"))
        errors = validate_ledger_file(path, load_schema())
        assert any("Schema validation error" in e for e in errors)

    def test_missing_required_field(self, tmp_path):
        path = tmp_path / "invalid.yaml"
        path.write_text("records: {}\n")
        errors = validate_ledger_file(path, load_schema())
        assert any("nextRecordId" in e for e in errors)

    def test_dangling_index_returns_invariant_error(self, tmp_path):
        path = tmp_path / "dangling.yaml"
        path.write_text(VALID_LEDGER.replace("1HGCM82633A004352: [0]", "1HGCM82633A004352: [3, 0]"))
        errors = validate_ledger_file(path, load_schema())
        assert any(e.startswith("Invariant violation") for e in errors)

    def test_over_cap_index_returns_invariant_error(self, tmp_path):
        path = tmp_path / "over_cap.yaml"
        path.write_text(
            VALID_LEDGER.replace("maxRecords: 10000", "maxRecords: 10000\n  maxRecordsPerVin: 1")
            .replace("nextRecordId: 1", "nextRecordId: 2")
            .replace("1HGCM82633A004352: [0]", "1HGCM82633A004352: [1, 0]")
            .replace("recordsByVin:", """  1:
    vin: 1HGCM82633A004352
    serviceType: Tire Rotation
    mechanic: ST1TEST
    parts: []
    details: ''
    timestamp: 1
    recordedBy: ST1TEST
recordsByVin:""")
        )
        errors = validate_ledger_file(path, load_schema())
        assert any("exceeds cap of 1" in e for e in errors)

    def test_index_over_100_returns_schema_error(self, tmp_path):
        path = tmp_path / "long.yaml"
        ids = ", ".join(str(i) for i in range(100, -1, -1))
        path.write_text(VALID_LEDGER.replace("1HGCM82633A004352: [0]", f"1HGCM82633A004352: [{ids}]"))
        errors = validate_ledger_file(path, load_schema())
        assert errors[0].startswith("Schema validation error")

    def test_vin_named_like_a_key_is_valid(self, tmp_path):
        path = tmp_path / "keyish.yaml"
        path.write_text(VALID_LEDGER.replace("1HGCM82633A004352", "maxRecords"))
        assert validate_ledger_file(path, load_schema()) == []

    def test_malformed_yaml_returns_parse_error(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("records: [unclosed\n")
        errors = validate_ledger_file(path, load_schema())
        assert errors[0].startswith("YAML parse error")

    def test_missing_file_returns_error(self, tmp_path):
        errors = validate_ledger_file(tmp_path / "missing.yaml", load_schema())
        assert errors and errors[0].startswith("Error:")


class TestMain:
    """Tests for the validate_yaml entry point."""

    def test_explicit_files(self, tmp_path, capsys):
        good = tmp_path / "good.yaml"
        good.write_text(VALID_LEDGER)
        bad = tmp_path / "bad.yaml"
        bad.write_text("records: {}\n")

        assert main([str(good)]) == 0
        assert main([str(good), str(bad)]) == 1
        out = capsys.readouterr().out
        assert "OK: good.yaml" in out
        assert "FAIL: bad.yaml" in out

    def test_bundled_example_ledger_is_valid(self):
        example = Path(__file__).parent.parent / "ledgers" / "example.yaml"
        assert validate_ledger_file(example, load_schema()) == []
