"""Tests for CLI commands."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from paytax.cli import app

runner = CliRunner()


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "data" / "test.db"


@pytest.fixture
def brackets_file(tmp_path: Path) -> Path:
    f = tmp_path / "brackets.json"
    f.write_text(json.dumps([
        {"country": "US", "tax_type": "federal", "min_income": "0", "max_income": "1000000",
         "tax_rate": "22", "fixed_amount": "0", "effective_date": "2024-01-01"},
        {"country": "US", "tax_type": "state", "min_income": "0", "max_income": "50000",
         "tax_rate": "4", "effective_date": "2024-01-01"},
        {"country": "US", "tax_type": "state", "min_income": "50000", "max_income": None,
         "tax_rate": "6", "effective_date": "2024-01-01"},
    ]))
    return f


@pytest.fixture
def profiles_file(tmp_path: Path) -> Path:
    f = tmp_path / "profiles.json"
    f.write_text(json.dumps([
        {"employee_id": "emp-001", "country": "US", "filing_status": "single"},
        {"employee_id": "emp-002", "country": "US", "exempt_from_federal": True},
    ]))
    return f


@pytest.fixture
def loaded_db(db_path: Path, brackets_file: Path, profiles_file: Path) -> Path:
    assert runner.invoke(app, ["import-brackets", str(brackets_file), "--db", str(db_path)]).exit_code == 0
    assert runner.invoke(app, ["import-profiles", str(profiles_file), "--db", str(db_path)]).exit_code == 0
    return db_path


class TestHelp:
    def test_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "PayTax" in result.output

    @pytest.mark.parametrize("command", ["import-brackets", "import-profiles", "brackets", "calculate"])
    def test_command_help(self, command):
        result = runner.invoke(app, [command, "--help"])
        assert result.exit_code == 0


class TestImport:
    def test_import_brackets(self, db_path, brackets_file):
        result = runner.invoke(app, ["import-brackets", str(brackets_file), "--db", str(db_path)])
        assert result.exit_code == 0
        assert "Imported 3 bracket(s) from brackets.json" in result.output
        assert db_path.exists()

    def test_import_profiles(self, db_path, profiles_file):
        result = runner.invoke(app, ["import-profiles", str(profiles_file), "--db", str(db_path)])
        assert result.exit_code == 0
        assert "Imported 2 profile(s)" in result.output

    def test_missing_file(self, tmp_path, db_path):
        result = runner.invoke(app, ["import-brackets", str(tmp_path / "nope.json"), "--db", str(db_path)])
        assert result.exit_code == 1

    def test_overlapping_schedule_rejected(self, tmp_path, db_path):
        f = tmp_path / "overlap.json"
        f.write_text(json.dumps([
            {"country": "US", "tax_type": "state", "min_income": "0", "max_income": "60000",
             "tax_rate": "4", "effective_date": "2024-01-01"},
            {"country": "US", "tax_type": "state", "min_income": "50000",
             "tax_rate": "6", "effective_date": "2024-01-01"},
        ]))
        result = runner.invoke(app, ["import-brackets", str(f), "--db", str(db_path)])
        assert result.exit_code == 1
        assert not db_path.exists()

    def test_invalid_record_rejected(self, tmp_path, db_path):
        f = tmp_path / "bad.json"
        f.write_text(json.dumps([{"employee_id": "emp-001", "allowances": -2}]))
        result = runner.invoke(app, ["import-profiles", str(f), "--db", str(db_path)])
        assert result.exit_code == 1


class TestEffectiveYears:
    @pytest.fixture
    def yearly_db(self, tmp_path, db_path, profiles_file) -> Path:
        f = tmp_path / "yearly.json"
        f.write_text(json.dumps([
            {"country": "US", "tax_type": "state", "min_income": "0", "max_income": None,
             "tax_rate": "2", "effective_date": "2023-01-01", "end_date": "2023-12-31"},
            {"country": "US", "tax_type": "state", "min_income": "0", "max_income": None,
             "tax_rate": "1", "effective_date": "2024-01-01"},
        ]))
        result = runner.invoke(app, ["import-brackets", str(f), "--db", str(db_path)])
        assert result.exit_code == 0
        assert "Imported 2 bracket(s)" in result.output
        assert runner.invoke(app, ["import-profiles", str(profiles_file), "--db", str(db_path)]).exit_code == 0
        return db_path

    def test_current_schedule_by_default(self, yearly_db):
        result = runner.invoke(
            app, ["calculate", "emp-001", "-g", "10000", "--db", str(yearly_db), "--json"]
        )
        assert result.exit_code == 0
        assert json.loads(result.output)["state_tax"] == "100.00"

    def test_earlier_schedule_with_as_of(self, yearly_db):
        result = runner.invoke(
            app,
            ["calculate", "emp-001", "-g", "10000", "--db", str(yearly_db),
             "--as-of", "2023-06-30", "--json"],
        )
        assert result.exit_code == 0
        assert json.loads(result.output)["state_tax"] == "200.00"

    def test_same_schedule_for_two_businesses(self, tmp_path, db_path):
        f = tmp_path / "tenants.json"
        f.write_text(json.dumps([
            {"business_id": "biz-1", "country": "US", "tax_type": "local", "min_income": "0",
             "tax_rate": "1", "effective_date": "2024-01-01"},
            {"business_id": "biz-2", "country": "US", "tax_type": "local", "min_income": "0",
             "tax_rate": "2", "effective_date": "2024-01-01"},
        ]))
        result = runner.invoke(app, ["import-brackets", str(f), "--db", str(db_path)])
        assert result.exit_code == 0


class TestBracketsCommand:
    def test_lists_brackets(self, loaded_db):
        result = runner.invoke(app, ["brackets", "us", "state", "--db", str(loaded_db)])
        assert result.exit_code == 0
        assert "50,000.00" in result.output

    def test_no_rows(self, loaded_db):
        result = runner.invoke(app, ["brackets", "CA", "federal", "--db", str(loaded_db)])
        assert result.exit_code == 0
        assert "No active federal brackets for CA." in result.output

    def test_invalid_tax_type(self, loaded_db):
        result = runner.invoke(app, ["brackets", "US", "sales", "--db", str(loaded_db)])
        assert result.exit_code == 1

    def test_missing_db(self, tmp_path):
        result = runner.invoke(app, ["brackets", "US", "state", "--db", str(tmp_path / "none.db")])
        assert result.exit_code == 1


class TestCalculateCommand:
    def test_json_output(self, loaded_db):
        result = runner.invoke(
            app, ["calculate", "emp-001", "--gross", "10000", "--db", str(loaded_db), "--json"]
        )
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["federal_tax"] == "1932.33"
        assert data["state_tax"] == "516.67"
        assert data["local_tax"] == "0.00"
        assert data["social_security_tax"] == "620.00"
        assert data["medicare_tax"] == "145.00"
        assert data["total_tax"] == "3214.00"

    def test_table_output(self, loaded_db):
        result = runner.invoke(app, ["calculate", "emp-001", "-g", "10000", "--db", str(loaded_db)])
        assert result.exit_code == 0
        assert "$1,932.33" in result.output
        assert "Total" in result.output

    def test_exempt_profile(self, loaded_db):
        result = runner.invoke(
            app, ["calculate", "emp-002", "-g", "10000", "--db", str(loaded_db), "--json"]
        )
        assert json.loads(result.output)["federal_tax"] == "0.00"

    def test_unknown_employee_is_zero(self, loaded_db):
        result = runner.invoke(
            app, ["calculate", "nobody", "-g", "10000", "--db", str(loaded_db), "--json"]
        )
        assert result.exit_code == 0
        assert json.loads(result.output)["total_tax"] == "0.00"

    def test_invalid_gross(self, loaded_db):
        result = runner.invoke(app, ["calculate", "emp-001", "-g", "abc", "--db", str(loaded_db)])
        assert result.exit_code == 1

    def test_negative_gross(self, loaded_db):
        result = runner.invoke(app, ["calculate", "emp-001", "--gross=-5", "--db", str(loaded_db)])
        assert result.exit_code == 1

    def test_missing_db(self, tmp_path):
        result = runner.invoke(
            app, ["calculate", "emp-001", "-g", "100", "--db", str(tmp_path / "none.db")]
        )
        assert result.exit_code == 1

    def test_config_override(self, loaded_db, tmp_path):
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"social_security_rate": "0.05"}))
        result = runner.invoke(
            app,
            ["calculate", "emp-001", "-g", "1000", "--db", str(loaded_db),
             "--config", str(config), "--json"],
        )
        assert result.exit_code == 0
        assert json.loads(result.output)["social_security_tax"] == "50.00"

    def test_bad_config(self, loaded_db, tmp_path):
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"no_such_setting": 1}))
        result = runner.invoke(
            app, ["calculate", "emp-001", "-g", "1000", "--db", str(loaded_db), "--config", str(config)]
        )
        assert result.exit_code == 1

    def test_invalid_as_of(self, loaded_db):
        result = runner.invoke(
            app, ["calculate", "emp-001", "-g", "1000", "--db", str(loaded_db), "--as-of", "June"]
        )
        assert result.exit_code == 1
