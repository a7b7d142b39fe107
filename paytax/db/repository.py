"""Data access layer for PayTax."""

import json
import sqlite3
from datetime import date
from decimal import Decimal
from pathlib import Path
from uuid import uuid4

from pydantic import ValidationError

from paytax.engines.sources import BracketSource, ProfileSource
from paytax.exceptions import DataImportError
from paytax.models.enums import TaxType
from paytax.models.tax_config import EmployeeTaxProfile, TaxBracket


class TaxRepository(BracketSource, ProfileSource):
    """Stores tax brackets and employee tax profiles.

    Bound to one business when ``business_id`` is given: brackets are saved
    under it and only its brackets are served.
    """

    def __init__(self, conn: sqlite3.Connection, business_id: str | None = None):
        self.conn = conn
        self.business_id = business_id

    # --- Tax brackets ---

    def save_bracket(self, bracket: TaxBracket) -> str:
        """Insert a bracket row. Returns the bracket ID."""
        bracket_id = bracket.id or str(uuid4())
        business_id = bracket.business_id or self.business_id
        self.conn.execute(
            """INSERT INTO tax_brackets
               (id, business_id, country, tax_type, min_income, max_income,
                tax_rate, fixed_amount, effective_date, end_date, is_active)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
            (
                bracket_id,
                business_id,
                bracket.country,
                bracket.tax_type.value,
                str(bracket.min_income),
                str(bracket.max_income) if bracket.max_income is not None else None,
                str(bracket.tax_rate),
                str(bracket.fixed_amount) if bracket.fixed_amount is not None else None,
                bracket.effective_date.isoformat(),
                bracket.end_date.isoformat() if bracket.end_date else None,
                int(bracket.is_active),
            ),
        )
        self.conn.commit()
        return bracket_id

    def deactivate_bracket(self, bracket_id: str) -> None:
        self.conn.execute(
            "UPDATE tax_brackets SET is_active = 0 WHERE id = ?", (bracket_id,)
        )
        self.conn.commit()

    def get_active_brackets(
        self, country: str, tax_type: TaxType, as_of: date | None = None
    ) -> list[TaxBracket]:
        """Active brackets for a jurisdiction and tax type, lowest band first."""
        query = (
            "SELECT * FROM tax_brackets "
            "WHERE country = ? AND tax_type = ? AND is_active = 1"
        )
        params: list = [country.strip().upper(), TaxType(tax_type).value]
        if self.business_id is not None:
            query += " AND business_id = ?"
            params.append(self.business_id)
        if as_of is not None:
            query += " AND effective_date <= ? AND (end_date IS NULL OR end_date >= ?)"
            params.extend([as_of.isoformat(), as_of.isoformat()])

        cursor = self.conn.execute(query, params)
        columns = [desc[0] for desc in cursor.description]
        brackets = [_row_to_bracket(dict(zip(columns, row))) for row in cursor.fetchall()]
        # TEXT columns do not sort numerically in SQL
        return sorted(brackets, key=lambda b: b.min_income)

    # --- Employee tax profiles ---

    def save_profile(self, profile: EmployeeTaxProfile) -> None:
        """Insert or replace the single profile held for an employee."""
        self.conn.execute(
            """INSERT INTO employee_tax_profiles
               (employee_id, country, tax_id, filing_status, allowances,
                additional_withholding, exempt_from_federal, exempt_from_state,
                exempt_from_local)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
               ON CONFLICT(employee_id) DO UPDATE SET
                country = excluded.country,
                tax_id = excluded.tax_id,
                filing_status = excluded.filing_status,
                allowances = excluded.allowances,
                additional_withholding = excluded.additional_withholding,
                exempt_from_federal = excluded.exempt_from_federal,
                exempt_from_state = excluded.exempt_from_state,
                exempt_from_local = excluded.exempt_from_local,
                updated_at = datetime('now')""",
            (
                profile.employee_id,
                profile.country,
                profile.tax_id,
                profile.filing_status,
                profile.allowances,
                str(profile.additional_withholding),
                int(profile.exempt_from_federal),
                int(profile.exempt_from_state),
                int(profile.exempt_from_local),
            ),
        )
        self.conn.commit()

    def get_profile(self, employee_id: str) -> EmployeeTaxProfile | None:
        cursor = self.conn.execute(
            "SELECT * FROM employee_tax_profiles WHERE employee_id = ?", (employee_id,)
        )
        row = cursor.fetchone()
        if row is None:
            return None
        columns = [desc[0] for desc in cursor.description]
        record = dict(zip(columns, row))
        return EmployeeTaxProfile(
            employee_id=record["employee_id"],
            country=record["country"],
            tax_id=record["tax_id"],
            filing_status=record["filing_status"],
            allowances=record["allowances"],
            additional_withholding=Decimal(record["additional_withholding"]),
            exempt_from_federal=bool(record["exempt_from_federal"]),
            exempt_from_state=bool(record["exempt_from_state"]),
            exempt_from_local=bool(record["exempt_from_local"]),
        )


def _row_to_bracket(record: dict) -> TaxBracket:
    return TaxBracket(
        id=record["id"],
        business_id=record["business_id"],
        country=record["country"],
        tax_type=TaxType(record["tax_type"]),
        min_income=Decimal(record["min_income"]),
        max_income=Decimal(record["max_income"]) if record["max_income"] is not None else None,
        tax_rate=Decimal(record["tax_rate"]),
        fixed_amount=(
            Decimal(record["fixed_amount"]) if record["fixed_amount"] is not None else None
        ),
        effective_date=date.fromisoformat(record["effective_date"]),
        end_date=date.fromisoformat(record["end_date"]) if record["end_date"] else None,
        is_active=bool(record["is_active"]),
    )


def _read_records(path: Path) -> list[dict]:
    try:
        data = json.loads(Path(path).read_text())
    except json.JSONDecodeError as exc:
        raise DataImportError(str(path), f"invalid JSON: {exc}") from exc
    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        raise DataImportError(str(path), "expected an object or a list of objects")
    return data


def load_brackets_json(path: Path) -> list[TaxBracket]:
    """Parse a JSON file of bracket records."""
    records = _read_records(path)
    try:
        return [TaxBracket.model_validate(item) for item in records]
    except ValidationError as exc:
        raise DataImportError(str(path), str(exc)) from exc


def load_profiles_json(path: Path) -> list[EmployeeTaxProfile]:
    """Parse a JSON file of employee tax profile records."""
    records = _read_records(path)
    try:
        return [EmployeeTaxProfile.model_validate(item) for item in records]
    except ValidationError as exc:
        raise DataImportError(str(path), str(exc)) from exc
