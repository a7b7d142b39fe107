"""Database layer for PayTax."""

from paytax.db.repository import TaxRepository, load_brackets_json, load_profiles_json
from paytax.db.schema import create_schema

__all__ = ["TaxRepository", "create_schema", "load_brackets_json", "load_profiles_json"]
