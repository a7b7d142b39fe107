"""PayTax — per-period payroll tax withholding engine."""

__version__ = "0.1.0"
