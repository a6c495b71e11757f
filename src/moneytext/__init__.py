"""Rule-based extraction of structured transactions from bank SMS, email and statements."""

__version__ = "0.1.0"
