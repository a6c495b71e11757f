"""Human-readable one-line summaries for transaction records.

Summaries are derived data: ``TransactionRecord.summary`` calls
``generate_summary`` on every access, so a summary can never drift from the
fields it describes.
"""

from decimal import Decimal

from moneytext.schemas.enums import (
    InvestmentType,
    TransactionCategory,
    TransactionDirection,
)

UNKNOWN_COUNTERPARTY = "someone"


def format_amount(amount: Decimal) -> str:
    """Format an amount in rupees with thousands separators (₹1,234.50)."""
    return f"₹{amount:,.2f}"


def generate_summary(
    amount: Decimal,
    direction: TransactionDirection,
    category: TransactionCategory,
    merchant: str | None = None,
    investment_type: InvestmentType | None = None,
) -> str:
    """Build the summary line for a transaction.

    Args:
        amount: Positive transaction amount
        direction: Debit or credit
        category: Resolved category
        merchant: Counterparty name, if known
        investment_type: Investment sub-type (only for INVESTMENT)

    Returns:
        Summary such as "You paid ₹500.00 to AMAZON (Shopping)"
    """
    amt = format_amount(amount)
    who = merchant or UNKNOWN_COUNTERPARTY
    is_debit = direction == TransactionDirection.DEBIT

    if category == TransactionCategory.INVESTMENT:
        kind = investment_type.display_name if investment_type else "investments"
        if is_debit:
            return f"You invested {amt} in {kind}"
        return f"You received {amt} from {kind}"

    if category == TransactionCategory.SALARY and not is_debit:
        return f"You received {amt} as salary"

    if category == TransactionCategory.FOOD and is_debit:
        return f"You paid {amt} for food at {who}"

    if is_debit:
        line = f"You paid {amt} to {who}"
    else:
        line = f"You received {amt} from {who}"

    if category not in (TransactionCategory.OTHER, TransactionCategory.TRANSFER):
        line = f"{line} ({category.display_name})"
    return line
