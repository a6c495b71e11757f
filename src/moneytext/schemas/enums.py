"""Closed value sets used by transaction records.

Each display-facing enum carries an explicit display-name table. The table is
checked for completeness at import time, so adding a member without a
display name fails immediately instead of rendering a raw value later.
"""

from enum import Enum


class TransactionSource(str, Enum):
    SMS = "SMS"
    EMAIL = "EMAIL"
    STATEMENT = "STATEMENT"


class TransactionDirection(str, Enum):
    DEBIT = "DEBIT"
    CREDIT = "CREDIT"


class TransactionCategory(str, Enum):
    FOOD = "FOOD"
    ENTERTAINMENT = "ENTERTAINMENT"
    EMI_HOME_LOAN = "EMI_HOME_LOAN"
    EMI_CAR_LOAN = "EMI_CAR_LOAN"
    UTILITIES = "UTILITIES"
    SHOPPING = "SHOPPING"
    INVESTMENT = "INVESTMENT"
    SALARY = "SALARY"
    TRANSFER = "TRANSFER"
    HEALTH = "HEALTH"
    TRAVEL = "TRAVEL"
    EDUCATION = "EDUCATION"
    INSURANCE = "INSURANCE"
    SUBSCRIPTIONS = "SUBSCRIPTIONS"
    GROCERIES = "GROCERIES"
    FUEL = "FUEL"
    RENT = "RENT"
    PERSONAL_CARE = "PERSONAL_CARE"
    GIFTS = "GIFTS"
    OTHER = "OTHER"

    @property
    def display_name(self) -> str:
        return _CATEGORY_DISPLAY_NAMES[self]


class InvestmentType(str, Enum):
    SIP = "SIP"
    MUTUAL_FUND = "MUTUAL_FUND"
    STOCKS = "STOCKS"
    PPF = "PPF"
    NPS = "NPS"
    BONDS = "BONDS"
    OTHER = "OTHER"

    @property
    def display_name(self) -> str:
        return _INVESTMENT_DISPLAY_NAMES[self]


class PaymentMethod(str, Enum):
    UPI = "UPI"
    NEFT = "NEFT"
    IMPS = "IMPS"
    CARD = "CARD"
    CASH = "CASH"
    CHEQUE = "CHEQUE"
    OTHER = "OTHER"

    @property
    def display_name(self) -> str:
        return _PAYMENT_METHOD_DISPLAY_NAMES[self]


class ConfidenceLevel(str, Enum):
    """Four-valued ordinal; comparisons follow declaration order."""

    NONE = "NONE"
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"

    @property
    def rank(self) -> int:
        return _CONFIDENCE_ORDER.index(self)

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, ConfidenceLevel):
            return NotImplemented
        return self.rank >= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, ConfidenceLevel):
            return NotImplemented
        return self.rank > other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, ConfidenceLevel):
            return NotImplemented
        return self.rank <= other.rank

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ConfidenceLevel):
            return NotImplemented
        return self.rank < other.rank


_CONFIDENCE_ORDER: tuple[ConfidenceLevel, ...] = tuple(ConfidenceLevel)

_CATEGORY_DISPLAY_NAMES: dict[TransactionCategory, str] = {
    TransactionCategory.FOOD: "Food & Dining",
    TransactionCategory.ENTERTAINMENT: "Entertainment",
    TransactionCategory.EMI_HOME_LOAN: "Home Loan EMI",
    TransactionCategory.EMI_CAR_LOAN: "Car Loan EMI",
    TransactionCategory.UTILITIES: "Utilities",
    TransactionCategory.SHOPPING: "Shopping",
    TransactionCategory.INVESTMENT: "Investment",
    TransactionCategory.SALARY: "Salary",
    TransactionCategory.TRANSFER: "Transfer",
    TransactionCategory.HEALTH: "Health",
    TransactionCategory.TRAVEL: "Travel",
    TransactionCategory.EDUCATION: "Education",
    TransactionCategory.INSURANCE: "Insurance",
    TransactionCategory.SUBSCRIPTIONS: "Subscriptions",
    TransactionCategory.GROCERIES: "Groceries",
    TransactionCategory.FUEL: "Fuel",
    TransactionCategory.RENT: "Rent",
    TransactionCategory.PERSONAL_CARE: "Personal Care",
    TransactionCategory.GIFTS: "Gifts",
    TransactionCategory.OTHER: "Other",
}

_INVESTMENT_DISPLAY_NAMES: dict[InvestmentType, str] = {
    InvestmentType.SIP: "SIP",
    InvestmentType.MUTUAL_FUND: "Mutual Fund",
    InvestmentType.STOCKS: "Stocks",
    InvestmentType.PPF: "PPF",
    InvestmentType.NPS: "NPS",
    InvestmentType.BONDS: "Bonds",
    InvestmentType.OTHER: "Other Investment",
}

_PAYMENT_METHOD_DISPLAY_NAMES: dict[PaymentMethod, str] = {
    PaymentMethod.UPI: "UPI",
    PaymentMethod.NEFT: "NEFT",
    PaymentMethod.IMPS: "IMPS",
    PaymentMethod.CARD: "Card",
    PaymentMethod.CASH: "Cash",
    PaymentMethod.CHEQUE: "Cheque",
    PaymentMethod.OTHER: "Other",
}


def _check_exhaustive(enum_cls: type[Enum], table: dict) -> None:
    missing = [member.name for member in enum_cls if member not in table]
    if missing:
        raise RuntimeError(f"{enum_cls.__name__} missing display names: {missing}")


_check_exhaustive(TransactionCategory, _CATEGORY_DISPLAY_NAMES)
_check_exhaustive(InvestmentType, _INVESTMENT_DISPLAY_NAMES)
_check_exhaustive(PaymentMethod, _PAYMENT_METHOD_DISPLAY_NAMES)
