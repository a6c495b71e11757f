"""Deterministic transaction categorization.

Messages and statement rows rarely carry a category, so we infer one from
the text plus the extracted merchant. Investment detection runs first; the
keyword table below only applies when the investment classifier does not
reach MEDIUM confidence.

Rules are word-bounded regexes tried in order; the first match wins and
anything unmatched is OTHER. Specific rules sit above generic ones (car
loans above the catch-all "loan"/"emi", salary above plain transfers).
"""

import re

from moneytext.categorization.investment import classify
from moneytext.schemas.enums import InvestmentType, TransactionCategory


def _rule(*alternatives: str) -> re.Pattern[str]:
    return re.compile(r"\b(?:" + "|".join(alternatives) + r")\b", re.IGNORECASE)


# Ordering matters: earlier matches win.
_RULES: list[tuple[TransactionCategory, re.Pattern[str]]] = [
    (
        TransactionCategory.FOOD,
        _rule(
            r"zomato", r"swiggy", r"uber\s*eats", r"eatsure", r"foods?", r"restaurants?",
            r"caf[eé]", r"pizza", r"burger", r"domino'?s", r"mcdonald'?s", r"kfc",
            r"starbucks", r"bakery", r"dining", r"coffee", r"lunch", r"dinner", r"meals?",
        ),
    ),
    (
        TransactionCategory.EMI_CAR_LOAN,
        _rule(
            r"car\s*loan", r"auto\s*loan", r"vehicle\s*loan", r"two[\s-]*wheeler",
            r"bike\s*loan", r"car\s*emi",
        ),
    ),
    (
        TransactionCategory.EMI_HOME_LOAN,
        _rule(r"home\s*loan", r"housing\s*loan", r"housing", r"mortgage", r"loan", r"emi"),
    ),
    (
        TransactionCategory.UTILITIES,
        _rule(
            r"electricity", r"electric", r"water\s*bill", r"gas\s*bill", r"piped\s*gas", r"gas",
            r"utility", r"broadband", r"internet", r"recharge", r"prepaid", r"postpaid",
            r"phone\s*bill", r"dth", r"airtel", r"jio", r"vodafone", r"vi", r"bsnl",
            r"bescom", r"tata\s*power",
        ),
    ),
    (
        TransactionCategory.ENTERTAINMENT,
        _rule(
            r"netflix", r"prime\s*video", r"amazon\s*prime", r"prime", r"hotstar", r"spotify",
            r"movies?", r"cinema", r"pvr", r"inox", r"bookmyshow", r"entertainment",
            r"gaming", r"playstation", r"xbox", r"concert", r"theat(?:re|er)",
        ),
    ),
    (
        TransactionCategory.SHOPPING,
        _rule(
            r"amazon", r"flipkart", r"myntra", r"ajio", r"nykaa", r"meesho", r"shopping",
            r"shop", r"store", r"mall", r"retail", r"reliance\s*retail", r"mart",
        ),
    ),
    (
        TransactionCategory.HEALTH,
        _rule(
            r"pharmacy", r"pharmacies", r"pharma", r"pharmeasy", r"1mg", r"netmeds", r"apollo",
            r"hospitals?", r"clinic", r"medical", r"medicines?", r"doctor", r"diagnostics?",
            r"lab", r"practo", r"health(?!\s*insurance)",
        ),
    ),
    (
        TransactionCategory.TRAVEL,
        _rule(
            r"irctc", r"makemytrip", r"goibibo", r"cleartrip", r"yatra", r"redbus", r"uber",
            r"ola", r"rapido", r"airlines?", r"airways", r"indigo", r"air\s*india",
            r"vistara", r"spicejet", r"flights?", r"hotels?", r"oyo", r"airbnb", r"travel",
            r"railways?", r"metro", r"taxi", r"cab", r"toll", r"fastag",
        ),
    ),
    (
        TransactionCategory.EDUCATION,
        _rule(
            r"school", r"college", r"university", r"tuition", r"coaching", r"course",
            r"udemy", r"coursera", r"byju'?s", r"unacademy", r"education", r"exam\s*fees?",
        ),
    ),
    (
        TransactionCategory.INSURANCE,
        _rule(
            r"insurance", r"lic", r"policy\s*(?:no|number|premium|renewal)",
            r"insurance\s*premium", r"policybazaar", r"hdfc\s*ergo", r"icici\s*lombard",
            r"star\s*health", r"acko", r"max\s*life", r"term\s*plan",
        ),
    ),
    (
        TransactionCategory.SUBSCRIPTIONS,
        _rule(
            r"subscriptions?", r"subscribed", r"renewal", r"membership", r"auto[\s-]*renew",
            r"youtube\s*premium", r"apple\s*services", r"itunes", r"google\s*play",
            r"icloud", r"linkedin\s*premium", r"chatgpt", r"openai", r"microsoft\s*365",
            r"adobe",
        ),
    ),
    (
        TransactionCategory.GROCERIES,
        _rule(
            r"grocery", r"groceries", r"bigbasket", r"blinkit", r"zepto", r"d\s*mart",
            r"instamart", r"jiomart", r"supermarket", r"kirana", r"licious", r"milk",
            r"dairy", r"vegetables",
        ),
    ),
    (
        TransactionCategory.FUEL,
        _rule(
            r"fuels?", r"petrol", r"diesel", r"hpcl", r"iocl", r"indian\s*oil", r"bpcl",
            r"bharat\s*petroleum", r"reliance\s*bp", r"shell", r"service\s*st(?:atio)?n",
            r"filling\s*station", r"cng",
        ),
    ),
    (
        TransactionCategory.RENT,
        _rule(r"rent", r"rental", r"house\s*rent", r"nobroker", r"landlord", r"lease"),
    ),
    (
        TransactionCategory.PERSONAL_CARE,
        _rule(
            r"salon", r"barber", r"parlou?r", r"spa", r"urban\s*company", r"grooming",
            r"cosmetics",
        ),
    ),
    (
        TransactionCategory.GIFTS,
        _rule(r"gifts?", r"gift\s*card", r"donation", r"charity", r"fnp", r"igp", r"flowers"),
    ),
    (
        TransactionCategory.SALARY,
        _rule(r"salary", r"payroll", r"wages", r"sal\s*cr"),
    ),
    # Rails last so merchant hints win (e.g. UPI/NETFLIX).
    (
        TransactionCategory.TRANSFER,
        _rule(
            r"transfer", r"transferred", r"neft", r"imps", r"rtgs", r"upi", r"fund\s*transfer",
            r"sent\s*to", r"p2p",
        ),
    ),
]


def match_category(text: str) -> TransactionCategory:
    """Apply the keyword table only (no investment detection)."""
    if not text or not text.strip():
        return TransactionCategory.OTHER
    for category, pattern in _RULES:
        if pattern.search(text):
            return category
    return TransactionCategory.OTHER


def categorize(
    text: str | None, merchant: str | None = None
) -> tuple[TransactionCategory, InvestmentType | None]:
    """Infer a category (and investment sub-type) for a transaction.

    Args:
        text: Raw message, subject+body, or statement narration.
        merchant: Extracted merchant, searched together with the text.

    Returns:
        (category, investment_type); the sub-type is only set for INVESTMENT.
    """
    combined = " ".join(part for part in (text, merchant) if part)

    result = classify(combined)
    if result.is_investment:
        return TransactionCategory.INVESTMENT, result.investment_type

    return match_category(combined), None
