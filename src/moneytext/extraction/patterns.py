"""Shared pattern library for transaction extraction.

Every table here is built once at import time and is read-only afterwards
(tuples, frozensets and compiled patterns), so extractors can run from any
number of threads without locking.

Ordering matters: wherever a tuple of patterns is consumed, earlier entries
win. Do not reorder without updating the tests that pin the priorities.
"""

import re

# --- Amounts -----------------------------------------------------------------

# "Rs", "Rs.", "INR" or the rupee sign. The lookbehind keeps "Mrs 500" out.
CURRENCY = r"(?:(?<![A-Za-z])(?:Rs\.?|INR)|₹)"
NUMBER = r"(\d[\d,]*(?:\.\d+)?)"
# A number that does not start inside another token (XX1234, 12.5.2024).
_BARE_NUMBER = r"(?<![\w.,])" + NUMBER

AMOUNT_PATTERNS: tuple[re.Pattern[str], ...] = (
    # Rs. 1,234.50 / INR 500 / ₹99
    re.compile(CURRENCY + r"\s*" + NUMBER, re.IGNORECASE),
    # 1,234.50 Rs / 500 INR
    re.compile(_BARE_NUMBER + r"\s*(?:(?:Rs|INR)\b|₹)", re.IGNORECASE),
    # Amount: 500 / amt of Rs 500
    re.compile(
        r"\b(?:amount|amt)\b\.?\s*(?:of\s*)?[:\-]?\s*(?:" + CURRENCY + r")?\s*" + NUMBER,
        re.IGNORECASE,
    ),
    # debited by 500 / paid Rs 500 / spent 1,200
    re.compile(
        r"\b(?:debited|credited|paid|received|spent)\s*(?:(?:by|with|of|for)\s*)?(?:"
        + CURRENCY
        + r")?\s*"
        + NUMBER,
        re.IGNORECASE,
    ),
)

# Cheap presence check used by validity gates.
CURRENCY_AMOUNT_PATTERN = re.compile(CURRENCY + r"\s*\d", re.IGNORECASE)

# --- Direction ---------------------------------------------------------------

DEBIT_KEYWORDS: tuple[str, ...] = (
    "debited",
    "debit",
    "spent",
    "paid",
    "payment",
    "purchase",
    "withdrawn",
    "withdrawal",
    "sent",
    "transfer to",
    "transferred to",
    "bill payment",
    "emi",
    "charged",
    "dr",
)

CREDIT_KEYWORDS: tuple[str, ...] = (
    "credited",
    "credit",
    "received",
    "deposit",
    "deposited",
    "refund",
    "refunded",
    "cashback",
    "salary",
    "transfer from",
    "transferred from",
    "income",
    "interest",
    "cr",
)


def _word_pattern(keyword: str) -> re.Pattern[str]:
    phrase = r"\s+".join(re.escape(part) for part in keyword.split())
    return re.compile(rf"\b{phrase}\b", re.IGNORECASE)


DEBIT_PATTERNS: tuple[re.Pattern[str], ...] = tuple(_word_pattern(k) for k in DEBIT_KEYWORDS)
CREDIT_PATTERNS: tuple[re.Pattern[str], ...] = tuple(_word_pattern(k) for k in CREDIT_KEYWORDS)

# --- SMS sender gate ---------------------------------------------------------

BANK_SENDER_CODES: tuple[str, ...] = (
    "HDFCBK",
    "SBIINB",
    "SBIPSG",
    "SBMSMS",
    "ICICIB",
    "AXISBK",
    "KOTAKB",
    "PNBSMS",
    "BOIIND",
    "BOBTXN",
    "YESBNK",
    "INDUSB",
    "FEDBNK",
    "CANBNK",
    "UNIONB",
    "RBLBNK",
    "IDBIBK",
    "IDFCFB",
    "CITIBK",
    "SCBANK",
    "AUBANK",
    "PAYTMB",
    "PHONPE",
    "GPAY",
    "AMAZONPAY",
    "MOBIKWIK",
)

# Operator-prefixed headers (VM-HDFCBK, AD-ICICIB) and all-caps short codes.
SENDER_HEADER_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"[A-Z]{2}-[A-Z0-9]{3,}"),
    re.compile(r"[A-Z]{5,}"),
)

SMS_TRANSACTION_KEYWORDS: tuple[str, ...] = (
    "debited",
    "credited",
    "sent",
    "received",
    "paid",
    "payment",
    "withdrawn",
    "deposited",
    "transfer",
    "upi",
    "neft",
    "imps",
    "a/c",
    "acct",
    "account",
    "rs.",
    "inr",
    "bal",
    "txn",
    "ref",
)

# --- Merchant / counterparty -------------------------------------------------

# One to six words; the first word must start with a letter.
_NAME = r"([A-Za-z][A-Za-z0-9&'\-]*(?:\s+[A-Za-z][A-Za-z0-9&'\-]*){0,5}?)"
_NAME_END = (
    r"(?=\s+(?:on|via|ref|upi|for|using|with|avl|bal|thru|through|by|dated|date|info"
    r"|txn|and|is|has|was|at|from|to|in|of)\b|\s*[,;:()|]|\.(?:\s|$)|\s+-\s|\s+\d|\s*$)"
)
_VPA = r"([A-Za-z0-9._\-]+@[A-Za-z]+)"

MERCHANT_PATTERNS: tuple[re.Pattern[str], ...] = (
    # (a) to AMAZON on ... / at STARBUCKS COFFEE. / payee: ACME
    re.compile(r"\b(?:to|at|from|merchant|payee)\b[:\s]+" + _NAME + _NAME_END, re.IGNORECASE),
    # (b) UPI virtual addresses
    re.compile(r"\b(?:VPA|UPI(?:\s*ID)?)\s*[-:/]?\s*" + _VPA, re.IGNORECASE),
    re.compile(r"\b(?:to|from)\s+" + _VPA, re.IGNORECASE),
    # (c) paid to / received from / transfer(red) to|from
    re.compile(
        r"\b(?:paid\s+to|received\s+from|transfer(?:red)?\s+(?:to|from))\s+" + _NAME + _NAME_END,
        re.IGNORECASE,
    ),
    # (d) NEFT/HDFC0001234/ACME CORP/ and UPI/4012345678/SWIGGY/ segments
    re.compile(
        r"\b(?:IMPS|NEFT|RTGS|UPI)[/\-:]\s*"
        r"(?:(?:[A-Za-z0-9]*\d[A-Za-z0-9]*|DR|CR|P2A|P2M)[/\-])*"
        r"([A-Za-z][A-Za-z .&']*?)\s*[/\-]",
        re.IGNORECASE,
    ),
)

MERCHANT_MIN_LENGTH = 2
MERCHANT_MAX_CANDIDATE_LENGTH = 50

# Words that show a capture grabbed the account holder's side, not a payee.
MERCHANT_STOPWORDS: frozenset[str] = frozenset(
    {
        "a",
        "an",
        "the",
        "you",
        "your",
        "my",
        "a/c",
        "ac",
        "acct",
        "account",
        "card",
        "bank",
        "beneficiary",
        "dr",
        "cr",
        "upi",
        "payment",
        "p2a",
        "p2m",
    }
)

KNOWN_MERCHANTS: tuple[str, ...] = (
    "Zomato",
    "Swiggy",
    "Amazon",
    "Flipkart",
    "Netflix",
    "Spotify",
    "Uber",
    "Ola",
    "Paytm",
    "PhonePe",
    "Google Pay",
    "GPay",
    "Zerodha",
    "Groww",
    "Upstox",
    "Myntra",
    "BigBasket",
    "Blinkit",
    "Zepto",
    "Dunzo",
    "Nykaa",
    "Ajio",
    "BookMyShow",
    "MakeMyTrip",
    "IRCTC",
    "Airtel",
    "Jio",
)

KNOWN_MERCHANT_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = tuple(
    (name, _word_pattern(name)) for name in KNOWN_MERCHANTS
)

# Automated senders never name the counterparty.
EXCLUDED_SENDER_MARKERS: tuple[str, ...] = (
    "noreply",
    "no-reply",
    "donotreply",
    "do-not-reply",
    "alert",
    "mailer-daemon",
)

# --- Payment method / reference / balance ------------------------------------

# (method name, pattern); resolved to PaymentMethod by the fields module.
PAYMENT_METHOD_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("UPI", re.compile(r"\bupi\b|@", re.IGNORECASE)),
    ("NEFT", re.compile(r"\bneft\b", re.IGNORECASE)),
    ("IMPS", re.compile(r"\bimps\b", re.IGNORECASE)),
    ("OTHER", re.compile(r"\brtgs\b", re.IGNORECASE)),
    ("CARD", re.compile(r"\bcard\b|\batm\b", re.IGNORECASE)),
    ("CHEQUE", re.compile(r"\bcheque\b|\bchq\b", re.IGNORECASE)),
    ("CASH", re.compile(r"\bcash\b", re.IGNORECASE)),
)

REFERENCE_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(
        r"\b(?:ref(?:erence)?|txn|transaction|utr)\b\.?\s*(?:no|number|id)?\.?\s*[:#\-]?\s*"
        r"([A-Za-z0-9]*\d[A-Za-z0-9]*)",
        re.IGNORECASE,
    ),
    re.compile(r"\bUPI\b[:/\s\-]*(\d{6,})", re.IGNORECASE),
)

# A number that is not the day part of a date (12-01-24, 12/01/2024).
_NUMBER_NOT_DATE = NUMBER + r"(?![\d,.]*[\-/])"

BALANCE_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(
        r"\b(?:avl\.?\s*bal(?:ance)?|avail(?:able)?\.?\s*bal(?:ance)?|bal(?:ance)?)\b\.?\s*"
        r"(?:is\s*)?[:\-]?\s*(?:" + CURRENCY + r")?\s*" + _NUMBER_NOT_DATE,
        re.IGNORECASE,
    ),
    re.compile(
        CURRENCY + r"\s*" + NUMBER + r"\s*(?:is\s+(?:your\s+)?)?(?:avl\.?\s*|available\s+)?bal(?:ance)?\b",
        re.IGNORECASE,
    ),
)

# --- Investment tiers --------------------------------------------------------

MANDATE_KEYWORDS: tuple[str, ...] = (
    "UMRN",
    "NACH",
    "ECS",
    "MANDATE",
    "AUTODEBIT",
    "AUTO-DEBIT",
    "AUTO DEBIT",
    "AUTOPAY",
    "AUTO-PAY",
    "STANDING INSTRUCTION",
    "SI-",
)

CLEARING_CORP_KEYWORDS: tuple[str, ...] = (
    "INDIAN CLEARING CORP",
    "ICCL",
    "BSE",
    "NSE",
    "MCX",
    "CAMS",
    "KFINTECH",
    "KARVY",
    "NSDL",
    "CDSL",
    "SEBI",
    "AMFI",
    "MFUTILITY",
    "MF UTILITY",
)

INVESTMENT_KEYWORDS: tuple[str, ...] = (
    "SIP",
    "MUTUAL FUND",
    "MF",
    "NAV",
    "UNITS",
    "ISIN",
    "FOLIO",
    "ETF",
    "EQUITY",
    "STOCK",
    "STOCKS",
    "SHARE",
    "SHARES",
    "DEMAT",
    "BOND",
    "BONDS",
    "DEBENTURE",
    "PPF",
    "NPS",
    "ELSS",
    "INDEX FUND",
    "DEBT FUND",
    "LIQUID FUND",
    "FLEXI CAP",
    "LARGE CAP",
    "MID CAP",
    "SMALL CAP",
    "HYBRID FUND",
    "BALANCED FUND",
    "SYSTEMATIC",
    "REDEMPTION",
    "DIVIDEND",
    "GROWTH OPTION",
    "DIRECT PLAN",
    "REGULAR PLAN",
)

# Investment-vocabulary keyword groups in sub-type priority order.
INVESTMENT_TYPE_KEYWORDS: tuple[tuple[str, frozenset[str]], ...] = (
    ("SIP", frozenset({"SIP", "SYSTEMATIC"})),
    ("MUTUAL_FUND", frozenset({"MUTUAL FUND", "MF", "NAV", "FOLIO", "UNITS"})),
    ("STOCKS", frozenset({"STOCK", "STOCKS", "SHARE", "SHARES", "EQUITY", "DEMAT"})),
    ("MUTUAL_FUND", frozenset({"ETF", "INDEX FUND"})),
    ("BONDS", frozenset({"BOND", "BONDS", "DEBENTURE"})),
)

INVESTMENT_PLATFORM_KEYWORDS: tuple[str, ...] = (
    "GROWW",
    "ZERODHA",
    "UPSTOX",
    "PAYTM MONEY",
    "KUVERA",
    "ET MONEY",
    "COIN BY ZERODHA",
    "MIRAE ASSET",
    "HDFC AMC",
    "SBI MF",
    "ICICI PRUDENTIAL",
    "AXIS MF",
    "KOTAK MF",
    "NIPPON",
    "ADITYA BIRLA",
    "UTI MF",
    "TATA MF",
    "DSP",
    "FRANKLIN",
    "MOTILAL OSWAL",
    "EDELWEISS",
    "INVESCO",
    "PGIM",
    "CANARA ROBECO",
    "BANDHAN MF",
    "QUANT MF",
    "PARAG PARIKH",
    "PPFAS",
)

RETIREMENT_KEYWORDS: tuple[str, ...] = (
    "PPF",
    "PUBLIC PROVIDENT",
    "NPS",
    "NATIONAL PENSION",
    "PENSION FUND",
    "PFRDA",
    "TIER I",
    "TIER II",
)


def keyword_pattern(keyword: str) -> re.Pattern[str]:
    """Compile an upper-case keyword so it only matches as a whole token.

    Investment tiers use this instead of plain substring containment: a
    keyword found inside a longer word no longer counts, so "NSE" does not
    fire inside "EXPENSE" and "SIP" not inside "GOSSIP". Boundaries apply
    only on alphanumeric ends, so "SI-" still matches "SI-123".
    """
    left = r"(?<![A-Z0-9])" if keyword[0].isalnum() else ""
    right = r"(?![A-Z0-9])" if keyword[-1].isalnum() else ""
    return re.compile(left + re.escape(keyword) + right)


# --- Statements --------------------------------------------------------------

STATEMENT_DATE_PATTERN = re.compile(
    r"(?<!\d)(\d{1,2}[-/.]\d{1,2}[-/.]\d{2,4}|\d{4}-\d{2}-\d{2}"
    r"|\d{1,2}[\s\-][A-Za-z]{3,9}[\s\-,]+\d{2,4})(?!\d)"
)

# Groups: 1 currency-prefixed, 2 two-decimal figure, 3 figure with Dr/Cr; 4 marker.
STATEMENT_AMOUNT_PATTERN = re.compile(
    r"(?:" + CURRENCY + r"\s*(\d[\d,]*(?:\.\d{1,2})?)"
    r"|(?<![\w.,])(\d[\d,]*\.\d{2})(?!\d)"
    r"|(?<![\w.,])(\d[\d,]*)(?=\s*(?:Dr|Cr)\b))"
    r"(?:\s*\b(Dr|Cr)\b\.?)?",
    re.IGNORECASE,
)

# Day/month orderings are tried before month/day; strict strptime parsing.
STATEMENT_DATE_FORMATS: tuple[str, ...] = (
    "%d/%m/%Y",  # 15/01/2025
    "%d-%m-%Y",  # 15-01-2025
    "%d.%m.%Y",  # 15.01.2025
    "%Y-%m-%d",  # 2025-01-15
    "%d %b %Y",  # 15 Jan 2025
    "%d-%b-%Y",  # 15-Jan-2025
    "%d %B %Y",  # 15 January 2025
    "%d %b, %Y",  # 13 Sep, 2025
    "%d %B, %Y",  # 13 September, 2025
    "%d-%b-%y",  # 15-Jan-25
    "%d %b %y",  # 15 Jan 25
    "%d/%m/%y",  # 15/01/25
    "%d-%m-%y",  # 15-01-25
    "%d.%m.%y",  # 15.01.25
    "%m/%d/%Y",  # 01/15/2025
)

STATEMENT_NOISE_PATTERN = re.compile(
    r"\b(?:opening\s+balance|closing\s+balance|balance\s+b/f|balance\s+c/f"
    r"|brought\s+forward|carried\s+forward"
    r"|statement\s+(?:of\s+account|period|date|summary|from)"
    r"|total\s+(?:debits?|credits?|withdrawals?|deposits?|amount|dues?)"
    r"|page\s+\d+(?:\s+of\s+\d+)?"
    r"|account\s+(?:number|no)|a/c\s+no|ifsc|branch\s+(?:name|code|address))\b"
    # Footer sums: "Total", "Grand Total: 1,234.00", but not "TOTAL ENERGIES".
    r"|^\s*(?:grand\s+)?total\b(?!\s+[a-z])",
    re.IGNORECASE,
)

STATEMENT_MIN_DESCRIPTION_LENGTH = 3

# Header substrings for tabular statements, one role per column.
HEADER_KEYS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("date", ("date",)),
    ("date", ("txn", "tran dt", "value dt")),
    ("description", ("desc", "narration", "particular", "remark", "details")),
    ("debit", ("debit", "withdrawal")),
    ("credit", ("credit", "deposit")),
    ("balance", ("balance",)),
    ("amount", ("amount", "amt")),
)
