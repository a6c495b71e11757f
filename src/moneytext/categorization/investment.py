"""Multi-tier investment detection.

A transaction is scored against five keyword tiers. Each tier that fires adds
its weight to the score and one human-readable reason to the audit trail.
The score maps to a confidence level, and only MEDIUM or better counts as an
investment:

    tier                      weight   sub-type effect
    mandate / auto-debit        +40    SIP
    market infrastructure       +35    MUTUAL_FUND if still unset
    investment vocabulary       +25    by keyword group
    investment platform         +20    MUTUAL_FUND if still unset
    retirement scheme           +30    PPF or NPS (overrides)

    >= 50 HIGH, >= 30 MEDIUM, >= 15 LOW, else NONE
"""

import re
from dataclasses import dataclass, field

from moneytext.extraction.patterns import (
    CLEARING_CORP_KEYWORDS,
    INVESTMENT_KEYWORDS,
    INVESTMENT_PLATFORM_KEYWORDS,
    INVESTMENT_TYPE_KEYWORDS,
    MANDATE_KEYWORDS,
    RETIREMENT_KEYWORDS,
    keyword_pattern,
)
from moneytext.schemas.classification import ClassificationResult
from moneytext.schemas.enums import ConfidenceLevel, InvestmentType

HIGH_THRESHOLD = 50
MEDIUM_THRESHOLD = 30
LOW_THRESHOLD = 15


@dataclass(frozen=True)
class KeywordTier:
    """A weighted group of upper-case keywords."""

    label: str
    weight: int
    keywords: tuple[str, ...]
    _patterns: tuple[tuple[str, re.Pattern[str]], ...] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        patterns = tuple((kw, keyword_pattern(kw)) for kw in self.keywords)
        object.__setattr__(self, "_patterns", patterns)

    def matches(self, upper_text: str) -> list[str]:
        """Return the tier's keywords found in ``upper_text``, in tier order."""
        return [kw for kw, pattern in self._patterns if pattern.search(upper_text)]

    def reason(self, matched: list[str]) -> str:
        return f"{self.label}: {', '.join(matched)}"


MANDATE_TIER = KeywordTier("Mandate/AutoDebit", 40, MANDATE_KEYWORDS)
CLEARING_TIER = KeywordTier("Market Infrastructure", 35, CLEARING_CORP_KEYWORDS)
VOCABULARY_TIER = KeywordTier("Investment Terms", 25, INVESTMENT_KEYWORDS)
PLATFORM_TIER = KeywordTier("Investment Platform", 20, INVESTMENT_PLATFORM_KEYWORDS)
RETIREMENT_TIER = KeywordTier("Retirement Scheme", 30, RETIREMENT_KEYWORDS)


def confidence_for_score(score: int) -> ConfidenceLevel:
    if score >= HIGH_THRESHOLD:
        return ConfidenceLevel.HIGH
    if score >= MEDIUM_THRESHOLD:
        return ConfidenceLevel.MEDIUM
    if score >= LOW_THRESHOLD:
        return ConfidenceLevel.LOW
    return ConfidenceLevel.NONE


def _vocabulary_type(matched: list[str]) -> InvestmentType:
    found = set(matched)
    for type_name, group in INVESTMENT_TYPE_KEYWORDS:
        if found & group:
            return InvestmentType(type_name)
    return InvestmentType.OTHER


def _retirement_type(matched: list[str]) -> InvestmentType:
    if any("PPF" in kw or "PROVIDENT" in kw for kw in matched):
        return InvestmentType.PPF
    return InvestmentType.NPS


class InvestmentClassifier:
    """Scores free text for investment intent.

    Stateless; a single shared instance is safe to use from many threads.

    Example:
        >>> result = InvestmentClassifier().classify("NACH debit UMRN HDFC000123 for SIP")
        >>> result.confidence, result.investment_type
        (<ConfidenceLevel.HIGH: 'HIGH'>, <InvestmentType.SIP: 'SIP'>)
    """

    def classify(self, text: str) -> ClassificationResult:
        """Classify a message, narration or subject+body string.

        Args:
            text: Any transaction text (case-insensitive)

        Returns:
            ClassificationResult with score, confidence, sub-type and reasons
        """
        upper = (text or "").upper()
        score = 0
        reasons: list[str] = []
        investment_type: InvestmentType | None = None

        matched = MANDATE_TIER.matches(upper)
        if matched:
            score += MANDATE_TIER.weight
            reasons.append(MANDATE_TIER.reason(matched))
            investment_type = InvestmentType.SIP

        matched = CLEARING_TIER.matches(upper)
        if matched:
            score += CLEARING_TIER.weight
            reasons.append(CLEARING_TIER.reason(matched))
            investment_type = investment_type or InvestmentType.MUTUAL_FUND

        matched = VOCABULARY_TIER.matches(upper)
        if matched:
            score += VOCABULARY_TIER.weight
            reasons.append(VOCABULARY_TIER.reason(matched))
            investment_type = investment_type or _vocabulary_type(matched)

        matched = PLATFORM_TIER.matches(upper)
        if matched:
            score += PLATFORM_TIER.weight
            reasons.append(PLATFORM_TIER.reason(matched))
            investment_type = investment_type or InvestmentType.MUTUAL_FUND

        matched = RETIREMENT_TIER.matches(upper)
        if matched:
            score += RETIREMENT_TIER.weight
            reasons.append(RETIREMENT_TIER.reason(matched))
            investment_type = _retirement_type(matched)

        confidence = confidence_for_score(score)
        is_investment = confidence >= ConfidenceLevel.MEDIUM

        return ClassificationResult(
            is_investment=is_investment,
            confidence=confidence,
            investment_type=(investment_type or InvestmentType.OTHER) if is_investment else None,
            reasons=reasons,
            score=score,
        )


_classifier = InvestmentClassifier()


def classify(text: str) -> ClassificationResult:
    """Classify ``text`` with the shared classifier instance."""
    return _classifier.classify(text)
