"""Categorization utilities."""

from moneytext.categorization.investment import InvestmentClassifier, classify
from moneytext.categorization.rules import categorize, match_category

__all__ = ["InvestmentClassifier", "categorize", "classify", "match_category"]
