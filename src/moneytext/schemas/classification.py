"""Investment classifier output (intermediate, never persisted)."""

from pydantic import BaseModel, ConfigDict, Field

from moneytext.schemas.enums import ConfidenceLevel, InvestmentType


class ClassificationResult(BaseModel):
    """Outcome of an investment classification with its audit trail.

    ``reasons`` holds one entry per keyword tier that fired, in tier order.
    """

    model_config = ConfigDict(frozen=True)

    is_investment: bool
    confidence: ConfidenceLevel
    investment_type: InvestmentType | None = None
    reasons: list[str] = Field(default_factory=list)
    score: int = Field(0, description="Additive tier score behind the confidence")
