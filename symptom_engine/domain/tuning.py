from pydantic import BaseModel, ConfigDict, Field


class ScoringTuning(BaseModel):
    """
    Heuristic constants used by the scoring rules.

    None of these come from a statistical model; they are knobs. The caps are
    bounded so that neither a condition confidence nor the overall confidence
    can ever reach full certainty.
    """

    model_config = ConfigDict(frozen=True)

    max_conditions: int = Field(5, ge=1)
    max_recommendations: int = Field(6, ge=1)
    top_conditions_for_advice: int = Field(2, ge=0)

    condition_confidence_cap: float = Field(95.0, gt=0.0, le=95.0)
    confidence_cap: float = Field(0.95, gt=0.0, le=0.95)

    # confidence = (coverage + top condition + detail) / divisor
    coverage_full: float = Field(0.8, ge=0.0)
    coverage_full_at: int = Field(3, ge=1)
    coverage_per_symptom: float = Field(0.25, ge=0.0)
    detail_complete: float = Field(0.2, ge=0.0)
    detail_partial: float = Field(0.1, ge=0.0)
    confidence_divisor: float = Field(2.0, gt=0.0)

    emergency_severity: int = Field(9, ge=1, le=10)
    high_severity: float = Field(8, gt=0)
    moderate_severity: float = Field(6, gt=0)
    moderate_confidence: float = Field(70, gt=0)
    moderate_score: float = Field(0.6, gt=0)


DEFAULT_TUNING = ScoringTuning()
