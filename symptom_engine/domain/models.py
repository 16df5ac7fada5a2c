from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Urgency(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    CRITICAL = "critical"


# Same four tiers as Urgency, but for the whole assessment
RiskLevel = Urgency


class RecommendationType(str, Enum):
    LIFESTYLE = "lifestyle"
    MEDICAL = "medical"
    EMERGENCY = "emergency"
    FOLLOWUP = "followup"


class _ContractModel(BaseModel):
    """Snake_case attributes, camelCase keys on the wire."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


def _blank_to_none(v: Optional[str]) -> Optional[str]:
    if v is not None:
        v = v.strip()
        if len(v) == 0:
            return None
    return v


class Symptom(_ContractModel):
    id: str = ""
    name: str
    severity: int = Field(..., ge=1, le=10)
    duration: Optional[str] = Field(None, description="less-than-day/1-3-days/4-7-days/1-2-weeks/more-than-2-weeks")

    @field_validator("id", mode="before")
    @classmethod
    def validate_id(cls, v):
        return "" if v is None else str(v)

    @field_validator("duration")
    @classmethod
    def validate_duration(cls, v: Optional[str]):
        return _blank_to_none(v)


class AnalysisInput(_ContractModel):
    symptoms: List[Symptom] = []
    overall_severity: int = Field(..., ge=1, le=10, alias="overallSeverity")
    additional_info: Optional[str] = Field(None, alias="additionalInfo")
    chronic_conditions: Optional[str] = Field(None, alias="chronicConditions")
    # Reserved for future weighting, not read by the scoring rules
    age: Optional[int] = Field(None, ge=0, le=120)
    gender: Optional[str] = None

    @field_validator("additional_info", "chronic_conditions")
    @classmethod
    def validate_free_text(cls, v: Optional[str]):
        return _blank_to_none(v)


class PredictedCondition(_ContractModel):
    name: str
    confidence: float = Field(..., ge=0.0, le=95.0)
    description: str
    urgency: Urgency


class HealthRecommendation(_ContractModel):
    type: RecommendationType
    title: str
    description: str
    priority: int = Field(..., ge=1, le=5)


class AnalysisResult(_ContractModel):
    predicted_conditions: List[PredictedCondition] = Field(default_factory=list, alias="predictedConditions")
    risk_level: RiskLevel = Field(..., alias="riskLevel")
    recommendations: List[HealthRecommendation] = Field(default_factory=list)
    confidence_score: float = Field(..., ge=0.0, le=0.95, alias="confidenceScore")
    should_seek_immediate_care: bool = Field(..., alias="shouldSeekImmediateCare")
    summary: str
