from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from symptom_engine.domain.models import AnalysisInput, AnalysisResult, Symptom


class UserProfile(BaseModel):
    age: Optional[int] = Field(None, ge=0, le=120)
    gender: Optional[str] = None


class AnalysisRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    symptoms: List[Symptom] = Field(..., min_length=1)
    overall_severity: int = Field(..., ge=1, le=10, strict=True, alias="overallSeverity")
    additional_info: Optional[str] = Field(None, alias="additionalInfo")
    chronic_conditions: Optional[str] = Field(None, alias="chronicConditions")
    user_profile: Optional[UserProfile] = Field(None, alias="userProfile")

    def to_input(self) -> AnalysisInput:
        profile = self.user_profile or UserProfile()
        return AnalysisInput(
            symptoms=self.symptoms,
            overall_severity=self.overall_severity,
            additional_info=self.additional_info,
            chronic_conditions=self.chronic_conditions,
            age=profile.age,
            gender=profile.gender,
        )


class AnalysisResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True, protected_namespaces=())

    success: bool = True
    analysis: AnalysisResult
    timestamp: str
    model_version: str = Field(..., alias="modelVersion")


class HealthStatus(BaseModel):
    status: str
    service: str
    version: str
    timestamp: str
