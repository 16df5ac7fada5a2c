"""
Static reference tables for the symptom analysis rules.

Everything here is read-only for the lifetime of the process. The rules never
touch these module constants directly; they go through a ``KnowledgeBase``
instance, so tests and callers can inject a different one.
"""
from types import MappingProxyType
from typing import Iterator, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .models import HealthRecommendation, RecommendationType


class ConditionEvidence(BaseModel):
    """Candidate conditions for one symptom, with a parallel tuple of weights."""

    model_config = ConfigDict(frozen=True)

    conditions: Tuple[str, ...]
    weights: Tuple[float, ...]

    @field_validator("weights")
    @classmethod
    def validate_weights(cls, v: Tuple[float, ...]):
        for w in v:
            if not 0.0 <= w <= 1.0:
                raise ValueError(f"weight {w} outside 0..1")
        return v

    @model_validator(mode="after")
    def validate_parallel(self):
        if len(self.conditions) != len(self.weights):
            raise ValueError("conditions and weights must have the same length")
        return self

    def pairs(self) -> Iterator[Tuple[str, float]]:
        return zip(self.conditions, self.weights)


EVIDENCE_TABLE: Mapping[str, ConditionEvidence] = MappingProxyType({
    "fever": ConditionEvidence(
        conditions=("Common Cold", "Flu", "COVID-19", "Bacterial Infection"),
        weights=(0.3, 0.4, 0.3, 0.2),
    ),
    "cough": ConditionEvidence(
        conditions=("Common Cold", "Flu", "COVID-19", "Bronchitis", "Pneumonia"),
        weights=(0.4, 0.3, 0.4, 0.3, 0.2),
    ),
    "headache": ConditionEvidence(
        conditions=("Tension Headache", "Migraine", "Flu", "Dehydration", "Stress"),
        weights=(0.5, 0.4, 0.2, 0.3, 0.4),
    ),
    "sore throat": ConditionEvidence(
        conditions=("Common Cold", "Strep Throat", "Flu", "Viral Pharyngitis"),
        weights=(0.4, 0.3, 0.2, 0.4),
    ),
    "shortness of breath": ConditionEvidence(
        conditions=("Asthma", "Pneumonia", "Heart Condition", "Anxiety", "COVID-19"),
        weights=(0.4, 0.3, 0.2, 0.3, 0.3),
    ),
    "chest pain": ConditionEvidence(
        conditions=("Heart Condition", "Muscle Strain", "Anxiety", "Pneumonia"),
        weights=(0.3, 0.4, 0.3, 0.2),
    ),
    "nausea": ConditionEvidence(
        conditions=("Food Poisoning", "Gastroenteritis", "Migraine", "Pregnancy"),
        weights=(0.4, 0.4, 0.2, 0.3),
    ),
    "fatigue": ConditionEvidence(
        conditions=("Flu", "Anemia", "Depression", "Sleep Disorder", "Thyroid Issues"),
        weights=(0.3, 0.2, 0.3, 0.4, 0.2),
    ),
    "dizziness": ConditionEvidence(
        conditions=("Low Blood Pressure", "Dehydration", "Inner Ear Problem", "Anemia"),
        weights=(0.3, 0.4, 0.3, 0.2),
    ),
    "abdominal pain": ConditionEvidence(
        conditions=("Gastroenteritis", "Appendicitis", "Food Poisoning", "IBS"),
        weights=(0.4, 0.2, 0.3, 0.3),
    ),
})

EMERGENCY_PHRASES: Tuple[str, ...] = (
    "severe chest pain",
    "difficulty breathing",
    "severe abdominal pain",
    "loss of consciousness",
    "severe bleeding",
    "signs of stroke",
    "severe allergic reaction",
)

GENERIC_DESCRIPTION = "A medical condition that may require attention"

CONDITION_DESCRIPTIONS: Mapping[str, str] = MappingProxyType({
    "Common Cold": "A viral infection affecting the upper respiratory tract",
    "Flu": "Influenza - a viral infection that attacks the respiratory system",
    "COVID-19": "A respiratory illness caused by the SARS-CoV-2 virus",
    "Tension Headache": "The most common type of headache, often stress-related",
    "Migraine": "A neurological condition causing severe headaches",
    "Strep Throat": "A bacterial infection causing throat pain and inflammation",
    "Asthma": "A respiratory condition causing breathing difficulties",
    "Heart Condition": "Various conditions affecting heart function",
    "Gastroenteritis": "Inflammation of the stomach and intestines",
})

HIGH_URGENCY_CONDITIONS: Tuple[str, ...] = ("Heart Condition", "Pneumonia", "Appendicitis")
MODERATE_URGENCY_CONDITIONS: Tuple[str, ...] = ("Strep Throat", "Bronchitis", "COVID-19")

CONDITION_RECOMMENDATIONS: Mapping[str, Tuple[HealthRecommendation, ...]] = MappingProxyType({
    "Common Cold": (
        HealthRecommendation(
            type=RecommendationType.LIFESTYLE,
            title="Cold Care",
            description="Rest, drink warm fluids, and consider over-the-counter cold medications for symptom relief.",
            priority=2,
        ),
    ),
    "Flu": (
        HealthRecommendation(
            type=RecommendationType.MEDICAL,
            title="Flu Management",
            description="Consider antiviral medications if within 48 hours of symptom onset. Rest and stay hydrated.",
            priority=3,
        ),
    ),
    "COVID-19": (
        HealthRecommendation(
            type=RecommendationType.MEDICAL,
            title="COVID-19 Protocol",
            description="Isolate yourself, get tested, and monitor symptoms. Seek medical care if breathing difficulties develop.",
            priority=4,
        ),
    ),
})

# Symptom picker catalogue for the intake screen
COMMON_SYMPTOMS: Tuple[str, ...] = (
    "Headache",
    "Fever",
    "Cough",
    "Sore throat",
    "Fatigue",
    "Nausea",
    "Dizziness",
    "Chest pain",
    "Shortness of breath",
    "Abdominal pain",
    "Joint pain",
    "Muscle aches",
    "Skin rash",
    "Loss of appetite",
)

DURATION_OPTIONS: Mapping[str, str] = MappingProxyType({
    "less-than-day": "Less than a day",
    "1-3-days": "1-3 days",
    "4-7-days": "4-7 days",
    "1-2-weeks": "1-2 weeks",
    "more-than-2-weeks": "More than 2 weeks",
})
DEFAULT_DURATION = "1-3-days"


class KnowledgeBase(BaseModel):
    """Bundle of lookup tables consumed by the scoring rules."""

    model_config = ConfigDict(frozen=True)

    evidence: Mapping[str, ConditionEvidence]
    emergency_phrases: Tuple[str, ...] = EMERGENCY_PHRASES
    descriptions: Mapping[str, str] = Field(default_factory=dict, validate_default=True)
    high_urgency: Tuple[str, ...] = HIGH_URGENCY_CONDITIONS
    moderate_urgency: Tuple[str, ...] = MODERATE_URGENCY_CONDITIONS
    recommendations: Mapping[str, Tuple[HealthRecommendation, ...]] = Field(default_factory=dict, validate_default=True)
    generic_description: str = GENERIC_DESCRIPTION

    @field_validator("evidence")
    @classmethod
    def validate_evidence_keys(cls, v: Mapping[str, ConditionEvidence]):
        # symptom names are matched case-insensitively
        return MappingProxyType({name.strip().lower(): entry for name, entry in v.items()})

    @field_validator("descriptions", "recommendations")
    @classmethod
    def validate_read_only(cls, v: Mapping):
        return MappingProxyType(dict(v))

    @field_validator("emergency_phrases")
    @classmethod
    def validate_phrases(cls, v: Tuple[str, ...]):
        return tuple(p.lower() for p in v)

    def evidence_for(self, symptom_name: str) -> Optional[ConditionEvidence]:
        return self.evidence.get(symptom_name.strip().lower())

    def describe(self, condition: str) -> str:
        return self.descriptions.get(condition, self.generic_description)

    def recommendations_for(self, condition: str) -> Tuple[HealthRecommendation, ...]:
        return self.recommendations.get(condition, ())

    def extended(
        self,
        evidence: Optional[Mapping[str, ConditionEvidence]] = None,
        descriptions: Optional[Mapping[str, str]] = None,
        recommendations: Optional[Mapping[str, Tuple[HealthRecommendation, ...]]] = None,
    ) -> "KnowledgeBase":
        """Return a new knowledge base with extra entries merged over this one."""
        return self.model_validate({
            **self.model_dump(exclude={"evidence", "descriptions", "recommendations"}),
            "evidence": {**self.evidence, **dict(evidence or {})},
            "descriptions": {**self.descriptions, **dict(descriptions or {})},
            "recommendations": {**self.recommendations, **dict(recommendations or {})},
        })


DEFAULT_KNOWLEDGE = KnowledgeBase(
    evidence=EVIDENCE_TABLE,
    descriptions=CONDITION_DESCRIPTIONS,
    recommendations=CONDITION_RECOMMENDATIONS,
)
