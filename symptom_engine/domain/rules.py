import logging
from typing import Dict, List, Optional, Sequence

from .knowledge import DEFAULT_KNOWLEDGE, KnowledgeBase
from .models import (
    HealthRecommendation,
    PredictedCondition,
    RecommendationType,
    RiskLevel,
    Symptom,
    Urgency,
)
from .tuning import DEFAULT_TUNING, ScoringTuning


logger = logging.getLogger(__name__)


EMERGENCY_CARE = HealthRecommendation(
    type=RecommendationType.EMERGENCY,
    title="Seek Immediate Medical Attention",
    description=(
        "Your symptoms may indicate a serious condition. "
        "Please visit the emergency room or call emergency services immediately."
    ),
    priority=5,
)

MEDICAL_CONSULTATION = HealthRecommendation(
    type=RecommendationType.MEDICAL,
    title="Schedule Medical Consultation",
    description=(
        "We recommend scheduling an appointment with your healthcare provider "
        "within 24-48 hours to discuss your symptoms."
    ),
    priority=4,
)

REST_AND_HYDRATION = HealthRecommendation(
    type=RecommendationType.LIFESTYLE,
    title="Rest and Hydration",
    description=(
        "Ensure adequate rest and maintain proper hydration. "
        "Avoid strenuous activities until symptoms improve."
    ),
    priority=2,
)

MONITOR_CHRONIC = HealthRecommendation(
    type=RecommendationType.FOLLOWUP,
    title="Monitor Chronic Conditions",
    description=(
        "Given your existing medical conditions, monitor your symptoms closely "
        "and consult with your regular healthcare provider."
    ),
    priority=3,
)

RISK_PHRASES = {
    RiskLevel.LOW: "low risk",
    RiskLevel.MODERATE: "moderate concern",
    RiskLevel.HIGH: "significant concern",
    RiskLevel.CRITICAL: "urgent attention needed",
}

NO_MATCH_PHRASE = "general symptoms"


def detect_emergency(
    symptoms: Sequence[Symptom],
    additional_info: Optional[str] = None,
    knowledge: KnowledgeBase = DEFAULT_KNOWLEDGE,
    tuning: ScoringTuning = DEFAULT_TUNING,
) -> bool:
    names = [s.name.lower() for s in symptoms]
    info_text = (additional_info or "").lower()

    for phrase in knowledge.emergency_phrases:
        if phrase in info_text or any(phrase in name for name in names):
            logger.debug("Emergency phrase matched: %s", phrase)
            return True

    return any(s.severity >= tuning.emergency_severity for s in symptoms)


def urgency_of(
    condition: str,
    accumulated_score: float,
    overall_severity: int,
    knowledge: KnowledgeBase = DEFAULT_KNOWLEDGE,
    tuning: ScoringTuning = DEFAULT_TUNING,
) -> Urgency:
    # CRITICAL is reserved for the overall risk tier
    if condition in knowledge.high_urgency or overall_severity >= tuning.high_severity:
        return Urgency.HIGH
    if condition in knowledge.moderate_urgency or accumulated_score >= tuning.moderate_score:
        return Urgency.MODERATE
    return Urgency.LOW


def score_conditions(
    symptoms: Sequence[Symptom],
    overall_severity: int,
    knowledge: KnowledgeBase = DEFAULT_KNOWLEDGE,
    tuning: ScoringTuning = DEFAULT_TUNING,
) -> List[PredictedCondition]:
    """
    Accumulate weighted evidence per candidate condition.

    Each matched symptom adds ``weight * severity / 10`` to every condition it
    lists, so corroborating symptoms add up. Unknown symptom names are skipped.
    The result keeps at most ``tuning.max_conditions`` entries ordered by
    descending confidence; equal confidences keep first-insertion order.
    """
    scores: Dict[str, float] = {}

    for symptom in symptoms:
        evidence = knowledge.evidence_for(symptom.name)
        if evidence is None:
            logger.debug("No evidence for symptom %r, ignoring", symptom.name)
            continue
        severity_multiplier = symptom.severity / 10
        for condition, weight in evidence.pairs():
            scores[condition] = scores.get(condition, 0.0) + weight * severity_multiplier

    conditions = [
        PredictedCondition(
            name=name,
            confidence=min(score * 100, tuning.condition_confidence_cap),
            description=knowledge.describe(name),
            urgency=urgency_of(name, score, overall_severity, knowledge, tuning),
        )
        for name, score in scores.items()
    ]
    conditions.sort(key=lambda c: c.confidence, reverse=True)
    return conditions[:tuning.max_conditions]


def mean_severity(symptoms: Sequence[Symptom]) -> float:
    if not symptoms:
        return 0.0
    return sum(s.severity for s in symptoms) / len(symptoms)


def classify_risk(
    symptoms: Sequence[Symptom],
    overall_severity: int,
    conditions: Sequence[PredictedCondition],
    has_emergency: bool,
    tuning: ScoringTuning = DEFAULT_TUNING,
) -> RiskLevel:
    if has_emergency:
        return RiskLevel.CRITICAL

    avg_severity = mean_severity(symptoms)
    has_high_urgency = any(c.urgency in (Urgency.HIGH, Urgency.CRITICAL) for c in conditions)
    if overall_severity >= tuning.high_severity or avg_severity >= tuning.high_severity or has_high_urgency:
        return RiskLevel.HIGH

    top_confidence = conditions[0].confidence if conditions else None
    if (
        overall_severity >= tuning.moderate_severity
        or avg_severity >= tuning.moderate_severity
        or (top_confidence is not None and top_confidence >= tuning.moderate_confidence)
    ):
        return RiskLevel.MODERATE
    return RiskLevel.LOW


def recommend(
    conditions: Sequence[PredictedCondition],
    risk_level: RiskLevel,
    chronic_conditions: Optional[str] = None,
    knowledge: KnowledgeBase = DEFAULT_KNOWLEDGE,
    tuning: ScoringTuning = DEFAULT_TUNING,
) -> List[HealthRecommendation]:
    recommendations: List[HealthRecommendation] = []

    if risk_level == RiskLevel.CRITICAL:
        recommendations.append(EMERGENCY_CARE)

    if risk_level in (RiskLevel.HIGH, RiskLevel.MODERATE):
        recommendations.append(MEDICAL_CONSULTATION)

    for condition in conditions[:tuning.top_conditions_for_advice]:
        recommendations.extend(knowledge.recommendations_for(condition.name))

    recommendations.append(REST_AND_HYDRATION)

    if chronic_conditions and chronic_conditions.strip():
        recommendations.append(MONITOR_CHRONIC)

    recommendations.sort(key=lambda r: r.priority, reverse=True)
    return recommendations[:tuning.max_recommendations]


def confidence_score(
    symptoms: Sequence[Symptom],
    conditions: Sequence[PredictedCondition],
    tuning: ScoringTuning = DEFAULT_TUNING,
) -> float:
    if not symptoms:
        return 0.0

    if len(symptoms) >= tuning.coverage_full_at:
        coverage = tuning.coverage_full
    else:
        coverage = len(symptoms) * tuning.coverage_per_symptom
    top_condition = conditions[0].confidence / 100 if conditions else 0.0
    if all(s.severity > 0 and s.duration for s in symptoms):
        detail = tuning.detail_complete
    else:
        detail = tuning.detail_partial

    return min((coverage + top_condition + detail) / tuning.confidence_divisor, tuning.confidence_cap)


def summarize(conditions: Sequence[PredictedCondition], risk_level: RiskLevel, symptom_count: int) -> str:
    top_condition = conditions[0].name if conditions else NO_MATCH_PHRASE
    risk_text = RISK_PHRASES[RiskLevel(risk_level)]
    return (
        f"Based on your {symptom_count} reported symptoms, the most likely condition appears to be "
        f"{top_condition}. This assessment indicates {risk_text}. Please review the recommendations "
        "below and consult with a healthcare provider as appropriate."
    )
