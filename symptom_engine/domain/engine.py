import logging
from typing import Optional

from .knowledge import DEFAULT_KNOWLEDGE, KnowledgeBase
from .models import AnalysisInput, AnalysisResult, RiskLevel
from .rules import (
    classify_risk,
    confidence_score,
    detect_emergency,
    recommend,
    score_conditions,
    summarize,
)
from .tuning import DEFAULT_TUNING, ScoringTuning


logger = logging.getLogger(__name__)


class AnalysisEngine:
    """
    Stateless symptom analysis.

    Holds only the injected knowledge base and tuning, both immutable, so one
    instance can be shared between callers. ``analyze`` assumes the input was
    validated at the request boundary (non-empty symptoms, severities 1..10);
    an empty symptom list is tolerated but is a caller contract violation.
    """

    def __init__(self, knowledge: Optional[KnowledgeBase] = None, tuning: Optional[ScoringTuning] = None):
        self.knowledge = knowledge or DEFAULT_KNOWLEDGE
        self.tuning = tuning or DEFAULT_TUNING

    def analyze(self, data: AnalysisInput) -> AnalysisResult:
        symptoms = data.symptoms

        has_emergency = detect_emergency(symptoms, data.additional_info, self.knowledge, self.tuning)
        conditions = score_conditions(symptoms, data.overall_severity, self.knowledge, self.tuning)
        risk_level = classify_risk(symptoms, data.overall_severity, conditions, has_emergency, self.tuning)
        recommendations = recommend(conditions, risk_level, data.chronic_conditions, self.knowledge, self.tuning)

        logger.debug(
            "Analyzed %d symptoms: %d candidate conditions, risk=%s, emergency=%s",
            len(symptoms), len(conditions), risk_level.value, has_emergency,
        )

        return AnalysisResult(
            predicted_conditions=conditions,
            risk_level=risk_level,
            recommendations=recommendations,
            confidence_score=confidence_score(symptoms, conditions, self.tuning),
            should_seek_immediate_care=has_emergency or risk_level == RiskLevel.CRITICAL,
            summary=summarize(conditions, risk_level, len(symptoms)),
        )


_default_engine = AnalysisEngine()


def analyze(data: AnalysisInput) -> AnalysisResult:
    return _default_engine.analyze(data)
