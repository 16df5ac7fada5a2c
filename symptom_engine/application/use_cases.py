import logging
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from pydantic import ValidationError

from symptom_engine.application.schemas import AnalysisRequest, AnalysisResponse, HealthStatus
from symptom_engine.domain.engine import AnalysisEngine
from symptom_engine.infrastructure.config import Settings


logger = logging.getLogger(__name__)


SYMPTOMS_REQUIRED = "Symptoms are required"
INVALID_SYMPTOM = "Each symptom needs a name and a severity between 1 and 10"
INVALID_OVERALL_SEVERITY = "Overall severity must be between 1 and 10"
INVALID_REQUEST = "Invalid analysis request"


class InvalidAnalysisRequest(ValueError):
    def __init__(self, message: str, errors: Optional[list] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or []


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def describe_validation_error(error: ValidationError) -> str:
    """Pick the user-facing message for the first failing field."""
    for item in error.errors():
        loc = item.get("loc") or ()
        if not loc:
            continue
        if loc[0] == "symptoms":
            return SYMPTOMS_REQUIRED if len(loc) == 1 else INVALID_SYMPTOM
        if loc[0] in ("overallSeverity", "overall_severity"):
            return INVALID_OVERALL_SEVERITY
    return INVALID_REQUEST


class SymptomAnalysisUseCase:
    def __init__(
        self,
        engine: Optional[AnalysisEngine] = None,
        settings: Optional[Settings] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.settings = settings or Settings()
        self.engine = engine or AnalysisEngine(tuning=self.settings.tuning)
        self.clock = clock or _utc_now

    def analyze(self, payload: Any) -> AnalysisResponse:
        try:
            request = AnalysisRequest.model_validate(payload)
        except ValidationError as e:
            message = describe_validation_error(e)
            logger.warning("Rejected analysis request: %s (%d errors)", message, e.error_count())
            raise InvalidAnalysisRequest(message, errors=e.errors()) from e

        result = self.engine.analyze(request.to_input())
        if result.should_seek_immediate_care:
            logger.info("Analysis flagged immediate care (risk=%s)", result.risk_level.value)

        return AnalysisResponse(
            success=True,
            analysis=result,
            timestamp=self.clock().isoformat(),
            model_version=self.settings.model_version,
        )

    def health(self) -> HealthStatus:
        return HealthStatus(
            status="healthy",
            service=self.settings.service_name,
            version=self.settings.model_version,
            timestamp=self.clock().isoformat(),
        )
