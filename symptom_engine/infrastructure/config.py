import os
import logging

from pydantic import ValidationError

from symptom_engine.domain.tuning import ScoringTuning

try:
    import streamlit as st  # type: ignore
    _HAS_STREAMLIT = True
except Exception:
    _HAS_STREAMLIT = False

logger = logging.getLogger(__name__)


# env name -> ScoringTuning field
TUNING_OVERRIDES = {
    "MAX_CONDITIONS": "max_conditions",
    "MAX_RECOMMENDATIONS": "max_recommendations",
    "CONFIDENCE_CAP": "confidence_cap",
    "CONDITION_CONFIDENCE_CAP": "condition_confidence_cap",
}


def get_secret(name: str, default: str | None = None) -> str | None:
    # Prefer Streamlit secrets if available
    if _HAS_STREAMLIT:
        try:
            if name in st.secrets:
                return str(st.secrets.get(name))
        except Exception:
            # no secrets.toml outside a configured Streamlit app
            pass
    # Fallback to environment variables
    return os.environ.get(name, default)


class Settings:
    @property
    def log_level(self) -> str:
        return (get_secret("LOG_LEVEL", "INFO") or "INFO").upper()

    @property
    def model_version(self) -> str:
        return get_secret("MODEL_VERSION", "1.0.0") or "1.0.0"

    @property
    def service_name(self) -> str:
        return get_secret("SERVICE_NAME", "AI Health Analysis API") or "AI Health Analysis API"

    @property
    def tuning(self) -> ScoringTuning:
        overrides = {}
        for env_name, field_name in TUNING_OVERRIDES.items():
            raw = get_secret(env_name)
            if raw is None or not raw.strip():
                continue
            overrides[field_name] = raw.strip()

        try:
            return ScoringTuning(**overrides)
        except ValidationError as e:
            logger.warning("Ignoring invalid scoring overrides %s: %s", overrides, e)
            return ScoringTuning()
