import logging
from typing import List, Optional

import streamlit as st

from symptom_engine.application.use_cases import InvalidAnalysisRequest, SymptomAnalysisUseCase
from symptom_engine.domain.knowledge import COMMON_SYMPTOMS, DEFAULT_DURATION, DURATION_OPTIONS
from symptom_engine.domain.models import AnalysisResult
from symptom_engine.infrastructure.config import Settings


logger = logging.getLogger(__name__)


DISCLAIMER = (
    "⚕️ **DISCLAIMER:** This is NOT medical advice and NOT a diagnosis. "
    "This assessment is for educational purposes only. "
    "If you experience emergency symptoms, seek immediate care (call local emergency number)."
)

RISK_BANNERS = {
    "critical": "## 🚨 Critical Risk",
    "high": "## ⚠️ High Risk",
    "moderate": "## ⏰ Moderate Risk",
    "low": "## ✅ Low Risk",
}

URGENCY_ICONS = {
    "critical": "🔴",
    "high": "🟠",
    "moderate": "🟡",
    "low": "🟢",
}


def add_symptom(symptoms: List[dict], name: str, symptom_id: str, severity: int = 5) -> bool:
    """Append a symptom unless one with the same name (any case) is already listed."""
    name = (name or "").strip()
    if not name:
        return False
    if any(s["name"].lower() == name.lower() for s in symptoms):
        return False
    symptoms.append({
        "id": symptom_id,
        "name": name,
        "severity": severity,
        "duration": DEFAULT_DURATION,
    })
    return True


def remove_symptom(symptoms: List[dict], symptom_id: str) -> List[dict]:
    return [s for s in symptoms if s["id"] != symptom_id]


def build_payload(
    symptoms: List[dict],
    overall_severity: int,
    additional_info: str = "",
    chronic_conditions: Optional[str] = None,
) -> dict:
    payload = {
        "symptoms": [dict(s) for s in symptoms],
        "overallSeverity": overall_severity,
    }
    if additional_info and additional_info.strip():
        payload["additionalInfo"] = additional_info.strip()
    if chronic_conditions and chronic_conditions.strip():
        payload["chronicConditions"] = chronic_conditions.strip()
    return payload


def format_result_markdown(result: AnalysisResult) -> str:
    """Render an analysis result the way the results page shows it."""
    risk = result.risk_level.value
    lines = [RISK_BANNERS[risk]]

    if result.should_seek_immediate_care:
        lines.append("**Seek immediate medical care by calling your local emergency number.**\n")

    lines.append(f"**Summary:** {result.summary}\n")
    lines.append(f"**Analysis confidence:** {result.confidence_score * 100:.0f}%\n")

    lines.append("## 🏥 Possible Conditions (NOT a diagnosis)")
    if result.predicted_conditions:
        for condition in result.predicted_conditions:
            icon = URGENCY_ICONS[condition.urgency.value]
            lines.append(f"**{icon} {condition.name}** (Confidence: {condition.confidence:.0f}%)")
            lines.append(f"- {condition.description}")
    else:
        lines.append("- No specific condition matched your symptoms")
    lines.append("")

    lines.append("## 📝 Recommendations")
    for i, rec in enumerate(result.recommendations, 1):
        lines.append(f"{i}. **{rec.title}** ({rec.type.value}): {rec.description}")
    lines.append("")

    lines.append("---")
    lines.append("⚠️ **Reminder:** This is NOT medical advice. Always consult a licensed healthcare professional.")
    return "\n".join(lines)


def _init_session_state():
    if "symptoms" not in st.session_state:
        st.session_state.symptoms = []
    if "next_symptom_id" not in st.session_state:
        st.session_state.next_symptom_id = 1
    if "analysis_result" not in st.session_state:
        st.session_state.analysis_result = None


def _add_from_ui(name: str) -> None:
    symptom_id = str(st.session_state.next_symptom_id)
    if add_symptom(st.session_state.symptoms, name, symptom_id):
        st.session_state.next_symptom_id += 1


def _render_sidebar(settings: Settings):
    st.sidebar.title("⚙️ Settings")
    st.sidebar.caption(f"**Model version:** {settings.model_version}")
    st.sidebar.divider()

    if st.sidebar.button("🔄 New Assessment", use_container_width=True):
        st.session_state.symptoms = []
        st.session_state.analysis_result = None
        st.rerun()


def _render_symptom_editor():
    st.markdown("### Select Your Symptoms")
    st.caption("Choose from common symptoms or add your own")

    columns = st.columns(3)
    for i, name in enumerate(COMMON_SYMPTOMS):
        if columns[i % 3].button(name, key=f"common-{name}"):
            _add_from_ui(name)

    custom = st.text_input("Add a custom symptom", placeholder="e.g., back pain")
    if st.button("➕ Add") and custom:
        _add_from_ui(custom)

    durations = list(DURATION_OPTIONS.keys())
    for symptom in list(st.session_state.symptoms):
        with st.expander(symptom["name"], expanded=True):
            symptom["severity"] = st.slider(
                "Severity (1-10)", 1, 10, symptom["severity"], key=f"severity-{symptom['id']}"
            )
            symptom["duration"] = st.selectbox(
                "Duration",
                durations,
                index=durations.index(symptom["duration"]) if symptom["duration"] in durations else 0,
                format_func=lambda value: DURATION_OPTIONS[value],
                key=f"duration-{symptom['id']}",
            )
            if st.button("Remove", key=f"remove-{symptom['id']}"):
                st.session_state.symptoms = remove_symptom(st.session_state.symptoms, symptom["id"])
                st.rerun()


def main():
    settings = Settings()
    logging.basicConfig(level=settings.log_level)

    st.set_page_config(
        page_title="Symptom Checker",
        page_icon="⚕️",
        layout="centered",
        initial_sidebar_state="expanded",
    )

    _init_session_state()
    _render_sidebar(settings)

    st.markdown("# 🏥 Symptom Checker")
    st.info(DISCLAIMER)

    _render_symptom_editor()

    overall_severity = st.slider("Overall Severity (1-10)", 1, 10, 5)
    additional_info = st.text_area("Additional information", placeholder="Anything else we should know?")
    chronic_conditions = None
    if st.checkbox("I have existing chronic conditions"):
        chronic_conditions = st.text_area("Chronic conditions", placeholder="e.g., diabetes, asthma")

    if st.button("🔬 Analyze Symptoms", type="primary"):
        if not st.session_state.symptoms:
            st.error("Please select at least one symptom")
        else:
            payload = build_payload(st.session_state.symptoms, overall_severity, additional_info, chronic_conditions)
            with st.spinner("🔬 Analyzing your symptoms..."):
                try:
                    usecase = SymptomAnalysisUseCase(settings=settings)
                    response = usecase.analyze(payload)
                    st.session_state.analysis_result = response.analysis
                except InvalidAnalysisRequest as e:
                    st.error(f"❌ {e.message}")
                except Exception as e:
                    logger.exception("Analysis failed: %s", e)
                    st.error("❌ **Failed to analyze symptoms.** Please try again.")

    if st.session_state.analysis_result is not None:
        st.markdown(format_result_markdown(st.session_state.analysis_result))


if __name__ == "__main__":
    main()
