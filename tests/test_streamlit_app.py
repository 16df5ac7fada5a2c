"""Tests for the symptom checker screen helpers."""
from unittest.mock import patch

import pytest

from symptom_engine.domain.engine import analyze
from symptom_engine.domain.models import AnalysisInput, Symptom
from symptom_engine.presentation import streamlit_app
from symptom_engine.presentation.streamlit_app import (
    add_symptom,
    build_payload,
    format_result_markdown,
    remove_symptom,
)


class MockSessionState(dict):
    """Mock Streamlit session state."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.__dict__ = self


@pytest.fixture
def mock_streamlit():
    """Mock streamlit module."""
    with patch('symptom_engine.presentation.streamlit_app.st') as mock_st:
        mock_st.session_state = MockSessionState()
        yield mock_st


class TestSymptomList:
    """Test symptom list editing."""

    def test_add_symptom_defaults(self):
        symptoms = []
        assert add_symptom(symptoms, "Fever", "1")
        assert symptoms == [{"id": "1", "name": "Fever", "severity": 5, "duration": "1-3-days"}]

    def test_duplicate_names_rejected(self):
        symptoms = []
        add_symptom(symptoms, "Fever", "1")
        assert not add_symptom(symptoms, "  fever ", "2")
        assert len(symptoms) == 1

    def test_blank_name_rejected(self):
        symptoms = []
        assert not add_symptom(symptoms, "   ", "1")
        assert symptoms == []

    def test_remove_symptom(self):
        symptoms = []
        add_symptom(symptoms, "Fever", "1")
        add_symptom(symptoms, "Cough", "2")
        assert [s["name"] for s in remove_symptom(symptoms, "1")] == ["Cough"]


class TestBuildPayload:
    """Test request payload construction."""

    def test_optional_fields_omitted(self):
        payload = build_payload([{"id": "1", "name": "Fever", "severity": 5, "duration": "1-3-days"}], 4, "  ", None)
        assert payload == {
            "symptoms": [{"id": "1", "name": "Fever", "severity": 5, "duration": "1-3-days"}],
            "overallSeverity": 4,
        }

    def test_optional_fields_stripped(self):
        payload = build_payload([], 4, " dizzy at night ", " asthma ")
        assert payload["additionalInfo"] == "dizzy at night"
        assert payload["chronicConditions"] == "asthma"


class TestFormatResult:
    """Test result rendering."""

    def test_critical_result(self):
        result = analyze(AnalysisInput(
            symptoms=[Symptom(id="1", name="chest pain", severity=9, duration="less-than-day")],
            overall_severity=9,
        ))
        text = format_result_markdown(result)

        assert text.startswith("## 🚨 Critical Risk")
        assert "Seek immediate medical care" in text
        assert "Muscle Strain" in text
        assert "Seek Immediate Medical Attention" in text
        assert text.rstrip().endswith("Always consult a licensed healthcare professional.")

    def test_no_conditions(self):
        result = analyze(AnalysisInput(
            symptoms=[Symptom(id="1", name="unrecognizedxyz", severity=3, duration="1-3-days")],
            overall_severity=3,
        ))
        text = format_result_markdown(result)

        assert text.startswith("## ✅ Low Risk")
        assert "No specific condition matched your symptoms" in text
        assert "Seek immediate medical care" not in text
        assert "**Analysis confidence:**" in text


class TestSessionState:
    """Test session bootstrapping."""

    def test_init_session_state(self, mock_streamlit):
        streamlit_app._init_session_state()

        assert mock_streamlit.session_state.symptoms == []
        assert mock_streamlit.session_state.next_symptom_id == 1
        assert mock_streamlit.session_state.analysis_result is None

    def test_add_from_ui_increments_id(self, mock_streamlit):
        streamlit_app._init_session_state()
        streamlit_app._add_from_ui("Fever")
        streamlit_app._add_from_ui("fever")
        streamlit_app._add_from_ui("Cough")

        assert [s["id"] for s in mock_streamlit.session_state.symptoms] == ["1", "2"]
        assert mock_streamlit.session_state.next_symptom_id == 3
