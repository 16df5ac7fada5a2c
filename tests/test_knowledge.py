"""Unit tests for the reference tables."""
import pytest
from pydantic import ValidationError

from symptom_engine.domain.knowledge import (
    DEFAULT_KNOWLEDGE,
    DURATION_OPTIONS,
    EVIDENCE_TABLE,
    ConditionEvidence,
    KnowledgeBase,
)
from symptom_engine.domain.models import HealthRecommendation, RecommendationType


class TestConditionEvidence:
    """Test evidence entry validation."""

    def test_pairs(self):
        entry = ConditionEvidence(conditions=("A", "B"), weights=(0.1, 0.9))
        assert list(entry.pairs()) == [("A", 0.1), ("B", 0.9)]

    def test_length_mismatch_rejected(self):
        with pytest.raises(ValidationError):
            ConditionEvidence(conditions=("A", "B"), weights=(0.1,))

    def test_weight_out_of_range_rejected(self):
        with pytest.raises(ValidationError):
            ConditionEvidence(conditions=("A",), weights=(1.5,))

    def test_default_table_is_consistent(self):
        for name, entry in EVIDENCE_TABLE.items():
            assert name == name.lower()
            assert len(entry.conditions) == len(entry.weights)


class TestKnowledgeBase:
    """Test lookups and immutability."""

    def test_evidence_lookup_case_insensitive(self):
        assert DEFAULT_KNOWLEDGE.evidence_for("  Fever ") == EVIDENCE_TABLE["fever"]
        assert DEFAULT_KNOWLEDGE.evidence_for("Shortness Of Breath") is not None

    def test_unknown_symptom(self):
        assert DEFAULT_KNOWLEDGE.evidence_for("unrecognizedxyz") is None

    def test_describe_fallback(self):
        assert DEFAULT_KNOWLEDGE.describe("Flu").startswith("Influenza")
        assert DEFAULT_KNOWLEDGE.describe("Made Up Condition") == "A medical condition that may require attention"

    def test_recommendations_for_unmapped(self):
        assert DEFAULT_KNOWLEDGE.recommendations_for("Migraine") == ()
        assert len(DEFAULT_KNOWLEDGE.recommendations_for("Flu")) == 1

    def test_emergency_phrases_lowercased(self):
        kb = KnowledgeBase(evidence={}, emergency_phrases=("Severe Headache",))
        assert kb.emergency_phrases == ("severe headache",)

    def test_evidence_keys_lowercased(self):
        kb = KnowledgeBase(evidence={"Back Pain": ConditionEvidence(conditions=("Muscle Strain",), weights=(0.5,))})
        assert kb.evidence_for("BACK PAIN") is not None
        assert list(kb.evidence) == ["back pain"]

    def test_frozen(self):
        with pytest.raises(ValidationError):
            DEFAULT_KNOWLEDGE.generic_description = "changed"

    def test_module_tables_read_only(self):
        with pytest.raises(TypeError):
            EVIDENCE_TABLE["rash"] = ConditionEvidence(conditions=("Eczema",), weights=(0.4,))
        with pytest.raises(TypeError):
            DURATION_OPTIONS["forever"] = "Forever"

    def test_shared_tables_read_only(self):
        """The default tables cannot be changed through the knowledge base."""
        with pytest.raises(TypeError):
            DEFAULT_KNOWLEDGE.evidence["rash"] = ConditionEvidence(conditions=("Eczema",), weights=(0.4,))
        with pytest.raises(TypeError):
            DEFAULT_KNOWLEDGE.descriptions["Flu"] = "changed"
        with pytest.raises(TypeError):
            DEFAULT_KNOWLEDGE.recommendations["Flu"] = ()

        assert DEFAULT_KNOWLEDGE.evidence_for("rash") is None
        assert DEFAULT_KNOWLEDGE.describe("Flu").startswith("Influenza")

    def test_injected_tables_read_only(self):
        source = {"Back Pain": ConditionEvidence(conditions=("Muscle Strain",), weights=(0.5,))}
        kb = KnowledgeBase(evidence=source, descriptions={"Muscle Strain": "Overworked muscle"})
        source["rash"] = ConditionEvidence(conditions=("Eczema",), weights=(0.4,))

        assert kb.evidence_for("rash") is None
        with pytest.raises(TypeError):
            kb.descriptions["Muscle Strain"] = "changed"
        assert kb.recommendations_for("Muscle Strain") == ()

    def test_extended_leaves_original_untouched(self):
        extra = {"Back Pain": ConditionEvidence(conditions=("Muscle Strain", "Kidney Stones"), weights=(0.5, 0.2))}
        advice = {
            "Kidney Stones": (
                HealthRecommendation(
                    type=RecommendationType.MEDICAL,
                    title="Kidney Check",
                    description="See a doctor about possible kidney stones.",
                    priority=3,
                ),
            ),
        }
        kb = DEFAULT_KNOWLEDGE.extended(
            evidence=extra,
            descriptions={"Kidney Stones": "Hard deposits formed in the kidneys"},
            recommendations=advice,
        )

        assert kb.evidence_for("back pain") is not None
        assert kb.evidence_for("fever") is not None
        assert kb.describe("Kidney Stones") == "Hard deposits formed in the kidneys"
        assert kb.recommendations_for("Kidney Stones")[0].title == "Kidney Check"
        assert kb.emergency_phrases == DEFAULT_KNOWLEDGE.emergency_phrases

        assert DEFAULT_KNOWLEDGE.evidence_for("back pain") is None
        assert DEFAULT_KNOWLEDGE.describe("Kidney Stones") == DEFAULT_KNOWLEDGE.generic_description
