"""
Document classifier tests - keyword table, content fallback, factory.
"""

import pytest

from transitdocs.classifiers import (
    ClassificationResult,
    KeywordClassifier,
    RandomClassifier,
    create_classifier,
)
from transitdocs.classifiers.keyword import CATEGORY_PROFILES, DEFAULT_CATEGORY


class TestKeywordClassifier:
    @pytest.mark.parametrize("filename,expected", [
        ("vendor_invoice.pdf", "finance"),
        ("Budget-2025.xlsx", "finance"),
        ("brake_inspection_car205.docx", "maintenance"),
        ("MJC-2025-894.png", "maintenance"),
        ("platform_safety_circular.pdf", "safety"),
        ("staff_training_manual.pdf", "hr"),
    ])
    def test_filename_keywords(self, filename, expected):
        assert KeywordClassifier().classify(filename, b"").type == expected

    def test_content_used_when_name_is_silent(self):
        result = KeywordClassifier().classify("scan_0001.pdf", b"INVOICE No. 4471\nPayment due")
        assert result.type == "finance"

    def test_filename_wins_over_content(self):
        result = KeywordClassifier().classify("incident_report.txt", b"invoice payment receipt")
        assert result.type == "safety"

    def test_default_category(self):
        result = KeywordClassifier().classify("scan_0001.pdf", b"\x00\x01\x02")
        assert result.type == DEFAULT_CATEGORY

    def test_result_shape(self):
        result = KeywordClassifier().classify("vendor_invoice.pdf", b"")
        assert isinstance(result, ClassificationResult)
        assert result.classification == "Vendor Invoice"
        assert result.department == "Finance Department"
        assert result.summary.startswith("vendor_invoice.pdf - ")
        assert set(result.processing_info()) == {"classification", "summary", "department"}


class TestRandomClassifier:
    def test_seeded_is_repeatable(self):
        names = [f"file{i}.pdf" for i in range(10)]
        first = [RandomClassifier(seed=7).classify(n, b"").type for n in names]
        second = [RandomClassifier(seed=7).classify(n, b"").type for n in names]
        assert first == second

    def test_picks_known_category(self):
        result = RandomClassifier(seed=1).classify("anything.bin", b"")
        assert result.type in CATEGORY_PROFILES


class TestFactory:
    def test_keyword(self):
        assert isinstance(create_classifier("keyword"), KeywordClassifier)

    def test_random_case_insensitive(self):
        assert isinstance(create_classifier("Random", seed=3), RandomClassifier)

    def test_env_default(self, monkeypatch):
        monkeypatch.setenv("CLASSIFIER", "random")
        assert isinstance(create_classifier(), RandomClassifier)

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown document classifier"):
            create_classifier("neural")
