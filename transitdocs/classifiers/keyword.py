"""Keyword classifier - matches file names (then leading text) against a static table."""

import logging
import re

from transitdocs.classifiers.base import BaseDocumentClassifier, ClassificationResult

logger = logging.getLogger(__name__)

# category -> (label, canned summary, routing department)
CATEGORY_PROFILES = {
    "maintenance": (
        "Maintenance Report",
        "Weekly brake system inspection completed successfully for Train Car 205",
        "Maintenance Department",
    ),
    "safety": (
        "Safety Circular",
        "Updated platform safety guidelines and emergency procedures",
        "Safety Department",
    ),
    "finance": (
        "Vendor Invoice",
        "Track supplies and materials procurement invoice for Q1 2025",
        "Finance Department",
    ),
    "hr": (
        "Training Manual",
        "Staff training documentation for operational procedures",
        "HR Department",
    ),
}

# Matched as token prefixes, so "invoice" also hits "invoices".
KEYWORDS = {
    "maintenance": ("maintenance", "inspection", "repair", "brake", "jobcard", "mjc", "signal", "rolling"),
    "safety": ("safety", "circular", "hazard", "incident", "emergency", "evacuation", "audit"),
    "finance": ("invoice", "budget", "finance", "procurement", "purchase", "vendor", "payment", "receipt"),
    "hr": ("training", "manual", "hr", "staff", "leave", "payroll", "recruitment"),
}

DEFAULT_CATEGORY = "maintenance"

# Only the head of the file is scanned when the name says nothing.
CONTENT_SCAN_BYTES = 4096

_TOKEN_RE = re.compile(r"[a-z0-9]+")


def build_result(category: str, filename: str) -> ClassificationResult:
    label, summary, department = CATEGORY_PROFILES[category]
    return ClassificationResult(
        classification=label,
        type=category,
        summary=f"{filename} - {summary}",
        department=department,
    )


def _score(text: str) -> dict[str, int]:
    tokens = _TOKEN_RE.findall(text.lower())
    return {
        category: sum(1 for tok in tokens for kw in words if tok.startswith(kw))
        for category, words in KEYWORDS.items()
    }


def _best(scores: dict[str, int]) -> str | None:
    # max() keeps the first of equal scores, i.e. KEYWORDS order.
    category = max(scores, key=scores.get)
    return category if scores[category] > 0 else None


class KeywordClassifier(BaseDocumentClassifier):
    """Deterministic classification by keyword hits."""

    name = "keyword"

    def classify(self, filename: str, content: bytes) -> ClassificationResult:
        category = _best(_score(filename))
        if category is None and content:
            head = content[:CONTENT_SCAN_BYTES].decode("utf-8", errors="ignore")
            category = _best(_score(head))
        if category is None:
            logger.debug("No keyword match for %r; defaulting to %s", filename, DEFAULT_CATEGORY)
            category = DEFAULT_CATEGORY
        return build_result(category, filename)
