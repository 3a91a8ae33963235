"""Base classes for document classification."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class ClassificationResult:
    """
    Standard output of every classifier.

    ``type`` is the document category stored on the record; ``department``
    is where the document gets routed.
    """
    classification: str  # human label, e.g. "Vendor Invoice"
    type: str  # maintenance, safety, finance, hr
    summary: str
    department: str

    def processing_info(self) -> dict:
        return {
            "classification": self.classification,
            "summary": self.summary,
            "department": self.department,
        }


class BaseDocumentClassifier(ABC):
    """Abstract base class for document classifiers."""

    name = "base"

    @abstractmethod
    def classify(self, filename: str, content: bytes) -> ClassificationResult:
        """
        Classify an uploaded file.

        Args:
            filename: Original file name as sent by the client
            content: Raw file bytes

        Returns:
            ClassificationResult with category, summary and routing department
        """
