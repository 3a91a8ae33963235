"""Pluggable document classification."""

from .base import BaseDocumentClassifier, ClassificationResult
from .factory import create_classifier
from .keyword import KeywordClassifier
from .random_choice import RandomClassifier

__all__ = [
    "BaseDocumentClassifier",
    "ClassificationResult",
    "KeywordClassifier",
    "RandomClassifier",
    "create_classifier",
]
