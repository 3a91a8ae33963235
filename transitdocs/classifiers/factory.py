"""Factory for creating document classifiers."""

import os
from typing import Optional

from .base import BaseDocumentClassifier
from .keyword import KeywordClassifier
from .random_choice import RandomClassifier


def create_classifier(classifier_type: Optional[str] = None, seed: Optional[int] = None) -> BaseDocumentClassifier:
    """Create a document classifier based on configuration."""
    if classifier_type is None:
        classifier_type = os.getenv("CLASSIFIER", "keyword").lower()
    else:
        classifier_type = classifier_type.lower()

    if classifier_type == "keyword":
        return KeywordClassifier()

    elif classifier_type == "random":
        return RandomClassifier(seed=seed)

    else:
        raise ValueError(
            f"Unknown document classifier: {classifier_type}. Use 'keyword' or 'random'"
        )
