"""Random classifier - picks one of the canned categories, ignoring the input."""

import random

from transitdocs.classifiers.base import BaseDocumentClassifier, ClassificationResult
from transitdocs.classifiers.keyword import CATEGORY_PROFILES, build_result


class RandomClassifier(BaseDocumentClassifier):
    """Demo stand-in for a real model. Pass ``seed`` for repeatable picks."""

    name = "random"

    def __init__(self, seed: int | None = None):
        self._rng = random.Random(seed)
        self._categories = tuple(CATEGORY_PROFILES)

    def classify(self, filename: str, content: bytes) -> ClassificationResult:
        return build_result(self._rng.choice(self._categories), filename)
