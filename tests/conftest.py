from pathlib import Path
import sys

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from language_router import LanguageResult  # noqa: E402
from swear_filter import SwearFilter  # noqa: E402


class StubClassifier:
    """Always answers with the same classification."""

    def __init__(self, primary: str, confidence: float):
        self.primary = primary
        self.confidence = confidence
        self.calls = []

    def classify(self, text: str) -> LanguageResult:
        self.calls.append(text)
        return LanguageResult(self.primary, self.confidence, [], self.confidence > 0.7)


class ExplodingClassifier:
    def classify(self, text: str) -> LanguageResult:
        raise RuntimeError("classifier offline")


@pytest.fixture()
def default_filter() -> SwearFilter:
    return SwearFilter()


@pytest.fixture()
def heuristic_filter() -> SwearFilter:
    return SwearFilter(classifier=None)


@pytest.fixture()
def stub_classifier():
    return StubClassifier
