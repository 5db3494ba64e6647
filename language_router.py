"""Coarse script classification and the detection strategy it selects."""
import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Protocol, Tuple

from langdetect import DetectorFactory, LangDetectException, detect_langs

from filter_types import LATIN, MIXED, NATIVE, UNKNOWN

logger = logging.getLogger(__name__)

# langdetect is probabilistic; pin it so the same text routes the same way
DetectorFactory.seed = 0

THAI_CHAR = re.compile(r'[\u0E00-\u0E7F]')
LATIN_CHAR = re.compile(r'[a-zA-Z]')

MIN_DETECT_LENGTH = 10
HEURISTIC_TRUSTED = 0.9
RELIABLE_PROBABILITY = 0.8
KARAOKE_CONFIDENCE_CEILING = 0.8

LANGDETECT_CODES = {
    'th': NATIVE,
    'en': LATIN,
}


@dataclass
class LanguageResult:
    primary: str
    confidence: float
    details: List[Dict] = field(default_factory=list)
    is_reliable: bool = False


class LanguageClassifier(Protocol):
    def classify(self, text: str) -> LanguageResult:
        ...


# ==================== HEURISTIC ====================

def heuristic_classify(text: str) -> LanguageResult:
    """Classify by the share of Thai and Latin letters among non-space characters."""
    text = text or ''
    total = len(re.sub(r'\s+', '', text))
    if total == 0:
        return LanguageResult(UNKNOWN, 0.0, [], False)

    thai = len(THAI_CHAR.findall(text)) / total
    latin = len(LATIN_CHAR.findall(text)) / total

    if thai > 0.6:
        primary, confidence = NATIVE, min(thai, 0.95)
    elif latin > 0.6:
        primary, confidence = LATIN, min(latin, 0.95)
    elif thai > 0.2 and latin > 0.2:
        primary, confidence = MIXED, 0.7
    elif thai > latin and thai > 0.1:
        primary, confidence = NATIVE, 0.6
    elif latin > 0.1:
        primary, confidence = LATIN, 0.6
    else:
        primary, confidence = UNKNOWN, 0.3

    details = [
        {'code': 'th', 'percent': thai * 100},
        {'code': 'en', 'percent': latin * 100},
    ]
    return LanguageResult(primary, confidence, details, confidence > 0.7)


# ==================== LANGDETECT ====================

class LangdetectClassifier:
    """Heuristic for short or obvious text, langdetect for the rest."""

    def classify(self, text: str) -> LanguageResult:
        heuristic = heuristic_classify(text)
        if len(text.strip()) < MIN_DETECT_LENGTH or heuristic.confidence > HEURISTIC_TRUSTED:
            return heuristic

        try:
            languages = detect_langs(text)
        except LangDetectException as e:
            logger.debug("langdetect gave no answer (%s), using heuristic", e)
            return heuristic

        if not languages:
            return heuristic

        top = languages[0]
        primary = LANGDETECT_CODES.get(top.lang)
        if primary is None:
            primary = heuristic.primary if heuristic.primary in (NATIVE, LATIN) else UNKNOWN

        if heuristic.primary == MIXED and heuristic.confidence > 0.6:
            primary = MIXED

        reliable = top.prob >= RELIABLE_PROBABILITY
        if reliable:
            confidence = max(top.prob, heuristic.confidence)
        else:
            confidence = min(top.prob, heuristic.confidence)

        details = [{'code': lang.lang, 'percent': lang.prob * 100} for lang in languages]
        return LanguageResult(primary, confidence, details, reliable)


# ==================== ROUTING ====================

@dataclass(frozen=True)
class DetectionPlan:
    """Which detectors to run for one input.

    `dictionaries` feeds the exact and variant scans. Transliteration runs
    with the confidence gate when `english_confidence` is set.
    """
    language: LanguageResult
    dictionaries: Tuple[str, ...]
    variants: bool
    leetspeak: bool
    transliteration: bool
    english_confidence: Optional[float]
    repeating: bool
    fuzzy: bool = True


class LanguageRouter:
    def __init__(self, classifier: Optional[LanguageClassifier] = None):
        self.classifier = classifier

    def classify(self, text: str) -> LanguageResult:
        if self.classifier is None:
            return heuristic_classify(text)
        try:
            return self.classifier.classify(text)
        except Exception as e:
            logger.debug("Language classifier failed (%s: %s), using heuristic",
                         type(e).__name__, e)
            return heuristic_classify(text)

    def is_thai(self, text: str) -> bool:
        return self.classify(text).primary in (NATIVE, MIXED)

    def is_english(self, text: str) -> bool:
        return self.classify(text).primary in (LATIN, MIXED)

    def is_mixed(self, text: str) -> bool:
        return self.classify(text).primary == MIXED

    def should_use_karaoke(self, text: str) -> bool:
        result = self.classify(text)
        return (
            result.primary in (MIXED, UNKNOWN)
            or (result.primary == LATIN and result.confidence < 0.7)
        )

    def plan(self, text: str, options) -> DetectionPlan:
        language = self.classify(text)
        active = options.languages
        english_confidence = None

        if language.primary == NATIVE:
            dictionaries = (NATIVE,) if NATIVE in active else ()
            leetspeak = False
            transliteration = False
        elif language.primary == LATIN:
            dictionaries = (LATIN,) if LATIN in active else ()
            leetspeak = options.check_leetspeak and LATIN in active
            transliteration = (options.detect_transliteration
                               and language.confidence < KARAOKE_CONFIDENCE_CEILING)
            english_confidence = language.confidence
        else:
            dictionaries = tuple(active)
            leetspeak = options.check_leetspeak and LATIN in active
            transliteration = options.detect_transliteration and NATIVE in active

        plan = DetectionPlan(
            language=language,
            dictionaries=dictionaries,
            variants=options.check_variations and bool(dictionaries),
            leetspeak=leetspeak,
            transliteration=transliteration,
            english_confidence=english_confidence,
            repeating=options.check_repeating_chars,
        )
        logger.debug("Routed %s (%.2f): dictionaries=%s leetspeak=%s transliteration=%s",
                     language.primary, language.confidence, dictionaries,
                     leetspeak, transliteration)
        return plan
