"""Independent detectors that each turn text into raw `DetectedMatch` candidates."""
import logging
import re
from typing import Dict, Iterable, Iterator, List, Optional

from filter_types import (
    LATIN,
    METHOD_CONFIDENCE,
    METHOD_EDIT_DISTANCE,
    METHOD_EXACT,
    METHOD_LEETSPEAK,
    METHOD_REPEATING,
    METHOD_TOKEN_SIMILARITY,
    METHOD_TRANSLITERATION,
    METHOD_VARIANT,
    NATIVE,
    PHONETIC,
    DetectedMatch,
)
from fuzzy_match import edit_similarity, find_best_match
from karaoke import KaraokeTransliterator
from language_router import DetectionPlan
from text_normalizer import collapse_repeats, decode_leetspeak, fold_case, iter_tokens, iter_word_spans
from word_index import WordIndex

logger = logging.getLogger(__name__)

MIN_VARIANT_LENGTH = 3
MIN_LEET_TOKEN_LENGTH = 3
MIN_FUZZY_LENGTH = 4
MAX_FUZZY_LENGTH_DIFF = 1

_BOUNDARY_BEFORE = r'(?<![A-Za-z0-9_])'
_BOUNDARY_AFTER = r'(?![A-Za-z0-9_])'


class DetectionEngine:
    def __init__(self, index: WordIndex, options, transliterator: Optional[KaraokeTransliterator] = None):
        self.index = index
        self.options = options
        self.transliterator = transliterator or index.transliterator
        self._patterns: Dict[str, re.Pattern] = {}
        self._patterns_generation = index.generation

    # ==================== HELPERS ====================

    def _prepare(self, text: str) -> str:
        return fold_case(text) if self.options.case_insensitive else text

    def _needle(self, word: str) -> str:
        return fold_case(word) if self.options.case_insensitive else word

    def _boundary_pattern(self, needle: str) -> re.Pattern:
        if self._patterns_generation != self.index.generation:
            self._patterns = {}
            self._patterns_generation = self.index.generation
        patterns = self._patterns
        pattern = patterns.get(needle)
        if pattern is None:
            pattern = re.compile(_BOUNDARY_BEFORE + re.escape(needle) + _BOUNDARY_AFTER)
            patterns[needle] = pattern
        return pattern

    def _find(self, haystack: str, needle: str, whole_word: bool) -> Iterator[int]:
        """Start offsets of `needle`: whole ASCII words, or every substring hit."""
        if whole_word:
            for match in self._boundary_pattern(needle).finditer(haystack):
                yield match.start()
            return

        index = haystack.find(needle)
        while index != -1:
            yield index
            index = haystack.find(needle, index + 1)

    def _language(self, word: str) -> str:
        return NATIVE if self.index.is_thai(word) else LATIN

    def _match(self, text, word, position, length, method, confidence=None, language=None) -> DetectedMatch:
        return DetectedMatch(
            word=word,
            matched_text=text[position:position + length],
            position=position,
            length=length,
            method=method,
            confidence=METHOD_CONFIDENCE[method] if confidence is None else confidence,
            language=language or self._language(word),
        )

    def _lookup(self, words: Iterable[str]) -> Dict[str, str]:
        """Normalized form -> canonical word, first one wins."""
        lookup = {}
        for word in words:
            lookup.setdefault(self._needle(word), word)
        return lookup

    # ==================== DETECTORS ====================

    def detect_exact(self, text: str, words: Iterable[str]) -> List[DetectedMatch]:
        haystack = self._prepare(text)
        matches = []
        for word in words:
            needle = self._needle(word)
            whole_word = not self.index.is_thai(word)
            for position in self._find(haystack, needle, whole_word):
                matches.append(self._match(text, word, position, len(needle), METHOD_EXACT))
        return matches

    def detect_variants(self, text: str, words: Iterable[str]) -> List[DetectedMatch]:
        haystack = self._prepare(text)
        matches = []
        for word in words:
            whole_word = not self.index.is_thai(word)
            for variant in self.index.variants(word):
                if variant == word or len(variant) < MIN_VARIANT_LENGTH:
                    continue
                needle = self._needle(variant)
                for position in self._find(haystack, needle, whole_word):
                    matches.append(self._match(text, word, position, len(needle), METHOD_VARIANT))
        return matches

    def detect_leetspeak(self, text: str) -> List[DetectedMatch]:
        if LATIN not in self.options.languages:
            return []

        lookup = {}
        for word in self.index.english_words:
            lookup.setdefault(word.lower(), word)

        matches = []
        for token, start in iter_tokens(text):
            if len(token) < MIN_LEET_TOKEN_LENGTH:
                continue
            lowered = token.lower()
            for decoded in decode_leetspeak(token):
                if decoded == lowered or decoded not in lookup:
                    continue
                matches.append(self._match(text, lookup[decoded], start, len(token),
                                           METHOD_LEETSPEAK, language=LATIN))
                break
        return matches

    def detect_repeating(self, text: str, words: Iterable[str]) -> List[DetectedMatch]:
        lookup = self._lookup(words)
        matches = []
        for token, start in iter_tokens(text):
            collapsed = collapse_repeats(token)
            if collapsed == token:
                continue
            word = lookup.get(self._needle(collapsed))
            if word is not None:
                matches.append(self._match(text, word, start, len(token), METHOD_REPEATING))
        return matches

    def detect_fuzzy(self, text: str, words: Iterable[str]) -> List[DetectedMatch]:
        dictionary = [w for w in words if len(w) >= MIN_FUZZY_LENGTH]
        common = self.options.common_words
        matches = []

        for span, start in iter_word_spans(text):
            if len(span) < MIN_FUZZY_LENGTH or span.lower() in common:
                continue

            candidates = [w for w in dictionary if abs(len(w) - len(span)) <= MAX_FUZZY_LENGTH_DIFF]
            if not candidates:
                continue

            best = find_best_match(span, candidates)
            if best is not None and best.rating >= self.options.token_similarity_threshold:
                matches.append(self._match(text, best.target, start, len(span),
                                           METHOD_TOKEN_SIMILARITY, confidence=best.rating))

            lowered = span.lower()
            for candidate in candidates:
                similarity = edit_similarity(lowered, candidate.lower())
                if similarity >= self.options.edit_distance_threshold:
                    matches.append(self._match(text, candidate, start, len(span),
                                               METHOD_EDIT_DISTANCE, confidence=similarity))
        return matches

    def detect_transliteration(self, text: str, english_confidence: Optional[float] = None) -> List[DetectedMatch]:
        thai_words = self.index.thai_words
        if english_confidence is None:
            detections = self.transliterator.detect_words(text, thai_words)
        else:
            detections = self.transliterator.detect_with_language_context(
                text, thai_words, english_confidence)

        return [
            self._match(text, d.word, d.position, d.length, METHOD_TRANSLITERATION, language=PHONETIC)
            for d in detections
        ]

    # ==================== PLAN EXECUTION ====================

    def run(self, text: str, plan: DetectionPlan) -> List[DetectedMatch]:
        raw = []
        scanned = self.index.words_for(plan.dictionaries)
        active = self.index.words_for(self.options.languages)

        raw.extend(self.detect_exact(text, scanned))
        if plan.variants:
            raw.extend(self.detect_variants(text, scanned))
        if plan.leetspeak:
            raw.extend(self.detect_leetspeak(text))
        if plan.transliteration:
            raw.extend(self.detect_transliteration(text, plan.english_confidence))
        if plan.repeating:
            raw.extend(self.detect_repeating(text, active))
        if plan.fuzzy:
            raw.extend(self.detect_fuzzy(text, active))

        logger.debug("Detectors produced %d raw matches", len(raw))
        return raw
