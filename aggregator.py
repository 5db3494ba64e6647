"""Turns raw detector output into a final `FilterResult`."""
import logging
import re
from typing import List, Optional

from filter_types import (
    METHOD_PRECEDENCE,
    PHONETIC,
    NATIVE,
    SEVERITY_MILD,
    SEVERITY_MODERATE,
    SEVERITY_NONE,
    SEVERITY_SEVERE,
    DetectedMatch,
    FilterResult,
)
from language_router import LanguageResult
from text_normalizer import fold_case
from word_index import WordIndex

logger = logging.getLogger(__name__)

_PRECEDENCE = {method: rank for rank, method in enumerate(METHOD_PRECEDENCE)}


class Aggregator:
    def __init__(self, options, index: WordIndex):
        self.options = options
        self.index = index

    @property
    def whitelist(self):
        return {fold_case(w) for w in self.options.whitelist_words}

    # ==================== FILTERS ====================

    def filter_whitelisted(self, matches: List[DetectedMatch]) -> List[DetectedMatch]:
        whitelist = self.whitelist
        if not whitelist:
            return list(matches)
        return [
            m for m in matches
            if fold_case(m.word) not in whitelist and fold_case(m.matched_text) not in whitelist
        ]

    def filter_ignored(self, matches: List[DetectedMatch], text: str) -> List[DetectedMatch]:
        """Drop matches that sit entirely inside an occurrence of an ignored word."""
        regions = []
        for pattern in self.options.ignore_list:
            for found in re.finditer(re.escape(pattern), text, re.IGNORECASE):
                regions.append((found.start(), found.end()))

        if not regions:
            return list(matches)

        return [
            m for m in matches
            if not any(start <= m.position and m.end <= end for start, end in regions)
        ]

    def filter_by_language(self, matches: List[DetectedMatch]) -> List[DetectedMatch]:
        active = self.options.languages
        kept = []
        for m in matches:
            required = NATIVE if m.language == PHONETIC else m.language
            if required in active:
                kept.append(m)
        return kept

    def deduplicate(self, matches: List[DetectedMatch]) -> List[DetectedMatch]:
        """One match per span: highest confidence, then the stronger method."""
        ordered = sorted(
            matches,
            key=lambda m: (-m.confidence, _PRECEDENCE.get(m.method, len(_PRECEDENCE))),
        )
        seen = set()
        unique = []
        for m in ordered:
            if m.span_key in seen:
                continue
            seen.add(m.span_key)
            unique.append(m)
        return unique

    # ==================== SCORING ====================

    def severity(self, matches: List[DetectedMatch]) -> str:
        if not matches:
            return SEVERITY_NONE

        worst = SEVERITY_MILD
        for m in matches:
            tier = self.index.severity(m.word)
            if tier == SEVERITY_SEVERE:
                return SEVERITY_SEVERE
            if tier == SEVERITY_MODERATE:
                worst = SEVERITY_MODERATE
        return worst

    def confidence(self, matches: List[DetectedMatch]) -> float:
        if not matches:
            return 1.0
        return sum(m.confidence for m in matches) / len(matches)

    def censor(self, text: str, matches: List[DetectedMatch]) -> Optional[str]:
        """Mask every match span; the result has the same length as `text`."""
        char = self.options.censor_char
        if not char:
            return None

        censored = text
        for m in sorted(matches, key=lambda m: m.position, reverse=True):
            mask = (char * m.length)[:m.length]
            censored = censored[:m.position] + mask + censored[m.end:]
        return censored

    # ==================== PIPELINE ====================

    def aggregate(self, text: str, raw: List[DetectedMatch],
                  language: Optional[LanguageResult] = None) -> FilterResult:
        matches = self.filter_whitelisted(raw)
        matches = self.filter_ignored(matches, text)
        matches = self.filter_by_language(matches)
        matches = self.deduplicate(matches)

        logger.debug("Kept %d of %d raw matches", len(matches), len(raw))

        return FilterResult(
            is_clean=not matches,
            matches=matches,
            cleaned_text=self.censor(text, matches),
            severity=self.severity(matches),
            confidence=self.confidence(matches),
            language=language.primary if language is not None else None,
        )
