"""String similarity measures used for fuzzy profanity matching.

The detectors pass their configured thresholds; the scanning helpers
at the bottom default to 0.8.
"""
import re
from collections import Counter
from typing import Iterable, List, NamedTuple, Optional

from nltk.metrics.distance import edit_distance, jaro_winkler_similarity as nltk_jaro_winkler
from nltk.util import bigrams

DEFAULT_FUZZY_THRESHOLD = 0.8
MAX_PREFIX_LENGTH = 4


class BestMatch(NamedTuple):
    target: str
    rating: float


class FuzzyMatch(NamedTuple):
    pattern: str
    position: int
    similarity: float
    matched_text: str


# ==================== EDIT DISTANCE ====================

def edit_similarity(a: str, b: str) -> float:
    """1 - levenshtein(a, b) / longest length; two empty strings are identical."""
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return 1.0 - edit_distance(a, b) / longest


def is_edit_match(a: str, b: str, threshold: float) -> bool:
    return edit_similarity(a.lower(), b.lower()) >= threshold


# ==================== DICE COEFFICIENT ====================

def _bigram_counts(text: str) -> Counter:
    return Counter(bigrams(text))


def token_similarity(a: str, b: str) -> float:
    """Dice coefficient over character bigrams, whitespace ignored."""
    first = ''.join(a.split())
    second = ''.join(b.split())

    if first == second:
        return 1.0
    if len(first) < 2 or len(second) < 2:
        return 0.0

    intersection = sum((_bigram_counts(first) & _bigram_counts(second)).values())
    return 2.0 * intersection / (len(first) - 1 + len(second) - 1)


def is_token_match(a: str, b: str, threshold: float) -> bool:
    return token_similarity(a.lower(), b.lower()) >= threshold


def find_best_match(word: str, candidates: Iterable[str]) -> Optional[BestMatch]:
    """Highest token similarity among `candidates`; the first one wins ties."""
    best = None
    lowered = word.lower()
    for candidate in candidates:
        rating = token_similarity(lowered, candidate.lower())
        if best is None or rating > best.rating:
            best = BestMatch(candidate, rating)
    return best


# ==================== JARO-WINKLER ====================

def jaro_winkler_similarity(a: str, b: str, prefix_weight: float = 0.1) -> float:
    """Case-insensitive Jaro-Winkler score with a common prefix of up to 4."""
    s1 = a.lower()
    s2 = b.lower()
    if s1 == s2:
        return 1.0
    if not s1 or not s2:
        return 0.0
    return nltk_jaro_winkler(s1, s2, p=prefix_weight, max_l=MAX_PREFIX_LENGTH)


# ==================== SCANNING ====================

def contains_fuzzy(text: str, pattern: str, threshold: float = DEFAULT_FUZZY_THRESHOLD) -> bool:
    """Whether `pattern` appears in `text` literally or within edit similarity.

    Tries a plain substring test, then every whitespace token, then sliding
    windows two characters longer than the pattern.
    """
    lowered = text.lower()
    needle = pattern.lower()
    if needle in lowered:
        return True

    if any(is_edit_match(token, needle, threshold) for token in lowered.split()):
        return True

    width = len(pattern) + 2
    for start in range(len(text) - len(pattern) + 3):
        if is_edit_match(text[start:start + width], pattern, threshold):
            return True
    return False


def find_all_fuzzy_matches(text: str, patterns: Iterable[str],
                           threshold: float = DEFAULT_FUZZY_THRESHOLD) -> List[FuzzyMatch]:
    """Every (token, pattern) pair whose edit similarity reaches `threshold`."""
    patterns = list(patterns)
    found = []
    for token in re.finditer(r'\S+', text):
        word = token.group().lower()
        for pattern in patterns:
            similarity = edit_similarity(word, pattern.lower())
            if similarity >= threshold:
                found.append(FuzzyMatch(pattern, token.start(), similarity, token.group()))
    return found
