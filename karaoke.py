"""Karaoke (Latin phonetic) spellings of Thai words and detection of them in text."""
import re
from dataclasses import dataclass
from itertools import islice, product
from typing import Dict, Iterable, Iterator, List, Optional

from swear_words import COMMON_ENGLISH_WORDS
from text_normalizer import fold_case

# ==================== CONSTANTS ====================
THAI_CONSONANTS: Dict[str, List[str]] = {
    'ก': ['k', 'g', 'kor', 'ko'],
    'ข': ['kh', 'k', 'kho', 'khor'],
    'ค': ['kh', 'k', 'kho', 'khor'],
    'ฆ': ['kh', 'k', 'kho', 'khor'],
    'ง': ['ng', 'n', 'ngo', 'ngoh'],
    'จ': ['j', 'ch', 'jo', 'chor'],
    'ฉ': ['ch', 'c', 'cho', 'chor'],
    'ช': ['ch', 'c', 'cho', 'chor'],
    'ซ': ['s', 'z', 'so', 'sor'],
    'ฌ': ['ch', 'c', 'cho', 'chor'],
    'ญ': ['y', 'n', 'yo', 'yor'],
    'ฎ': ['d', 't', 'do', 'dor'],
    'ฏ': ['t', 'd', 'to', 'tor'],
    'ฐ': ['th', 't', 'tho', 'thor'],
    'ฑ': ['th', 't', 'tho', 'thor'],
    'ฒ': ['th', 't', 'tho', 'thor'],
    'ณ': ['n', 'na', 'no', 'nor'],
    'ด': ['d', 't', 'do', 'dor'],
    'ต': ['t', 'd', 'to', 'tor'],
    'ถ': ['th', 't', 'tho', 'thor'],
    'ท': ['th', 't', 'tho', 'thor'],
    'ธ': ['th', 't', 'tho', 'thor'],
    'น': ['n', 'na', 'no', 'nor'],
    'บ': ['b', 'p', 'bo', 'bor'],
    'ป': ['p', 'b', 'po', 'por'],
    'ผ': ['ph', 'p', 'pho', 'phor'],
    'ฝ': ['f', 'p', 'fo', 'for'],
    'พ': ['ph', 'p', 'pho', 'phor'],
    'ฟ': ['f', 'p', 'fo', 'for'],
    'ภ': ['ph', 'p', 'pho', 'phor'],
    'ม': ['m', 'ma', 'mo', 'mor'],
    'ย': ['y', 'yo', 'yor'],
    'ร': ['r', 'ra', 'ro', 'ror'],
    'ล': ['l', 'la', 'lo', 'lor'],
    'ว': ['w', 'v', 'wo', 'vor'],
    'ศ': ['s', 'so', 'sor'],
    'ษ': ['s', 'so', 'sor'],
    'ส': ['s', 'so', 'sor'],
    'ห': ['h', 'ha', 'ho', 'hor'],
    'ฬ': ['l', 'la', 'lo', 'lor'],
    'อ': ['', 'o', 'or', 'aw'],
    'ฮ': ['h', 'ha', 'ho', 'hor'],
}

THAI_VOWELS: Dict[str, List[str]] = {
    'ะ': ['a', 'ah', 'ar'],
    'ั': ['a', 'u', 'ar'],
    'า': ['a', 'aa', 'ah', 'ar'],
    'ำ': ['am', 'um'],
    'ิ': ['i', 'ee', 'ih'],
    'ี': ['ee', 'i', 'ii'],
    'ึ': ['ue', 'u', 'eu'],
    'ื': ['ue', 'eu', 'u'],
    'ุ': ['u', 'oo', 'uh'],
    'ู': ['oo', 'u', 'uu'],
    'เ': ['e', 'ay', 'eh'],
    'แ': ['ae', 'a', 'aeh'],
    'โ': ['o', 'oh', 'or'],
    'ใ': ['ai', 'i', 'ay'],
    'ไ': ['ai', 'i', 'ay'],
    'ๅ': ['', 'r', 'ah'],
    '็': ['', 'e', 'eh'],
    '์': [''],
    'ๆ': [''],
}

# Hand-picked spellings for the words people romanize most often
COMMON_KARAOKE: Dict[str, List[str]] = {
    'ไอ้': ['ai', 'i', 'eye', 'aai', 'ay'],
    'อี': ['ee', 'e', 'ii', 'i'],
    'กู': ['gu', 'goo', 'ku', 'koo'],
    'มึง': ['mueng', 'mung', 'meung', 'muang'],
    'เหี้ย': ['hia', 'hea', 'hear', 'heya'],
    'เชี้ย': ['chia', 'chea', 'cheay', 'chiya', 'chay'],
    'เชี่ย': ['chia', 'chea', 'cheay', 'chiya', 'chay'],
    'ควย': ['kuay', 'kuai', 'kwai', 'kway', 'kuy'],
    'สัส': ['sus', 'sas', 'sat', 'sud'],
    'แม่ง': ['maeng', 'mang', 'meang', 'meng'],
    'เย็ด': ['yed', 'yet', 'yedd', 'yaed'],
    'หี': ['hee', 'he', 'hi', 'hii'],
    'แตด': ['taed', 'tad', 'tat', 'ted'],
}

MAX_COMBINATIONS = 20
SHORT_VARIANT_LENGTH = 2
CONTEXT_WINDOW = 30
CONFIDENT_ENGLISH = 0.8

THAI_CHAR = re.compile(r'[\u0E00-\u0E7F]')


@dataclass(frozen=True)
class KaraokeDetection:
    word: str
    karaoke: str
    position: int
    length: int


class KaraokeTransliterator:
    def __init__(
        self,
        common_words: Optional[Dict[str, List[str]]] = None,
        common_english: Optional[Iterable[str]] = None,
        max_combinations: int = MAX_COMBINATIONS,
        context_window: int = CONTEXT_WINDOW,
    ):
        self.common_words = dict(COMMON_KARAOKE if common_words is None else common_words)
        self.common_english = set(
            w.lower() for w in (COMMON_ENGLISH_WORDS if common_english is None else common_english)
        )
        self.max_combinations = max_combinations
        self.context_window = context_window
        self._cache: Dict[str, List[str]] = {}

    # ==================== EXPANSION ====================

    def _character_options(self, word: str) -> List[List[str]]:
        options = []
        for char in word:
            if char in THAI_CONSONANTS:
                options.append(THAI_CONSONANTS[char])
            elif char in THAI_VOWELS:
                options.append(THAI_VOWELS[char])
            else:
                options.append([char])
        return options

    def iter_character_variants(self, word: str) -> Iterator[str]:
        """Lazily spell `word` one character at a time, capped at `max_combinations`.

        Order follows the candidate lists, first character varying slowest.
        """
        combos = product(*self._character_options(word))
        for combo in islice(combos, self.max_combinations):
            yield ''.join(combo)

    def to_karaoke(self, word: str) -> List[str]:
        """Curated spellings first, then generated ones, without repeats."""
        if word in self._cache:
            return list(self._cache[word])

        variants = list(self.common_words.get(word, ()))
        variants.extend(self.iter_character_variants(word))
        result = list(dict.fromkeys(variants))
        self._cache[word] = result
        return list(result)

    def to_thai(self, karaoke: str) -> List[str]:
        """Thai words whose curated spellings include `karaoke`."""
        wanted = karaoke.lower()
        return [thai for thai, spellings in self.common_words.items()
                if any(s.lower() == wanted for s in spellings)]

    # ==================== MATCHING ====================

    def is_karaoke_match(self, text: str, word: str) -> bool:
        lowered = text.lower()
        for variant in self.to_karaoke(word):
            if variant.lower() in lowered:
                return True
            if re.sub(r'\s+', '', variant).lower() in lowered:
                return True
        return False

    def is_common_english(self, word: str) -> bool:
        return word.lower() in self.common_english

    def has_thai_context(self, text: str, position: int, window: Optional[int] = None) -> bool:
        window = self.context_window if window is None else window
        start = max(0, position - window)
        end = min(len(text), position + window)
        return bool(THAI_CHAR.search(text, start, end))

    def detect_words(self, text: str, words: Iterable[str]) -> List[KaraokeDetection]:
        """Find karaoke spellings of `words` in `text`.

        Spellings of one or two letters must stand alone as a token, and are
        dropped when they are also a common English word unless Thai text is
        nearby. Longer spellings match anywhere.
        """
        detections = []
        folded = fold_case(text)

        for word in words:
            for variant in self.to_karaoke(word):
                if not variant:
                    continue
                needle = variant.lower()

                if len(variant) <= SHORT_VARIANT_LENGTH:
                    pattern = re.compile(r'(?<![A-Za-z0-9_])' + re.escape(needle) + r'(?![A-Za-z0-9_])')
                    common = self.is_common_english(variant)
                    for match in pattern.finditer(folded):
                        if common and not self.has_thai_context(text, match.start()):
                            continue
                        detections.append(KaraokeDetection(word, variant, match.start(), len(needle)))
                else:
                    index = folded.find(needle)
                    while index != -1:
                        detections.append(KaraokeDetection(word, variant, index, len(needle)))
                        index = folded.find(needle, index + 1)

        return detections

    def detect_with_language_context(
        self, text: str, words: Iterable[str], english_confidence: float
    ) -> List[KaraokeDetection]:
        """Like `detect_words`, stricter when the text is confidently English."""
        detections = self.detect_words(text, words)
        if english_confidence > CONFIDENT_ENGLISH:
            detections = [
                d for d in detections
                if self.has_thai_context(text, d.position) or not self.is_common_english(d.karaoke)
            ]
        return detections
