"""Bad-word dictionaries and the variant spellings that trigger each word."""
import logging
from typing import Dict, Iterable, List, Optional, Tuple

from filter_types import LATIN, NATIVE, SEVERITY_MILD, SEVERITY_ORDER, ConfigurationError
from karaoke import KaraokeTransliterator
from swear_words import SwearWordData, is_thai_text
from text_normalizer import decode_leetspeak, generate_variations

logger = logging.getLogger(__name__)


class WordIndex:
    """Thai and Latin word sets plus a variant closure per word.

    Every mutation rebuilds the whole closure, so cost is linear in the
    dictionary size. Mutations are expected to be rare next to lookups.
    """

    def __init__(
        self,
        data: Optional[SwearWordData] = None,
        detect_transliteration: bool = True,
        check_leetspeak: bool = True,
        transliterator: Optional[KaraokeTransliterator] = None,
    ):
        self.data = data or SwearWordData.default()
        self.detect_transliteration = detect_transliteration
        self.check_leetspeak = check_leetspeak
        self.transliterator = transliterator or KaraokeTransliterator()

        # dicts keep insertion order so scans are deterministic
        self._thai: Dict[str, None] = {}
        self._english: Dict[str, None] = {}
        self._severity: Dict[str, str] = dict(self.data.severity)
        self._closure: Dict[str, Tuple[str, ...]] = {}
        # bumped on every rebuild so callers can drop derived caches
        self.generation = 0

        for word in self.data.thai_words:
            self._insert(word)
        for word in self.data.english_words:
            self._insert(word)
        self.rebuild()

    # ==================== LOOKUPS ====================

    @property
    def thai_words(self) -> List[str]:
        return list(self._thai)

    @property
    def english_words(self) -> List[str]:
        return list(self._english)

    def words_for(self, languages: Iterable[str]) -> List[str]:
        languages = set(languages)
        words = []
        if NATIVE in languages:
            words.extend(self._thai)
        if LATIN in languages:
            words.extend(self._english)
        return words

    def variants(self, word: str) -> Tuple[str, ...]:
        return self._closure.get(word, ())

    def severity(self, word: str) -> str:
        return self._severity.get(word, SEVERITY_MILD)

    def is_thai(self, word: str) -> bool:
        return word in self._thai

    def __contains__(self, word) -> bool:
        return word in self._thai or word in self._english

    def __len__(self) -> int:
        return len(self._thai) + len(self._english)

    def __iter__(self):
        yield from self._thai
        yield from self._english

    # ==================== MUTATIONS ====================

    def _insert(self, word: str):
        if is_thai_text(word):
            self._thai[word] = None
        else:
            self._english[word] = None

    def add_word(self, word: str, severity: Optional[str] = None):
        """Add `word` (or just update its severity when already present)."""
        word = (word or '').strip()
        if not word:
            return

        if severity is not None:
            if severity not in SEVERITY_ORDER:
                raise ConfigurationError(f"Unknown severity {severity!r}")
            self._severity[word] = severity

        if word in self:
            return

        self._insert(word)
        self.rebuild()
        logger.info("Added bad word %r (%s)", word, self.severity(word))

    def add_words(self, words: Iterable[str]):
        """Add several words with a single closure rebuild."""
        added = []
        for word in words:
            word = (word or '').strip()
            if word and word not in self:
                self._insert(word)
                added.append(word)
        if added:
            self.rebuild()
            logger.info("Added %d bad word(s): %s", len(added), ", ".join(added))

    def remove_word(self, word: str):
        if word not in self:
            return
        self._thai.pop(word, None)
        self._english.pop(word, None)
        self._closure.pop(word, None)
        self.rebuild()
        logger.info("Removed bad word %r", word)

    def configure(self, detect_transliteration: bool, check_leetspeak: bool):
        """Switch the closure-affecting flags, rebuilding only on change."""
        if (detect_transliteration == self.detect_transliteration
                and check_leetspeak == self.check_leetspeak):
            return
        self.detect_transliteration = detect_transliteration
        self.check_leetspeak = check_leetspeak
        self.rebuild()

    # ==================== CLOSURE ====================

    def _thai_closure(self, word: str) -> List[str]:
        variants = [word]
        variants.extend(self.data.thai_variations.get(word, ()))
        variants.extend(generate_variations(word))
        if self.detect_transliteration:
            variants.extend(self.data.karaoke_mapping.get(word, ()))
            variants.extend(self.transliterator.to_karaoke(word))
        return variants

    def _english_closure(self, word: str) -> List[str]:
        variants = [word]
        variants.extend(self.data.english_variations.get(word, ()))
        if self.check_leetspeak:
            variants.extend(decode_leetspeak(word))
        variants.extend(generate_variations(word))
        return variants

    def rebuild(self):
        closure = {}
        for word in self._thai:
            closure[word] = tuple(dict.fromkeys(self._thai_closure(word)))
        for word in self._english:
            closure[word] = tuple(dict.fromkeys(self._english_closure(word)))
        self._closure = closure
        self.generation += 1
        logger.debug("Rebuilt variant closure: %d words, %d variants",
                     len(closure), sum(len(v) for v in closure.values()))
