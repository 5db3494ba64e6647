import dataclasses
import logging
from threading import Lock
from typing import Dict, Iterable, List, Optional

from aggregator import Aggregator
from detectors import DetectionEngine
from filter_options import FilterOptions
from filter_types import SEVERITY_NONE, FilterResult
from karaoke import KaraokeTransliterator
from language_router import LangdetectClassifier, LanguageClassifier, LanguageRouter
from swear_words import SwearWordData
from text_normalizer import fold_case
from word_index import WordIndex

logger = logging.getLogger(__name__)

# ==================== CONSTANTS ====================
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Sentinel: "use langdetect"; None means heuristic only
DEFAULT_CLASSIFIER = object()


def configure_logging(level: int = logging.INFO, fmt: str = DEFAULT_FORMAT) -> logging.Logger:
    """Attach one stream handler with the common format to the root logger."""
    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt))
    root.addHandler(handler)
    return root


# ==================== MAIN FILTER CLASS ====================
class SwearFilter:
    """Thai and English profanity filter.

    Each `check` classifies the text's script, runs the detectors that fit
    it and reduces their candidates to one `FilterResult`. The instance
    keeps the word index, the current options and a small result cache
    that every mutation clears.
    """

    def __init__(
        self,
        options: Optional[FilterOptions] = None,
        data: Optional[SwearWordData] = None,
        classifier: Optional[LanguageClassifier] = DEFAULT_CLASSIFIER,
        **overrides,
    ):
        options = options or FilterOptions()
        if overrides:
            options = options.replace(**overrides)

        if classifier is DEFAULT_CLASSIFIER:
            classifier = LangdetectClassifier()

        self.options = options
        self.data = data or SwearWordData.default()
        self.router = LanguageRouter(classifier)

        self.transliterator = KaraokeTransliterator(common_english=options.common_english_words)
        self.index = WordIndex(
            self.data,
            detect_transliteration=options.detect_transliteration,
            check_leetspeak=options.check_leetspeak,
            transliterator=self.transliterator,
        )
        self.index.add_words(options.custom_bad_words)

        self.engine = DetectionEngine(self.index, options, self.transliterator)
        self.aggregator = Aggregator(options, self.index)

        self.message_cache: Dict[str, FilterResult] = {}
        self.cache_max_size = 1000
        self.cache_lock = Lock()

    # ==================== CACHE ====================

    def _get_cached_result(self, message: str) -> Optional[FilterResult]:
        with self.cache_lock:
            result = self.message_cache.get(message)
        if result is None:
            return None
        return dataclasses.replace(result, matches=list(result.matches))

    def _cache_message_result(self, message: str, result: FilterResult):
        stored = dataclasses.replace(result, matches=list(result.matches))
        with self.cache_lock:
            while self.message_cache and len(self.message_cache) >= self.cache_max_size:
                self.message_cache.pop(next(iter(self.message_cache)), None)
            self.message_cache[message] = stored

    def clear_cache(self):
        with self.cache_lock:
            self.message_cache.clear()

    # ==================== CHECKING ====================

    def check(self, text: Optional[str]) -> FilterResult:
        if text is None or not text.strip():
            return FilterResult(
                is_clean=True,
                matches=[],
                cleaned_text=text if self.options.censoring else None,
                severity=SEVERITY_NONE,
                confidence=1.0,
                language=None,
            )

        cached = self._get_cached_result(text)
        if cached is not None:
            return cached

        plan = self.router.plan(text, self.options)
        raw = self.engine.run(text, plan)
        result = self.aggregator.aggregate(text, raw, plan.language)

        if not result.is_clean:
            logger.debug("Flagged %d match(es), severity %s", len(result.matches), result.severity)

        self._cache_message_result(text, result)
        return result

    def contains_profanity(self, text: Optional[str]) -> bool:
        return not self.check(text).is_clean

    def censor(self, text: Optional[str]) -> Optional[str]:
        """Censored text, or `text` unchanged when censoring is off."""
        result = self.check(text)
        return text if result.cleaned_text is None else result.cleaned_text

    def check_many(self, texts: Iterable[str]) -> Dict[str, FilterResult]:
        """Check a batch of messages; repeated messages are checked once."""
        return {text: self.check(text) for text in texts}

    # ==================== MUTATIONS ====================

    def _set_options(self, options: FilterOptions):
        self.options = options
        self.engine.options = options
        self.aggregator.options = options
        self.transliterator.common_english = set(options.common_english_words)
        self.clear_cache()

    def add_custom_word(self, word: str, severity: Optional[str] = None):
        word = (word or '').strip()
        if not word:
            return
        self.index.add_word(word, severity)
        custom = self.options.custom_bad_words
        if word not in custom:
            self._set_options(self.options.replace(custom_bad_words=custom + (word,)))
        else:
            self.clear_cache()

    def remove_custom_word(self, word: str):
        if word not in self.index:
            return
        self.index.remove_word(word)
        custom = tuple(w for w in self.options.custom_bad_words if w != word)
        self._set_options(self.options.replace(custom_bad_words=custom))

    def add_whitelist_word(self, word: str):
        folded = fold_case((word or '').strip())
        if not folded or folded in self.aggregator.whitelist:
            return
        self._set_options(self.options.replace(
            whitelist_words=self.options.whitelist_words + (folded,)))
        logger.info("Whitelisted %r", folded)

    def remove_whitelist_word(self, word: str):
        folded = fold_case((word or '').strip())
        kept = tuple(w for w in self.options.whitelist_words if fold_case(w) != folded)
        if kept != self.options.whitelist_words:
            self._set_options(self.options.replace(whitelist_words=kept))
            logger.info("Removed %r from whitelist", folded)

    def add_ignore_word(self, word: str):
        word = (word or '').strip()
        if not word or word in self.options.ignore_list:
            return
        self._set_options(self.options.replace(ignore_list=self.options.ignore_list + (word,)))
        logger.info("Ignoring %r", word)

    def remove_ignore_word(self, word: str):
        kept = tuple(w for w in self.options.ignore_list if w != word)
        if kept != self.options.ignore_list:
            self._set_options(self.options.replace(ignore_list=kept))
            logger.info("No longer ignoring %r", word)

    def update_options(self, **changes) -> FilterOptions:
        """Apply option changes in place, keeping the word index in step."""
        new = self.options.replace(**changes)
        old_custom = set(self.options.custom_bad_words)
        new_custom = set(new.custom_bad_words)

        builtin = set(self.data.thai_words) | set(self.data.english_words)
        for word in old_custom - new_custom:
            if word not in builtin:
                self.index.remove_word(word)
        self.index.add_words(w for w in new.custom_bad_words if w not in old_custom)
        self.index.configure(new.detect_transliteration, new.check_leetspeak)

        self._set_options(new)
        logger.info("Updated filter options: %s", ", ".join(sorted(changes)))
        return new

    @property
    def words(self) -> List[str]:
        return list(self.index)


if __name__ == "__main__":
    configure_logging()

    test_messages = [
        "สวัสดีครับ",
        "เหี้ย",
        "This is fucking bullshit!",
        "sh1t happens",
        "fuuuuck",
        "มึง kuay",
        "หีบใส่ของ",
    ]

    sf = SwearFilter()
    for msg, result in sf.check_many(test_messages).items():
        print(f"{msg:28} => {'BLOCKED' if not result.is_clean else 'ALLOWED'} "
              f"[{result.severity}] {result.cleaned_text}")
