"""Filter configuration: a validated, immutable snapshot per filter instance."""
import dataclasses
import logging
import os
from dataclasses import dataclass
from typing import FrozenSet, Iterable, Optional, Tuple

from dotenv import load_dotenv

from filter_types import LANGUAGE_ALIASES, LATIN, NATIVE, ConfigurationError
from swear_words import (
    COMMON_ENGLISH_WORDS,
    COMMON_SAFE_WORDS,
    DEFAULT_IGNORE_LIST,
    load_word_list,
    split_words,
)

logger = logging.getLogger(__name__)

__all__ = ["FilterOptions", "ConfigurationError", "normalize_languages"]

TRUE_VALUES = ("1", "true", "yes", "on")


def normalize_languages(languages) -> Tuple[str, ...]:
    """Map names and aliases ("thai", "en", ...) to script tags, keeping order."""
    if isinstance(languages, str):
        languages = split_words(languages)

    normalized = []
    for language in languages:
        tag = LANGUAGE_ALIASES.get(str(language).strip().lower())
        if tag is None:
            raise ConfigurationError(f"Unknown language {language!r}")
        if tag not in normalized:
            normalized.append(tag)
    return tuple(normalized)


def _words(values: Optional[Iterable[str]]) -> Tuple[str, ...]:
    if values is None:
        return ()
    if isinstance(values, str):
        values = split_words(values)
    return tuple(dict.fromkeys(v.strip() for v in values if v and v.strip()))


@dataclass(frozen=True)
class FilterOptions:
    languages: Tuple[str, ...] = (NATIVE, LATIN)
    detect_transliteration: bool = True
    edit_distance_threshold: float = 0.8
    token_similarity_threshold: float = 0.9
    custom_bad_words: Tuple[str, ...] = ()
    whitelist_words: Tuple[str, ...] = ()
    ignore_list: Tuple[str, ...] = DEFAULT_IGNORE_LIST
    censor_char: str = "*"
    check_variations: bool = True
    check_leetspeak: bool = True
    check_repeating_chars: bool = True
    max_repeating_chars: int = 2
    case_insensitive: bool = True
    common_words: FrozenSet[str] = frozenset(COMMON_SAFE_WORDS)
    common_english_words: FrozenSet[str] = frozenset(COMMON_ENGLISH_WORDS)

    def __post_init__(self):
        # frozen: normalized values go through object.__setattr__
        object.__setattr__(self, "languages", normalize_languages(self.languages))
        object.__setattr__(self, "custom_bad_words", _words(self.custom_bad_words))
        object.__setattr__(self, "whitelist_words", _words(self.whitelist_words))
        object.__setattr__(self, "ignore_list", _words(self.ignore_list))
        object.__setattr__(self, "censor_char", self.censor_char or "")
        object.__setattr__(self, "common_words",
                           frozenset(w.lower() for w in self.common_words))
        object.__setattr__(self, "common_english_words",
                           frozenset(w.lower() for w in self.common_english_words))

        for name in ("edit_distance_threshold", "token_similarity_threshold"):
            value = getattr(self, name)
            if not isinstance(value, (int, float)) or not 0 < value <= 1:
                raise ConfigurationError(f"{name} must be in (0, 1], got {value!r}")

        if self.max_repeating_chars < 0:
            raise ConfigurationError(
                f"max_repeating_chars must be >= 0, got {self.max_repeating_chars!r}")

    @property
    def censoring(self) -> bool:
        return bool(self.censor_char)

    def replace(self, **changes) -> "FilterOptions":
        """Copy with `changes` applied; unknown option names are rejected."""
        known = {f.name for f in dataclasses.fields(self)}
        unknown = sorted(set(changes) - known)
        if unknown:
            raise ConfigurationError(f"Unknown option(s): {', '.join(unknown)}")
        return dataclasses.replace(self, **changes)

    # ==================== ENVIRONMENT ====================

    @classmethod
    def from_env(cls, prefix: str = "SWEAR_FILTER_", **overrides) -> "FilterOptions":
        """Build options from environment variables (and a .env file, if present).

        Lists are comma or whitespace separated. Unset variables keep their
        defaults; keyword `overrides` win over the environment.
        """
        load_dotenv()

        def get(name):
            value = os.getenv(prefix + name)
            return value if value is not None and value.strip() != "" else None

        def get_float(name):
            value = get(name)
            if value is None:
                return None
            try:
                return float(value)
            except ValueError as e:
                raise ConfigurationError(f"{prefix}{name} is not a number: {value!r}") from e

        values = {}

        for name in ("detect_transliteration", "check_variations", "check_leetspeak",
                     "check_repeating_chars", "case_insensitive"):
            value = get(name.upper())
            if value is not None:
                values[name] = value.strip().lower() in TRUE_VALUES

        for name in ("edit_distance_threshold", "token_similarity_threshold"):
            value = get_float(name.upper())
            if value is not None:
                values[name] = value

        max_repeating = get_float("MAX_REPEATING_CHARS")
        if max_repeating is not None:
            values["max_repeating_chars"] = int(max_repeating)

        for name in ("languages", "custom_bad_words", "whitelist_words", "ignore_list"):
            value = get(name.upper())
            if value is not None:
                values[name] = split_words(value)

        censor_char = os.getenv(prefix + "CENSOR_CHAR")
        if censor_char is not None:
            values["censor_char"] = censor_char

        common_words_file = get("COMMON_WORDS_FILE")
        if common_words_file is not None:
            values["common_words"] = load_word_list(common_words_file, COMMON_SAFE_WORDS)

        values.update(overrides)
        logger.debug("Loaded filter options from environment: %s", sorted(values))
        return cls(**values)
