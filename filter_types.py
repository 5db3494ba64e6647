"""Result types shared by the detectors, the aggregator and the filter."""
from dataclasses import asdict, dataclass, field
from typing import Dict, List, Optional

# Script tags
NATIVE = "native"
LATIN = "latin"
PHONETIC = "phonetic"
MIXED = "mixed"
UNKNOWN = "unknown"

LANGUAGE_ALIASES = {
    "native": NATIVE,
    "thai": NATIVE,
    "th": NATIVE,
    "latin": LATIN,
    "english": LATIN,
    "en": LATIN,
}

# Detection methods
METHOD_EXACT = "exact"
METHOD_VARIANT = "variant"
METHOD_TRANSLITERATION = "transliteration"
METHOD_LEETSPEAK = "leetspeak"
METHOD_REPEATING = "repeating"
METHOD_EDIT_DISTANCE = "edit_distance"
METHOD_TOKEN_SIMILARITY = "token_similarity"

# Tie-break order when two methods report the same confidence for one span
METHOD_PRECEDENCE = (
    METHOD_EXACT,
    METHOD_VARIANT,
    METHOD_TRANSLITERATION,
    METHOD_LEETSPEAK,
    METHOD_REPEATING,
    METHOD_EDIT_DISTANCE,
    METHOD_TOKEN_SIMILARITY,
)

METHOD_CONFIDENCE = {
    METHOD_EXACT: 1.0,
    METHOD_VARIANT: 0.9,
    METHOD_TRANSLITERATION: 0.85,
    METHOD_LEETSPEAK: 0.85,
    METHOD_REPEATING: 0.8,
}

# Severity tiers
SEVERITY_NONE = "none"
SEVERITY_MILD = "mild"
SEVERITY_MODERATE = "moderate"
SEVERITY_SEVERE = "severe"

SEVERITY_ORDER = {
    SEVERITY_NONE: 0,
    SEVERITY_MILD: 1,
    SEVERITY_MODERATE: 2,
    SEVERITY_SEVERE: 3,
}


class ConfigurationError(ValueError):
    """Raised for invalid filter options or unreadable word data."""


@dataclass(frozen=True)
class DetectedMatch:
    """One candidate hit. `position`/`length` index the original text."""
    word: str
    matched_text: str
    position: int
    length: int
    method: str
    confidence: float
    language: str

    @property
    def end(self) -> int:
        return self.position + self.length

    @property
    def span_key(self):
        return (self.position, self.length)

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass
class FilterResult:
    is_clean: bool
    matches: List[DetectedMatch] = field(default_factory=list)
    cleaned_text: Optional[str] = None
    severity: str = SEVERITY_NONE
    confidence: float = 1.0
    language: Optional[str] = None

    @property
    def words(self) -> List[str]:
        """Canonical words matched, in result order, without repeats."""
        return list(dict.fromkeys(m.word for m in self.matches))

    def to_dict(self) -> Dict:
        return {
            "is_clean": self.is_clean,
            "matches": [m.to_dict() for m in self.matches],
            "cleaned_text": self.cleaned_text,
            "severity": self.severity,
            "confidence": self.confidence,
            "language": self.language,
        }
