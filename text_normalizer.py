"""Pure string transforms used to build variants and drive word-level matching."""
import re
from typing import Iterator, List, Tuple

# ==================== CONSTANTS ====================
THAI_VOWELS = [
    'ะ', 'ั', 'า', 'ำ', 'ิ', 'ี', 'ึ', 'ื', 'ุ', 'ู',
    'เ', 'แ', 'โ', 'ใ', 'ไ', '็', '์', 'ๆ',
]

THAI_TONE_MARKS = ['่', '้', '๊', '๋']

THAI_SPECIAL_CHARS = ['์', '็', 'ๆ', 'ฯ']

# letter -> tokens people type instead of it (ASCII art and spelled-out Thai letter names)
LEETSPEAK_MAP = {
    'a': ['4', '@', 'ค', 'เอ'],
    'b': ['8', '|3', 'บี'],
    'c': ['(', '<', '{', 'ซี'],
    'd': ['|)', '|]', 'ดี'],
    'e': ['3', '€', 'อี'],
    'f': ['|=', 'เอฟ'],
    'g': ['6', '9', 'จี'],
    'h': ['#', '|-|', 'เอช'],
    'i': ['1', '!', '|', 'ไอ'],
    'j': ['_|', 'เจ'],
    'k': ['|<', '|{', 'เค'],
    'l': ['|_', '1', 'แอล'],
    'm': ['|v|', '^^', 'เอ็ม'],
    'n': ['|\\|', '^', 'เอ็น'],
    'o': ['0', '()', 'โอ'],
    'p': ['|*', '|>', 'พี'],
    'q': ['9', 'คิว'],
    'r': ['|2', '|?', 'อาร์'],
    's': ['5', '$', 'เอส'],
    't': ['7', '+', 'ที'],
    'u': ['|_|', 'ยู'],
    'v': ['\\/', 'วี'],
    'w': ['\\/\\/', 'vv', 'ดับเบิลยู'],
    'x': ['><', 'เอ็กซ์'],
    'y': ['`/', 'วาย'],
    'z': ['2', 'แซด'],
}

MAX_LEET_VARIANTS = 128

_TONE_MARK_TABLE = str.maketrans('', '', ''.join(THAI_TONE_MARKS))
_VOWEL_TABLE = str.maketrans('', '', ''.join(THAI_VOWELS))
_SPECIAL_TABLE = str.maketrans('', '', ''.join(THAI_SPECIAL_CHARS))

THAI_RUN = re.compile(r'[\u0E00-\u0E7F]+')
LATIN_RUN = re.compile(r'[a-zA-Z]+')
MIXED_RUN = re.compile(r'[\u0E00-\u0E7Fa-zA-Z0-9]+')
WHITESPACE_TOKEN = re.compile(r'\S+')


# ==================== THAI NORMALIZATION ====================

def strip_tone_marks(text: str) -> str:
    return text.translate(_TONE_MARK_TABLE)


def strip_vowels(text: str) -> str:
    return text.translate(_VOWEL_TABLE)


def strip_special_chars(text: str) -> str:
    return text.translate(_SPECIAL_TABLE)


def normalize_thai_text(text: str) -> str:
    """Tone-stripped, whitespace-free, lower-cased form keeping only Thai/Latin/digits."""
    normalized = strip_tone_marks(text)
    normalized = re.sub(r'\s+', '', normalized)
    normalized = re.sub(r'[^\u0E00-\u0E7Fa-zA-Z0-9]', '', normalized)
    return normalized.lower()


# ==================== GENERIC NORMALIZATION ====================

def collapse_repeats(text: str, threshold: int = 3) -> str:
    """Replace any run of `threshold`+ identical characters with one ("fuuuuck" -> "fuck")."""
    return re.sub(r'(.)\1{' + str(threshold - 1) + r',}', r'\1', text, flags=re.DOTALL)


def fold_case(text: str) -> str:
    """Lower-case without changing the string length.

    str.lower() can expand some characters ('İ' -> 'i̇'); those are kept as-is
    so an index into the folded copy is also an index into `text`.
    """
    lowered = text.lower()
    if len(lowered) == len(text):
        return lowered
    return ''.join(c.lower() if len(c.lower()) == 1 else c for c in text)


def decode_leetspeak(text: str, max_variants: int = MAX_LEET_VARIANTS) -> List[str]:
    """Every string reachable by turning present leet tokens back into letters.

    The first element is always the lower-cased input. Each letter pass only
    touches tokens that actually occur in a working string; strings produced
    during a pass join the working set for the following letters.
    """
    lowered = text.lower()
    variations = [lowered]
    seen = {lowered}
    working = [lowered]

    for letter, substitutes in LEETSPEAK_MAP.items():
        produced = []
        for working_text in working:
            for substitute in substitutes:
                if substitute not in working_text:
                    continue
                decoded = working_text.replace(substitute, letter)
                if decoded in seen:
                    continue
                seen.add(decoded)
                variations.append(decoded)
                produced.append(decoded)
                if len(variations) >= max_variants:
                    return variations
        working.extend(produced)

    return variations


# ==================== WORD EXTRACTION ====================

def iter_word_spans(text: str) -> Iterator[Tuple[str, int]]:
    """Yield (word, start) for Thai runs, Latin runs and mixed alphanumeric runs."""
    seen = set()
    for pattern in (THAI_RUN, LATIN_RUN, MIXED_RUN):
        for match in pattern.finditer(text):
            key = (match.group(0), match.start())
            if key in seen:
                continue
            seen.add(key)
            yield key


def extract_words(text: str) -> List[str]:
    return list(dict.fromkeys(word for word, _ in iter_word_spans(text)))


def iter_tokens(text: str) -> Iterator[Tuple[str, int]]:
    """Whitespace-delimited tokens with their offsets."""
    for match in WHITESPACE_TOKEN.finditer(text):
        yield match.group(0), match.start()


# ==================== VARIANT GENERATION ====================

def generate_variations(word: str) -> List[str]:
    variations = [
        word,
        word.lower(),
        word.upper(),
        strip_tone_marks(word),
        normalize_thai_text(word),
        collapse_repeats(word),
    ]
    variations.extend(decode_leetspeak(word))

    # formatting evasions: "f u c k", "f.u.c.k"
    variations.append(' '.join(word))
    variations.append('.'.join(word))

    return list(dict.fromkeys(variations))
