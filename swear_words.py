"""Built-in swear word data and loaders.

The word lists, severity tiers and variant tables are plain data. A filter
takes them as a `SwearWordData` snapshot so deployments can ship their own
JSON file instead of the defaults below.
"""
import json
import logging
import os
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

from filter_types import ConfigurationError

logger = logging.getLogger(__name__)

THAI_RANGE = re.compile(r"[\u0E00-\u0E7F]")

# ==================== DEFAULT WORD LISTS ====================
THAI_SWEAR_WORDS = [
    'เหี้ย', 'สัส', 'ควย', 'เย็ด', 'แม่ง', 'กู', 'มึง', 'ไอ้', 'อีดอก', 'ระยำ',
    'หี', 'แตด', 'ห่า', 'ชิบหาย', 'แม่เย็ด', 'พ่อมึงตาย', 'ไอสัตว์', 'อีสัตว์',
    'เชี่ย', 'แม่มึง', 'พ่อมึง', 'ตอแหล', 'ส้นตีน', 'อีห่า', 'อีเหี้ย', 'ไอ้เหี้ย',
    'อีควาย', 'ไอ้ควาย', 'อีชั่ว', 'อีบ้า', 'ไอ้บ้า', 'อีโง่', 'ไอ้โง่', 'อีหน้าด้าน',
    'อีหน้าหี', 'ไอ้หน้าหี', 'อีตัว', 'กระหรี่', 'แรด', 'อีแรด', 'ดอกทอง', 'อีดอกทอง',
    'จัญไร', 'อีจัญไร', 'ขี้', 'ขี้เหร่', 'ขี้โกง', 'ขี้เก๊ก', 'เลว', 'อีเลว', 'สารเลว',
    'หน้าตัวเมีย', 'ตัวเมีย', 'หน้าผี', 'ผีน้อย', 'ไอ้ผี', 'อีผี', 'ทุเรศ', 'อีทุเรศ',
    'เปรต', 'อีเปรต', 'ไอ้เปรต', 'นรก', 'ตกนรก', 'หน้าผาก', 'หน้าโง่', 'โง่เง่า',
    'งั่ง', 'ปัญญาอ่อน', 'สมองน้อย', 'ไร้สมอง', 'ควายถึก', 'ควายเถิก', 'กาก',
    'ขยะ', 'ขยะสังคม', 'ลูกหี', 'ลูกหำ', 'ไอ้หำ', 'อีหำ', 'พ่อง', 'น่าเกลียด',
]

ENGLISH_SWEAR_WORDS = [
    'fuck', 'shit', 'ass', 'bitch', 'damn', 'hell', 'dick', 'cock', 'pussy',
    'bastard', 'asshole', 'cunt', 'piss', 'whore', 'slut', 'fag', 'faggot',
    'nigger', 'nigga', 'crap', 'bullshit', 'motherfucker', 'fucker', 'fucking',
    'shitty', 'bitchy', 'dickhead', 'jackass', 'dumbass', 'retard', 'retarded',
    'gay', 'homo', 'queer', 'dyke', 'lesbo', 'tranny', 'shemale', 'rape', 'rapist',
    'molest', 'molester', 'pedophile', 'pedo', 'kill', 'murder', 'suicide', 'die',
    'dead', 'death', 'hate', 'nazi', 'hitler', 'racist', 'racism', 'sexist',
    'sexism', 'terrorist', 'terrorism', 'bomb', 'wtf', 'omfg', 'lmao', 'lmfao',
    'stfu', 'gtfo', 'kys', 'kms', 'ffs', 'smh', 'af', 'asf', 'hoe', 'thot',
    'simp', 'incel', 'virgin', 'loser', 'noob', 'trash', 'garbage', 'toxic',
    'cancer', 'aids', 'autistic', 'autism', 'spastic', 'mongoloid', 'midget',
]

SEVERITY_MAP = {
    'เหี้ย': 'severe',
    'สัส': 'severe',
    'ควย': 'severe',
    'เย็ด': 'severe',
    'หี': 'severe',
    'แตด': 'severe',
    'fuck': 'severe',
    'fucking': 'severe',
    'shit': 'moderate',
    'ass': 'moderate',
    'bitch': 'moderate',
    'damn': 'mild',
    'hell': 'mild',
    'crap': 'mild',
    'bullshit': 'moderate',
    'แม่ง': 'moderate',
    'กู': 'moderate',
    'มึง': 'moderate',
    'ไอ้': 'moderate',
    'อี': 'moderate',
    'บ้า': 'mild',
    'โง่': 'mild',
    'เลว': 'mild',
}

ENGLISH_VARIATIONS = {
    'fuck': ['fck', 'fuk', 'fuq', 'fvck', 'f*ck', 'f**k', 'f***'],
    'shit': ['sh1t', 'sh!t', '$hit', 'sh*t', 'sh**', 's**t'],
    'ass': ['@ss', 'a$$', 'a**', '@$$'],
    'bitch': ['b1tch', 'b!tch', 'b*tch', 'bi+ch'],
    'damn': ['d@mn', 'darn', 'd*mn'],
    'dick': ['d1ck', 'd!ck', 'd*ck'],
    'pussy': ['pu$$y', 'p*ssy', 'pu**y'],
    'hell': ['h3ll', 'he!!', 'h*ll'],
}

THAI_VARIATIONS = {
    'เหี้ย': [
        'เหี้ยย', 'เหี่ย', 'เฮีย', 'เฮี้ย', 'เหิ่ย', 'เฮิ่ย', 'เหี๋ย', 'เหี๊ย',
        'เหีย', 'เหื่ย', 'เหือ่ย', 'เฮี่ย', 'เฮีย์', 'เฮ้ย', 'เฮียว', 'เฮี๊ย',
        'เหิ่ยเอ้ย', 'เฮิ่ยเอ้ย', 'เหี่ยเอ๊ย', 'เฮีย์เอ้ย', 'เหี่ยเอ่ย', 'เฮิ่ยย์',
        'เอ้ยเฮิ่ย', 'เฮิ่ยๆ', 'เฮิ่ยนะ', 'ไอเหิ่ย', 'ไอเฮีย', 'อีเหิ่ย', 'อีเฮีย',
    ],
    'สัส': [
        'สาส', 'สาด', 'สัด', 'สัสส์', 'ซัส', 'ซาส', 'ส๊าส', 'ส๋าส',
        'สสส', 'สะส', 'สุส', 'สึส', 'สฺส', 'ส@ส', 'ส*ส', 'ส.ั.ส',
    ],
    'ควย': [
        'คอย', 'ค.ว.ย', 'ค_ว_ย', 'กวย', 'กอย', 'ควาย', 'คุย',
        'ค9ย', 'คw"ย', 'ค๙ย', 'ควยยยยยย', 'ควยๆลๆ',
    ],
    'แม่ง': ['แม้ง', 'แม่งง', 'ม่ง', 'มง'],
    'กู': ['กุ', 'กรู', 'กูู', 'ก.ู', 'กู๋', 'กู๊', 'กu', 'gู', 'กูกู'],
    'มึง': ['มุง', 'มึ้ง', 'ม.ึ.ง', 'มรึง', 'มืง', 'มึ่ง', 'มeung', 'muึง'],
    'ไอ้': ['ไอ', 'อิ้', 'ไอ่', 'ไอ๊'],
    'อี': ['อิ', 'อี่', 'อี้', 'อื'],
    'หี': ['ฮี', 'ฮี่', 'ห.ี', 'หิ'],
    'บ้า': ['บ่า', 'บ๊า', 'บ้าา', 'บร้า'],
}

# Curated karaoke spellings per Thai word
KARAOKE_MAPPING = {
    'เหี้ย': ['hia', 'hea', 'hear', 'heya', 'hiya'],
    'สัส': ['sus', 'sas', 'sat', 'sud', 'sut'],
    'ควย': ['kuay', 'kuai', 'kwai', 'kway', 'quay', 'quai'],
    'เย็ด': ['yed', 'yet', 'yedd', 'yaed', 'yad'],
    'แม่ง': ['maeng', 'mang', 'meang', 'meng'],
    'กู': ['gu', 'goo', 'ku', 'koo', 'guu', 'kuu'],
    'มึง': ['mueng', 'mung', 'meung', 'muang'],
    'ไอ้': ['ai', 'i', 'eye', 'aai', 'ii'],
    'อี': ['ee', 'e', 'ii', 'i', 'eee'],
    'หี': ['hee', 'he', 'hi', 'hii', 'heee'],
    'แตด': ['taed', 'tad', 'tat', 'ted', 'taet'],
    'ห่า': ['ha', 'haa', 'har', 'hah'],
    'ชิบหาย': ['chibhai', 'shibhai', 'chiphai', 'shiphay'],
    'ตอแหล': ['torler', 'torlae', 'tohlae', 'tawlae'],
    'ส้นตีน': ['sontien', 'sontean', 'santien', 'santean'],
    'ควาย': ['kwai', 'kway', 'kuai', 'kuay', 'quai', 'quay'],
    'สัตว์': ['sat', 'sud', 'sut', 'satw', 'sutw'],
    'บ้า': ['ba', 'baa', 'bar', 'bah'],
    'โง่': ['ngo', 'ngoh', 'ngor', 'ngaw'],
    'เลว': ['leo', 'lew', 'laew', 'laeo'],
    'ขี้': ['kee', 'khee', 'ki', 'khi', 'khii'],
    'หน้า': ['na', 'naa', 'nar', 'nah', 'nha'],
    'ตัว': ['tua', 'toa', 'tuaa', 'dua', 'doa'],
    'ผี': ['pee', 'phee', 'pi', 'phi', 'phii'],
    'นรก': ['narok', 'nalok'],
    'พ่อ': ['por', 'phor', 'paw', 'phaw', 'po'],
    'แม่': ['mae', 'maa', 'ma', 'mea', 'meh'],
    'ลูก': ['luk', 'look', 'luuk', 'louk'],
    'หำ': ['hum', 'ham', 'haam', 'hahm'],
}

# Compounds that contain a profane syllable but are harmless words
DEFAULT_IGNORE_LIST = ('หีบ', 'สัสดี', 'หน้าหีบ', 'ตด')

# Tokens that fuzzy matching must never flag ("hello" vs "hell", "bill" vs "kill")
COMMON_SAFE_WORDS = (
    'hello', 'world', 'nice', 'good', 'great', 'well', 'help', 'call', 'will', 'tell',
    'sell', 'bell', 'hell', 'fill', 'bill', 'kill', 'mill', 'pill', 'till',
    'the', 'and', 'for', 'are', 'but', 'not', 'you', 'all', 'can', 'had', 'her',
    'was', 'one', 'our', 'out', 'day', 'get', 'has', 'him', 'his', 'how', 'its',
    'may', 'new', 'now', 'old', 'see', 'two', 'way', 'who', 'boy', 'did', 'man',
    'men', 'run', 'say', 'she', 'too', 'use',
)

# Short English words that collide with short karaoke spellings ("i", "he", "hi")
COMMON_ENGLISH_WORDS = (
    'i', 'a', 'is', 'to', 'in', 'it', 'of', 'me', 'my', 'we', 'he', 'be', 'do', 'go', 'no',
    'up', 'so', 'am', 'an', 'at', 'or', 'as', 'if', 'on', 'by', 'us', 'hi', 'ok', 'oh',
    'love', 'you', 'are', 'the', 'and', 'for', 'not', 'all', 'can', 'had', 'her', 'was',
    'one', 'our', 'out', 'day', 'get', 'has', 'him', 'his', 'how', 'its', 'may', 'new',
    'now', 'old', 'see', 'two', 'way', 'who', 'boy', 'did', 'man', 'men', 'run', 'say',
    'she', 'too', 'use', 'want', 'come', 'know', 'like', 'look', 'make', 'time', 'work',
    'chair', 'cheese', 'china', 'child', 'change', 'choose', 'check', 'cheap', 'cheer',
    'chief', 'church', 'chance', 'choice', 'charge',
)


# ==================== UTILITY FUNCTIONS ====================

def is_thai_text(text: str) -> bool:
    """True when any character falls in the Thai block."""
    return bool(THAI_RANGE.search(text or ''))


def split_words(input_text: str) -> List[str]:
    """Split input into words (handles both comma and space separated words)

    Examples:
        "word1 word2 word3" → ["word1", "word2", "word3"]
        "word1,word2,word3" → ["word1", "word2", "word3"]
        "หีบ, สัสดี" → ["หีบ", "สัสดี"]
    """
    text = (input_text or '').lower()
    # Keep letters, digits, Thai, commas and whitespace
    text = re.sub(r"[^a-z0-9\u0E00-\u0E7F,\s]", "", text)

    words = []
    for word in re.split(r"[,\s]+", text):
        word = word.strip()
        if word:
            words.append(word)

    # Remove duplicates while preserving order
    return list(dict.fromkeys(words))


def load_word_list(filename: Optional[str], fallback: Tuple[str, ...] = ()) -> Set[str]:
    """Load one word per line from `filename`, merged with `fallback`.

    A missing or unreadable file leaves only the fallback words.
    """
    words = set(w.lower() for w in fallback)
    if not filename:
        return words

    if not os.path.exists(filename):
        logger.warning("Word list %r not found, using built-in words only", filename)
        return words

    try:
        with open(filename, "r", encoding="utf-8") as f:
            for line in f:
                word = line.strip().lower()
                if word and not word.startswith("#"):
                    words.add(word)
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Failed to load word list %r: %s", filename, e)

    return words


# ==================== WORD DATA ====================

@dataclass(frozen=True)
class SwearWordData:
    """Static dictionary data a filter is built from."""
    thai_words: Tuple[str, ...] = tuple(THAI_SWEAR_WORDS)
    english_words: Tuple[str, ...] = tuple(ENGLISH_SWEAR_WORDS)
    severity: Dict[str, str] = field(default_factory=lambda: dict(SEVERITY_MAP))
    thai_variations: Dict[str, List[str]] = field(default_factory=lambda: dict(THAI_VARIATIONS))
    english_variations: Dict[str, List[str]] = field(default_factory=lambda: dict(ENGLISH_VARIATIONS))
    karaoke_mapping: Dict[str, List[str]] = field(default_factory=lambda: dict(KARAOKE_MAPPING))

    @classmethod
    def default(cls) -> "SwearWordData":
        return cls()

    @classmethod
    def from_dict(cls, data: Dict) -> "SwearWordData":
        """Build from a mapping; keys that are missing keep the built-in values."""
        defaults = cls()
        return cls(
            thai_words=tuple(data.get("thai_words", defaults.thai_words)),
            english_words=tuple(data.get("english_words", defaults.english_words)),
            severity=dict(data.get("severity", defaults.severity)),
            thai_variations=dict(data.get("thai_variations", defaults.thai_variations)),
            english_variations=dict(data.get("english_variations", defaults.english_variations)),
            karaoke_mapping=dict(data.get("karaoke_mapping", defaults.karaoke_mapping)),
        )

    def to_dict(self) -> Dict:
        return {
            "thai_words": list(self.thai_words),
            "english_words": list(self.english_words),
            "severity": dict(self.severity),
            "thai_variations": {k: list(v) for k, v in self.thai_variations.items()},
            "english_variations": {k: list(v) for k, v in self.english_variations.items()},
            "karaoke_mapping": {k: list(v) for k, v in self.karaoke_mapping.items()},
        }


def load_swear_data(path: str) -> SwearWordData:
    """Load swear data from a JSON file with the `SwearWordData` keys."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"JSON decode error in swear data {path!r}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Failed to load swear data {path!r}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigurationError(f"Swear data {path!r} must be a JSON object")

    data = SwearWordData.from_dict(raw)
    logger.info("Loaded swear data from %s (%d thai, %d english words)",
                path, len(data.thai_words), len(data.english_words))
    return data
