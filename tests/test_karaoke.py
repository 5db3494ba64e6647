from karaoke import KaraokeDetection, KaraokeTransliterator


def test_curated_spellings_come_first():
    t = KaraokeTransliterator()
    variants = t.to_karaoke("ควย")
    assert variants[:5] == ["kuay", "kuai", "kwai", "kway", "kuy"]
    assert len(variants) == len(set(variants))


def test_generated_spellings_follow_table_order():
    t = KaraokeTransliterator()
    variants = t.to_karaoke("กา")
    assert variants[:4] == ["ka", "kaa", "kah", "kar"]
    assert len(variants) == 16


def test_generation_is_capped():
    t = KaraokeTransliterator(common_words={})
    assert len(list(t.iter_character_variants("ชิบหาย"))) == 20
    assert len(t.to_karaoke("ชิบหาย")) <= 20

    small = KaraokeTransliterator(common_words={}, max_combinations=5)
    assert small.to_karaoke("ชิบหาย") == ["chibhay", "chibhayo", "chibhayor", "chibhaay", "chibhaayo"]


def test_unknown_characters_map_to_themselves():
    assert KaraokeTransliterator().to_karaoke("x") == ["x"]


def test_to_thai_reverse_lookup():
    assert KaraokeTransliterator().to_thai("KUAY") == ["ควย"]
    assert KaraokeTransliterator().to_thai("nothing") == []


def test_is_karaoke_match():
    t = KaraokeTransliterator()
    assert t.is_karaoke_match("you KUAY", "ควย")
    assert not t.is_karaoke_match("hello there", "ควย")


def test_detect_words_finds_long_spellings_anywhere():
    t = KaraokeTransliterator()
    detections = t.detect_words("ai kuay", ["ควย"])
    assert KaraokeDetection("ควย", "kuay", 3, 4) in detections


def test_short_common_spelling_needs_thai_context():
    t = KaraokeTransliterator()
    assert not [d for d in t.detect_words("hi there", ["หี"]) if d.karaoke == "hi"]

    near_thai = t.detect_words("hi มึง", ["หี"])
    assert any(d.karaoke == "hi" and d.position == 0 for d in near_thai)


def test_short_spellings_match_whole_tokens_only():
    t = KaraokeTransliterator()
    assert not [d for d in t.detect_words("kuku", ["กู"]) if d.karaoke == "ku"]
    assert any(d.karaoke == "ku" for d in t.detect_words("ku", ["กู"]))


def test_language_context_drops_common_english_words():
    t = KaraokeTransliterator(common_words={"กา": ["love"]})

    loose = [d for d in t.detect_with_language_context("i love it", ["กา"], 0.5) if d.karaoke == "love"]
    assert loose == [KaraokeDetection("กา", "love", 2, 4)]

    strict = t.detect_with_language_context("i love it", ["กา"], 0.9)
    assert not [d for d in strict if d.karaoke == "love"]


def test_has_thai_context_window():
    t = KaraokeTransliterator()
    assert t.has_thai_context("abc ก", 0)
    assert not t.has_thai_context("a" * 40 + "ก", 0)
