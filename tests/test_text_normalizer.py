from text_normalizer import (
    MAX_LEET_VARIANTS,
    collapse_repeats,
    decode_leetspeak,
    extract_words,
    fold_case,
    generate_variations,
    iter_tokens,
    iter_word_spans,
    normalize_thai_text,
    strip_special_chars,
    strip_tone_marks,
    strip_vowels,
)


def test_strip_tone_marks_removes_only_tone_marks():
    assert strip_tone_marks("เหี้ย") == "เหีย"
    assert strip_tone_marks("hello") == "hello"


def test_strip_vowels_and_special_chars():
    assert strip_vowels("กู") == "ก"
    assert strip_special_chars("สัตว์") == "สัตว"


def test_normalize_thai_text_drops_spaces_and_symbols():
    assert normalize_thai_text("เหี้ย 1A!") == "เหีย1a"


def test_collapse_repeats_needs_three_in_a_row():
    assert collapse_repeats("fuuuuck") == "fuck"
    assert collapse_repeats("hello") == "hello"
    assert collapse_repeats("ควยยยย") == "ควย"


def test_fold_case_preserves_length():
    assert fold_case("FuCk") == "fuck"
    text = "İx"
    assert len(fold_case(text)) == len(text)


def test_decode_leetspeak_starts_with_lowercased_input():
    decoded = decode_leetspeak("SH1T")
    assert decoded[0] == "sh1t"
    assert "shit" in decoded


def test_decode_leetspeak_chains_substitutions():
    assert "shit" in decode_leetspeak("$h!t")


def test_decode_leetspeak_is_capped_and_unique():
    decoded = decode_leetspeak("4@8|3(<|)3|=69#|-|1!|_|<" * 3)
    assert len(decoded) <= MAX_LEET_VARIANTS
    assert len(decoded) == len(set(decoded))


def test_decode_leetspeak_without_substitutes():
    assert decode_leetspeak("word") == ["word"]


def test_iter_word_spans_reports_offsets():
    spans = list(iter_word_spans("hello โลก 123abc"))
    assert ("hello", 0) in spans
    assert ("โลก", 6) in spans
    assert ("abc", 13) in spans
    assert ("123abc", 10) in spans
    assert len(spans) == len(set(spans))


def test_extract_words_deduplicates():
    assert extract_words("fuck fuck") == ["fuck"]


def test_iter_tokens_keeps_offsets():
    assert list(iter_tokens("a  bb\tc")) == [("a", 0), ("bb", 3), ("c", 6)]


def test_generate_variations_covers_formatting_tricks():
    variations = generate_variations("fuck")
    assert variations[0] == "fuck"
    assert "FUCK" in variations
    assert "f u c k" in variations
    assert "f.u.c.k" in variations
    assert len(variations) == len(set(variations))
