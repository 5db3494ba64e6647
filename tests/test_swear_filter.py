import json
import logging
from concurrent.futures import ThreadPoolExecutor

import pytest

from conftest import ExplodingClassifier, StubClassifier
from filter_options import ConfigurationError, FilterOptions
from swear_filter import SwearFilter, configure_logging

SAMPLES = [
    "This is fucking bullshit!",
    "เหี้ย",
    "fuck you",
    "sh1t",
    "fuuuuck",
    "มึง kuay",
    "หี หีบ",
]


# ==================== SCENARIOS ====================

def test_thai_profanity(default_filter):
    result = default_filter.check("เหี้ย")
    assert not result.is_clean
    assert any(m.word == "เหี้ย" and m.method == "exact" and m.language == "native" for m in result.matches)
    assert any(m.word == "หี" and (m.position, m.length) == (1, 2) for m in result.matches)
    assert result.severity == "severe"


def test_english_profanity(default_filter):
    result = default_filter.check("This is fucking bullshit!")
    assert not result.is_clean
    for word in ("fucking", "bullshit"):
        assert any(m.word == word and m.method == "exact" for m in result.matches)
    assert result.severity == "severe"
    assert result.language == "latin"


@pytest.mark.parametrize("text", ["", "   ", None])
def test_empty_input_is_clean(heuristic_filter, text):
    result = heuristic_filter.check(text)
    assert result.is_clean
    assert result.matches == []
    assert result.confidence == 1.0
    assert result.severity == "none"
    assert result.cleaned_text == text


def test_empty_input_skips_classification(stub_classifier):
    classifier = stub_classifier("latin", 0.95)
    sf = SwearFilter(classifier=classifier)
    sf.engine = None

    for text in ("", "  \n\t", None):
        assert sf.check(text).is_clean
    assert classifier.calls == []


def test_whitelist_option():
    sf = SwearFilter(
        classifier=None,
        whitelist_words=["damn", "hell"],
        detect_transliteration=False,
        check_variations=False,
    )
    assert sf.check("damn this hell").is_clean


def test_custom_censor_char():
    sf = SwearFilter(classifier=None, censor_char="#")
    assert sf.check("fuck").cleaned_text == "####"


def test_ignore_list_compound(heuristic_filter):
    assert heuristic_filter.check("หีบ").is_clean
    assert not heuristic_filter.check("หี").is_clean


# ==================== PROPERTIES ====================

@pytest.mark.parametrize("text", SAMPLES)
def test_match_offsets_are_valid(heuristic_filter, text):
    for m in heuristic_filter.check(text).matches:
        assert 0 <= m.position
        assert m.position + m.length <= len(text)
        assert text[m.position:m.position + m.length] == m.matched_text


@pytest.mark.parametrize("text", SAMPLES)
def test_one_match_per_span(heuristic_filter, text):
    spans = [(m.position, m.length) for m in heuristic_filter.check(text).matches]
    assert len(spans) == len(set(spans))


@pytest.mark.parametrize("text", SAMPLES)
def test_censored_text_is_clean(heuristic_filter, text):
    cleaned = heuristic_filter.check(text).cleaned_text
    assert len(cleaned) == len(text)
    assert heuristic_filter.check(cleaned).is_clean


def test_censor_characters_can_reroute_text(heuristic_filter):
    cleaned = heuristic_filter.check("kuay sh1t").cleaned_text
    assert cleaned.endswith(" ****")
    recheck = heuristic_filter.check(cleaned)
    assert recheck.language == "latin"
    assert any(m.method == "transliteration" for m in recheck.matches)


def test_repeating_characters(heuristic_filter):
    result = heuristic_filter.check("fuuuuck")
    assert any(m.word == "fuck" and m.method == "repeating" for m in result.matches)


def test_karaoke_in_mixed_text(heuristic_filter):
    result = heuristic_filter.check("มึง kuay")
    assert {"มึง", "ควย"} <= set(result.words)


def test_confident_english_skips_karaoke(stub_classifier):
    sf = SwearFilter(classifier=stub_classifier("latin", 0.95))
    assert sf.check("kuay").is_clean
    sf = SwearFilter(classifier=stub_classifier("latin", 0.6))
    assert not sf.check("kuay").is_clean


def test_classifier_failure_falls_back():
    sf = SwearFilter(classifier=ExplodingClassifier())
    assert not sf.check("fuck").is_clean


def test_disabled_language_is_ignored():
    sf = SwearFilter(classifier=None, languages=["thai"])
    assert sf.check("fuck").is_clean
    assert not sf.check("เหี้ย").is_clean


def test_result_serializes(heuristic_filter):
    json.dumps(heuristic_filter.check("fuck you").to_dict())


# ==================== CONVENIENCE API ====================

def test_contains_profanity_and_censor(heuristic_filter):
    assert heuristic_filter.contains_profanity("fuck")
    assert not heuristic_filter.contains_profanity("hello world")
    assert heuristic_filter.censor("oh fuck") == "oh ****"


def test_censor_without_censor_char_returns_input():
    sf = SwearFilter(classifier=None, censor_char="")
    assert sf.check("fuck").cleaned_text is None
    assert sf.censor("fuck") == "fuck"


def test_check_many(heuristic_filter):
    results = heuristic_filter.check_many(["fuck", "hello world", "fuck"])
    assert list(results) == ["fuck", "hello world"]
    assert not results["fuck"].is_clean
    assert results["hello world"].is_clean


def test_cached_results_are_copies(heuristic_filter):
    first = heuristic_filter.check("fuck")
    first.matches.clear()
    assert heuristic_filter.check("fuck").matches


def test_concurrent_checks_share_cache():
    sf = SwearFilter(classifier=None)
    sf.cache_max_size = 5

    def worker(n):
        for i in range(300):
            text = f"fuck {n} {i}"
            result = sf.check(text)
            assert not result.is_clean
            assert result.cleaned_text.startswith("****")
        return n

    with ThreadPoolExecutor(max_workers=8) as pool:
        assert sorted(pool.map(worker, range(8))) == list(range(8))
    assert len(sf.message_cache) <= 5


def test_options_from_instance_and_overrides():
    sf = SwearFilter(FilterOptions(censor_char="#"), classifier=None, check_leetspeak=False)
    assert sf.options.censor_char == "#"
    assert not sf.options.check_leetspeak

    with pytest.raises(ConfigurationError):
        SwearFilter(classifier=None, bogus=True)


# ==================== MUTATIONS ====================

def test_add_and_remove_custom_word(heuristic_filter):
    assert heuristic_filter.check("what the frak").is_clean

    heuristic_filter.add_custom_word("frak")
    assert not heuristic_filter.check("what the frak").is_clean
    assert "frak" in heuristic_filter.options.custom_bad_words

    heuristic_filter.remove_custom_word("frak")
    assert heuristic_filter.check("what the frak").is_clean
    assert "frak" not in heuristic_filter.options.custom_bad_words


def test_custom_word_matches_fresh_instance(heuristic_filter):
    heuristic_filter.add_custom_word("frak")
    fresh = SwearFilter(classifier=None, custom_bad_words=["frak"])
    text = "what the frak, fuck"
    assert heuristic_filter.check(text).matches == fresh.check(text).matches


def test_custom_word_severity_and_script(heuristic_filter):
    heuristic_filter.add_custom_word("ตัวแสบ", severity="severe")
    result = heuristic_filter.check("ตัวแสบ")
    assert not result.is_clean
    assert result.severity == "severe"
    assert result.matches[0].language == "native"


def test_remove_unknown_word_is_noop(heuristic_filter):
    heuristic_filter.remove_custom_word("never-added")
    heuristic_filter.remove_whitelist_word("never-added")
    heuristic_filter.remove_ignore_word("never-added")
    assert heuristic_filter.options == FilterOptions()


def test_whitelist_mutations(heuristic_filter):
    heuristic_filter.add_whitelist_word("Damn")
    assert heuristic_filter.check("damn").is_clean
    assert "damn" in heuristic_filter.options.whitelist_words

    heuristic_filter.remove_whitelist_word("DAMN")
    assert not heuristic_filter.check("damn").is_clean


def test_ignore_mutations(heuristic_filter):
    heuristic_filter.remove_ignore_word("หีบ")
    assert not heuristic_filter.check("หีบ").is_clean

    heuristic_filter.add_ignore_word("หีบ")
    assert heuristic_filter.check("หีบ").is_clean

    heuristic_filter.add_ignore_word("hell yeah")
    assert heuristic_filter.check("hell yeah").is_clean
    assert not heuristic_filter.check("hell").is_clean


def test_update_options(heuristic_filter):
    assert heuristic_filter.check("fuck").cleaned_text == "****"
    heuristic_filter.update_options(censor_char="#")
    assert heuristic_filter.check("fuck").cleaned_text == "####"

    heuristic_filter.update_options(languages=["thai"])
    assert heuristic_filter.check("fuck").is_clean


def test_update_options_custom_words(heuristic_filter):
    heuristic_filter.update_options(custom_bad_words=["frak"])
    assert not heuristic_filter.check("frak off").is_clean

    heuristic_filter.update_options(custom_bad_words=[])
    assert heuristic_filter.check("frak off").is_clean


def test_update_options_rejects_unknown(heuristic_filter):
    with pytest.raises(ConfigurationError):
        heuristic_filter.update_options(bogus=1)


def test_configure_logging():
    root = configure_logging(logging.DEBUG)
    assert root.level == logging.DEBUG
    assert root.handlers
