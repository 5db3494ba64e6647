import json

import pytest

from aggregator import Aggregator
from filter_options import FilterOptions
from filter_types import DetectedMatch
from language_router import LanguageResult
from word_index import WordIndex


@pytest.fixture(scope="module")
def index():
    return WordIndex()


def match(word, position, length, method="exact", confidence=1.0, language="latin", text=None):
    return DetectedMatch(word, text or word, position, length, method, confidence, language)


def test_whitelist_matches_word_or_text(index):
    agg = Aggregator(FilterOptions(whitelist_words=("Damn",)), index)
    kept = agg.filter_whitelisted([
        match("damn", 0, 4),
        match("darn", 5, 4, method="variant", text="DAMN"),
        match("fuck", 10, 4),
    ])
    assert [m.word for m in kept] == ["fuck"]


def test_ignore_list_suppresses_only_contained_spans(index):
    agg = Aggregator(FilterOptions(), index)
    text = "หี หีบ"
    kept = agg.filter_ignored([
        match("หี", 0, 2, language="native"),
        match("หี", 3, 2, language="native"),
    ], text)
    assert [m.position for m in kept] == [0]


def test_ignore_list_is_case_insensitive(index):
    agg = Aggregator(FilterOptions(ignore_list=("Hell Yeah",)), index)
    assert agg.filter_ignored([match("hell", 0, 4)], "HELL YEAH") == []


def test_language_filter(index):
    agg = Aggregator(FilterOptions(languages=("latin",)), index)
    kept = agg.filter_by_language([
        match("fuck", 0, 4),
        match("ควย", 5, 3, language="native"),
        match("ควย", 9, 4, method="transliteration", language="phonetic"),
    ])
    assert [m.language for m in kept] == ["latin"]


def test_dedup_prefers_confidence_then_method(index):
    agg = Aggregator(FilterOptions(), index)
    unique = agg.deduplicate([
        match("fuck", 0, 4, method="token_similarity", confidence=1.0),
        match("fuck", 0, 4, method="exact", confidence=1.0),
        match("shit", 5, 4, method="variant", confidence=0.9),
        match("shit", 5, 4, method="edit_distance", confidence=0.95),
    ])
    assert [(m.position, m.method) for m in unique] == [(0, "exact"), (5, "edit_distance")]


def test_severity(index):
    agg = Aggregator(FilterOptions(), index)
    assert agg.severity([]) == "none"
    assert agg.severity([match("damn", 0, 4)]) == "mild"
    assert agg.severity([match("damn", 0, 4), match("shit", 5, 4)]) == "moderate"
    assert agg.severity([match("damn", 0, 4), match("fuck", 5, 4)]) == "severe"
    assert agg.severity([match("unlisted", 0, 8)]) == "mild"


def test_confidence_is_mean(index):
    agg = Aggregator(FilterOptions(), index)
    assert agg.confidence([]) == 1.0
    assert agg.confidence([match("a", 0, 1, confidence=1.0), match("b", 2, 1, confidence=0.8)]) == pytest.approx(0.9)


def test_censor_preserves_length(index):
    assert Aggregator(FilterOptions(), index).censor("abc fuck", [match("fuck", 4, 4)]) == "abc ****"
    assert Aggregator(FilterOptions(censor_char="#!"), index).censor("fuck", [match("fuck", 0, 4)]) == "#!#!"
    assert Aggregator(FilterOptions(censor_char="#!"), index).censor("ass", [match("ass", 0, 3)]) == "#!#"
    assert Aggregator(FilterOptions(censor_char=""), index).censor("fuck", [match("fuck", 0, 4)]) is None


def test_aggregate_builds_result(index):
    agg = Aggregator(FilterOptions(), index)
    result = agg.aggregate(
        "oh fuck",
        [match("fuck", 3, 4), match("fuck", 3, 4, method="edit_distance")],
        LanguageResult("latin", 0.95),
    )
    assert not result.is_clean
    assert len(result.matches) == 1
    assert result.cleaned_text == "oh ****"
    assert result.severity == "severe"
    assert result.language == "latin"
    json.dumps(result.to_dict())


def test_aggregate_empty(index):
    result = Aggregator(FilterOptions(), index).aggregate("hello", [])
    assert result.is_clean
    assert result.severity == "none"
    assert result.confidence == 1.0
    assert result.cleaned_text == "hello"
