# SPDX-License-Identifier: CC0-1.0

import json

import pytest

from greenlens_bot.faq import (
    Corpus,
    CorpusError,
    FAQItem,
    find_top_faq_matches,
    load_default_faq,
    load_faq,
    match,
    normalize,
    score,
    score_breakdown,
)


def _item(faq_id, question, *keywords):
    return FAQItem(id=faq_id, question=question, answer=f"answer {faq_id}", category="test", keywords=keywords)


def test_normalize_lowercases_and_trims_but_keeps_punctuation():
    n = normalize("  How Do I Water   a FERN?  ")
    assert n.text == "how do i water   a fern?"
    assert n.tokens == ("how", "do", "i", "water", "a", "fern?")
    assert n.first_word == "how"


def test_empty_input_scores_zero_everywhere():
    corpus = load_default_faq()
    n = normalize("   ")
    assert n.tokens == ()
    assert all(score(n, item) == 0 for item in corpus)
    assert match(n, corpus) is None


def test_score_breakdown_sums_signals():
    fern = _item("fern", "How do I water my fern?", "water", "fern")
    b = score_breakdown(normalize("water my fern please"), fern)
    assert b.direct == 0
    assert b.keywords == 4
    assert b.first_word == 3
    assert b.overlap == 2
    assert b.total == 9


def test_keyword_counted_once_tokens_counted_each():
    fern = _item("fern", "How do I water my fern?", "water", "fern")
    b = score_breakdown(normalize("fern fern"), fern)
    assert b.keywords == 2
    assert b.first_word == 3
    assert b.overlap == 2


def test_direct_question_match_gets_ten():
    corpus = load_default_faq()
    n = normalize("How do I identify a plant?")
    item = match(n, corpus)
    assert item.id == "1"
    assert score_breakdown(n, item).direct == 10


def test_partial_question_is_contained():
    corpus = load_default_faq()
    b = score_breakdown(normalize("mobile app"), corpus.get("10"))
    assert b.direct == 10


def test_single_weak_overlap_is_below_threshold():
    corpus = load_default_faq()
    n = normalize("fert")
    best = find_top_faq_matches("fert", corpus, k=1)
    assert best[0].score == 1
    assert match(n, corpus) is None


def test_unknown_word_routes_to_fallback():
    assert match(normalize("banana"), load_default_faq()) is None


def test_tie_goes_to_earlier_record():
    a = _item("a", "Alpha?", "leaf")
    b = _item("b", "Beta?", "leaf")
    n = normalize("leaf")

    assert match(n, Corpus([a, b])).id == "a"
    assert match(n, Corpus([b, a])).id == "b"


def test_match_is_deterministic():
    corpus = load_default_faq()
    results = {match(normalize("my plant has yellow spots"), corpus).id for _ in range(5)}
    assert results == {"4"}


def test_find_top_faq_matches_orders_by_score():
    matches = find_top_faq_matches("cancel my subscription", load_default_faq(), k=3)
    assert matches[0].record.id == "8"
    assert [m.score for m in matches] == sorted((m.score for m in matches), reverse=True)


def test_corpus_rejects_empty():
    with pytest.raises(CorpusError):
        Corpus([])


def test_corpus_rejects_duplicate_ids():
    with pytest.raises(CorpusError, match="duplicate"):
        Corpus([_item("1", "Q?", "q"), _item("1", "Other?", "o")])


def test_corpus_rejects_when_no_record_has_keywords():
    with pytest.raises(CorpusError):
        Corpus([_item("1", "Q?"), _item("2", "Other?")])


def test_corpus_allows_single_keywordless_record():
    corpus = Corpus([_item("1", "Q?", "q"), _item("2", "Other question?")])
    assert len(corpus) == 2
    assert match(normalize("other question"), corpus).id == "2"


def test_load_faq_lowercases_and_dedupes_keywords(tmp_path):
    path = tmp_path / "faq.json"
    path.write_text(json.dumps([
        {"id": 1, "question": "Q?", "answer": "A", "category": "c", "keywords": ["Leaf", "leaf", "Stem"]},
    ]), encoding="utf-8")

    corpus = load_faq(path)
    assert corpus.get("1").keywords == ("leaf", "stem")


def test_load_faq_missing_field(tmp_path):
    path = tmp_path / "faq.json"
    path.write_text(json.dumps([{"id": "1", "question": "Q?", "answer": "A"}]), encoding="utf-8")

    with pytest.raises(CorpusError, match="category"):
        load_faq(path)


def test_default_corpus_is_valid():
    corpus = load_default_faq()
    assert len(corpus) == 10
    for item in corpus:
        assert item.keywords
        assert all(k == k.lower() for k in item.keywords)


def test_mixed_case_keywords_are_case_insensitive():
    fern = _item("fern", "How do I repot it?", "Fern", "Water")
    n = normalize("fern water")

    b = score_breakdown(n, fern)
    assert b.keywords == 4
    assert b.first_word == 3
    assert b.overlap == 2

    corpus = Corpus([fern])
    assert corpus.get("fern").keywords == ("fern", "water")
    assert match(n, corpus).id == "fern"
