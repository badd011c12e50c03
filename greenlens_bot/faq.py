# SPDX-License-Identifier: CC0-1.0

from __future__ import annotations

import json
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Iterator, List, Optional, Sequence, Tuple

DEFAULT_FAQ_PATH = Path(__file__).resolve().parent / "data" / "faq.json"

MIN_SCORE = 2

DIRECT_WEIGHT = 10
KEYWORD_WEIGHT = 2
FIRST_WORD_WEIGHT = 3
OVERLAP_WEIGHT = 1


class CorpusError(ValueError):
    """FAQ corpus is empty or inconsistent."""


@dataclass(frozen=True)
class FAQItem:
    id: str
    question: str
    answer: str
    category: str
    keywords: Tuple[str, ...]


class Corpus:
    """
    Неизменяемый упорядоченный набор FAQ.

    Порядок записей важен: при равном score побеждает более ранняя запись.
    """

    def __init__(self, items: Sequence[FAQItem]):
        # ключевые слова всегда в нижнем регистре, даже если корпус собран в коде
        self._items = tuple(replace(item, keywords=_clean_keywords(item.keywords)) for item in items)
        self._by_id = {}

        if not self._items:
            raise CorpusError("FAQ corpus is empty")

        for item in self._items:
            if item.id in self._by_id:
                raise CorpusError(f"duplicate FAQ id: {item.id!r}")
            if not item.question.strip() or not item.answer.strip():
                raise CorpusError(f"FAQ {item.id!r} has a blank question or answer")
            self._by_id[item.id] = item

        if not any(item.keywords for item in self._items):
            raise CorpusError("no FAQ record defines keywords")

    def __iter__(self) -> Iterator[FAQItem]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def get(self, faq_id: str) -> Optional[FAQItem]:
        return self._by_id.get(faq_id)


def _clean_keywords(raw) -> Tuple[str, ...]:
    # упорядоченное множество: порядок первого вхождения сохраняется
    return tuple(dict.fromkeys(k.lower() for k in raw))


def load_faq(path: Path) -> Corpus:
    with path.open("r", encoding="utf-8") as f:
        raw = json.load(f)

    items = []
    for entry in raw:
        try:
            items.append(
                FAQItem(
                    id=str(entry["id"]),
                    question=entry["question"],
                    answer=entry["answer"],
                    category=entry["category"],
                    keywords=tuple(entry["keywords"]),
                )
            )
        except KeyError as e:
            raise CorpusError(f"FAQ entry in {path} is missing field {e}") from e
    return Corpus(items)


def load_default_faq() -> Corpus:
    return load_faq(DEFAULT_FAQ_PATH)


@dataclass(frozen=True)
class NormalizedText:
    text: str
    tokens: Tuple[str, ...]

    @property
    def first_word(self) -> str:
        return self.tokens[0] if self.tokens else ""


def normalize(raw: str) -> NormalizedText:
    # пунктуацию не трогаем, сигналы ниже работают через подстроки
    text = raw.lower().strip()
    return NormalizedText(text=text, tokens=tuple(text.split()))


@dataclass(frozen=True)
class ScoreBreakdown:
    direct: int = 0
    keywords: int = 0
    first_word: int = 0
    overlap: int = 0

    @property
    def total(self) -> int:
        return self.direct + self.keywords + self.first_word + self.overlap


@dataclass(frozen=True)
class ScoredCandidate:
    record: FAQItem
    score: int


def score_breakdown(normalized: NormalizedText, record: FAQItem) -> ScoreBreakdown:
    text = normalized.text
    if not text:
        return ScoreBreakdown()

    question = record.question.lower()

    direct = 0
    if question in text or text in question:
        direct = DIRECT_WEIGHT

    keywords = [k.lower() for k in record.keywords]
    hits = [k for k in keywords if k in text]

    first_word = 0
    if normalized.first_word in keywords:
        first_word = FIRST_WORD_WEIGHT

    # короткие слова ("is", "it") слишком общие
    words = [w for w in normalized.tokens if len(w) > 2]
    matching = [
        w for w in words
        if w in question or any(w in k for k in keywords)
    ]

    return ScoreBreakdown(
        direct=direct,
        keywords=len(hits) * KEYWORD_WEIGHT,
        first_word=first_word,
        overlap=len(matching) * OVERLAP_WEIGHT,
    )


def score(normalized: NormalizedText, record: FAQItem) -> int:
    return score_breakdown(normalized, record).total


def rank_candidates(normalized: NormalizedText, corpus: Corpus) -> List[ScoredCandidate]:
    scored = [ScoredCandidate(record=item, score=score(normalized, item)) for item in corpus]
    # sort стабильный: при равенстве остаётся порядок корпуса
    scored.sort(key=lambda c: c.score, reverse=True)
    return [c for c in scored if c.score > 0]


def match(normalized: NormalizedText, corpus: Corpus, min_score: int = MIN_SCORE) -> Optional[FAQItem]:
    ranked = rank_candidates(normalized, corpus)
    if ranked and ranked[0].score >= min_score:
        return ranked[0].record
    return None


def find_top_faq_matches(user_question: str, corpus: Corpus, k: int = 3) -> List[ScoredCandidate]:
    """
    Топ-k кандидатов для сырого текста пользователя, для отладки ранжирования.
    """
    return rank_candidates(normalize(user_question), corpus)[:k]
