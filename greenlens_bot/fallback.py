# SPDX-License-Identifier: CC0-1.0

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Callable, Tuple

from .faq import Corpus, NormalizedText, match, normalize

DEFAULT_BRAND = "GreenLens"

SUGGESTED_QUESTIONS = (
    "How do I identify a plant?",
    "What premium features are available?",
    "How do I care for my plants?",
    "Can you diagnose plant diseases?",
    "How accurate is plant identification?",
)

TOPIC_KEYWORDS = ("identify", "care", "premium", "help")

UNSURE_TEMPLATE = (
    "I am not quite sure about that specific question. I specialize in plant "
    "identification, care guidance, and {brand} features. You might want to ask: "
    '"{suggestion}" or try rephrasing your question with keywords like {keywords}.'
)


@dataclass(frozen=True)
class Reply:
    text: str
    source: str
    rule: str
    show_contact: bool = False


@dataclass(frozen=True)
class FallbackRule:
    name: str
    applies: Callable[[str], bool]
    template: str
    show_contact: bool = False


def _any_of(*patterns: str) -> Callable[[str], bool]:
    return lambda text: any(p in text for p in patterns)


FALLBACK_RULES: Tuple[FallbackRule, ...] = (
    FallbackRule(
        name="greeting",
        applies=_any_of("hello", "hi", "hey"),
        template=(
            "Hello! I am your {brand} assistant. I can help you identify plants, provide "
            "care advice, explain premium features, diagnose plant problems, and answer "
            "gardening questions. What would you like to know?"
        ),
    ),
    FallbackRule(
        name="help",
        applies=_any_of("help", "what can you do"),
        template=(
            "I can assist with: 🌱 Plant identification from photos, 🏥 Disease and pest "
            "diagnosis, 💡 Personalized care recommendations, ⭐ Premium feature information, "
            "📞 Account and billing questions, 🌿 General gardening advice. "
            "What interests you most?"
        ),
    ),
    FallbackRule(
        name="thanks",
        applies=_any_of("thank", "thanks"),
        template=(
            "You are very welcome! I am here whenever you need plant care guidance. Feel "
            "free to ask about any gardening topics or plant concerns you might have."
        ),
    ),
    FallbackRule(
        name="contact",
        applies=_any_of("contact", "support", "email"),
        template=(
            "I will show you our contact information. Our support team is ready to help "
            "with any questions beyond what I can answer here."
        ),
        show_contact=True,
    ),
    FallbackRule(
        name="how_it_works",
        applies=lambda text: "how" in text and ("work" in text or "use" in text),
        template=(
            "{brand} works by analyzing photos of your plants using advanced AI. Simply "
            "upload a clear image, and our system identifies the species and provides "
            "tailored care recommendations. Would you like to know about our "
            "identification process or premium features?"
        ),
    ),
    FallbackRule(
        name="pricing",
        applies=_any_of("price", "cost", "money", "fee"),
        template=(
            "Our premium plans start at $9.99/month or $89.99/year (25% savings). Premium "
            "includes unlimited identifications, advanced health analysis, disease "
            "diagnosis, expert consultations, and priority support. There is also a free "
            "tier with basic features."
        ),
    ),
    FallbackRule(
        name="free_tier",
        applies=lambda text: "free" in text and "trial" not in text,
        template=(
            "Yes! {brand} offers free plant identification with limited monthly uses. Free "
            "users can identify plants, get basic care tips, and access our plant database. "
            "Premium users get unlimited access plus advanced features like health "
            "predictions and expert consultations."
        ),
    ),
)


def _unsure(rng: random.Random, brand: str) -> Reply:
    suggestion = rng.choice(SUGGESTED_QUESTIONS)
    keywords = ", ".join(f'"{k}"' for k in TOPIC_KEYWORDS[:-1])
    keywords += f', or "{TOPIC_KEYWORDS[-1]}"'
    text = UNSURE_TEMPLATE.format(brand=brand, suggestion=suggestion, keywords=keywords)
    return Reply(text=text, source="fallback", rule="unsure")


def resolve_fallback(
        normalized: NormalizedText,
        rng: random.Random,
        brand: str = DEFAULT_BRAND,
) -> Reply:
    """
    Правила проверяются по порядку, срабатывает первое подходящее.
    Если ни одно не подошло, отвечаем "не уверен" со случайной подсказкой.
    """
    for rule in FALLBACK_RULES:
        if rule.applies(normalized.text):
            return Reply(
                text=rule.template.format(brand=brand),
                source="fallback",
                rule=rule.name,
                show_contact=rule.show_contact,
            )
    return _unsure(rng, brand)


def answer_query(
        user_input: str,
        corpus: Corpus,
        rng: random.Random,
        brand: str = DEFAULT_BRAND,
) -> Reply:
    normalized = normalize(user_input)
    item = match(normalized, corpus)
    if item is not None:
        return Reply(text=item.answer, source="faq", rule=item.id)
    return resolve_fallback(normalized, rng, brand=brand)
