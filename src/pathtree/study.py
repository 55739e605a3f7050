from __future__ import annotations

import random
from collections.abc import Sequence

from .models import ChapterSummary, Difficulty, FivePageSummary, Flashcard, OnePageSummary, Summary

CHAPTER_SEPARATOR = "\n\n---\n\n"


def filter_by_difficulty(cards: Sequence[Flashcard], difficulty: Difficulty | None = None) -> list[Flashcard]:
    if difficulty is None:
        return list(cards)
    return [card for card in cards if card.difficulty == difficulty]


def shuffle_deck(
    cards: Sequence[Flashcard],
    difficulty: Difficulty | None = None,
    seed: int | None = None,
) -> list[Flashcard]:
    """Shuffle the cards matching ``difficulty`` among their own slots.

    Cards outside the filter keep their positions, so the full deck stays
    intact whichever subset is being studied.
    """
    deck = list(cards)
    slots = [i for i, card in enumerate(deck) if difficulty is None or card.difficulty == difficulty]
    picked = [deck[i] for i in slots]
    random.Random(seed).shuffle(picked)
    for slot, card in zip(slots, picked):
        deck[slot] = card
    return deck


def summary_text(summary: Summary) -> str:
    if isinstance(summary, OnePageSummary):
        return summary.one_page
    if isinstance(summary, FivePageSummary):
        return summary.five_page
    if isinstance(summary, ChapterSummary):
        return CHAPTER_SEPARATOR.join(f"{chapter.title}\n\n{chapter.content}" for chapter in summary.chapters)
    raise TypeError(f"Not a summary: {type(summary).__name__}")
