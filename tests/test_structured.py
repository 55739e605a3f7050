from __future__ import annotations

import json

import pytest
from pydantic import TypeAdapter

from pathtree.models import Flashcard, NodeDetails, QAPair, TutorAnswer
from pathtree.structured import Fallback, Parsed, parse_structured

FLASHCARDS = TypeAdapter(list[Flashcard])

MALFORMED = [
    "",
    "not json at all",
    '{"theory": "cut off',
    "[]",
    '{"theory": 1, "simplified": "x", "examples": ["e"]}',
    '```json\n{"theory": "t", "simplified": "s", "examples": ["e"]}\n```',
    "null",
]


def _minimal_details() -> NodeDetails:
    return NodeDetails(theory="fallback", simplified="fallback", examples=["fallback"])


def test_valid_output_is_returned_as_parsed():
    raw = json.dumps(
        {
            "theory": "Light energy becomes chemical energy.",
            "simplified": "Plants cook with sunlight.",
            "examples": ["Leaves", "Algae"],
            "flashcards": [{"question": "Where?", "answer": "Chloroplasts"}],
            "references": ["Chlorophyll"],
        }
    )
    outcome = parse_structured(raw, NodeDetails, _minimal_details)
    assert isinstance(outcome, Parsed)
    assert not outcome.used_fallback
    assert outcome.value.examples == ["Leaves", "Algae"]
    assert outcome.value.flashcards == [QAPair(question="Where?", answer="Chloroplasts")]


@pytest.mark.parametrize("raw", MALFORMED)
def test_malformed_output_falls_back_without_raising(raw):
    outcome = parse_structured(raw, NodeDetails, _minimal_details)
    assert isinstance(outcome, Fallback)
    assert outcome.used_fallback
    assert outcome.value == _minimal_details()
    assert outcome.reason


def test_fallback_is_not_called_on_success():
    calls = []

    def fallback() -> list[Flashcard]:
        calls.append(1)
        return []

    raw = '[{"question": "Q", "answer": "A", "difficulty": "hard", "tag": "bio"}]'
    outcome = parse_structured(raw, FLASHCARDS, fallback)
    assert isinstance(outcome, Parsed)
    assert calls == []
    assert outcome.value[0].difficulty == "hard"


def test_unknown_difficulty_is_rejected():
    raw = '[{"question": "Q", "answer": "A", "difficulty": "impossible", "tag": "bio"}]'
    outcome = parse_structured(raw, FLASHCARDS, lambda: [])
    assert isinstance(outcome, Fallback)
    assert outcome.value == []


def test_wrong_json_types_are_not_coerced():
    raw = '[{"question": "Q", "answer": 42, "difficulty": "easy", "tag": "bio"}]'
    assert isinstance(parse_structured(raw, FLASHCARDS, lambda: []), Fallback)


def test_missing_required_field_falls_back():
    raw = '[{"question": "Q", "answer": "A", "difficulty": "easy"}]'
    outcome = parse_structured(raw, FLASHCARDS, lambda: [])
    assert isinstance(outcome, Fallback)
    assert "tag" in outcome.reason


def test_tutor_answer_reads_diagram_field():
    raw = json.dumps(
        {
            "explanation": "e",
            "simplified": "s",
            "diagram_desc": "a cycle diagram",
            "practice": [{"question": "q", "answer": "a"}],
            "tips": ["t"],
        }
    )
    fallback = TutorAnswer(
        explanation="x", simplified="x", diagram_description="x", practice=[QAPair(question="q", answer="a")], tips=["t"]
    )
    outcome = parse_structured(raw, TutorAnswer, lambda: fallback)
    assert isinstance(outcome, Parsed)
    assert outcome.value.diagram_description == "a cycle diagram"
    assert outcome.value.model_dump(by_alias=True)["diagram_desc"] == "a cycle diagram"


def test_empty_tips_are_rejected():
    raw = json.dumps(
        {"explanation": "e", "simplified": "s", "diagram_desc": "d", "practice": [{"question": "q", "answer": "a"}], "tips": []}
    )
    fallback = TutorAnswer(
        explanation="x", simplified="x", diagram_description="x", practice=[QAPair(question="q", answer="a")], tips=["t"]
    )
    assert isinstance(parse_structured(raw, TutorAnswer, lambda: fallback), Fallback)
