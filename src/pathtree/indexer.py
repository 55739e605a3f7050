from __future__ import annotations

import re
from typing import NamedTuple

MAX_TOPIC_LINE_LENGTH = 100
MAX_TOPICS = 20
MAX_SECTIONS = 30
MAX_CONCEPTS = 50

HEADING_PATTERNS = (
    re.compile(r"[A-Z][^.]*"),
    re.compile(r"\d+\.?\s+[A-Z]"),
    re.compile(r"(?:Chapter|Section|Part)", re.IGNORECASE),
)
SECTION_PATTERN = re.compile(r"[\d\-*•]\s+")
# ASCII word boundaries: accented letters end a run instead of joining it
CONCEPT_PATTERN = re.compile(r"\b[A-Z][a-z]+(?: [A-Z][a-z]+)*\b", re.ASCII)


class DocumentIndex(NamedTuple):
    topics: list[str]
    sections: list[str]
    concepts: list[str]


def _is_topic(line: str) -> bool:
    if len(line) >= MAX_TOPIC_LINE_LENGTH:
        return False
    no_period, numbered, keyword = HEADING_PATTERNS
    return bool(no_period.fullmatch(line) or numbered.match(line) or keyword.match(line))


def _is_section(line: str) -> bool:
    return bool(SECTION_PATTERN.match(line)) or ":" in line


def extract_concepts(text: str) -> list[str]:
    # dict keeps first-seen order while dropping exact duplicates
    candidates = dict.fromkeys(CONCEPT_PATTERN.findall(text))
    return [c for c in candidates if 3 < len(c) < 50][:MAX_CONCEPTS]


def index(raw_text: str) -> DocumentIndex:
    # only "\n" separates lines; form feeds and other breaks stay inside a line
    lines = [line.removesuffix("\r") for line in raw_text.split("\n")]
    lines = [line for line in lines if line.strip()]
    topics = [line for line in lines if _is_topic(line)][:MAX_TOPICS]
    sections = [line for line in lines if _is_section(line)][:MAX_SECTIONS]
    return DocumentIndex(topics=topics, sections=sections, concepts=extract_concepts(raw_text))
