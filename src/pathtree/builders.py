from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from typing import Annotated, Union

from pydantic import Field, TypeAdapter

from .generation import GenerationClient
from .models import (
    Chapter,
    ChapterSummary,
    ExtractedDocument,
    FivePageSummary,
    Flashcard,
    FlashcardDeck,
    GraphEdge,
    GraphNode,
    KnowledgeGraph,
    NodeDetails,
    OnePageSummary,
    QAPair,
    Summary,
    SummaryKind,
    TutorAnswer,
)
from .prompts import FLASHCARD_PROMPT, GRAPH_PROMPT, NODE_DETAILS_PROMPT, SUMMARY_PROMPTS, TUTOR_PROMPT
from .structured import ParseOutcome, Parsed, parse_structured

logger = logging.getLogger(__name__)

# a bare array or, under JSON mode, an object wrapping it
FLASHCARD_REPLY = TypeAdapter(Union[Annotated[list[Flashcard], Field(min_length=1)], FlashcardDeck])
DIFFICULTY_CYCLE = ("easy", "medium", "hard")
CHAPTER_HEADING = re.compile(r"Chapter \d+|Section \d+", re.IGNORECASE)

FALLBACK_GRAPH_TOPICS = 5
FALLBACK_FLASHCARDS = 10
PROMPT_CONCEPTS = 20


def fallback_graph(topics: Sequence[str]) -> KnowledgeGraph:
    picked = list(topics[:FALLBACK_GRAPH_TOPICS])
    child_ids = [f"topic-{i}" for i in range(len(picked))]
    root = GraphNode(
        id="root",
        title="Document Overview",
        description="Main content structure",
        children=child_ids,
        level=0,
        type="topic",
    )
    children = [
        GraphNode(
            id=child_id,
            title=topic,
            description=f"Details about {topic}",
            parent="root",
            level=1,
            type="concept",
        )
        for child_id, topic in zip(child_ids, picked)
    ]
    edges = [GraphEdge(id=f"edge-{i}", source="root", target=child_id) for i, child_id in enumerate(child_ids)]
    return KnowledgeGraph(nodes=[root, *children], edges=edges)


def fallback_flashcards(concepts: Sequence[str]) -> list[Flashcard]:
    return [
        Flashcard(
            question=f"What is {concept}?",
            answer=f"{concept} is an important concept from the document.",
            difficulty=DIFFICULTY_CYCLE[i % 3],
            tag="general",
        )
        for i, concept in enumerate(concepts[:FALLBACK_FLASHCARDS])
    ]


def split_chapters(text: str) -> ChapterSummary:
    segments = [segment.strip() for segment in CHAPTER_HEADING.split(text)]
    segments = [segment for segment in segments if segment]
    return ChapterSummary(
        chapters=[Chapter(title=f"Chapter {i}", content=segment) for i, segment in enumerate(segments, start=1)]
    )


def fallback_node_details(node_title: str) -> NodeDetails:
    return NodeDetails(
        theory=f"Theoretical explanation of {node_title}",
        simplified=f"{node_title} is a key concept that can be understood as...",
        examples=[f"Example of {node_title}", "Another example", "Third example"],
        flashcards=[
            QAPair(question=f"What is {node_title}?", answer=f"{node_title} is..."),
            QAPair(question=f"How does {node_title} work?", answer="It works by..."),
        ],
        references=["Related concept 1", "Related concept 2"],
    )


def fallback_tutor_answer(question: str) -> TutorAnswer:
    return TutorAnswer(
        explanation=f"Here's an explanation of your question about: {question}",
        simplified=f"In simple terms: {question} can be understood as...",
        diagram_description="A flowchart showing the relationship between concepts would be helpful here.",
        practice=[
            QAPair(question="Practice question 1", answer="Answer 1"),
            QAPair(question="Practice question 2", answer="Answer 2"),
        ],
        tips=["Remember the key concepts", "Practice regularly", "Connect to real examples"],
    )


class ArtifactBuilder:
    temperature = 0.3
    content_budget = 3000
    json_mode = True

    def __init__(self, client: GenerationClient) -> None:
        self.client = client

    def _generate(self, template: str, content: str, **fields: str) -> str:
        prompt = template.format(content=content[: self.content_budget], **fields)
        logger.debug("%s: sending %d-character prompt", type(self).__name__, len(prompt))
        return self.client.generate(prompt, self.temperature, json_mode=self.json_mode)


class GraphBuilder(ArtifactBuilder):
    def build(self, content: str, topics: Sequence[str]) -> ParseOutcome[KnowledgeGraph]:
        raw_text = self._generate(GRAPH_PROMPT, content, topics=", ".join(topics))
        return parse_structured(raw_text, KnowledgeGraph, lambda: fallback_graph(topics))


class FlashcardBuilder(ArtifactBuilder):
    temperature = 0.4

    def build(self, content: str, concepts: Sequence[str]) -> ParseOutcome[list[Flashcard]]:
        raw_text = self._generate(FLASHCARD_PROMPT, content, concepts=", ".join(concepts[:PROMPT_CONCEPTS]))
        outcome = parse_structured(raw_text, FLASHCARD_REPLY, lambda: fallback_flashcards(concepts))
        if isinstance(outcome.value, FlashcardDeck):
            return Parsed(outcome.value.flashcards)
        return outcome


class SummaryBuilder(ArtifactBuilder):
    content_budget = 4000
    json_mode = False

    def build(self, content: str, kind: SummaryKind | str) -> ParseOutcome[Summary]:
        kind = SummaryKind(kind)
        raw_text = self._generate(SUMMARY_PROMPTS[kind.value], content)

        # plain-text summaries are passed through untouched
        if kind is SummaryKind.ONE_PAGE:
            return Parsed(OnePageSummary(one_page=raw_text))
        if kind is SummaryKind.FIVE_PAGE:
            return Parsed(FivePageSummary(five_page=raw_text))
        return parse_structured(raw_text, ChapterSummary, lambda: split_chapters(raw_text))


class NodeDetailBuilder(ArtifactBuilder):
    def build(self, node_title: str, content: str) -> ParseOutcome[NodeDetails]:
        raw_text = self._generate(NODE_DETAILS_PROMPT, content, node_title=node_title)
        return parse_structured(raw_text, NodeDetails, lambda: fallback_node_details(node_title))


class TutorBuilder(ArtifactBuilder):
    temperature = 0.4

    def build(self, question: str, content: str) -> ParseOutcome[TutorAnswer]:
        raw_text = self._generate(TUTOR_PROMPT, content, question=question)
        return parse_structured(raw_text, TutorAnswer, lambda: fallback_tutor_answer(question))


class ArtifactService:
    """Entry points used by the presentation layer.

    Holds no per-document state, so one instance can serve concurrent
    requests for any number of documents.
    """

    def __init__(self, client: GenerationClient) -> None:
        self.graphs = GraphBuilder(client)
        self.summaries = SummaryBuilder(client)
        self.flashcards = FlashcardBuilder(client)
        self.node_details = NodeDetailBuilder(client)
        self.tutor = TutorBuilder(client)

    def build_graph(
        self, document: ExtractedDocument, topics: Sequence[str] | None = None
    ) -> ParseOutcome[KnowledgeGraph]:
        return self.graphs.build(document.raw_text, document.topics if topics is None else topics)

    def build_summary(self, document: ExtractedDocument, kind: SummaryKind | str) -> ParseOutcome[Summary]:
        return self.summaries.build(document.raw_text, kind)

    def build_flashcards(
        self, document: ExtractedDocument, concepts: Sequence[str] | None = None
    ) -> ParseOutcome[list[Flashcard]]:
        return self.flashcards.build(document.raw_text, document.concepts if concepts is None else concepts)

    def build_node_details(self, node_title: str, document: ExtractedDocument) -> ParseOutcome[NodeDetails]:
        return self.node_details.build(node_title, document.raw_text)

    def build_tutor_answer(self, question: str, document: ExtractedDocument) -> ParseOutcome[TutorAnswer]:
        return self.tutor.build(question, document.raw_text)
