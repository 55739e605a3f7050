from __future__ import annotations

from enum import Enum
from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, model_validator

Difficulty = Literal["easy", "medium", "hard"]
NodeType = Literal["topic", "concept", "detail"]


class ExtractedDocument(BaseModel):
    model_config = ConfigDict(frozen=True)

    raw_text: str
    topics: tuple[str, ...] = ()
    sections: tuple[str, ...] = ()
    concepts: tuple[str, ...] = ()


# Generated artifacts are validated in strict mode: values of the wrong JSON
# type are rejected rather than coerced.
class GeneratedModel(BaseModel):
    model_config = ConfigDict(strict=True, populate_by_name=True)


class GraphNode(GeneratedModel):
    id: str
    title: str
    description: str
    children: list[str] = Field(default_factory=list)
    parent: str | None = None
    level: NonNegativeInt
    type: NodeType


class GraphEdge(GeneratedModel):
    id: str
    source: str
    target: str
    type: str = "default"


class KnowledgeGraph(GeneratedModel):
    nodes: list[GraphNode] = Field(min_length=1)
    edges: list[GraphEdge] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_hierarchy(self) -> KnowledgeGraph:
        by_id = {node.id: node for node in self.nodes}
        if len(by_id) != len(self.nodes):
            raise ValueError("node ids must be unique")
        if not any(node.level == 0 for node in self.nodes):
            raise ValueError("graph has no root node at level 0")

        implied: set[tuple[str, str]] = set()
        for node in self.nodes:
            if len(set(node.children)) != len(node.children):
                raise ValueError(f"node {node.id!r} lists a child twice")
            for child_id in node.children:
                child = by_id.get(child_id)
                if child is None:
                    raise ValueError(f"node {node.id!r} has unknown child {child_id!r}")
                if child.parent != node.id:
                    raise ValueError(f"child {child_id!r} does not point back to {node.id!r}")
                implied.add((node.id, child_id))

            if node.parent is None:
                continue
            if node.level == 0:
                raise ValueError(f"root-level node {node.id!r} has a parent")
            parent = by_id.get(node.parent)
            if parent is None:
                raise ValueError(f"node {node.id!r} has unknown parent {node.parent!r}")
            if node.id not in parent.children:
                raise ValueError(f"parent {parent.id!r} does not list {node.id!r} as a child")
            if node.level != parent.level + 1:
                raise ValueError(f"node {node.id!r} is not one level below its parent")

        edge_ids = {edge.id for edge in self.edges}
        if len(edge_ids) != len(self.edges):
            raise ValueError("edge ids must be unique")
        pairs = {(edge.source, edge.target) for edge in self.edges}
        if len(pairs) != len(self.edges):
            raise ValueError("duplicate edge between the same nodes")
        if pairs != implied:
            raise ValueError("edges do not match the parent/child links of the nodes")
        return self


class Flashcard(GeneratedModel):
    question: str
    answer: str
    difficulty: Difficulty
    tag: str


class FlashcardDeck(GeneratedModel):
    flashcards: list[Flashcard] = Field(min_length=1)


class QAPair(GeneratedModel):
    question: str
    answer: str


class NodeDetails(GeneratedModel):
    theory: str
    simplified: str
    examples: list[str] = Field(min_length=1)
    flashcards: list[QAPair] = Field(default_factory=list)
    references: list[str] = Field(default_factory=list)


class TutorAnswer(GeneratedModel):
    explanation: str
    simplified: str
    diagram_description: str = Field(alias="diagram_desc")
    practice: list[QAPair] = Field(min_length=1)
    tips: list[str] = Field(min_length=1)


class SummaryKind(str, Enum):
    ONE_PAGE = "one_page"
    FIVE_PAGE = "five_page"
    CHAPTERS = "chapters"


class Chapter(GeneratedModel):
    title: str
    content: str


class OnePageSummary(GeneratedModel):
    one_page: str


class FivePageSummary(GeneratedModel):
    five_page: str


class ChapterSummary(GeneratedModel):
    chapters: list[Chapter]


Summary = Union[OnePageSummary, FivePageSummary, ChapterSummary]
