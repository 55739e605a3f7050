from __future__ import annotations

GRAPH_PROMPT = """
Analyze the following content and create a hierarchical knowledge graph.
Return strict JSON only, no markdown.
JSON schema:
{{
  "nodes": [
    {{"id": "", "title": "", "description": "", "children": [""], "parent": "", "level": 0, "type": "topic|concept|detail"}}
  ],
  "edges": [
    {{"id": "", "source": "", "target": "", "type": "default"}}
  ]
}}
Rules:
1) Exactly one root node: level 0, no "parent" field.
2) Every child has "parent" set to its parent's id and level = parent level + 1.
3) A parent's "children" lists every node whose "parent" is that parent.
4) One edge per parent -> child link, and no other edges.
5) Node and edge ids are unique.

Topics: {topics}

Content:
{content}
""".strip()

FLASHCARD_PROMPT = """
Create flashcards from the following content and concepts. Generate 10-15 question-answer pairs.
Focus on important concepts, definitions, and key relationships.
Return a strict JSON object only, no markdown:
{{
  "flashcards": [
    {{"question": "What is...", "answer": "The answer is...", "difficulty": "easy|medium|hard", "tag": "concept-category"}}
  ]
}}

Key concepts: {concepts}

Content:
{content}
""".strip()

SUMMARY_PROMPTS = {
    "one_page": (
        "Summarize the following content in exactly one page (about 300-400 words). "
        "Focus on the key points and main ideas:\n\n{content}"
    ),
    "five_page": (
        "Create a detailed 5-page summary of the following content. "
        "Structure it with clear sections and comprehensive coverage:\n\n{content}"
    ),
    "chapters": (
        "Break down the following content into chapter summaries. Identify the main sections "
        "and provide a summary for each. Start every summary on its own line with "
        '"Chapter N" where N counts from 1:\n\n{content}'
    ),
}

NODE_DETAILS_PROMPT = """
Provide detailed information about "{node_title}" based on this content.
Return a strict JSON object only, no markdown:
{{
  "theory": "Theoretical explanation",
  "simplified": "Simple, easy-to-understand explanation with analogies",
  "examples": ["Example 1", "Example 2", "Example 3"],
  "flashcards": [
    {{"question": "Q1", "answer": "A1"}},
    {{"question": "Q2", "answer": "A2"}}
  ],
  "references": ["Related concept 1", "Related concept 2"]
}}

Content:
{content}
""".strip()

TUTOR_PROMPT = """
You are an AI tutor. Answer the following question based on the provided content.
Give an explanation, a simplified version, and practice questions.
Return a strict JSON object only, no markdown:
{{
  "explanation": "Detailed explanation",
  "simplified": "Simple explanation with analogies",
  "diagram_desc": "Description of a helpful diagram or visual",
  "practice": [
    {{"question": "Practice question 1", "answer": "Answer 1"}},
    {{"question": "Practice question 2", "answer": "Answer 2"}}
  ],
  "tips": ["Tip 1", "Tip 2", "Tip 3"]
}}

Question: {question}

Content:
{content}
""".strip()
