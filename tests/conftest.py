"""Shared fixtures: a scripted stand-in for the generation service."""

from __future__ import annotations

import pytest

from pathtree.errors import UpstreamError
from pathtree.models import ExtractedDocument


class ScriptedClient:
    model = "scripted"

    def __init__(self, *responses: str) -> None:
        self.responses = list(responses)
        self.calls: list[tuple[str, float]] = []
        self.json_modes: list[bool] = []

    def generate(self, prompt: str, temperature: float, json_mode: bool = False) -> str:
        self.calls.append((prompt, temperature))
        self.json_modes.append(json_mode)
        if not self.responses:
            return ""
        return self.responses.pop(0)


class DownClient:
    model = "down"

    def generate(self, prompt: str, temperature: float, json_mode: bool = False) -> str:
        raise UpstreamError("connection refused")


@pytest.fixture
def scripted():
    return ScriptedClient


@pytest.fixture
def down_client() -> DownClient:
    return DownClient()


@pytest.fixture
def document() -> ExtractedDocument:
    return ExtractedDocument(
        raw_text="Photosynthesis\nPlants convert light into energy.\nRespiration\nCells release energy.",
        topics=("Photosynthesis", "Respiration"),
        sections=(),
        concepts=("Photosynthesis", "Plants", "Respiration", "Cells"),
    )
