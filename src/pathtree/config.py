from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(slots=True)
class Settings:
    output_dir: Path = Path("data/outputs")

    provider: str = os.getenv("PATHTREE_PROVIDER", "ollama")
    timeout: int = int(os.getenv("PATHTREE_TIMEOUT", "120"))

    ollama_base_url: str = os.getenv("OLLAMA_BASE_URL", "http://127.0.0.1:11434")
    ollama_model: str = os.getenv("OLLAMA_MODEL", "qwen3:8b")

    mistral_base_url: str = os.getenv("MISTRAL_BASE_URL", "https://api.mistral.ai")
    mistral_model: str = os.getenv("MISTRAL_MODEL", "mistral-small-latest")
    mistral_api_key: str = os.getenv("MISTRAL_API_KEY", "")


def ensure_dirs(settings: Settings) -> None:
    settings.output_dir.mkdir(parents=True, exist_ok=True)
