from __future__ import annotations
from typing import Protocol
from app.llm.types import ModelRequest


class GenerativeModel(Protocol):
    name: str

    def ensure_configured(self) -> None:
        """Raise ConfigurationError when credentials are missing."""
        ...

    async def generate(self, req: ModelRequest) -> str:
        """Return the raw text of the first candidate."""
        ...


class ProviderRegistry:
    _providers: dict[str, GenerativeModel] = {}

    @classmethod
    def register(cls, name: str, provider: GenerativeModel) -> None:
        cls._providers[name] = provider

    @classmethod
    def get(cls, name: str) -> GenerativeModel:
        if name not in cls._providers:
            raise ValueError(f"Unknown provider: {name}")
        return cls._providers[name]


def get_model_provider() -> GenerativeModel:
    from app.core.config import settings

    return ProviderRegistry.get((settings.LLM_PROVIDER or "gemini").lower())
