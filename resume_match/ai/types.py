from dataclasses import dataclass
from typing import Any, Literal, Protocol, Sequence


Role = Literal["system", "user", "assistant"]


@dataclass(frozen=True)
class ChatMessage:
    role: Role
    content: str


class AIClient(Protocol):
    async def complete_json(self, messages: Sequence[ChatMessage]) -> dict[str, Any]: ...

    async def complete_text(self, messages: Sequence[ChatMessage]) -> str: ...


class EmbeddingClient(Protocol):
    async def embed_batch(self, texts: list[str]) -> list[list[float]]: ...
