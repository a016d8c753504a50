from __future__ import annotations

from typing import List, Protocol, runtime_checkable

from chat_memory.domain.models import ChatMessage


@runtime_checkable
class ChatMemory(Protocol):
    """Окно сообщений одного диалога, которое уходит в модель."""

    @property
    def id(self) -> str:
        ...

    def add(self, message: ChatMessage) -> None:
        ...

    def messages(self) -> List[ChatMessage]:
        ...

    def clear(self) -> None:
        ...
