from __future__ import annotations

from collections.abc import Sequence
from typing import Optional, Protocol, runtime_checkable

from chat_memory.domain.models import ChatMessage


@runtime_checkable
class EvictionPolicy(Protocol):
    """Выбирает индекс следующего сообщения на вытеснение (None — вытеснять нечего)."""

    def select(self, messages: Sequence[ChatMessage]) -> Optional[int]:
        ...
