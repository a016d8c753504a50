from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from chat_memory.domain.models import ChatMessage


@runtime_checkable
class TokenCounter(Protocol):
    """
    Считает токены.
    Конвенция: count_messages(msgs) == sum(count_message(m)) + фиксированный overhead ответа,
    overhead учитывается ровно один раз, независимо от длины последовательности.
    """

    def count_text(self, text: str) -> int:
        ...

    def count_message(self, message: ChatMessage) -> int:
        ...

    def count_messages(self, messages: Sequence[ChatMessage]) -> int:
        ...
