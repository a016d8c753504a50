from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from chat_memory.domain.models import ChatMessage
from chat_memory.ports.tokens import TokenCounter


@dataclass
class WhitespaceTokenCounter(TokenCounter):
    """Детерминированный счётчик для тестов: 1 слово = 1 токен."""
    tokens_per_message: int = 0
    reply_priming_tokens: int = 3

    def count_text(self, text: str) -> int:
        return len((text or "").split())

    def count_message(self, message: ChatMessage) -> int:
        return self.tokens_per_message + self.count_text(message.content)

    def count_messages(self, messages: Sequence[ChatMessage]) -> int:
        return sum(self.count_message(m) for m in messages) + self.reply_priming_tokens


def text_with_tokens(n: int, word: str = "w") -> str:
    return " ".join([word] * n)
