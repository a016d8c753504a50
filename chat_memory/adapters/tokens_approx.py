from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from chat_memory.domain.models import ChatMessage
from chat_memory.ports.tokens import TokenCounter


@dataclass
class ApproxTokenCounter(TokenCounter):
    """
    Оценка без токенизатора: 1 токен ~ chars_per_token символов.
    Структура overhead такая же, как у TiktokenTokenCounter.
    """
    chars_per_token: int = 4
    tokens_per_message: int = 3
    tokens_per_name: int = 1
    reply_priming_tokens: int = 3

    def count_text(self, text: str) -> int:
        if not text:
            return 0
        return (len(text) + self.chars_per_token - 1) // self.chars_per_token

    def count_message(self, message: ChatMessage) -> int:
        total = self.tokens_per_message + self.count_text(message.content)
        if message.name:
            total += self.tokens_per_name + self.count_text(message.name)
        return total

    def count_messages(self, messages: Sequence[ChatMessage]) -> int:
        return sum(self.count_message(m) for m in messages) + self.reply_priming_tokens
